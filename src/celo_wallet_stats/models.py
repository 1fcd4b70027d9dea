"""
Data models for Celo wallet stats.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Generic, List, Optional, TypeVar


@dataclass(frozen=True)
class NormalTransaction:
    """Top-level transaction submitted by or sent to the wallet."""
    hash: str
    timestamp: str
    value: str
    contract_address: Optional[str] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    block_number: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NormalTransaction":
        return cls(
            hash=data["hash"],
            timestamp=str(data["timeStamp"]),
            value=str(data.get("value", "")),
            contract_address=data.get("contractAddress") or None,
            from_address=data.get("from"),
            to_address=data.get("to"),
            block_number=data.get("blockNumber"),
        )


@dataclass(frozen=True)
class InternalTransaction:
    """Value transfer made inside a contract call, keyed by the parent hash."""
    hash: str
    value: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InternalTransaction":
        return cls(hash=data["hash"], value=str(data.get("value", "")))


@dataclass(frozen=True)
class NftTransferEvent:
    """Common shape of NFT transfer events across token standards."""
    hash: str
    from_address: Optional[str]
    to_address: Optional[str]
    contract_address: Optional[str]
    token_id: str

    def get_token_uid(self) -> str:
        """Identity of the transferred item: contract address plus token id."""
        return f"{(self.contract_address or '').lower()}_{self.token_id}"


@dataclass(frozen=True)
class Erc721TransferEvent(NftTransferEvent):
    """Single-token transfer (``tokennfttx``)."""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Erc721TransferEvent":
        return cls(
            hash=data["hash"],
            from_address=data.get("from"),
            to_address=data.get("to"),
            contract_address=data["contractAddress"],
            token_id=str(data["tokenID"]),
        )


@dataclass(frozen=True)
class Erc1155TransferEvent(NftTransferEvent):
    """Multi-token transfer (``token1155tx``)."""
    token_value: str = "1"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Erc1155TransferEvent":
        return cls(
            hash=data["hash"],
            from_address=data.get("from"),
            to_address=data.get("to"),
            contract_address=data["contractAddress"],
            token_id=str(data["tokenID"]),
            token_value=str(data.get("tokenValue", "1")),
        )


@dataclass(frozen=True)
class Erc20TransferEvent:
    """Fungible token transfer (``tokentx``)."""
    token_symbol: Optional[str]
    contract_address: Optional[str] = None
    value: str = "0"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Erc20TransferEvent":
        return cls(
            token_symbol=data.get("tokenSymbol"),
            contract_address=data.get("contractAddress"),
            value=str(data.get("value", "0")),
        )


@dataclass
class WalletStats:
    """Derived wallet metrics. Check ``no_data`` before reading anything else."""
    no_data: bool = False
    balance: Decimal = Decimal("0")
    wallet_age: int = 0
    total_transactions: int = 0
    min_transaction_time: float = 0.0
    max_transaction_time: float = 0.0
    average_transaction_time: float = 0.0
    wallet_turnover: Decimal = Decimal("0")
    last_month_transactions: int = 0
    time_from_last_transaction: int = 0
    nft_holding: int = 0
    nft_trading: Decimal = Decimal("0")
    nft_worth: Decimal = Decimal("0")
    deployed_contracts: int = 0
    tokens_holding: int = 0


@dataclass
class WalletScore:
    """Stats and score reported for one address."""
    address: str
    stats: WalletStats
    score: Optional[float] = None


T = TypeVar("T")


@dataclass
class Result(Generic[T]):
    """Success/failure envelope returned to callers."""
    succeeded: bool
    data: Optional[T] = None
    messages: List[str] = field(default_factory=list)

    @classmethod
    def success(cls, data: T, message: Optional[str] = None) -> "Result[T]":
        return cls(succeeded=True, data=data,
                   messages=[message] if message else [])
