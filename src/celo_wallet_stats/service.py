"""
Wallet stats service: fetch, aggregate, score.
"""

import logging
from typing import Callable, Optional

from .api_clients import (
    CeloscanClient,
    ERC1155_TRANSFERS,
    ERC20_TRANSFERS,
    ERC721_TRANSFERS,
    INTERNAL_TRANSACTIONS,
    NORMAL_TRANSACTIONS,
)
from .calculators import WalletStatsCalculator
from .exceptions import InvalidAddressError
from .models import (
    Erc20TransferEvent,
    InternalTransaction,
    NormalTransaction,
    Result,
    WalletScore,
    WalletStats,
)
from .utils import (
    is_valid_celo_address,
    parse_nft_events,
    parse_records,
    safe_decimal,
)

logger = logging.getLogger(__name__)

Scorer = Callable[[WalletStats], float]


class CeloscanService:
    """Builds the wallet stats for an address from Celoscan data."""

    def __init__(self, client: CeloscanClient, scorer: Optional[Scorer] = None):
        self.client = client
        self.scorer = scorer

    def get_wallet_stats(self, address: str) -> Result[WalletScore]:
        if not is_valid_celo_address(address):
            raise InvalidAddressError("Invalid address")

        balance_wei = self.client.get_balance(address)
        transactions = parse_records(
            self.client.get_transactions(address, NORMAL_TRANSACTIONS),
            NormalTransaction.from_dict)
        internal_transactions = parse_records(
            self.client.get_transactions(address, INTERNAL_TRANSACTIONS),
            InternalTransaction.from_dict)
        erc20_tokens = parse_records(
            self.client.get_transactions(address, ERC20_TRANSFERS),
            Erc20TransferEvent.from_dict)
        nft_tokens = parse_nft_events(
            self.client.get_transactions(address, ERC721_TRANSFERS),
            self.client.get_transactions(address, ERC1155_TRANSFERS))

        wallet_stats = WalletStatsCalculator(
            address,
            safe_decimal(balance_wei),
            transactions,
            internal_transactions,
            nft_tokens,
            erc20_tokens,
        ).get_stats()

        score = None
        if self.scorer is not None and not wallet_stats.no_data:
            score = self.scorer(wallet_stats)

        logger.info(
            f"Computed stats for {address}: no_data={wallet_stats.no_data}, score={score}")
        return Result.success(
            WalletScore(address=address, stats=wallet_stats, score=score),
            "Got celo wallet score.")
