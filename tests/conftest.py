"""
Shared fixtures for the Celo wallet stats tests.
"""
import pytest
from datetime import datetime, timedelta, timezone

from celo_wallet_stats.config import Config
from celo_wallet_stats.models import (
    Erc721TransferEvent,
    InternalTransaction,
    NormalTransaction,
)

WALLET = "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01"
OTHER = "0x1111111111111111111111111111111111111111"
NFT_CONTRACT = "0x2222222222222222222222222222222222222222"
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def unix(moment: datetime) -> str:
    return str(int(moment.timestamp()))


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def config():
    return Config(
        celoscan_api_key="test-key",
        celoscan_base_url="https://api.celoscan.test/api",
        max_transactions_per_request=500,
        rate_limit_delay=0,
        request_timeout=5,
    )


@pytest.fixture
def make_tx():
    """Factory for normal transactions placed relative to NOW."""
    counter = iter(range(1_000_000))

    def _make(days_ago=0, hours_ago=0, value="0", contract_address=None):
        moment = NOW - timedelta(days=days_ago, hours=hours_ago)
        return NormalTransaction(
            hash=f"0xtx{next(counter)}",
            timestamp=unix(moment),
            value=value,
            contract_address=contract_address,
            from_address=WALLET,
            to_address=OTHER,
        )

    return _make


@pytest.fixture
def make_nft():
    def _make(tx_hash, from_address, to_address, token_id, contract=NFT_CONTRACT):
        return Erc721TransferEvent(
            hash=tx_hash,
            from_address=from_address,
            to_address=to_address,
            contract_address=contract,
            token_id=str(token_id),
        )

    return _make


@pytest.fixture
def make_internal():
    def _make(tx_hash, value):
        return InternalTransaction(hash=tx_hash, value=str(value))

    return _make
