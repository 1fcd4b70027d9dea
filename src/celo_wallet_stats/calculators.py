"""
Wallet stats calculation over already fetched explorer data.
"""

from typing import Iterable, List, Optional, Sequence, Tuple
from datetime import datetime, timedelta, timezone
from decimal import Decimal
import logging

from .models import (
    Erc20TransferEvent,
    InternalTransaction,
    NftTransferEvent,
    NormalTransaction,
    WalletStats,
)
from .utils import (
    addresses_equal,
    safe_int,
    to_display_units,
    valid_timestamps,
)

logger = logging.getLogger(__name__)

LAST_MONTH = timedelta(days=30)
DAYS_PER_MONTH = 30


def get_transactions_intervals(timestamps: Iterable[datetime]) -> List[float]:
    """
    Gaps in hours between consecutive distinct timestamps, sorted ascending.

    Returns an empty list when fewer than two distinct timestamps are given.
    """
    ordered = sorted(set(timestamps))
    intervals = [
        (later - earlier).total_seconds() / 3600
        for earlier, later in zip(ordered, ordered[1:])
    ]
    return sorted(intervals)


def get_wallet_age(timestamps: Iterable[datetime], now: datetime) -> int:
    """Whole calendar months from the earliest timestamp to ``now``."""
    timestamps = list(timestamps)
    if not timestamps:
        return 0

    first = min(timestamps)
    months = (now.year - first.year) * 12 + now.month - first.month
    if (now.day, now.time()) < (first.day, first.time()):
        months -= 1

    return max(months, 0)


def get_tokens_sum(hashes: Iterable[str],
                   internal_tx_values: Iterable[Tuple[str, int]]) -> int:
    """Sum the internal transaction values attached to any of ``hashes``."""
    wanted = set(hashes)
    return sum(value for tx_hash, value in internal_tx_values if tx_hash in wanted)


class WalletStatsCalculator:
    """Celo wallet stats calculator."""

    def __init__(self,
                 address: str,
                 balance: Decimal,
                 transactions: Sequence[NormalTransaction],
                 internal_transactions: Sequence[InternalTransaction],
                 token_transfers: Sequence[NftTransferEvent],
                 erc20_token_transfers: Sequence[Erc20TransferEvent]):
        self.address = address
        self.balance = balance
        self.transactions = list(transactions)
        self.internal_transactions = list(internal_transactions)
        self.token_transfers = list(token_transfers)
        self.erc20_token_transfers = list(erc20_token_transfers)

    def get_stats(self, now: Optional[datetime] = None) -> WalletStats:
        """
        Compute the wallet stats.

        ``now`` is the evaluation instant; it is read from the clock once
        when omitted and used for every time-relative metric.
        """
        if not self.transactions:
            logger.info(f"No transactions for {self.address}")
            return WalletStats(no_data=True)

        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        else:
            now = now.astimezone(timezone.utc)

        timestamps = valid_timestamps(tx.timestamp for tx in self.transactions)
        intervals = get_transactions_intervals(timestamps)
        if not intervals:
            logger.info(
                f"Not enough distinct transaction times for {self.address}")
            return WalletStats(no_data=True)

        internal_values = [
            (tx.hash, safe_int(tx.value)) for tx in self.internal_transactions
        ]

        sold_tokens = [
            x for x in self.token_transfers
            if addresses_equal(x.from_address, self.address)
        ]
        sold_sum = get_tokens_sum(
            (x.hash for x in sold_tokens), internal_values)

        sold_token_ids = {x.get_token_uid() for x in sold_tokens}
        received_tokens = [
            x for x in self.token_transfers
            if addresses_equal(x.to_address, self.address)
        ]
        buy_tokens = [
            x for x in received_tokens if x.get_token_uid() in sold_token_ids
        ]
        buy_sum = get_tokens_sum(
            (x.hash for x in buy_tokens), internal_values)

        buy_not_sold_tokens = [
            x for x in received_tokens if x.get_token_uid() not in sold_token_ids
        ]
        buy_not_sold_sum = get_tokens_sum(
            (x.hash for x in buy_not_sold_tokens), internal_values)

        # Net event count, not a reconciled balance of held items.
        holding_tokens = len(self.token_transfers) - len(sold_tokens)
        if buy_sum == 0:
            nft_worth = Decimal(0)
        else:
            nft_worth = Decimal(sold_sum) / Decimal(buy_sum) * \
                Decimal(buy_not_sold_sum)
        contracts_created = sum(
            1 for x in self.transactions
            if x.contract_address and x.contract_address.strip())
        total_tokens = {x.token_symbol for x in self.erc20_token_transfers}

        month_ago = now - LAST_MONTH
        last_transaction = max(timestamps)
        days_since_last = (now - last_transaction).total_seconds() / 86400

        return WalletStats(
            no_data=False,
            balance=to_display_units(self.balance),
            wallet_age=get_wallet_age(timestamps, now),
            total_transactions=len(self.transactions),
            min_transaction_time=min(intervals),
            max_transaction_time=max(intervals),
            average_transaction_time=sum(intervals) / len(intervals),
            wallet_turnover=to_display_units(
                sum(safe_int(x.value) for x in self.transactions)),
            last_month_transactions=sum(
                1 for t in timestamps if t > month_ago),
            time_from_last_transaction=int(days_since_last / DAYS_PER_MONTH),
            nft_holding=holding_tokens,
            nft_trading=to_display_units(sold_sum - buy_sum),
            nft_worth=to_display_units(nft_worth),
            deployed_contracts=contracts_created,
            tokens_holding=len(total_tokens),
        )
