"""
Utility functions for parsing explorer data and converting amounts.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar, Union
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
import re
import logging

from .models import (
    Erc1155TransferEvent,
    Erc721TransferEvent,
    NftTransferEvent,
)

logger = logging.getLogger(__name__)

CELO_DECIMALS = 18
WEI_PER_CELO = Decimal(10) ** CELO_DECIMALS

T = TypeVar("T")


def is_valid_celo_address(address: str) -> bool:
    """Check length and hex format of a 0x-prefixed Celo address."""
    if not address:
        return False

    return bool(re.match(r'^0x[0-9a-fA-F]{40}$', address))


def normalize_address(address: Optional[str]) -> str:
    """Lower-case an address for case-insensitive comparison."""
    if not address:
        return ""

    return address.lower()


def addresses_equal(left: Optional[str], right: Optional[str]) -> bool:
    if not left or not right:
        return False
    return normalize_address(left) == normalize_address(right)


def safe_int(value: Any) -> int:
    """Parse an unsigned integer amount; anything malformed counts as zero."""
    text = str(value).strip()
    # ASCII digits only: int() would also take "1_000" and non-ASCII digits
    if not (text.isascii() and text.lstrip("+").isdigit()):
        logger.debug(f"Treating malformed amount {value!r} as zero")
        return 0

    return int(text)


def safe_decimal(value: Any) -> Decimal:
    """Parse a non-negative decimal amount; anything malformed counts as zero."""
    text = str(value).strip()
    if not text.isascii() or "_" in text:
        logger.debug(f"Treating malformed amount {value!r} as zero")
        return Decimal('0')

    try:
        amount = Decimal(text)
    except (InvalidOperation, ValueError, TypeError) as e:
        logger.debug(f"Treating malformed amount {value!r} as zero: {e}")
        return Decimal('0')

    if not amount.is_finite() or amount < 0:
        return Decimal('0')

    return amount


def to_display_units(amount: Union[int, Decimal]) -> Decimal:
    """Convert an amount in wei to CELO."""
    return Decimal(amount) / WEI_PER_CELO


def parse_timestamp(timestamp: Any) -> datetime:
    """Convert an explorer unix timestamp to an aware UTC datetime."""
    return datetime.fromtimestamp(int(timestamp), tz=timezone.utc)


def parse_records(raw_records: Optional[List[Dict[str, Any]]],
                  factory: Callable[[Dict[str, Any]], T]) -> List[T]:
    """Build model objects from raw explorer rows, skipping unusable rows."""
    records: List[T] = []

    if not raw_records:
        return records

    for raw in raw_records:
        try:
            records.append(factory(raw))
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(
                f"Skipping record {raw.get('hash', 'unknown') if isinstance(raw, dict) else raw}: {e}")
            continue

    logger.info(
        f"Parsed {len(records)} valid records from {len(raw_records)} raw records")
    return records


def parse_nft_events(raw_erc721: Optional[List[Dict[str, Any]]],
                     raw_erc1155: Optional[List[Dict[str, Any]]] = None) -> List[NftTransferEvent]:
    """Resolve both NFT standards into one list of transfer events."""
    events: List[NftTransferEvent] = []
    events.extend(parse_records(raw_erc721, Erc721TransferEvent.from_dict))
    events.extend(parse_records(raw_erc1155, Erc1155TransferEvent.from_dict))
    return events


def valid_timestamps(timestamps: Iterable[Any]) -> List[datetime]:
    """Parse timestamps, dropping the ones that cannot be read."""
    parsed = []
    for timestamp in timestamps:
        try:
            parsed.append(parse_timestamp(timestamp))
        except (ValueError, TypeError, OverflowError, OSError) as e:
            logger.debug(f"Ignoring malformed timestamp {timestamp!r}: {e}")
    return parsed


def format_number(number: Decimal, decimals: int = 2) -> str:
    """Format a number with thousands suffixes."""
    try:
        if number == 0:
            return "0"

        num = float(number)

        if abs(num) >= 1_000_000_000:
            return f"{num / 1_000_000_000:.{decimals}f}B"
        elif abs(num) >= 1_000_000:
            return f"{num / 1_000_000:.{decimals}f}M"
        elif abs(num) >= 1_000:
            return f"{num / 1_000:.{decimals}f}K"
        else:
            return f"{num:.{decimals}f}"
    except (ValueError, TypeError, OverflowError) as e:
        logger.warning(f"Error formatting number {number}: {e}")
        return str(number)
