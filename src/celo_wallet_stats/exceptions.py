"""
Errors raised by the collaborators around the stats calculator.

The calculator itself never raises; these cover address validation and
explorer API failures.
"""

from typing import Optional


class WalletStatsError(Exception):
    """Base error carrying an HTTP-like status code."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidAddressError(WalletStatsError):
    status_code = 400


class CeloscanAPIError(WalletStatsError):
    """Celoscan returned an error envelope."""
    status_code = 502
