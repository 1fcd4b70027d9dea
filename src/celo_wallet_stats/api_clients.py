import time
import logging
from typing import List, Dict, Any, Optional
import requests

from .config import Config
from .exceptions import CeloscanAPIError

# Set up logging
logger = logging.getLogger(__name__)

# Explorer actions returning per-address transaction lists
NORMAL_TRANSACTIONS = "txlist"
INTERNAL_TRANSACTIONS = "txlistinternal"
ERC20_TRANSFERS = "tokentx"
ERC721_TRANSFERS = "tokennfttx"
ERC1155_TRANSFERS = "token1155tx"

EMPTY_RESULT_MESSAGES = ("No transactions found", "No records found")


class CeloscanClient:
    """Client for the Celoscan (Etherscan-compatible) API."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        self.config = config
        self.base_url = config.celoscan_base_url
        self.api_key = config.celoscan_api_key
        self.session = session or requests.Session()

    def _make_request(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Make a request to Celoscan API."""
        params["apikey"] = self.api_key

        response = self.session.get(
            self.base_url, params=params, timeout=self.config.request_timeout)
        response.raise_for_status()

        data = response.json()

        # Rate limiting
        time.sleep(self.config.rate_limit_delay)

        if data.get("status") != "1":
            message = data.get("message", "Unknown error")
            if message in EMPTY_RESULT_MESSAGES:
                return {"status": "1", "message": message, "result": []}
            raise CeloscanAPIError(
                f"Celoscan API error: {message} ({data.get('result')})")

        return data

    def get_balance(self, address: str) -> str:
        """Get the native balance of an address, in wei."""
        params = {
            "module": "account",
            "action": "balance",
            "address": address,
            "tag": "latest"
        }

        data = self._make_request(params)
        return str(data.get("result", "0"))

    def get_transactions(self, address: str, action: str) -> List[Dict[str, Any]]:
        """Get one of the per-address transaction lists."""
        params = {
            "module": "account",
            "action": action,
            "address": address,
            "page": 1,
            "offset": self.config.max_transactions_per_request,
            "sort": "asc"
        }

        data = self._make_request(params)
        result = data.get("result") or []
        logger.debug(f"Fetched {len(result)} {action} records for {address}")
        return result
