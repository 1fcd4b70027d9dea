import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class Config:
    """Application configuration."""

    # API Keys
    celoscan_api_key: str

    # API URLs
    celoscan_base_url: str = "https://api.celoscan.io/api"

    # Request settings
    max_transactions_per_request: int = 10000
    rate_limit_delay: float = 0.2  # seconds between API calls
    request_timeout: float = 30.0

    # Output settings
    output_format: str = "table"  # table, json
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        celoscan_key = os.getenv("CELOSCAN_API_KEY")
        if not celoscan_key:
            raise ValueError(
                "CELOSCAN_API_KEY environment variable is required")

        return cls(
            celoscan_api_key=celoscan_key,
            celoscan_base_url=os.getenv(
                "CELOSCAN_BASE_URL", "https://api.celoscan.io/api"),
            max_transactions_per_request=int(
                os.getenv("MAX_TRANSACTIONS_PER_REQUEST", "10000")),
            rate_limit_delay=float(os.getenv("RATE_LIMIT_DELAY", "0.2")),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
            output_format=os.getenv("OUTPUT_FORMAT", "table"),
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        )
