import os
from typing import Optional

from dotenv import load_dotenv

# Load .env file variables into environment
load_dotenv(verbose=True)

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}


class Settings:
    """Configuration settings loaded from environment variables."""

    # --- Transport Settings ---
    HTTP_CONTRACT_TIMEOUT: float = 10.0
    HTTP_CONTRACT_VERIFY_TLS: bool = True
    HTTP_CONTRACT_USER_AGENT: str = "http-contract"

    # --- Helper Methods using os.getenv ---
    def get_timeout(self) -> float:
        """Returns the transport timeout in seconds."""
        value = os.getenv("HTTP_CONTRACT_TIMEOUT")
        if value is None:
            return self.HTTP_CONTRACT_TIMEOUT
        try:
            timeout = float(value)
        except ValueError:
            raise ValueError("HTTP_CONTRACT_TIMEOUT environment variable must be a number.")
        if timeout <= 0:
            raise ValueError("HTTP_CONTRACT_TIMEOUT environment variable must be positive.")
        return timeout

    def get_verify_tls(self) -> bool:
        """Returns whether TLS certificates are verified."""
        value = os.getenv("HTTP_CONTRACT_VERIFY_TLS")
        if value is None:
            return self.HTTP_CONTRACT_VERIFY_TLS
        if value.lower() in TRUTHY:
            return True
        if value.lower() in FALSY:
            return False
        raise ValueError(f"Invalid HTTP_CONTRACT_VERIFY_TLS value: {value}")

    def get_user_agent(self) -> str:
        return os.getenv("HTTP_CONTRACT_USER_AGENT", self.HTTP_CONTRACT_USER_AGENT)

    def get_wire_log_level(self, default: str = "NONE") -> str:
        """Gets the per-context wire logging verbosity (NONE, INFO or DEBUG)."""
        return os.getenv("HTTP_CONTRACT_LOG_LEVEL", default).upper()

    # --- Logging Settings ---
    def get_log_level(self, default: str = "INFO") -> str:
        """Gets the configured log level, defaulting if not set."""
        return os.getenv("LOG_LEVEL", default).upper()

    def get_proxy(self) -> Optional[str]:
        """Returns the outbound proxy URL, if set."""
        return os.getenv("HTTP_CONTRACT_PROXY")
