class HttpContractException(Exception):
    """Base exception for all http_contract errors."""

    pass


class HttpContractConfigurationError(HttpContractException):
    """Exception raised when a configuration value is invalid."""

    pass
