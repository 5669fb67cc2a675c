# Structured failures stored on Context.failure

from typing import Any, Iterable, Optional, Tuple

from http_contract.exceptions import HttpContractException


class ContractError(HttpContractException):
    """Base exception for all failures recorded by arrows.

    Attributes:
        detail (Optional[str]): A detailed error message. If not provided directly
            during initialization but other arguments are, the first positional
            argument is used as the detail.
    """

    def __init__(self, *args, detail: Optional[str] = None):
        super().__init__(*args)
        # Use the first arg as detail if detail kwarg is not provided and args exist
        self.detail = detail or (args[0] if args else None)


class Mismatch(ContractError):
    """Raised when a received value fails an equality or shape expectation.

    Attributes:
        diff (str): Human readable expected-vs-actual description.
        payload (Any): The offending value.
    """

    def __init__(self, diff: str, payload: Any = None):
        super().__init__(diff, detail=diff)
        self.diff = diff
        self.payload = payload

    def __str__(self) -> str:
        return self.diff


class StatusCodeMismatch(Mismatch):
    """The canonical status code mismatch, carrying expected and actual codes."""

    def __init__(self, actual: int, expected: Iterable[int], payload: Any = None):
        self.actual = actual
        self.expected: Tuple[int, ...] = tuple(expected)
        wanted = ", ".join(str(code) for code in self.expected)
        super().__init__(f"HTTP Status {actual}, expected {wanted}", payload=payload)


class Undefined(ContractError):
    """Raised when a value the test depends on is absent."""

    def __init__(self, type_: str):
        super().__init__(f"Value of type {type_} is not defined.")
        self.type = type_


class NotSupported(ContractError):
    """Raised when a URL scheme or content type has no registered strategy."""

    def __init__(self, target: Any, detail: Optional[str] = None):
        super().__init__(detail or f"Not supported: {target}")
        self.target = target


class NoRequestError(ContractError):
    """Exception raised when the outbound request is not found in the context."""

    pass


class UnknownContentType(ContractError):
    """Exception raised when a payload is sent without a Content-Type header."""

    pass


class NotFlat(ContractError):
    """Exception raised when a value cannot be represented as a flat string map."""

    pass


class TransportError(ContractError):
    """Wraps a failure surfaced by the transport collaborator."""

    def __init__(self, detail: str, cause: Optional[BaseException] = None):
        super().__init__(detail)
        self.cause = cause


class DecodeError(ContractError):
    """Exception raised when a response body is malformed for the selected decoder."""

    def __init__(self, detail: str, cause: Optional[BaseException] = None):
        super().__init__(detail)
        self.cause = cause
