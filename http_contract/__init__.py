"""Composable arrows for executable HTTP contract tests.

    from http_contract import join, default_io, send, recv

    pipeline = join(
        send.get("https://example.com/sites/%v", site_id),
        send.accept_json(),
        recv.code(200),
        recv.served_json(),
        recv.recv(site),
    )
    pipeline(default_io()).raise_for_failure()
"""

from http_contract.core.arrow import Arrow, Config, Join, arrow, io, join
from http_contract.core.context import Context, LogLevel
from http_contract.core.exceptions import (
    ContractError,
    DecodeError,
    Mismatch,
    NoRequestError,
    NotFlat,
    NotSupported,
    StatusCodeMismatch,
    TransportError,
    Undefined,
    UnknownContentType,
)
from http_contract.core.slot import Slot
from http_contract.core.transport import (
    HttpxTransport,
    default,
    default_io,
    unsafe,
    with_client,
    with_headers,
    with_log_level,
    with_transport,
)

__all__ = [
    "Arrow",
    "Config",
    "Context",
    "ContractError",
    "DecodeError",
    "HttpxTransport",
    "Join",
    "LogLevel",
    "Mismatch",
    "NoRequestError",
    "NotFlat",
    "NotSupported",
    "Slot",
    "StatusCodeMismatch",
    "TransportError",
    "Undefined",
    "UnknownContentType",
    "arrow",
    "default",
    "default_io",
    "io",
    "join",
    "unsafe",
    "with_client",
    "with_headers",
    "with_log_level",
    "with_transport",
]
