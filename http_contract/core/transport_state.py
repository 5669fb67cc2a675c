from dataclasses import dataclass
from typing import Callable, Optional

from http_contract.core.request import Outbound
from http_contract.core.response import Inbound

Transport = Callable[[Outbound], Inbound]


@dataclass(frozen=True)
class Pending:
    """A transport action that has not run yet."""

    send: Transport


@dataclass(frozen=True)
class Resolved:
    """The memoized outcome of a transport action: a response or an error."""

    inbound: Optional[Inbound] = None
    error: Optional[Exception] = None
