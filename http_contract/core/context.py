# Defines the Context threaded through a pipeline run.

import enum
import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from http_contract.core.request import Outbound
from http_contract.core.response import Inbound
from http_contract.core.transport_state import Pending, Resolved
from http_contract.exceptions import HttpContractConfigurationError

logger = logging.getLogger(__name__)


class LogLevel(enum.IntEnum):
    """Wire logging verbosity of a single context."""

    NONE = 0
    INFO = 1
    DEBUG = 2

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        try:
            return cls[name.upper()]
        except KeyError:
            valid = ", ".join(level.name for level in cls)
            raise HttpContractConfigurationError(f"Invalid wire log level '{name}'. Valid levels are: {valid}")


@dataclass
class Context:
    """Holds the state for a single pipeline run.

    Attributes:
        context_id: A unique identifier used in log lines.
        outbound: The request being built; present once a URL arrow has run.
        inbound: The received response; present once the transport has run.
        transport: The deferred transport action, Pending until first
            triggered and Resolved afterwards.
        decoder: The body decoder selected by the last served arrow.
        default_headers: Headers seeded into every outbound request.
        log_level: Wire logging verbosity, orthogonal to correctness.
        failure: The first failure recorded in the run. It is sticky: once
            set, later assignments are ignored.
    """

    context_id: uuid.UUID = field(default_factory=uuid.uuid4)
    outbound: Optional[Outbound] = None
    inbound: Optional[Inbound] = None
    transport: Optional[Union[Pending, Resolved]] = None
    decoder: Optional[str] = None
    default_headers: Dict[str, str] = field(default_factory=dict)
    log_level: LogLevel = LogLevel.NONE
    _failure: Optional[Exception] = field(default=None, repr=False)

    @property
    def failure(self) -> Optional[Exception]:
        return self._failure

    @failure.setter
    def failure(self, error: Optional[Exception]) -> None:
        if self._failure is not None:
            if error is not self._failure:
                logger.debug(f"[{self.context_id}] Ignoring {error!r}, context already failed: {self._failure!r}")
            return
        self._failure = error

    @property
    def failed(self) -> bool:
        return self._failure is not None

    def raise_for_failure(self) -> "Context":
        """Raises the recorded failure, if any. Returns the context otherwise."""
        if self._failure is not None:
            raise self._failure
        return self
