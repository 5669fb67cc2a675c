# Transport trigger and the httpx transport collaborator.

import logging
from typing import Callable, Mapping, Optional

import httpx

from http_contract.core.arrow import Config, arrow, io
from http_contract.core.context import Context, LogLevel
from http_contract.core.exceptions import ContractError, NoRequestError, TransportError
from http_contract.core.logging import log_inbound, log_outbound
from http_contract.core.request import Outbound
from http_contract.core.response import Inbound
from http_contract.core.transport_state import Pending, Resolved, Transport
from http_contract.settings import Settings

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Sends an Outbound request with an httpx.Client and returns the Inbound response.

    The transport either borrows a client supplied by the caller, or builds one
    from a factory for a single exchange and closes it afterwards.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        client_factory: Optional[Callable[[], httpx.Client]] = None,
    ):
        if client is None and client_factory is None:
            raise ValueError("HttpxTransport requires either a client or a client_factory")
        self.client = client
        self.client_factory = client_factory

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpxTransport":
        def factory() -> httpx.Client:
            return httpx.Client(
                timeout=settings.get_timeout(),
                verify=settings.get_verify_tls(),
                proxy=settings.get_proxy(),
            )

        return cls(client_factory=factory)

    def __call__(self, outbound: Outbound) -> Inbound:
        content = outbound.payload
        if hasattr(content, "read"):
            content = content.read()

        if self.client is not None:
            return self._exchange(self.client, outbound, content)
        assert self.client_factory is not None
        with self.client_factory() as client:
            return self._exchange(client, outbound, content)

    @staticmethod
    def _exchange(client: httpx.Client, outbound: Outbound, content: bytes) -> Inbound:
        response = client.request(
            method=outbound.method,
            url=outbound.url,
            headers=outbound.resolved_headers(),
            content=content or None,
        )
        return Inbound(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )


@arrow
def unsafe(context: Context) -> Context:
    """Runs the deferred transport action once and memoizes its outcome.

    Later calls on the same context observe the cached inbound response
    without re-sending. A failed exchange is terminal for the context.
    """
    state = context.transport
    if isinstance(state, Resolved):
        return context
    if state is None:
        raise ContractError("transport is not configured, use io(default()) or io(with_client(...))")
    if context.outbound is None:
        raise NoRequestError("No outbound request in context, use url() before matching the response.")

    outbound = context.outbound
    log_outbound(context, outbound)
    try:
        inbound = state.send(outbound)
    except ContractError as e:
        context.transport = Resolved(error=e)
        raise
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error(f"[{context.context_id}] Transport error during {outbound.method} {outbound.url}: {e}")
        error = TransportError(f"{outbound.method} {outbound.url}: {e}", cause=e)
        context.transport = Resolved(error=error)
        raise error
    except Exception as e:
        logger.exception(
            f"[{context.context_id}] Unexpected transport error during {outbound.method} {outbound.url}: {e}"
        )
        error = TransportError(f"{outbound.method} {outbound.url}: {e}", cause=e)
        context.transport = Resolved(error=error)
        raise error

    context.transport = Resolved(inbound=inbound)
    context.inbound = inbound
    log_inbound(context, inbound)
    return context


# Configuration options


def with_transport(send: Transport) -> Config:
    """Selects the transport collaborator used by the context."""

    def configure(context: Context) -> Context:
        context.transport = Pending(send)
        return context

    return configure


def with_client(client: httpx.Client) -> Config:
    """Sends requests through the given httpx client. The caller owns the client."""
    return with_transport(HttpxTransport(client=client))


def with_headers(headers: Mapping[str, str]) -> Config:
    """Pre-populates default headers of every outbound request."""

    def configure(context: Context) -> Context:
        for name, value in headers.items():
            context.default_headers[name.lower()] = value
        return context

    return configure


def with_log_level(level: LogLevel | str) -> Config:
    def configure(context: Context) -> Context:
        context.log_level = LogLevel.parse(level) if isinstance(level, str) else LogLevel(level)
        return context

    return configure


def default(settings: Optional[Settings] = None) -> Config:
    """Default configuration: an httpx client built from Settings for each run."""

    def configure(context: Context) -> Context:
        resolved = settings or Settings()
        context.transport = Pending(HttpxTransport.from_settings(resolved))
        context.default_headers.setdefault("user-agent", resolved.get_user_agent())
        context.log_level = LogLevel.parse(resolved.get_wire_log_level())
        return context

    return configure


def default_io(*opts: Config) -> Context:
    """Creates a context with the default configuration followed by opts."""
    return io(default(), *opts)
