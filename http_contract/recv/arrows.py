"""Response arrows: status code, headers, content type and body decoding.

Every arrow here triggers the transport before looking at the response, so
the first of them performs the exchange and the rest reuse its outcome.
"""

import logging

from http_contract import codec
from http_contract.core.arrow import Arrow, arrow
from http_contract.core.context import Context
from http_contract.core.exceptions import Mismatch, NotSupported, StatusCodeMismatch, Undefined
from http_contract.core.response import Inbound
from http_contract.core.slot import Slot
from http_contract.core.transport import unsafe

logger = logging.getLogger(__name__)


def _inbound(context: Context) -> Inbound | None:
    """Triggers the transport. Returns None if the context has failed."""
    context = unsafe(context)
    if context.failure is not None:
        return None
    return context.inbound


# --- core arrows ---


def code(*expected: int) -> Arrow:
    """Matches the response status code against the expected ones.

    The arrow fails with StatusCodeMismatch if the service responds with
    any other code.
    """

    @arrow
    def apply(context: Context) -> Context:
        inbound = _inbound(context)
        if inbound is None:
            return context
        if inbound.status_code not in expected:
            raise StatusCodeMismatch(inbound.status_code, expected, payload=inbound.body)
        return context

    return apply


class Header:
    """A named HTTP header of the response. Names are case-insensitive."""

    def __init__(self, name: str):
        self.name = name.lower()

    def is_(self, value: str) -> Arrow:
        """Matches the header against a literal value."""

        @arrow
        def apply(context: Context) -> Context:
            inbound = _inbound(context)
            if inbound is None:
                return context
            actual = inbound.get_header(self.name)
            if actual is None:
                raise Mismatch(f"Header {self.name} is missing, expected {value!r}", payload=None)
            if actual != value:
                raise Mismatch(f"Header {self.name}: expected {value!r}, got {actual!r}", payload=actual)
            return context

        return apply

    def any(self) -> Arrow:
        """Requires the header to be present, whatever its value."""

        @arrow
        def apply(context: Context) -> Context:
            inbound = _inbound(context)
            if inbound is None:
                return context
            if inbound.get_header(self.name) is None:
                raise Undefined(self.name)
            return context

        return apply

    def string(self, value: Slot) -> Arrow:
        """Writes the header value into the slot."""

        @arrow
        def apply(context: Context) -> Context:
            inbound = _inbound(context)
            if inbound is None:
                return context
            actual = inbound.get_header(self.name)
            if actual is None:
                raise Undefined(self.name)
            value.set(actual)
            return context

        return apply

    def __repr__(self) -> str:
        return f"Header({self.name!r})"


def header(name: str) -> Header:
    return Header(name)


class Served:
    """Matches the response Content-Type and selects the body decoder."""

    def _select(self, decoder: str) -> Arrow:
        @arrow
        def apply(context: Context) -> Context:
            inbound = _inbound(context)
            if inbound is None:
                return context
            if decoder != codec.ANY:
                content_type = inbound.get_header("content-type")
                if content_type is None:
                    raise Undefined("content-type")
                if codec.decoder_for(content_type) != decoder:
                    raise Mismatch(
                        f"Content-Type {content_type!r} is not served as {decoder}",
                        payload=content_type,
                    )
            context.decoder = decoder
            return context

        return apply

    def any(self) -> Arrow:
        """Accepts any content type; the body is only available as bytes."""
        return self._select(codec.ANY)

    def json(self) -> Arrow:
        return self._select(codec.JSON)

    def form(self) -> Arrow:
        return self._select(codec.FORM)


def served() -> Served:
    return Served()


def served_json() -> Arrow:
    return served().json()


def served_form() -> Arrow:
    return served().form()


def recv(target: Slot) -> Arrow:
    """Decodes the response body into the slot.

    Uses the decoder chosen by the preceding served arrow, or infers it from
    the response Content-Type when no served arrow ran.
    """

    @arrow
    def apply(context: Context) -> Context:
        inbound = _inbound(context)
        if inbound is None:
            return context
        decoder = context.decoder or codec.decoder_for(inbound.get_header("content-type"))
        if decoder is None:
            content_type = inbound.get_header("content-type")
            raise NotSupported(content_type, detail=f"unsupported Content-Type {content_type}")
        target.set(codec.decode(decoder, inbound.body, target.type))
        return context

    return apply


def recv_bytes(target: Slot) -> Arrow:
    """Copies the raw response body into the slot, bypassing decoders."""

    @arrow
    def apply(context: Context) -> Context:
        inbound = _inbound(context)
        if inbound is None:
            return context
        target.set(bytes(inbound.body))
        return context

    return apply
