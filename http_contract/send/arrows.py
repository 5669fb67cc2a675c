"""Request arrows: method and URL, headers, query params and payload."""

import logging
from typing import Any, List, Tuple

import httpx

from http_contract.codec import encode, flatten
from http_contract.core.arrow import Arrow, arrow
from http_contract.core.context import Context
from http_contract.core.exceptions import NoRequestError, UnknownContentType
from http_contract.core.request import Outbound
from http_contract.core.slot import Slot
from http_contract.send.url import parse, render

logger = logging.getLogger(__name__)


def _outbound(context: Context) -> Outbound:
    if context.outbound is None:
        raise NoRequestError("No outbound request in context, use url() first.")
    return context.outbound


# --- core arrows ---


def url(method: str, uri: str, *args: Any) -> Arrow:
    """Defines the mandatory HTTP method and destination URL of the request.

    The uri is a template with positional %v placeholders filled from args.
    Use the params arrow to supply URL query params.
    """

    @arrow
    def apply(context: Context) -> Context:
        addr = parse(render(uri, args))
        context.outbound = Outbound(
            method=method.upper(),
            url=addr,
            headers=dict(context.default_headers),
        )
        logger.debug(f"[{context.context_id}] Outbound {context.outbound.method} {addr}")
        return context

    return apply


class Header:
    """A named HTTP header of the request. Names are case-insensitive.

        join(
            header("Accept").is_("application/json"),
            header("X-Request-Id").val(request_id),
        )
    """

    def __init__(self, name: str):
        self.name = name.lower()

    def is_(self, value: str) -> Arrow:
        """Sets a literal value of the header."""

        @arrow
        def apply(context: Context) -> Context:
            _outbound(context).headers[self.name] = value
            return context

        return apply

    def val(self, value: Slot) -> Arrow:
        """Sets the header from a slot, read when the request is sent."""

        @arrow
        def apply(context: Context) -> Context:
            _outbound(context).headers[self.name] = value
            return context

        return apply

    def __repr__(self) -> str:
        return f"Header({self.name!r})"


def header(name: str) -> Header:
    return Header(name)


def params(query: Any) -> Arrow:
    """Appends query params to the request URL.

    The query must flatten to a map of strings; nested structures fail.
    Pairs already present on the URL are kept.
    """

    @arrow
    def apply(context: Context) -> Context:
        outbound = _outbound(context)
        items: List[Tuple[str, str]] = list(outbound.url.params.multi_items())
        items.extend(flatten(query).items())
        outbound.url = outbound.url.copy_with(params=httpx.QueryParams(items))
        return context

    return apply


def send(data: Any) -> Arrow:
    """Sets the request payload.

    str and bytes are sent verbatim, as is an open binary stream. Other
    values are encoded using the Content-Type header as a hint; the arrow
    fails if the content type is unknown or not supported.
    """

    @arrow
    def apply(context: Context) -> Context:
        outbound = _outbound(context)
        content_type = outbound.get_header("content-type")
        if content_type is None:
            raise UnknownContentType("unknown Content-Type")

        if isinstance(data, str):
            outbound.payload = data.encode("utf-8")
        elif isinstance(data, (bytes, bytearray, memoryview)):
            outbound.payload = bytes(data)
        elif hasattr(data, "read"):
            outbound.payload = data
        else:
            outbound.payload = encode(content_type, data)
        return context

    return apply


# --- arrow aliases ---


def get(uri: str, *args: Any) -> Arrow:
    return url("GET", uri, *args)


def post(uri: str, *args: Any) -> Arrow:
    return url("POST", uri, *args)


def put(uri: str, *args: Any) -> Arrow:
    return url("PUT", uri, *args)


def patch(uri: str, *args: Any) -> Arrow:
    return url("PATCH", uri, *args)


def delete(uri: str, *args: Any) -> Arrow:
    return url("DELETE", uri, *args)


def head(uri: str, *args: Any) -> Arrow:
    return url("HEAD", uri, *args)


def accept() -> Header:
    return header("Accept")


def accept_json() -> Arrow:
    return accept().is_("application/json")


def accept_form() -> Arrow:
    return accept().is_("application/x-www-form-urlencoded")


def content() -> Header:
    return header("Content-Type")


def content_json() -> Arrow:
    return content().is_("application/json")


def content_form() -> Arrow:
    return content().is_("application/x-www-form-urlencoded")


def keep_alive() -> Arrow:
    return header("Connection").is_("keep-alive")


def authorization() -> Header:
    return header("Authorization")


def bearer(token: str) -> Arrow:
    return authorization().is_(f"Bearer {token}")
