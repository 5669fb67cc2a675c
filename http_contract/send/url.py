"""URL templating for the url arrow.

Templates use positional %v placeholders (%% is a literal percent sign).
Interpolated segments are path-escaped unless the template starts with "!".
"""

import inspect
import re
from typing import Any, Callable, Iterable, List
from urllib.parse import quote

import httpx

from http_contract.core.exceptions import NotSupported, Undefined
from http_contract.core.slot import Slot

NO_ESCAPE = "!"
PLACEHOLDER = re.compile(r"%([v%])")
SUPPORTED_SCHEMES = ("http", "https")

# Characters a path segment keeps verbatim besides unreserved ones
SEGMENT_SAFE = "$&+:=@"


def render(template: str, args: Iterable[Any]) -> str:
    """Interpolates args into the template and returns the URL string."""
    escape = True
    if template.startswith(NO_ESCAPE):
        escape = False
        template = template[len(NO_ESCAPE) :]

    segments = iter([segment(arg, escape) for arg in args])

    def substitute(match: re.Match) -> str:
        if match.group(1) == "%":
            return "%"
        try:
            return next(segments)
        except StopIteration:
            raise NotSupported(template, detail=f"missing argument for %v in {template}")

    text = PLACEHOLDER.sub(substitute, template)
    leftover: List[str] = list(segments)
    if leftover:
        raise NotSupported(template, detail=f"too many arguments for {template}: {leftover}")
    return text


def segment(arg: Any, escape: bool) -> str:
    if isinstance(arg, httpx.URL):
        return _trim(arg)
    if isinstance(arg, Slot):
        if not arg.is_set:
            raise Undefined(f"url segment {arg!r}")
        return _maybe_escape(escape, str(arg.value))
    if callable(arg) and not isinstance(arg, type):
        if not _takes_no_arguments(arg):
            raise NotSupported(arg, detail=f"url segment {arg!r} must be a zero-argument callable")
        return _maybe_escape(escape, str(arg()))
    return _maybe_escape(escape, str(arg))


def _takes_no_arguments(fn: Callable) -> bool:
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return False
    return all(
        p.default is not inspect.Parameter.empty or p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD) for p in params
    )


def _trim(url: httpx.URL) -> str:
    if not url.path.endswith("/"):
        return str(url)
    if not url.query and not url.fragment:
        return str(url).removesuffix("/")
    return str(url.copy_with(path=url.path.removesuffix("/")))


def _maybe_escape(escape: bool, value: str) -> str:
    if escape:
        return quote(value, safe=SEGMENT_SAFE)
    return value


def parse(text: str) -> httpx.URL:
    """Parses an absolute http(s) URL.

    Raises:
        NotSupported: If the text is not a valid URL, or its scheme is not http/https.
    """
    try:
        addr = httpx.URL(text)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise NotSupported(text, detail=f"invalid URL {text!r}: {e}") from e
    if addr.scheme not in SUPPORTED_SCHEMES or not addr.host:
        raise NotSupported(addr, detail=f"Not supported: {text}")
    return addr
