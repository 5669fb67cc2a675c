# Composition core: arrows, join and the pipeline constructor.

import functools
import logging
from typing import Callable, Iterator, List

from http_contract.core.context import Context
from http_contract.core.exceptions import ContractError

logger = logging.getLogger(__name__)

Arrow = Callable[[Context], Context]

# Configuration options share the arrow shape; they run before the pipeline.
Config = Callable[[Context], Context]


def arrow(fn: Arrow) -> Arrow:
    """Makes a function a fail-fast arrow.

    The wrapped arrow returns the context unchanged when it already carries a
    failure. A ContractError raised by the body is recorded as the context
    failure instead of propagating to the caller.
    """

    @functools.wraps(fn)
    def wrapper(context: Context) -> Context:
        if context.failure is not None:
            return context
        try:
            return fn(context)
        except ContractError as e:
            logger.debug(f"[{context.context_id}] {getattr(fn, '__qualname__', fn)} failed: {e!r}")
            context.failure = e
            return context

    return wrapper


class Join:
    """Sequential, fail-fast composition of arrows.

    Nested joins are flattened on construction, so
    Join(Join(a, b), c), Join(a, Join(b, c)) and Join(a, b, c) run the same
    sequence of arrows.
    """

    def __init__(self, *arrows: Arrow):
        self.arrows: List[Arrow] = list(_flatten(arrows))

    def __call__(self, context: Context) -> Context:
        if context.failure is not None:
            return context
        total = len(self.arrows)
        for i, step in enumerate(self.arrows):
            logger.debug(f"[{context.context_id}] Applying arrow {i + 1}/{total}: {_name(step)}")
            context = step(context)
            if context.failure is not None:
                logger.debug(f"[{context.context_id}] Stopping at arrow {i + 1}/{total}: {context.failure!r}")
                return context
        return context

    def __iter__(self) -> Iterator[Arrow]:
        return iter(self.arrows)

    def __len__(self) -> int:
        return len(self.arrows)

    def __repr__(self) -> str:
        return f"<Join(arrows=[{', '.join(_name(a) for a in self.arrows)}])>"


def _flatten(arrows) -> Iterator[Arrow]:
    for a in arrows:
        if isinstance(a, Join):
            yield from a.arrows
        else:
            yield a


def _name(a: Arrow) -> str:
    return getattr(a, "__qualname__", a.__class__.__name__)


def join(*arrows: Arrow) -> Join:
    """Composes arrows into a single arrow: (a -> b, b -> c, c -> d) => a -> d."""
    return Join(*arrows)


def io(*opts: Config) -> Context:
    """Creates a fresh Context and applies configuration options to it in order."""
    context = Context()
    for opt in opts:
        context = opt(context)
    return context
