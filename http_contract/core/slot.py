from typing import Any, Generic, Optional, Type, TypeVar

T = TypeVar("T")

_UNSET: Any = object()


class Slot(Generic[T]):
    """A caller-owned writable cell.

    Matcher arrows write captured values into a slot on success only, so the
    caller reads results back after the pipeline has run:

        site = Slot(Site)
        join(get(url), code(200), served_json(), recv(site))(default_io())
        site.value.site

    Attributes:
        type: The type decoders validate into when writing the slot.
    """

    def __init__(self, type_: Type[T] = str, value: Any = _UNSET):  # type: ignore[assignment]
        self.type = type_
        self._value = value

    @property
    def is_set(self) -> bool:
        return self._value is not _UNSET

    @property
    def value(self) -> Optional[T]:
        """The written value, or None if nothing was written yet."""
        return None if self._value is _UNSET else self._value

    def set(self, value: T) -> None:
        self._value = value

    def clear(self) -> None:
        self._value = _UNSET

    def __repr__(self) -> str:
        type_name = getattr(self.type, "__name__", repr(self.type))
        return f"Slot[{type_name}]({self.value!r})"
