"""Encode and decode dispatch keyed by content type.

Structured values are turned into plain JSON-compatible data with pydantic,
which accepts pydantic models, dataclasses, TypedDicts and plain mappings.
Query strings and form bodies additionally require the value to satisfy the
flat-field contract: a mapping of field names to scalar values.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Type
from urllib.parse import parse_qsl, urlencode

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from http_contract.core.exceptions import ContractError, DecodeError, NotFlat, NotSupported

logger = logging.getLogger(__name__)

JSON = "json"
FORM = "form"
ANY = "any"

SCALARS = (str, int, float, bool)


def to_plain(value: Any) -> Any:
    """Converts a structured value to JSON-compatible python data."""
    try:
        return to_jsonable_python(value, by_alias=True, exclude_none=True)
    except PydanticSerializationError as e:
        raise ContractError(f"cannot serialize {type(value).__name__}: {e}") from e


def flatten(value: Any) -> Dict[str, str]:
    """Converts a value to a flat string map.

    Raises:
        NotFlat: If the value is not a mapping-like structure, or any of its
            fields holds a nested composite (mapping or sequence).
    """
    plain = to_plain(value)
    type_name = type(value).__name__
    if not isinstance(plain, dict):
        raise NotFlat(f"{type_name} is not a flat key/value structure")

    flat: Dict[str, str] = {}
    for key, item in plain.items():
        if item is None:
            continue
        if not isinstance(item, SCALARS):
            raise NotFlat(f"field '{key}' of {type_name} is not a scalar ({type(item).__name__})")
        if isinstance(item, bool):
            flat[str(key)] = "true" if item else "false"
        else:
            flat[str(key)] = str(item)
    return flat


# --- Encode dispatch ---


def encode_json(data: Any) -> bytes:
    return json.dumps(to_plain(data)).encode("utf-8")


def encode_form(data: Any) -> bytes:
    try:
        return urlencode(flatten(data)).encode("utf-8")
    except NotFlat as e:
        raise NotFlat(f"encode application/x-www-form-urlencoded: {e}") from e


# Ordered: the first content-type substring that matches wins
ENCODERS: List[Tuple[str, Callable[[Any], bytes]]] = [
    ("json", encode_json),
    ("www-form", encode_form),
]


def encode(content_type: str, data: Any) -> bytes:
    for marker, encoder in ENCODERS:
        if marker in content_type:
            return encoder(data)
    raise NotSupported(content_type, detail=f"unsupported Content-Type {content_type}")


# --- Decode dispatch ---


def decoder_for(content_type: Optional[str]) -> Optional[str]:
    """Returns the decoder name for a content type, or None if none is registered."""
    if content_type is None:
        return None
    if "json" in content_type:
        return JSON
    if "www-form" in content_type:
        return FORM
    return None


def decode_json(body: bytes, type_: Type) -> Any:
    try:
        return TypeAdapter(type_).validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"decode application/json: {e}", cause=e) from e


def decode_form(body: bytes, type_: Type) -> Any:
    try:
        pairs = parse_qsl(body.decode("utf-8"), keep_blank_values=True, strict_parsing=bool(body))
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"decode application/x-www-form-urlencoded: {e}", cause=e) from e
    try:
        return TypeAdapter(type_).validate_python(dict(pairs))
    except ValidationError as e:
        raise DecodeError(f"decode application/x-www-form-urlencoded: {e}", cause=e) from e


DECODERS: Dict[str, Callable[[bytes, Type], Any]] = {
    JSON: decode_json,
    FORM: decode_form,
}


def decode(decoder: str, body: bytes, type_: Type) -> Any:
    fn = DECODERS.get(decoder)
    if fn is None:
        raise NotSupported(decoder, detail=f"no body decoder for '{decoder}', use recv_bytes() instead")
    logger.debug(f"Decoding {len(body)} bytes as {decoder} into {getattr(type_, '__name__', type_)}")
    return fn(body, type_)
