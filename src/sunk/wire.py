"""Shared helpers for turning loosely-typed wire JSON into typed values.

Entities are decoded in two stages. A raw wire shape (a frozen dataclass
deriving from :class:`WireShape`) mirrors exactly what the server sends:
string ids, camelCase keys, optional fields. The entity then converts the
raw shape into its domain value, parsing ids with :func:`parse_id`.

Example:
    >>> @dataclass(frozen=True)
    ... class RawGenre(WireShape):
    ...     value: str
    ...     song_count: int
    ...     album_count: Optional[int] = None
    >>> RawGenre.from_payload({"value": "Rock", "songCount": 12})
    RawGenre(value='Rock', song_count=12, album_count=None)
"""

import dataclasses
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints

from .exceptions import InvalidFieldError, InvalidIdError

W = TypeVar("W", bound="WireShape")

_DIGITS = re.compile(r"[0-9]+")
_MAX_ID = 2**64 - 1
_NONE_TYPE = type(None)


def wire_field(key: Optional[str] = None, **kwargs) -> Any:
    """Declare a raw-shape field whose wire key is not the camelCase of its name.

    Accepts the same ``default``/``default_factory`` arguments as dataclasses.field.
    """
    return dataclasses.field(metadata={"wire_key": key}, **kwargs)


def camel_case(name: str) -> str:
    """Convert a snake_case attribute name to the camelCase wire key.

    >>> camel_case("album_count")
    'albumCount'
    """
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def wire_key(field: dataclasses.Field) -> str:
    return field.metadata.get("wire_key") or camel_case(field.name)


def _has_default(field: dataclasses.Field) -> bool:
    return field.default is not dataclasses.MISSING or field.default_factory is not dataclasses.MISSING


def _check(key: str, value: Any, annotation: Any) -> Any:
    """Validate one wire value against a raw-shape annotation."""
    origin = get_origin(annotation)

    if origin is Union:
        members = get_args(annotation)
        if value is None and _NONE_TYPE in members:
            return None
        inner = [member for member in members if member is not _NONE_TYPE]
        if len(inner) != 1:
            raise TypeError(f"Unsupported wire annotation for '{key}': {annotation}")
        return _check(key, value, inner[0])

    if value is None:
        raise InvalidFieldError(key, None, reason="null value for non-optional field")

    if annotation is Any:
        return value

    if origin is list:
        # Some servers collapse one-element lists into a bare object
        if isinstance(value, dict):
            value = [value]
        if not isinstance(value, list):
            raise InvalidFieldError(key, value, reason="expected a list")
        (item_type,) = get_args(annotation) or (Any,)
        return [_check(f"{key}[{index}]", item, item_type) for index, item in enumerate(value)]

    if origin is dict:
        if not isinstance(value, dict):
            raise InvalidFieldError(key, value, reason="expected an object")
        return value

    if annotation is bool:
        if not isinstance(value, bool):
            raise InvalidFieldError(key, value, reason="expected a boolean")
        return value

    if annotation is int:
        # All integer wire fields are counts, sizes or durations
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidFieldError(key, value, reason="expected an integer")
        if value < 0:
            raise InvalidFieldError(key, value, reason="expected a non-negative integer")
        return value

    if annotation is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidFieldError(key, value, reason="expected a number")
        return float(value)

    if annotation is str:
        if not isinstance(value, str):
            raise InvalidFieldError(key, value, reason="expected a string")
        return value

    raise TypeError(f"Unsupported wire annotation for '{key}': {annotation}")


@dataclass(frozen=True)
class WireShape:
    """Base class for raw wire shapes.

    Subclasses are frozen dataclasses. Each field maps to the camelCase wire
    key of its name (or the key given to wire_field). A key missing from the
    payload takes the field's declared default; a missing key without a
    declared default is an error.
    """

    @classmethod
    def from_payload(cls: Type[W], payload: Any) -> W:
        """Validate a decoded JSON object against this shape.

        Raises:
            InvalidFieldError: If the payload is not an object, a required key
                is missing, or a value has the wrong type
        """
        if not isinstance(payload, dict):
            raise InvalidFieldError(cls.__name__, payload, reason="expected a JSON object")

        hints = get_type_hints(cls)
        values: Dict[str, Any] = {}
        for field in dataclasses.fields(cls):
            key = wire_key(field)
            if key not in payload:
                if not _has_default(field):
                    raise InvalidFieldError(key, None, reason="missing required field")
                continue
            values[field.name] = _check(key, payload[key], hints[field.name])

        return cls(**values)


def parse_id(field: str, value: Any) -> int:
    """Parse a string-encoded numeric id into an unsigned 64-bit integer.

    Raises:
        InvalidIdError: If value is not a string of ASCII digits, or does
            not fit in 64 bits

    >>> parse_id("id", "27")
    27
    """
    # Checked before int() so huge digit strings never reach the converter
    if not isinstance(value, str) or len(value) > 20 or not _DIGITS.fullmatch(value):
        raise InvalidIdError(field, value)
    parsed = int(value)
    if parsed > _MAX_ID:
        raise InvalidIdError(field, value)
    return parsed


def parse_optional_id(field: str, value: Optional[str]) -> Optional[int]:
    """Like parse_id, but passes None through."""
    if value is None:
        return None
    return parse_id(field, value)


def payload_list(payload: Any, key: str) -> List[Any]:
    """Extract a list container from a payload object.

    A missing payload or key gives an empty list and a bare object gives a
    one-element list.

    Raises:
        InvalidFieldError: If the payload is not an object or the value is
            neither a list nor an object
    """
    if payload is None:
        return []
    if not isinstance(payload, dict):
        raise InvalidFieldError(key, payload, reason="expected a JSON object container")

    value = payload.get(key)
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        return value
    raise InvalidFieldError(key, value, reason="expected a list")
