"""Scalar value coercion for bound leaf fields.

Each `FieldKind` variant owns one coercion function; the resolver picks the
variant from the field's declared type and the binder writes the result.
"""

from __future__ import annotations

from enum import Enum
import re
import types
from typing import TYPE_CHECKING, Any, Callable, Union, get_args, get_origin

from .errors import UnsupportedFieldKindError, ValueTypeError
from .parsing import parse_base10_int, parse_permissive_boolean

if TYPE_CHECKING:
    from .schema import LeafField


class FieldKind(Enum):
    """Closed set of scalar kinds a leaf field can be bound as."""

    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    UNSUPPORTED = "unsupported"


def kind_of(annotation: Any) -> FieldKind:
    """Map a resolved type annotation to its field kind.

    `X | None` and `Optional[X]` resolve to the kind of `X`. `bool` is tested
    before `int` because it is an `int` subclass.
    """

    if isinstance(annotation, str):
        return _kind_of_string_annotation(annotation)

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return kind_of(members[0])
        return FieldKind.UNSUPPORTED

    if annotation is bool:
        return FieldKind.BOOLEAN
    if annotation is int:
        return FieldKind.INTEGER
    if annotation is str:
        return FieldKind.TEXT
    return FieldKind.UNSUPPORTED


def _kind_of_string_annotation(annotation: str) -> FieldKind:
    """Map an unresolved annotation string such as `"int | None"` to its kind.

    `Optional[X]` and `typing.Optional[X]` unwrap to the kind of `X`.
    """

    optional = _OPTIONAL_ANNOTATION.fullmatch(annotation.strip())
    if optional is not None:
        return _kind_of_string_annotation(optional.group(1))

    members = [part.strip() for part in annotation.split("|") if part.strip() != "None"]
    if len(members) != 1:
        return FieldKind.UNSUPPORTED
    return _SCALAR_NAMES.get(members[0], FieldKind.UNSUPPORTED)


_OPTIONAL_ANNOTATION = re.compile(r"(?:typing\.)?Optional\[(.+)\]")

_SCALAR_NAMES = {
    "str": FieldKind.TEXT,
    "int": FieldKind.INTEGER,
    "bool": FieldKind.BOOLEAN,
}


def _coerce_text(raw: str, line: int) -> str:
    return raw


def _coerce_integer(raw: str, line: int) -> int:
    parsed = parse_base10_int(raw)
    if parsed is None:
        raise ValueTypeError(
            detail=f"value `{raw}` is not a base-10 64-bit integer",
            line=line,
        )
    return parsed


def _coerce_boolean(raw: str, line: int) -> bool:
    parsed = parse_permissive_boolean(raw)
    if parsed is None:
        raise ValueTypeError(
            detail=f"value `{raw}` is not a boolean",
            line=line,
            hint="Use one of `true`/`false`, `t`/`f`, `1`/`0`.",
        )
    return parsed


_COERCERS: dict[FieldKind, Callable[[str, int], object]] = {
    FieldKind.TEXT: _coerce_text,
    FieldKind.INTEGER: _coerce_integer,
    FieldKind.BOOLEAN: _coerce_boolean,
}


def coerce_value(kind: FieldKind, raw: str, line: int) -> object:
    """Convert a trimmed raw string into a value of the given kind.

    Raises:
        ValueTypeError: If the string is not a valid literal for the kind.
        UnsupportedFieldKindError: If the kind has no coercion.
    """

    coercer = _COERCERS.get(kind)
    if coercer is None:
        raise UnsupportedFieldKindError(
            detail=f"cannot bind value `{raw}` to a field of unsupported type",
            line=line,
            hint="Declare the field as `str`, `int`, or `bool`.",
        )
    return coercer(raw, line)


def apply_value(section: object, leaf: LeafField, raw: str, line: int) -> object:
    """Coerce `raw` to the leaf's kind and write it onto `section`.

    The field is only written when coercion succeeds.

    Returns:
        The value that was written.
    """

    value = coerce_value(leaf.kind, raw, line)
    setattr(section, leaf.attribute, value)
    return value
