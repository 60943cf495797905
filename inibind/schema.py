"""Dataclass schema resolution for sections and keys.

Responsibilities:
- Attach external section/key names to dataclass fields via field metadata.
- Validate that a bind target is a mutable dataclass instance.
- Resolve a section name to a nested dataclass value and a key name to a
  leaf field, scanning fields in declaration order (first match wins).
"""

from __future__ import annotations

from dataclasses import MISSING, dataclass, field, fields, is_dataclass
from functools import lru_cache
from typing import Any, get_type_hints

from .coercion import FieldKind, kind_of
from .config import DEFAULT_TAG
from .errors import UsageError


@dataclass(frozen=True, slots=True)
class LeafField:
    """A resolved key: the attribute to write and the kind to coerce to."""

    attribute: str
    kind: FieldKind


def ini_field(
    name: str,
    *,
    default: Any = MISSING,
    default_factory: Any = MISSING,
    tag: str = DEFAULT_TAG,
) -> Any:
    """Declare a dataclass field bound to section or key `name`.

    Equivalent to `field(default=..., metadata={tag: name})`.
    """

    return field(default=default, default_factory=default_factory, metadata={tag: name})


def _is_instance_of_mutable_dataclass(value: object) -> bool:
    if not is_dataclass(value) or isinstance(value, type):
        return False
    return not type(value).__dataclass_params__.frozen


def ensure_target(target: object) -> None:
    """Reject targets that cannot be bound in place.

    Raises:
        UsageError: If `target` is a dataclass class rather than an instance,
            an instance of a frozen dataclass, or not a dataclass at all.
    """

    if isinstance(target, type):
        raise UsageError(
            detail=f"target `{target.__name__}` is a class; pass an instance to bind into",
            hint=f"Call the loader with `{target.__name__}()` instead of the class.",
        )
    if not is_dataclass(target):
        raise UsageError(
            detail=f"target of type `{type(target).__name__}` is not a dataclass instance",
        )
    if type(target).__dataclass_params__.frozen:
        raise UsageError(
            detail=f"target `{type(target).__name__}` is a frozen dataclass and cannot be mutated",
        )


def resolve_section(
    target: object,
    name: str,
    tag: str = DEFAULT_TAG,
    line: int | None = None,
) -> object | None:
    """Return the nested dataclass value whose field is annotated with `name`.

    Returns `None` when no field matches, so undeclared sections are skipped.

    Raises:
        UsageError: If the matching field does not hold a mutable dataclass instance.
    """

    for section_field in fields(target):
        if section_field.metadata.get(tag) != name:
            continue
        value = getattr(target, section_field.name)
        if not _is_instance_of_mutable_dataclass(value):
            raise UsageError(
                detail=(
                    f"field `{section_field.name}` bound to section `{name}` "
                    "does not hold a mutable dataclass instance"
                ),
                line=line,
            )
        return value
    return None


def resolve_key(section: object, name: str, tag: str = DEFAULT_TAG) -> LeafField | None:
    """Return the leaf field of `section` annotated with `name`, or `None`."""

    for leaf in fields(section):
        if leaf.metadata.get(tag) == name:
            hints = _type_hints(type(section))
            return LeafField(attribute=leaf.name, kind=kind_of(hints.get(leaf.name)))
    return None


@lru_cache(maxsize=None)
def _type_hints(section_type: type) -> dict[str, Any]:
    """Resolve (possibly stringified) field annotations once per section type.

    Annotations naming types that are not importable from the defining module
    (for example classes local to a function) stay as raw strings.
    """

    try:
        return get_type_hints(section_type)
    except NameError:
        return {leaf.name: leaf.type for leaf in fields(section_type)}
