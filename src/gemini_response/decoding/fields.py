"""Per-field presence policy.

Whether a missing key becomes an empty collection or ``None`` is decided
field by field, not inferred from the field's type. The tables for each
record live next to the decoder that uses them; this module holds the shared
machinery for reading a field according to its policy.
"""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
from enum import Enum
import typing

from gemini_response.exceptions import DocumentShapeError


class Presence(Enum):
    """What to do when a key is missing (or explicitly ``null``)."""

    DEFAULT_EMPTY = "default_empty"  # missing collection -> empty list
    OPTIONAL = "optional"  # missing value -> None


@dataclasses.dataclass(frozen=True, slots=True)
class FieldSpec:
    """Wire key of a field and its presence policy."""

    key: str
    presence: Presence


class _Absent:
    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: typing.Final = _Absent()


def join_path(parent: str, child: str | int) -> str:
    """Extend a dotted document path with a key or list index."""
    if isinstance(child, int):
        return f"{parent}[{child}]"
    return f"{parent}.{child}" if parent else child


def require_mapping(node: object, *, what: str, path: str) -> Mapping[str, typing.Any]:
    """Return ``node`` if it is a JSON object, else raise ``DocumentShapeError``."""
    if not isinstance(node, Mapping):
        raise DocumentShapeError(
            f"expected {what} to be an object, got {type(node).__name__}", path=path
        )
    return node


def require_list(node: object, *, what: str, path: str) -> list[typing.Any]:
    """Return ``node`` if it is a JSON array, else raise ``DocumentShapeError``."""
    if not isinstance(node, list):
        raise DocumentShapeError(
            f"expected {what} to be an array, got {type(node).__name__}", path=path
        )
    return node


def read_field(
    document: Mapping[str, typing.Any], spec: FieldSpec
) -> typing.Any:
    """Read ``spec.key`` from ``document`` applying the presence policy.

    Returns the raw value, ``[]`` for a missing DEFAULT_EMPTY field, or
    ``ABSENT`` for a missing OPTIONAL field. ``null`` counts as missing.
    """
    value = document.get(spec.key)
    if value is not None:
        return value
    if spec.presence is Presence.DEFAULT_EMPTY:
        return []
    return ABSENT
