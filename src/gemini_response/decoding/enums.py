"""Enum decoding with an UNKNOWN fallback.

Values the service adds after a client release decode to the enum's
``UNKNOWN`` member with a logged diagnostic instead of failing the whole
response.
"""

from __future__ import annotations

from enum import Enum
import logging
import typing

from gemini_response.config import DecoderConfig
from gemini_response.exceptions import DocumentShapeError
from gemini_response.types import FinishReason

log = logging.getLogger(__name__)

E = typing.TypeVar("E", bound=Enum)


def _raw_type(enum_cls: type[Enum]) -> type:
    return int if issubclass(enum_cls, int) else str


def decode_enum(
    enum_cls: type[E], raw: object, *, config: DecoderConfig, path: str = ""
) -> E:
    """Decode ``raw`` into a member of ``enum_cls``.

    Args:
        enum_cls: Enum with an ``UNKNOWN`` member and int or str values.
        raw: Primitive read from the document.
        config: Supplies the diagnostic level and whether names are accepted.
        path: Document path used in error messages.

    Returns:
        The matching member, or ``enum_cls.UNKNOWN`` for an unrecognized value.

    Raises:
        DocumentShapeError: If ``raw`` is not a primitive of the enum's wire type.
    """
    expected = _raw_type(enum_cls)
    # JSON has one number type; 1.0 is the integer 1
    if expected is int and isinstance(raw, float) and raw.is_integer():
        raw = int(raw)
    # bool is an int subclass but never a valid enum value on the wire
    if isinstance(raw, bool) or not isinstance(raw, expected):
        if expected is int and isinstance(raw, str) and config.accept_enum_names:
            return _decode_by_name(enum_cls, raw, config=config)
        raise DocumentShapeError(
            f"expected {enum_cls.__name__} as {expected.__name__}, "
            f"got {type(raw).__name__}",
            path=path,
        )

    try:
        return enum_cls(raw)
    except ValueError:
        return _unknown(enum_cls, raw, config)


def _decode_by_name(enum_cls: type[E], raw: str, *, config: DecoderConfig) -> E:
    if enum_cls is FinishReason:
        for member in FinishReason:
            if member.wire_name == raw:
                return typing.cast(E, member)
    return _unknown(enum_cls, raw, config)


def _unknown(enum_cls: type[E], raw: object, config: DecoderConfig) -> E:
    log.log(
        config.unknown_enum_log_level,
        'Unrecognized %s with value "%s".',
        enum_cls.__name__,
        raw,
    )
    return enum_cls["UNKNOWN"]
