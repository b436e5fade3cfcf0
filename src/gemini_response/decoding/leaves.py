"""Decoders for the small fixed-shape records.

Required fields and their primitive types are checked by strict Pydantic
wire models; a failure becomes a ``LeafDecodeError`` naming the record and
field. Enum-valued fields go through ``decode_enum`` afterwards so unknown
values still degrade to ``UNKNOWN``.
"""

from __future__ import annotations

from collections.abc import Mapping
import typing

from pydantic import BaseModel, ValidationError

from gemini_response.config import DecoderConfig
from gemini_response.decoding.enums import decode_enum
from gemini_response.decoding.fields import (
    ABSENT,
    FieldSpec,
    Presence,
    join_path,
    read_field,
    require_list,
    require_mapping,
)
from gemini_response.decoding.wire import CitationWire, SafetyRatingWire
from gemini_response.exceptions import LeafDecodeError
from gemini_response.types import (
    BlockReason,
    Citation,
    CitationMetadata,
    HarmCategory,
    HarmProbability,
    PromptFeedback,
    SafetyRating,
)


M = typing.TypeVar("M", bound=BaseModel)


def _validate(model: type[M], node: object, *, record: str, path: str) -> M:
    try:
        return model.model_validate(node)
    except ValidationError as e:
        first = e.errors()[0]
        loc = [part for part in first["loc"] if isinstance(part, str)]
        field = loc[0] if loc else None
        where = join_path(path, field) if field else path
        raise LeafDecodeError(
            f"invalid {record}: {first['msg']}", record=record, field=field, path=where
        ) from e


# --- Decoders ---


def decode_safety_rating(
    node: object, *, config: DecoderConfig, path: str = ""
) -> SafetyRating:
    """Decode a ``SafetyRating`` (category and probability are required)."""
    wire = _validate(SafetyRatingWire, node, record="SafetyRating", path=path)
    return SafetyRating(
        category=decode_enum(
            HarmCategory, wire.category, config=config, path=join_path(path, "category")
        ),
        probability=decode_enum(
            HarmProbability,
            wire.probability,
            config=config,
            path=join_path(path, "probability"),
        ),
        blocked=wire.blocked,
    )


def decode_safety_ratings(
    node: object, *, config: DecoderConfig, path: str
) -> list[SafetyRating]:
    """Decode an ordered array of safety ratings."""
    items = require_list(node, what="safetyRatings", path=path)
    return [
        decode_safety_rating(item, config=config, path=join_path(path, i))
        for i, item in enumerate(items)
    ]


def decode_citation(node: object, *, path: str = "") -> Citation:
    """Decode a ``Citation``; all four fields are required.

    Index ordering and bounds are not checked.
    """
    wire = _validate(CitationWire, node, record="Citation", path=path)
    return Citation(
        start_index=wire.start_index,
        end_index=wire.end_index,
        uri=wire.uri,
        license=wire.license,
    )


def decode_citation_metadata(node: object, *, path: str = "") -> CitationMetadata:
    """Decode ``{citationSources: [Citation]}``."""
    document = require_mapping(node, what="citationMetadata", path=path)
    sources_path = join_path(path, "citationSources")
    if "citationSources" not in document:
        raise LeafDecodeError(
            "invalid CitationMetadata: Field required",
            record="CitationMetadata",
            field="citationSources",
            path=sources_path,
        )
    # Required here, so an explicit null is a wrongly-typed value, not absence
    items = require_list(
        document["citationSources"], what="citationSources", path=sources_path
    )
    return CitationMetadata(
        citation_sources=[
            decode_citation(item, path=join_path(sources_path, i))
            for i, item in enumerate(items)
        ]
    )


def decode_block_reason(
    raw: object, *, config: DecoderConfig, path: str = ""
) -> BlockReason:
    """Decode a block reason string, falling back to ``BlockReason.UNKNOWN``."""
    return decode_enum(BlockReason, raw, config=config, path=path)


PROMPT_FEEDBACK_FIELDS: typing.Final[Mapping[str, FieldSpec]] = {
    "block_reason": FieldSpec("blockReason", Presence.OPTIONAL),
    "safety_ratings": FieldSpec("safetyRatings", Presence.DEFAULT_EMPTY),
}


def decode_prompt_feedback(
    node: object, *, config: DecoderConfig, path: str = "promptFeedback"
) -> PromptFeedback:
    """Decode ``PromptFeedback``; both fields may be absent."""
    document = require_mapping(node, what="promptFeedback", path=path)
    fields = PROMPT_FEEDBACK_FIELDS

    raw_reason = read_field(document, fields["block_reason"])
    block_reason = (
        None
        if raw_reason is ABSENT
        else decode_block_reason(
            raw_reason, config=config, path=join_path(path, "blockReason")
        )
    )
    safety_ratings = decode_safety_ratings(
        read_field(document, fields["safety_ratings"]),
        config=config,
        path=join_path(path, "safetyRatings"),
    )
    return PromptFeedback(
        block_reason=block_reason, safety_ratings=tuple(safety_ratings)
    )
