"""Candidate decoding.

The interesting part is ``content``. The service has been seen sending
``"content": {}`` for candidates with no output, which fails the normal
content shape. When the primary parse fails, the same node is re-parsed as a
plain string map purely to tell that known defect apart from other
corruption; the original error is kept either way.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
import typing

from pydantic import ValidationError

from gemini_response.config import DecoderConfig
from gemini_response.decoding.enums import decode_enum
from gemini_response.decoding.fields import (
    ABSENT,
    FieldSpec,
    Presence,
    join_path,
    read_field,
    require_mapping,
)
from gemini_response.decoding.leaves import (
    decode_citation_metadata,
    decode_safety_ratings,
)
from gemini_response.decoding.wire import STRING_MAP, ContentWire, PartWire
from gemini_response.exceptions import (
    DocumentShapeError,
    EmptyContentError,
    MalformedContentError,
)
from gemini_response.types import (
    CandidateResponse,
    FinishReason,
    InlineData,
    ModelContent,
    Part,
)

log = logging.getLogger(__name__)

CANDIDATE_FIELDS: typing.Final[Mapping[str, FieldSpec]] = {
    "content": FieldSpec("content", Presence.OPTIONAL),
    "safety_ratings": FieldSpec("safetyRatings", Presence.DEFAULT_EMPTY),
    "finish_reason": FieldSpec("finishReason", Presence.OPTIONAL),
    "citation_metadata": FieldSpec("citationMetadata", Presence.OPTIONAL),
    "finish_message": FieldSpec("finishMessage", Presence.OPTIONAL),
}


def _part_from_wire(wire: PartWire) -> Part:
    inline_data = None
    if wire.inline_data is not None:
        inline_data = InlineData(
            mime_type=wire.inline_data.mime_type, data=wire.inline_data.data
        )
    return Part(
        text=wire.text, inline_data=inline_data, extra=dict(wire.model_extra or {})
    )


def _is_empty_string_map(node: object) -> bool:
    try:
        return STRING_MAP.validate_python(node) == {}
    except ValidationError:
        return False


def decode_content(node: object, *, path: str = "content") -> ModelContent:
    """Decode a present ``content`` node.

    Raises:
        EmptyContentError: If the node is ``{}`` (known service defect).
        MalformedContentError: For any other shape mismatch.
    """
    try:
        wire = ContentWire.model_validate(node)
    except ValidationError as e:
        if _is_empty_string_map(node):
            log.debug("Candidate at %s has empty content object", path or "<root>")
            raise EmptyContentError(
                "content is an empty object", underlying_error=e, path=path
            ) from e
        raise MalformedContentError(
            f"content does not match the expected shape: {e.errors()[0]['msg']}",
            underlying_error=e,
            path=path,
        ) from e
    return ModelContent(parts=[_part_from_wire(p) for p in wire.parts], role=wire.role)


def decode_candidate(
    node: object, *, config: DecoderConfig, path: str = ""
) -> CandidateResponse:
    """Decode one candidate.

    Missing ``content`` gives an empty ``ModelContent`` (e.g. filtered output);
    missing ``safetyRatings`` gives an empty list; the other fields are
    optional. Nothing is returned unless every field decoded.

    Raises:
        EmptyContentError: ``content`` is ``{}``.
        MalformedContentError: ``content`` has another wrong shape.
        LeafDecodeError: A safety rating or citation is invalid.
        DocumentShapeError: The candidate or one of its containers has the wrong type.
    """
    document = require_mapping(node, what="candidate", path=path)
    fields = CANDIDATE_FIELDS

    raw_content = read_field(document, fields["content"])
    if raw_content is ABSENT:
        content = ModelContent(parts=[])
    else:
        content = decode_content(raw_content, path=join_path(path, "content"))

    safety_ratings = decode_safety_ratings(
        read_field(document, fields["safety_ratings"]),
        config=config,
        path=join_path(path, "safetyRatings"),
    )

    finish_reason = None
    raw_reason = read_field(document, fields["finish_reason"])
    if raw_reason is not ABSENT:
        finish_reason = decode_enum(
            FinishReason,
            raw_reason,
            config=config,
            path=join_path(path, "finishReason"),
        )

    citation_metadata = None
    raw_citations = read_field(document, fields["citation_metadata"])
    if raw_citations is not ABSENT:
        citation_metadata = decode_citation_metadata(
            raw_citations, path=join_path(path, "citationMetadata")
        )

    finish_message = None
    raw_message = read_field(document, fields["finish_message"])
    if raw_message is not ABSENT:
        if not isinstance(raw_message, str):
            raise DocumentShapeError(
                f"expected finishMessage as str, got {type(raw_message).__name__}",
                path=join_path(path, "finishMessage"),
            )
        finish_message = raw_message

    return CandidateResponse(
        content=content,
        safety_ratings=safety_ratings,
        finish_reason=finish_reason,
        citation_metadata=citation_metadata,
        finish_message=finish_message,
    )
