"""Top-level decoding entry points.

``decode_response`` turns one parsed response document into a
``GenerateContentResponse``. ``decode_response_json`` does the JSON parse
first, and ``iter_decoded_chunks`` applies the same contract to each chunk
of a streamed reply without merging them.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
import json
import typing

from gemini_response.config import DecoderConfig, get_config
from gemini_response.decoding.candidate import decode_candidate
from gemini_response.decoding.fields import (
    ABSENT,
    FieldSpec,
    Presence,
    join_path,
    read_field,
    require_list,
    require_mapping,
)
from gemini_response.decoding.leaves import decode_prompt_feedback
from gemini_response.exceptions import MissingEnvelopeDataError, ResponseDecodeError
from gemini_response.types import GenerateContentResponse

RESPONSE_FIELDS: typing.Final[Mapping[str, FieldSpec]] = {
    "candidates": FieldSpec("candidates", Presence.DEFAULT_EMPTY),
    "prompt_feedback": FieldSpec("promptFeedback", Presence.OPTIONAL),
}


def decode_response(
    document: object, *, config: DecoderConfig | None = None
) -> GenerateContentResponse:
    """Decode a parsed ``generateContent`` response document.

    Args:
        document: The JSON object, as produced by ``json.loads``.
        config: Decoder configuration. Defaults to the ambient one.

    Returns:
        The decoded response. Candidate order is preserved.

    Raises:
        MissingEnvelopeDataError: Neither ``candidates`` nor ``promptFeedback``
            is present.
        InvalidCandidateError: A candidate's ``content`` is malformed
            (``MalformedContentError``) or the empty-object defect
            (``EmptyContentError``).
        LeafDecodeError: A safety rating or citation is invalid.
        DocumentShapeError: A structural node has the wrong JSON type.
    """
    if config is None:
        config = get_config()
    root = require_mapping(document, what="response", path="")

    # Key presence, not value: "candidates": [] still satisfies the envelope
    if "candidates" not in root and "promptFeedback" not in root:
        raise MissingEnvelopeDataError(
            "Failed to decode GenerateContentResponse; "
            "missing keys 'candidates' and 'promptFeedback'."
        )

    fields = RESPONSE_FIELDS
    raw_candidates = require_list(
        read_field(root, fields["candidates"]), what="candidates", path="candidates"
    )
    candidates = [
        decode_candidate(item, config=config, path=join_path("candidates", i))
        for i, item in enumerate(raw_candidates)
    ]

    prompt_feedback = None
    raw_feedback = read_field(root, fields["prompt_feedback"])
    if raw_feedback is not ABSENT:
        prompt_feedback = decode_prompt_feedback(raw_feedback, config=config)

    return GenerateContentResponse(
        candidates=candidates, prompt_feedback=prompt_feedback
    )


def decode_response_json(
    payload: str | bytes, *, config: DecoderConfig | None = None
) -> GenerateContentResponse:
    """Parse a JSON response body and decode it.

    Raises:
        ResponseDecodeError: If ``payload`` is not valid JSON, plus everything
            ``decode_response`` raises.
    """
    try:
        document = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ResponseDecodeError(f"response body is not valid JSON: {e}") from e
    return decode_response(document, config=config)


def iter_decoded_chunks(
    chunks: Iterable[object], *, config: DecoderConfig | None = None
) -> Iterator[GenerateContentResponse]:
    """Lazily decode each chunk of a streamed response.

    Every chunk must satisfy the same contract as a full response. The first
    failing chunk raises and stops iteration; chunks are not merged.
    """
    if config is None:
        config = get_config()
    for chunk in chunks:
        yield decode_response(chunk, config=config)
