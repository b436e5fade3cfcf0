"""Decoders from raw response documents to the domain model."""

from .candidate import decode_candidate, decode_content
from .enums import decode_enum
from .leaves import (
    decode_block_reason,
    decode_citation,
    decode_citation_metadata,
    decode_prompt_feedback,
    decode_safety_rating,
)
from .response import decode_response, decode_response_json, iter_decoded_chunks

__all__ = [  # noqa: RUF022
    # Entry points
    "decode_response",
    "decode_response_json",
    "iter_decoded_chunks",
    # Component decoders
    "decode_candidate",
    "decode_content",
    "decode_enum",
    "decode_safety_rating",
    "decode_citation",
    "decode_citation_metadata",
    "decode_block_reason",
    "decode_prompt_feedback",
]
