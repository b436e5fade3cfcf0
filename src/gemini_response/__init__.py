"""Typed decoding and validation of Gemini ``generateContent`` responses."""

import importlib.metadata
import logging

from gemini_response.config import (
    DecoderConfig,
    DecoderSettings,
    clear_config_cache,
    config_override,
    config_scope,
    get_config,
    resolve_config,
)
from gemini_response.decoding import (
    decode_candidate,
    decode_response,
    decode_response_json,
    iter_decoded_chunks,
)
from gemini_response.exceptions import (
    DocumentShapeError,
    EmptyContentError,
    GeminiResponseError,
    InvalidCandidateError,
    LeafDecodeError,
    MalformedContentError,
    MissingEnvelopeDataError,
    ResponseDecodeError,
)
from gemini_response.types import (
    BlockReason,
    CandidateResponse,
    Citation,
    CitationMetadata,
    FinishReason,
    GenerateContentResponse,
    HarmCategory,
    HarmProbability,
    InlineData,
    ModelContent,
    Part,
    PromptFeedback,
    SafetyRating,
)

# Version handling
try:
    __version__ = importlib.metadata.version("gemini-response")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Decoding
    "decode_response",
    "decode_response_json",
    "iter_decoded_chunks",
    "decode_candidate",
    # Domain model
    "GenerateContentResponse",
    "CandidateResponse",
    "ModelContent",
    "Part",
    "InlineData",
    "SafetyRating",
    "CitationMetadata",
    "Citation",
    "PromptFeedback",
    "FinishReason",
    "BlockReason",
    "HarmCategory",
    "HarmProbability",
    # Configuration
    "DecoderConfig",
    "DecoderSettings",
    "resolve_config",
    "get_config",
    "clear_config_cache",
    "config_scope",
    "config_override",
    # Exceptions
    "GeminiResponseError",
    "ResponseDecodeError",
    "MissingEnvelopeDataError",
    "DocumentShapeError",
    "LeafDecodeError",
    "InvalidCandidateError",
    "MalformedContentError",
    "EmptyContentError",
]
