"""Domain model for decoded Gemini responses.

These are the typed objects handed to callers once a raw response document
has been decoded. Records that the decoder shares between owners (safety
ratings, prompt feedback) are frozen; the rest are plain dataclasses so that
tests and previews can build or tweak them field by field.

Every type has a ``to_dict`` method producing the wire document shape, so a
constructed response can be encoded and decoded again.
"""

from __future__ import annotations

import dataclasses
from enum import Enum, IntEnum
import logging
import typing

from gemini_response.config import DecoderConfig, get_config

log = logging.getLogger(__name__)


# --- Enumerations (each has a reserved UNKNOWN fallback member) ---


class FinishReason(IntEnum):
    """Why the model stopped generating a candidate."""

    UNKNOWN = -1
    UNSPECIFIED = 0
    STOP = 1  # Natural stop point or a provided stop sequence
    MAX_TOKENS = 2
    # NOTE: when streaming, content is empty if content filters blocked the output
    SAFETY = 3
    RECITATION = 4  # Flagged for unauthorized citations
    OTHER = 5

    @property
    def wire_name(self) -> str:
        """Name the service uses for this value, e.g. ``FINISH_REASON_UNSPECIFIED``."""
        if self in (FinishReason.UNKNOWN, FinishReason.UNSPECIFIED):
            return f"FINISH_REASON_{self.name}"
        return self.name


class BlockReason(str, Enum):
    """Why a prompt was blocked before any candidate was generated."""

    UNKNOWN = "UNKNOWN"
    UNSPECIFIED = "BLOCK_REASON_UNSPECIFIED"
    SAFETY = "SAFETY"
    OTHER = "OTHER"


class HarmCategory(str, Enum):
    """Category a safety rating applies to."""

    UNKNOWN = "HARM_CATEGORY_UNKNOWN"
    UNSPECIFIED = "HARM_CATEGORY_UNSPECIFIED"
    HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"
    SEXUALLY_EXPLICIT = "HARM_CATEGORY_SEXUALLY_EXPLICIT"
    DANGEROUS_CONTENT = "HARM_CATEGORY_DANGEROUS_CONTENT"


class HarmProbability(str, Enum):
    """Probability that content is harmful within a category."""

    UNKNOWN = "UNKNOWN"
    UNSPECIFIED = "HARM_PROBABILITY_UNSPECIFIED"
    NEGLIGIBLE = "NEGLIGIBLE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# --- Content ---


@dataclasses.dataclass(slots=True)
class InlineData:
    """Inline binary payload, base64-encoded as sent on the wire."""

    mime_type: str
    data: str

    def to_dict(self) -> dict[str, typing.Any]:  # noqa: D102
        return {"mimeType": self.mime_type, "data": self.data}


@dataclasses.dataclass(slots=True)
class Part:
    """A single part of a content body.

    ``extra`` keeps wire keys this model does not know about (function calls,
    executable code, ...) exactly as they were received.
    """

    text: str | None = None
    inline_data: InlineData | None = None
    extra: dict[str, typing.Any] = dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, typing.Any]:  # noqa: D102
        out: dict[str, typing.Any] = dict(self.extra)
        if self.text is not None:
            out["text"] = self.text
        if self.inline_data is not None:
            out["inlineData"] = self.inline_data.to_dict()
        return out


@dataclasses.dataclass(slots=True)
class ModelContent:
    """The ordered parts making up a candidate's reply."""

    parts: list[Part] = dataclasses.field(default_factory=list)
    role: str | None = None

    def to_dict(self) -> dict[str, typing.Any]:  # noqa: D102
        out: dict[str, typing.Any] = {"parts": [p.to_dict() for p in self.parts]}
        if self.role is not None:
            out["role"] = self.role
        return out


# --- Leaf records ---


@dataclasses.dataclass(frozen=True, slots=True)
class SafetyRating:
    """Safety rating for one harm category."""

    category: HarmCategory
    probability: HarmProbability
    blocked: bool = False

    def to_dict(self) -> dict[str, typing.Any]:  # noqa: D102
        out: dict[str, typing.Any] = {
            "category": self.category.value,
            "probability": self.probability.value,
        }
        if self.blocked:
            out["blocked"] = True
        return out


@dataclasses.dataclass(slots=True)
class Citation:
    """An attributed source span within generated content.

    ``start_index`` is inclusive and ``end_index`` exclusive. Neither the
    ordering nor the bounds are checked when decoding; treat spans defensively.
    """

    start_index: int
    end_index: int
    uri: str
    license: str

    def to_dict(self) -> dict[str, typing.Any]:  # noqa: D102
        return {
            "startIndex": self.start_index,
            "endIndex": self.end_index,
            "uri": self.uri,
            "license": self.license,
        }


@dataclasses.dataclass(slots=True)
class CitationMetadata:
    """Source attributions for a piece of content."""

    citation_sources: list[Citation] = dataclasses.field(default_factory=list)

    def to_dict(self) -> dict[str, typing.Any]:  # noqa: D102
        return {"citationSources": [c.to_dict() for c in self.citation_sources]}


@dataclasses.dataclass(frozen=True, slots=True)
class PromptFeedback:
    """Feedback on the prompt: its safety ratings and, if blocked, why."""

    block_reason: BlockReason | None = None
    safety_ratings: tuple[SafetyRating, ...] = ()

    def to_dict(self) -> dict[str, typing.Any]:  # noqa: D102
        out: dict[str, typing.Any] = {
            "safetyRatings": [r.to_dict() for r in self.safety_ratings]
        }
        if self.block_reason is not None:
            out["blockReason"] = self.block_reason.value
        return out


# --- Candidate and response ---


@dataclasses.dataclass(slots=True)
class CandidateResponse:
    """One possible reply to a prompt."""

    content: ModelContent = dataclasses.field(default_factory=ModelContent)
    safety_ratings: list[SafetyRating] = dataclasses.field(default_factory=list)
    finish_reason: FinishReason | None = None
    citation_metadata: CitationMetadata | None = None
    finish_message: str | None = None

    def to_dict(self) -> dict[str, typing.Any]:  # noqa: D102
        out: dict[str, typing.Any] = {
            "content": self.content.to_dict(),
            "safetyRatings": [r.to_dict() for r in self.safety_ratings],
        }
        if self.finish_reason is not None:
            out["finishReason"] = int(self.finish_reason)
        if self.citation_metadata is not None:
            out["citationMetadata"] = self.citation_metadata.to_dict()
        if self.finish_message is not None:
            out["finishMessage"] = self.finish_message
        return out


@dataclasses.dataclass(slots=True)
class GenerateContentResponse:
    """The model's response to a generate content request.

    Attributes:
        candidates: Candidate replies, ordered from best to worst.
        prompt_feedback: Safety ratings for the prompt or, if the request was
            blocked, the reason for blocking it.
    """

    candidates: list[CandidateResponse] = dataclasses.field(default_factory=list)
    prompt_feedback: PromptFeedback | None = None

    @property
    def text(self) -> str | None:
        """Text of the first part of the first candidate, if there is any.

        Never raises; a missing candidate or text part is logged and ``None``
        is returned.
        """
        return self.text_with_config(get_config())

    def text_with_config(self, config: DecoderConfig) -> str | None:
        """Same as ``text`` but logs at the levels of an explicit config."""
        if not self.candidates:
            log.log(
                config.missing_text_log_level,
                "Could not get text from a response that had no candidates.",
            )
            return None
        parts = self.candidates[0].content.parts
        if not parts or parts[0].text is None:
            log.log(
                config.missing_text_log_level,
                "Could not get a text part from the first candidate.",
            )
            return None
        return parts[0].text

    def to_dict(self) -> dict[str, typing.Any]:
        """Encode back into the wire document shape."""
        out: dict[str, typing.Any] = {
            "candidates": [c.to_dict() for c in self.candidates]
        }
        if self.prompt_feedback is not None:
            out["promptFeedback"] = self.prompt_feedback.to_dict()
        return out
