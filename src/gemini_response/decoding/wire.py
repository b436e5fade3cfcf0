"""Pydantic models describing the wire shape of response nodes.

These only check shape: which keys are required and which JSON types they
carry. Primitive fields are strict (no ``"3"`` for ``3``, no ``1`` for
``"1"``). Enum-valued fields are kept as raw primitives and decoded
separately.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    TypeAdapter,
)


class WireModel(BaseModel):
    """Base for wire models: unknown keys ignored."""

    model_config = ConfigDict(extra="ignore")


class InlineDataWire(WireModel):
    mime_type: StrictStr = Field(alias="mimeType")
    data: StrictStr


class PartWire(WireModel):
    # Unknown part kinds are kept in model_extra
    model_config = ConfigDict(extra="allow")

    text: StrictStr | None = None
    inline_data: InlineDataWire | None = Field(default=None, alias="inlineData")


class ContentWire(WireModel):
    role: StrictStr | None = None
    parts: list[PartWire]


class SafetyRatingWire(WireModel):
    category: StrictStr
    probability: StrictStr
    blocked: StrictBool = False


class CitationWire(WireModel):
    start_index: StrictInt = Field(alias="startIndex")
    end_index: StrictInt = Field(alias="endIndex")
    uri: StrictStr
    license: StrictStr


# Secondary shape used only to classify content failures
STRING_MAP = TypeAdapter(dict[StrictStr, StrictStr])
