"""
sil/slide/layers.py — Pydantic layer models

A layer is one typed, styled unit of slide content derived from one
parsed entry. The resolver produces them, the renderer reads them.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

# ── Enums ──────────────────────────────────────────────────────────


class FontWeight(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    BOLD = "bold"


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class FontStyle(str, Enum):
    NORMAL = "normal"
    MONOSPACE = "monospace"


# ── Defaults ───────────────────────────────────────────────────────

TITLE_FONT_SIZE = 24.0
TEXT_FONT_SIZE = 16.0

# Point sizes a slide font can take (DrawingML ST_TextFontSize)
MIN_FONT_SIZE = 1.0
MAX_FONT_SIZE = 4000.0
BLACK = 0x00000000


class Diagnostic(BaseModel):
    """A problem with an otherwise usable block, e.g. a bad attribute value."""

    attribute: str
    value: str = ""
    message: str


# ── Layers ─────────────────────────────────────────────────────────


class TitleLayer(BaseModel):
    type: Literal["title"] = "title"
    text: str = ""
    font_size: float = TITLE_FONT_SIZE
    font_weight: FontWeight = FontWeight.BOLD
    color: int = BLACK  # 0xRRGGBB
    align: Align = Align.CENTER
    font_style: FontStyle = FontStyle.NORMAL
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class TextLayer(BaseModel):
    type: Literal["text"] = "text"
    text: str = ""
    font_size: float = TEXT_FONT_SIZE
    font_weight: FontWeight = FontWeight.MEDIUM
    align: Align = Align.CENTER
    font_style: FontStyle = FontStyle.NORMAL
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class AttributeValue(BaseModel):
    name: str
    value: str


class GarbageNodeLayer(BaseModel):
    """A well-formed block of a kind nothing knows how to style."""

    type: Literal["garbage_node"] = "garbage_node"
    kind: str
    attributes: list[AttributeValue] = Field(default_factory=list)
    body: str = ""


class GarbageLayer(BaseModel):
    """Input that did not parse. Rendered as flagged text."""

    type: Literal["garbage"] = "garbage"
    text: str
    message: str


Layer = Union[TitleLayer, TextLayer, GarbageNodeLayer, GarbageLayer]


class SlideLayers(BaseModel):
    """Ordered layers for one slide; mostly for JSON dumps."""

    layers: list[Annotated[Layer, Field(discriminator="type")]] = Field(default_factory=list)
