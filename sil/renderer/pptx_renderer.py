"""
sil/renderer/pptx_renderer.py -- PPTX Rendering Engine

Draws layer sequences into a .pptx deck using python-pptx, one slide
per sil document. Layers are stacked top-down in the order they were
resolved; this module decides geometry only, content and styling come
from the layers.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import PP_ALIGN
from pptx.util import Inches, Pt

from sil.slide.layers import (
    Align,
    FontStyle,
    FontWeight,
    GarbageLayer,
    GarbageNodeLayer,
    Layer,
    TextLayer,
    TitleLayer,
)

logger = logging.getLogger(__name__)

# ── Geometry Constants (inches, 16:9) ─────────────────────────────

SLIDE_WIDTH = Inches(13.333)
SLIDE_HEIGHT = Inches(7.5)

MARGIN_TOP = 0.6
MARGIN_LEFT = 0.7
MARGIN_RIGHT = 0.7

CONTENT_WIDTH = 13.333 - MARGIN_LEFT - MARGIN_RIGHT  # 11.933

ELEMENT_GAP = 0.2
LINE_SPACING = 1.3  # line height as a multiple of font size

FONT_PLAIN = 14  # GarbageNode / Garbage text
MONOSPACE_FONT = "Courier New"

ERROR_COLOR = RGBColor(0xC0, 0x1C, 0x28)
PLAIN_COLOR = RGBColor(0x44, 0x44, 0x44)

_ALIGNMENTS = {
    Align.LEFT: PP_ALIGN.LEFT,
    Align.CENTER: PP_ALIGN.CENTER,
    Align.RIGHT: PP_ALIGN.RIGHT,
}


# ── Helpers ───────────────────────────────────────────────────────


def to_rgb(color: int) -> RGBColor:
    """0xRRGGBB → RGBColor."""
    return RGBColor((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)


def _text_height(text: str, font_size: float) -> float:
    """Rough box height in inches for `text` at `font_size` points."""
    lines = max(1, text.count("\n") + 1)
    return lines * font_size * LINE_SPACING / 72


def _add_textbox(
    slide,
    top: float,
    text: str,
    font_size: float = FONT_PLAIN,
    bold: bool = False,
    italic: bool = False,
    color: Optional[RGBColor] = None,
    alignment: PP_ALIGN = PP_ALIGN.CENTER,
    font_name: Optional[str] = None,
) -> object:
    """Add a full-width textbox at `top` and return the shape."""
    txBox = slide.shapes.add_textbox(
        Inches(MARGIN_LEFT),
        Inches(top),
        Inches(CONTENT_WIDTH),
        Inches(_text_height(text, font_size)),
    )
    tf = txBox.text_frame
    tf.word_wrap = True

    p = tf.paragraphs[0]
    p.text = text
    p.font.size = Pt(font_size)
    p.font.bold = bold
    p.font.italic = italic
    p.alignment = alignment
    if color:
        p.font.color.rgb = color
    if font_name:
        p.font.name = font_name
    return txBox


# ── Per-Layer Renderers ───────────────────────────────────────────
# Each draws one layer at `top` and returns the height it used.


def _render_title(slide, layer: TitleLayer, top: float) -> float:
    _add_textbox(
        slide,
        top,
        layer.text,
        font_size=layer.font_size,
        bold=layer.font_weight == FontWeight.BOLD,
        color=to_rgb(layer.color),
        alignment=_ALIGNMENTS[layer.align],
        font_name=MONOSPACE_FONT if layer.font_style == FontStyle.MONOSPACE else None,
    )
    return _text_height(layer.text, layer.font_size)


def _render_text(slide, layer: TextLayer, top: float) -> float:
    _add_textbox(
        slide,
        top,
        layer.text,
        font_size=layer.font_size,
        bold=layer.font_weight == FontWeight.BOLD,
        alignment=_ALIGNMENTS[layer.align],
        font_name=MONOSPACE_FONT if layer.font_style == FontStyle.MONOSPACE else None,
    )
    return _text_height(layer.text, layer.font_size)


def _render_garbage_node(slide, layer: GarbageNodeLayer, top: float) -> float:
    """Unrecognized block: body as written, no styling."""
    _add_textbox(slide, top, layer.body, color=PLAIN_COLOR)
    return _text_height(layer.body, FONT_PLAIN)


def _render_garbage(slide, layer: GarbageLayer, top: float) -> float:
    text = f"{layer.message}: {layer.text}"
    _add_textbox(slide, top, text, italic=True, color=ERROR_COLOR, alignment=PP_ALIGN.LEFT)
    return _text_height(text, FONT_PLAIN)


_RENDERERS = {
    "title": _render_title,
    "text": _render_text,
    "garbage_node": _render_garbage_node,
    "garbage": _render_garbage,
}


# ── Public API ────────────────────────────────────────────────────


def render_slide(prs, layers: Sequence[Layer], show_garbage: bool = True):
    """Append one blank slide to `prs` and draw `layers` on it."""
    slide = prs.slides.add_slide(prs.slide_layouts[6])  # blank layout

    top = MARGIN_TOP
    for layer in layers:
        if isinstance(layer, GarbageLayer) and not show_garbage:
            continue
        renderer_fn = _RENDERERS[layer.type]
        top += renderer_fn(slide, layer, top) + ELEMENT_GAP

    return slide


def render(
    slides: Sequence[Sequence[Layer]],
    output_dir: Path,
    title: str = "Untitled Slides",
    show_garbage: bool = True,
) -> Path:
    """Render layer sequences to a .pptx file.

    Args:
        slides: One layer sequence per slide, in deck order.
        output_dir: Directory to write output file.
        title: Deck title, used for the file name.
        show_garbage: Draw Garbage layers (error text) when True.

    Returns:
        Path to the generated .pptx file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    prs = Presentation()
    prs.slide_width = SLIDE_WIDTH
    prs.slide_height = SLIDE_HEIGHT

    for layers in slides:
        render_slide(prs, layers, show_garbage=show_garbage)

    safe_title = "".join(c if c.isalnum() or c in " -_" else "_" for c in title).strip()[:80]
    output_path = output_dir / f"{safe_title or 'slides'}.pptx"
    prs.save(str(output_path))

    logger.info("Rendered %d slides to %s", len(slides), output_path)
    return output_path
