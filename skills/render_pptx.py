"""
skills/render_pptx.py — Render compiled sil slides to .pptx.

Wraps sil.renderer.pptx_renderer.render.
"""

from pathlib import Path
from typing import Sequence

from sil.renderer.pptx_renderer import render as _render
from sil.services.pipeline import CompiledSlide


def render(
    slides: Sequence[CompiledSlide],
    output_dir: str,
    title: str = "Untitled Slides",
    show_garbage: bool = True,
) -> Path:
    """Render compiled slides to a .pptx file, one slide each.

    Args:
        slides: Compiled sil documents, in deck order.
        output_dir: Directory to write the output file.
        title: Deck title, used for the file name.
        show_garbage: Whether unparsable input is drawn as error text.

    Returns:
        Path to the generated .pptx file.
    """
    return _render(
        slides=[slide.layers for slide in slides],
        output_dir=Path(output_dir),
        title=title,
        show_garbage=show_garbage,
    )
