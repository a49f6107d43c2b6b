"""
sil/services/pipeline.py — Compile pipeline and recompute trigger

    source text → lex → parse → resolve → layers

The whole pipeline runs synchronously on every change; nothing from a
previous run is reused. SlideRecompiler is the dirty check an editor
drives from its update loop: hand it the current buffer every frame and
it only recompiles when the text actually changed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sil.dsl.lexer import lex
from sil.dsl.models import ParsedDocument, Token
from sil.dsl.parser import SilParser
from sil.slide.layers import Layer
from sil.slide.resolver import LayerResolver

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for compiling and rendering sil documents."""

    # Typecheck
    report_unknown_attributes: bool = True

    # Rendering
    output_dir: str = "./output"
    show_garbage: bool = True
    deck_title: str = "Untitled Slides"


@dataclass
class CompiledSlide:
    """Everything one pipeline run produced."""

    source: str
    tokens: list[Token] = field(default_factory=list)
    document: Optional[ParsedDocument] = None
    layers: list[Layer] = field(default_factory=list)

    @property
    def diagnostic_count(self) -> int:
        """Garbage entries plus attribute diagnostics."""
        count = len(self.document.garbage) if self.document else 0
        for layer in self.layers:
            count += len(getattr(layer, "diagnostics", []))
        return count


def compile_source(source: str, config: Optional[PipelineConfig] = None) -> CompiledSlide:
    """Run the full pipeline over one sil document."""
    config = config or PipelineConfig()
    tokens = lex(source)
    document = SilParser().parse(tokens, source)
    layers = LayerResolver(config.report_unknown_attributes).resolve(document)
    return CompiledSlide(source=source, tokens=tokens, document=document, layers=layers)


class SlideRecompiler:
    """
    Recomputes layers whenever the text it is given changes.

    Usage:
        recompiler = SlideRecompiler()
        # every frame
        layers = recompiler.update(editor.content)
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        self._content: Optional[str] = None
        self._compiled: Optional[CompiledSlide] = None
        self.run_count = 0

    @property
    def content(self) -> Optional[str]:
        """The text the current layers were compiled from."""
        return self._content

    @property
    def compiled(self) -> Optional[CompiledSlide]:
        return self._compiled

    @property
    def layers(self) -> list[Layer]:
        return self._compiled.layers if self._compiled else []

    def is_dirty(self, content: str) -> bool:
        return content != self._content

    def update(self, content: str) -> list[Layer]:
        """Return layers for `content`, recompiling only if it changed."""
        if self.is_dirty(content):
            self._compiled = compile_source(content, self.config)
            self._content = content
            self.run_count += 1
            logger.debug(
                "Recompiled slide (run %d): %d layers",
                self.run_count,
                len(self._compiled.layers),
            )
        return self.layers
