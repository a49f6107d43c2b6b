"""
skills/sil_compile.py — Compile sil text or files into layers.

Wraps sil.services.pipeline.compile_source.
"""

from pathlib import Path
from typing import Optional

from sil.services.pipeline import CompiledSlide, PipelineConfig, compile_source


def compile_text(sil_text: str, config: Optional[PipelineConfig] = None) -> CompiledSlide:
    """Compile raw sil text into tokens, parsed document and layers."""
    return compile_source(sil_text, config)


def compile_file(path: str, config: Optional[PipelineConfig] = None) -> CompiledSlide:
    """Compile a .sil file."""
    return compile_source(Path(path).read_text(encoding="utf-8"), config)
