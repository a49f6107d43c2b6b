"""
tests/test_skills.py — Tests for the skills wrappers
"""

from pathlib import Path

from skills.render_pptx import render
from skills.sil_compile import compile_file, compile_text

SAMPLE_PATH = Path(__file__).parent.parent / "docs" / "examples" / "sample.sil"


def test_compile_text():
    compiled = compile_text("[text]\nHi")
    assert compiled.layers[0].text == "Hi"


def test_compile_file():
    compiled = compile_file(str(SAMPLE_PATH))
    assert len(compiled.layers) == len(compiled.document) == 5


def test_render(tmp_path):
    path = render([compile_text("[title]\nA"), compile_text("[text]\nB")], str(tmp_path), title="x")
    assert path == tmp_path / "x.pptx"
    assert path.exists()
