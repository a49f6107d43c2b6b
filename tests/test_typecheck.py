"""
tests/test_typecheck.py — Tests for per-kind block validation

Covers value parsers, diagnostics for unusable values and the
validator registry.
"""

from __future__ import annotations

import pytest

from sil.dsl.models import Attribute, Block
from sil.dsl.parser import parse_text
from sil.slide.layers import Align, FontStyle, FontWeight
import sil.slide.typecheck as typecheck_module
from sil.slide.typecheck import (
    CheckedBlock,
    get_validator,
    has_validator,
    parse_align,
    parse_color,
    parse_font_size,
    parse_font_style,
    parse_font_weight,
    register_validator,
    typecheck,
    typecheck_block,
)


class TestValueParsers:
    def test_font_size_integer(self):
        assert parse_font_size("11") == 11.0

    def test_font_size_decimal(self):
        assert parse_font_size("13.5") == 13.5

    def test_font_size_bounds_inclusive(self):
        assert parse_font_size("1") == 1.0
        assert parse_font_size("4000") == 4000.0

    @pytest.mark.parametrize(
        "value", ["big", "1.2.3", "0", "-4", "0.5", "4000.5", "5000", "inf", "nan", ""]
    )
    def test_font_size_rejected(self, value):
        assert parse_font_size(value) is None

    def test_font_weight(self):
        assert parse_font_weight("Light") == FontWeight.LIGHT
        assert parse_font_weight("heavy") is None

    def test_align(self):
        assert parse_align(" right ") == Align.RIGHT
        assert parse_align("middle") is None

    def test_font_style(self):
        assert parse_font_style("monospace") == FontStyle.MONOSPACE

    def test_color_named(self):
        assert parse_color("red") == 0xFF0000

    def test_color_hex(self):
        assert parse_color("#1E2761") == 0x1E2761
        assert parse_color("1e2761") == 0x1E2761

    def test_color_numeric_token(self):
        assert parse_color("000000") == 0

    def test_color_rejected(self):
        assert parse_color("#12345") is None
        assert parse_color("mauve") is None


class TestTitleValidator:
    def test_valid_attributes(self):
        block = Block(
            kind="title",
            attributes=(
                Attribute("font_size ", "30"),
                Attribute("color ", "blue"),
                Attribute("font_weight ", "light"),
            ),
        )
        checked = typecheck_block(block)
        assert checked.values == {
            "font_size": 30.0,
            "color": 0x0000FF,
            "font_weight": FontWeight.LIGHT,
        }
        assert checked.diagnostics == []

    def test_bad_value_reported(self):
        checked = typecheck_block(Block(kind="title", attributes=(Attribute("font_size", "big"),)))
        assert "font_size" not in checked.values
        assert len(checked.diagnostics) == 1
        diag = checked.diagnostics[0]
        assert diag.attribute == "font_size"
        assert diag.value == "big"
        assert "from 1 to 4000" in diag.message

    def test_unknown_attribute_reported(self):
        checked = typecheck_block(Block(kind="title", attributes=(Attribute("shadow", "1"),)))
        assert checked.diagnostics[0].attribute == "shadow"
        assert "unknown attribute" in checked.diagnostics[0].message

    def test_unknown_attribute_ignored_when_disabled(self):
        block = Block(kind="title", attributes=(Attribute("shadow", "1"),))
        assert typecheck_block(block, report_unknown=False).diagnostics == []

    def test_later_duplicate_wins(self):
        block = Block(
            kind="title",
            attributes=(Attribute("font_size", "10"), Attribute("font_size", "20")),
        )
        assert typecheck_block(block).values["font_size"] == 20.0

    def test_warning_logged(self, caplog):
        with caplog.at_level("WARNING", logger="sil.slide.typecheck"):
            typecheck_block(Block(kind="title", attributes=(Attribute("font_size", "x"),)))
        assert "font_size" in caplog.text


class TestTextValidator:
    def test_color_not_allowed_on_text(self):
        checked = typecheck_block(Block(kind="text", attributes=(Attribute("color", "red"),)))
        assert checked.values == {}
        assert checked.diagnostics[0].attribute == "color"


class TestRegistry:
    def test_builtin_kinds(self):
        assert has_validator("title")
        assert has_validator("text")
        assert not has_validator("quote")

    def test_unregistered_kind_raises(self):
        with pytest.raises(ValueError):
            get_validator("quote")

    def test_register_validator(self, monkeypatch):
        monkeypatch.setattr(typecheck_module, "_VALIDATORS", dict(typecheck_module._VALIDATORS))

        def _check_quote(block, report_unknown=True):
            return CheckedBlock(block=block, values={"author": "someone"})

        register_validator("test_quote", _check_quote)
        checked = typecheck_block(Block(kind="test_quote"))
        assert checked.values == {"author": "someone"}

    def test_typecheck_skips_unregistered_kinds(self):
        doc = parse_text("[title]\nA\n[mystery]\nB\n[text]\nC")
        checked = typecheck(doc)
        assert [c.block.kind for c in checked] == ["title", "text"]
