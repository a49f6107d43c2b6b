"""
tests/test_resolver.py — Tests for parsed document → layer resolution
"""

from __future__ import annotations

from pathlib import Path

import pytest

from sil.dsl.lexer import lex
from sil.dsl.models import Attribute, Block, DocumentBuilder, Garbage
from sil.dsl.parser import parse, parse_text
from sil.slide.layers import (
    Align,
    FontWeight,
    GarbageLayer,
    GarbageNodeLayer,
    TextLayer,
    TitleLayer,
)
import sil.slide.resolver as resolver_module
from sil.slide.resolver import LayerResolver, register_resolver, resolve

SAMPLE_PATH = Path(__file__).parent.parent / "docs" / "examples" / "sample.sil"


def _document(*entries):
    builder = DocumentBuilder()
    for entry in entries:
        builder.push(entry)
    return builder.finish()


class TestTitle:
    def test_simple_title(self):
        layers = resolve(_document(Block(kind="title", body="Foobar")))
        assert layers == [
            TitleLayer(text="Foobar", font_size=24, font_weight=FontWeight.BOLD, color=0x00000000)
        ]

    def test_from_source(self):
        source = "[title]\nFoobar"
        layers = resolve(parse(lex(source), source))
        assert layers[0] == TitleLayer(text="Foobar")

    def test_font_size_override(self):
        layers = resolve(parse_text("[title]\nfont_size = 11\nFoobar"))
        assert isinstance(layers[0], TitleLayer)
        assert layers[0].font_size == 11
        assert layers[0].text == "Foobar"
        assert layers[0].diagnostics == []

    def test_bad_font_size_keeps_default_with_diagnostic(self):
        layers = resolve(parse_text('[title]\nfont_size = "big"\nFoobar'))
        assert layers[0].font_size == 24
        assert [d.attribute for d in layers[0].diagnostics] == ["font_size"]

    def test_color(self):
        layers = resolve(parse_text('[title]\ncolor = "#FF8800"\nHi'))
        assert layers[0].color == 0xFF8800


class TestText:
    def test_defaults(self):
        layers = resolve(_document(Block(kind="text", body="body")))
        assert layers == [TextLayer(text="body", font_size=16, font_weight=FontWeight.MEDIUM)]

    def test_attributes(self):
        layers = resolve(parse_text('[text]\nfont_size = 20\nalign = "left"\nHello'))
        assert layers[0].font_size == 20
        assert layers[0].align == Align.LEFT


class TestPassThrough:
    def test_unknown_kind_becomes_garbage_node(self):
        block = Block(kind="quote", attributes=(Attribute("author ", "Ada"),), body="Hi")
        layers = resolve(_document(block))
        assert layers == [
            GarbageNodeLayer(
                kind="quote",
                attributes=[{"name": "author ", "value": "Ada"}],
                body="Hi",
            )
        ]

    def test_garbage_entry(self):
        layers = resolve(_document(Garbage(text="hello ", message="unexpected text")))
        assert layers == [GarbageLayer(text="hello ", message="unexpected text")]


class TestOrdering:
    @pytest.mark.parametrize(
        "source",
        [
            "",
            "hello [title] world",
            "[title]\nfont_size = big\nFoo",
            '[42] x [text] y [quote] z "open',
            "] ] [title",
        ],
    )
    def test_one_layer_per_entry(self, source):
        doc = parse_text(source)
        layers = resolve(doc)
        assert len(layers) == len(doc)
        for entry, layer in zip(doc, layers):
            if isinstance(entry, Garbage):
                assert isinstance(layer, GarbageLayer)
            else:
                assert not isinstance(layer, GarbageLayer)

    def test_stray_text_before_title(self):
        layers = resolve(parse_text("hello [title] world"))
        assert isinstance(layers[0], GarbageLayer)
        assert isinstance(layers[1], TitleLayer)
        assert layers[1].text == "world"

    def test_sample(self):
        layers = resolve(parse_text(SAMPLE_PATH.read_text(encoding="utf-8")))
        assert [layer.type for layer in layers] == [
            "garbage",
            "title",
            "text",
            "garbage_node",
            "text",
        ]
        assert layers[1].font_size == 32
        assert layers[1].color == 0x1E2761
        assert layers[4].font_size == 16
        assert len(layers[4].diagnostics) == 1


class TestLayerResolver:
    def test_register_kind(self):
        resolver = LayerResolver()
        resolver.register("quote", lambda block, report_unknown: TextLayer(text=f"“{block.body}”"))
        layers = resolver.resolve(parse_text("[quote]\nSimple"))
        assert layers == [TextLayer(text="“Simple”")]
        assert "quote" in resolver.kinds()

    def test_register_is_per_instance(self):
        LayerResolver().register("quote", lambda block, report_unknown: TextLayer())
        layers = resolve(parse_text("[quote]\nSimple"))
        assert isinstance(layers[0], GarbageNodeLayer)

    def test_unknown_attributes_can_be_silenced(self):
        doc = parse_text("[text]\nshadow = 2\nHi")
        assert resolve(doc)[0].diagnostics
        assert LayerResolver(report_unknown_attributes=False).resolve(doc)[0].diagnostics == []


class TestRegisterResolver:
    def test_applies_to_new_resolvers(self, monkeypatch):
        monkeypatch.setattr(resolver_module, "_RESOLVERS", dict(resolver_module._RESOLVERS))
        register_resolver("banner", lambda block, report_unknown: TitleLayer(text=block.body))
        layers = resolve(parse_text("[banner]\nBig"))
        assert layers == [TitleLayer(text="Big")]

    def test_registration_does_not_leak(self):
        layers = resolve(parse_text("[banner]\nBig"))
        assert isinstance(layers[0], GarbageNodeLayer)
