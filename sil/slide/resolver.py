"""
sil/slide/resolver.py — Parsed document → layers

One layer per parsed entry, in the same order. Blocks are dispatched on
their kind tag through a registry; kinds nobody registered come out as
GarbageNode layers so authors can still see them.
"""

from __future__ import annotations

import logging
from typing import Callable

from sil.dsl.models import Block, Entry, Garbage, ParsedDocument
from sil.slide.layers import (
    AttributeValue,
    GarbageLayer,
    GarbageNodeLayer,
    Layer,
    TextLayer,
    TitleLayer,
)
from sil.slide.typecheck import typecheck_block

logger = logging.getLogger(__name__)

BlockResolver = Callable[[Block, bool], Layer]


# ── Per-kind resolvers ─────────────────────────────────────────────


def resolve_title(block: Block, report_unknown: bool = True) -> TitleLayer:
    checked = typecheck_block(block, report_unknown)
    return TitleLayer(text=block.body, diagnostics=checked.diagnostics, **checked.values)


def resolve_text(block: Block, report_unknown: bool = True) -> TextLayer:
    checked = typecheck_block(block, report_unknown)
    return TextLayer(text=block.body, diagnostics=checked.diagnostics, **checked.values)


def resolve_garbage_node(block: Block, report_unknown: bool = True) -> GarbageNodeLayer:
    """Fallback for unrecognized kinds: the block as written, unstyled."""
    return GarbageNodeLayer(
        kind=block.kind,
        attributes=[AttributeValue(name=a.name, value=a.value) for a in block.attributes],
        body=block.body,
    )


def resolve_garbage(garbage: Garbage) -> GarbageLayer:
    return GarbageLayer(text=garbage.text, message=garbage.message)


_RESOLVERS: dict[str, BlockResolver] = {
    "title": resolve_title,
    "text": resolve_text,
}


def register_resolver(kind: str, resolver: BlockResolver) -> None:
    """Register a resolver for every LayerResolver created afterwards."""
    _RESOLVERS[kind] = resolver


# ── Resolver ───────────────────────────────────────────────────────


class LayerResolver:
    """
    Maps a ParsedDocument to an ordered list of layers.

    Usage:
        resolver = LayerResolver()
        resolver.register("quote", resolve_quote)
        layers = resolver.resolve(parse_text(source))
    """

    def __init__(self, report_unknown_attributes: bool = True):
        self.report_unknown_attributes = report_unknown_attributes
        self._resolvers = dict(_RESOLVERS)

    def register(self, kind: str, resolver: BlockResolver) -> None:
        self._resolvers[kind] = resolver

    def kinds(self) -> list[str]:
        return sorted(self._resolvers)

    def resolve_entry(self, entry: Entry) -> Layer:
        if isinstance(entry, Garbage):
            return resolve_garbage(entry)
        resolver_fn = self._resolvers.get(entry.kind, resolve_garbage_node)
        return resolver_fn(entry, self.report_unknown_attributes)

    def resolve(self, document: ParsedDocument) -> list[Layer]:
        layers = [self.resolve_entry(entry) for entry in document]
        logger.debug(
            "Resolved %d layers (%d garbage)",
            len(layers),
            sum(1 for layer in layers if isinstance(layer, (GarbageLayer, GarbageNodeLayer))),
        )
        return layers


def resolve(document: ParsedDocument) -> list[Layer]:
    """Resolve a parsed document with the registered resolvers."""
    return LayerResolver().resolve(document)
