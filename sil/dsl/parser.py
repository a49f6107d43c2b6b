"""
sil/dsl/parser.py — sil Parser

Turns a token list into a ParsedDocument in a single forward pass.
Recovering: anything that is not a well-formed block becomes a Garbage
entry at the position it was found, and parsing carries on.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .lexer import clean_up_key, lex
from .models import (
    Attribute,
    Block,
    DocumentBuilder,
    Garbage,
    ParsedDocument,
    Token,
    TokenKind,
)

logger = logging.getLogger(__name__)

# Diagnostic for a token found where a block header was expected
_UNEXPECTED = {
    TokenKind.NUMBER: "unexpected number",
    TokenKind.TEXT: "unexpected text",
    TokenKind.QUOTED: "unexpected quoted",
    TokenKind.CLOSE_BRACKET: "unexpected close bracket",
    TokenKind.COLON: "unexpected colon",
    TokenKind.EQUAL_SIGN: "unexpected equal sign",
}

_HEADER = (TokenKind.OPEN_BRACKET, TokenKind.TEXT, TokenKind.CLOSE_BRACKET)
_ATTRIBUTE_START = (TokenKind.TEXT, TokenKind.EQUAL_SIGN)
_ATTRIBUTE_VALUES = {TokenKind.QUOTED, TokenKind.NUMBER}


def _matches(tokens: Sequence[Token], pos: int, kinds: tuple[TokenKind, ...]) -> bool:
    if pos + len(kinds) > len(tokens):
        return False
    return all(tokens[pos + k].kind == kind for k, kind in enumerate(kinds))


def _next_header(tokens: Sequence[Token], pos: int) -> int:
    """Index of the next `[ Text ]` at or after pos, or len(tokens)."""
    while pos < len(tokens):
        if _matches(tokens, pos, _HEADER):
            return pos
        pos += 1
    return len(tokens)


class SilParser:
    """Parses sil tokens → ParsedDocument."""

    def parse_text(self, source: str) -> ParsedDocument:
        """Lex and parse a full sil document."""
        return self.parse(lex(source), source)

    def parse(self, tokens: Sequence[Token], source: Optional[str] = None) -> ParsedDocument:
        """
        Parse tokens into an ordered ParsedDocument.

        Args:
            tokens: Output of `lex`.
            source: The text the tokens were lexed from. Bodies and garbage
                text are cut from it so original spacing survives. When
                omitted (hand-built token lists) token texts are joined.

        Returns:
            ParsedDocument with one entry per block or garbage run.
        """
        builder = DocumentBuilder()
        pos = 0

        while pos < len(tokens):
            token = tokens[pos]
            if token.kind == TokenKind.OPEN_BRACKET:
                slot = builder.reserve()
                pos = self._parse_block(tokens, pos, builder, slot, source)
            else:
                self._push_garbage(builder, tokens[pos : pos + 1], _UNEXPECTED[token.kind], source)
                pos += 1

        document = builder.finish()
        logger.debug(
            "Parsed %d tokens into %d blocks and %d garbage entries",
            len(tokens),
            len(document.blocks),
            len(document.garbage),
        )
        return document

    # ── Blocks ─────────────────────────────────────────────────────

    def _parse_block(
        self,
        tokens: Sequence[Token],
        pos: int,
        builder: DocumentBuilder,
        slot: int,
        source: Optional[str],
    ) -> int:
        """Parse the block starting at tokens[pos] into `slot`. Returns the next position."""
        if len(tokens) - pos < 3:
            builder.fill(slot, self._garbage(tokens[pos:], "too few tokens", source))
            return len(tokens)

        if not _matches(tokens, pos, _HEADER):
            # No recovery inside a broken header: the rest of the input goes
            builder.fill(slot, self._garbage(tokens[pos:], "unexpected tokens", source))
            return len(tokens)

        kind = clean_up_key(tokens[pos + 1].text)
        cursor = pos + 3

        attributes_start = len(builder.attributes)
        cursor = self._parse_attributes(tokens, cursor, builder, source)
        attributes = builder.attribute_range(attributes_start, len(builder.attributes))

        body_end = _next_header(tokens, cursor)
        body = _span_text(tokens[cursor:body_end], source)

        builder.fill(
            slot,
            Block(
                kind=kind,
                attributes=attributes,
                body=body,
                start=tokens[pos].start,
                end=tokens[body_end - 1].end,
            ),
        )
        return body_end

    def _parse_attributes(
        self,
        tokens: Sequence[Token],
        pos: int,
        builder: DocumentBuilder,
        source: Optional[str],
    ) -> int:
        while _matches(tokens, pos, _ATTRIBUTE_START):
            if pos + 2 < len(tokens) and tokens[pos + 2].kind in _ATTRIBUTE_VALUES:
                value = tokens[pos + 2]
                builder.add_attribute(
                    Attribute(name=tokens[pos].text, value=value.text, value_kind=value.kind)
                )
                pos += 3
            else:
                # Dangling `name =`: drop the name, the rest falls through to the body
                self._push_garbage(builder, tokens[pos : pos + 1], "not an attribute", source)
                pos += 1
        return pos

    # ── Garbage ────────────────────────────────────────────────────

    def _garbage(
        self, tokens: Sequence[Token], message: str, source: Optional[str]
    ) -> Garbage:
        garbage = Garbage(
            text=_span_text(tokens, source),
            message=message,
            tokens=tuple(tokens),
            start=tokens[0].start if tokens else 0,
            end=tokens[-1].end if tokens else 0,
        )
        logger.debug("Garbage at %d-%d: %s %r", garbage.start, garbage.end, message, garbage.text)
        return garbage

    def _push_garbage(
        self,
        builder: DocumentBuilder,
        tokens: Sequence[Token],
        message: str,
        source: Optional[str],
    ) -> None:
        builder.push(self._garbage(tokens, message, source))


def _span_text(tokens: Sequence[Token], source: Optional[str]) -> str:
    """Source text covered by a run of consecutive tokens."""
    if not tokens:
        return ""
    if source is None:
        return "".join(t.text for t in tokens)
    return source[tokens[0].start : tokens[-1].end]


_parser = SilParser()


def parse(tokens: Sequence[Token], source: Optional[str] = None) -> ParsedDocument:
    """Parse tokens with the default parser."""
    return _parser.parse(tokens, source)


def parse_text(source: str) -> ParsedDocument:
    """Lex and parse sil text with the default parser."""
    return _parser.parse_text(source)
