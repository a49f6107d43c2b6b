"""
sil/dsl/models.py — Data models for the sil slide language

Tokens, parsed entries and the parsed document. Tokens and entries do
not hold references into each other: every piece of source they stand
for is addressed by a [start, end) character span into the source
buffer, and the text they carry is an owned copy of that span.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union


# ── Tokens ─────────────────────────────────────────────────────────


class TokenKind(str, Enum):
    NUMBER = "number"
    TEXT = "text"
    QUOTED = "quoted"
    OPEN_BRACKET = "open_bracket"
    CLOSE_BRACKET = "close_bracket"
    COLON = "colon"
    EQUAL_SIGN = "equal_sign"


PUNCTUATION = {
    "[": TokenKind.OPEN_BRACKET,
    "]": TokenKind.CLOSE_BRACKET,
    ":": TokenKind.COLON,
    "=": TokenKind.EQUAL_SIGN,
}


@dataclass(frozen=True)
class Token:
    """A single lexed token.

    `text` is what the token means (quotes stripped for QUOTED, trailing
    newlines stripped for TEXT). `start`/`end` locate the raw lexeme in
    the source it came from.
    """

    kind: TokenKind
    text: str
    start: int = 0
    end: int = 0

    def raw_text(self, source: str) -> str:
        return source[self.start : self.end]


# ── Parsed entries ─────────────────────────────────────────────────


@dataclass(frozen=True)
class Attribute:
    """`name = value` directly after a block header."""

    name: str
    value: str
    value_kind: TokenKind = TokenKind.QUOTED


@dataclass(frozen=True)
class Block:
    """A `[kind] attributes body` construct."""

    kind: str
    attributes: tuple[Attribute, ...] = ()
    body: str = ""
    start: int = 0
    end: int = 0


@dataclass(frozen=True)
class Garbage:
    """Input that could not be parsed, plus why."""

    text: str
    message: str
    tokens: tuple[Token, ...] = ()
    start: int = 0
    end: int = 0


Entry = Union[Block, Garbage]


# ── Parsed document ────────────────────────────────────────────────


class ParsedDocument:
    """Finished, ordered sequence of entries. Built by DocumentBuilder."""

    def __init__(self, entries: list[Entry], attributes: list[Attribute]):
        self._entries = tuple(entries)
        self._attributes = tuple(attributes)

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    @property
    def blocks(self) -> list[Block]:
        return [e for e in self._entries if isinstance(e, Block)]

    @property
    def garbage(self) -> list[Garbage]:
        return [e for e in self._entries if isinstance(e, Garbage)]

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        """Every attribute of every block, in the order they were parsed."""
        return self._attributes

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedDocument):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"ParsedDocument(entries={list(self._entries)!r})"


class _Reserved:
    def __repr__(self) -> str:
        return "<reserved>"


RESERVED = _Reserved()


@dataclass
class DocumentBuilder:
    """
    Two-phase builder for a ParsedDocument.

    Phase one hands out slot indices in encounter order (`reserve`) while
    attributes accumulate in shared storage; phase two writes each slot
    exactly once (`fill`). `finish` refuses to produce a document that
    still has a placeholder in it.
    """

    slots: list = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)

    def reserve(self) -> int:
        self.slots.append(RESERVED)
        return len(self.slots) - 1

    def fill(self, slot: int, entry: Entry) -> None:
        if self.slots[slot] is not RESERVED:
            raise RuntimeError(f"Slot {slot} already filled with {self.slots[slot]!r}")
        self.slots[slot] = entry

    def push(self, entry: Entry) -> int:
        slot = self.reserve()
        self.fill(slot, entry)
        return slot

    def add_attribute(self, attribute: Attribute) -> int:
        self.attributes.append(attribute)
        return len(self.attributes) - 1

    def attribute_range(self, start: int, end: int) -> tuple[Attribute, ...]:
        return tuple(self.attributes[start:end])

    def finish(self) -> ParsedDocument:
        unfilled = [i for i, s in enumerate(self.slots) if s is RESERVED]
        if unfilled:
            raise RuntimeError(f"Parsed document has unfilled slots: {unfilled}")
        return ParsedDocument(list(self.slots), list(self.attributes))
