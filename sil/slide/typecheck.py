"""
sil/slide/typecheck.py — Per-kind block validation.

A registry maps a block kind tag to a validator. A validator reads the
block's attributes, converts the values it knows, and reports the ones
it cannot use as Diagnostics instead of dropping them silently.

Blocks of kinds with no validator never come through here; the layer
resolver passes them through as GarbageNode layers.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from sil.dsl.lexer import clean_up_key
from sil.dsl.models import Block, ParsedDocument
from sil.slide.layers import (
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    Align,
    Diagnostic,
    FontStyle,
    FontWeight,
)

logger = logging.getLogger(__name__)


@dataclass
class CheckedBlock:
    """A block plus its converted attribute values and any diagnostics."""

    block: Block
    values: dict[str, Any] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)


Validator = Callable[[Block, bool], CheckedBlock]


# ── Value parsers ──────────────────────────────────────────────────
# Each returns None when the value is unusable.


def parse_font_size(value: str) -> Optional[float]:
    try:
        size = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(size) or not MIN_FONT_SIZE <= size <= MAX_FONT_SIZE:
        return None
    return size


def _enum_parser(enum_cls):
    def _parse(value: str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            return None

    return _parse


parse_font_weight = _enum_parser(FontWeight)
parse_align = _enum_parser(Align)
parse_font_style = _enum_parser(FontStyle)

NAMED_COLORS = {
    "black": 0x000000,
    "white": 0xFFFFFF,
    "red": 0xFF0000,
    "green": 0x00FF00,
    "blue": 0x0000FF,
}

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


def parse_color(value: str) -> Optional[int]:
    """`"red"`, `"#1E2761"` or `"1E2761"` -> 0xRRGGBB."""
    value = value.strip()
    if value.lower() in NAMED_COLORS:
        return NAMED_COLORS[value.lower()]
    match = _HEX_COLOR.match(value)
    if not match:
        return None
    return int(match.group(1), 16)


_EXPECTED = {
    "font_size": f"a number from {MIN_FONT_SIZE:g} to {MAX_FONT_SIZE:g}",
    "font_weight": "one of light, medium, bold",
    "align": "one of left, center, right",
    "font_style": "one of normal, monospace",
    "color": "a named color or 6-digit hex",
}

_TEXT_ATTRIBUTES = {
    "font_size": parse_font_size,
    "font_weight": parse_font_weight,
    "align": parse_align,
    "font_style": parse_font_style,
}

_TITLE_ATTRIBUTES = {**_TEXT_ATTRIBUTES, "color": parse_color}


def check_attributes(
    block: Block,
    parsers: dict[str, Callable[[str], Any]],
    report_unknown: bool = True,
) -> CheckedBlock:
    """Convert a block's attributes with `parsers`; later duplicates win."""
    checked = CheckedBlock(block=block)

    for attr in block.attributes:
        name = clean_up_key(attr.name)
        parser = parsers.get(name)
        if parser is None:
            if report_unknown:
                checked.diagnostics.append(
                    Diagnostic(
                        attribute=name,
                        value=attr.value,
                        message=f"unknown attribute for [{block.kind}]",
                    )
                )
            continue

        value = parser(attr.value)
        if value is None:
            checked.diagnostics.append(
                Diagnostic(
                    attribute=name,
                    value=attr.value,
                    message=f"expected {_EXPECTED.get(name, 'a valid value')}, using default",
                )
            )
            continue
        checked.values[name] = value

    for diag in checked.diagnostics:
        logger.warning("[%s] %s = %r: %s", block.kind, diag.attribute, diag.value, diag.message)
    return checked


# ── Per-kind validators ────────────────────────────────────────────


def typecheck_title(block: Block, report_unknown: bool = True) -> CheckedBlock:
    return check_attributes(block, _TITLE_ATTRIBUTES, report_unknown)


def typecheck_text(block: Block, report_unknown: bool = True) -> CheckedBlock:
    return check_attributes(block, _TEXT_ATTRIBUTES, report_unknown)


_VALIDATORS: dict[str, Validator] = {
    "title": typecheck_title,
    "text": typecheck_text,
}


def register_validator(kind: str, validator: Validator) -> None:
    """Register (or replace) the validator for a block kind."""
    _VALIDATORS[kind] = validator


def has_validator(kind: str) -> bool:
    return kind in _VALIDATORS


def get_validator(kind: str) -> Validator:
    """Get the validator for a block kind."""
    try:
        return _VALIDATORS[kind]
    except KeyError:
        raise ValueError(f"No validator registered for block kind: {kind}") from None


def typecheck_block(block: Block, report_unknown: bool = True) -> CheckedBlock:
    return get_validator(block.kind)(block, report_unknown)


def typecheck(document: ParsedDocument, report_unknown: bool = True) -> list[CheckedBlock]:
    """Check every block whose kind has a validator, in document order."""
    return [
        typecheck_block(block, report_unknown)
        for block in document.blocks
        if has_validator(block.kind)
    ]
