"""
sil/dsl/lexer.py — sil Lexer

Turns sil text into a flat list of Tokens. Never fails: at worst the
last token runs to the end of the input (an unterminated quote, or a
text run with no closing punctuation).
"""

from __future__ import annotations

import logging

from .models import PUNCTUATION, Token, TokenKind

logger = logging.getLogger(__name__)

# Characters skipped between tokens
_SKIPPED = {" ", "\n"}

# Characters that end a text run
_TEXT_TERMINATORS = {"=", ":", "[", "]"}

_DIGITS = set("0123456789")
_NUMBER_CHARS = _DIGITS | {"."}


def lex(source: str) -> list[Token]:
    """Lex a full sil document into tokens, in source order."""
    tokens: list[Token] = []
    pos = 0
    length = len(source)

    while pos < length:
        c = source[pos]

        if c in _DIGITS:
            end = _lex_number(source, pos)
            tokens.append(Token(TokenKind.NUMBER, source[pos:end], pos, end))
            pos = end

        elif c in _SKIPPED:
            pos += 1

        elif c == '"':
            end = _lex_quoted(source, pos)
            tokens.append(Token(TokenKind.QUOTED, remove_quotes(source[pos:end]), pos, end))
            pos = end

        elif c in PUNCTUATION:
            tokens.append(Token(PUNCTUATION[c], c, pos, pos + 1))
            pos += 1

        else:
            end = _lex_text(source, pos)
            text = strip_trailing_newlines(source[pos:end])
            tokens.append(Token(TokenKind.TEXT, text, pos, pos + len(text)))
            pos = end

    logger.debug("Lexed %d characters into %d tokens", length, len(tokens))
    return tokens


# ── Scanners ───────────────────────────────────────────────────────
# Each returns the end index (exclusive) of the lexeme starting at `start`.


def _lex_number(source: str, start: int) -> int:
    end = start
    while end < len(source) and source[end] in _NUMBER_CHARS:
        end += 1
    return end


def _lex_quoted(source: str, start: int) -> int:
    # FIXME: no escape handling, a quote always closes the value
    closing = source.find('"', start + 1)
    if closing == -1:
        return len(source)
    return closing + 1


def _lex_text(source: str, start: int) -> int:
    end = start
    while end < len(source) and source[end] not in _TEXT_TERMINATORS:
        end += 1
    return end


# ── Text helpers ───────────────────────────────────────────────────


def remove_quotes(quoted: str) -> str:
    """Strip the opening quote and, when present, the closing one."""
    if len(quoted) < 2:
        return ""
    if quoted.endswith('"'):
        return quoted[1:-1]
    return quoted[1:]


def strip_trailing_newlines(text: str) -> str:
    return text.rstrip("\n")


def clean_up_key(name: str) -> str:
    """`font_size ` -> `font_size`. Text runs keep the space before `=` or `]`."""
    return name.rstrip(" ")
