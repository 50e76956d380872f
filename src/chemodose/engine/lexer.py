"""Tokenizer for dosage formulas.

Splits formula text into NUMBER, IDENT, operator and parenthesis tokens.
Whitespace is skipped. Anything else is a ParseError carrying the offending
character's position.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

from chemodose.engine.errors import ParseError


class TokenType(str, Enum):
    NUMBER = "NUMBER"
    IDENT = "IDENT"
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    COMMA = "COMMA"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """Token produced by the lexer."""

    type: TokenType
    value: str
    position: int


_SINGLE_CHAR = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
}

# Digits with optional fraction (or a bare leading-dot fraction), then an
# optional exponent.
_NUMBER_RE = re.compile(r"(?:\d+(?:\.\d+)?|\.\d+)(?:[eE][+-]?\d+)?")
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_WHITESPACE_RE = re.compile(r"\s+")


def tokenize(source: str) -> List[Token]:
    """Convert formula text into a token list terminated by EOF.

    Args:
        source: Formula text, e.g. ``"((4*weight)+7)/(weight+90)"``.

    Returns:
        List of tokens; the last one is always ``TokenType.EOF``.

    Raises:
        ParseError: On an unknown character or a malformed number such as
            ``1.`` or ``1.2.3``.
    """
    tokens: List[Token] = []
    pos = 0
    length = len(source)

    while pos < length:
        ws = _WHITESPACE_RE.match(source, pos)
        if ws:
            pos = ws.end()
            continue

        char = source[pos]

        if char.isdigit() or char == ".":
            match = _NUMBER_RE.match(source, pos)
            if not match:
                raise ParseError(f"Malformed number starting with '{char}'", pos)
            end = match.end()
            # A number running straight into another '.', a digit-led
            # identifier ("2weight") or a dangling exponent is malformed.
            if end < length and (source[end] == "." or _IDENT_RE.match(source, end)):
                raise ParseError(
                    f"Malformed number '{source[pos:end + 1]}'", pos
                )
            tokens.append(Token(TokenType.NUMBER, match.group(0), pos))
            pos = end
            continue

        ident = _IDENT_RE.match(source, pos)
        if ident:
            tokens.append(Token(TokenType.IDENT, ident.group(0), pos))
            pos = ident.end()
            continue

        token_type = _SINGLE_CHAR.get(char)
        if token_type is None:
            raise ParseError(f"Unexpected character '{char}'", pos)
        tokens.append(Token(token_type, char, pos))
        pos += 1

    tokens.append(Token(TokenType.EOF, "", length))
    return tokens
