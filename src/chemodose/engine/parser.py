"""Recursive-descent parser for dosage formulas.

Grammar (lowest to highest precedence):

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary)*
    unary      := ("-" | "+") unary | primary
    primary    := NUMBER
                | IDENT
                | IDENT "(" expression ")"
                | "(" expression ")"

The grammar is closed: formula text is never handed to ``eval`` or any
other host-language evaluator, because formulas can arrive from imported
backup files.
"""

from __future__ import annotations

from typing import List, Optional

from chemodose.engine.ast_nodes import BinaryOp, Call, Expr, Number, UnaryOp, Variable
from chemodose.engine.errors import ParseError
from chemodose.engine.lexer import Token, TokenType, tokenize

# Built-in functions and their arity.
FUNCTIONS = {"ceil": 1}

# Parentheses, calls and unary signs nest; deeper input is rejected.
MAX_NESTING = 100

RESERVED_NAMES = frozenset(FUNCTIONS)


class Parser:
    """Parser over a token list produced by ``tokenize``."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _peek(self) -> TokenType:
        return self._current().type

    def _advance(self) -> Token:
        tok = self._current()
        if tok.type != TokenType.EOF:
            self.pos += 1
        return tok

    def _match(self, *types: TokenType) -> Optional[Token]:
        if self._peek() in types:
            return self._advance()
        return None

    def _expect(self, tt: TokenType, what: str) -> Token:
        tok = self._current()
        if tok.type != tt:
            raise ParseError(f"Expected {what}, got {_describe(tok)}", tok.position)
        return self._advance()

    # -------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------

    def parse(self) -> Expr:
        if self._peek() == TokenType.EOF:
            raise ParseError("Empty formula", 0)
        tree = self._parse_expression()
        tok = self._current()
        if tok.type == TokenType.RPAREN:
            raise ParseError("Unbalanced ')'", tok.position)
        if tok.type != TokenType.EOF:
            raise ParseError(f"Unexpected {_describe(tok)}", tok.position)
        return tree

    # -------------------------------------------------------------------
    # Precedence levels
    # -------------------------------------------------------------------

    def _parse_expression(self) -> Expr:
        left = self._parse_term()
        while True:
            tok = self._match(TokenType.PLUS, TokenType.MINUS)
            if tok is None:
                return left
            left = BinaryOp(tok.value, left, self._parse_term())

    def _parse_term(self) -> Expr:
        left = self._parse_unary()
        while True:
            tok = self._match(TokenType.STAR, TokenType.SLASH)
            if tok is None:
                return left
            left = BinaryOp(tok.value, left, self._parse_unary())

    def _parse_unary(self) -> Expr:
        # Every nested construct re-enters here, so this bounds recursion.
        self.depth += 1
        try:
            if self.depth > MAX_NESTING:
                raise ParseError(
                    f"Formula nested deeper than {MAX_NESTING} levels",
                    self._current().position,
                )
            tok = self._match(TokenType.MINUS, TokenType.PLUS)
            if tok is not None:
                return UnaryOp(tok.value, self._parse_unary())
            return self._parse_primary()
        finally:
            self.depth -= 1

    def _parse_primary(self) -> Expr:
        tok = self._current()

        if tok.type == TokenType.NUMBER:
            self._advance()
            return Number(float(tok.value))

        if tok.type == TokenType.IDENT:
            self._advance()
            if self._peek() == TokenType.LPAREN:
                return self._parse_call(tok)
            if tok.value in RESERVED_NAMES:
                raise ParseError(
                    f"Function '{tok.value}' must be called with parentheses",
                    tok.position,
                )
            return Variable(tok.value, tok.position)

        if tok.type == TokenType.LPAREN:
            self._advance()
            inner = self._parse_expression()
            if self._peek() != TokenType.RPAREN:
                raise ParseError(
                    f"Unbalanced '(': expected ')', got {_describe(self._current())}",
                    tok.position,
                )
            self._advance()
            return inner

        if tok.type == TokenType.RPAREN:
            raise ParseError("Unbalanced ')'", tok.position)
        raise ParseError(f"Expected a number, name or '(', got {_describe(tok)}", tok.position)

    def _parse_call(self, name_tok: Token) -> Expr:
        name = name_tok.value
        if name not in FUNCTIONS:
            raise ParseError(f"Unknown function '{name}'", name_tok.position)

        open_tok = self._expect(TokenType.LPAREN, "'('")
        if self._peek() == TokenType.RPAREN:
            raise ParseError(f"{name}() takes exactly 1 argument, got 0", open_tok.position)
        arg = self._parse_expression()
        if self._peek() == TokenType.COMMA:
            raise ParseError(
                f"{name}() takes exactly 1 argument", self._current().position
            )
        if self._peek() != TokenType.RPAREN:
            raise ParseError(
                f"Unbalanced '(' in call to {name}(): expected ')', got {_describe(self._current())}",
                open_tok.position,
            )
        self._advance()
        return Call(name, arg)


def _describe(tok: Token) -> str:
    if tok.type == TokenType.EOF:
        return "end of formula"
    return f"'{tok.value}'"


def parse(source: str) -> Expr:
    """Parse formula text into a syntax tree.

    Args:
        source: Formula text.

    Returns:
        Root node of the syntax tree.

    Raises:
        ParseError: If the text is not a valid formula.
    """
    if not isinstance(source, str):
        raise ParseError(f"Formula must be text, got {type(source).__name__}", 0)
    return Parser(tokenize(source)).parse()
