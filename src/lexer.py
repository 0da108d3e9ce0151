from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Any

from lark import Lark, Transformer, Token as LarkToken
from lark.exceptions import VisitError

from tokens_mc import (
    KEYWORDS,
    Token,
    Var,
    Mut,
    Print,
    Equals,
    Semicolon,
    OpenBrace,
    CloseBrace,
    Identifier,
    StringLiteral,
    IntLiteral,
)

logger = logging.getLogger(__name__)


# ---------------------------------------
# Config
# ---------------------------------------

# Integer literals are signed 32-bit values.
INT_MAX: int = 2**31 - 1

# Anything that is not whitespace or part of a token is STRAY and dropped,
# so lexing never fails on unknown characters.
GRAMMAR: str = r'''
start: (VAR | MUT | PRINT | IDENT | STRING | INT | EQUALS | SEMICOLON | LBRACE | RBRACE)*

VAR: "var"
MUT: "mut"
PRINT: "print"

IDENT: /[A-Za-z]+/
STRING: /"[^"]*"?/
INT: /[0-9]+/

EQUALS: "="
SEMICOLON: ";"
LBRACE: "{"
RBRACE: "}"

WS: /[ \t\r\n]+/
STRAY: /[^A-Za-z0-9"=;{} \t\r\n]/

%ignore WS
%ignore STRAY
'''


# ---------------------------------------
# Errors
# ---------------------------------------

class CompileError(Exception):
    """Base class for every error raised while translating a program."""
    pass


class LexError(CompileError):
    """Error detected while scanning source text"""
    pass


class MalformedIntegerError(LexError):
    """A digit run does not fit in a signed 32-bit integer."""

    def __init__(self, digits: str):
        self.digits = digits
        super().__init__(
            f"Integer literal '{digits}' does not fit in 32 bits (max {INT_MAX})"
        )


# ---------------------------------------
# CST -> tokens
# ---------------------------------------

class CST2Tokens(Transformer):
    """
    Turns the flat lark tree into our own token dataclasses.
    """

    def VAR(self, token: LarkToken) -> Token:
        return Var()

    def MUT(self, token: LarkToken) -> Token:
        return Mut()

    def PRINT(self, token: LarkToken) -> Token:
        return Print()

    def IDENT(self, token: LarkToken) -> Token:
        return Identifier(str(token))

    def STRING(self, token: LarkToken) -> Token:
        # Opening quote is always there, closing quote only if the
        # literal was terminated before end of input.
        body = str(token)[1:]
        if body.endswith('"'):
            body = body[:-1]
        return StringLiteral(body)

    def INT(self, token: LarkToken) -> Token:
        digits = str(token).lstrip("0") or "0"
        # length check first; int() refuses very long digit strings
        if len(digits) > len(str(INT_MAX)) or int(digits) > INT_MAX:
            raise MalformedIntegerError(str(token))
        return IntLiteral(int(digits))

    def EQUALS(self, token: LarkToken) -> Token:
        return Equals()

    def SEMICOLON(self, token: LarkToken) -> Token:
        return Semicolon()

    def LBRACE(self, token: LarkToken) -> Token:
        return OpenBrace()

    def RBRACE(self, token: LarkToken) -> Token:
        return CloseBrace()

    def start(self, children: List[Any]) -> List[Token]:
        tokens: List[Token] = []
        for c in children:
            if not isinstance(c, Token):
                raise TypeError(f"Expected Token, got {type(c).__name__}")
            tokens.append(c)
        return tokens


# ---------------------------------------
# Entrypoints
# ---------------------------------------

@lru_cache(maxsize=None)
def build_lexer() -> Lark:
    return Lark(GRAMMAR, parser="lalr", start="start", debug=False)


def lex(source: str) -> List[Token]:
    """
    Scan source text into tokens, left to right.

    Raises MalformedIntegerError if an integer literal overflows.
    """
    cst = build_lexer().parse(source)
    try:
        tokens = CST2Tokens().transform(cst)
    except VisitError as e:
        # lark wraps errors raised inside callbacks
        if isinstance(e.orig_exc, CompileError):
            raise e.orig_exc from None
        raise

    logger.debug("lexed %d token(s)", len(tokens))
    return tokens


def is_identifier(text: str) -> bool:
    """
    True if `text`, lexed on its own, is exactly one Identifier token
    spelling `text`: ASCII letters only, and not a reserved word.
    """
    if not text:
        return False
    if not all("a" <= ch <= "z" or "A" <= ch <= "Z" for ch in text):
        return False
    return text not in KEYWORDS
