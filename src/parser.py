from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Type, TypeVar

from lexer import CompileError
from tokens_mc import (
    Token,
    Var,
    Mut,
    Print,
    Equals,
    Semicolon,
    Identifier,
    StringLiteral,
    IntLiteral,
)
from ast_mc import (
    AST,
    Stmt,
    Value,
    StringValue,
    IntValue,
    VariableDeclaration,
    FunctionCall,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Token)


# -------------------------
# Parse errors
# -------------------------

class ParseError(CompileError):
    """Token sequence does not match the statement grammar"""
    pass


@dataclass
class UnexpectedTokenError(ParseError):
    """A token is present but is not the one the grammar requires."""
    expected: str
    found: Token

    def __str__(self) -> str:
        return f"Expected {self.expected}, found {self.found!r}"


@dataclass
class TruncatedInputError(ParseError):
    """Input ended while a token was still required."""
    expected: str

    def __str__(self) -> str:
        return f"Expected {self.expected}, found end of input"


# -------------------------
# Parser
# -------------------------

class Parser:
    """
    Forward-only cursor over a token sequence with one token of lookahead.

    Grammar:
        var [mut] IDENT = LITERAL ;
        print LITERAL [;]

    Parentheses never reach the parser (the lexer drops them), so the
    token right after `print` is the argument. Tokens that cannot start a
    statement are skipped.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tokens
        self.pos = 0

    def _peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _advance(self, expected: str) -> Token:
        tok = self._peek()
        if tok is None:
            raise TruncatedInputError(expected)
        self.pos += 1
        return tok

    def _expect(self, kind: Type[T], expected: str) -> T:
        tok = self._advance(expected)
        if not isinstance(tok, kind):
            raise UnexpectedTokenError(expected, tok)
        return tok

    def _match(self, kind: Type[Token]) -> Optional[Token]:
        if isinstance(self._peek(), kind):
            return self._advance(kind.__name__)
        return None

    def _literal(self, expected: str) -> Value:
        tok = self._advance(expected)
        if isinstance(tok, StringLiteral):
            return StringValue(tok.contents)
        if isinstance(tok, IntLiteral):
            return IntValue(tok.value)
        raise UnexpectedTokenError(expected, tok)

    # ---------------------------------------------------------
    # Statements
    # ---------------------------------------------------------

    def parse(self) -> AST:
        ast: List[Stmt] = []
        while self._peek() is not None:
            tok = self._advance("statement")
            if isinstance(tok, Var):
                ast.append(self._parse_declaration())
            elif isinstance(tok, Print):
                ast.append(self._parse_print())
            else:
                logger.debug("skipping %r at statement start", tok)

        logger.debug("parsed %d statement(s)", len(ast))
        return ast

    def _parse_declaration(self) -> VariableDeclaration:
        # `var` already consumed
        mutable = self._match(Mut) is not None
        name_tok = self._expect(Identifier, "identifier after 'var'")
        self._expect(Equals, f"'=' after '{name_tok.name}'")
        value = self._literal("string or integer literal after '='")
        self._expect(Semicolon, "';' after declaration")

        return VariableDeclaration(mutable=mutable, name=name_tok.name, value=value)

    def _parse_print(self) -> FunctionCall:
        # `print` already consumed
        argument = self._literal("string or integer literal after 'print'")
        self._match(Semicolon)

        return FunctionCall(name="print", arguments=[argument])


def parse(tokens: Sequence[Token]) -> AST:
    """Build the statement list for a token sequence."""
    return Parser(tokens).parse()
