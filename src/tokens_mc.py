from __future__ import annotations
from dataclasses import dataclass


# -----------------------------------------------
# Base token
# -----------------------------------------------

@dataclass(frozen=True)
class Token:
    pass


# -----------------------------------------------
# Keywords
# -----------------------------------------------

@dataclass(frozen=True)
class Var(Token):
    pass

@dataclass(frozen=True)
class Mut(Token):
    pass

@dataclass(frozen=True)
class Print(Token):
    pass


# -----------------------------------------------
# Punctuation
# -----------------------------------------------

@dataclass(frozen=True)
class Equals(Token):
    pass

@dataclass(frozen=True)
class Semicolon(Token):
    pass

@dataclass(frozen=True)
class OpenBrace(Token):
    pass

@dataclass(frozen=True)
class CloseBrace(Token):
    pass


# -----------------------------------------------
# Tokens with a payload
# -----------------------------------------------

@dataclass(frozen=True)
class Identifier(Token):
    name: str

@dataclass(frozen=True)
class StringLiteral(Token):
    contents: str

@dataclass(frozen=True)
class IntLiteral(Token):
    value: int


# Reserved words and the marker each one lexes to.
KEYWORDS = {
    "var": Var,
    "mut": Mut,
    "print": Print,
}
