from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Union


# -----------------------------------------------
# Base nodes
# -----------------------------------------------

@dataclass
class ASTNode:
    pass


# -----------------------------------------------
# Values
# -----------------------------------------------

@dataclass
class StringValue(ASTNode):
    value: str

@dataclass
class IntValue(ASTNode):
    value: int


Value = Union[StringValue, IntValue]


# -----------------------------------------------
# Statements
# -----------------------------------------------

@dataclass
class Stmt(ASTNode):
    pass

@dataclass
class VariableDeclaration(Stmt):
    mutable: bool
    name: str
    value: Value

@dataclass
class FunctionCall(Stmt):
    name: str
    arguments: List[Value] = field(default_factory=list)


# -----------------------------------------------
# Program root
# -----------------------------------------------

# Statements in source order; also the order they are emitted in.
AST = List[Stmt]
