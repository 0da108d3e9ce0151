from __future__ import annotations

import logging
import re
from typing import List

from ast_mc import (
    AST,
    Stmt,
    Value,
    StringValue,
    IntValue,
    VariableDeclaration,
    FunctionCall,
)
from lexer import is_identifier

logger = logging.getLogger(__name__)


# Each brace is its own delimiter.
_BRACES = re.compile(r"[{}]")


# -------------------------
# Values
# -------------------------

def js_value(value: Value) -> str:
    if isinstance(value, StringValue):
        # no escaping; source strings cannot contain quotes of their own
        return f"'{value.value}'"
    if isinstance(value, IntValue):
        return str(value.value)
    raise TypeError(f"Unknown value type: {type(value).__name__}")


def interpolate(text: str) -> str:
    """
    Rewrite `{name}` placeholders into JS template splices `${name}`.

    The text is split on `{` and `}`; every segment that is a bare
    identifier has its braced form replaced. Anything else, such as
    `{123}`, `{two words}` or `{}`, is left as written.

    Each distinct placeholder is rewritten once, so a repeated `{name}`
    becomes `${name}` everywhere and never `$${name}`.
    """
    out = text
    seen = set()
    for seg in _BRACES.split(text):
        if seg in seen or not is_identifier(seg):
            continue
        seen.add(seg)
        out = out.replace("{" + seg + "}", "${" + seg + "}")
        logger.debug("interpolating placeholder {%s}", seg)
    return out


# -------------------------
# Statements
# -------------------------

def generate_stmt(stmt: Stmt) -> List[str]:
    """Lines of JS for one statement (possibly none)."""
    if isinstance(stmt, VariableDeclaration):
        keyword = "let" if stmt.mutable else "const"
        return [f"{keyword} {stmt.name} = {js_value(stmt.value)}"]

    if isinstance(stmt, FunctionCall):
        if stmt.name != "print":
            logger.debug("no JS lowering for call to '%s'", stmt.name)
            return []
        lines: List[str] = []
        for arg in stmt.arguments:
            # only string arguments are printed
            if isinstance(arg, StringValue):
                lines.append(f"console.log(`{interpolate(arg.value)}`)")
        return lines

    raise NotImplementedError(f"Statement generation not implemented: {type(stmt)}")


def generate_js_program(ast: AST) -> str:
    out: List[str] = []
    for stmt in ast:
        out.extend(generate_stmt(stmt))
    return "".join(line + "\n" for line in out)


generate = generate_js_program
