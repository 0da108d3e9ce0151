from __future__ import annotations

import argparse
import logging
from pathlib import Path
from pprint import pprint
import subprocess
import sys
from typing import List, Optional

# Frontend
from lexer import lex, CompileError
from parser import parse

# Backend
from typewriter import generate_js_program

from config_mc import MCConfig, load_config

logger = logging.getLogger(__name__)


# ---------------------------------------
# Driver errors
# ---------------------------------------

class ReadFailure(RuntimeError):
    """Source file is missing or unreadable"""
    pass


class WriteFailure(RuntimeError):
    """Generated file could not be written"""
    pass


class LaunchFailure(RuntimeError):
    """Runtime executable could not be started"""
    pass


# ---------------------------------------
# Utilities
# ---------------------------------------

def load_source(path: str) -> str:
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadFailure(f"cannot read source file '{path}': {e}") from e


def write_output(path: str, code: str) -> None:
    try:
        Path(path).write_text(code, encoding="utf-8")
    except OSError as e:
        raise WriteFailure(f"cannot write output file '{path}': {e}") from e


def run_script(path: str, runtime: str = "node") -> int:
    """
    Runs the generated script and returns its exit code.
    Output goes straight to the terminal.
    """
    try:
        result = subprocess.run([runtime, str(Path(path))])
    except OSError as e:
        raise LaunchFailure(f"cannot launch '{runtime}': {e}") from e

    return result.returncode


# ---------------------------------------
# Pipeline
# ---------------------------------------

def compile_source(source: str) -> str:
    """Translate mc source text into JavaScript source text."""
    tokens = lex(source)
    ast = parse(tokens)
    return generate_js_program(ast)


def build(config: MCConfig) -> str:
    # 1. Load source
    src = load_source(config.source)
    if config.verbose:
        print("=== Source ===")
        print(src, "\n")

    # 2. Lexer
    tokens = lex(src)
    if config.verbose:
        print("=== Tokens ===")
        pprint(tokens)

    # 3. Parser
    ast = parse(tokens)
    if config.verbose:
        print("=== AST ===")
        pprint(ast)

    # 4. AST -> JavaScript
    js_code = generate_js_program(ast)
    if config.verbose:
        print("=== JavaScript ===")
        print(js_code)

    write_output(config.output, js_code)
    logger.info("wrote %s", config.output)

    # 5. Run it
    if config.run:
        exit_code = run_script(config.output, config.runtime)
        logger.info("program exited with code %d", exit_code)

    return js_code


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="mcjs",
        description="Compile an mc program to JavaScript and run it.",
    )
    ap.add_argument("source", nargs="?", help="mc source file (default: index.mc)")
    ap.add_argument("-o", "--output", help="JavaScript output path (default: index.js)")
    ap.add_argument("--runtime", help="executable used to run the output (default: node)")
    ap.add_argument("--no-run", action="store_false", dest="run", default=None,
                    help="only write the JavaScript file")
    ap.add_argument("--config", help="config file (default: nearest .mcrc.json)")
    ap.add_argument("-v", "--verbose", action="store_true", default=None,
                    help="dump every stage and log debug output")
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config).merged(
        source=args.source,
        output=args.output,
        runtime=args.runtime,
        run=args.run,
        verbose=args.verbose,
    )
    if config.verbose:
        # verbose may come from the config file
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        build(config)
    except CompileError as e:
        print("Compile error:", e, file=sys.stderr)
        sys.exit(1)
    except (ReadFailure, WriteFailure, LaunchFailure) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
