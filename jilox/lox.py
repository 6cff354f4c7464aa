"""Command-line driver: runs a script file or an interactive prompt.

Usage:
    jilox [script] [--log-level LEVEL]

With a script the expression it contains is evaluated once and the process
exits with a non-zero status on error. Without one an interactive prompt is
started that reports errors and keeps accepting input.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from jilox.config import Settings, load_settings
from jilox.errors import LoxError, ParseError
from jilox.expr import LoxValue, format_number, print_ast
from jilox.interpreter import Interpreter
from jilox.parser import parse
from jilox.scanner import scan

logger = logging.getLogger(__name__)

# sysexits.h codes, as used by other Lox implementations.
EXIT_OK = 0
EXIT_DATAERR = 65
EXIT_NOINPUT = 66
EXIT_SOFTWARE = 70

_HELP_TEXT = (
    "jilox prompt help:\n"
    "Enter an expression to evaluate it.\n"
    "  1 + 2 * 3          -> 7\n"
    "  \"foo\" + \"bar\"      -> foobar\n"
    "  !(1 < 2)           -> false\n"
    "Commands:\n"
    "  :help              show this help\n"
    "  :tokens <expr>     show the tokens of an expression\n"
    "  :ast <expr>        show the parsed tree of an expression\n"
    "  :quit, :exit       leave the prompt\n"
)


def stringify(value: LoxValue) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return value


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class Lox:
    """Runs jilox source through the scan → parse → evaluate pipeline."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.interpreter = Interpreter()

    def run(self, source: str) -> LoxValue:
        tokens = scan(source)
        expr = parse(tokens)
        return self.interpreter.evaluate(expr)

    def run_file(self, path: str) -> int:
        """Evaluate the expression in ``path``; returns the process exit status."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                source = f.read()
        except OSError as e:
            logger.error("Could not read %s: %s", path, e)
            print(f"Could not read {path}: {e}", file=sys.stderr)
            return EXIT_NOINPUT

        logger.info("Running %s", path)
        try:
            value = self.run(source)
        except ParseError as e:
            print(e, file=sys.stderr)
            return EXIT_DATAERR
        except LoxError as e:
            print(e, file=sys.stderr)
            return EXIT_SOFTWARE
        print(stringify(value))
        return EXIT_OK

    # -- Prompt --

    def _run_command(self, cmd: str, arg: str) -> str:
        """Execute a ':' command. Raises EOFError for quit/exit."""
        if cmd in ("quit", "exit"):
            raise EOFError()
        if cmd == "help":
            return _HELP_TEXT
        if cmd == "tokens":
            return "\n".join(str(tok) for tok in scan(arg))
        if cmd == "ast":
            return print_ast(parse(scan(arg)))
        return f"Unknown command: {cmd}. Use :help for available commands."

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate one prompt line (a command or an expression). Returns (ok, output)."""
        text = line.strip()
        try:
            if text.startswith(":"):
                parts = text[1:].split(None, 1)
                if not parts:
                    return False, "No command specified. Use :help for available commands."
                cmd = parts[0].lower()
                arg = parts[1] if len(parts) > 1 else ""
                return True, self._run_command(cmd, arg)
            return True, stringify(self.run(text))
        except LoxError as e:
            logger.info("Prompt input failed: %s", e)
            return False, str(e)

    def run_prompt(self) -> int:
        session: PromptSession = PromptSession(history=FileHistory(self.settings.history_file))
        print("jilox prompt. Type :help for help, Ctrl-D or :quit to leave.")
        while True:
            try:
                line = session.prompt(self.settings.prompt)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            if not line.strip():
                continue
            try:
                ok, out = self.evaluate_line(line)
            except EOFError:
                break
            print(out, file=sys.stdout if ok else sys.stderr)
        return EXIT_OK


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jilox", description="Evaluate jilox expressions.")
    parser.add_argument("script", nargs="?", help="File holding an expression to evaluate. Omit for a prompt.")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: $JILOX_LOG_LEVEL or WARNING).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.log_level or settings.log_level)

    lox = Lox(settings)
    if args.script:
        return lox.run_file(args.script)
    return lox.run_prompt()


if __name__ == "__main__":
    sys.exit(main())
