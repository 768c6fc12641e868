"""Command-line front end: a line-oriented REPL over a FileSystem."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence, TextIO

from .filesystem import FileSystem
from .tree import DEFAULT_SEPARATOR

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 10
EXIT_VERB = "EXIT"
PARENT_VERSION = -1
COMMANDS = (
    "CREATE",
    "READ",
    "INSERT",
    "UPDATE",
    "SNAPSHOT",
    "ROLLBACK",
    "HISTORY",
    "RECENT_FILES",
    "BIGGEST_TREES",
    EXIT_VERB,
)


class CommandProcessor:
    """Maps whitespace-tokenized commands onto ``FileSystem`` calls.

    ``execute()`` returns the lines to show the user; it never prints.
    """

    def __init__(self, fs: FileSystem | None = None) -> None:
        self.fs = fs if fs is not None else FileSystem()
        self._handlers: dict[str, Callable[[list[str]], list[str]]] = {
            "CREATE": self._create,
            "READ": self._read,
            "INSERT": self._insert,
            "UPDATE": self._update,
            "SNAPSHOT": self._snapshot,
            "ROLLBACK": self._rollback,
            "HISTORY": self._history,
            "RECENT_FILES": self._recent_files,
            "BIGGEST_TREES": self._biggest_trees,
        }

    def execute(self, line: str) -> list[str]:
        tokens = line.split()
        if not tokens:
            return []
        verb = tokens[0].upper()
        if verb == EXIT_VERB:
            # Handled by the REPL loop; nothing to report.
            return []
        handler = self._handlers.get(verb)
        if handler is None:
            return [
                f"Unknown command: {verb}",
                "Available commands: " + ", ".join(COMMANDS),
            ]
        logger.debug("dispatch %s %s", verb, tokens[1:])
        return handler(tokens)

    # -- Handlers --

    def _create(self, tokens: list[str]) -> list[str]:
        if len(tokens) < 2:
            return ["Usage: CREATE <filename>"]
        name = tokens[1]
        if self.fs.create(name):
            return [f"File '{name}' created successfully."]
        return [f"Failed to create file '{name}'."]

    def _read(self, tokens: list[str]) -> list[str]:
        if len(tokens) < 2:
            return ["Usage: READ <filename>"]
        content = self.fs.read(tokens[1])
        if content is None:
            return [f"File not found: {tokens[1]}"]
        return [content]

    def _insert(self, tokens: list[str]) -> list[str]:
        if len(tokens) < 3:
            return ["Usage: INSERT <filename> <content>"]
        if self.fs.insert(tokens[1], " ".join(tokens[2:])):
            return ["Content inserted successfully."]
        return ["Failed to insert content."]

    def _update(self, tokens: list[str]) -> list[str]:
        if len(tokens) < 3:
            return ["Usage: UPDATE <filename> <content>"]
        if self.fs.update(tokens[1], " ".join(tokens[2:])):
            return ["Content updated successfully."]
        return ["Failed to update content."]

    def _snapshot(self, tokens: list[str]) -> list[str]:
        if len(tokens) < 3:
            return ["Usage: SNAPSHOT <filename> <message>"]
        outcome = self.fs.snapshot(tokens[1], " ".join(tokens[2:]))
        if outcome:
            return ["Snapshot created successfully."]
        logger.debug("snapshot of %s failed: %s", tokens[1], outcome.reason)
        return ["Failed to create snapshot."]

    def _rollback(self, tokens: list[str]) -> list[str]:
        if len(tokens) < 2:
            return ["Usage: ROLLBACK <filename> [version_id]"]
        version_id = None
        if len(tokens) >= 3:
            try:
                version_id = int(tokens[2])
            except ValueError:
                return [f"Invalid version id: {tokens[2]}"]
            if version_id == PARENT_VERSION:
                version_id = None
        outcome = self.fs.rollback(tokens[1], version_id)
        if outcome:
            return ["Rollback successful."]
        logger.debug("rollback of %s failed: %s", tokens[1], outcome.reason)
        return ["Rollback failed."]

    def _history(self, tokens: list[str]) -> list[str]:
        if len(tokens) < 2:
            return ["Usage: HISTORY <filename>"]
        entries = self.fs.history(tokens[1])
        if entries is None:
            return [f"Failed to get history for {tokens[1]}"]
        return [str(entry) for entry in entries]

    def _recent_files(self, tokens: list[str]) -> list[str]:
        k = self._count(tokens)
        if k is None:
            return [f"Invalid count: {tokens[1]}"]
        return [str(f) for f in self.fs.recent_files(k)]

    def _biggest_trees(self, tokens: list[str]) -> list[str]:
        k = self._count(tokens)
        if k is None:
            return [f"Invalid count: {tokens[1]}"]
        return [str(t) for t in self.fs.biggest_trees(k)]

    @staticmethod
    def _count(tokens: list[str]) -> int | None:
        if len(tokens) < 2:
            return DEFAULT_TOP_K
        try:
            return int(tokens[1])
        except ValueError:
            return None


def run(processor: CommandProcessor, stdin: TextIO, stdout: TextIO) -> None:
    """Read commands until EOF or EXIT, writing results to ``stdout``."""
    stdout.write("Time-travelling file system initialized. Type EXIT to quit.\n")
    while True:
        stdout.write("> ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            break
        line = line.strip()
        if line.upper() == EXIT_VERB:
            break
        for out in processor.execute(line):
            stdout.write(out + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tvfs", description="Time-travelling in-memory file store"
    )
    parser.add_argument(
        "--separator",
        default=DEFAULT_SEPARATOR,
        help="Text placed between existing content and inserted text",
    )
    parser.add_argument(
        "--log-level", default="WARNING", help="Logging level (default: WARNING)"
    )
    return parser


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the interactive front end.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    _setup_logging(args.log_level)
    processor = CommandProcessor(FileSystem(separator=args.separator))
    run(processor, sys.stdin, sys.stdout)
    return 0
