"""
cli.py - command line front end for the bracket index
Features:
- Reads the source filename (argument, or first token on stdin)
- Builds the index once, then answers prefix queries until the sentinel
- JSON config with command line overrides
- Optional run log file and metrics table (stderr only, stdout carries results)
"""

import argparse
import logging
import sys
from typing import Iterable, Iterator, List, Optional, TextIO

from rich.console import Console
from rich.markup import escape

from bracket_index.core.errors import FileAccessError
from bracket_index.core.indexer import BracketIndex
from bracket_index.utils.config_manager import Config
from bracket_index.utils.logger_utils import Log
from bracket_index.utils.metrics_tracker import Metrics


def read_tokens(stream: TextIO) -> Iterator[str]:
    """Whitespace separated tokens, across lines, as they arrive."""
    for line in stream:
        yield from line.split()


class CLI:
    """Build-then-query session over one source file."""

    def __init__(self, cfg: Config, stdin: Optional[TextIO] = None,
                 console: Optional[Console] = None, err_console: Optional[Console] = None,
                 log: Optional[Log] = None, echo: bool = False):
        self.cfg = cfg
        self.stdin = stdin if stdin is not None else sys.stdin
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.err_console = err_console or Console(stderr=True, highlight=False)
        self.metrics = Metrics()
        self.log = log or Log(
            path=cfg.get("log_path") if cfg.get("log_to_file") else None,
            use_color=cfg.get("use_color"),
            echo=echo,
        )
        self.log.metrics = self.metrics
        self.index: Optional[BracketIndex] = None

    def run(self, filename: Optional[str] = None) -> int:
        """
        Whole session. Returns the process exit status:
        0 on success, 1 when the file can't be read or no filename was given.
        """
        tokens = read_tokens(self.stdin)
        if filename is None:
            filename = next(tokens, None)
            if filename is None:
                self.err_console.print("[red]error:[/red] no input file given")
                self.log.error("no input file given")
                return 1

        try:
            with self.log.time_block("build_time"):
                self.index = BracketIndex.from_file(filename, encoding=self.cfg.get("encoding"))
        except (FileAccessError, LookupError) as e:
            self.err_console.print(f"[red]error:[/red] {escape(str(e))}")
            self.log.error(str(e))
            return 1

        st = self.index.stats()
        self.log.info(f"{filename}: {st['records']} tokens, {st['entries']} entries, {st['lines']} lines")

        self.answer(tokens)

        if self.cfg.get("show_stats"):
            self.err_console.print(self.metrics.table())
        return 0

    def answer(self, tokens: Iterable[str]) -> int:
        """Print the result of every query up to the sentinel. Returns the number answered."""
        n = 0
        with self.log.time_block("query_time"):
            for res in self.index.query_all(tokens, sentinel=self.cfg.get("sentinel")):
                for line in res.lines():
                    self.console.print(line, markup=False)
                n += 1
        self.metrics.record("queries", n)
        return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bracket-index",
        description="Index [bracketed] tokens of a text file and answer prefix queries read from stdin.",
    )
    p.add_argument("file", nargs="?", help="source file (default: first token read from stdin)")
    p.add_argument("--config", default="bracket_index.json", help="JSON config file")
    p.add_argument("--encoding", help="source file encoding")
    p.add_argument("--sentinel", help="query that ends the session")
    p.add_argument("--log-file", help="append the run log to this file")
    p.add_argument("--stats", action="store_true", help="print timing metrics to stderr")
    p.add_argument("--verbose", "-v", action="store_true", help="debug logging to stderr")
    p.add_argument("--set", action="append", default=[], metavar="KEY=VALUE",
                   help="store an option in the config file and continue")
    p.add_argument("--show-config", action="store_true", help="print the effective config and exit")
    return p


def apply_overrides(cfg: Config, args: argparse.Namespace) -> None:
    """Command line flags win over the config file (not saved)."""
    if args.encoding:
        cfg.data["encoding"] = args.encoding
    if args.sentinel:
        cfg.data["sentinel"] = args.sentinel
    if args.log_file:
        cfg.data["log_path"] = args.log_file
        cfg.data["log_to_file"] = True
    if args.stats:
        cfg.data["show_stats"] = True


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = Config(args.config)
    for item in args.set:
        key, sep, val = item.partition("=")
        if not sep:
            print(f"bad --set {item!r}, expected KEY=VALUE", file=sys.stderr)
            return 2
        try:
            cfg.set(key, val)
        except (KeyError, ValueError) as e:
            print(f"bad --set {item!r}: {e}", file=sys.stderr)
            return 2
    apply_overrides(cfg, args)

    if args.show_config:
        cfg.show()
        return 0

    return CLI(cfg, echo=args.verbose).run(args.file)


if __name__ == "__main__":
    sys.exit(main())
