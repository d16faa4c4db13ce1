# logger_utils.py - run log for the CLI: timestamped lines to a file, optional colored echo, timing metrics

import os
import sys
import time
from datetime import datetime
from typing import Optional, TextIO

# Default log location, created on first write
LOG_DIR = "logs"
DEFAULT_LOG_PATH = os.path.join(LOG_DIR, "bracket_index.log")


class Log:
    """Lightweight logger for writing run messages and timing metrics."""
    COLORS = {
        "DEBUG": "\033[90m",   # gray
        "INFO": "\033[94m",    # blue
        "WARNING": "\033[93m", # yellow
        "ERROR": "\033[91m",   # red
        "RESET": "\033[0m",
    }

    def __init__(self, path: Optional[str] = None, use_color: bool = True,
                 echo: bool = False, stream: Optional[TextIO] = None):
        # path=None means console only
        self.path = path
        self.use_color = use_color
        self.echo = echo
        # stdout carries query results, so the echo goes to stderr
        self.stream = stream
        self.metrics = None

    def write(self, level: str, msg: str):
        """
        Append a log message with a timestamp.
        Each entry is written as: [YYYY-MM-DD HH:MM:SS] LEVEL   | message
        """
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{ts}] {level:<7} | {msg}"

        if self.path:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")

        if self.echo:
            out = self.stream or sys.stderr
            if self.use_color and level in self.COLORS:
                out.write(f"{self.COLORS[level]}{line}{self.COLORS['RESET']}\n")
            else:
                out.write(line + "\n")

    # Public logging methods
    def debug(self, msg: str):
        self.write("DEBUG", msg)

    def info(self, msg: str):
        self.write("INFO", msg)

    def warning(self, msg: str):
        self.write("WARNING", msg)

    def error(self, msg: str):
        self.write("ERROR", msg)

    def metric(self, tag, value, unit=""):
        """
        Record a metric (timing, counts).
        Logged at INFO, and added to the attached Metrics tracker if any.
        Example: [12:45:02] INFO    | build: 0.123s
        """
        self.info(f"{tag}: {value}{unit}")
        if self.metrics is not None:
            self.metrics.record(tag, value)

    def time_block(self, label):
        """
        Helper for measuring execution time of a code block.
        To use:
            with log.time_block("build_time"):
                do_some_work()
        It records how long the block took under `label`.
        """
        return _Timer(self, label)


class _Timer:
    """Context manager used internally to measure time for a code block."""
    def __init__(self, log: Log, label):
        self.log = log
        self.label = label
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        """Record the duration as a metric, unless the block raised."""
        self.elapsed = time.perf_counter() - self.start
        if exc_type is None:
            self.log.metric(self.label, round(self.elapsed, 6), "s")
