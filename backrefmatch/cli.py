"""Command-line entry: report whether a pattern matches a whole text."""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import Sequence

from .production import match
from .regex import RegexError


def _memory_usage_mb(pid: int) -> float:
    """Resident set size of a process in megabytes, or 0 when it cannot be read."""
    status = Path(f"/proc/{pid}/status")
    try:
        lines = status.read_text().splitlines()
    except OSError:
        return 0.0
    for line in lines:
        if line.startswith("VmRSS:"):
            fields = line.split()
            if len(fields) >= 2 and fields[1].isdigit():
                return int(fields[1]) / 1024.0
            return 0.0
    return 0.0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="backrefmatch",
        description="Decide whether a pattern with back-references matches a whole text.",
    )
    parser.add_argument("pattern", help="the regular expression")
    parser.add_argument("text", help="the text to match")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Print 1 or 0 for the match, then the time taken in milliseconds and memory used in MB."""
    args = _build_parser().parse_args(argv)
    pid = os.getpid()
    initial_memory = _memory_usage_mb(pid)

    begin = time.process_time()
    try:
        result = match(args.pattern, args.text)
    except (RegexError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    elapsed_ms = (time.process_time() - begin) * 1000.0

    print(int(result))
    memory_usage = _memory_usage_mb(pid)
    print(f"{elapsed_ms:g} {memory_usage - initial_memory:g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())