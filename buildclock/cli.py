"""Command line entry point: begin, end, and report build timings."""

from __future__ import annotations

import re
import sys

from .report import csv_report, format_duration, stats_report
from .timingfile import (
    TimingFileError,
    begin_timing,
    current_clock,
    end_timing,
    read_entries,
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def usage() -> str:
    """Usage text listing the accepted command forms."""
    return (
        "CTime v1.0\n"
        "Usage:\n"
        "  buildclock -begin <timing file>\n"
        "  buildclock -end <timing file> [error level]\n"
        "  buildclock -stats <timing file>\n"
        "  buildclock -csv <timing file>\n"
    )


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def main(argv=None) -> int:
    """Run one command; return the process exit status."""
    entry_clock = current_clock()
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) not in (2, 3):
        sys.stderr.write(usage())
        return 1

    mode, path = args[0], args[1]
    try:
        if mode == "-begin":
            begin_timing(path, clock=entry_clock)
        elif mode == "-end":
            error_level = _leading_int(args[2]) if len(args) == 3 else None
            entry = end_timing(path, clock=entry_clock, error_level=error_level)
            sys.stdout.write(f"CTIME: {format_duration(entry.milliseconds)} ({path})\n")
        elif mode == "-stats":
            sys.stdout.write(stats_report(read_entries(path), path))
        elif mode == "-csv":
            sys.stdout.write(csv_report(read_entries(path), path))
        else:
            read_entries(path)
            raise TimingFileError(f'Unrecognized command "{mode}".')
    except TimingFileError as exc:
        sys.stderr.write(f"ERROR: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())