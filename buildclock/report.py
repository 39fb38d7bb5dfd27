"""Text reports over recorded build timings: CSV listing, statistics and graphs."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable, Sequence

from .timingfile import TimingEntry

GRAPH_HEIGHT = 10
GRAPH_WIDTH = 30
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_MS_PER_SECOND = 1000.0
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
_MS_PER_DAY = 24 * _MS_PER_HOUR
_MS_PER_WEEK = 7 * _MS_PER_DAY
_TIME_PARTS = (
    ("week", _MS_PER_WEEK),
    ("day", _MS_PER_DAY),
    ("hour", _MS_PER_HOUR),
    ("minute", _MS_PER_MINUTE),
)
_SECONDS_PER_DAY = 60 * 60 * 24


@dataclass
class StatGroup:
    """Running count, extremes and total of a set of build durations."""

    count: int = 0
    slowest_ms: int = 0
    fastest_ms: int = 0xFFFFFFFF
    total_ms: float = 0.0

    def add(self, milliseconds: int) -> None:
        self.slowest_ms = max(self.slowest_ms, milliseconds)
        self.fastest_ms = min(self.fastest_ms, milliseconds)
        self.total_ms += float(milliseconds)
        self.count += 1

    def average(self) -> int:
        """Mean duration in whole milliseconds, or 0 for an empty group."""
        if self.count < 1:
            return 0
        return int(self.total_ms / self.count)


def format_duration(milliseconds: float) -> str:
    """Spell a duration as weeks, days, hours and minutes followed by seconds."""
    remaining = float(milliseconds)
    parts = []
    for name, ms_per in _TIME_PARTS:
        whole = float(int(remaining / ms_per))
        if whole > 0:
            parts.append(f"{int(whole)} {name}{'s' if whole != 1 else ''}, ")
        remaining -= whole * ms_per
    parts.append(f"{remaining / 1000.0:.3f} seconds")
    return "".join(parts)


def format_date(timestamp: int) -> str:
    """Local date and time of a Unix timestamp."""
    return time.strftime(DATE_FORMAT, time.localtime(timestamp))


def _day_index(timestamp: int) -> int:
    return time.localtime(timestamp).tm_yday - 1


def _as_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _map_to_discrete(value: float, in_max: float, out_max: float) -> int:
    if in_max == 0:
        in_max = 1
    return int((value / in_max) * out_max)


def csv_report(entries: Iterable[TimingEntry], name: str) -> str:
    """Every entry as one comma-separated line, after a title and a header."""
    lines = [f"{name} Timings", "ordinal, date, duration, status"]
    for ordinal, entry in enumerate(entries):
        row = f"{ordinal}, {format_date(entry.start_date)}"
        if entry.complete:
            status = "succeeded" if entry.succeeded else "failed"
            row += f", {entry.milliseconds / 1000.0:.3f}s, {status}"
        else:
            row += ", (never completed), failed"
        lines.append(row)
    return "\n".join(lines) + "\n"


def _bars(buckets: Sequence[StatGroup], heights: list[int], top_label: str) -> list[str]:
    rows = []
    for line in range(GRAPH_HEIGHT - 1, -1, -1):
        row = "|" + "".join("*" if height >= line else " " for height in heights)
        if line == GRAPH_HEIGHT - 1:
            row += top_label
        rows.append(row)
    return rows


def render_graph(title: str, day_span: float, buckets: Sequence[StatGroup]) -> str:
    """Two bar charts over the buckets: slowest build and number of builds."""
    filled = [group for group in buckets if group.count]
    max_count = max((group.count for group in filled), default=0)
    slowest = max((group.slowest_ms for group in filled), default=0)
    days_per_bucket = day_span / float(GRAPH_WIDTH)
    axis = "+" + "-" * len(buckets)

    slow_heights = [
        _map_to_discrete(group.slowest_ms, slowest, GRAPH_HEIGHT - 1) if group.count else -1
        for group in buckets
    ]
    count_heights = [
        _map_to_discrete(group.count, max_count, GRAPH_HEIGHT - 1) if group.count else -1
        for group in buckets
    ]

    plural = "" if days_per_bucket == 1 else "s"
    lines = ["", f"{title} ({days_per_bucket:f} day{plural}/bucket):"]
    lines += _bars(buckets, slow_heights, " " + format_duration(slowest))
    lines.append(f"{axis} {format_duration(0)}")
    lines.append("")
    lines += _bars(buckets, count_heights, f" {max_count}")
    lines.append(f"{axis} 0")
    return "\n".join(lines) + "\n"


def _stat_group_lines(title: str, group: StatGroup) -> list[str]:
    if group.count <= 0:
        return []
    return [
        f"{title} ({group.count}):",
        f"  Slowest: {format_duration(group.slowest_ms)}",
        f"  Fastest: {format_duration(group.fastest_ms)}",
        f"  Average: {format_duration(group.average())}",
        f"  Total: {format_duration(int(group.total_ms))}",
    ]


def stats_report(entries: Iterable[TimingEntry], name: str) -> str:
    """Summary statistics and graphs over all recorded builds."""
    entries = list(entries)
    succeeded = StatGroup()
    failed = StatGroup()
    total_graph = [StatGroup() for _ in range(GRAPH_WIDTH)]
    recent_graph = [StatGroup() for _ in range(GRAPH_WIDTH)]

    incomplete = 0
    days_with_timings = 0
    day_span_count = 0
    first_day = 0.0
    last_day = 0.0
    day_span = 0.0
    all_ms = 0.0

    if len(entries) >= 2:
        seconds = (entries[-1].start_date - entries[0].start_date) & 0xFFFFFFFFFFFFFFFF
        day_span_count = _as_int32(seconds // _SECONDS_PER_DAY)
        first_day = float(_day_index(entries[0].start_date))
        last_day = float(_day_index(entries[-1].start_date))
        day_span = last_day - first_day
    day_span += 1

    last_day_index = 0
    for entry in entries:
        if not entry.complete:
            incomplete += 1
            continue
        group = succeeded if entry.succeeded else failed
        this_day = _day_index(entry.start_date)
        if this_day != last_day_index:
            last_day_index = this_day
            days_with_timings += 1

        group.add(entry.milliseconds)
        all_ms += float(entry.milliseconds)

        total_index = int(((this_day - first_day) / day_span) * GRAPH_WIDTH)
        if 0 <= total_index < GRAPH_WIDTH:
            total_graph[total_index].add(entry.milliseconds)

        recent_index = int(this_day - (last_day - GRAPH_WIDTH + 1))
        if 0 <= recent_index < GRAPH_WIDTH:
            recent_graph[recent_index].add(entry.milliseconds)

    lines = [
        "",
        f"{name} Statistics",
        "",
        f"Total complete timings: {failed.count + succeeded.count}",
        f"Total incomplete timings: {incomplete}",
        f"Days with timings: {days_with_timings}",
        f"Days between first and last timing: {day_span_count}",
    ]
    lines += _stat_group_lines("Timings marked successful", succeeded)
    lines += _stat_group_lines("Timings marked failed", failed)
    text = "\n".join(lines) + "\n"
    text += render_graph("All", last_day - first_day, total_graph)
    text += render_graph("Recent", GRAPH_WIDTH, recent_graph)
    text += f"\nTotal time spent: {format_duration(all_ms)}\n"
    return text