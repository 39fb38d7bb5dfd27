"""Binary timing file: a magic header followed by fixed-size build entries."""

from __future__ import annotations

import enum
import os
import struct
import time
from dataclasses import dataclass
from typing import BinaryIO

MAGIC_VALUE = 0xCA5E713F
CLOCK_MASK = 0xFFFFFFFF

_HEADER = struct.Struct("<I")
_ENTRY = struct.Struct("<QII")
HEADER_SIZE = _HEADER.size
ENTRY_SIZE = _ENTRY.size


class TimingFileError(Exception):
    """A timing file could not be opened, verified, read or updated."""


class EntryFlag(enum.IntFlag):
    COMPLETE = 0x1
    NO_ERRORS = 0x2


@dataclass
class TimingEntry:
    """One build: start date in seconds, flags and either start clock or elapsed ms."""

    start_date: int
    flags: EntryFlag = EntryFlag(0)
    milliseconds: int = 0

    @property
    def complete(self) -> bool:
        return bool(self.flags & EntryFlag.COMPLETE)

    @property
    def succeeded(self) -> bool:
        return bool(self.flags & EntryFlag.NO_ERRORS)

    def pack(self) -> bytes:
        return _ENTRY.pack(self.start_date, int(self.flags), self.milliseconds)

    @classmethod
    def unpack(cls, data: bytes) -> TimingEntry:
        if len(data) != ENTRY_SIZE:
            raise ValueError(f"timing entry must be {ENTRY_SIZE} bytes, got {len(data)}")
        start_date, flags, milliseconds = _ENTRY.unpack(data)
        return cls(start_date, EntryFlag(flags), milliseconds)


def current_clock() -> int:
    """Wall-clock milliseconds, wrapped to 32 bits."""
    return (time.time_ns() // 1_000_000) & CLOCK_MASK


def _verify_header(handle: BinaryIO, path) -> None:
    header = handle.read(HEADER_SIZE)
    if len(header) != HEADER_SIZE or _HEADER.unpack(header)[0] != MAGIC_VALUE:
        raise TimingFileError(
            f'Unable to verify that "{path}" is actually a ctime-compatible file.'
        )


def _open_existing(path) -> BinaryIO:
    try:
        handle = open(path, "r+b")
    except OSError as exc:
        raise TimingFileError(f'Cannot open file "{path}".') from exc
    try:
        _verify_header(handle, path)
    except TimingFileError:
        handle.close()
        raise
    return handle


def _create(path) -> BinaryIO:
    try:
        handle = open(path, "w+b")
    except OSError as exc:
        raise TimingFileError(f'Unable to create timing file "{path}".') from exc
    try:
        handle.write(_HEADER.pack(MAGIC_VALUE))
    except OSError as exc:
        handle.close()
        raise TimingFileError(f'Unable to write header to "{path}".') from exc
    return handle


def read_entries(path) -> list[TimingEntry]:
    """All whole entries stored in the timing file."""
    with _open_existing(path) as handle:
        try:
            handle.seek(HEADER_SIZE)
            data = handle.read()
        except OSError as exc:
            raise TimingFileError("Unable to read timing entries from file.") from exc
    usable = len(data) - len(data) % ENTRY_SIZE
    return [
        TimingEntry(start_date, EntryFlag(flags), milliseconds)
        for start_date, flags, milliseconds in _ENTRY.iter_unpack(data[:usable])
    ]


def begin_timing(path, start_date=None, clock=None) -> TimingEntry:
    """Append an open entry, creating the file if it cannot be opened."""
    if clock is None:
        clock = current_clock()
    if start_date is None:
        start_date = int(time.time())
    try:
        handle = open(path, "r+b")
    except OSError:
        handle = _create(path)
    else:
        try:
            _verify_header(handle, path)
        except TimingFileError:
            handle.close()
            raise
    entry = TimingEntry(start_date, EntryFlag(0), clock & CLOCK_MASK)
    with handle:
        try:
            handle.seek(0, os.SEEK_END)
            handle.write(entry.pack())
        except OSError as exc:
            raise TimingFileError(f'Unable to append new entry to file "{path}".') from exc
    return entry


def end_timing(path, clock=None, error_level=None) -> TimingEntry:
    """Close the last open entry; an error level other than 0 marks it failed."""
    if clock is None:
        clock = current_clock()
    with _open_existing(path) as handle:
        size = handle.seek(0, os.SEEK_END)
        offset = size - ENTRY_SIZE
        if offset < 0:
            raise TimingFileError(f'Unable to read last entry from file "{path}".')
        handle.seek(offset)
        entry = TimingEntry.unpack(handle.read(ENTRY_SIZE))
        if entry.complete:
            raise TimingFileError(
                f'Last entry in file "{path}" is already closed - '
                "unbalanced/overlapped calls?"
            )
        start_clock = entry.milliseconds
        entry.flags |= EntryFlag.COMPLETE
        entry.milliseconds = clock - start_clock if start_clock < clock else 0
        if error_level is None or error_level == 0:
            entry.flags |= EntryFlag.NO_ERRORS
        try:
            handle.seek(offset)
            handle.write(entry.pack())
        except OSError as exc:
            raise TimingFileError(f'Unable to rewrite last entry to file "{path}".') from exc
    return entry