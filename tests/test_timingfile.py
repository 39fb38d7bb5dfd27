import pytest

from buildclock.timingfile import (
    CLOCK_MASK,
    ENTRY_SIZE,
    HEADER_SIZE,
    MAGIC_VALUE,
    EntryFlag,
    TimingEntry,
    TimingFileError,
    begin_timing,
    current_clock,
    end_timing,
    read_entries,
)


def test_entry_round_trip():
    entry = TimingEntry(1462719415, EntryFlag.COMPLETE | EntryFlag.NO_ERRORS, 4321)
    data = entry.pack()
    assert len(data) == ENTRY_SIZE
    assert TimingEntry.unpack(data) == entry


def test_entry_layout_is_little_endian():
    data = TimingEntry(1, EntryFlag.COMPLETE, 2).pack()
    assert data == (1).to_bytes(8, "little") + (1).to_bytes(4, "little") + (2).to_bytes(4, "little")


def test_unpack_wrong_size():
    with pytest.raises(ValueError):
        TimingEntry.unpack(b"\x00" * (ENTRY_SIZE - 1))


def test_current_clock_in_range():
    value = current_clock()
    assert 0 <= value <= CLOCK_MASK


def test_begin_creates_file_with_header(tmp_path):
    path = tmp_path / "build.ctm"
    entry = begin_timing(path, start_date=1000, clock=5000)
    raw = path.read_bytes()
    assert raw[:HEADER_SIZE] == MAGIC_VALUE.to_bytes(4, "little")
    assert len(raw) == HEADER_SIZE + ENTRY_SIZE
    assert read_entries(path) == [entry]
    assert not entry.complete


def test_begin_then_end_success(tmp_path):
    path = tmp_path / "build.ctm"
    begin_timing(path, start_date=1000, clock=5000)
    entry = end_timing(path, clock=7500)
    assert entry.complete and entry.succeeded
    assert entry.milliseconds == 7500 - 5000
    assert read_entries(path) == [entry]


@pytest.mark.parametrize("level, succeeded", [(0, True), (None, True), (3, False), (-1, False)])
def test_error_level(tmp_path, level, succeeded):
    path = tmp_path / "build.ctm"
    begin_timing(path, start_date=1, clock=10)
    entry = end_timing(path, clock=20, error_level=level)
    assert entry.complete
    assert entry.succeeded is succeeded


def test_clock_going_backwards_gives_zero(tmp_path):
    path = tmp_path / "build.ctm"
    begin_timing(path, start_date=1, clock=900)
    assert end_timing(path, clock=100).milliseconds == 0


def test_end_twice_fails(tmp_path):
    path = tmp_path / "build.ctm"
    begin_timing(path, start_date=1, clock=1)
    end_timing(path, clock=2)
    with pytest.raises(TimingFileError, match="already closed"):
        end_timing(path, clock=3)


def test_multiple_entries_kept_in_order(tmp_path):
    path = tmp_path / "build.ctm"
    begin_timing(path, start_date=100, clock=1)
    end_timing(path, clock=2)
    begin_timing(path, start_date=200, clock=3)
    entries = read_entries(path)
    assert [e.start_date for e in entries] == [100, 200]
    assert [e.complete for e in entries] == [True, False]


def test_end_missing_file(tmp_path):
    path = tmp_path / "missing.ctm"
    with pytest.raises(TimingFileError):
        end_timing(path, clock=1)
    assert not path.exists()


def test_read_missing_file(tmp_path):
    with pytest.raises(TimingFileError):
        read_entries(tmp_path / "missing.ctm")


def test_bad_magic_rejected(tmp_path):
    path = tmp_path / "bad.ctm"
    path.write_bytes(b"\x00\x00\x00\x00" + b"\x00" * ENTRY_SIZE)
    with pytest.raises(TimingFileError, match="ctime-compatible"):
        read_entries(path)
    with pytest.raises(TimingFileError, match="ctime-compatible"):
        begin_timing(path, start_date=1, clock=1)
    assert len(path.read_bytes()) == HEADER_SIZE + ENTRY_SIZE


def test_end_on_empty_timing_file(tmp_path):
    path = tmp_path / "empty.ctm"
    path.write_bytes(MAGIC_VALUE.to_bytes(4, "little"))
    with pytest.raises(TimingFileError, match="Unable to read last entry"):
        end_timing(path, clock=1)


def test_read_ignores_partial_trailing_entry(tmp_path):
    path = tmp_path / "build.ctm"
    entry = begin_timing(path, start_date=7, clock=8)
    with open(path, "ab") as handle:
        handle.write(b"\x01\x02\x03")
    assert read_entries(path) == [entry]