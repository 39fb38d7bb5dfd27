# buildclock

buildclock records how long your builds take. You mark the start and the end
of a build. For each build it stores the start date, the duration and whether
the build succeeded, in a small binary timing file. Later you can print
statistics, text graphs or a CSV listing from that file.

## Installation

```
pip install .
```

## Usage

Put this on the first line of your build script:

```
buildclock -begin timings.ctm
```

The timing file is created if it does not exist. Each `-begin` adds a new open
entry to it.

Put this on the last line:

```
buildclock -end timings.ctm
```

This closes the last open entry and prints the elapsed time, for example
`CTIME: 12.345 seconds (timings.ctm)`. Longer times are spelled out with
weeks, days, hours and minutes, as in `1 hour, 2 minutes, 3.000 seconds`.

### Recording failed builds

You can pass the build's error level as a third argument to `-end`:

```
buildclock -end timings.ctm 2
```

The leading integer of that argument is read. When it is `0`, or when the
argument has no leading integer, the build is marked successful. Any other
value marks the build as failed. If you leave out the argument, the build
counts as successful.

### Statistics

```
buildclock -stats timings.ctm
```

The report shows:

- the number of complete and incomplete timings
- the number of days with timings
- the number of whole days between the first and the last timing
- the slowest, fastest, average and total times, for successful builds and for failed builds
- two pairs of text graphs, 30 buckets wide. One pair covers the whole history. The other covers the 30 days up to the last timing. Each pair shows the slowest build per bucket and the number of builds per bucket.
- the total time spent building

### CSV export

```
buildclock -csv timings.ctm
```

This prints a title line and a header line
(`ordinal, date, duration, status`), followed by one line per build. Each line
holds the build's ordinal, its local start date, its duration in seconds, and
`succeeded` or `failed`. A build that was begun but never ended shows
`(never completed), failed`.

### Errors

`-end`, `-stats` and `-csv` need an existing timing file. The following are
reported on standard error with the exit status 1:

- a file that cannot be opened
- a file that does not start with the expected header
- an `-end` when the last entry is already closed
- an unrecognised command

A wrong number of arguments prints the usage text.

### Several configurations

Use a separate timing file for each build configuration, for example
`timings_debug.ctm` and `timings_release.ctm`.

## File format

A timing file starts with the 4-byte little-endian magic value `0xCA5E713F`.
It is followed by 16-byte entries, each made of:

- the start date as a 64-bit Unix timestamp
- 32 bits of flags: `1` means complete, `2` means no errors
- 32 bits of milliseconds

An open entry holds its starting clock value in the milliseconds field. A
closed entry holds the elapsed time in that field.

## Library use

`buildclock.timingfile` reads and writes timing files:

- `begin_timing(path, start_date=None, clock=None)`
- `end_timing(path, clock=None, error_level=None)`
- `read_entries(path)`
- `current_clock()`
- `TimingEntry`, with `pack`, `unpack`, `complete` and `succeeded`
- `EntryFlag`
- `TimingFileError`, raised on any failure

`buildclock.report` turns entries into text:

- `stats_report(entries, name)`
- `csv_report(entries, name)`
- `render_graph(title, day_span, buckets)`
- `format_duration(milliseconds)`
- `format_date(timestamp)`
- `StatGroup`

`buildclock.cli.main(argv=None)` runs one command and returns its exit status.

The package also contains `buildclock.camera`. It holds a small immutable
`Vector3` type and the state and arithmetic of a `MapCamera` for a top-down
map view:

- `zoom(wheel_move)` moves the camera along its view direction. The distance stays between 1 and 20, and the method returns the new distance.
- `pan(delta_x, delta_y)` slides the camera and its target together.
- `set_input` and `cursor_hidden` track the orbit and pan state.

`new_camera()` gives the starting pose, and `clamp` limits a value to a range.

## What it does not do

The camera module is arithmetic only. The package opens no window, reads no
mouse input, loads no textures or models and draws nothing. There is no map
tile viewer command.