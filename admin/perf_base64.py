"""admin/perf_base64 - timing tables for libcodec.base64

Generates a data file of random byte vectors, then builds up a
tab-separated table of per-vector timings, one column per run.
Each run is written to the next numbered file (``time.out.000``,
``time.out.001``, ...), so earlier runs are never overwritten.

Example::

    python admin/perf_base64.py gen data.in 1 12 20
    python admin/perf_base64.py init data.in time.out --sleep 100
    python admin/perf_base64.py run data.in time.out --sleep 100
    python admin/perf_base64.py run data.in time.out --sleep 100 --buffer
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import secrets
import time
from binascii import b2a_base64
from typing import TYPE_CHECKING, Callable

from libcodec.base64 import enc_length, encode, encode_into

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

log = logging.getLogger(__name__)

#: matches "<prefix>.NNN"
_NUMBERED_FILE_RE = re.compile(r"(.+\.)([0-9]{3})")


# -------------------------------------------------------------
# data files
# -------------------------------------------------------------


def rand_bytes(n: int) -> bytes:
    """Returns a randomly populated byte string of length n."""
    return secrets.token_bytes(n)


def gen_data_file(path: str, start: int, stop: int, times: int) -> None:
    """Writes ``times`` random byte vectors of each length from start to stop
    (inclusive), one per line, as space separated byte values.
    """
    with open(path, "w") as fh:
        for n in range(start, stop + 1):
            for _ in range(times):
                fh.write(" ".join(map(str, rand_bytes(n))))
                fh.write("\n")
    log.debug("wrote %d vectors to %r", (stop - start + 1) * times, path)


def read_data_file(path: str) -> Iterator[bytes]:
    """Lazily reads a data file, yielding byte strings."""
    with open(path) as fh:
        for line in fh:
            yield bytes(int(v) for v in line.split())


# -------------------------------------------------------------
# timing
# -------------------------------------------------------------


def time_it(func: Callable[..., object], *args: object, **kwds: object) -> int:
    """Returns time taken by ``func(*args, **kwds)``, in nanoseconds."""
    start = time.perf_counter_ns()
    func(*args, **kwds)
    return time.perf_counter_ns() - start


def _pause(sleep: int) -> None:
    # gives gc a chance to run between samples
    if sleep:
        time.sleep(sleep / 1000)


def perf_encode(vectors: Iterable[bytes], sleep: int) -> Iterator[int]:
    """Lazily yields :func:`encode` timings for each vector."""
    for vector in vectors:
        _pause(sleep)
        yield time_it(encode, vector)


def perf_encode_into(vectors: Iterable[bytes], sleep: int) -> Iterator[int]:
    """Lazily yields :func:`encode_into` timings for each vector,
    reusing a single output buffer per input length.
    """
    buffers: dict[int, bytearray] = {}
    for vector in vectors:
        size = len(vector)
        output = buffers.get(size)
        if output is None:
            output = buffers[size] = bytearray(enc_length(size))
        _pause(sleep)
        yield time_it(encode_into, vector, 0, size, output)


def perf_reference(vectors: Iterable[bytes], sleep: int) -> Iterator[int]:
    """Lazily yields stdlib :func:`binascii.b2a_base64` timings for each vector."""
    for vector in vectors:
        _pause(sleep)
        yield time_it(b2a_base64, vector, newline=False)


# -------------------------------------------------------------
# time files
# -------------------------------------------------------------


def append_times(
    table: Iterable[list[str]], times: Iterable[int]
) -> Iterator[list[str]]:
    """Lazily adds a column of timings to the given table."""
    for row, value in zip(table, times):
        yield [*row, str(value)]


def write_time_file(table: Iterable[Sequence[object]], path: str) -> None:
    """Writes a table of timings to file, tab separated."""
    with open(path, "w") as fh:
        for row in table:
            fh.write("\t".join(map(str, row)))
            fh.write("\n")
    log.debug("wrote time file %r", path)


def read_time_file(path: str) -> Iterator[list[str]]:
    """Lazily reads a file containing a table of timings."""
    with open(path) as fh:
        for line in fh:
            yield line.rstrip("\n").split("\t")


def latest_time_file(basis: str) -> str | None:
    """Returns the name of the latest numbered file for ``basis``,
    or None if there isn't one.
    """
    directory, prefix = os.path.split(basis)
    nums = []
    for name in os.listdir(directory or "."):
        m = _NUMBERED_FILE_RE.fullmatch(name)
        if m and m.group(1) == prefix + ".":
            nums.append(int(m.group(2)))
    if not nums:
        return None
    return "%s.%03d" % (basis, max(nums))


def next_time_file(path: str) -> str | None:
    """Returns the name of the numbered file following ``path``,
    or None if ``path`` isn't numbered.
    """
    m = _NUMBERED_FILE_RE.fullmatch(path)
    if not m:
        return None
    prefix, suffix = m.groups()
    return "%s%03d" % (prefix, int(suffix) + 1)


# -------------------------------------------------------------
# runs
# -------------------------------------------------------------


def init_time_file(data_file: str, time_file: str, sleep: int) -> str:
    """Creates ``<time_file>.000`` containing ``[length, reference timing]``
    rows for each vector in the data file. ``sleep`` is the delay
    between samples, in milliseconds.
    """
    vectors = list(read_data_file(data_file))
    rows = (
        [len(vector), value]
        for vector, value in zip(vectors, perf_reference(vectors, sleep))
    )
    path = time_file + ".000"
    write_time_file(rows, path)
    return path


def run_perf(data_file: str, time_file: str, sleep: int, use_buffer: bool) -> str:
    """Adds a column of libcodec timings to the latest time file,
    writing the result to the next numbered file. If ``use_buffer`` is true,
    :func:`encode_into` is timed instead of :func:`encode`.
    """
    prev = latest_time_file(time_file)
    if prev is None:
        msg = f"no time file found for {time_file!r}, run init first"
        raise FileNotFoundError(msg)
    path = next_time_file(prev)
    assert path is not None
    perf = perf_encode_into if use_buffer else perf_encode
    # previous table is fully read before the next file is opened
    table = list(read_time_file(prev))
    write_time_file(append_times(table, perf(read_data_file(data_file), sleep)), path)
    log.info("appended %s timings from %r to %r", perf.__name__, prev, path)
    return path


def main(*args: str) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("gen", help="generate a data file")
    gen.add_argument("data_file")
    gen.add_argument("start", type=int)
    gen.add_argument("stop", type=int)
    gen.add_argument("times", type=int)

    for name, help_text in [
        ("init", "start a time file using the reference encoder"),
        ("run", "add a column of libcodec timings"),
    ]:
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("data_file")
        cmd.add_argument("time_file")
        cmd.add_argument("--sleep", type=int, default=0, help="delay in msec")
        if name == "run":
            cmd.add_argument("--buffer", action="store_true", help="time encode_into")

    opts = parser.parse_args(args)
    logging.basicConfig(level=logging.DEBUG if opts.verbose else logging.INFO)

    if opts.command == "gen":
        gen_data_file(opts.data_file, opts.start, opts.stop, opts.times)
    elif opts.command == "init":
        print(init_time_file(opts.data_file, opts.time_file, opts.sleep))
    else:
        print(run_perf(opts.data_file, opts.time_file, opts.sleep, opts.buffer))


if __name__ == "__main__":
    import sys

    main(*sys.argv[1:])
