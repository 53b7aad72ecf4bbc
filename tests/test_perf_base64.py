from __future__ import annotations

import base64
from typing import TYPE_CHECKING

import pytest

from admin import perf_base64
from libcodec import encode

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def data_file(tmp_path: Path) -> str:
    path = str(tmp_path / "data.in")
    perf_base64.gen_data_file(path, 1, 5, 3)
    return path


def test_rand_bytes():
    assert len(perf_base64.rand_bytes(0)) == 0
    assert len(perf_base64.rand_bytes(17)) == 17


def test_gen_data_file(data_file: str) -> None:
    vectors = list(perf_base64.read_data_file(data_file))
    assert [len(v) for v in vectors] == [1, 1, 1, 2, 2, 2, 3, 3, 3, 4, 4, 4, 5, 5, 5]
    assert all(isinstance(v, bytes) for v in vectors)


def test_read_data_file(tmp_path: Path) -> None:
    path = tmp_path / "data.in"
    path.write_text("0 255 128\n77\n")
    assert list(perf_base64.read_data_file(str(path))) == [b"\x00\xff\x80", b"M"]


def test_time_it():
    calls = []
    elapsed = perf_base64.time_it(calls.append, 1)
    assert calls == [1]
    assert isinstance(elapsed, int)
    assert elapsed >= 0


@pytest.mark.parametrize(
    "perf",
    [perf_base64.perf_encode, perf_base64.perf_encode_into, perf_base64.perf_reference],
)
def test_perf_timings(perf) -> None:
    vectors = [b"M", b"Ma", b"Man", b"Ma"]
    timings = list(perf(vectors, 0))
    assert len(timings) == len(vectors)
    assert all(t >= 0 for t in timings)


def test_time_file_round_trip(tmp_path: Path) -> None:
    path = str(tmp_path / "time.out.000")
    perf_base64.write_time_file([[1, 200], [2, 300]], path)
    with open(path) as fh:
        assert fh.read() == "1\t200\n2\t300\n"
    assert list(perf_base64.read_time_file(path)) == [["1", "200"], ["2", "300"]]


def test_append_times():
    table = [["1", "10"], ["2", "20"]]
    assert list(perf_base64.append_times(table, [11, 21])) == [
        ["1", "10", "11"],
        ["2", "20", "21"],
    ]


def test_latest_time_file(tmp_path: Path) -> None:
    basis = str(tmp_path / "time.out")
    assert perf_base64.latest_time_file(basis) is None
    for name in ["time.out.000", "time.out.002", "time.out.001", "time.outer.009"]:
        (tmp_path / name).write_text("")
    assert perf_base64.latest_time_file(basis) == basis + ".002"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("time.out.000", "time.out.001"),
        ("time.out.009", "time.out.010"),
        ("/tmp/x/time.out.041", "/tmp/x/time.out.042"),
        ("time.out", None),
        ("time.out.1", None),
    ],
)
def test_next_time_file(path: str, expected: str | None) -> None:
    assert perf_base64.next_time_file(path) == expected


def test_init_and_run_perf(tmp_path: Path, data_file: str) -> None:
    time_file = str(tmp_path / "time.out")
    first = perf_base64.init_time_file(data_file, time_file, 0)
    assert first == time_file + ".000"
    rows = list(perf_base64.read_time_file(first))
    assert len(rows) == 15
    assert [row[0] for row in rows[:4]] == ["1", "1", "1", "2"]
    assert all(len(row) == 2 for row in rows)

    second = perf_base64.run_perf(data_file, time_file, 0, use_buffer=False)
    assert second == time_file + ".001"
    third = perf_base64.run_perf(data_file, time_file, 0, use_buffer=True)
    assert third == time_file + ".002"
    rows = list(perf_base64.read_time_file(third))
    assert len(rows) == 15
    assert all(len(row) == 4 for row in rows)


def test_run_perf_without_init(tmp_path: Path, data_file: str) -> None:
    with pytest.raises(FileNotFoundError, match="run init first"):
        perf_base64.run_perf(data_file, str(tmp_path / "time.out"), 0, use_buffer=False)


def test_main(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    data_file = str(tmp_path / "data.in")
    time_file = str(tmp_path / "time.out")
    perf_base64.main("gen", data_file, "1", "3", "2")
    perf_base64.main("init", data_file, time_file)
    perf_base64.main("run", data_file, time_file, "--buffer")
    out = capsys.readouterr().out.split()
    assert out == [time_file + ".000", time_file + ".001"]
    vectors = list(perf_base64.read_data_file(data_file))
    assert len(vectors) == 6
    for vector in vectors:
        assert encode(vector) == base64.b64encode(vector)
