import csv

import pytest

from priority_queues import bench


def test_run_benchmarks_covers_every_operation_and_size():
    rows = bench.run_benchmarks(["binomial"], base_size=8, steps=2, iterations=2, seed=1)
    assert len(rows) == len(bench.OPERATIONS) * 2
    assert {r[2] for r in rows} == {"push", "pop", "meld"}
    assert {r[1] for r in rows} == {8, 16}
    assert all(r[3] >= 0.0 and r[4] >= 0.0 for r in rows)


def test_meld_operation_keeps_every_value():
    heap = bench.bench_meld(bench.BinomialHeap, [5, 3, 8, 1, 9])
    assert len(heap) == 5
    assert heap.peek() == 1


def test_main_writes_csv(tmp_path, capsys):
    out = tmp_path / "timings.csv"
    code = bench.main(["--heap", "binary", "--base-size", "4", "--steps", "1", "--iterations", "1", "--csv", str(out)])
    assert code == 0
    with open(out, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == bench.CSV_HEADERS
    assert len(rows) == 1 + len(bench.OPERATIONS)
    assert "binary" in capsys.readouterr().out


def test_parser_rejects_non_positive_sizes():
    with pytest.raises(SystemExit):
        bench.build_parser().parse_args(["--steps", "0"])
