import csv

import pytest

import experiments as exp


@pytest.mark.parametrize("name", sorted(exp.GENERATOR_REGISTRY))
def test_generators_are_deterministic(name):
    a = exp.generate_dataset(name, 2048, seed=5)
    b = exp.generate_dataset(name, 2048, seed=5)
    assert len(a) == 2048
    assert a == b


def test_generate_dataset_unknown():
    with pytest.raises(ValueError):
        exp.generate_dataset("nope", 10, seed=0)


def test_zipf_alphabet():
    data = exp.gen_zipf_like(4096, alphabet=16, seed=3)
    assert max(data) < 16


@pytest.mark.parametrize("data", [
    exp.gen_english_like(4096, seed=1),
    exp.gen_repetitive(4096, dom_frac=0.99, seed=1),
    b"A" * 500,
    b"",
])
def test_run_one_roundtrips(data):
    row = exp.run_one(data)
    assert row.correctness_ok == 1
    assert row.file_size_bytes == len(data)
    assert row.packed_bytes * 8 - row.pad_bits == row.encoded_bits


def test_run_one_skewed_beats_entropy_bound_loosely():
    row = exp.run_one(exp.gen_repetitive(8192, dom_frac=0.9, seed=2))
    assert row.compression_ratio < 1.0
    assert row.entropy_bits <= row.avg_code_length < row.entropy_bits + 1


def test_scaling_sizes():
    assert exp.scaling_sizes(4, 32) == [4096, 8192, 16384, 32768]


def test_main_writes_csv(tmp_path, capsys):
    rc = exp.main([
        "--outdir", str(tmp_path),
        "--runs", "2",
        "--size_kb", "1",
        "--generators", "zipf64,english_like",
        "--scaling_min_kb", "1",
        "--scaling_max_kb", "2",
        "--no_plots",
    ])
    assert rc == 0

    with (tmp_path / "metrics.csv").open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    # 2 generators * 2 runs, plus 2 generators * 2 sizes * 2 runs
    assert len(rows) == 12
    assert all(r["correctness_ok"] == "1" for r in rows)

    with (tmp_path / "summary.csv").open(newline="", encoding="utf-8") as f:
        summary = list(csv.DictReader(f))
    assert len(summary) == 6
    assert all(float(r["correctness_ok_rate"]) == 1.0 for r in summary)
    assert "Correctness rate across all runs: 1.000" in capsys.readouterr().out


def test_plots_written(tmp_path):
    rows = []
    for name in ("zipf64", "repetitive90"):
        for run_id, size in enumerate((1024, 2048), start=1):
            row = exp.run_one(exp.generate_dataset(name, size, seed=run_id))
            row.exp_name = "distribution" if size == 1024 else "size_scaling"
            row.dataset_name = name
            row.run_id = run_id
            rows.append(row)
    exp.plot_distribution(rows, tmp_path)
    exp.plot_size_scaling(rows, tmp_path)
    assert (tmp_path / "distribution_code_length.png").exists()
    assert (tmp_path / "distribution_compression_ratio.png").exists()
    assert (tmp_path / "size_scaling_time_zipf64.png").exists()
