# Jacob Mitchell, Kyle Axtell
# CS 456 - Data Compression
# experiments.py
# 3/6/26

"""
Huffman codec benchmark

Runs the codec over synthetic datasets, with repeated runs, and records
timings, sizes and compression metrics.

Outputs (in --outdir):
  - metrics.csv     (raw row per run)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --runs 3 --size_kb 64 --generators zipf128,english_like
  python experiments.py --outdir results --no_scaling --no_plots

Notes:
  compression_ratio is encoded bits / (symbols * 8), the packed byte count is
  reported separately and includes the final partial byte.
"""

from __future__ import annotations

import argparse
import bisect
import csv
import logging
import random
import statistics
import time
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt

import huffman as huff
from bitpack import pack_bits, unpack_bits
from stats import average_code_length, compression_ratio, entropy

logger = logging.getLogger(__name__)


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


# Synthetic dataset generators

def _sample_weighted(rng: random.Random, symbols: Sequence[int], weights: Sequence[float], size: int) -> bytes:
    total = sum(weights)
    cdf = []
    acc = 0.0
    for w in weights:
        acc += w / total
        cdf.append(acc)

    last = len(cdf) - 1
    out = bytearray()
    for _ in range(size):
        idx = min(bisect.bisect_left(cdf, rng.random()), last) # float rounding can leave cdf[-1] just below 1
        out.append(symbols[idx])
    return bytes(out)

def gen_uniform(size: int, alphabet: int = 256, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.randrange(0, alphabet) for _ in range(size))

def gen_repetitive(size: int, dominant: int = ord('A'), dom_frac: float = 0.90, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    others = [i for i in range(256) if i != dominant]
    out = bytearray()
    for _ in range(size):
        out.append(dominant if rng.random() < dom_frac else rng.choice(others))
    return bytes(out)

def gen_zipf_like(size: int, alphabet: int = 128, s: float = 1.2, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    weights = [1.0 / ((i + 1) ** s) for i in range(alphabet)]
    return _sample_weighted(rng, range(alphabet), weights, size)

def gen_english_like(size: int, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    chars = (
        " etaoinshrdlcumwfgypbvkjxq"
        "ETAOINSHRDLCUMWFGYPBVKJXQ"
        "\n"
    )
    weights = []
    for ch in chars:
        if ch == ' ':
            weights.append(13.0)
        elif ch == '\n':
            weights.append(1.5)
        elif ch.lower() in "etaoinshrdlu":
            weights.append(6.0)
        elif ch.lower() in "cmfwgypbvk":
            weights.append(2.5)
        else:
            weights.append(1.2)
    return _sample_weighted(rng, [ord(ch) for ch in chars], weights, size)

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], bytes]] = {
    "uniform256": lambda size, seed: gen_uniform(size, alphabet=256, seed=seed),
    "uniform128": lambda size, seed: gen_uniform(size, alphabet=128, seed=seed),
    "zipf128": lambda size, seed: gen_zipf_like(size, alphabet=128, s=1.2, seed=seed),
    "zipf64": lambda size, seed: gen_zipf_like(size, alphabet=64, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
}

def generate_dataset(name: str, size_bytes: int, seed: int) -> bytes:
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        raise ValueError(f"unknown generator {name!r}, choose from {', '.join(sorted(GENERATOR_REGISTRY))}")
    return fn(size_bytes, seed)


# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    file_size_bytes: int
    run_id: int
    unique_symbols: int

    build_ms: float
    encode_ms: float
    decode_ms: float
    total_ms: float

    encoded_bits: int
    packed_bytes: int
    pad_bits: int
    compression_ratio: float
    avg_code_length: float
    entropy_bits: float
    correctness_ok: int  # 1 or 0


def run_one(data: bytes) -> MetricRow:
    # build: frequencies, tree, codes
    t0 = now_ns()
    codec = huff.HuffmanCodec.from_symbols(data)
    t1 = now_ns()

    # encode + pack
    bits = codec.encode(data)
    packed, pad_bits = pack_bits(bits)
    t2 = now_ns()

    # unpack + decode
    decoded = bytes(codec.decode(unpack_bits(packed, pad_bits)))
    t3 = now_ns()

    build_ms = ns_to_ms(t1 - t0)
    encode_ms = ns_to_ms(t2 - t1)
    decode_ms = ns_to_ms(t3 - t2)

    return MetricRow(
        exp_name="",
        dataset_name="",
        file_size_bytes=len(data),
        run_id=0,
        unique_symbols=len(codec.frequencies),
        build_ms=build_ms,
        encode_ms=encode_ms,
        decode_ms=decode_ms,
        total_ms=build_ms + encode_ms + decode_ms,
        encoded_bits=len(bits),
        packed_bytes=len(packed),
        pad_bits=pad_bits,
        compression_ratio=compression_ratio(len(bits), len(data)),
        avg_code_length=average_code_length(codec.frequencies, codec.codes),
        entropy_bits=entropy(codec.frequencies),
        correctness_ok=1 if decoded == data else 0,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    names = [f.name for f in fields(MetricRow)]
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=names)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in names})


SUMMARY_METRICS = ("compression_ratio", "avg_code_length", "build_ms", "encode_ms", "decode_ms", "total_ms")

def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)

def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, file_size_bytes and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int], List[MetricRow]] = {}
    for r in rows:
        key_to.setdefault((r.exp_name, r.dataset_name, r.file_size_bytes), []).append(r)

    summary_fields = ["exp_name", "dataset_name", "file_size_bytes", "n_runs", "entropy_bits"]
    for m in SUMMARY_METRICS:
        summary_fields += [f"{m}_mean", f"{m}_stdev"]
    summary_fields.append("correctness_ok_rate")

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for (exp_name, dataset_name, size_b), items in sorted(key_to.items()):
            row = {
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "file_size_bytes": size_b,
                "n_runs": len(items),
                "entropy_bits": statistics.mean(x.entropy_bits for x in items),
                "correctness_ok_rate": sum(x.correctness_ok for x in items) / len(items),
            }
            for m in SUMMARY_METRICS:
                row[f"{m}_mean"], row[f"{m}_stdev"] = mean_stdev([getattr(x, m) for x in items])
            w.writerow(row)


# Plotting

def plot_distribution(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "distribution"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))
    x = list(range(len(datasets)))

    def mean_for(dataset: str, field: str) -> float:
        return statistics.mean(getattr(r, field) for r in exp_rows if r.dataset_name == dataset)

    # Average code length against the entropy lower bound
    plt.figure()
    plt.plot(x, [mean_for(d, "avg_code_length") for d in datasets], marker="o", label="huffman")
    plt.plot(x, [mean_for(d, "entropy_bits") for d in datasets], marker="x", linestyle="--", label="entropy")
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Bits per Symbol")
    plt.title("Average Code Length by Distribution")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "distribution_code_length.png", dpi=200)
    plt.close()

    plt.figure()
    plt.bar(x, [mean_for(d, "compression_ratio") for d in datasets])
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Encoded Bits / Original Bits")
    plt.title("Compression Ratio by Distribution")
    plt.tight_layout()
    plt.savefig(outdir / "distribution_compression_ratio.png", dpi=200)
    plt.close()


def plot_size_scaling(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "size_scaling"]
    if not exp_rows:
        return

    for dist in sorted(set(r.dataset_name for r in exp_rows)):
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.file_size_bytes for r in dist_rows))

        def mean_size(size: int, field: str) -> float:
            return statistics.mean(getattr(r, field) for r in dist_rows if r.file_size_bytes == size)

        plt.figure()
        for field in ("build_ms", "encode_ms", "decode_ms"):
            plt.plot(sizes, [mean_size(s, field) for s in sizes], marker="o", label=field[:-3])
        plt.xlabel("File Size (bytes)")
        plt.ylabel("Time (ms)")
        plt.title(f"Runtime vs Size ({dist})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / f"size_scaling_time_{dist}.png", dpi=200)
        plt.close()


# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def scaling_sizes(min_kb: int, max_kb: int) -> List[int]:
    sizes: List[int] = []
    s = max(1, min_kb) * 1024
    while s <= max(1, max_kb) * 1024:
        sizes.append(s)
        s *= 2
    return sizes

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Benchmark the Huffman codec on synthetic data")
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")
    ap.add_argument("--size_kb", type=int, default=256, help="Fixed dataset size in KB for the distribution experiment")
    ap.add_argument("--generators", type=str, default="uniform256,zipf128,repetitive90,english_like",
                    help="Comma-separated dataset generator names")
    ap.add_argument("--scaling_min_kb", type=int, default=4, help="Size scaling start in KB (power-of-two growth)")
    ap.add_argument("--scaling_max_kb", type=int, default=1024, help="Size scaling end in KB")
    ap.add_argument("--no_scaling", action="store_true", help="Skip the size scaling experiment")
    ap.add_argument("--no_plots", action="store_true", help="Write CSV files only")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    gen_names = parse_csv_list(args.generators)
    unknown = [g for g in gen_names if g not in GENERATOR_REGISTRY]
    if unknown:
        ap.error(f"unknown generators: {', '.join(unknown)}")

    outdir = Path(args.outdir)
    safe_mkdir(outdir)
    rows: List[MetricRow] = []

    # Distributions at a fixed size
    fixed_size = max(1, args.size_kb) * 1024
    for gen_name in gen_names:
        for run_id in range(1, args.runs + 1):
            row = run_one(generate_dataset(gen_name, fixed_size, args.seed + run_id))
            row.exp_name = "distribution"
            row.dataset_name = gen_name
            row.run_id = run_id
            rows.append(row)
        logger.info("distribution: %s done", gen_name)

    # Size scaling, powers of 2
    if not args.no_scaling:
        for gen_name in gen_names:
            for size_b in scaling_sizes(args.scaling_min_kb, args.scaling_max_kb):
                for run_id in range(1, args.runs + 1):
                    row = run_one(generate_dataset(gen_name, size_b, args.seed + 10_000 + size_b + run_id))
                    row.exp_name = "size_scaling"
                    row.dataset_name = gen_name
                    row.run_id = run_id
                    rows.append(row)
            logger.info("size_scaling: %s done", gen_name)

    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    if not args.no_plots:
        plot_distribution(rows, outdir)
        plot_size_scaling(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    if not args.no_plots:
        print("Charts saved in:", outdir.resolve())
    return 0 if all(r.correctness_ok for r in rows) else 1


if __name__ == "__main__":
    raise SystemExit(main())
