"""
Priority-queue benchmark command-line interface.

Times push, pop and meld for the binomial and binary heaps over
exponentially growing input sizes and prints one line per measurement.

Usage examples:
    python -m priority_queues.bench
    python -m priority_queues.bench --heap binomial --base-size 1000 --steps 6
    python -m priority_queues.bench --heap both --csv heap_timings.csv --verbose
"""

import argparse
import csv
import logging
import random
import statistics
import sys
import time

from .datastructures import BinaryHeap, BinomialHeap, HeapType

logger = logging.getLogger(__name__)

HEAPS = {
    "binomial": BinomialHeap,
    "binary": BinaryHeap,
}

CSV_HEADERS = [
    "Heap",
    "Input Size",
    "Operation",
    "Average Time (ms)",
    "Standard Deviation (ms)",
]


# -------------------------------------------------------------------
# Helper functions
# -------------------------------------------------------------------
def generate_random_list(size, rng):
    """Generate a list of random integers of given size."""
    return [rng.randint(0, 1000000) for _ in range(size)]


def measure_operation_time(operation, heap_cls, input_size, rng, iterations=5):
    """Run the operation several times and return (mean, std dev) in ms."""
    times = []
    for _ in range(iterations):
        data = generate_random_list(input_size, rng)
        start = time.perf_counter()
        operation(heap_cls, data)
        end = time.perf_counter()
        times.append((end - start) * 1000)

    avg_time = statistics.mean(times)
    std_dev = statistics.stdev(times) if len(times) > 1 else 0.0
    return avg_time, std_dev


# -------------------------------------------------------------------
# Operations to benchmark
# -------------------------------------------------------------------
def bench_push(heap_cls, data):
    heap = heap_cls(HeapType.MIN)
    for item in data:
        heap.push(item)
    return heap


def bench_pop(heap_cls, data):
    heap = bench_push(heap_cls, data)
    while heap.pop() is not None:
        pass
    return heap


def bench_meld(heap_cls, data):
    half = len(data) // 2
    left = heap_cls(HeapType.MIN, data[:half])
    right = heap_cls(HeapType.MIN, data[half:])
    left.meld(right)
    return left


OPERATIONS = {
    "push": bench_push,
    "pop": bench_pop,
    "meld": bench_meld,
}


# -------------------------------------------------------------------
# Benchmark runner
# -------------------------------------------------------------------
def run_benchmarks(heap_names, base_size=100, steps=8, iterations=5, seed=None):
    """Return rows of (heap, size, operation, avg ms, std ms)."""
    rng = random.Random(seed)
    sizes = [base_size * (2 ** i) for i in range(steps)]
    rows = []
    for name in heap_names:
        heap_cls = HEAPS[name]
        for op_name, op_func in OPERATIONS.items():
            for size in sizes:
                logger.debug("timing %s.%s at n=%d", name, op_name, size)
                avg_time, std_time = measure_operation_time(op_func, heap_cls, size, rng, iterations)
                rows.append((name, size, op_name, avg_time, std_time))
    return rows


def print_rows(rows):
    for name, size, op_name, avg_time, std_time in rows:
        print(f"{name:<9} | {op_name:<5} | Size: {size:<8} | "
              f"Avg Time: {avg_time:.3f} ms | Std: {std_time:.3f} ms")


def write_csv(rows, path):
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADERS)
        for name, size, op_name, avg_time, std_time in rows:
            writer.writerow([name, size, op_name, f"{avg_time:.3f}", f"{std_time:.3f}"])


# -------------------------------------------------------------------
# CLI parser setup
# -------------------------------------------------------------------
def positive_int(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def build_parser():
    """Build the argparse command-line parser."""
    p = argparse.ArgumentParser(prog="python -m priority_queues.bench", description="Priority queue benchmarks")
    p.add_argument("--heap", choices=["binomial", "binary", "both"], default="both")
    p.add_argument("--base-size", type=positive_int, default=100)
    p.add_argument("--steps", type=positive_int, default=8)
    p.add_argument("--iterations", type=positive_int, default=5)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--csv", dest="csv_path", default=None, help="Also write results to this CSV file")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


# -------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------
def main(argv=None):
    """CLI entry point when invoked via `python -m priority_queues.bench`."""
    argv = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    heap_names = list(HEAPS) if args.heap == "both" else [args.heap]
    rows = run_benchmarks(heap_names, args.base_size, args.steps, args.iterations, args.seed)
    print_rows(rows)

    if args.csv_path:
        write_csv(rows, args.csv_path)
        print(f"\nBenchmark completed. Results saved to {args.csv_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
