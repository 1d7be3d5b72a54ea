'''Benchmarks suffix tree construction and lookups against the reference scan.

For each sequence length, a random DNA sequence is generated, its suffix tree
is built once, and a handful of patterns (some cut from the sequence, some
random) are searched both in the tree and with `naive_find`. The two result
sets are compared for every pattern, so a run doubles as a large randomized
correctness check.

Results are written to `benchmark_results.csv` and `benchmark_results.png`.

Usage:
    python benchmark.py [comma_separated_lengths] [patterns_per_length] [pattern_length]

Example:
    python benchmark.py 10000,100000,1000000 5 12
'''
import sys
import time
from typing import List, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from dna_suffix_tree import build, naive_find

DNA_BASES = np.array(list("ACGT"))


def generate_random_sequence(length: int, rng: np.random.Generator) -> str:
    """Generate a random DNA sequence of given length"""
    return ''.join(rng.choice(DNA_BASES, length))


def generate_patterns(sequence: str, count: int, pattern_length: int,
                      rng: np.random.Generator) -> List[str]:
    """Half the patterns are cut from `sequence` (guaranteed hits), half are random."""
    patterns = []
    for i in range(count):
        if i % 2 == 0 and len(sequence) >= pattern_length:
            start = int(rng.integers(0, len(sequence) - pattern_length + 1))
            patterns.append(sequence[start:start + pattern_length])
        else:
            patterns.append(generate_random_sequence(pattern_length, rng))
    return patterns


def extract_context(sequence: str, position: int, pattern_length: int, context_size: int = 10) -> str:
    """Shows a match in its surroundings, e.g. `...ACG[TTAGC]CAT...`."""
    start = max(0, position - context_size)
    end = min(len(sequence), position + pattern_length + context_size)
    match_end = min(position + pattern_length, len(sequence))
    return (("..." if start > 0 else "")
            + sequence[start:position] + "[" + sequence[position:match_end] + "]"
            + sequence[match_end:end]
            + ("..." if end < len(sequence) else ""))


def run_benchmark(length: int, n_patterns: int, pattern_length: int,
                  rng: np.random.Generator) -> Tuple[dict, List[dict]]:
    """Returns a summary row for the build and one row per searched pattern."""
    sequence = generate_random_sequence(length, rng)
    patterns = generate_patterns(sequence, n_patterns, pattern_length, rng)

    start_time = time.perf_counter()
    tree = build(sequence)
    build_time = time.perf_counter() - start_time

    pattern_rows = []
    for pattern in patterns:
        start_time = time.perf_counter()
        tree_matches = tree.find(pattern)
        tree_time = time.perf_counter() - start_time

        start_time = time.perf_counter()
        naive_matches = naive_find(sequence, pattern)
        naive_time = time.perf_counter() - start_time

        if tree_matches != naive_matches:
            print(f"MISMATCH for pattern '{pattern}' on sequence of length {length}: "
                  f"tree found {len(tree_matches)}, naive scan found {len(naive_matches)}", file=sys.stderr)

        pattern_rows.append({
            'sequence_length': length,
            'pattern': pattern,
            'matches': len(tree_matches),
            'tree_time': tree_time,
            'naive_time': naive_time,
            'agree': tree_matches == naive_matches,
        })

        if tree_matches:
            for position in sorted(tree_matches)[:2]:
                print(f"  Context at position {position}: {extract_context(sequence, position, len(pattern))}")

    summary = {
        'sequence_length': length,
        'build_time': build_time,
        'nodes': tree.node_count,
        'leaves': tree.leaf_count,
        'bases_per_second': length / build_time if build_time > 0 else float('inf'),
    }
    return summary, pattern_rows


def main():
    lengths = [10_000, 100_000, 300_000]
    n_patterns = 6
    pattern_length = 10

    if len(sys.argv) > 1:
        try:
            lengths = [int(x) for x in sys.argv[1].split(',')]
            if len(sys.argv) > 2: n_patterns = int(sys.argv[2])
            if len(sys.argv) > 3: pattern_length = int(sys.argv[3])
        except ValueError:
            print("Usage: python benchmark.py [comma_separated_lengths] [patterns_per_length] [pattern_length]")
            sys.exit(1)

    rng = np.random.default_rng()
    summaries = []
    pattern_results = []

    try:
        for length in lengths:
            print(f"Testing: sequence of length {length:,} with {n_patterns} patterns of length {pattern_length}")
            summary, rows = run_benchmark(length, n_patterns, pattern_length, rng)
            summaries.append(summary)
            pattern_results.extend(rows)
            print(f"  Built in {summary['build_time']:.3f}s ({summary['nodes']:,} nodes)")

        df_build = pd.DataFrame(summaries)
        df_search = pd.DataFrame(pattern_results)
        df = df_search.merge(df_build, on='sequence_length')
        df.to_csv('benchmark_results.csv', index=False)

        print("\nBenchmark Summary:")
        print("=================")
        for length in lengths:
            data = df_search[df_search['sequence_length'] == length]
            build_row = df_build[df_build['sequence_length'] == length].iloc[0]
            print(f"\nSequence length: {length:,}")
            print(f"Construction time: {build_row['build_time']:.4f}s ({build_row['bases_per_second']:.0f} bases/second)")
            print(f"Average tree lookup: {data['tree_time'].mean():.6f}s")
            print(f"Average naive scan: {data['naive_time'].mean():.6f}s")
            print(f"All results agree: {bool(data['agree'].all())}")

        plt.figure(figsize=(12, 6))

        plt.subplot(1, 2, 1)
        plt.plot(df_build['sequence_length'], df_build['build_time'], marker='o')
        plt.xlabel('Sequence Length')
        plt.ylabel('Construction Time (s)')
        plt.title('Construction Time vs Sequence Length')
        plt.grid(True, alpha=0.3)

        plt.subplot(1, 2, 2)
        lookup = df_search.groupby('sequence_length')[['tree_time', 'naive_time']].mean()
        plt.plot(lookup.index, lookup['tree_time'], marker='o', label='Suffix tree')
        plt.plot(lookup.index, lookup['naive_time'], marker='o', label='Naive scan')
        plt.xlabel('Sequence Length')
        plt.ylabel('Mean Lookup Time (s)')
        plt.yscale('log')
        plt.title('Lookup Time vs Sequence Length')
        plt.grid(True, alpha=0.3)
        plt.legend()

        plt.tight_layout()
        plt.savefig('benchmark_results.png', dpi=300, bbox_inches='tight')
        plt.close()

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user.")


if __name__ == '__main__':
    main()
