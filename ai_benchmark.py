#!/usr/bin/env python3
"""
Yahtzee AI Benchmark — Play N solo games per bot strength and print score distributions.

Usage: python ai_benchmark.py [--games N] [--strength NAME]
       python ai_benchmark.py --verbose --games 50
       python ai_benchmark.py --csv --games 200
"""
import argparse
import random
import statistics
import time

from ai import play_game
from weights import STRENGTHS


def benchmark_strength(strength, num_games, start_seed=0):
    """Play num_games at a strength and return final totals and elapsed time."""
    scores = []
    t0 = time.perf_counter()
    for seed in range(start_seed, start_seed + num_games):
        result = play_game(strength, rng=random.Random(seed))
        scores.append(result.total)
    elapsed = time.perf_counter() - t0
    return scores, elapsed


def _summary(scores):
    sorted_scores = sorted(scores)
    n = len(sorted_scores)
    return {
        "avg": sum(scores) / n,
        "stdev": statistics.stdev(scores) if n >= 2 else 0.0,
        "median": statistics.median(scores),
        "min": sorted_scores[0],
        "max": sorted_scores[-1],
        "p25": sorted_scores[n // 4],
        "p75": sorted_scores[(3 * n) // 4],
    }


def print_results(name, scores, elapsed, verbose=False):
    """Print formatted benchmark results; verbose adds stdev, median and percentiles."""
    s = _summary(scores)
    per_game = elapsed / len(scores) * 1000  # ms per game
    print(f"  {name:12s}  avg={s['avg']:6.1f}  min={s['min']:4d}  max={s['max']:4d}  "
          f"({len(scores)} games in {elapsed:.2f}s, {per_game:.1f}ms/game)")

    if verbose:
        print(f"  {'':12s}  stdev={s['stdev']:5.1f}  median={s['median']:5.0f}  "
              f"p25={s['p25']:4d}  p75={s['p75']:4d}")


def print_csv_header():
    """Print CSV header row."""
    print("strength,games,avg,stdev,median,min,max,p25,p75,elapsed_s")


def print_csv_row(name, scores, elapsed):
    """Print one CSV data row."""
    s = _summary(scores)
    print(f"{name},{len(scores)},{s['avg']:.1f},{s['stdev']:.1f},{s['median']:.0f},"
          f"{s['min']},{s['max']},{s['p25']},{s['p75']},{elapsed:.2f}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Yahtzee AI Benchmark")
    parser.add_argument("--games", type=int, default=20,
                        help="Number of games per strength (default: 20)")
    parser.add_argument("--seed", type=int, default=0,
                        help="Seed of the first game (default: 0)")
    parser.add_argument("--strength", choices=STRENGTHS,
                        help="Run only a single strength (default: all)")
    parser.add_argument("--verbose", action="store_true",
                        help="Show extra statistics (stdev, median, percentiles)")
    parser.add_argument("--csv", action="store_true",
                        help="Output results as CSV")
    args = parser.parse_args(argv)

    strengths = [args.strength] if args.strength else list(STRENGTHS)

    if args.csv:
        print_csv_header()
        for name in strengths:
            scores, elapsed = benchmark_strength(name, args.games, args.seed)
            print_csv_row(name, scores, elapsed)
    else:
        print(f"Yahtzee AI Benchmark — {args.games} games per strength")
        print("=" * 80)

        for name in strengths:
            scores, elapsed = benchmark_strength(name, args.games, args.seed)
            print_results(name, scores, elapsed, verbose=args.verbose)

        print("=" * 80)


if __name__ == "__main__":
    main()
