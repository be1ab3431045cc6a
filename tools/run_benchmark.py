#!/usr/bin/env python3
"""
Engine Benchmark Runner

Runs the tactical suite, the exhaustive unbeatable check for both sides,
and a batch of games against a random opponent.

Usage:
    python tools/run_benchmark.py [--games 1000] [--seed 42] [--verbose]
"""

import sys
import argparse
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from tictactoe_engine.board import Cell
from tictactoe_engine.search import MoveSearch
from tictactoe_engine.utils.testing import (
    count_positions,
    play_random_games,
    run_tactics_suite,
    self_play,
    verify_unbeatable,
)


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def format_counts(counts: dict) -> str:
    return (
        f"{counts['games']:,} games: {counts['computer_wins']:,} wins, "
        f"{counts['draws']:,} draws, {counts['computer_losses']:,} losses"
    )


def run_benchmark(num_games: int, seed: int, verbose: bool = False):
    """
    Run the full benchmark.

    Args:
        num_games: Number of random-opponent games per side
        seed: Seed for the random opponent
        verbose: If True, print detailed results for each tactical position
    """
    search = MoveSearch(maximizer=Cell.O)

    print("=" * 80)
    print("BENCHMARK - TicTacToe Engine")
    print("=" * 80)
    print("Search: Exhaustive minimax + transposition table")
    print(f"Random games per side: {num_games}")
    print("=" * 80)

    start_time = time.time()
    tactics = run_tactics_suite(search, verbose=verbose)
    print(f"\nTactics: {tactics['score']}/{tactics['total']} ({tactics['percentage']:.1f}%)")

    failed = [r for r in tactics['results'] if not r.correct]
    for r in failed:
        print(f"    {r.position.id}: Expected {r.position.best_moves}, got {r.found_move}")

    print("\nExhaustive opponent check:")
    for computer_mark in (Cell.X, Cell.O):
        counts = verify_unbeatable(search, computer_mark=computer_mark)
        print(f"  Engine as {computer_mark.value}: {format_counts(counts)}")

    outcome, moves = self_play(search)
    print(f"\nSelf-play: {' '.join(str(m) for m in moves)} → {outcome}")

    print("\nRandom opponent:")
    for computer_mark in (Cell.X, Cell.O):
        counts = play_random_games(
            search, num_games, computer_mark=computer_mark, seed=seed, progress=True
        )
        print(f"  Engine as {computer_mark.value}: {format_counts(counts)}")

    census = count_positions()
    print(
        f"\nPositions: {census['positions']:,} reachable, {census['classes']:,} up to symmetry, "
        f"{census['terminal']:,} terminal, {census['games']:,} games"
    )

    total_time = time.time() - start_time
    stats = search.transposition_table.get_stats()
    print(f"\nTT entries: {stats['entries']:,}, hit rate {stats['hit_rate']:.1f}%")
    print(f"Total time: {format_time(total_time)}")

    print("\n" + "=" * 80)
    print("Benchmark complete!")
    print("=" * 80)


def main():
    parser = argparse.ArgumentParser(
        description="Run the engine benchmark"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=1000,
        help="Random-opponent games per side (default: 1000)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed for the random opponent (default: 42)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print detailed results for each tactical position"
    )

    args = parser.parse_args()

    try:
        run_benchmark(args.games, args.seed, verbose=args.verbose)
    except KeyboardInterrupt:
        print("\n\nBenchmark interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
