"""
Quickstart example for the solvable-board generator.

This script demonstrates basic usage of the generator and solver.
"""

import logging

from safeboard import (
    Board,
    SolvableBoardGenerator,
    build_safe_zone,
    format_solver_view,
    run_generator_many_tests,
    solve,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Solvable Board Generator - Quickstart Example")
    print("=" * 60)

    # Example 1: Generate a single board
    print("\n1. Generating an Intermediate board (16x16, 40 mines), first click (8, 8)...")
    print("-" * 60)

    board = Board(rows=16, columns=16)
    safe_zone = build_safe_zone(8, 8, board.columns, board.rows)

    generator = SolvableBoardGenerator(board, mine_count=40)
    success = generator.generate(safe_zone)

    print(f"Result: {'SOLVABLE' if success else 'NEEDS GUESS'}")
    print(f"Attempts: {generator.attempts_count}")
    print(f"Repair iterations: {generator.repair_iterations}")
    print(f"Accepted swaps: {generator.swaps_accepted}")

    # Example 2: Show what deduction reaches
    print("\n2. Deduction from the first click:")
    print("-" * 60)
    result = solve(board, safe_zone)
    print(format_solver_view(board, result))
    print(f"Unsolved safe cells: {result.unsolved_count}")

    # Example 3: Compare difficulty levels
    print("\n3. Success rates by difficulty level (10 boards each)...")
    print("-" * 60)

    difficulties = [
        ("Beginner", 9, 9, 10),
        ("Intermediate", 16, 16, 40),
        ("Expert", 16, 30, 99),
    ]

    logging.getLogger("safeboard").setLevel(logging.WARNING)
    for name, rows, columns, mines in difficulties:
        results = run_generator_many_tests(rows, columns, mines, runs=10)
        print(
            f"{name:15s} ({columns}x{rows}, {mines:2d} mines): "
            f"{results['success_rate']*100:5.1f}% solvable, "
            f"{results['avg_attempts_count']:.1f} attempts, "
            f"{results['avg_elapsed_seconds']*1000:.0f} ms"
        )

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
