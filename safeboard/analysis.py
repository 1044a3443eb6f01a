"""Diagnostics and benchmarking tools for the solvable-board generator."""

import random
import time
from typing import Any, Dict, List, Optional, Set, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .board import Board
from .config import DIFFICULTIES
from .generator import SolvableBoardGenerator
from .solver import SolveResult, solve
from .utils import build_safe_zone


def format_solver_view(
    board: Board, result: SolveResult, *, show_coords: bool = True
) -> str:
    """
    Format what deduction reached on a board as a human-readable string.

    Args:
        board: The board the solver ran on.
        result: The solver's result for that board.
        show_coords: If True, include coordinate labels and a header.

    Returns:
        A text grid where revealed cells show their number, deduced mines
        are 'F', mines never reached are 'M' and unreached safe cells '.'.
    """
    w, h = board.columns, board.rows

    def cell_char(x: int, y: int) -> str:
        key = board.key(x, y)
        cell = board.cells[y][x]
        if key in result.flagged:
            return "F"
        if key in result.revealed:
            return "M" if cell.is_mine else str(cell.adjacent_mines)
        return "M" if cell.is_mine else "."

    lines: List[str] = []
    if show_coords:
        header = " ".join(f"{x:2d}" for x in range(w))
        lines.append("   " + header)
        lines.append("   " + "-" * (3 * w - 1))

    for y in range(h):
        row = " ".join(f" {cell_char(x, y)}" for x in range(w))
        lines.append(f"{y:2d} |" + row if show_coords else row)

    return "\n".join(lines)


def find_fifty_fifty_patterns(
    board: Board, result: SolveResult
) -> List[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """
    Find unknown cell pairs that two revealed numbers both split one mine between.

    Such a pair (classic 1-1 pattern against a wall) cannot be resolved by
    any local deduction, so it usually explains why a layout stalled.

    Returns:
        Sorted list of unknown cell pairs ((x1, y1), (x2, y2)).
    """
    by_pair: Dict[Tuple[Tuple[int, int], Tuple[int, int]], Set[int]] = {}

    for x, y in board.iter_coords():
        key = board.key(x, y)
        adjacent = board.cells[y][x].adjacent_mines
        if key not in result.revealed or not adjacent:
            continue

        unknown: List[Tuple[int, int]] = []
        flagged = 0
        for nx, ny in board.neighbors(x, y):
            nkey = board.key(nx, ny)
            if nkey in result.flagged:
                flagged += 1
            elif nkey not in result.revealed:
                unknown.append((nx, ny))

        if len(unknown) == 2 and adjacent - flagged == 1:
            a, b = sorted(unknown)
            by_pair.setdefault((a, b), set()).add(key)

    return sorted(pair for pair, owners in by_pair.items() if len(owners) >= 2)


def centered_safe_zone(rows: int, columns: int) -> List[Tuple[int, int]]:
    """Safe zone for a first click in the middle of the board."""
    return build_safe_zone(columns // 2, rows // 2, columns, rows)


def run_generator_single_test(
    rows: int,
    columns: int,
    mine_count: int,
    *,
    show_board: bool = False,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """
    Generate one board with a centered first click and report how it went.

    Args:
        rows: Board height.
        columns: Board width.
        mine_count: Total number of mines on the board.
        show_board: If True, print the layout and what deduction reaches.
        rng: Random source passed to the generator.

    Returns:
        The generator metrics plus "success", "elapsed_seconds",
        "unsolved_count" and "fifty_fifty_count".
    """
    board = Board(rows, columns)
    safe_zone = centered_safe_zone(rows, columns)
    generator = SolvableBoardGenerator(board, mine_count, rng=rng)

    start = time.perf_counter()
    success = generator.generate(safe_zone)
    elapsed = time.perf_counter() - start

    result = solve(board, safe_zone)
    fifty_fifties = find_fifty_fifty_patterns(board, result)

    if show_board:
        print(f"Board {columns}x{rows}, {mine_count} mines, success={success}")
        print(format_solver_view(board, result, show_coords=True))
        print()
        print(f"Attempts: {generator.attempts_count}, unsolved: {result.unsolved_count}")

    out = generator.metrics()
    out["success"] = success
    out["elapsed_seconds"] = elapsed
    out["unsolved_count"] = result.unsolved_count
    out["fifty_fifty_count"] = len(fifty_fifties)
    return out


def run_generator_many_tests(
    rows: int,
    columns: int,
    mine_count: int,
    runs: int,
    *,
    rng: Optional[random.Random] = None,
) -> Dict[str, float]:
    """
    Run many independent generations and return averaged metrics plus success rate.

    Returns:
        - success_rate
        - repaired_rate: share of successes that needed the repair engine
        - avg_attempts_count, p95_attempts_count
        - avg_repair_iterations, avg_swaps_accepted
        - avg_elapsed_seconds, p95_elapsed_seconds, max_elapsed_seconds
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    success = np.zeros(runs, dtype=bool)
    repaired = np.zeros(runs, dtype=bool)
    attempts = np.zeros(runs, dtype=np.int64)
    repair_iterations = np.zeros(runs, dtype=np.int64)
    swaps = np.zeros(runs, dtype=np.int64)
    elapsed = np.zeros(runs, dtype=np.float64)

    for i in range(runs):
        payload = run_generator_single_test(rows, columns, mine_count, rng=rng)
        success[i] = bool(payload["success"])
        repaired[i] = bool(payload["solved_by_repair"])
        attempts[i] = int(payload["attempts_count"])
        repair_iterations[i] = int(payload["repair_iterations"])
        swaps[i] = int(payload["swaps_accepted"])
        elapsed[i] = float(payload["elapsed_seconds"])

    successes = int(success.sum())
    return {
        "success_rate": successes / runs,
        "repaired_rate": (float(repaired.sum()) / successes) if successes else 0.0,
        "avg_attempts_count": float(attempts.mean()),
        "p95_attempts_count": float(np.percentile(attempts, 95)),
        "avg_repair_iterations": float(repair_iterations.mean()),
        "avg_swaps_accepted": float(swaps.mean()),
        "avg_elapsed_seconds": float(elapsed.mean()),
        "p95_elapsed_seconds": float(np.percentile(elapsed, 95)),
        "max_elapsed_seconds": float(elapsed.max()),
    }


def run_generator_difficulty_analysis(
    runs: int,
    *,
    rng: Optional[random.Random] = None,
    show_plots: bool = True,
) -> Dict[str, Dict[str, float]]:
    """
    Run aggregated generator tests on the difficulty presets and plot summaries.

    Standard difficulty levels:
        - easy: 9x9, 10 mines
        - medium: 16x16, 40 mines
        - hard: 30x16, 99 mines

    Returns:
        Mapping from level name to statistics dict returned by run_generator_many_tests().
    """
    results: Dict[str, Dict[str, float]] = {}
    for level, (rows, columns, mines) in DIFFICULTIES.items():
        results[level] = run_generator_many_tests(rows, columns, mines, runs, rng=rng)

    if not show_plots:
        return results

    level_names = list(DIFFICULTIES.keys())
    x = np.arange(len(level_names))
    bar_w = 0.35

    # 1) Success rate and share solved through repair
    success_rates = [results[n]["success_rate"] for n in level_names]
    repaired_rates = [results[n]["repaired_rate"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w / 2, success_rates, width=bar_w, label="success")  # type: ignore[misc]
    plt.bar(x + bar_w / 2, repaired_rates, width=bar_w, label="needed repair")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Solvable generation rate by difficulty level")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 2) Attempts per generation
    avg_attempts = [results[n]["avg_attempts_count"] for n in level_names]
    p95_attempts = [results[n]["p95_attempts_count"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w / 2, avg_attempts, width=bar_w, label="mean")  # type: ignore[misc]
    plt.bar(x + bar_w / 2, p95_attempts, width=bar_w, label="p95")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Attempts")  # type: ignore[misc]
    plt.title("Placement attempts per generation")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 3) Wall-clock time
    avg_elapsed = [results[n]["avg_elapsed_seconds"] for n in level_names]
    max_elapsed = [results[n]["max_elapsed_seconds"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w / 2, avg_elapsed, width=bar_w, label="mean")  # type: ignore[misc]
    plt.bar(x + bar_w / 2, max_elapsed, width=bar_w, label="max")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Seconds")  # type: ignore[misc]
    plt.title("Generation time by difficulty level")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    return results
