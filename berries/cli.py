"""Command-line interface for the berry puzzle generator and solver."""

import argparse
import logging
import random
import signal
import sys

from .core.puzzle import ClueGrid
from .core.validator import find_violations
from .generator import Difficulty, MinimizerConfig
from .pool import (
    DEFAULT_POOL_PATH,
    PoolFormatError,
    decode_clues81,
    generate_entries,
    read_pool,
    sort_pool,
    write_pool_atomic,
)
from .pool.pool import utc_timestamp
from .solvers import ConstraintSolver


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Berry Puzzle Generator & Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Append 300 puzzles with 5 extra clues and no empty blocks
  python -m berries.cli generate --count 300 -x 5 -ne

  # Sort an existing pool by score
  python -m berries.cli sort --out assets/pool/puzzlePool.v1.json

  # Solve a clue grid (81 comma-separated values, -1 for no clue)
  python -m berries.cli solve --clues="-1,2,-1,..."
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate puzzles into a pool file")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=1,
        help="Number of puzzles to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--extra-clues", "-x", type=int, default=None,
        help="Extra clues to add after minimization (integer >= 0, default: 0)"
    )
    gen_parser.add_argument(
        "--non-empty-blocks", "-ne", action="store_true",
        help="Ensure each 3x3 block has at least one clue"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=[d.value for d in Difficulty],
        default=None,
        help="Difficulty preset (overrides -x and -ne)"
    )
    gen_parser.add_argument(
        "--out", "-o", type=str, default=DEFAULT_POOL_PATH,
        help=f"Output JSON pool file (default: {DEFAULT_POOL_PATH})"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--no-progress", action="store_true",
        help="Hide the progress bar"
    )

    # Sort command
    sort_parser = subparsers.add_parser("sort", help="Sort a pool file by score")
    sort_parser.add_argument(
        "--out", "-o", type=str, default=DEFAULT_POOL_PATH,
        help=f"Pool file to sort in place (default: {DEFAULT_POOL_PATH})"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a clue grid")
    solve_parser.add_argument(
        "--clues", "-c", type=str, required=True,
        help="81 comma-separated values, -1 for no clue (use --clues=...)"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check a player board against clues")
    check_parser.add_argument(
        "--board", "-b", type=str, required=True,
        help="81 comma-separated cell states: -1 empty, 0 unknown, 1 berry"
    )
    check_parser.add_argument(
        "--clues", "-c", type=str, required=True,
        help="81 comma-separated values, -1 for no clue (use --clues=...)"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "sort":
        cmd_sort(args)
    elif args.command == "solve":
        cmd_solve(args)
    elif args.command == "check":
        cmd_check(args)


def _parse_ints(text: str, what: str):
    try:
        values = [int(v) for v in text.replace(" ", "").split(",") if v != ""]
    except ValueError as e:
        print(f"Error parsing {what}: {e}")
        sys.exit(1)
    if len(values) != 81:
        print(f"Error parsing {what}: expected 81 values, got {len(values)}")
        sys.exit(1)
    return values


def _parse_clues(text: str) -> ClueGrid:
    try:
        return decode_clues81(_parse_ints(text, "clues"))
    except PoolFormatError as e:
        print(f"Error parsing clues: {e}")
        sys.exit(1)


def _config_from_args(args) -> MinimizerConfig:
    if args.difficulty is not None:
        return Difficulty(args.difficulty).config
    extra = 0 if args.extra_clues is None else args.extra_clues
    return MinimizerConfig(extra_clues=extra, non_empty_blocks=args.non_empty_blocks)


def cmd_generate(args):
    """Handle the generate command."""
    if args.count <= 0:
        print(f"Invalid --count: {args.count}")
        sys.exit(1)

    config = _config_from_args(args)
    try:
        config.validate()
    except ValueError as e:
        print(f"Invalid -x/--extra-clues: {e}")
        sys.exit(1)

    try:
        pool = read_pool(args.out, config.extra_clues, config.non_empty_blocks)
    except PoolFormatError as e:
        print(f"Error reading pool: {e}")
        sys.exit(1)

    print(f"Appending {args.count} puzzle(s) to: {args.out}")
    print(f"Mode: extraClues={config.extra_clues}, "
          f"nonEmptyBlocks={'ON' if config.non_empty_blocks else 'OFF'}")
    print(f"Already in pool: {len(pool.puzzles)}")

    # Ctrl+C stops after the current puzzle; progress is saved every entry.
    interrupted = [False]

    def on_sigint(signum, frame):
        interrupted[0] = True
        print("\nSIGINT received. Saving progress and exiting...")

    previous_handler = signal.signal(signal.SIGINT, on_sigint)

    def on_entry(entry):
        write_pool_atomic(args.out, pool)
        if args.no_progress:
            print(f"#{len(pool.puzzles)} generated in {entry.gen_seconds}s")
        return not interrupted[0]

    rng = random.Random(args.seed).random
    try:
        generate_entries(
            pool, args.count, config, rng=rng,
            progress=not args.no_progress, on_entry=on_entry,
        )
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    print(f"Done. Pool size: {len(pool.puzzles)}")


def cmd_sort(args):
    """Handle the sort command."""
    try:
        pool = read_pool(args.out)
    except PoolFormatError as e:
        print(f"Error reading pool: {e}")
        sys.exit(1)

    print(f"Sorting pool in: {args.out}")
    print(f"Pool size: {len(pool.puzzles)}")

    sort_pool(pool)
    pool.generated_at_utc = utc_timestamp()
    write_pool_atomic(args.out, pool)
    print("Done.")


def cmd_solve(args):
    """Handle the solve command."""
    clues = _parse_clues(args.clues)

    print("Input clues:")
    print(clues)
    print()

    solver = ConstraintSolver()
    count, _ = solver.count(clues, cap=2)
    solution, solve_stats = solver.solve(clues)

    if solution is None:
        print("✗ No solution")
        sys.exit(1)

    print(f"✓ Solved in {solve_stats.time_seconds:.4f}s "
          f"({'unique' if count == 1 else 'not unique'})")
    print(f"  Nodes explored: {solve_stats.nodes_explored:,}")
    print(f"  Backtracks: {solve_stats.backtracks:,}")
    print(solution)


def cmd_check(args):
    """Handle the check command."""
    player = _parse_ints(args.board, "board")
    if any(v not in (-1, 0, 1) for v in player):
        print("Error parsing board: cell states must be -1, 0 or 1")
        sys.exit(1)
    clues = _parse_clues(args.clues)

    rows = [player[i * 9:(i + 1) * 9] for i in range(9)]
    violations = find_violations(rows, clues)

    if not violations.any():
        print("✓ No violations")
        return

    for i in range(9):
        if violations.row[i]:
            print(f"✗ Row {i}")
        if violations.col[i]:
            print(f"✗ Column {i}")
        if violations.block[i]:
            print(f"✗ Block {i}")
    for v in violations.violated_clues:
        print(f"✗ Clue {v.clue} at ({v.row},{v.col}): "
              f"{v.berries} berries, {v.unknown} unknown")
    sys.exit(1)


if __name__ == "__main__":
    main()
