"""Puzzle pool file: a JSON document of pre-generated puzzles.

Format (version 1)::

    {
      "version": 1,
      "N": 9,
      "generatedAtUtc": "2024-01-01T00:00:00.000Z",
      "extraClues": 0,
      "nonEmptyBlocks": false,
      "puzzles": [
        {"genSeconds": 0.412, "humanComplex": 400, "clues81": [-1, 2, ...]}
      ]
    }

``clues81`` lists the clue grid row-major; -1 means no clue.
"""

from __future__ import annotations
import json
import logging
import math
import os
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from tqdm import tqdm

from ..core.board import N
from ..core.puzzle import ClueGrid, Puzzle, MAX_CLUE, NO_CLUE
from ..core.rng import Rng, make_rng
from ..generator.generator import make_puzzle
from ..generator.minimizer import MinimizerConfig
from ..solvers.constraint_solver import solve_first

logger = logging.getLogger(__name__)

POOL_VERSION = 1
DEFAULT_POOL_PATH = os.path.join("assets", "pool", "puzzlePool.v1.json")


class PoolFormatError(ValueError):
    """Raised for malformed pool documents or records."""


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


@dataclass
class PuzzleEntry:
    """One pool record."""
    gen_seconds: float
    human_complex: float
    clues81: List[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "genSeconds": self.gen_seconds,
            "humanComplex": self.human_complex,
            "clues81": list(self.clues81),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PuzzleEntry:
        try:
            return cls(
                gen_seconds=float(data["genSeconds"]),
                human_complex=float(data["humanComplex"]),
                clues81=list(data["clues81"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PoolFormatError(f"Invalid puzzle entry: {e}") from e


@dataclass
class PuzzlePool:
    """A pool document."""
    generated_at_utc: str = field(default_factory=utc_timestamp)
    extra_clues: int = 0
    non_empty_blocks: bool = False
    puzzles: List[PuzzleEntry] = field(default_factory=list)
    version: int = POOL_VERSION
    size: int = N

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "N": self.size,
            "generatedAtUtc": self.generated_at_utc,
            "extraClues": self.extra_clues,
            "nonEmptyBlocks": self.non_empty_blocks,
            "puzzles": [p.to_dict() for p in self.puzzles],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PuzzlePool:
        if not isinstance(data, dict):
            raise PoolFormatError("Pool document must be a JSON object")
        if data.get("version") != POOL_VERSION:
            raise PoolFormatError(f"Unsupported pool version: {data.get('version')}")
        if data.get("N") != N:
            raise PoolFormatError(f"Pool N mismatch: file={data.get('N')}, code={N}")
        if not isinstance(data.get("puzzles"), list):
            raise PoolFormatError("Pool puzzles must be an array")

        try:
            extra_clues = int(data.get("extraClues", 0))
        except (TypeError, ValueError) as e:
            raise PoolFormatError(f"Invalid extraClues: {e}") from e

        return cls(
            generated_at_utc=str(data.get("generatedAtUtc", "")),
            extra_clues=extra_clues,
            non_empty_blocks=bool(data.get("nonEmptyBlocks", False)),
            puzzles=[PuzzleEntry.from_dict(p) for p in data["puzzles"]],
        )


# ---------- Encoding ----------

def encode_clues81(grid: ClueGrid) -> List[int]:
    """Flatten a clue grid row-major, -1 for cells without a clue."""
    return grid.to_list81()


def validate_clues81(values: Sequence[Any]) -> None:
    """
    Check a clues81 record.

    Raises:
        PoolFormatError: if the length is wrong or a value is not -1 or 0-8.
    """
    if len(values) != N * N:
        raise PoolFormatError(f"clues81 must be length {N * N}")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int):
            raise PoolFormatError(f"Invalid clues81 value: {v!r}")
        if v != NO_CLUE and not 0 <= v <= MAX_CLUE:
            raise PoolFormatError(f"Invalid clues81 value: {v}")


def decode_clues81(values: Sequence[int]) -> ClueGrid:
    """Validate and rebuild a clue grid from a clues81 record."""
    validate_clues81(values)
    return ClueGrid.from_list81(values)


# ---------- Scoring ----------

def human_complexity(extra_clues: int, non_empty_blocks: bool) -> float:
    """Rough difficulty heuristic: fewer extra clues means harder."""
    return 200 + max(0, 20 - extra_clues) * 10 + (-15 if non_empty_blocks else 0)


def score(entry: PuzzleEntry) -> float:
    """Sort key: humanComplex + 100 * sqrt(genSeconds)."""
    return entry.human_complex + 100 * math.sqrt(max(0.0, entry.gen_seconds))


def sort_pool(pool: PuzzlePool) -> None:
    """Sort pool puzzles by ascending score in place, keeping ties in order."""
    pool.puzzles.sort(key=score)


# ---------- File IO ----------

def read_pool(
    path: str,
    extra_clues: Optional[int] = None,
    non_empty_blocks: Optional[bool] = None,
) -> PuzzlePool:
    """
    Load a pool file, or start a new pool if the file does not exist.

    Metadata passed in replaces the stored metadata; existing puzzles are
    kept.

    Raises:
        PoolFormatError: if the document is not a valid version 1 pool.
    """
    if not os.path.exists(path):
        return PuzzlePool(
            extra_clues=extra_clues or 0,
            non_empty_blocks=bool(non_empty_blocks),
        )

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise PoolFormatError(f"Pool file is not valid JSON: {e}") from e

    pool = PuzzlePool.from_dict(data)
    if extra_clues is not None:
        pool.extra_clues = extra_clues
    if non_empty_blocks is not None:
        pool.non_empty_blocks = non_empty_blocks
    return pool


def write_pool_atomic(path: str, pool: PuzzlePool) -> None:
    """Write the pool to a temporary file, then rename it over path."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(pool.to_dict(), f, indent=2)
    os.replace(tmp_path, path)
    logger.info("Wrote %d puzzles to %s", len(pool.puzzles), path)


# ---------- Generation and loading ----------

def generate_entries(
    pool: PuzzlePool,
    count: int,
    config: Optional[MinimizerConfig] = None,
    rng: Optional[Rng] = None,
    progress: bool = True,
    on_entry: Optional[Callable[[PuzzleEntry], bool]] = None,
) -> List[PuzzleEntry]:
    """
    Generate puzzles and append them to the pool.

    Args:
        pool: Pool to append to; its metadata is updated to the settings.
        count: Number of puzzles to generate.
        config: Minimizer settings.
        rng: Source of uniform floats in [0, 1).
        progress: Show a tqdm progress bar.
        on_entry: Called after each entry is appended (e.g. to save the pool
                  incrementally); returning False stops early.

    Returns:
        The new entries.
    """
    config = config or MinimizerConfig()
    config.validate()
    rng = make_rng(rng)

    pool.extra_clues = config.extra_clues
    pool.non_empty_blocks = config.non_empty_blocks
    complexity = human_complexity(config.extra_clues, config.non_empty_blocks)

    entries = []
    for _ in tqdm(range(count), desc="Generating", disable=not progress):
        start_time = time.perf_counter()
        puzzle = make_puzzle(
            extra_clues=config.extra_clues,
            non_empty_blocks=config.non_empty_blocks,
            rng=rng,
        )
        gen_seconds = time.perf_counter() - start_time

        clues81 = encode_clues81(puzzle.puzzle_clues)
        validate_clues81(clues81)

        entry = PuzzleEntry(
            gen_seconds=round(gen_seconds, 3),
            human_complex=complexity,
            clues81=clues81,
        )
        pool.puzzles.append(entry)
        pool.generated_at_utc = utc_timestamp()
        entries.append(entry)

        if on_entry is not None and on_entry(entry) is False:
            break

    return entries


def load_puzzle(entry: PuzzleEntry) -> Optional[Puzzle]:
    """
    Rebuild a puzzle from a pool record by solving its clues.

    Returns:
        The puzzle, or None if the clues have no solution.

    Raises:
        PoolFormatError: if the record is malformed.
    """
    clues = decode_clues81(entry.clues81)
    solution = solve_first(clues)
    if solution is None:
        logger.warning("Pool record has no solution; skipping")
        return None
    return Puzzle(solution=solution, puzzle_clues=clues)
