"""Pool module for storing pre-generated puzzles."""

from .pool import (
    PuzzleEntry,
    PuzzlePool,
    PoolFormatError,
    DEFAULT_POOL_PATH,
    encode_clues81,
    decode_clues81,
    validate_clues81,
    human_complexity,
    score,
    sort_pool,
    read_pool,
    write_pool_atomic,
    generate_entries,
    load_puzzle,
)

__all__ = [
    "PuzzleEntry",
    "PuzzlePool",
    "PoolFormatError",
    "DEFAULT_POOL_PATH",
    "encode_clues81",
    "decode_clues81",
    "validate_clues81",
    "human_complexity",
    "score",
    "sort_pool",
    "read_pool",
    "write_pool_atomic",
    "generate_entries",
    "load_puzzle",
]
