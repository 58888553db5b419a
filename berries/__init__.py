"""Berries: 9x9 three-per-unit clue puzzle generator and solver."""

__version__ = "1.0.0"
