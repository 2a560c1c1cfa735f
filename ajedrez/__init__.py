"""A chess game against a minimax opponent, with undo and plain text save files."""

__version__ = "0.1.0"