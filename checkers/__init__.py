"""Checkers engine with flying kings, forced chain captures and a minimax opponent."""

__version__ = "1.0.0"
