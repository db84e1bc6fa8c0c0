"""Hexagonal grid puzzle game with timed gates, temporal walls and a solver."""

__version__ = "0.1.0"