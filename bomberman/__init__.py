"""Bomberman: grid arcade simulation engine."""

__version__ = "0.1.0"
