"""Hatchery: timed stat effects and luck-weighted egg hatching."""

__version__ = "1.0.0"
