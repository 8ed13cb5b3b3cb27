"""Guillotine cut optimization for rectangular glass and panel stock."""

__version__ = "0.1.0"
