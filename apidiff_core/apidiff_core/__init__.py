"""Structural diff of compiled Java API surfaces."""

__version__ = "0.1.0"
