"""Minimum-energy solver for the amphipod burrow sorting puzzle."""

__version__ = "0.1.0"
