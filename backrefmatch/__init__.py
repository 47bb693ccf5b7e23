"""Whole-string regex matching with back-references, and suffix array construction."""

__version__ = "0.1.0"