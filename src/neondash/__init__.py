"""NEON DASH - endless rhythm runner."""

__version__ = "0.1.0"
