"""Typed access to Taskwarrior through its command line."""

__version__ = "0.1.0"
