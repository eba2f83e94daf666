"""Syncode: keep AI coding agent configurations in one git repository."""

__version__ = "0.1.0"
