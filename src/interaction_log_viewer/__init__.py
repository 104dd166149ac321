"""Derived metrics and session rollups over AI-agent interaction logs."""

__version__ = "0.1.0"
