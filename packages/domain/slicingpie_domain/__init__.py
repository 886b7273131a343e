"""Slicing Pie Domain Engine - dynamic equity split for early-stage startups.

This package provides the equity computation layer:
- Slices from contributions of time, cash, non-cash assets, ideas and relationships
- Ownership percentages from slice totals
- Cliff + linear vesting, current and projected
- Company valuation and dollar value of each stake

The domain layer is designed to be:
- Framework-agnostic (no web, storage or UI dependencies)
- Pure (no I/O, no clock reads; "now" is always passed in)
- Testable (plain Python with Pydantic validation)
"""

from .schemas import *  # noqa: F403, F401

__version__ = "0.1.0"
