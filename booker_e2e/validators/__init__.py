"""Validators module - response expectations."""

from .assertion_engine import AssertionEngine, AssertionReport, AssertionResult

__all__ = [
    "AssertionEngine",
    "AssertionReport",
    "AssertionResult",
]
