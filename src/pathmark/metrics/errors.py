"""Exceptions raised while measuring a single anchor.

All of them derive from :class:`MeasurementError` so callers can contain a
failure to the one measurement that produced it.
"""

from __future__ import annotations


class MeasurementError(Exception):
    """Base class for failures of one complexity measurement."""


class StackUnderflowError(MeasurementError):
    """A combination rule popped more values than it pushed."""

    def __init__(self, operation: str = "pop"):
        super().__init__(f"path-count stack underflow on {operation}()")
        self.operation = operation


class StackImbalanceError(MeasurementError):
    """A top-level traversal did not leave exactly one value behind."""

    def __init__(self, depth: int):
        super().__init__(f"traversal left {depth} values on the path-count stack, expected 1")
        self.depth = depth


class NestingTooDeepError(MeasurementError):
    """The syntax tree nests deeper than the configured limit."""

    def __init__(self, limit: int):
        super().__init__(f"syntax tree nesting exceeds the limit of {limit} levels")
        self.limit = limit
