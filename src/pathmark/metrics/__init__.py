"""Complexity metrics: NPath engine, cyclomatic counter, anchor policy."""

from pathmark.metrics.anchors import Anchor, find_anchors, measure_cyclomatic, measure_npath
from pathmark.metrics.errors import (
    MeasurementError,
    NestingTooDeepError,
    StackImbalanceError,
    StackUnderflowError,
)
from pathmark.metrics.npath import NPathVisitor, npath_complexity

__all__ = [
    "Anchor",
    "MeasurementError",
    "NPathVisitor",
    "NestingTooDeepError",
    "StackImbalanceError",
    "StackUnderflowError",
    "find_anchors",
    "measure_cyclomatic",
    "measure_npath",
    "npath_complexity",
]
