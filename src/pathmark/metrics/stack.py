"""LIFO stack of path counts used by the NPath traversal."""

from __future__ import annotations

from pathmark.metrics.errors import StackUnderflowError


class PathCountStack:
    """Push/pop/peek stack of non-negative integers.

    Depth is bounded by the nesting depth of the measured tree, never by its
    size, so a plain list is enough.
    """

    __slots__ = ("_items",)

    def __init__(self):
        self._items: list[int] = []

    def push(self, value: int) -> None:
        self._items.append(value)

    def pop(self) -> int:
        if not self._items:
            raise StackUnderflowError("pop")
        return self._items.pop()

    def peek(self) -> int:
        if not self._items:
            raise StackUnderflowError("peek")
        return self._items[-1]

    def reset(self) -> None:
        self._items = []

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"PathCountStack({self._items!r})"
