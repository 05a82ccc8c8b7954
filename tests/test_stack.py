"""Tests for the path-count stack."""

from __future__ import annotations

import random

import pytest

from pathmark.metrics.errors import MeasurementError, StackUnderflowError
from pathmark.metrics.stack import PathCountStack


class TestPathCountStack:
    def test_lifo_order(self):
        stack = PathCountStack()
        stack.push(1)
        stack.push(2)
        stack.push(3)
        assert stack.pop() == 3
        assert stack.pop() == 2
        assert stack.pop() == 1

    def test_peek_does_not_remove(self):
        stack = PathCountStack()
        stack.push(7)
        assert stack.peek() == 7
        assert len(stack) == 1

    def test_pop_empty_raises(self):
        with pytest.raises(StackUnderflowError, match="pop"):
            PathCountStack().pop()

    def test_peek_empty_raises(self):
        with pytest.raises(StackUnderflowError, match="peek"):
            PathCountStack().peek()

    def test_underflow_is_a_measurement_error(self):
        with pytest.raises(MeasurementError):
            PathCountStack().pop()

    def test_reset_empties(self):
        stack = PathCountStack()
        for i in range(5):
            stack.push(i)
        stack.reset()
        assert len(stack) == 0
        with pytest.raises(StackUnderflowError):
            stack.peek()

    def test_repr(self):
        stack = PathCountStack()
        stack.push(4)
        assert repr(stack) == "PathCountStack([4])"

    def test_random_push_pop_matches_list(self):
        rng = random.Random(1234)
        stack = PathCountStack()
        mirror = []
        for _ in range(500):
            if mirror and rng.random() < 0.45:
                assert stack.pop() == mirror.pop()
            else:
                value = rng.randint(0, 10_000)
                stack.push(value)
                mirror.append(value)
            assert len(stack) == len(mirror)
