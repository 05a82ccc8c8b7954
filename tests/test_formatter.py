"""Tests for marker labels, severity tiers and output helpers."""

from __future__ import annotations

import json
import random

import pytest

from pathmark.output.formatter import (
    ENVELOPE_SCHEMA_NAME,
    SEVERITY_TIERS,
    complexity_label,
    format_table,
    json_envelope,
    loc,
    marker_tooltip,
    severity_tier,
    to_json,
)


class TestComplexityLabel:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, "0"),
            (2, "2"),
            (999, "999"),
            (1_000, "1k"),
            (1_999, "1k"),
            (999_999, "999k"),
            (1_000_000, "1m"),
            (42_500_000, "42m"),
            (999_999_999, "999m"),
            (1_000_000_000, "10^9"),
            (12_345_678_901, "10^10"),
            (10**20, "10^20"),
        ],
    )
    def test_label(self, value, expected):
        assert complexity_label(value) == expected

    def test_labels_stay_short(self):
        rng = random.Random(7)
        for _ in range(300):
            value = rng.randint(0, 10**rng.randint(1, 30))
            assert len(complexity_label(value)) <= 5


class TestSeverityTier:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (2, "low"),
            (19, "low"),
            (20, "moderate"),
            (29, "moderate"),
            (30, "elevated"),
            (39, "elevated"),
            (40, "high"),
            (99, "high"),
            (100, "very-high"),
            (999, "very-high"),
            (1000, "extreme"),
            (9999, "extreme"),
            (10000, "pathological"),
            (10**12, "pathological"),
        ],
    )
    def test_tier(self, value, expected):
        assert severity_tier(value) == expected

    def test_tiers_are_monotonic(self):
        bounds = [bound for bound, _ in SEVERITY_TIERS]
        assert bounds == sorted(bounds)
        names = [severity_tier(v) for v in range(0, 20000, 7)]
        order = [name for _, name in SEVERITY_TIERS] + ["pathological"]
        assert [order.index(n) for n in names] == sorted(order.index(n) for n in names)


class TestHelpers:
    def test_tooltip(self):
        assert marker_tooltip("NPath Complexity", 12) == "NPath Complexity: 12"

    def test_loc(self):
        assert loc("A.java") == "A.java"
        assert loc("A.java", 3) == "A.java:3"
        assert loc("A.java", 3, 9) == "A.java:3:9"

    def test_table(self):
        table = format_table(["a", "bb"], [["1", "2"], ["333", "4"]])
        lines = table.splitlines()
        assert lines[0].startswith("a    bb")
        assert lines[1] == "---  --"
        assert lines[3] == "333  4"

    def test_empty_table(self):
        assert format_table(["a"], []) == "(none)"

    def test_table_budget(self):
        table = format_table(["n"], [[str(i)] for i in range(10)], budget=3)
        assert table.splitlines()[-1] == "(+7 more)"

    def test_to_json_sorted(self):
        assert to_json({"b": 1, "a": 2}).index('"a"') < to_json({"b": 1, "a": 2}).index('"b"')


class TestJsonEnvelope:
    def test_envelope_keys(self):
        env = json_envelope("npath", summary={"verdict": "ok"}, markers=[])
        assert env["schema"] == ENVELOPE_SCHEMA_NAME
        assert env["command"] == "npath"
        assert env["summary"] == {"verdict": "ok"}
        assert env["markers"] == []
        assert env["_meta"]["timestamp"].endswith("Z")
        assert isinstance(env["version"], str)

    def test_envelope_serializes(self):
        env = json_envelope("config")
        assert json.loads(to_json(env))["summary"] == {}
