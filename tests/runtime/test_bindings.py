"""Tests for turning user input into variable bindings."""

import math

import pytest

from chemodose.runtime.bindings import (
    apply_input,
    build_bindings,
    coerce_input,
    initial_bindings,
    parse_assignments,
)
from chemodose.schemas import Drug, DrugField


class TestInitialBindings:
    def test_defaults_only(self):
        drug = Drug(
            id="x",
            name="X",
            fields=[
                DrugField(id="weight", label="Weight"),
                DrugField(id="dose_adj", label="Adj", defaultValue=1),
            ],
        )
        assert initial_bindings(drug) == {"dose_adj": 1.0}

    def test_zero_default_is_bound(self, sample_drug):
        assert initial_bindings(sample_drug) == {"weight": 0.0, "dose_m2": 0.0, "dose_adj": 1.0}


class TestCoerceInput:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("30", 30.0),
            (" 2.5 ", 2.5),
            (7, 7.0),
            (1.5, 1.5),
            ("", 0.0),
            ("abc", 0.0),
            (None, 0.0),
            (True, 0.0),
            ("inf", 0.0),
            (math.nan, 0.0),
            (10**400, 0.0),
        ],
    )
    def test_coerce(self, raw, expected):
        assert coerce_input(raw) == expected


class TestApplyInput:
    def test_returns_new_mapping(self):
        original = {"weight": 30.0}
        updated = apply_input(original, "dose_m2", "50")
        assert updated == {"weight": 30.0, "dose_m2": 50.0}
        assert original == {"weight": 30.0}

    def test_overwrites_existing(self):
        assert apply_input({"weight": 30.0}, "weight", "") == {"weight": 0.0}


class TestParseAssignments:
    def test_pairs(self):
        assert parse_assignments(["weight=30", " dose_m2 = 50.5 "]) == {
            "weight": 30.0,
            "dose_m2": 50.5,
        }

    def test_last_value_wins(self):
        assert parse_assignments(["weight=1", "weight=2"]) == {"weight": 2.0}

    @pytest.mark.parametrize("pair", ["weight", "=30", "weight=abc"])
    def test_invalid(self, pair):
        with pytest.raises(ValueError):
            parse_assignments([pair])


class TestBuildBindings:
    def test_inputs_override_defaults(self, sample_drug):
        bindings = build_bindings(sample_drug, {"weight": 30, "dose_m2": "50"})
        assert bindings == {"weight": 30.0, "dose_m2": 50.0, "dose_adj": 1.0}

    def test_no_inputs(self, sample_drug):
        assert build_bindings(sample_drug) == initial_bindings(sample_drug)

    def test_unknown_inputs_are_passed_through(self, sample_drug):
        assert build_bindings(sample_drug, {"extra": 2})["extra"] == 2.0
