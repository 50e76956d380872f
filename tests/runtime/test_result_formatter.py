"""Tests for result row formatting."""

from chemodose.runtime.result_formatter import error_result, format_value, success_result, summarize
from chemodose.schemas import DrugFormula


class TestFormatValue:
    def test_two_decimals_by_default(self):
        assert format_value(127 / 120) == "1.06"
        assert format_value(265) == "265.00"

    def test_custom_precision(self):
        assert format_value(1.0, 0) == "1"
        assert format_value(1.23456, 4) == "1.2346"

    def test_exact_ties_round_away_from_zero(self):
        assert format_value(0.125) == "0.13"
        assert format_value(-0.125) == "-0.13"
        assert format_value(2.5, 0) == "3"
        assert format_value(-2.5, 0) == "-3"

    def test_binary_value_below_tie_rounds_down(self):
        # 1.005 and 2.675 are stored just under the halfway point
        assert format_value(1.005) == "1.00"
        assert format_value(2.675) == "2.67"

    def test_negative_zero(self):
        assert format_value(-0.0) == "0.00"
        assert format_value(-0.001) == "-0.00"

    def test_large_and_non_finite(self):
        assert format_value(10**400) == "1" + "0" * 400 + ".00"
        assert format_value(1e21) == "1000000000000000000000.00"
        assert format_value(float("inf")) == "inf"

    def test_non_numbers_pass_through(self):
        assert format_value("Error") == "Error"
        assert format_value(True) == "True"


class TestResultRows:
    def test_success_row(self):
        formula = DrugFormula(label="BSA", formula="1", unit="m2", description="m2 by weight")
        row = success_result(formula, 1.0583)
        assert row.model_dump() == {
            "label": "BSA",
            "value": "1.06",
            "unit": "m2",
            "description": "m2 by weight",
        }

    def test_error_row(self):
        formula = DrugFormula(label="BSA", formula="x", unit="m2", description="m2 by weight")
        row = error_result(formula)
        assert row.model_dump() == {
            "label": "BSA",
            "value": "Error",
            "unit": "m2",
            "description": None,
        }

    def test_summarize(self):
        formula = DrugFormula(label="A", formula="1")
        rows = [success_result(formula, 1), error_result(formula), success_result(formula, 2)]
        assert summarize(rows) == {"total": 3, "ok": 2, "errors": 1}
