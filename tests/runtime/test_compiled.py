"""Tests for the parse-once formula cache."""

import pytest

from chemodose.engine import ParseError
from chemodose.runtime.compiled import CompiledDrug, _parse_cached, compile_formula


class TestCompileFormula:
    def test_same_text_same_tree(self):
        assert compile_formula("weight*2") is compile_formula("weight*2")

    def test_cache_hits(self):
        compile_formula("weight+1")
        compile_formula("weight+1")
        assert _parse_cached.cache_info().hits >= 1

    def test_failure_raises_fresh_error_each_time(self):
        with pytest.raises(ParseError) as first:
            compile_formula("weight*")
        with pytest.raises(ParseError) as second:
            compile_formula("weight*")

        assert first.value is not second.value
        assert first.value.message == second.value.message
        assert first.value.position == second.value.position == 7


class TestCompiledDrug:
    def test_trees_and_errors_by_index(self, broken_drug):
        compiled = CompiledDrug.from_drug(broken_drug)

        assert set(compiled.trees) == {0, 2, 3}
        assert [index for index, _ in compiled.parse_errors()] == [1]

    def test_tree_for_failed_formula_raises(self, broken_drug):
        compiled = CompiledDrug.from_drug(broken_drug)
        with pytest.raises(ParseError):
            compiled.tree_for(1)
        assert compiled.tree_for(0) is compile_formula("weight*2")
