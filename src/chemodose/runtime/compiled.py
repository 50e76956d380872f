"""Parse-once cache for drug formulas.

Inputs change on every keystroke while formulas only change when an admin
edits a drug, so formula text is parsed once and the immutable tree is
re-walked on each recalculation. Parse failures are cached too, so a broken
formula is not re-tokenized on every input change.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Tuple, Union

from chemodose.engine import ParseError, SyntaxTree, parse
from chemodose.schemas.drug import Drug

PARSE_CACHE_SIZE = 1024


@dataclass(frozen=True)
class _ParseFailure:
    message: str
    position: int


@lru_cache(maxsize=PARSE_CACHE_SIZE)
def _parse_cached(source: str) -> Union[SyntaxTree, _ParseFailure]:
    try:
        return parse(source)
    except ParseError as e:
        return _ParseFailure(e.message, e.position)


def compile_formula(source: str) -> SyntaxTree:
    """Parse formula text, reusing the cached tree when available.

    Raises:
        ParseError: A fresh exception per call, so tracebacks are not shared.
    """
    outcome = _parse_cached(source)
    if isinstance(outcome, _ParseFailure):
        raise ParseError(outcome.message, outcome.position)
    return outcome


def clear_parse_cache() -> None:
    _parse_cached.cache_clear()


@dataclass
class CompiledDrug:
    """A drug snapshot with every formula parsed up front.

    Trees are looked up by formula index; ``errors`` maps the index of each
    unparseable formula to its ParseError.
    """

    drug: Drug
    trees: Dict[int, SyntaxTree] = field(default_factory=dict)
    errors: Dict[int, ParseError] = field(default_factory=dict)

    @classmethod
    def from_drug(cls, drug: Drug) -> "CompiledDrug":
        compiled = cls(drug=drug)
        for index, formula in enumerate(drug.formulas):
            try:
                compiled.trees[index] = compile_formula(formula.formula)
            except ParseError as e:
                compiled.errors[index] = e
        return compiled

    def tree_for(self, index: int) -> SyntaxTree:
        """Return the parsed tree of formula ``index``.

        Raises:
            ParseError: If that formula did not parse.
        """
        if index in self.errors:
            err = self.errors[index]
            raise ParseError(err.message, err.position)
        return self.trees[index]

    def parse_errors(self) -> List[Tuple[int, ParseError]]:
        return sorted(self.errors.items())
