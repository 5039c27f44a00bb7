"""
Model formula parsing.

Formulas follow the R/patsy convention ``response ~ term + term``. The
special term ``.`` stands for every column of the table other than the
response and is expanded against a concrete table before fitting.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from logistic_analysis.core.constants import ALL_OTHER_COLUMNS
from logistic_analysis.exceptions import FormulaError, MissingColumnError

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_QUOTED_NAME = re.compile(r"""Q\(\s*(["'])(.*?)\1\s*\)""")


def _quote(name: str) -> str:
    """Quote a column name for patsy when it is not a bare identifier."""
    if name.isidentifier():
        return name
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'Q("{escaped}")'


@dataclass(frozen=True)
class ModelFormula:
    """
    A parsed ``response ~ terms`` formula.

    Attributes:
        response: Name of the response column.
        terms: Right-hand side terms, in the order written.
        column_names: Terms known to name a table column verbatim. Set by
            :meth:`expand`; these are always quoted for patsy.
    """

    response: str
    terms: tuple[str, ...]
    column_names: frozenset[str] = field(default=frozenset())

    def __post_init__(self) -> None:
        if not self.response:
            raise FormulaError(str(self), "response is empty")
        if not self.terms:
            raise FormulaError(str(self), "no predictor terms")

    def __str__(self) -> str:
        return f"{self.response} ~ {' + '.join(self.terms)}"

    @property
    def uses_all_columns(self) -> bool:
        """Whether the formula contains the ``.`` term."""
        return ALL_OTHER_COLUMNS in self.terms

    def expand(self, columns: Sequence[str]) -> "ModelFormula":
        """
        Expand ``.`` against a table's columns and check column references.

        Terms produced by ``.`` and terms equal to a column name are
        recorded as column names.

        Args:
            columns: Column names of the table the formula will be fit on.

        Returns:
            A formula without the ``.`` term.

        Raises:
            MissingColumnError: If the response or a column term is absent.
        """
        columns = list(columns)
        if self.response not in columns:
            raise MissingColumnError(self.response, columns)

        expanded: list[str] = []
        names: set[str] = set()
        for term in self.terms:
            if term == ALL_OTHER_COLUMNS:
                added = [
                    c
                    for c in columns
                    if c != self.response and c not in self.terms
                ]
                expanded.extend(added)
                names.update(added)
            elif term in columns:
                expanded.append(term)
                names.add(term)
            elif term.isidentifier():
                raise MissingColumnError(term, columns)
            else:
                expanded.append(term)

        if not expanded:
            raise FormulaError(str(self), "no predictors left after expansion")

        return ModelFormula(
            response=self.response,
            terms=tuple(expanded),
            column_names=frozenset(names),
        )

    def predictor_columns(self, columns: Sequence[str]) -> list[str]:
        """
        Table columns referenced by the right-hand side, in table order.

        Expression terms such as ``C(x)`` or ``x:z`` reference every column
        whose name appears in them as an identifier or inside ``Q("...")``.
        """
        referenced: set[str] = set()
        for term in self.terms:
            if term in self.column_names:
                referenced.add(term)
                continue
            referenced.update(_IDENTIFIER.findall(term))
            referenced.update(m.group(2) for m in _QUOTED_NAME.finditer(term))
        return [
            c for c in columns if c in referenced and c != self.response
        ]

    def to_patsy(self) -> str:
        """Render as a patsy formula string."""
        if self.uses_all_columns:
            raise FormulaError(
                str(self), "expand '.' against a table before fitting"
            )
        rhs = " + ".join(
            _quote(t) if t in self.column_names else t for t in self.terms
        )
        return f"{_quote(self.response)} ~ {rhs}"


def parse_formula(formula: "str | ModelFormula") -> ModelFormula:
    """
    Parse a formula string such as ``"y ~ x1 + x2"`` or ``"y ~ ."``.

    Raises:
        FormulaError: If the formula has no ``~`` or an empty side.
    """
    if isinstance(formula, ModelFormula):
        return formula

    if formula.count("~") != 1:
        raise FormulaError(formula, "expected exactly one '~'")

    lhs, rhs = (side.strip() for side in formula.split("~"))
    if not lhs:
        raise FormulaError(formula, "missing response")
    if not rhs:
        raise FormulaError(formula, "missing predictors")

    terms = tuple(t.strip() for t in rhs.split("+"))
    if any(not t for t in terms):
        raise FormulaError(formula, "empty term")

    return ModelFormula(response=lhs, terms=terms)
