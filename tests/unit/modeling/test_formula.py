"""Tests for formula parsing."""

import pytest

from logistic_analysis.exceptions import FormulaError, MissingColumnError
from logistic_analysis.modeling.formula import ModelFormula, parse_formula


class TestParseFormula:
    def test_basic(self) -> None:
        formula = parse_formula("y ~ x1 + x2")
        assert formula.response == "y"
        assert formula.terms == ("x1", "x2")

    def test_whitespace_insensitive(self) -> None:
        assert parse_formula("y~x1+x2") == parse_formula("  y ~  x1 +   x2 ")

    def test_str_roundtrip(self) -> None:
        assert str(parse_formula("y~x1+x2")) == "y ~ x1 + x2"

    def test_passes_through_model_formula(self) -> None:
        formula = ModelFormula(response="y", terms=("x",))
        assert parse_formula(formula) is formula

    @pytest.mark.parametrize(
        "text", ["y x", "y ~ x ~ z", "~ x", "y ~ ", "y ~ x + "]
    )
    def test_invalid(self, text: str) -> None:
        with pytest.raises(FormulaError):
            parse_formula(text)


class TestExpand:
    def test_dot_expands_to_other_columns(self) -> None:
        formula = parse_formula("y ~ .").expand(["x1", "y", "x2"])
        assert formula.terms == ("x1", "x2")
        assert not formula.uses_all_columns

    def test_dot_skips_listed_terms(self) -> None:
        formula = parse_formula("y ~ x1 + .").expand(["y", "x1", "x2"])
        assert formula.terms == ("x1", "x2")

    def test_missing_response(self) -> None:
        with pytest.raises(MissingColumnError, match="'y'"):
            parse_formula("y ~ x").expand(["x", "z"])

    def test_missing_predictor(self) -> None:
        with pytest.raises(MissingColumnError, match="'w'"):
            parse_formula("y ~ x + w").expand(["y", "x"])

    def test_expression_terms_not_checked(self) -> None:
        formula = parse_formula("y ~ C(x) + x:z").expand(["y", "x", "z"])
        assert formula.terms == ("C(x)", "x:z")


class TestToPatsy:
    def test_plain(self) -> None:
        assert parse_formula("y ~ x1 + x2").to_patsy() == "y ~ x1 + x2"

    def test_quotes_non_identifier_columns(self) -> None:
        formula = parse_formula("y ~ .").expand(["y", "body mass"])
        assert formula.to_patsy() == 'y ~ Q("body mass")'

    def test_unexpanded_dot_raises(self) -> None:
        with pytest.raises(FormulaError, match="expand"):
            parse_formula("y ~ .").to_patsy()

    def test_dot_quotes_columns_with_operators(self) -> None:
        formula = parse_formula("y ~ .").expand(
            ["y", "blood-pressure", "height (cm)"]
        )
        assert formula.to_patsy() == (
            'y ~ Q("blood-pressure") + Q("height (cm)")'
        )

    def test_explicit_column_with_operators_quoted(self) -> None:
        formula = parse_formula("y ~ blood-pressure + x").expand(
            ["y", "x", "blood-pressure"]
        )
        assert formula.to_patsy() == 'y ~ Q("blood-pressure") + x'

    def test_expression_terms_not_quoted(self) -> None:
        formula = parse_formula("y ~ C(x) + x:z").expand(["y", "x", "z"])
        assert formula.to_patsy() == "y ~ C(x) + x:z"


class TestPredictorColumns:
    def test_only_referenced_columns(self) -> None:
        columns = ["id", "y", "x", "group", "note"]
        formula = parse_formula("y ~ x + group").expand(columns)
        assert formula.predictor_columns(columns) == ["x", "group"]

    def test_expression_terms(self) -> None:
        columns = ["y", "x", "z", "w"]
        formula = parse_formula("y ~ C(x) + np.log(z)").expand(columns)
        assert formula.predictor_columns(columns) == ["x", "z"]

    def test_quoted_names(self) -> None:
        columns = ["y", "height (cm)", "w"]
        formula = parse_formula('y ~ np.log(Q("height (cm)"))').expand(
            columns
        )
        assert formula.predictor_columns(columns) == ["height (cm)"]

    def test_dot_expansion(self) -> None:
        columns = ["y", "a b", "c"]
        formula = parse_formula("y ~ .").expand(columns)
        assert formula.predictor_columns(columns) == ["a b", "c"]
