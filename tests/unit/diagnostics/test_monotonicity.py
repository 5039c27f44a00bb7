"""Tests for monotonicity diagnostics."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

from logistic_analysis.diagnostics import monotonicity
from logistic_analysis.diagnostics.monotonicity import (
    MonotonicDirection,
    classify_direction,
    compute_monotonicity_curve,
    monotonicity_curves,
    monotonicity_plots,
    numeric_predictors,
)
from logistic_analysis.exceptions import MissingColumnError


def _step_table() -> pd.DataFrame:
    x = np.arange(200, dtype=float)
    return pd.DataFrame(
        {
            "rising": x,
            "falling": x,
            "flag": x % 2 == 0,
            "label": np.where(x < 50, "low", "high"),
            "y": (x >= 100).astype(int),
        }
    ).assign(falling=lambda df: -df["falling"])


class TestClassifyDirection:
    @pytest.mark.parametrize(
        "fitted,expected",
        [
            ([0.1, 0.2, 0.2, 0.5], MonotonicDirection.INCREASING),
            ([0.5, 0.4, 0.1], MonotonicDirection.DECREASING),
            ([0.3, 0.3, 0.3], MonotonicDirection.CONSTANT),
            ([0.1, 0.6, 0.2], MonotonicDirection.NON_MONOTONIC),
        ],
    )
    def test_directions(
        self, fitted: list[float], expected: MonotonicDirection
    ) -> None:
        assert classify_direction(fitted) == expected

    def test_changes_below_tolerance_are_flat(self) -> None:
        assert classify_direction([0.5, 0.5 + 1e-9, 0.5]) == (
            MonotonicDirection.CONSTANT
        )


class TestComputeMonotonicityCurve:
    def test_linear_increasing(self) -> None:
        x = np.linspace(0, 10, 100)
        curve = compute_monotonicity_curve(x, x / 10, predictor="x")

        assert curve.direction == MonotonicDirection.INCREASING
        assert curve.is_monotonic
        np.testing.assert_allclose(curve.fitted, x / 10, atol=1e-8)

    def test_linear_decreasing(self) -> None:
        x = np.linspace(0, 10, 100)
        curve = compute_monotonicity_curve(x, 1 - x / 10)
        assert curve.direction == MonotonicDirection.DECREASING

    def test_bump_is_not_monotonic(self) -> None:
        x = np.linspace(0, 10, 200)
        curve = compute_monotonicity_curve(x, np.exp(-((x - 5) ** 2)))

        assert curve.direction == MonotonicDirection.NON_MONOTONIC
        assert not curve.is_monotonic

    def test_unsorted_input_is_sorted(self) -> None:
        rng = np.random.default_rng(0)
        x = rng.permutation(np.linspace(0, 1, 50))
        curve = compute_monotonicity_curve(x, x)
        assert np.all(np.diff(curve.x) >= 0)

    def test_shape_mismatch(self) -> None:
        with pytest.raises(ValueError, match="same shape"):
            compute_monotonicity_curve([1.0, 2.0], [0.0])


class TestMonotonicityCurves:
    def test_numeric_predictors_only(self) -> None:
        assert numeric_predictors(_step_table(), "y") == ["rising", "falling"]

    def test_step_response_directions(self) -> None:
        curves = monotonicity_curves(_step_table(), "y")

        directions = {c.predictor: c.direction for c in curves}
        assert directions == {
            "rising": MonotonicDirection.INCREASING,
            "falling": MonotonicDirection.DECREASING,
        }

    def test_baseline_reverses_direction(self) -> None:
        data = _step_table().assign(
            y=lambda df: np.where(df["y"] == 1, "yes", "no")
        )
        default = monotonicity_curves(data, "y")
        flipped = monotonicity_curves(data, "y", baseline="yes")

        assert default[0].direction == MonotonicDirection.INCREASING
        assert flipped[0].direction == MonotonicDirection.DECREASING

    def test_missing_response(self) -> None:
        with pytest.raises(MissingColumnError, match="'outcome'"):
            monotonicity_curves(_step_table(), "outcome")


class TestMonotonicityPlots:
    def test_one_figure_per_predictor(self) -> None:
        figures = monotonicity_plots(_step_table(), "y", seed=1)

        assert list(figures) == ["rising", "falling"]
        assert figures["rising"].axes[0].get_title() == (
            "Monotonicity of rising vs y"
        )
        for fig in figures.values():
            plt.close(fig)

    def test_response_encoded_once(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[str] = []
        original = monotonicity.normalize_response

        def counting(values: pd.Series, baseline: object = None) -> object:
            calls.append(str(values.name))
            return original(values, baseline)

        monkeypatch.setattr(monotonicity, "normalize_response", counting)

        figures = monotonicity_plots(_step_table(), "y")

        assert calls == ["y"]
        for fig in figures.values():
            plt.close(fig)
