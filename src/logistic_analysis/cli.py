"""
Command line interface for fitting and evaluating logistic models on CSV
files.
"""

import logging
from pathlib import Path

import pandas as pd
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from logistic_analysis.config import EvaluationSettings
from logistic_analysis.core.data import load_csv_to_frame
from logistic_analysis.diagnostics import monotonicity_plots
from logistic_analysis.diagnostics.monotonicity import monotonicity_curves
from logistic_analysis.evaluation import (
    MetricsRecord,
    evaluate,
    plot_roc_curve,
    roc_auc,
)
from logistic_analysis.exceptions import LogisticAnalysisError
from logistic_analysis.modeling import fit_logistic

# Library progress is reported through the console instead
logging.getLogger("logistic_analysis").setLevel(logging.WARNING)

settings = EvaluationSettings()

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer(help="Logistic regression fitting and evaluation.")


def _load(input_path: Path) -> pd.DataFrame:
    if not input_path.exists():
        console.print(f"[red]File not found: {input_path}[/red]")
        raise typer.Exit(1)
    if input_path.suffix != ".csv":
        console.print("[red]Only .csv files are supported[/red]")
        raise typer.Exit(1)
    try:
        return load_csv_to_frame(input_path)
    except ValueError as e:
        console.print(f"[red]Error loading CSV: {e}[/red]")
        raise typer.Exit(1) from e


def _fail(error: LogisticAnalysisError) -> typer.Exit:
    console.print(f"[red]{type(error).__name__}: {error}[/red]")
    return typer.Exit(1)


def _format_metric(value: float | None) -> str:
    return "NA" if value is None else f"{value:.4f}"


def metrics_table(record: MetricsRecord, title: str) -> Table:
    """Render a metrics record as a rich table."""
    table = Table(title=title)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Accuracy", _format_metric(record.accuracy))
    table.add_row("Precision", _format_metric(record.precision))
    table.add_row("Recall", _format_metric(record.recall))
    table.add_row("F1", _format_metric(record.f1))
    return table


@app.command()
def fit(
    input_path: Path = typer.Argument(..., help="CSV file with the data"),
    formula: str = typer.Argument(..., help='Model formula, e.g. "y ~ x1 + x2"'),
    baseline: str | None = typer.Option(
        None, "-b", "--baseline", help="Response level to encode as 0"
    ),
) -> None:
    """Fit a logistic regression and print its summary."""
    data = _load(input_path)
    try:
        model = fit_logistic(data, formula, baseline=baseline)
    except LogisticAnalysisError as e:
        raise _fail(e) from e

    console.print(
        Panel(
            f"[bold]Logistic regression[/bold]\n\n"
            f"Formula: [cyan]{model.formula}[/cyan]\n"
            f"Rows: [cyan]{model.n_observations}[/cyan]\n"
            f"Baseline: [cyan]{model.response_encoder.baseline!r}[/cyan]\n"
            f"Converged: [cyan]{model.converged}[/cyan]",
            title="Model",
        )
    )
    console.print(str(model.summary()), markup=False, highlight=False)


@app.command("evaluate")
def evaluate_command(
    input_path: Path = typer.Argument(..., help="CSV file with the data"),
    formula: str = typer.Argument(..., help='Model formula, e.g. "y ~ x1 + x2"'),
    mode: str = typer.Option(
        settings.mode, "-m", "--mode", help="insample or cv"
    ),
    folds: int = typer.Option(
        settings.folds, "-k", "--folds", help="Number of folds for cv"
    ),
    cutoff: float = typer.Option(
        settings.cutoff, "-c", "--cutoff", help="Probability cutoff"
    ),
    baseline: str | None = typer.Option(
        None, "-b", "--baseline", help="Response level to encode as 0"
    ),
    seed: int = typer.Option(
        settings.seed, "-s", "--seed", help="Seed for the fold assignment"
    ),
) -> None:
    """Print accuracy, precision, recall and F1 of a logistic model."""
    data = _load(input_path)
    try:
        record = evaluate(
            formula,
            data,
            mode=mode,
            folds=folds,
            cutoff=cutoff,
            baseline=baseline,
            seed=seed,
        )
    except LogisticAnalysisError as e:
        raise _fail(e) from e
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    title = "In-sample metrics" if mode == "insample" else f"{folds}-fold CV"
    console.print(metrics_table(record, title))


@app.command()
def roc(
    input_path: Path = typer.Argument(..., help="CSV file with the data"),
    formula: str = typer.Argument(..., help='Model formula, e.g. "y ~ x1 + x2"'),
    mode: str = typer.Option(
        settings.mode, "-m", "--mode", help="insample or cv"
    ),
    folds: int = typer.Option(
        settings.folds, "-k", "--folds", help="Number of folds for cv"
    ),
    baseline: str | None = typer.Option(
        None, "-b", "--baseline", help="Response level to encode as 0"
    ),
    seed: int = typer.Option(
        settings.seed, "-s", "--seed", help="Seed for the fold assignment"
    ),
    output: Path | None = typer.Option(
        None, "-o", "--output", help="Save the ROC curve to this PNG file"
    ),
) -> None:
    """Print the AUC of a logistic model and optionally save its ROC curve."""
    data = _load(input_path)
    try:
        result = roc_auc(
            formula,
            data,
            mode=mode,
            folds=folds,
            baseline=baseline,
            seed=seed,
        )
    except LogisticAnalysisError as e:
        raise _fail(e) from e
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    console.print(f"AUC: [bold]{result.auc:.4f}[/bold]")

    if output is not None:
        import matplotlib.pyplot as plt

        output.parent.mkdir(parents=True, exist_ok=True)
        fig = plot_roc_curve(result)
        fig.savefig(output, dpi=150)
        plt.close(fig)
        console.print(f"Saved ROC curve to [cyan]{output}[/cyan]")


@app.command()
def monotonicity(
    input_path: Path = typer.Argument(..., help="CSV file with the data"),
    response: str = typer.Argument(..., help="Name of the response column"),
    baseline: str | None = typer.Option(
        None, "-b", "--baseline", help="Response level to encode as 0"
    ),
    output_dir: Path | None = typer.Option(
        None, "-o", "--output-dir", help="Save one PNG per predictor here"
    ),
) -> None:
    """Check that numeric predictors relate monotonically to the response."""
    data = _load(input_path)
    try:
        curves = monotonicity_curves(
            data, response, baseline, frac=settings.lowess_frac
        )
    except LogisticAnalysisError as e:
        raise _fail(e) from e

    table = Table(title=f"Monotonicity vs {response}")
    table.add_column("Predictor")
    table.add_column("Direction")
    for curve in curves:
        color = "green" if curve.is_monotonic else "yellow"
        table.add_row(
            str(curve.predictor), f"[{color}]{curve.direction.value}[/{color}]"
        )
    console.print(table)

    if output_dir is not None:
        import matplotlib.pyplot as plt

        output_dir.mkdir(parents=True, exist_ok=True)
        figures = monotonicity_plots(
            data,
            response,
            baseline,
            frac=settings.lowess_frac,
            seed=settings.seed,
        )
        for predictor, fig in figures.items():
            fig.savefig(output_dir / f"{predictor}.png", dpi=150)
            plt.close(fig)
        console.print(
            f"Saved {len(figures)} plots to [cyan]{output_dir}[/cyan]"
        )


if __name__ == "__main__":
    app()
