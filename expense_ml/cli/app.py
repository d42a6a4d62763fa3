"""Expense ML CLI application using Typer.

Operator and developer utilities around the classification core: ask for a
category suggestion, feed back a decision, inspect learning progress and run
the spending forecast.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console
from rich.table import Table

from expense_ml.config import configure_logging, get_settings
from expense_ml.inference import ForecastEstimator, SharedInfrastructure
from expense_ml.storage import create_engine
from expense_ml.storage.utils import create_tables, describe_database_url, reset_database

T = TypeVar("T")

app = typer.Typer(
    name="expense-ml",
    help="Adaptive expense categorisation CLI",
    no_args_is_help=True,
)
console = Console()

db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Override EXPENSE_ML_LOG_LEVEL"),
) -> None:
    configure_logging(log_level)


def _run_with_core(action: Callable[[SharedInfrastructure], Awaitable[T]]) -> T:
    async def _run() -> T:
        infra = await SharedInfrastructure.create(get_settings())
        try:
            return await action(infra)
        finally:
            await infra.close()

    return asyncio.run(_run())


@app.command()
def predict(
    text: str = typer.Argument(..., help="Expense label to categorise"),
    default: str = typer.Option(None, "--default", "-d", help="Fallback category"),
) -> None:
    """Suggest a category for an expense label."""

    async def action(infra: SharedInfrastructure):
        return await infra.ensemble.predict(text, default_category=default)

    prediction = _run_with_core(action)

    console.print(
        f"[bold]{prediction.final_category}[/bold] "
        f"(confidence {prediction.confidence:.2f}) - {prediction.explanation}"
    )
    for model_prediction in (prediction.external_prediction, prediction.local_prediction):
        if model_prediction is not None:
            console.print(
                f"  [dim]{model_prediction.model_name.value}: {model_prediction.category} "
                f"(confidence {model_prediction.confidence:.2f}, "
                f"weight {model_prediction.weight:.2f})[/dim]"
            )


@app.command()
def learn(
    text: str = typer.Argument(..., help="Expense label"),
    category: str = typer.Argument(..., help="Category the user chose"),
) -> None:
    """Predict, then learn from the category actually chosen."""

    async def action(infra: SharedInfrastructure):
        prediction = await infra.ensemble.predict(text)
        await infra.ensemble.record_user_choice(text, prediction, category)
        return prediction, await infra.ensemble.get_ensemble_stats()

    prediction, stats = _run_with_core(action)

    verdict = "[green]correct[/green]" if prediction.final_category == category else "[red]corrected[/red]"
    console.print(f"Suggested [bold]{prediction.final_category}[/bold], user chose [bold]{category}[/bold]: {verdict}")
    console.print(
        f"Weights now: external {stats.external_weight:.2f}, "
        f"naive bayes {stats.local_weight:.2f}"
    )


@app.command()
def train(
    text: str = typer.Argument(..., help="Expense label"),
    category: str = typer.Argument(..., help="Category to learn"),
) -> None:
    """Train only the Naive Bayes model."""

    async def action(infra: SharedInfrastructure) -> None:
        await infra.naive_bayes.train(text, category)

    _run_with_core(action)
    console.print(f"Trained [bold]{text!r}[/bold] -> [bold]{category}[/bold]")


@app.command()
def stats() -> None:
    """Show ensemble weights, accuracies and Naive Bayes model size."""

    async def action(infra: SharedInfrastructure):
        return (
            await infra.ensemble.get_ensemble_stats(),
            await infra.naive_bayes.get_model_stats(),
        )

    ensemble_stats, nb_stats = _run_with_core(action)

    table = Table(title="Ensemble")
    table.add_column("Model")
    table.add_column("Weight", justify="right")
    table.add_column("Accuracy", justify="right")
    table.add_column("Predictions", justify="right")
    table.add_row(
        "External",
        f"{ensemble_stats.external_weight:.2f}",
        f"{ensemble_stats.external_accuracy:.1%}",
        str(ensemble_stats.external_predictions),
    )
    table.add_row(
        "Naive Bayes",
        f"{ensemble_stats.local_weight:.2f}",
        f"{ensemble_stats.local_accuracy:.1%}",
        str(ensemble_stats.local_predictions),
    )
    console.print(table)
    console.print(
        f"Vocabulary size: {nb_stats.vocabulary_size}, "
        f"categories: {nb_stats.category_count}, "
        f"word occurrences: {nb_stats.total_word_count}"
    )


@app.command("top-words")
def top_words(
    category: str = typer.Argument(..., help="Category to inspect"),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Number of words"),
) -> None:
    """List the words most associated with a category."""

    async def action(infra: SharedInfrastructure):
        return await infra.naive_bayes.top_words(category, limit)

    words = _run_with_core(action)
    if not words:
        console.print(f"[yellow]No words learned for {category!r}[/yellow]")
        return

    table = Table(title=f"Top words: {category}")
    table.add_column("Word")
    table.add_column("Count", justify="right")
    for word, count in words:
        table.add_row(word, str(count))
    console.print(table)


@app.command()
def forecast(
    amounts: list[float] = typer.Argument(..., help="Daily totals, month to date"),
    days: int = typer.Option(..., "--days", min=1, max=31, help="Days in the month"),
) -> None:
    """Forecast the month's spending from daily totals."""
    if len(amounts) > days:
        console.print("[red]More daily totals than days in the month[/red]")
        raise typer.Exit(1)

    result = ForecastEstimator().forecast(amounts, days)
    console.print(f"Daily rate: [bold]{result.daily_rate:.2f}[/bold]")
    console.print(f"Forecasted total: [bold]{result.forecasted_total:.2f}[/bold]")


@db_app.command("init")
def db_init() -> None:
    """Create the database tables (idempotent)."""

    async def _run() -> None:
        engine = create_engine(get_settings().resolved_database_url)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[green]Database ready[/green]")


@db_app.command("reset")
def db_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Drop and recreate all tables, forgetting everything learned."""
    database_url = get_settings().resolved_database_url
    console.print(f"ML Database: {describe_database_url(database_url)}")

    if not force:
        typer.confirm("This will DELETE ALL learned data. Continue?", abort=True)

    async def _run() -> None:
        engine = create_engine(database_url)
        try:
            await reset_database(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[green]ML database recreated[/green]")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
