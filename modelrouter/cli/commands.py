"""CLI commands for modelrouter."""

import json
import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from modelrouter import __logo__, __version__
from modelrouter.errors import CalibrationError, RouterError

app = typer.Typer(
    name="modelrouter",
    help=f"{__logo__} modelrouter - query-aware model routing",
    no_args_is_help=True,
)

console = Console()

_state: dict[str, Path | None] = {"config": None}


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} modelrouter v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
    config: Path = typer.Option(None, "--config", "-c", help="Path to config JSON"),
    verbose: bool = typer.Option(False, "--verbose", help="Show routing traces"),
):
    """modelrouter - query-aware model routing."""
    _state["config"] = config
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _load_router():
    from modelrouter.config.loader import load_config
    from modelrouter.routing.router import create_router_from_config

    settings = load_config(_state["config"])
    return create_router_from_config(settings)


def _fail(error: Exception) -> None:
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


# ============================================================================
# Routing
# ============================================================================


@app.command()
def route(
    query: str = typer.Argument(..., help="Query to route"),
    context_size: int = typer.Option(None, "--context-size", help="Override context size"),
    as_json: bool = typer.Option(False, "--json", help="Print the decision as JSON"),
):
    """Show which model a query would be routed to."""
    try:
        router = _load_router()
        decision = router.route(query, context_size=context_size)
    except RouterError as e:
        _fail(e)

    if as_json:
        console.print_json(json.dumps(decision.to_dict()))
        return

    table = Table(title=f"{__logo__} Routing decision")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Model", f"{decision.model.name} ({decision.model.provider})")
    table.add_row("Tier", decision.tier.value)
    table.add_row("Complexity", f"{decision.complexity:.2f}")
    table.add_row("Task type", decision.task_type)
    table.add_row("Question type", decision.question_type)
    table.add_row("Capabilities", ", ".join(sorted(c.value for c in decision.capabilities)) or "-")
    table.add_row("Strategy", decision.response_strategy)
    table.add_row("Confidence", f"{decision.confidence:.2f}")
    if decision.fallback_used:
        table.add_row("Fallback", f"[yellow]{decision.fallback_reason}[/yellow]")
    if decision.search:
        table.add_row("Search provider", decision.search.provider)

    console.print(table)
    console.print(f"\n[dim]{decision.explanation}[/dim]")


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query to route"),
):
    """Show which search provider a query would use."""
    try:
        router = _load_router()
    except RouterError as e:
        _fail(e)

    result = router.search_router.route(query)
    console.print(
        f"{__logo__} [cyan]{result.kind.value}[/cyan] -> [green]{result.provider}[/green] "
        f"(confidence {result.confidence:.2f})"
    )
    console.print(f"[dim]{result.explanation}[/dim]")


@app.command()
def catalog():
    """List the models in the active catalog."""
    try:
        router = _load_router()
    except RouterError as e:
        _fail(e)

    table = Table(title=f"{__logo__} Model catalog")
    table.add_column("Tier", style="cyan")
    table.add_column("Model")
    table.add_column("Provider")
    table.add_column("Context", justify="right")
    table.add_column("Cost", justify="right")
    table.add_column("Domains")

    for tier, models in router.catalog.tiers.items():
        for model in models:
            table.add_row(
                tier.value,
                model.name,
                model.provider,
                f"{model.context_window:,}",
                f"{model.cost_tier}/5",
                ", ".join(model.specialized_domains) or "-",
            )

    console.print(table)


# ============================================================================
# Calibration
# ============================================================================


@app.command()
def calibrate(
    samples: Path = typer.Option(None, "--samples", "-s", help="Labeled samples JSON"),
    workers: int = typer.Option(None, "--workers", "-w", help="Threads per candidate"),
    save: bool = typer.Option(False, "--save", help="Write the threshold to the config"),
):
    """Choose the advanced-tier threshold from labeled samples."""
    from modelrouter.config.loader import load_config, save_config
    from modelrouter.routing.calibration import RouterCalibration, load_samples
    from modelrouter.routing.router import create_router_from_config

    try:
        settings = load_config(_state["config"])
        if workers:
            calibration_cfg = settings.calibration.model_copy(update={"max_workers": workers})
            settings = settings.model_copy(update={"calibration": calibration_cfg})

        sample_list, target = (None, None)
        if samples:
            sample_list, target = load_samples(samples)

        router = create_router_from_config(settings)
        calibration = RouterCalibration.from_settings(
            settings,
            router=router,
            samples=sample_list,
            target_distribution=target,
        )
        result = calibration.calibrate()
    except RouterError as e:
        _fail(e)

    table = Table(title=f"{__logo__} Calibration sweep")
    table.add_column("Threshold", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Accuracy", justify="right")

    for evaluation in result.evaluations:
        marker = " [green]✓[/green]" if evaluation.threshold == result.threshold else ""
        table.add_row(
            f"{evaluation.threshold:.2f}{marker}",
            f"{evaluation.score:.4f}",
            f"{evaluation.average_confidence:.2f}",
            f"{evaluation.accuracy:.2f}",
        )

    console.print(table)

    if not result.conclusive:
        console.print(
            f"\n[yellow]Every threshold scored the same; "
            f"keeping {result.threshold:.2f}[/yellow]"
        )
        if save:
            _fail(CalibrationError("Samples do not discriminate between thresholds, refusing to save"))
        return

    console.print(f"\n[green]✓[/green] Best threshold: {result.threshold:.2f}")

    if save:
        path = save_config(settings.with_advanced_threshold(result.threshold), _state["config"])
        console.print(f"[green]✓[/green] Saved threshold to {path}")


if __name__ == "__main__":
    app()
