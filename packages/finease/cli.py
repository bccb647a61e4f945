"""CLI for the ``finease`` package.

Typer-based console interface over :class:`finease.session.DashboardSession`.
Environment variables (notably ``OPENAI_API_KEY``) are loaded from a local
``.env`` using ``python-dotenv`` before any command runs. Business logic lives
in the pipeline modules; this module only parses options and renders.
"""

from __future__ import annotations

import json
import random
from decimal import Decimal
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from typer.models import ArgumentInfo

from .config import has_api_key
from .dates import parse_date
from .filters import ALL_CATEGORIES
from .logging_setup import configure_logging, get_logger
from .report import render_session, session_to_dict
from .sample import generate_sample_data
from .session import DashboardSession

_logger = get_logger("finease.cli")

console = Console()

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Analyze a bank statement (CSV, PDF or image) for spending patterns and a "
        "financial stress score. Loads OPENAI_API_KEY from a local .env before running."
    ),
)

# Module-level argument object to satisfy ruff B008 (no calls in parameter
# defaults).
STATEMENT_ARGUMENT: ArgumentInfo = typer.Argument(
    ...,
    help="Path to a bank statement: CSV, PDF, or an image of a statement.",
    dir_okay=False,
    file_okay=True,
    exists=True,
    readable=True,
)


def _validate_date(value: str | None) -> str | None:
    if value is not None and parse_date(value) is None:
        raise typer.BadParameter(f"unrecognized date: {value!r}")
    return value


def _to_decimal(value: float | None) -> Decimal | None:
    return None if value is None else Decimal(str(value))


def _warn_if_no_api_key(*, analyze: bool) -> None:
    if analyze and not has_api_key():
        _logger.warning("cli:missing_api_key analysis=fallback")


def _emit(session: DashboardSession, *, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(session_to_dict(session), ensure_ascii=False, indent=2))
    else:
        render_session(session, console)


@app.command("analyze")
def analyze_cmd(
    statement: Annotated[Path, STATEMENT_ARGUMENT],
    *,
    start_date: str | None = typer.Option(
        None, callback=_validate_date, help="Only include transactions on or after this date."
    ),
    end_date: str | None = typer.Option(
        None, callback=_validate_date, help="Only include transactions on or before this date."
    ),
    category: str = typer.Option(ALL_CATEGORIES, help="Restrict to a single category."),
    min_amount: float | None = typer.Option(None, min=0, help="Minimum transaction amount."),
    max_amount: float | None = typer.Option(None, min=0, help="Maximum transaction amount."),
    no_ai: bool = typer.Option(False, "--no-ai", help="Skip the stress analysis call."),
    as_json: bool = typer.Option(False, "--json", help="Print the dashboard as JSON."),
) -> None:
    """Load a statement, run the analysis and print the dashboard."""

    _warn_if_no_api_key(analyze=not no_ai)
    session = DashboardSession()
    if not session.load_file(statement, analyze=not no_ai):
        console.print(f"[red]Error:[/red] {session.error}")
        raise typer.Exit(1)

    session.update_filters(
        start_date=start_date,
        end_date=end_date,
        category=category,
        min_amount=_to_decimal(min_amount),
        max_amount=_to_decimal(max_amount),
    )
    _emit(session, as_json=as_json)


@app.command("sample")
def sample_cmd(
    *,
    seed: int | None = typer.Option(None, help="Seed for reproducible demo data."),
    no_ai: bool = typer.Option(False, "--no-ai", help="Skip the stress analysis call."),
    as_json: bool = typer.Option(False, "--json", help="Print the dashboard as JSON."),
) -> None:
    """Generate 30 days of demo transactions and print the dashboard."""

    _warn_if_no_api_key(analyze=not no_ai)
    session = DashboardSession()
    session.load(generate_sample_data(rng=random.Random(seed)), analyze=not no_ai)
    _emit(session, as_json=as_json)


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


if __name__ == "__main__":  # pragma: no cover
    app()
