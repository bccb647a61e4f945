"""Terminal and JSON rendering of a dashboard session."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import AnalysisResult, CategorySummary, ChartDataPoint, SpendingSummary, Transaction
from .session import DashboardSession

_LEVEL_STYLES = {
    "Stable": "green",
    "Mild": "yellow",
    "High": "dark_orange",
    "Critical": "red",
}


def format_inr(amount: Decimal) -> str:
    return f"₹{amount:,.2f}"


# ---- Rich renderables --------------------------------------------------------


def summary_panel(summary: SpendingSummary) -> Panel:
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold")
    grid.add_column(justify="right")
    grid.add_row("Total spend", format_inr(summary.total))
    grid.add_row("Essential", format_inr(summary.essential))
    grid.add_row("Discretionary", format_inr(summary.discretionary))
    grid.add_row("Discretionary ratio", f"{summary.discretionary_ratio:.1f}%")
    grid.add_row("Transactions", str(summary.count))
    return Panel(grid, title="Spending Summary", border_style="cyan")


def daily_table(points: list[ChartDataPoint]) -> Table:
    """One row per date with the Essential/Discretionary pair side by side."""

    table = Table(title="Daily Spending")
    table.add_column("Date")
    table.add_column("Essential", justify="right")
    table.add_column("Discretionary", justify="right", style="magenta")

    by_date: dict[str, dict[str, Decimal]] = {}
    for p in points:
        by_date.setdefault(p.date, {})[p.type.value] = p.amount
    zero = Decimal("0")
    for date, amounts in by_date.items():
        table.add_row(
            date,
            format_inr(amounts.get("Essential", zero)),
            format_inr(amounts.get("Discretionary", zero)),
        )
    return table


def category_table(categories: list[CategorySummary]) -> Table:
    table = Table(title="Top Categories")
    table.add_column("Category")
    table.add_column("Spend", justify="right")
    for c in categories:
        table.add_row(c.name, format_inr(c.value))
    return table


def transactions_table(transactions: list[Transaction], *, caption: str | None = None) -> Table:
    table = Table(title="Transactions", caption=caption)
    table.add_column("Date")
    table.add_column("Merchant / Category")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    for tx in transactions:
        label = Text(tx.merchant or tx.category)
        if tx.is_discretionary:
            label.stylize("magenta")
        table.add_row(tx.date, label, tx.category, format_inr(tx.amount))
    return table


def analysis_panel(result: AnalysisResult) -> Panel:
    style = _LEVEL_STYLES.get(result.level, "white")
    heading = Text.assemble(
        ("Stress score: ", "bold"),
        (f"{result.score:g}/100", f"bold {style}"),
        "  ",
        (result.level, style),
    )
    body: list[Any] = [heading, Text("")]
    body.append(Text("Observations", style="bold"))
    body.extend(Text(f"• {o}") for o in result.observations)
    body.append(Text(""))
    body.append(Text.assemble(("Recent changes: ", "bold"), result.recent_changes))
    body.append(Text.assemble(("Why it matters: ", "bold"), result.importance))
    body.append(Text(""))
    body.append(Text("Recommendations", style="bold"))
    body.extend(Text(f"{i}. {r}") for i, r in enumerate(result.recommendations, start=1))
    return Panel(Group(*body), title="Financial Stress Analysis", border_style=style)


def render_session(session: DashboardSession, console: Console) -> None:
    """Print the full dashboard for ``session`` to ``console``."""

    if session.error:
        console.print(f"[red]Error:[/red] {session.error}")
    if session.analysis is not None:
        console.print(analysis_panel(session.analysis))
    console.print(summary_panel(session.summary))
    console.print(category_table(session.category_data))
    console.print(daily_table(session.daily_data))
    console.print(transactions_table(session.filtered_transactions, caption=session.caption()))


# ---- JSON view ---------------------------------------------------------------


def _money(value: Decimal) -> float:
    return float(value)


def session_to_dict(session: DashboardSession) -> dict[str, Any]:
    """Return a JSON-serializable snapshot of the (filtered) dashboard."""

    summary = session.summary
    return {
        "summary": {
            "total": _money(summary.total),
            "essential": _money(summary.essential),
            "discretionary": _money(summary.discretionary),
            "discretionaryRatio": _money(summary.discretionary_ratio),
            "count": summary.count,
        },
        "categories": [{"name": c.name, "value": _money(c.value)} for c in session.category_data],
        "daily": [
            {"date": p.date, "amount": _money(p.amount), "type": p.type.value}
            for p in session.daily_data
        ],
        "transactions": [
            {
                "id": tx.id,
                "date": tx.date,
                "amount": _money(tx.amount),
                "category": tx.category,
                "merchant": tx.merchant,
                "isDiscretionary": tx.is_discretionary,
            }
            for tx in session.filtered_transactions
        ],
        "caption": session.caption(),
        "analysis": (
            session.analysis.model_dump(by_alias=True) if session.analysis is not None else None
        ),
        "error": session.error,
    }


__all__ = [
    "analysis_panel",
    "category_table",
    "daily_table",
    "format_inr",
    "render_session",
    "session_to_dict",
    "summary_panel",
    "transactions_table",
]
