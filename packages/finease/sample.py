"""Synthetic demo transactions (INR) for exercising the dashboard."""

from __future__ import annotations

import datetime as dt
import random
from decimal import Decimal

from .models import Transaction

SAMPLE_DAYS = 30
# The most recent week is simulated as a stressed period with more impulse buys.
STRESSED_DAYS = 7


def _money(value: float) -> Decimal:
    return Decimal(str(round(value, 2)))


def generate_sample_data(
    *, today: dt.date | None = None, rng: random.Random | None = None
) -> list[Transaction]:
    """Return 30 days of synthetic spend ending at ``today``, newest first.

    Rent lands on the most recent day, groceries weekly; cafe and online
    shopping purchases are random with higher odds in the last week.
    """

    today = today or dt.date.today()
    rng = rng or random.Random()
    data: list[Transaction] = []

    for i in range(SAMPLE_DAYS):
        date_str = (today - dt.timedelta(days=i)).isoformat()

        if i % 30 == 0:
            data.append(
                Transaction(id=f"rent-{i}", date=date_str, amount=Decimal("15000"), category="Rent")
            )
        if i % 7 == 0:
            data.append(
                Transaction(
                    id=f"grocery-{i}",
                    date=date_str,
                    amount=_money(1500 + rng.random() * 1000),
                    category="Groceries",
                )
            )

        stressed = i < STRESSED_DAYS
        if rng.random() < (0.7 if stressed else 0.2):
            data.append(
                Transaction(
                    id=f"coffee-{i}",
                    date=date_str,
                    amount=_money(250 + rng.random() * 200),
                    category="Cafe/Dining",
                    is_discretionary=True,
                )
            )
        if rng.random() < (0.4 if stressed else 0.1):
            data.append(
                Transaction(
                    id=f"shop-{i}",
                    date=date_str,
                    amount=_money(800 + rng.random() * 3000),
                    category="Online Shopping",
                    is_discretionary=True,
                )
            )
    return data


__all__ = ["generate_sample_data"]
