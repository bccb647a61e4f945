"""Lenient calendar-date parsing shared by aggregation and filtering."""

from __future__ import annotations

import datetime as dt

# Tried in order after ISO; "%Y-%m-%d" here picks up unpadded ISO-style dates
# ("2024-1-2"). Day-first formats come last so US exports win ties.
_FALLBACK_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%d/%m/%Y",
    "%Y/%m/%d",
    "%d-%m-%Y",
)


def parse_date(value: str | None) -> dt.date | None:
    """Return the calendar date for ``value`` or ``None`` when unrecognized."""

    if not value:
        return None
    s = value.strip()
    if not s:
        return None
    try:
        return dt.date.fromisoformat(s[:10])
    except ValueError:
        pass
    head = s.split()[0][:10]
    for fmt in _FALLBACK_FORMATS:
        try:
            return dt.datetime.strptime(head, fmt).date()
        except ValueError:
            continue
    return None


__all__ = ["parse_date"]
