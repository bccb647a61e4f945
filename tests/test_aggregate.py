from decimal import Decimal

from finease.aggregate import aggregate_categories, aggregate_daily_spending, summarize_spending
from finease.models import SpendingType, Transaction


def _tx(i: int, date: str, amount: str, category: str = "Misc", disc: bool = False) -> Transaction:
    return Transaction(
        id=f"t{i}", date=date, amount=Decimal(amount), category=category, is_discretionary=disc
    )


def test_daily_pairs_sorted_ascending_with_zero_fill():
    txs = [
        _tx(0, "2024-01-03", "30", disc=True),
        _tx(1, "2024-01-01", "100"),
        _tx(2, "2024-01-01", "25.50", disc=True),
        _tx(3, "2024-01-03", "20", disc=True),
    ]

    points = aggregate_daily_spending(txs)

    assert [(p.date, p.type, p.amount) for p in points] == [
        ("2024-01-01", SpendingType.ESSENTIAL, Decimal("100")),
        ("2024-01-01", SpendingType.DISCRETIONARY, Decimal("25.50")),
        ("2024-01-03", SpendingType.ESSENTIAL, Decimal("0")),
        ("2024-01-03", SpendingType.DISCRETIONARY, Decimal("50")),
    ]


def test_daily_unparseable_dates_sort_last():
    txs = [_tx(0, "sometime", "5"), _tx(1, "01/15/2024", "7"), _tx(2, "2024-01-10", "9")]

    dates = [p.date for p in aggregate_daily_spending(txs)]

    assert dates == ["2024-01-10", "2024-01-10", "01/15/2024", "01/15/2024", "sometime", "sometime"]


def test_daily_unpadded_iso_dates_sort_chronologically():
    txs = [_tx(0, "2024-1-10", "1"), _tx(1, "2024-01-05", "2"), _tx(2, "2024-1-2", "3")]

    dates = [p.date for p in aggregate_daily_spending(txs)][::2]

    assert dates == ["2024-1-2", "2024-01-05", "2024-1-10"]


def test_daily_empty_input():
    assert aggregate_daily_spending([]) == []


def test_categories_top_eight_descending():
    txs = [_tx(i, "2024-01-01", str(10 * (i + 1)), category=f"C{i}") for i in range(10)]
    txs.append(_tx(99, "2024-01-02", "5", category="C0"))

    cats = aggregate_categories(txs)

    assert len(cats) == 8
    assert [c.name for c in cats][:3] == ["C9", "C8", "C7"]
    assert cats[-1].name == "C2"
    values = [c.value for c in cats]
    assert values == sorted(values, reverse=True)


def test_categories_are_case_sensitive_and_ties_keep_first_seen_order():
    txs = [
        _tx(0, "2024-01-01", "10", category="food"),
        _tx(1, "2024-01-01", "10", category="Food"),
        _tx(2, "2024-01-01", "4", category="food"),
    ]

    cats = aggregate_categories(txs)

    assert [(c.name, c.value) for c in cats] == [("food", Decimal("14")), ("Food", Decimal("10"))]

    tied = aggregate_categories([_tx(0, "d", "5", "B"), _tx(1, "d", "5", "A")])
    assert [c.name for c in tied] == ["B", "A"]


def test_aggregations_do_not_mutate_input():
    txs = [_tx(1, "2024-01-02", "1"), _tx(0, "2024-01-01", "2")]
    snapshot = list(txs)

    aggregate_daily_spending(txs)
    aggregate_categories(txs)

    assert txs == snapshot


def test_summary_ratio_and_zero_total():
    txs = [_tx(0, "2024-01-01", "75"), _tx(1, "2024-01-01", "25", disc=True)]

    s = summarize_spending(txs)

    assert s.total == Decimal("100")
    assert s.essential == Decimal("75")
    assert s.discretionary == Decimal("25")
    assert s.discretionary_ratio == Decimal("25")
    assert s.count == 2

    empty = summarize_spending([])
    assert empty.total == 0 and empty.discretionary_ratio == 0 and empty.count == 0
