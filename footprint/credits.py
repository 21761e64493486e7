# footprint/credits.py
from collections import defaultdict
from typing import Iterable, List

from .factors import MONTHLY_LIMIT_KG
from .schemas import CreditStatus, MonthlyCredit


def evaluate(total: float, budget: float = MONTHLY_LIMIT_KG) -> CreditStatus:
    """Compare a monthly total with the budget. One credit per kg under budget."""
    return CreditStatus(
        total_kg=total,
        budget_kg=budget,
        surplus_kg=max(total - budget, 0.0),
        credits=max(budget - total, 0.0),
        is_over=total > budget,
    )


def monthly_credits(records: Iterable, budget: float = MONTHLY_LIMIT_KG) -> List[MonthlyCredit]:
    """Group ledger records by calendar month, newest month first.

    Records need `amount` and `recorded_at` attributes; rows without a timestamp are skipped.
    """
    totals = defaultdict(float)
    for r in records:
        if r.recorded_at is None:
            continue
        totals[(r.recorded_at.year, r.recorded_at.month)] += float(r.amount or 0.0)

    months = []
    for (year, month), total in sorted(totals.items(), reverse=True):
        status = evaluate(total, budget)
        months.append(MonthlyCredit(year=year, month=month, total_kg=total,
                                    credits=status.credits, is_over=status.is_over))
    return months


def total_credits(months: Iterable[MonthlyCredit]) -> float:
    return sum((m.credits for m in months), 0.0)
