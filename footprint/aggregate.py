# footprint/aggregate.py
from collections.abc import Mapping
from typing import Iterable, List, NamedTuple, Optional, Tuple, Union

from .direct import ReadingSession
from .estimators import CATEGORY_LABELS, ESTIMATORS
from .factors import DAYS_PER_MONTH
from .schemas import AllAnswers, CategoryBreakdown, Footprint

ESTIMATE = "estimate"
DIRECT = "direct"


class Contribution(NamedTuple):
    source: str  # ESTIMATE (kg per day) | DIRECT (kg for the whole period)
    category: str
    kg: float


def period_kg(contribution: Contribution) -> float:
    """A contribution's share of one month.

    Questionnaire estimates are daily rates and scale by 30. Direct readings come
    from a bill or receipt that already covers the period and are taken as-is.
    """
    if contribution.source == DIRECT:
        return contribution.kg
    return contribution.kg * DAYS_PER_MONTH


def reduce_contributions(contributions: Iterable[Contribution]) -> float:
    return sum((period_kg(c) for c in contributions), 0.0)


def breakdown_for(answers: AllAnswers) -> List[CategoryBreakdown]:
    """All six categories in fixed order, zero entries included."""
    return [
        CategoryBreakdown(category=category, label=CATEGORY_LABELS[category],
                          daily_kg=estimator(getattr(answers, category)))
        for category, estimator in ESTIMATORS.items()
    ]


def aggregate(
    answers: Union[AllAnswers, Mapping, None] = None,
    readings: Union[ReadingSession, Iterable[Tuple[str, float]], None] = None,
    household_size: Optional[int] = None,
) -> Footprint:
    if not isinstance(answers, AllAnswers):
        answers = AllAnswers.model_validate(answers or {})
    if not isinstance(readings, ReadingSession):
        readings = ReadingSession(readings)
    if household_size is None:
        household_size = answers.home_energy.household_size

    breakdown = breakdown_for(answers)
    direct = readings.summary(household_size)

    contributions = [Contribution(ESTIMATE, b.category, b.daily_kg) for b in breakdown]
    contributions += [
        Contribution(DIRECT, r.category, readings.attributed(r, household_size))
        for r in direct.readings
    ]

    daily = sum((b.daily_kg for b in breakdown), 0.0)
    return Footprint(
        breakdown=breakdown,
        direct=direct,
        daily_kg=daily,
        monthly_kg=daily * DAYS_PER_MONTH,
        grand_total_kg=reduce_contributions(contributions),
    )
