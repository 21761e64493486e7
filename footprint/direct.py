# footprint/direct.py
import logging
import math
from typing import Dict, Iterable, List, Optional, Tuple

from .factors import EMISSION_FACTORS, SHARED_CATEGORIES
from .schemas import DirectReading, DirectSummary

logger = logging.getLogger(__name__)


def _quantity(value) -> float:
    # missing, negative and non-finite quantities all read as nothing measured
    value = float(value or 0)
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def convert(category: str, quantity: float) -> float:
    """kg CO2 for a measured quantity off a bill or receipt; 0 for unknown categories."""
    factor = EMISSION_FACTORS.get(category)
    if factor is None:
        return 0.0
    return round(_quantity(quantity) * factor.factor, 2)


def apportion(emission: float, household_size: Optional[int]) -> float:
    return round(emission / max(household_size or 0, 1), 2)


def unit_for(category: str) -> str:
    factor = EMISSION_FACTORS.get(category)
    return factor.unit if factor else "units"


class ReadingSession:
    """Direct readings collected during one calculation.

    Keyed by category: submitting a second reading for the same category replaces
    the first one instead of adding to it.
    """

    def __init__(self, readings: Optional[Iterable[Tuple[str, float]]] = None):
        self._readings: Dict[str, DirectReading] = {}
        for category, quantity in readings or ():
            self.submit(category, quantity)

    def submit(self, category: str, quantity: float, source: str = "manual") -> DirectReading:
        reading = DirectReading(
            category=category,
            measured_quantity=_quantity(quantity),
            derived_emission=convert(category, quantity),
            source=source,
        )
        if category in self._readings:
            logger.debug("Reading for %s superseded (%s -> %s)", category,
                         self._readings[category].measured_quantity, reading.measured_quantity)
        self._readings[category] = reading
        return reading

    def discard(self, category: str) -> None:
        self._readings.pop(category, None)

    def get(self, category: str) -> Optional[DirectReading]:
        return self._readings.get(category)

    @property
    def readings(self) -> List[DirectReading]:
        return list(self._readings.values())

    def __len__(self):
        return len(self._readings)

    def __contains__(self, category):
        return category in self._readings

    @staticmethod
    def attributed(reading: DirectReading, household_size: Optional[int]) -> float:
        """Emission charged to one person: shared readings are split across the household."""
        if reading.category in SHARED_CATEGORIES:
            return apportion(reading.derived_emission, household_size)
        return reading.derived_emission

    def total(self, household_size: Optional[int] = 1) -> float:
        return sum((self.attributed(r, household_size) for r in self._readings.values()), 0.0)

    def summary(self, household_size: Optional[int] = 1) -> DirectSummary:
        return DirectSummary(readings=self.readings, total_kg=self.total(household_size))
