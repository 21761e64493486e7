# footprint/schemas.py
import math
from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, computed_field, model_serializer

from .factors import DAYS_PER_MONTH


def _blank_as_zero(value):
    return 0 if value is None or value == "" else value


def _non_negative(value):
    # negatives and NaN/inf are clamped to zero rather than rejected
    if not math.isfinite(value) or value < 0:
        return type(value)(0)
    return value


NonNegativeFloat = Annotated[float, BeforeValidator(_blank_as_zero), AfterValidator(_non_negative)]
NonNegativeInt = Annotated[int, BeforeValidator(_blank_as_zero), AfterValidator(_non_negative)]


class RoundedModel(BaseModel):
    """Base for engine output: floats are kept exact and rounded to 2 places only when serialized."""

    model_config = ConfigDict(frozen=True)

    @model_serializer(mode="wrap")
    def round_floats(self, handler):
        data = handler(self)
        return {k: round(v, 2) if isinstance(v, float) else v for k, v in data.items()}


# -----------------
# Questionnaire answer sets
# -----------------
class TransportAnswers(BaseModel):
    has_vehicle: bool = False
    vehicle_type: Optional[str] = None
    daily_km: NonNegativeFloat = 0.0
    carpools: bool = False
    domestic_flights_per_year: NonNegativeFloat = 0.0
    international_flights_per_year: NonNegativeFloat = 0.0
    walk_cycle_km: NonNegativeFloat = 0.0


class HomeEnergyAnswers(BaseModel):
    household_size: NonNegativeInt = 1
    climate_zone: Optional[str] = None
    cooking_fuel: Optional[str] = None  # lpg | png | none
    lpg_cylinders_per_year: NonNegativeFloat = 0.0
    png_monthly_kg: NonNegativeFloat = 0.0


class FoodAnswers(BaseModel):
    diet_type: Optional[str] = None
    meat_freq_per_week: NonNegativeFloat = 0.0
    dairy_freq_per_week: NonNegativeFloat = 0.0
    rice_freq_per_week: NonNegativeFloat = 0.0
    waste_level: Optional[str] = None


class ShoppingAnswers(BaseModel):
    electronics_owned: List[str] = Field(default_factory=list)
    upgrade_frequency: Optional[str] = None


class WaterAnswers(BaseModel):
    usage_level: Optional[str] = None
    source: Optional[str] = None
    treatment: Optional[str] = None


class WasteAnswers(BaseModel):
    waste_size: Optional[str] = None
    segregation: Optional[str] = None
    disposal: Optional[str] = None


class AllAnswers(BaseModel):
    transport: TransportAnswers = Field(default_factory=TransportAnswers)
    home_energy: HomeEnergyAnswers = Field(default_factory=HomeEnergyAnswers)
    food: FoodAnswers = Field(default_factory=FoodAnswers)
    shopping: ShoppingAnswers = Field(default_factory=ShoppingAnswers)
    water: WaterAnswers = Field(default_factory=WaterAnswers)
    waste: WasteAnswers = Field(default_factory=WasteAnswers)


# -----------------
# Engine output
# -----------------
class DirectReading(RoundedModel):
    category: str
    measured_quantity: float
    derived_emission: float
    source: str = "manual"  # manual | ocr


class CategoryBreakdown(RoundedModel):
    category: str
    label: str
    daily_kg: float

    @computed_field
    @property
    def monthly_kg(self) -> float:
        return self.daily_kg * DAYS_PER_MONTH


class DirectSummary(RoundedModel):
    category: str = "direct_readings"
    label: str = "Bills & Receipts"
    readings: List[DirectReading] = Field(default_factory=list)
    total_kg: float = 0.0


class Footprint(RoundedModel):
    breakdown: List[CategoryBreakdown]
    direct: DirectSummary
    daily_kg: float          # questionnaire estimates only
    monthly_kg: float        # daily_kg x 30
    grand_total_kg: float    # monthly estimates + direct readings


class CreditStatus(RoundedModel):
    total_kg: float
    budget_kg: float
    surplus_kg: float
    credits: float
    is_over: bool

    @computed_field
    @property
    def display_total_kg(self) -> float:
        return max(self.total_kg, 0.0)


class MonthlyCredit(RoundedModel):
    year: int
    month: int
    total_kg: float
    credits: float
    is_over: bool


class LedgerRecord(RoundedModel):
    category: str
    amount: float
    source: str
    description: str
    recorded_at: Optional[datetime] = None


# -----------------
# API payloads
# -----------------
class ReadingIn(BaseModel):
    category: str
    quantity: NonNegativeFloat = 0.0
    source: str = "manual"


class CalculateIn(BaseModel):
    answers: AllAnswers = Field(default_factory=AllAnswers)
    readings: List[ReadingIn] = Field(default_factory=list)
    household_size: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class CalculateOut(BaseModel):
    footprint: Footprint
    credits: CreditStatus
    tips: List[str]
    climate_zone: Optional[str] = None


class SaveIn(BaseModel):
    user_id: str
    readings: List[ReadingIn]
    household_size: Optional[int] = None


class ExtractOut(BaseModel):
    category: str
    value: Optional[float] = None
    emission: Optional[float] = None
    unit: Optional[str] = None


class PriorityArea(BaseModel):
    category: str
    title: str
    tips: List[str]
    recorded_kg: Optional[float] = None


class RecommendationsOut(BaseModel):
    tips: List[str]
    priorities: List[PriorityArea]
    totals: Dict[str, Any] = Field(default_factory=dict)


class CategoryTotal(RoundedModel):
    category: str
    title: str
    total_kg: float


class SummaryOut(BaseModel):
    year: int
    month: int
    credits: CreditStatus
    categories: List[CategoryTotal]  # largest first
    tips: List[str]
