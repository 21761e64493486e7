# footprint/factors.py
# Emission factors and lifestyle baselines (India-specific: CEA, CPCB, BEE, IPCC).
# Everything here is read-only; lookups go through `lookup`.
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional


class Coefficient(NamedTuple):
    label: str
    value: float


class FlightClass(NamedTuple):
    factor: float          # kg CO2 per passenger-km
    rf_multiplier: float   # radiative forcing, non-CO2 warming at altitude
    avg_distance_km: float


class EmissionFactor(NamedTuple):
    key: str
    label: str
    factor: float
    unit: str


def _frozen(table):
    return MappingProxyType(dict(table))


def lookup(table: Mapping, key: Optional[str]) -> Optional[float]:
    """Return the numeric coefficient stored under `key`, or None when the key is unset or unknown."""
    if not key:
        return None
    entry = table.get(key)
    if entry is None:
        return None
    if isinstance(entry, (int, float)):
        return float(entry)
    return float(entry.value)


DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30
WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12

# kg CO2 per person per month; 1 kg under the limit = 1 credit
MONTHLY_LIMIT_KG = 480.0

# -----------------
# Transport
# -----------------
VEHICLE_TYPES = _frozen({
    "petrol_small": Coefficient("Small Petrol Car (Swift, i10)", 0.147),
    "petrol_medium": Coefficient("Medium Petrol Car (City, Ciaz)", 0.181),
    "petrol_large": Coefficient("Large Car / SUV (Innova, Fortuner)", 0.239),
    "diesel_small": Coefficient("Small Diesel Car", 0.142),
    "diesel_medium": Coefficient("Medium Diesel Car", 0.168),
    "diesel_large": Coefficient("Large Diesel Car / SUV", 0.201),
    "cng_small": Coefficient("CNG Small Car", 0.109),
    "cng_medium": Coefficient("CNG Medium Car", 0.132),
    "two_wheeler_small": Coefficient("Two-Wheeler (100-150cc)", 0.065),
    "two_wheeler_large": Coefficient("Two-Wheeler (>150cc)", 0.089),
    "ev_two_wheeler": Coefficient("Electric Two-Wheeler", 0.089),
    "ev_car": Coefficient("Electric Car", 0.132),
})

# share of a car trip attributed to the driver when carpooling
CARPOOL_SHARE = 0.5

FLIGHT_CLASSES = _frozen({
    "domestic": FlightClass(factor=0.177, rf_multiplier=1.9, avg_distance_km=1300),
    "international": FlightClass(factor=0.156, rf_multiplier=1.9, avg_distance_km=5000),
})

# -----------------
# Home energy (cooking fuel)
# -----------------
LPG_CO2_PER_CYLINDER = 42.3  # 14.2 kg x 2.98 kg CO2/kg
PNG_CO2_PER_KG = 2.75

COOKING_FUELS = _frozen({
    "lpg": Coefficient("LPG Cylinder", LPG_CO2_PER_CYLINDER),
    "png": Coefficient("Piped Natural Gas (PNG)", PNG_CO2_PER_KG),
    "none": Coefficient("No gas cooking", 0.0),
})

CLIMATE_ZONES = _frozen({
    "hot_dry": Coefficient("Hot & Dry (Delhi, Rajasthan)", 1.3),
    "warm_humid": Coefficient("Warm & Humid (Mumbai, Chennai)", 1.2),
    "moderate": Coefficient("Moderate (Bangalore, Pune)", 0.9),
    "cold": Coefficient("Cold (Hill Stations)", 1.1),
})

# -----------------
# Food & diet (kg CO2 per year)
# -----------------
DIET_ANNUAL_CO2 = _frozen({
    "vegetarian": Coefficient("Vegetarian", 610.0),
    "nonveg_moderate": Coefficient("Non-vegetarian (moderate)", 689.0),
    "nonveg_heavy": Coefficient("Non-vegetarian (heavy)", 796.0),
})
DEFAULT_DIET = "vegetarian"

FOOD_WASTE_MULTIPLIERS = _frozen({
    "minimal": Coefficient("Very careful, minimal waste", 0.93),
    "average": Coefficient("Some leftovers / expired items", 1.0),
    "significant": Coefficient("Significant waste", 1.15),
    "high": Coefficient("High waste levels", 1.30),
})

RICE_BASELINE_MEALS_PER_WEEK = 5
RICE_KG_PER_MEAL = 0.15
RICE_CO2_PER_KG = 2.3

# -----------------
# Shopping & consumption (kg CO2 per device per year)
# -----------------
ELECTRONICS_ANNUAL_CO2 = _frozen({
    "smartphone": Coefficient("Smartphone", 28.3),
    "laptop": Coefficient("Laptop", 102.5),
    "led_tv": Coefficient("LED TV", 40.0),
    "refrigerator": Coefficient("Refrigerator", 56.3),
    "ac": Coefficient("Air Conditioner", 89.0),
})

ELECTRONICS_UPGRADE_MULTIPLIERS = _frozen({
    "only_broken": Coefficient("Replace only when broken", 1.0),
    "few_years": Coefficient("Upgrade every few years", 1.5),
    "frequent": Coefficient("Frequent early upgrades", 2.5),
})

# -----------------
# Water
# -----------------
WATER_USAGE_LEVELS = _frozen({
    "conservative": Coefficient("Conservative", 95.0),
    "average": Coefficient("Average", 150.0),
    "high": Coefficient("High", 250.0),
})
DEFAULT_WATER_USAGE = "average"

WATER_SOURCE_FACTORS = _frozen({
    "municipal": Coefficient("Municipal Supply", 1.0),
    "borewell": Coefficient("Borewell", 1.2),
    "tanker": Coefficient("Tanker", 1.5),
})

WATER_TREATMENT_FACTORS = _frozen({
    "none": Coefficient("No Treatment", 1.0),
    "basic": Coefficient("Basic Filtration", 1.1),
    "ro_uv": Coefficient("RO / UV", 1.3),
})

# 0.34 supply + 0.57 wastewater, kg CO2 per m3
WATER_EMISSION_PER_M3 = 0.91

# -----------------
# Waste
# -----------------
WASTE_SIZES = _frozen({
    "small": Coefficient("Small bag (~0.3 kg/day)", 109.5),
    "medium": Coefficient("Medium bag (~0.5 kg/day)", 182.5),
    "large": Coefficient("Large bag (~0.8 kg/day)", 292.0),
})
DEFAULT_WASTE_SIZE = "medium"

WASTE_SEGREGATION = _frozen({
    "yes": Coefficient("Yes, fully", 0.6),
    "partial": Coefficient("Partially", 0.8),
    "no": Coefficient("No", 1.0),
})

# recycling is a net credit, hence negative
WASTE_DISPOSAL_FACTORS = _frozen({
    "landfill": Coefficient("Landfill", 0.94),
    "recycle": Coefficient("Recycle", -0.2),
    "compost": Coefficient("Compost", 0.15),
    "mix": Coefficient("Mix of methods", 0.5),
})
DEFAULT_WASTE_DISPOSAL = "landfill"

# -----------------
# Direct readings (bills, receipts, tickets)
# -----------------
EMISSION_FACTORS = _frozen({
    "electricity": EmissionFactor("electricity", "Electricity", 0.82, "kWh"),
    "petrol": EmissionFactor("petrol", "Petrol / Gasoline", 2.31, "liters"),
    "diesel": EmissionFactor("diesel", "Diesel", 2.68, "liters"),
    "natural_gas": EmissionFactor("natural_gas", "Natural Gas (PNG)", 2.75, "kg"),
    "bus": EmissionFactor("bus", "Bus Travel", 0.089, "km"),
    "train": EmissionFactor("train", "Train / Metro", 0.033, "km"),
    "clothing": EmissionFactor("clothing", "Clothing Purchased", 12.5, "items"),
})

# readings shared by everyone under one roof, split by household size
SHARED_CATEGORIES = frozenset({"electricity"})

OCR_CATEGORIES = ("electricity", "petrol", "diesel", "bus", "train", "clothing")
