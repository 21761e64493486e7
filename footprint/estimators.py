# footprint/estimators.py
from .factors import (
    CARPOOL_SHARE,
    DAYS_PER_YEAR,
    DEFAULT_DIET,
    DEFAULT_WASTE_DISPOSAL,
    DEFAULT_WASTE_SIZE,
    DEFAULT_WATER_USAGE,
    DIET_ANNUAL_CO2,
    ELECTRONICS_ANNUAL_CO2,
    ELECTRONICS_UPGRADE_MULTIPLIERS,
    FLIGHT_CLASSES,
    FOOD_WASTE_MULTIPLIERS,
    LPG_CO2_PER_CYLINDER,
    MONTHS_PER_YEAR,
    PNG_CO2_PER_KG,
    RICE_BASELINE_MEALS_PER_WEEK,
    RICE_CO2_PER_KG,
    RICE_KG_PER_MEAL,
    VEHICLE_TYPES,
    WASTE_DISPOSAL_FACTORS,
    WASTE_SEGREGATION,
    WASTE_SIZES,
    WATER_EMISSION_PER_M3,
    WATER_SOURCE_FACTORS,
    WATER_TREATMENT_FACTORS,
    WATER_USAGE_LEVELS,
    WEEKS_PER_YEAR,
    lookup,
)
from .schemas import (
    FoodAnswers,
    HomeEnergyAnswers,
    ShoppingAnswers,
    TransportAnswers,
    WasteAnswers,
    WaterAnswers,
)


def _or(value, default: float) -> float:
    return default if value is None else value


def _with_fallback(table, key, default_key) -> float:
    """Coefficient for `key`; unset keys give 0, unknown keys give the default entry."""
    if not key:
        return 0.0
    return _or(lookup(table, key), lookup(table, default_key))


def estimate_transport(answers: TransportAnswers) -> float:
    annual = 0.0

    if answers.has_vehicle and answers.vehicle_type and answers.daily_km > 0:
        factor = _or(lookup(VEHICLE_TYPES, answers.vehicle_type), 0.0)
        share = CARPOOL_SHARE if answers.carpools else 1.0
        annual += answers.daily_km * DAYS_PER_YEAR * factor * share

    trips = {
        "domestic": answers.domestic_flights_per_year,
        "international": answers.international_flights_per_year,
    }
    for key, count in trips.items():
        flight = FLIGHT_CLASSES[key]
        annual += count * flight.avg_distance_km * flight.factor * flight.rf_multiplier

    # walking and cycling are zero-emission
    return annual / DAYS_PER_YEAR


def estimate_home_energy(answers: HomeEnergyAnswers) -> float:
    """Cooking fuel only. Electricity comes in as a direct reading from the bill."""
    if answers.cooking_fuel == "lpg":
        annual = answers.lpg_cylinders_per_year * LPG_CO2_PER_CYLINDER
    elif answers.cooking_fuel == "png":
        annual = answers.png_monthly_kg * MONTHS_PER_YEAR * PNG_CO2_PER_KG
    else:
        annual = 0.0
    return annual / DAYS_PER_YEAR


def estimate_food(answers: FoodAnswers) -> float:
    base = _with_fallback(DIET_ANNUAL_CO2, answers.diet_type, DEFAULT_DIET)

    # only rice meals above the weekly baseline are charged
    extra_meals = max(answers.rice_freq_per_week - RICE_BASELINE_MEALS_PER_WEEK, 0)
    extra_rice = extra_meals * RICE_CO2_PER_KG * RICE_KG_PER_MEAL * WEEKS_PER_YEAR

    waste_factor = _or(lookup(FOOD_WASTE_MULTIPLIERS, answers.waste_level), 1.0)
    return ((base + extra_rice) * waste_factor) / DAYS_PER_YEAR


def estimate_shopping(answers: ShoppingAnswers) -> float:
    """Electronics only. Clothing comes in as a direct reading from receipts."""
    upgrade = _or(lookup(ELECTRONICS_UPGRADE_MULTIPLIERS, answers.upgrade_frequency), 1.0)
    devices = sum(_or(lookup(ELECTRONICS_ANNUAL_CO2, d), 0.0) for d in answers.electronics_owned)
    return devices * upgrade / DAYS_PER_YEAR


def estimate_water(answers: WaterAnswers) -> float:
    liters = _with_fallback(WATER_USAGE_LEVELS, answers.usage_level, DEFAULT_WATER_USAGE)
    source = _or(lookup(WATER_SOURCE_FACTORS, answers.source), 1.0)
    treatment = _or(lookup(WATER_TREATMENT_FACTORS, answers.treatment), 1.0)

    # source and treatment are separate burdens on the same liters, so they add
    adjusted_liters = liters * (source + treatment)
    m3_per_year = adjusted_liters * DAYS_PER_YEAR / 1000
    return m3_per_year * WATER_EMISSION_PER_M3 / DAYS_PER_YEAR


def estimate_waste(answers: WasteAnswers) -> float:
    kg_per_year = _with_fallback(WASTE_SIZES, answers.waste_size, DEFAULT_WASTE_SIZE)
    disposal = _or(
        lookup(WASTE_DISPOSAL_FACTORS, answers.disposal),
        lookup(WASTE_DISPOSAL_FACTORS, DEFAULT_WASTE_DISPOSAL),
    )
    segregation = _or(lookup(WASTE_SEGREGATION, answers.segregation), 1.0)
    # may be negative when recycling
    return kg_per_year * disposal * segregation / DAYS_PER_YEAR


ESTIMATORS = {
    "transport": estimate_transport,
    "home_energy": estimate_home_energy,
    "food": estimate_food,
    "shopping": estimate_shopping,
    "water": estimate_water,
    "waste": estimate_waste,
}

CATEGORY_LABELS = {
    "transport": "Transportation",
    "home_energy": "Cooking Fuel",
    "food": "Food & Diet",
    "shopping": "Electronics",
    "water": "Water",
    "waste": "Waste",
}


ANSWER_MODELS = {
    "transport": TransportAnswers,
    "home_energy": HomeEnergyAnswers,
    "food": FoodAnswers,
    "shopping": ShoppingAnswers,
    "water": WaterAnswers,
    "waste": WasteAnswers,
}


def estimate(category: str, answers) -> float:
    """Daily kg CO2 for one category. Answers may be the typed model or a plain dict."""
    estimator = ESTIMATORS.get(category)
    if estimator is None:
        return 0.0
    model = ANSWER_MODELS[category]
    if not isinstance(answers, model):
        answers = model.model_validate(answers or {})
    return estimator(answers)
