# footprint/ranking.py
from collections import OrderedDict
from collections.abc import Mapping
from typing import Iterable, List, Optional, Tuple, Union

from .schemas import CategoryBreakdown, PriorityArea

MAX_TIPS = 3

TIPS = {
    "transport": "Use public transport, carpool, or switch to EVs to cut transport emissions",
    "home_energy": "Switch to LED lighting, solar panels, and 5-star rated appliances",
    "food": "Try more plant-based meals and reduce food waste",
    "shopping": "Repair electronics instead of replacing, extend device lifespans",
    "water": "Install low-flow fixtures and use rainwater harvesting",
    "waste": "Segregate waste, compost organic waste, and maximize recycling",
}

FALLBACK_TIP = "Great job! Keep tracking to maintain your low carbon footprint"

# ledger categories (bills, receipts, manual entries) folded into lifestyle categories
CATEGORY_ALIASES = {
    "petrol": "transport",
    "diesel": "transport",
    "car": "transport",
    "bus": "transport",
    "train": "transport",
    "electricity": "home_energy",
    "natural_gas": "home_energy",
    "meat": "food",
    "dairy": "food",
    "clothing": "shopping",
    "waste_general": "waste",
}

TIP_CATALOG = OrderedDict([
    ("transport", ("Transportation", [
        "Use public transport (bus, metro) instead of personal vehicles, saving up to 80% emissions per trip.",
        "Carpool with colleagues or neighbours to halve your per-person vehicle emissions.",
        "Consider switching to an electric vehicle or electric two-wheeler for daily commutes.",
        "For short distances (<3 km), prefer walking or cycling.",
        "Combine multiple errands into a single trip to reduce total kilometres driven.",
        "Use video calls instead of travelling for meetings when possible.",
        "Offset unavoidable flights by supporting verified carbon offset projects.",
    ])),
    ("home_energy", ("Home Energy & Cooking", [
        "Switch to LED lighting, which uses 75% less electricity than incandescent bulbs.",
        "Use BEE 5-star rated appliances (AC, refrigerator, fans) for maximum efficiency.",
        "Install solar panels or subscribe to a solar co-op.",
        "Set AC temperature to 24°C or higher; each degree lower increases consumption by 6%.",
        "Use pressure cookers to reduce cooking time and LPG consumption by up to 70%.",
        "Consider induction cooking, which is more efficient than LPG and has no direct emissions.",
        "Use natural ventilation and ceiling fans before turning on air conditioning.",
        "Unplug devices when not in use to eliminate standby power consumption.",
    ])),
    ("food", ("Food & Diet", [
        "Increase plant-based meals; vegetarian diets produce ~40% less emissions than heavy non-veg.",
        "Reduce food waste by planning meals, using leftovers, and composting scraps.",
        "Buy seasonal and locally-grown produce to cut transport emissions.",
        "Reduce rice consumption where possible, since rice paddies emit significant methane.",
        "Grow herbs and vegetables at home; even a small kitchen garden helps.",
        "Avoid processed and packaged foods, which have higher embedded carbon.",
        "Use reusable containers and bags when shopping for groceries.",
    ])),
    ("shopping", ("Electronics & Shopping", [
        "Extend the lifespan of electronics by repairing instead of replacing.",
        "Buy refurbished electronics when possible to reduce manufacturing emissions.",
        "Sell or donate old electronics instead of discarding them.",
        "Choose energy-efficient devices with BEE star ratings.",
        "Reduce impulse purchases; each smartphone carries ~70 kg CO2 from manufacturing.",
        "Opt for quality over quantity when buying clothes.",
        "Support brands with transparent sustainability practices.",
    ])),
    ("water", ("Water Usage", [
        "Install low-flow showerheads and faucet aerators to save 30-50% water.",
        "Fix leaky taps immediately; a dripping tap wastes ~15 litres/day.",
        "Use a bucket instead of a running shower to save up to 100 litres per bath.",
        "Install rainwater harvesting to reduce dependence on energy-intensive supply.",
        "Use RO reject water for mopping, gardening, or flushing.",
        "Run washing machines and dishwashers only with full loads.",
        "Water plants in early morning or evening to reduce evaporation loss.",
    ])),
    ("waste", ("Waste Management", [
        "Segregate waste into wet, dry, and hazardous categories at source.",
        "Compost kitchen waste at home to cut landfill methane emissions by up to 60%.",
        "Maximise recycling of paper, plastic, glass, and metal.",
        "Avoid single-use plastics; carry reusable bags, bottles, and containers.",
        "Donate usable items instead of throwing them away.",
        "Reduce packaging waste by buying in bulk and choosing minimal packaging.",
        "Participate in local community clean-up and waste management drives.",
    ])),
])

Contributions = Union[Iterable[CategoryBreakdown], Mapping[str, float], Iterable[Tuple[str, float]]]


def canonical_category(category: str) -> str:
    return CATEGORY_ALIASES.get(category, category)


def tip_for(category: str) -> Optional[str]:
    return TIPS.get(canonical_category(category))


def _as_pairs(contributions: Contributions) -> List[Tuple[str, float]]:
    if isinstance(contributions, Mapping):
        return [(k, float(v or 0.0)) for k, v in contributions.items()]
    pairs = []
    for item in contributions:
        if isinstance(item, CategoryBreakdown):
            pairs.append((item.category, item.daily_kg))
        else:
            category, value = item
            pairs.append((category, float(value or 0.0)))
    return pairs


def rank(contributions: Contributions) -> List[str]:
    """Tips for the biggest contributors, largest first.

    Accepts a fresh breakdown or historical per-category totals. Ties keep the
    input order. Returns at most MAX_TIPS distinct tips, or the fallback tip when
    nothing contributes positively.
    """
    ordered = sorted(_as_pairs(contributions), key=lambda p: p[1], reverse=True)
    tips: List[str] = []
    for category, value in ordered:
        if len(tips) == MAX_TIPS:
            break
        if value <= 0:
            continue
        tip = tip_for(category)
        if tip is None or tip in tips:
            continue
        tips.append(tip)
    return tips or [FALLBACK_TIP]


def fold_totals(totals: Mapping[str, float]) -> "OrderedDict[str, float]":
    """Sum ledger categories into lifestyle categories, dropping ones with no tips."""
    folded: "OrderedDict[str, float]" = OrderedDict()
    for category, amount in totals.items():
        key = canonical_category(category)
        if key not in TIP_CATALOG:
            continue
        folded[key] = folded.get(key, 0.0) + float(amount or 0.0)
    return folded


def prioritize(totals: Optional[Mapping[str, float]] = None) -> List[PriorityArea]:
    """Full tip catalog, recorded categories first (largest total first), then the rest in catalog order."""
    folded = fold_totals(totals or {})
    recorded = sorted(folded.items(), key=lambda p: p[1], reverse=True)
    order = [c for c, _ in recorded] + [c for c in TIP_CATALOG if c not in folded]

    areas = []
    for category in order:
        title, tips = TIP_CATALOG[category]
        areas.append(PriorityArea(category=category, title=title, tips=list(tips),
                                  recorded_kg=folded.get(category)))
    return areas
