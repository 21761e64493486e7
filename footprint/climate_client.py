# footprint/climate_client.py
import logging
from typing import Optional, Sequence

import requests

from . import config
from .factors import CLIMATE_ZONES
from .schemas import HomeEnergyAnswers

logger = logging.getLogger(__name__)


def classify_climate(max_temps: Sequence[float], min_temps: Sequence[float]) -> Optional[str]:
    """Map recent daily max/min temperatures onto one of the four Indian climate zones.

    The diurnal range stands in for humidity: a wide range means dry air.
    """
    max_temps = [t for t in max_temps if t is not None]
    min_temps = [t for t in min_temps if t is not None]
    if not max_temps or not min_temps:
        return None

    avg_max = sum(max_temps) / len(max_temps)
    avg_min = sum(min_temps) / len(min_temps)
    avg_temp = (avg_max + avg_min) / 2
    diurnal_range = avg_max - avg_min

    if avg_temp > 30 and diurnal_range > 12:
        return "hot_dry"
    if avg_temp > 25 and diurnal_range <= 12:
        return "warm_humid"
    if avg_temp < 15:
        return "cold"
    return "moderate"


def fetch_climate_zone(lat: Optional[float], lon: Optional[float]) -> Optional[str]:
    if lat is None or lon is None:
        return None
    params = {
        "latitude": lat,
        "longitude": lon,
        "daily": "temperature_2m_max,temperature_2m_min",
        "timezone": "auto",
        "past_days": config.CLIMATE_PAST_DAYS,
        "forecast_days": 0,
    }
    try:
        r = requests.get(config.OPEN_METEO_URL, params=params, timeout=config.CLIMATE_TIMEOUT_SECONDS)
        r.raise_for_status()
        daily = r.json().get("daily") or {}
    except (requests.RequestException, ValueError) as e:
        logger.warning("Climate lookup for (%s, %s) failed: %s", lat, lon, e)
        return None

    zone = classify_climate(daily.get("temperature_2m_max") or [], daily.get("temperature_2m_min") or [])
    if zone is None:
        logger.warning("Climate lookup for (%s, %s) returned no temperatures", lat, lon)
    return zone


def apply_climate_zone(answers: HomeEnergyAnswers, zone: Optional[str]) -> HomeEnergyAnswers:
    if zone not in CLIMATE_ZONES:
        return answers
    return answers.model_copy(update={"climate_zone": zone})
