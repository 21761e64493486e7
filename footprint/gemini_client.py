# footprint/gemini_client.py
import base64
import json
import logging
import math
import re
from typing import Optional

import requests

from . import config
from .factors import EMISSION_FACTORS, OCR_CATEGORIES

logger = logging.getLogger(__name__)

DOCUMENT_PROMPTS = {
    "electricity": "an electricity bill. Return the total units consumed in kWh",
    "petrol": "a fuel station receipt for petrol. Return the litres purchased",
    "diesel": "a fuel station receipt for diesel. Return the litres purchased",
    "bus": "a bus ticket. Return the distance travelled in km",
    "train": "a train or metro ticket. Return the distance travelled in km",
    "clothing": "a clothing store receipt. Return the number of clothing items purchased",
}

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def build_prompt(category: str) -> str:
    return (
        f"This image is {DOCUMENT_PROMPTS[category]}. "
        'Reply with JSON only, in the form {"value": <number>}. '
        'If the value cannot be read, reply {"value": null}.'
    )


def parse_value(text: str) -> Optional[float]:
    """Pull the numeric value out of the model's reply, JSON first and bare number second."""
    if not text:
        return None
    cleaned = text.strip().strip("`")
    if cleaned.startswith("json"):
        cleaned = cleaned[4:]
    try:
        data = json.loads(cleaned)
    except ValueError:
        data = None
    if isinstance(data, dict):
        value = data.get("value")
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    else:
        match = _NUMBER.search(cleaned)
        if not match:
            return None
        value = float(match.group())
    if not math.isfinite(value) or value < 0:
        return None
    return round(value, 1)


def call_gemini_vision(image_bytes: bytes, prompt: str, mime_type: str = "image/jpeg") -> str:
    payload = {
        "contents": [
            {
                "parts": [
                    {"text": prompt},
                    {"inline_data": {"mime_type": mime_type,
                                     "data": base64.b64encode(image_bytes).decode("ascii")}},
                ]
            }
        ]
    }
    r = requests.post(
        config.GEMINI_URL,
        params={"key": config.GEMINI_API_KEY},
        json=payload,
        timeout=config.OCR_TIMEOUT_SECONDS,
    )
    r.raise_for_status()
    data = r.json()
    return (
        data.get("candidates", [{}])[0]
        .get("content", {})
        .get("parts", [{}])[0]
        .get("text", "")
    )


def extract_reading(image_bytes: bytes, category: str, mime_type: str = "image/jpeg") -> Optional[float]:
    if category not in OCR_CATEGORIES:
        return None
    if not image_bytes:
        return None
    try:
        text = call_gemini_vision(image_bytes, build_prompt(category), mime_type)
    except (requests.RequestException, ValueError, IndexError, AttributeError) as e:
        logger.warning("OCR extraction for %s failed: %s", category, e)
        return None
    value = parse_value(text)
    if value is None:
        logger.warning("OCR reply for %s had no usable value", category)
    else:
        logger.info("OCR read %s %s from %s document", value, EMISSION_FACTORS[category].unit, category)
    return value
