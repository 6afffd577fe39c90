"""
Parsing Service

Functions for reading untrusted extraction output (AI or free-text
parsers) into ParsedIngredient entries, and for parsing and displaying
fractional quantities.
"""

import json
import logging
import math
import re

from constants import UNICODE_FRACTIONS, COMMON_FRACTIONS, MAX_QUANTITY, MAX_COST_PER_UNIT
from utils.sanitizer import sanitize_ingredient_name, sanitize_unit
from .entities import ParsedIngredient

logger = logging.getLogger(__name__)

DEFAULT_UNIT = 'kg'
DEFAULT_QUANTITY = 1.0


def float_to_fraction(value):
    """Convert float to fraction string for display."""
    if value is None or value == 0:
        return '0'
    # Check if it's a whole number
    if value == int(value):
        return str(int(value))
    whole = int(value)
    decimal = value - whole
    # Check common fractions (with tolerance)
    for dec, frac in COMMON_FRACTIONS.items():
        if abs(decimal - dec) < 0.02:
            if whole > 0:
                return f"{whole} {frac}"
            return frac
    return f"{value:.2f}".rstrip('0').rstrip('.')


def normalize_fractions(text):
    """Replace Unicode fraction characters with decimal equivalents."""
    # Normalize all whitespace (including non-breaking spaces) to regular spaces
    text = re.sub(r'[\s\u00a0\u2000-\u200b]+', ' ', text)

    for char, value in UNICODE_FRACTIONS.items():
        if char in text:
            # Mixed fraction like "1½" or "1 ½"
            pattern = r'(\d+)\s*' + re.escape(char)
            match = re.search(pattern, text)
            if match:
                whole = float(match.group(1))
                text = re.sub(pattern, str(whole + value), text)
            else:
                text = text.replace(char, str(value))
    return text


def parse_quantity(value, default=DEFAULT_QUANTITY):
    """
    Parse a quantity that may be a number or a string like '1 1/2', '1/4', '½'.
    Returns default for anything unparseable, negative or non-finite.
    """
    if isinstance(value, bool) or value is None:
        return default

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        s = normalize_fractions(str(value)).strip()
        if not s:
            return default
        mixed_match = re.match(r'^(\d+)\s+(\d+)\s*/\s*(\d+)$', s)
        frac_match = re.match(r'^(\d+)\s*/\s*(\d+)$', s)
        try:
            if mixed_match:
                whole, num, denom = (float(g) for g in mixed_match.groups())
                number = whole + num / denom
            elif frac_match:
                num, denom = (float(g) for g in frac_match.groups())
                number = num / denom
            else:
                number = float(s)
        except (ValueError, ZeroDivisionError):
            return default

    if not math.isfinite(number) or number < 0:
        return default
    return min(number, MAX_QUANTITY)


def _optional_number(value, upper):
    """Numeric fields that stay None unless a real non-negative number is given."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number) or number < 0:
        return None
    return min(number, upper)


def parse_ingredients(raw):
    """
    Convert a raw extraction 'ingredients' list into ParsedIngredient entries.

    Entries without a usable name are skipped silently; everything else
    falls back to defaults rather than failing the whole payload.
    """
    if not isinstance(raw, list):
        return []

    parsed = []
    for item in raw:
        if not isinstance(item, dict) or not isinstance(item.get('name'), str):
            continue
        name = sanitize_ingredient_name(item['name'])
        if not name:
            continue

        unit = sanitize_unit(item.get('unit')) if isinstance(item.get('unit'), str) else ''
        cost = item.get('costPerUnit', item.get('cost_per_unit'))
        piece_count = item.get('pieceCount', item.get('piece_count'))

        parsed.append(ParsedIngredient(
            name=name,
            quantity=parse_quantity(item.get('quantity')),
            unit=unit or DEFAULT_UNIT,
            piece_count=_optional_number(piece_count, MAX_QUANTITY),
            cost_per_unit=_optional_number(cost, MAX_COST_PER_UNIT),
        ))
    return parsed


def parse_recipe_yield(value):
    """Servings count, or None when missing or not a positive number."""
    if isinstance(value, bool) or value is None:
        return None
    number = parse_quantity(value, default=None)
    if number is None or number <= 0:
        return None
    return number


def parse_extraction_payload(raw):
    """
    Parse extraction output into (parsed_ingredients, recipe_yield).

    Accepts a dict or a JSON string, optionally wrapped in ```json fences
    or surrounded by chatter. A string with no JSON object raises ValueError.
    """
    if isinstance(raw, dict):
        data = raw
    else:
        text = str(raw or '').strip()
        text = re.sub(r'```(?:json)?\n?', '', text)
        match = re.search(r'\{[\s\S]*\}', text)
        if not match:
            raise ValueError('No JSON object found in extraction output')
        data = json.loads(match.group(0))
        if not isinstance(data, dict):
            raise ValueError('Extraction output must be a JSON object')

    ingredients = parse_ingredients(data.get('ingredients'))
    recipe_yield = parse_recipe_yield(data.get('recipeYield', data.get('yield')))
    logger.debug("Parsed %d ingredient(s) from extraction output (yield=%s)",
                 len(ingredients), recipe_yield)
    return ingredients, recipe_yield
