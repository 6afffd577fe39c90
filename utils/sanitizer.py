"""
Input Sanitization Module

Cleans names and units that arrive from untrusted sources (AI extraction,
supplier feeds, API clients) before they are matched or stored.
"""

import re

from constants import MAX_LENGTHS


def sanitize_text(text, max_length=10000):
    """
    Strip control characters, collapse whitespace and truncate.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, empty if nothing usable remains
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    # Remove control characters and null bytes
    text = re.sub(r'[\x00-\x1f\x7f-\x9f]', ' ', text)

    # Collapse multiple spaces
    text = re.sub(r'\s+', ' ', text).strip()

    if len(text) > max_length:
        text = text[:max_length].rstrip()

    return text


def sanitize_ingredient_name(name, max_length=None):
    """
    Sanitize an ingredient name for matching and storage.

    Strips list bullets and stray punctuation that extraction tools
    leave around names ("- Olive oil", "*Salt*").
    """
    if max_length is None:
        max_length = MAX_LENGTHS['ingredient_name']
    name = sanitize_text(name, max_length=max_length)
    name = re.sub(r'[*#@!]+', '', name)
    return name.strip('-/.,;: ')


def sanitize_unit(unit):
    """Sanitize a unit string; units never contain spaces or punctuation runs."""
    unit = sanitize_text(unit, max_length=MAX_LENGTHS['unit'])
    return unit.strip('.,;: ')
