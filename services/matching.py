"""
Ingredient Matching Service

Functions for normalizing ingredient names and finding matches in an
inventory list.

Matching is first-hit-wins over three passes (exact, substring, token
overlap). There is no similarity score: when the inventory holds
near-duplicate names, inventory order decides which one is picked.
"""

import re

MIN_TOKEN_LENGTH = 3

MATCH_EXACT = 'exact'
MATCH_SUBSTRING = 'substring'
MATCH_TOKEN = 'token'


def normalize_ingredient_name(name):
    """Lowercase, trim and collapse whitespace for comparison."""
    return re.sub(r'\s+', ' ', (name or '').strip().lower())


def name_tokens(name):
    """Words longer than two characters, used for token-overlap matching."""
    words = re.split(r'[^\w]+', normalize_ingredient_name(name))
    return [w for w in words if len(w) >= MIN_TOKEN_LENGTH]


def names_overlap(a, b):
    """True if either name contains the other (case-insensitive)."""
    a_norm = normalize_ingredient_name(a)
    b_norm = normalize_ingredient_name(b)
    if not a_norm or not b_norm:
        return False
    return a_norm in b_norm or b_norm in a_norm


def tokens_overlap(a, b):
    """True if any long-enough word of one name appears in the other name."""
    a_norm = normalize_ingredient_name(a)
    b_norm = normalize_ingredient_name(b)
    if any(word in b_norm for word in name_tokens(a_norm)):
        return True
    return any(word in a_norm for word in name_tokens(b_norm))


def find_ingredient_match(raw_name, inventory):
    """
    Find the inventory ingredient for a loosely specified name.

    1. Exact case-insensitive name equality
    2. Substring match in either direction
    3. Token overlap (words of length > 2)

    Returns (ingredient, match_type) or (None, None) if no match.
    """
    normalized = normalize_ingredient_name(raw_name)
    if not normalized:
        return None, None

    for ingredient in inventory:
        if normalize_ingredient_name(ingredient.name) == normalized:
            return ingredient, MATCH_EXACT

    for ingredient in inventory:
        if names_overlap(ingredient.name, normalized):
            return ingredient, MATCH_SUBSTRING

    for ingredient in inventory:
        if tokens_overlap(ingredient.name, normalized):
            return ingredient, MATCH_TOKEN

    return None, None
