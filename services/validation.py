"""
Recipe Validation Service

Checks a recipe before it is saved. Unlike reconciliation, which merges
duplicate ingredients on its own, a manually edited recipe that lists an
ingredient twice is rejected so the user can fix it.
"""

import math
from collections import Counter

from constants import MAX_QUANTITY
from .exceptions import DuplicateIngredientError, ValidationError


def find_duplicate_ingredients(lines):
    """Ingredient ids appearing on more than one line, in first-seen order."""
    counts = Counter(line.ingredient_id for line in lines if line.ingredient_id)
    seen = []
    for line in lines:
        if counts.get(line.ingredient_id, 0) > 1 and line.ingredient_id not in seen:
            seen.append(line.ingredient_id)
    return seen


def validate_recipe_lines(lines, inventory=None):
    """
    Validate recipe lines for saving and return the non-placeholder ones.

    Placeholder rows (no ingredient or no quantity) are dropped. Raises
    DuplicateIngredientError for repeated ingredients, ValidationError
    for unknown ingredients or out-of-range quantities.
    """
    usable = [line for line in lines if not line.is_placeholder]

    for line in usable:
        if not math.isfinite(line.quantity) or line.quantity > MAX_QUANTITY:
            raise ValidationError(f'Invalid quantity for ingredient {line.ingredient_id}', field='quantity')
        if line.piece_count is not None and (not math.isfinite(line.piece_count) or line.piece_count < 0):
            raise ValidationError(f'Invalid piece count for ingredient {line.ingredient_id}', field='pieceCount')

    duplicates = find_duplicate_ingredients(usable)
    if duplicates:
        names = []
        if inventory is not None:
            by_id = {ing.id: ing.name for ing in inventory}
            names = [by_id.get(i, str(i)) for i in duplicates]
        raise DuplicateIngredientError(duplicates, names)

    if inventory is not None:
        known = {ing.id for ing in inventory}
        missing = [line.ingredient_id for line in usable if line.ingredient_id not in known]
        if missing:
            raise ValidationError(f'Unknown ingredient id(s): {missing}', field='ingredientId')

    return usable
