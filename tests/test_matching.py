"""Tests for ingredient name matching."""

from services import Ingredient
from services.matching import find_ingredient_match, name_tokens, normalize_ingredient_name


INVENTORY = [
    Ingredient(id=1, name='Chicken Breast', unit='kg'),
    Ingredient(id=2, name='Tomato', unit='kg'),
    Ingredient(id=3, name='Cherry Tomato', unit='kg'),
]


def test_normalize_ingredient_name():
    assert normalize_ingredient_name('  Red   ONION ') == 'red onion'
    assert normalize_ingredient_name(None) == ''


def test_name_tokens_skip_short_words():
    assert name_tokens('Oil of olive') == ['oil', 'olive']


def test_exact_match_wins_over_substring():
    ingredient, match_type = find_ingredient_match('cherry tomato', INVENTORY)
    assert ingredient.id == 3
    assert match_type == 'exact'


def test_substring_match_in_inventory_order():
    ingredient, match_type = find_ingredient_match('Tomatoes, diced', INVENTORY)
    assert ingredient.id == 2
    assert match_type == 'substring'


def test_token_overlap():
    ingredient, match_type = find_ingredient_match('boneless chicken', INVENTORY)
    assert ingredient.id == 1
    assert match_type == 'token'


def test_no_match():
    assert find_ingredient_match('Saffron', INVENTORY) == (None, None)
    assert find_ingredient_match('   ', INVENTORY) == (None, None)
