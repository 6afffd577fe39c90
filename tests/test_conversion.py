"""Tests for unit conversion and display-label inference."""

import pytest

from services import ConversionRules, ConversionResult, Ingredient, RecipeLine
from services.conversion import (
    compute_unit_normalization, convert_unit, describe_quantity, format_count_label,
    label_for, plan_unit_normalization,
)


class TestConvertUnit:

    def test_salt_teaspoons_use_denser_factor(self):
        result = convert_unit(2, 'tsp', 'kg', 'Sea Salt')
        assert result.quantity == pytest.approx(0.012)
        assert result.piece_count == 2
        assert result.recipe_unit == 'tsp'

    def test_spice_teaspoons(self):
        result = convert_unit(2, 'teaspoons', 'kg', 'Ground Cumin')
        assert result.quantity == pytest.approx(0.01)
        assert result.piece_count == 2

    def test_tablespoons_to_kg(self):
        result = convert_unit(3, 'Tbsp', 'kg', 'Tahini')
        assert result.quantity == pytest.approx(0.045)
        assert result.recipe_unit == 'tbsp'

    def test_millilitres_to_litres(self):
        result = convert_unit(250, 'ml', 'L', 'Milk')
        assert result.quantity == pytest.approx(0.25)
        assert result.piece_count == 250
        assert result.recipe_unit == 'ml'

    def test_spoons_to_litres(self):
        assert convert_unit(1, 'tsp', 'L', 'Lemon Juice').quantity == pytest.approx(0.005)
        assert convert_unit(2, 'tbsp', 'liter', 'Olive Oil').quantity == pytest.approx(0.03)

    def test_cup_of_dry_goods_to_kg(self):
        result = convert_unit(2, 'cups', 'kg', 'Basmati Rice')
        assert result.quantity == pytest.approx(0.4)
        assert result.piece_count == 2
        assert result.recipe_unit == 'cups'

    def test_cup_of_non_dry_goods_passes_through(self):
        assert convert_unit(2, 'cup', 'kg', 'Yogurt') == ConversionResult(2.0, None, None)

    def test_same_unit_passes_through_case_insensitively(self):
        assert convert_unit(1.5, 'KG', 'kg', 'Onion') == ConversionResult(1.5, None, None)

    def test_unknown_combination_passes_through(self):
        assert convert_unit(3, 'tsp', 'g', 'Cumin') == ConversionResult(3.0, None, None)
        assert convert_unit(3, 'bunch', 'kg', 'Parsley') == ConversionResult(3.0, None, None)

    def test_results_are_rounded(self):
        result = convert_unit(1 / 3, 'tsp', 'kg', 'Paprika')
        assert result.quantity == round(result.quantity, 6)

    def test_keyword_overrides(self):
        rules = ConversionRules.from_mapping({'dry_goods': ['Freekeh']})
        assert convert_unit(1, 'cup', 'kg', 'Freekeh', rules).quantity == pytest.approx(0.2)
        assert convert_unit(1, 'cup', 'kg', 'Rice', rules).piece_count is None

    def test_unknown_keyword_groups_are_ignored(self):
        rules = ConversionRules.from_mapping({'herbs': ['mint']})
        assert rules == ConversionRules()


class TestLabelFor:

    def test_teaspoon_ratio_for_spices(self):
        cumin = Ingredient(id=1, name='Cumin', unit='kg')
        assert label_for(cumin, 2, 0.01) == 'tsp'

    def test_tablespoon_ratio_for_spices(self):
        cumin = Ingredient(id=1, name='Cumin', unit='kg')
        assert label_for(cumin, 2, 0.03) == 'tbsp'

    def test_cups_of_dry_goods(self):
        rice = Ingredient(id=2, name='Rice', unit='kg')
        assert label_for(rice, 2, 0.4) == 'cup'

    def test_millilitres(self):
        milk = Ingredient(id=3, name='Milk', unit='L')
        assert label_for(milk, 250, 0.25) == 'ml'

    def test_whole_pieces(self):
        onion = Ingredient(id=4, name='Red Onion', unit='kg')
        assert label_for(onion, 3, 0.5) == 'piece'

    def test_piece_unit(self):
        bun = Ingredient(id=5, name='Burger Bun', unit='pcs')
        assert label_for(bun, 4, 4) == 'piece'

    def test_fallback_is_item(self):
        assert label_for(None, 2, 1) == 'item'
        beef = Ingredient(id=6, name='Beef', unit='kg')
        assert label_for(beef, 2.5, 1) == 'item'


class TestDisplay:

    def test_format_count_label(self):
        assert format_count_label('cup', 2) == 'cups'
        assert format_count_label('cup', 1) == 'cup'
        assert format_count_label('cups', 3) == 'cups'
        assert format_count_label('', 3) == ''

    def test_describe_quantity_without_piece_count(self):
        onion = Ingredient(id=4, name='Onion', unit='kg')
        assert describe_quantity(RecipeLine(4, 0.5), onion) == '0.5 kg'

    def test_describe_quantity_with_pieces(self):
        onion = Ingredient(id=4, name='Onion', unit='kg')
        line = RecipeLine(4, 0.5, piece_count=3)
        assert describe_quantity(line, onion) == '3 pieces (0.5 kg)'

    def test_describe_quantity_with_fractional_cups(self):
        rice = Ingredient(id=2, name='Rice', unit='kg')
        line = RecipeLine(2, 0.1, piece_count=0.5)
        assert describe_quantity(line, rice) == '1/2 cups (0.1000 kg)'


class TestUnitNormalization:

    def test_dry_spoons_move_to_grams(self):
        change = compute_unit_normalization('tsp', 'Cumin')
        assert change.target_unit == 'g'
        assert change.quantity_factor == 5
        assert change.cost_factor == pytest.approx(0.2)

    def test_liquids_move_to_millilitres(self):
        assert compute_unit_normalization('cup', 'Whole Milk').quantity_factor == 240
        assert compute_unit_normalization('pint', 'Chicken Stock').quantity_factor == pytest.approx(473.2)
        assert compute_unit_normalization('quart', 'Olive Oil').target_unit == 'ml'

    def test_imperial_weights(self):
        assert compute_unit_normalization('oz', 'Parmesan').quantity_factor == pytest.approx(28.35)
        assert compute_unit_normalization('lb', 'Beef').quantity_factor == pytest.approx(453.6)
        assert compute_unit_normalization('oz', 'Soy Sauce').quantity_factor == pytest.approx(29.57)

    def test_stock_units_and_unknown_units(self):
        assert compute_unit_normalization('kilogram', 'Rice') is None
        assert compute_unit_normalization('pcs', 'Egg') is None
        assert compute_unit_normalization('bunch', 'Parsley') is None

    def test_liquid_keywords_are_configurable(self):
        rules = ConversionRules.from_mapping({'liquids': ['tahini']})
        assert compute_unit_normalization('tbsp', 'Tahini', rules).target_unit == 'ml'
        assert compute_unit_normalization('tbsp', 'Olive Oil', rules).target_unit == 'g'

    def test_plan_rescales_cost(self):
        inventory = [
            Ingredient(id=1, name='Cumin', unit='tsp', cost_per_unit=20000),
            Ingredient(id=2, name='Rice', unit='kg', cost_per_unit=2500),
            Ingredient(id=3, name='Parsley', unit='bunch', cost_per_unit=750),
        ]

        plan = plan_unit_normalization(inventory)

        assert [item.ingredient_id for item in plan] == [1, 3]
        cumin, parsley = plan
        assert (cumin.new_unit, cumin.new_cost_per_unit, cumin.quantity_factor) == ('g', 4000, 5)
        assert parsley.can_convert is False
        assert parsley.new_cost_per_unit == 750
