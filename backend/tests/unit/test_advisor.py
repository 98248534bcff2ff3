"""
Unit tests for bulk and substitution advice.
"""

import pytest
from decimal import Decimal

from smartlist.models import ShoppingItem
from smartlist.services.advisor import (
    BULK_NOTE,
    advise,
    bulk_savings,
    nutrition_highlight,
    potential_savings,
    qualifies_for_bulk,
    shopping_hints,
    substitutions_for,
)


class TestBulk:
    """Tests for bulk thresholds and savings."""

    @pytest.mark.unit
    def test_over_threshold(self):
        """More than 2 kg of pantry goods qualifies."""
        assert qualifies_for_bulk(Decimal("2500"), "gram", "Pantry")

    @pytest.mark.unit
    def test_threshold_is_strict(self):
        """Exactly the threshold does not qualify."""
        assert not qualifies_for_bulk(Decimal("2000"), "gram", "Pantry")

    @pytest.mark.unit
    def test_non_staple_category(self):
        """Only staple categories have bulk rules."""
        assert not qualifies_for_bulk(Decimal("50"), "piece", "Beverages")
        assert not qualifies_for_bulk(Decimal("50"), "piece", "Other")

    @pytest.mark.unit
    def test_unit_without_threshold(self):
        """Unconvertible units never qualify."""
        assert not qualifies_for_bulk(Decimal("100"), "clove", "Produce")

    @pytest.mark.unit
    def test_savings_rate(self):
        """Pantry bulk saves 20%."""
        assert bulk_savings(Decimal("2500"), "gram", "Pantry", Decimal("10.00")) == Decimal("2.00")

    @pytest.mark.unit
    def test_savings_round_down(self):
        """Savings are rounded down to the cent."""
        assert bulk_savings(Decimal("2500"), "gram", "Pantry", Decimal("0.99")) == Decimal("0.19")

    @pytest.mark.unit
    def test_no_savings_below_threshold(self):
        """Should be zero when the item doesn't qualify."""
        assert bulk_savings(Decimal("10"), "gram", "Pantry", Decimal("0.50")) == Decimal("0")

    @pytest.mark.unit
    def test_savings_never_exceed_price(self):
        """Savings stay within [0, price]."""
        for price in [Decimal("0"), Decimal("0.01"), Decimal("5.55"), Decimal("120.00")]:
            savings = bulk_savings(Decimal("5000"), "gram", "Protein", price)
            assert Decimal("0") <= savings <= price


class TestSubstitutions:
    """Tests for the substitution table."""

    @pytest.mark.unit
    def test_exact_match(self):
        """Should find the exact ingredient."""
        assert substitutions_for("Butter") == ["margarine", "coconut oil", "olive oil"]

    @pytest.mark.unit
    def test_exact_beats_keyword(self):
        """Peanut butter has its own alternatives."""
        assert substitutions_for("Peanut butter") == ["almond butter", "sunflower seed butter"]

    @pytest.mark.unit
    def test_keyword_match(self):
        """Should fall back to a keyword in the name."""
        assert substitutions_for("Boneless chicken thighs") == ["turkey", "tofu", "tempeh"]

    @pytest.mark.unit
    def test_unknown_is_empty(self):
        """No entry means an empty list, not None."""
        assert substitutions_for("Dragon fruit") == []


class TestHintsAndNutrition:
    """Tests for shopping hints and nutrition highlights."""

    @pytest.mark.unit
    def test_hints(self):
        """Should collect every matching hint."""
        assert shopping_hints("Chicken breast") == ["Look for organic, free-range"]
        assert shopping_hints("Dragon fruit") == []

    @pytest.mark.unit
    def test_nutrition(self):
        """Should describe known ingredients, nothing otherwise."""
        assert "protein" in nutrition_highlight("Salmon").lower()
        assert nutrition_highlight("Dragon fruit") == ""


class TestAdvise:
    """Tests for the combined advice."""

    @pytest.mark.unit
    def test_bulk_expensive_item(self):
        """2 kg of chicken is bulk, pricey, and has alternatives."""
        advice = advise("Chicken", Decimal("2000"), "gram", "Protein", Decimal("24.00"))
        assert advice.is_bulk_purchase
        assert advice.bulk_savings == Decimal("3.60")
        assert advice.substitutions == ["turkey", "tofu", "tempeh"]
        assert advice.notes == [
            "Look for organic, free-range",
            BULK_NOTE,
            "Consider: turkey, tofu",
        ]
        assert advice.nutritional_info

    @pytest.mark.unit
    def test_unknown_item(self):
        """Unknown items get empty advice, never an error."""
        advice = advise("Dragon fruit", Decimal("1"), "piece", "Other", Decimal("3.99"))
        assert not advice.is_bulk_purchase
        assert advice.bulk_savings == Decimal("0")
        assert advice.substitutions == []
        assert advice.notes == []
        assert advice.nutritional_info == ""


class TestPotentialSavings:
    """Tests for list-level savings."""

    @pytest.mark.unit
    def test_sum(self):
        """Should add up item savings."""
        items = [
            ShoppingItem(name="Rice", estimated_price=Decimal("10"), bulk_savings=Decimal("2.00")),
            ShoppingItem(name="Beans", estimated_price=Decimal("5"), bulk_savings=Decimal("0.75")),
            ShoppingItem(name="Milk", estimated_price=Decimal("1")),
        ]
        assert potential_savings(items) == Decimal("2.75")

    @pytest.mark.unit
    def test_empty(self):
        """No items, no savings."""
        assert potential_savings([]) == Decimal("0")
