"""Unit tests for preference and product text synthesis."""

import pytest

from tastematch.core.synthesis import (
    build_preference_record,
    currency_symbol,
    synthesize_preference_text,
    synthesize_product_text,
    synthesize_text,
)
from tastematch.domain.entities import (
    CategoryInsight,
    EnhancedSignals,
    InteractionType,
    PreferenceRecord,
    PriceRange,
    ProductDescriptor,
    ProductInteraction,
)
from tastematch.utils.exceptions import InvalidInputError, MissingFieldError


class TestCurrencySymbol:
    """Test currency code mapping."""

    @pytest.mark.parametrize(
        "code, symbol",
        [("INR", "₹"), ("usd", "$"), ("EUR", "€"), ("GBP", "£"), ("JPY", "¥")],
    )
    def test_known_codes(self, code, symbol):
        """Test ISO codes map to symbols case-insensitively."""
        assert currency_symbol(code) == symbol

    def test_unknown_value_passes_through(self):
        """Test a literal symbol or unknown code is kept."""
        assert currency_symbol("₹") == "₹"
        assert currency_symbol("CHF") == "CHF"


class TestPreferenceText:
    """Test preference record descriptions."""

    def test_simple_template(self, simple_record):
        """Test records without enhanced signals use the short template."""
        assert synthesize_preference_text(simple_record) == (
            "User prefers categories: Dresses, Tops. Price range: ₹500-3000. Brands: Zara."
        )

    def test_simple_template_with_empty_lists(self):
        """Test empty selections still produce the full template."""
        record = PreferenceRecord(price_range=PriceRange(min=0, max=100, currency="USD"))

        assert synthesize_preference_text(record) == (
            "User prefers categories: . Price range: $0-100. Brands: ."
        )

    def test_fractional_prices_kept(self):
        """Test non-integral declared prices are not truncated."""
        record = PreferenceRecord(price_range=PriceRange(min=499.5, max=1000.0, currency="INR"))

        assert "Price range: ₹499.5-1000." in synthesize_preference_text(record)

    def test_enhanced_template(self, liked_interactions, disliked_interactions, sample_price_range):
        """Test every clause of the enhanced template in order."""
        record = build_preference_record(
            ["Dresses"], liked_interactions, disliked_interactions, price_range=sample_price_range
        )

        assert synthesize_preference_text(record) == (
            "User shopping preferences: "
            "Avg liked price ₹1000. "
            "Price range ₹500-3000. "
            "medium price consciousness. "
            "67% discount sensitivity. "
            "Preferred brands: Zara. "
            "Top categories: Dresses, Tops, Jeans. "
            "75% like rate. "
            "Liked: Red Dress by Zara, Blue Top by Zara, Black Jeans by Levis."
        )

    def test_enhanced_template_omits_empty_clauses(self, disliked_interactions, sample_price_range):
        """Test brand, category and liked clauses disappear when empty."""
        record = build_preference_record([], [], disliked_interactions, price_range=sample_price_range)

        assert synthesize_preference_text(record) == (
            "User shopping preferences: "
            "Avg liked price ₹0. "
            "Price range ₹500-3000. "
            "low price consciousness. "
            "0% discount sensitivity. "
            "0% like rate."
        )

    def test_only_first_three_liked_products(self, liked_interactions, sample_price_range):
        """Test at most three liked products are described."""
        extra = liked_interactions + [
            ProductInteraction(
                slug="white-shirt", name="White Shirt", brand="Uniqlo", category="Shirts",
                price=700, interaction_type=InteractionType.LIKE,
            )
        ]
        record = build_preference_record([], extra, [], price_range=sample_price_range)

        text = synthesize_preference_text(record)

        assert "White Shirt" not in text
        assert text.endswith("Liked: Red Dress by Zara, Blue Top by Zara, Black Jeans by Levis.")

    def test_top_categories_ranked_by_affinity(self, sample_price_range):
        """Test categories above 0.5 affinity are ranked highest first, at most three."""
        affinities = {"A": 0.6, "B": 0.5, "C": 0.9, "D": 0.7, "E": 0.8}
        record = PreferenceRecord(
            price_range=sample_price_range,
            enhanced=EnhancedSignals(
                category_insights=tuple(
                    CategoryInsight(category_name=name, affinity_score=score)
                    for name, score in affinities.items()
                ),
            ),
        )

        assert "Top categories: C, E, D. " in synthesize_preference_text(record)

    def test_no_category_at_exactly_half_affinity(self, sample_price_range):
        record = PreferenceRecord(
            price_range=sample_price_range,
            enhanced=EnhancedSignals(category_insights=(CategoryInsight(category_name="B", affinity_score=0.5),)),
        )

        assert "Top categories" not in synthesize_preference_text(record)

    def test_deterministic(self, liked_interactions, disliked_interactions, sample_price_range):
        """Test identical records produce identical text."""
        first = build_preference_record(["Dresses"], liked_interactions, disliked_interactions, sample_price_range)
        second = build_preference_record(["Dresses"], liked_interactions, disliked_interactions, sample_price_range)

        assert synthesize_preference_text(first) == synthesize_preference_text(second)


class TestProductText:
    """Test product descriptions."""

    def test_full_product(self, red_dress):
        """Test all product fields are described."""
        assert synthesize_product_text(red_dress) == (
            "Product: Red Dress by Zara. Category: Dresses in Women. Price: ₹1299. "
            "Discount: 20%. Description: Flowy midi dress. Available sizes: S, M."
        )

    def test_defaults_for_missing_fields(self):
        """Test optional fields fall back to neutral defaults."""
        product = ProductDescriptor(slug="plain-tee", name="Plain Tee")

        assert synthesize_product_text(product) == (
            "Product: Plain Tee by Generic. Category: Others in . Price: ₹0. "
            "Discount: 0%. Description: . Available sizes: ."
        )

    def test_missing_name_rejected(self):
        """Test a product without a name cannot be built."""
        with pytest.raises(MissingFieldError):
            ProductDescriptor(slug="nameless", name="  ")

    def test_none_product_rejected(self):
        """Test a missing product is rejected."""
        with pytest.raises(MissingFieldError):
            synthesize_product_text(None)


class TestSynthesizeText:
    """Test dispatch on the subject type."""

    def test_dispatches_preferences(self, simple_record):
        assert synthesize_text(simple_record) == synthesize_preference_text(simple_record)

    def test_dispatches_products(self, red_dress):
        assert synthesize_text(red_dress) == synthesize_product_text(red_dress)

    def test_rejects_other_types(self):
        """Test unsupported subjects raise an input error."""
        with pytest.raises(InvalidInputError):
            synthesize_text({"name": "Red Dress"})
