"""Unit tests for enhanced signal derivation."""

import pytest

from tastematch.core.synthesis import build_preference_record, derive_enhanced_signals
from tastematch.core.synthesis.signal_deriver import classify_price_consciousness
from tastematch.domain.entities import InteractionType, PriceConsciousness, ProductInteraction
from tastematch.utils.exceptions import InvalidInputError


def _like(slug, brand, category, price, discount=0):
    return ProductInteraction(
        slug=slug, name=slug.title(), brand=brand, category=category,
        price=price, discount=discount, interaction_type=InteractionType.LIKE,
    )


class TestPriceInsights:
    """Test price analytics."""

    def test_from_liked_products(self, liked_interactions, disliked_interactions):
        """Test average, padded range and discount sensitivity."""
        signals = derive_enhanced_signals(liked_interactions, disliked_interactions)
        price = signals.price_insights

        assert price.average_liked_price == pytest.approx(1000)
        assert price.price_range_min == pytest.approx(400)
        assert price.price_range_max == pytest.approx(1950)
        assert price.currency == "₹"
        assert price.discount_sensitivity == pytest.approx(2 / 3)

    def test_defaults_without_likes(self, disliked_interactions):
        """Test neutral defaults when nothing was liked."""
        price = derive_enhanced_signals([], disliked_interactions).price_insights

        assert price.average_liked_price == 0
        assert price.price_range_min == 0
        assert price.price_range_max == 10000
        assert price.discount_sensitivity == 0


class TestBrandInsights:
    """Test brand analytics."""

    def test_preferred_brand_needs_two_likes(self, liked_interactions, disliked_interactions):
        """Test a single like is not enough to prefer a brand."""
        brands = derive_enhanced_signals(liked_interactions, disliked_interactions).brand_insights

        assert brands.preferred_brands == ("Zara",)
        assert brands.brand_affinity_scores == {"Zara": 1.0, "Levis": 1.0, "H&M": 0.0}

    def test_preferred_brand_needs_affinity(self):
        """Test two likes against two dislikes do not make a preferred brand."""
        liked = [_like("a", "Nike", "Shoes", 100), _like("b", "Nike", "Shoes", 100)]
        disliked = [
            ProductInteraction(
                slug=slug, name=slug, brand="Nike", category="Shoes", price=100,
                interaction_type=InteractionType.DISLIKE,
            )
            for slug in ("c", "d")
        ]

        brands = derive_enhanced_signals(liked, disliked).brand_insights

        assert brands.preferred_brands == ()
        assert brands.brand_affinity_scores["Nike"] == pytest.approx(0.5)


class TestCategoryAndBehavior:
    """Test category and behaviour analytics."""

    def test_category_insights_in_first_seen_order(self, liked_interactions, disliked_interactions):
        signals = derive_enhanced_signals(liked_interactions, disliked_interactions)

        assert [c.category_name for c in signals.category_insights] == ["Dresses", "Tops", "Jeans", "Skirts"]
        skirts = signals.category_insights[-1]
        assert (skirts.like_count, skirts.dislike_count, skirts.affinity_score) == (0, 1, 0.0)

    def test_behavior_metrics(self, liked_interactions, disliked_interactions):
        behavior = derive_enhanced_signals(liked_interactions, disliked_interactions).behavior_metrics

        assert behavior.total_swipes == 4
        assert behavior.like_rate == pytest.approx(0.75)
        assert behavior.skip_rate == pytest.approx(0.25)
        assert behavior.price_consciousness == PriceConsciousness.MEDIUM
        assert behavior.category_diversity == 3

    def test_no_swipes(self):
        """Test an empty history yields zero rates."""
        behavior = derive_enhanced_signals([], []).behavior_metrics

        assert behavior.total_swipes == 0
        assert behavior.like_rate == 0
        assert behavior.skip_rate == 1
        assert behavior.price_consciousness == PriceConsciousness.LOW

    @pytest.mark.parametrize(
        "average_discount, expected",
        [
            (0, PriceConsciousness.LOW),
            (5, PriceConsciousness.LOW),
            (5.5, PriceConsciousness.MEDIUM),
            (15, PriceConsciousness.MEDIUM),
            (15.1, PriceConsciousness.HIGH),
        ],
    )
    def test_price_consciousness_levels(self, average_discount, expected):
        assert classify_price_consciousness(average_discount) == expected


class TestBuildPreferenceRecord:
    """Test assembly of a full preference record."""

    def test_slugs_in_interaction_order(self, liked_interactions, disliked_interactions, sample_price_range):
        record = build_preference_record(
            ["Dresses"], liked_interactions, disliked_interactions,
            price_range=sample_price_range, selected_brands=["Zara"],
        )

        assert record.liked_products == ("red-dress", "blue-top", "black-jeans")
        assert record.disliked_products == ("green-skirt",)
        assert record.selected_brands == ("Zara",)
        assert record.enhanced is not None
        assert record.enhanced.liked_products_data == tuple(liked_interactions)

    def test_mismatched_interaction_type_rejected(self, liked_interactions, disliked_interactions):
        """Test a dislike submitted as a like is rejected."""
        with pytest.raises(InvalidInputError):
            build_preference_record([], disliked_interactions, liked_interactions)
