"""Unit tests for domain entities."""

import pytest

from tastematch.core.synthesis import build_preference_record
from tastematch.domain.entities import (
    InteractionType,
    Outcome,
    PreferenceRecord,
    ProductDescriptor,
    ProductInteraction,
    StoredPreference,
)
from tastematch.utils.exceptions import CatalogError, InvalidInputError, MissingFieldError


class TestPreferenceRecord:
    """Test preference record behaviour."""

    def test_lists_become_tuples(self, simple_record):
        assert simple_record.selected_categories == ("Dresses", "Tops")
        assert simple_record.liked_products == ("red-dress",)

    def test_conflicting_products(self):
        """Test slugs present in both lists are reported."""
        record = PreferenceRecord(liked_products=["a", "b"], disliked_products=["b", "c"])

        assert record.conflicting_products() == ["b"]

    def test_from_client_payload(self):
        """Test the camelCase client payload is parsed."""
        record = PreferenceRecord.from_dict({
            "selectedCategories": ["Dresses"],
            "likedProducts": ["red-dress"],
            "dislikedProducts": [],
            "priceRange": {"min": 500, "max": 3000, "currency": "INR"},
            "selectedBrands": ["Zara"],
        })

        assert record.has_liked("red-dress")
        assert not record.has_disliked("red-dress")
        assert record.price_range.max == 3000
        assert record.enhanced is None

    def test_enhanced_data_survives_serialization(self, liked_interactions, disliked_interactions, sample_price_range):
        """Test enhanced signals are kept through the stored dictionary form."""
        record = build_preference_record(["Dresses"], liked_interactions, disliked_interactions, sample_price_range)

        restored = PreferenceRecord.from_dict(record.to_dict())

        assert restored == record
        assert restored.to_dict()["enhancedData"]["behaviorMetrics"]["priceConsciousness"] == "medium"

    def test_interaction_parses_iso_timestamp(self):
        interaction = ProductInteraction.from_dict({
            "slug": "red-dress",
            "name": "Red Dress",
            "brand": "Zara",
            "category": "Dresses",
            "price": {"effective": 999, "marked": 1299, "currency": "₹"},
            "discount": 23,
            "interactionType": "dislike",
            "interactionTime": "2024-05-01T10:00:00Z",
        })

        assert interaction.interaction_type == InteractionType.DISLIKE
        assert interaction.marked_price == 1299
        assert interaction.interaction_time.year == 2024


class TestProductDescriptor:
    """Test catalog payload mapping."""

    def test_detail_payload(self):
        """Test nested catalog fields are mapped."""
        product = ProductDescriptor.from_catalog_payload({
            "slug": "red-dress",
            "name": "Red Dress",
            "brand": {"name": "Zara"},
            "category_map": {"l3": {"name": "Dresses"}},
            "department": {"name": "Women"},
            "price": {"effective": {"min": 1299, "max": 1499, "currency_symbol": "$"}},
            "attributes": {"discount": 20, "sizes": ["S", "M"]},
            "short_description": "Flowy midi dress",
        })

        assert product.slug == "red-dress"
        assert product.brand == "Zara"
        assert product.category == "Dresses"
        assert product.department == "Women"
        assert product.price == 1299
        assert product.currency == "$"
        assert product.discount == 20
        assert product.description == "Flowy midi dress"
        assert product.sizes == ("S", "M")

    def test_fallback_fields(self):
        """Test secondary locations and defaults are used when primary ones are absent."""
        product = ProductDescriptor.from_catalog_payload(
            {
                "name": "Plain Tee",
                "categories": [{"name": "Tops"}],
                "attributes": {
                    "min_price_effective": 499,
                    "departments": ["Men", "Unisex"],
                    "short_description": "Cotton tee",
                },
                "sizes": [{"display": "L"}, {"value": "no-display"}],
            },
            slug="plain-tee",
        )

        assert product.slug == "plain-tee"
        assert product.brand == "Generic"
        assert product.category == "Tops"
        assert product.department == "Men, Unisex"
        assert product.price == 499
        assert product.currency == "₹"
        assert product.description == "Cotton tee"
        assert product.sizes == ("L",)

    def test_minimal_payload_defaults(self):
        product = ProductDescriptor.from_catalog_payload({"name": "Mystery"}, slug="mystery")

        assert product.category == "Others"
        assert product.price == 0
        assert product.to_dict()["department"] == "Others"

    def test_missing_name_rejected(self):
        with pytest.raises(MissingFieldError):
            ProductDescriptor.from_catalog_payload({"slug": "nameless"})

    def test_non_mapping_rejected(self):
        with pytest.raises(InvalidInputError):
            ProductDescriptor.from_catalog_payload(["not", "a", "product"])


class TestStoredPreference:
    """Test stored preference helpers."""

    def test_has_embedding(self, simple_record):
        assert StoredPreference(user_id="u", preferences=simple_record, embedding=[0.1]).has_embedding()
        assert not StoredPreference(user_id="u", preferences=simple_record).has_embedding()
        assert not StoredPreference(user_id="u", preferences=simple_record, embedding=[]).has_embedding()

    def test_to_dict(self, simple_record):
        data = StoredPreference(user_id="u", preferences=simple_record, embedding=[0.5]).to_dict()

        assert data["userId"] == "u"
        assert data["embedding"] == [0.5]
        assert data["preferences"]["selectedBrands"] == ["Zara"]


class TestOutcome:
    """Test the success / empty / failure result type."""

    def test_success(self):
        outcome = Outcome.success(42)

        assert outcome.is_success and not outcome.is_empty and not outcome.is_failure
        assert outcome.unwrap() == 42

    def test_empty(self):
        outcome = Outcome.empty("Product not found")

        assert outcome.is_empty
        with pytest.raises(LookupError, match="Product not found"):
            outcome.unwrap()

    def test_failure(self):
        error = CatalogError("Catalog unavailable", slug="red-dress")
        outcome = Outcome.failure(error)

        assert outcome.is_failure
        assert outcome.reason == "Catalog unavailable"
        with pytest.raises(CatalogError):
            outcome.unwrap()


class TestExceptions:
    """Test error codes and serialization."""

    def test_code_and_context(self):
        error = InvalidInputError("bad threshold", field="threshold", value=2)

        assert error.code == "INVALID_INPUT"
        assert str(error) == "[INVALID_INPUT] bad threshold"
        assert error.to_dict() == {
            "error_type": "InvalidInputError",
            "message": "bad threshold",
            "code": "INVALID_INPUT",
            "context": {"field": "threshold", "value": 2},
        }

    def test_missing_field_default_message(self):
        assert MissingFieldError(field="name").message == "Required field is missing: name"
