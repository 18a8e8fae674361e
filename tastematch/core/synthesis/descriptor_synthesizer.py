"""
Canonical text descriptions of preference records and catalog products.

The text produced here is what gets embedded, so it must be
deterministic: identical input always yields byte-identical text.

Example:
    >>> from tastematch.core.synthesis import synthesize_text
    >>> text = synthesize_text(record)
"""

from __future__ import annotations

import math
from typing import Iterable, Union

from tastematch.domain.entities.preference_record import EnhancedSignals, PreferenceRecord
from tastematch.domain.entities.product_descriptor import (
    DEFAULT_BRAND,
    DEFAULT_CATEGORY,
    ProductDescriptor,
)
from tastematch.utils.exceptions import InvalidInputError, MissingFieldError


CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}

TOP_CATEGORY_LIMIT = 3
TOP_CATEGORY_MIN_AFFINITY = 0.5
LIKED_PRODUCT_LIMIT = 3


def currency_symbol(currency: str) -> str:
    """Map an ISO currency code to its symbol; anything else is returned unchanged."""
    if not currency:
        return ""
    return CURRENCY_SYMBOLS.get(currency.upper(), currency)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _format_number(value: Union[int, float]) -> str:
    """Render 500.0 as "500" and 499.5 as "499.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _join(values: Iterable[str]) -> str:
    return ", ".join(str(v) for v in values)


def synthesize_preference_text(record: PreferenceRecord) -> str:
    """
    Describe a user's preferences as one paragraph of text.

    Records without EnhancedSignals use a short template of categories,
    price range and brands. Records with EnhancedSignals describe price
    behaviour, preferred brands, top categories, like rate and up to three
    liked products.

    Args:
        record: The preference record.

    Returns:
        Non-empty description.
    """
    if record is None:
        raise InvalidInputError("Preference record is required", field="preferences")

    price_range = record.price_range
    symbol = currency_symbol(price_range.currency)
    declared_range = f"{symbol}{_format_number(price_range.min)}-{_format_number(price_range.max)}"

    if record.enhanced is None:
        return (
            f"User prefers categories: {_join(record.selected_categories)}. "
            f"Price range: {declared_range}. "
            f"Brands: {_join(record.selected_brands)}."
        )

    return _synthesize_enhanced(record.enhanced, declared_range)


def _synthesize_enhanced(enhanced: EnhancedSignals, declared_range: str) -> str:
    price = enhanced.price_insights
    behavior = enhanced.behavior_metrics

    parts = [
        "User shopping preferences: ",
        f"Avg liked price {currency_symbol(price.currency)}{_round_half_up(price.average_liked_price)}. ",
        f"Price range {declared_range}. ",
        f"{behavior.price_consciousness.value} price consciousness. ",
        f"{_round_half_up(price.discount_sensitivity * 100)}% discount sensitivity. ",
    ]

    if enhanced.brand_insights.preferred_brands:
        parts.append(f"Preferred brands: {_join(enhanced.brand_insights.preferred_brands)}. ")

    # sorted() is stable, so equal affinities keep their recorded order
    top_categories = [
        insight.category_name
        for insight in sorted(
            (c for c in enhanced.category_insights if c.affinity_score > TOP_CATEGORY_MIN_AFFINITY),
            key=lambda c: c.affinity_score,
            reverse=True,
        )
    ][:TOP_CATEGORY_LIMIT]

    if top_categories:
        parts.append(f"Top categories: {_join(top_categories)}. ")

    parts.append(f"{_round_half_up(behavior.like_rate * 100)}% like rate. ")

    if enhanced.liked_products_data:
        liked = _join(
            f"{p.name} by {p.brand}" for p in enhanced.liked_products_data[:LIKED_PRODUCT_LIMIT]
        )
        parts.append(f"Liked: {liked}.")

    return "".join(parts).strip()


def synthesize_product_text(product: ProductDescriptor) -> str:
    """
    Describe a catalog product as a single sentence.

    Args:
        product: The product descriptor.

    Returns:
        Description covering name, brand, category, department, price,
        discount, description and available sizes.

    Raises:
        MissingFieldError: If the product or its name is missing.
    """
    if product is None or not getattr(product, "name", None):
        raise MissingFieldError(field="name")

    price = f"{currency_symbol(product.currency)}{_format_number(product.price or 0)}"

    return (
        f"Product: {product.name} by {product.brand or DEFAULT_BRAND}. "
        f"Category: {product.category or DEFAULT_CATEGORY} in {product.department or ''}. "
        f"Price: {price}. "
        f"Discount: {_format_number(product.discount or 0)}%. "
        f"Description: {product.description or ''}. "
        f"Available sizes: {_join(product.sizes or ())}."
    ).strip()


def synthesize_text(subject: Union[PreferenceRecord, ProductDescriptor]) -> str:
    """
    Produce the canonical text for a preference record or a product.

    Args:
        subject: A PreferenceRecord or a ProductDescriptor.

    Returns:
        Canonical description suitable for embedding.

    Raises:
        InvalidInputError: If the subject is of another type.
        MissingFieldError: If a product has no name.
    """
    if isinstance(subject, PreferenceRecord):
        return synthesize_preference_text(subject)
    if isinstance(subject, ProductDescriptor):
        return synthesize_product_text(subject)
    raise InvalidInputError(
        f"Cannot synthesize text for {type(subject).__name__}",
        field="subject",
    )
