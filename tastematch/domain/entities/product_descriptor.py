"""
ProductDescriptor entity: the strict projection of a catalog product.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from tastematch.utils.exceptions import InvalidInputError, MissingFieldError


DEFAULT_BRAND = "Generic"
DEFAULT_CATEGORY = "Others"
DEFAULT_CURRENCY = "₹"


def _dig(data: Any, *keys: Any) -> Any:
    """Follow nested dict keys / list indexes, returning None on any gap."""
    current = data
    for key in keys:
        if isinstance(current, dict):
            current = current.get(key)
        elif isinstance(current, (list, tuple)) and isinstance(key, int):
            current = current[key] if -len(current) <= key < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def _first(*values: Any) -> Any:
    """Return the first truthy value, or None."""
    for value in values:
        if value:
            return value
    return None


@dataclass(frozen=True)
class ProductDescriptor:
    """Read-only view of a catalog item used for text synthesis and matching."""

    slug: str
    name: str
    brand: str = DEFAULT_BRAND
    category: str = DEFAULT_CATEGORY
    department: str = ""
    price: float = 0
    discount: float = 0
    currency: str = DEFAULT_CURRENCY
    description: str = ""
    sizes: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate required fields after initialization."""
        if self.name is None or not str(self.name).strip():
            raise MissingFieldError(field="name", context={"slug": self.slug})
        if not isinstance(self.sizes, tuple):
            object.__setattr__(self, "sizes", tuple(self.sizes or ()))

    @classmethod
    def from_catalog_payload(cls, payload: Dict[str, Any], slug: Optional[str] = None) -> "ProductDescriptor":
        """
        Map a loosely typed catalog product payload into a ProductDescriptor.

        Optional fields fall back to neutral defaults; only the product
        name is required.

        Args:
            payload: Product JSON as returned by the catalog API.
            slug: Slug used for the lookup. Defaults to ``payload["slug"]``.

        Returns:
            The mapped descriptor.

        Raises:
            InvalidInputError: If the payload is not a mapping.
            MissingFieldError: If the product name is missing.
        """
        if not isinstance(payload, dict):
            raise InvalidInputError("Catalog payload must be a mapping", field="payload")

        attributes = payload.get("attributes") or {}

        # Listing payloads nest {"min", "max", "currency_symbol"} under price.effective
        effective = _dig(payload, "price", "effective")
        currency = _dig(payload, "price", "currency_symbol")
        if isinstance(effective, dict):
            currency = effective.get("currency_symbol") or currency
            effective = effective.get("min")
        price = _first(attributes.get("min_price_effective"), effective) or 0

        sizes = attributes.get("sizes")
        if not sizes:
            sizes = [s.get("display") for s in payload.get("sizes") or () if isinstance(s, dict) and s.get("display")]

        department = _first(_dig(payload, "department", "name"), attributes.get("departments")) or ""
        if isinstance(department, (list, tuple)):
            department = ", ".join(str(d) for d in department)

        return cls(
            slug=slug or payload.get("slug") or "",
            name=payload.get("name"),
            brand=_dig(payload, "brand", "name") or DEFAULT_BRAND,
            category=_first(
                _dig(payload, "category_map", "l3", "name"),
                _dig(payload, "categories", 0, "name"),
            ) or DEFAULT_CATEGORY,
            department=department,
            price=price,
            discount=attributes.get("discount") or 0,
            currency=currency or DEFAULT_CURRENCY,
            description=_first(payload.get("short_description"), attributes.get("short_description")) or "",
            sizes=tuple(str(s) for s in sizes or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Summary shape returned to API callers."""
        return {
            "slug": self.slug,
            "name": self.name,
            "brand": self.brand,
            "price": {
                "effective": self.price,
                "discount": self.discount,
                "currency": self.currency,
            },
            "category": self.category,
            "department": self.department or DEFAULT_CATEGORY,
            "description": self.description,
            "sizes": list(self.sizes),
        }
