"""
Exception hierarchy for TasteMatch.

Three families sit under AppException:

- ConfigError: the application configuration is missing or invalid
- ValidationError: the caller passed a malformed input (never retried)
- CollaboratorError: the embedding service, catalog or store failed

Every exception carries a message, a stable error code and a context dict
that ends up in the logs and in ``to_dict()``.
"""

import re
from typing import Any, Dict, Optional


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _with_context(context: Optional[Dict[str, Any]], **fields: Any) -> Dict[str, Any]:
    """Merge the non-empty ``fields`` into a copy of ``context``."""
    merged = dict(context or {})
    merged.update({
        key: value
        for key, value in fields.items()
        if value is not None and not (isinstance(value, str) and not value)
    })
    return merged


class AppException(Exception):
    """
    Root of all TasteMatch errors.

    Attributes:
        message: Human-readable description.
        code: Machine-readable code; derived from the class name when omitted
              (``CatalogError`` -> ``CATALOG_ERROR``).
        context: Extra debugging data such as the offending field or slug.

    Example:
        >>> try:
        ...     raise AppException("Engine not ready", code="ENGINE_NOT_READY")
        ... except AppException as e:
        ...     logger.error(e.to_dict())
    """

    default_message = "Application error"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.code = code or _CAMEL_BOUNDARY.sub("_", type(self).__name__).upper()
        self.context = dict(context or {})
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r}, context={self.context!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form for structured logs and API error bodies."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "context": self.context,
        }


# ============================================
# Configuration
# ============================================

class ConfigError(AppException):
    """The configuration could not be loaded or is unusable."""

    default_message = "Invalid configuration"


class ConfigFileNotFoundError(ConfigError):
    """
    No configuration file at the expected location.

    Example:
        >>> raise ConfigFileNotFoundError(path="config/config.yaml")
    """

    default_message = "Configuration file not found"

    def __init__(self, message: Optional[str] = None, path: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="CONFIG_FILE_NOT_FOUND", context=_with_context(context, path=path))


class ConfigValidationError(ConfigError):
    """
    A configuration value failed validation.

    ``field`` is the dotted path of the value, e.g. ``matching.threshold``.
    """

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None, value: Any = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message,
            code="CONFIG_VALIDATION",
            context=_with_context(context, field=field, value=value),
        )


# ============================================
# Input validation
# ============================================

class ValidationError(AppException):
    """
    The caller supplied a malformed input.

    Raised before any collaborator is called and surfaced verbatim; retrying
    the same input cannot succeed.
    """

    default_message = "Invalid input"


class InvalidInputError(ValidationError):
    """
    An input value is present but malformed.

    Example:
        >>> raise InvalidInputError(
        ...     "A product cannot be both liked and disliked",
        ...     field="likedProducts",
        ...     value=["red-dress"],
        ... )
    """

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None, value: Any = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="INVALID_INPUT", context=_with_context(context, field=field, value=value))


class MissingFieldError(ValidationError):
    """A required field is absent or blank."""

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        if message is None:
            message = f"Required field is missing: {field}" if field else "Required field is missing"
        super().__init__(message, code="MISSING_FIELD", context=_with_context(context, field=field))


class VectorDimensionError(ValidationError):
    """
    Two embedding vectors of different lengths were compared.

    Only vectors from the same embedding model are comparable, so this
    signals an integration error; vectors are never truncated or padded.
    """

    default_message = "Vectors must have the same length"

    def __init__(self, message: Optional[str] = None, expected: Optional[int] = None,
                 actual: Optional[int] = None, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message,
            code="VECTOR_DIMENSION",
            context=_with_context(context, expected=expected, actual=actual),
        )


# ============================================
# Collaborators
# ============================================

class CollaboratorError(AppException):
    """
    An external collaborator failed.

    Wraps transport and service errors of the embedding service, the
    catalog and the preference store. Nothing in the engine retries; the
    caller owns the retry policy.
    """

    default_message = "Collaborator call failed"


class EmbeddingGenerationError(CollaboratorError):
    """The embedding service call failed or returned no vector."""

    default_message = "Failed to generate embedding"

    def __init__(self, message: Optional[str] = None, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="EMBEDDING_GENERATION", context=context)


class CatalogError(CollaboratorError):
    """The catalog was unreachable or answered with an error."""

    default_message = "Catalog request failed"

    def __init__(self, message: Optional[str] = None, slug: Optional[str] = None,
                 status_code: Optional[int] = None, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message,
            code="CATALOG_ERROR",
            context=_with_context(context, slug=slug, status_code=status_code),
        )


class PreferenceStoreError(CollaboratorError):
    """A read or write against the preference store failed."""

    default_message = "Preference store operation failed"

    def __init__(self, message: Optional[str] = None, user_id: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="STORE_ERROR", context=_with_context(context, user_id=user_id))
