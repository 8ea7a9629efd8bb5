"""
Custom exception hierarchy for ScentLocker.

Provides a structured exception hierarchy for different error scenarios:
- AppException: Base for all application errors
- ConfigError: Configuration-related errors
- DatasetError: Fragrance dataset loading errors
- ScoringError: Similarity computation errors
- EmbeddingProviderError: External image-embedding API errors
- LockerError: Personal collection persistence errors
- ValidationError: Input validation errors

Each exception includes:
- Descriptive message
- Optional error code for programmatic handling
- Optional context dictionary for debugging

Example:
    >>> from scentlocker.utils.exceptions import DatasetLoadError
    >>> raise DatasetLoadError("Dataset file missing", path="data/perfumes.json")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


# ============================================
# Base Exception
# ============================================


class AppException(Exception):
    """
    Base exception for all ScentLocker application errors.

    All custom exceptions inherit from this class, allowing:
    - Catch-all handling of application errors
    - Consistent error structure across the app
    - Error code and context support

    Attributes:
        message: Human-readable error description.
        code: Optional error code for programmatic handling.
        context: Optional dictionary with debugging context.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self._default_code()
        self.context = context or {}
        super().__init__(self.message)

    def _default_code(self) -> str:
        """Generate default error code from class name."""
        # CamelCase -> UPPER_SNAKE_CASE
        name = self.__class__.__name__
        code = ""
        for i, char in enumerate(name):
            if char.isupper() and i > 0:
                code += "_"
            code += char.upper()
        return code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "context": self.context,
        }


# ============================================
# Configuration Errors
# ============================================


class ConfigError(AppException):
    """
    Base exception for configuration-related errors.

    Raised when there are issues with:
    - Loading configuration files
    - Parsing YAML
    - Validating configuration values
    """

    pass


class ConfigFileNotFoundError(ConfigError):
    """Raised when a required configuration file is not found."""

    def __init__(
        self,
        message: str = "Configuration file not found",
        path: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if path:
            context["path"] = path
        super().__init__(message, code="CONFIG_FILE_NOT_FOUND", context=context, **kwargs)


class ConfigurationError(ConfigError):
    """
    Raised when configuration is invalid or cannot be parsed.

    Example:
        >>> raise ConfigurationError(
        ...     "match_threshold must be within [0, 1]",
        ...     context={"match_threshold": 1.4}
        ... )
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        **kwargs,
    ) -> None:
        super().__init__(message, code="CONFIG_INVALID", **kwargs)


# ============================================
# Dataset Errors
# ============================================


class DatasetError(AppException):
    """
    Base exception for fragrance dataset errors.

    Raised when there are issues with:
    - Reading the dataset file
    - Unexpected top-level JSON shape
    - Converting CSV exports
    """

    pass


class DatasetLoadError(DatasetError):
    """
    Raised when the dataset cannot be read from disk.

    Example:
        >>> raise DatasetLoadError(
        ...     "Dataset file not found",
        ...     path="data/perfumes.json"
        ... )
    """

    def __init__(
        self,
        message: str = "Failed to load dataset",
        path: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if path:
            context["path"] = path
        super().__init__(message, code="DATASET_LOAD", context=context, **kwargs)


class DatasetFormatError(DatasetError):
    """Raised when dataset content has an unsupported shape."""

    def __init__(
        self,
        message: str = "Unsupported dataset format",
        path: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if path:
            context["path"] = path
        super().__init__(message, code="DATASET_FORMAT", context=context, **kwargs)


# ============================================
# Scoring Errors
# ============================================


class ScoringError(AppException):
    """Base exception for similarity and ranking errors."""

    pass


class EmbeddingMismatchError(ScoringError, ValueError):
    """
    Raised when embedding dimensions don't match.

    Subclasses ValueError so numeric callers can catch it without
    depending on the application hierarchy.

    Example:
        >>> raise EmbeddingMismatchError(
        ...     "Embeddings must have the same length",
        ...     expected=512,
        ...     actual=768
        ... )
    """

    def __init__(
        self,
        message: str = "Embeddings must have the same length",
        expected: Optional[int] = None,
        actual: Optional[int] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if expected is not None:
            context["expected_dim"] = expected
        if actual is not None:
            context["actual_dim"] = actual
        super().__init__(message, code="EMBEDDING_MISMATCH", context=context, **kwargs)


# ============================================
# Embedding Provider Errors
# ============================================


class EmbeddingProviderError(AppException):
    """
    Raised when the external image-embedding API fails.

    Carries the HTTP status and the provider's own error message so the
    caller can surface them to the user.

    Example:
        >>> raise EmbeddingProviderError(
        ...     "Failed to get embedding",
        ...     status_code=500,
        ...     details="Internal error"
        ... )
    """

    def __init__(
        self,
        message: str = "Embedding provider request failed",
        status_code: Optional[int] = None,
        details: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        code = kwargs.pop("code", "EMBEDDING_PROVIDER")
        self.status_code = status_code
        self.details = details
        if status_code is not None:
            context["status_code"] = status_code
        if details:
            context["details"] = details
        super().__init__(message, code=code, context=context, **kwargs)


class ModelLoadingError(EmbeddingProviderError):
    """Raised when the provider is still warming up after the retry."""

    def __init__(
        self,
        message: str = "Embedding model is still loading",
        retry_after: Optional[float] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        self.retry_after = retry_after
        if retry_after is not None:
            context["retry_after_seconds"] = retry_after
        super().__init__(
            message, status_code=503, code="MODEL_LOADING", context=context, **kwargs
        )


class EmbeddingResponseError(EmbeddingProviderError):
    """Raised when the provider answers with an unexpected payload shape."""

    def __init__(
        self,
        message: str = "Unexpected response format",
        **kwargs,
    ) -> None:
        super().__init__(message, code="EMBEDDING_RESPONSE", **kwargs)


class ImageDownloadError(EmbeddingProviderError):
    """Raised when an image URL cannot be fetched before embedding."""

    def __init__(
        self,
        message: str = "Failed to download image",
        image_url: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if image_url:
            context["image_url"] = image_url
        super().__init__(message, code="IMAGE_DOWNLOAD", context=context, **kwargs)


# ============================================
# Locker Errors
# ============================================


class LockerError(AppException):
    """Base exception for personal collection errors."""

    pass


class LockerPersistenceError(LockerError):
    """Raised when the locker file cannot be written."""

    def __init__(
        self,
        message: str = "Failed to save locker",
        path: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if path:
            context["path"] = path
        super().__init__(message, code="LOCKER_PERSIST", context=context, **kwargs)


# ============================================
# Validation Errors
# ============================================


class ValidationError(AppException):
    """
    Base exception for input validation errors.

    Raised when user input or data fails validation.
    """

    pass


class InvalidInputError(ValidationError):
    """Raised when input data is invalid."""

    def __init__(
        self,
        message: str = "Invalid input",
        field: Optional[str] = None,
        value: Any = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        if value is not None:
            context["value"] = str(value)[:100]
        super().__init__(message, code="INVALID_INPUT", context=context, **kwargs)


class InvalidImageError(ValidationError):
    """Raised when a captured or uploaded image is invalid."""

    def __init__(
        self,
        message: str = "Invalid image file",
        path: Optional[str] = None,
        reason: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if path:
            context["path"] = path
        if reason:
            context["reason"] = reason
        super().__init__(message, code="INVALID_IMAGE", context=context, **kwargs)
