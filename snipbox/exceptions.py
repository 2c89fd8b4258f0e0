"""Custom exception hierarchy for snipbox.

Exception Hierarchy:
    SnipboxError (base)
    ├── StoreError - persistent key/value store
    │   ├── StoreReadError
    │   └── StoreWriteError
    ├── MalformedDataError - stored value is not a usable collection
    ├── SourceUnavailableError (retryable) - external snippet list
    ├── ClipboardError
    ├── ValidationError - rejected user input
    └── ConfigurationError - settings/environment

None of these are fatal to the panel. Read-side errors fall back to defaults,
write-side and source errors are reported to the user and the prior state is
kept.

Usage:
    from snipbox.exceptions import SourceUnavailableError

    try:
        data = await source.fetch()
    except SourceUnavailableError as e:
        notify(f"Failed to load snippets: {e.message}")
"""

from typing import Any, Optional


class SnipboxError(Exception):
    """Base exception for all snipbox errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., IDs, paths)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Store Errors
# =============================================================================


class StoreError(SnipboxError):
    """Base exception for persistent store operations."""

    pass


class StoreReadError(StoreError):
    """The store could not be read."""

    def __init__(
        self,
        message: str = "Failed to read store",
        *,
        key: Optional[str] = None,
        **context: Any,
    ) -> None:
        if key:
            context = {"key": key, **context}
        super().__init__(message, **context)


class StoreWriteError(StoreError):
    """The store rejected a write."""

    def __init__(
        self,
        message: str = "Failed to write store",
        *,
        key: Optional[str] = None,
        **context: Any,
    ) -> None:
        if key:
            context = {"key": key, **context}
        super().__init__(message, **context)


class MalformedDataError(SnipboxError):
    """A stored value could not be decoded into the expected shape."""

    def __init__(
        self,
        message: str = "Stored data is malformed",
        *,
        key: Optional[str] = None,
        **context: Any,
    ) -> None:
        if key:
            context = {"key": key, **context}
        super().__init__(message, **context)


# =============================================================================
# Source Errors
# =============================================================================


class SourceUnavailableError(SnipboxError):
    """The external snippet list could not be fetched or decoded.

    Retryable: the user may trigger another refresh.
    """

    def __init__(
        self,
        message: str = "Snippet source unavailable",
        *,
        source: Optional[str] = None,
        status: Optional[int] = None,
        **context: Any,
    ) -> None:
        if source:
            context["source"] = source
        if status is not None:
            context["status"] = status
        super().__init__(message, retryable=True, **context)


# =============================================================================
# Clipboard / Validation / Configuration Errors
# =============================================================================


class ClipboardError(SnipboxError):
    """No clipboard mechanism accepted the text."""

    def __init__(self, message: str = "Clipboard write failed", **context: Any) -> None:
        super().__init__(message, **context)


class ValidationError(SnipboxError):
    """User input was rejected."""

    def __init__(
        self,
        message: str = "Invalid input",
        *,
        field: Optional[str] = None,
        **context: Any,
    ) -> None:
        if field:
            context["field"] = field
        super().__init__(message, **context)


class ConfigurationError(SnipboxError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
