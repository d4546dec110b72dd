"""Error handling utilities.

This module provides the exception hierarchy for the book search hub. The
fusion pipeline itself never raises; these errors describe query validation
failures, which reject a request before the pipeline runs, and provider
failures, which are absorbed as "no records from that source".
"""

import http
from typing import Any, TypeVar

# Type variable for self-referential return types
T = TypeVar("T", bound="SearchError")


class SearchError(Exception):
    """Base class for all search-related exceptions in the application."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int = http.HTTPStatus.INTERNAL_SERVER_ERROR,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize the error with context information.

        Args:
            message: Human-readable error message
            provider: Name of the provider that raised the error, if applicable
            status_code: HTTP status code to use when converting to HTTP responses
            original_error: The original exception that caused this error, if any
            details: Additional structured details about the error
        """
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.original_error = original_error
        self.details = details or {}
        super().__init__(message)

    @classmethod
    def from_exception(
        cls: type[T], exc: Exception, message: str | None = None, **kwargs
    ) -> T:
        """Create an error instance from another exception.

        Args:
            exc: The exception to wrap
            message: Custom message to use (defaults to str(exc))
            **kwargs: Additional arguments to pass to the constructor

        Returns:
            A new instance of the error class
        """
        return cls(message=message or str(exc), original_error=exc, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary representation."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }

        if self.provider:
            result["provider"] = self.provider

        if self.details:
            result["details"] = self.details

        return result


# Provider-related errors


class ProviderError(SearchError):
    """Base class for errors related to book providers."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int = http.HTTPStatus.BAD_GATEWAY,
        **kwargs,
    ):
        super().__init__(message, provider, status_code, **kwargs)


class ProviderTimeoutError(ProviderError):
    """Error raised when a provider call exceeds its time box."""

    def __init__(
        self,
        provider: str,
        timeout: float | None = None,
        message: str | None = None,
        status_code: int = http.HTTPStatus.GATEWAY_TIMEOUT,
        **kwargs,
    ):
        """Initialize a provider timeout error.

        Args:
            provider: Name of the provider that timed out
            timeout: The timeout value in seconds
            message: Error message (defaults to a standard message)
            status_code: HTTP status code (defaults to 504 Gateway Timeout)
            **kwargs: Additional arguments passed to ProviderError
        """
        details = kwargs.pop("details", {})
        if timeout:
            details["timeout_seconds"] = timeout

        if message is None:
            message = f"Search timed out for provider '{provider}'"
            if timeout:
                message += f" after {timeout} seconds"

        super().__init__(message, provider, status_code, details=details, **kwargs)


class ProviderServiceError(ProviderError):
    """Error raised when a provider call fails for any other reason."""

    def __init__(
        self,
        provider: str,
        message: str | None = None,
        status_code: int = http.HTTPStatus.BAD_GATEWAY,
        **kwargs,
    ):
        message = message or f"Service error occurred for provider '{provider}'"
        super().__init__(message, provider, status_code, **kwargs)


# Query-related errors


class QueryError(SearchError):
    """Base class for errors related to search queries."""

    def __init__(
        self,
        message: str,
        query: str | None = None,
        status_code: int = http.HTTPStatus.BAD_REQUEST,
        **kwargs,
    ):
        details = kwargs.pop("details", {})

        if query:
            details["query"] = query

        super().__init__(message, status_code=status_code, details=details, **kwargs)


class QueryValidationError(QueryError):
    """Error raised when the query parameters fail validation."""

    def __init__(
        self,
        message: str,
        query: str | None = None,
        validation_errors: list[str] | None = None,
        **kwargs,
    ):
        """Initialize a query validation error.

        Args:
            message: Error message
            query: The invalid query string
            validation_errors: List of specific validation errors
            **kwargs: Additional arguments passed to QueryError
        """
        details = kwargs.pop("details", {})

        if validation_errors:
            details["validation_errors"] = validation_errors

        super().__init__(message, query, details=details, **kwargs)


def http_error_response(exc: Exception) -> dict[str, Any]:
    """Convert an exception into a serializable HTTP error payload.

    Args:
        exc: The exception to convert

    Returns:
        Dictionary with ``status_code`` plus the error body
    """
    if isinstance(exc, SearchError):
        body = exc.to_dict()
        body["status_code"] = int(exc.status_code)
        return body

    return {
        "error_type": "InternalServerError",
        "message": "Failed to search books. Please try again.",
        "status_code": int(http.HTTPStatus.INTERNAL_SERVER_ERROR),
    }
