"""Query models."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    ValidationInfo,
    model_validator,
)

from ..config.settings import SearchSettings
from ..utils.errors import QueryValidationError


class SearchSource(str, Enum):
    """Which providers a combined search fans out to."""

    ALL = "all"
    GOOGLE = "google"
    OPEN_LIBRARY = "openlib"


class BookSearchQuery(BaseModel):
    """A book search query submitted to the system.

    Length and page-size bounds come from ``SearchSettings``, passed as the
    ``settings`` entry of the validation context. Without a context the
    default settings apply.
    """

    q: str = Field(..., description="The search query text")
    limit: int | None = Field(
        None, description="Maximum number of results to return", ge=1
    )
    offset: int = Field(0, description="Number of results to skip", ge=0)
    language: str | None = Field(
        None,
        description="Optional ISO 639-1 language code",
        min_length=2,
        max_length=2,
    )
    source: SearchSource = Field(
        SearchSource.ALL, description="Provider selection: all, google or openlib"
    )

    @model_validator(mode="after")
    def apply_search_bounds(self, info: ValidationInfo) -> "BookSearchQuery":
        """Check the configured bounds and fill in the default page size."""
        settings = None
        if info.context:
            settings = info.context.get("settings")
        if settings is None:
            settings = SearchSettings()

        query_length = len(self.q.strip())
        if query_length < settings.min_query_length:
            raise ValueError("Search query is required")
        if len(self.q) > settings.max_query_length:
            raise ValueError(
                f"Query must be at most {settings.max_query_length} characters"
            )

        if self.limit is None:
            self.limit = settings.default_limit
        elif self.limit > settings.max_limit:
            raise ValueError(f"limit must be at most {settings.max_limit}")

        return self

    @property
    def query_text(self) -> str:
        """Query text as sent to the providers."""
        return self.q.strip()

    def searches(self, source: SearchSource) -> bool:
        """Whether this query fans out to the given provider."""
        return self.source in (SearchSource.ALL, source)


def parse_search_params(
    params: Mapping[str, Any], settings: SearchSettings | None = None
) -> BookSearchQuery:
    """Validate raw query parameters into a ``BookSearchQuery``.

    Args:
        params: Raw parameters, e.g. an HTTP query string mapping
        settings: Search bounds (defaults to ``SearchSettings()``)

    Returns:
        The validated query with defaults applied

    Raises:
        QueryValidationError: If any parameter is out of bounds
    """
    settings = settings or SearchSettings()
    # Unset optional parameters may arrive as None from a query-string parser
    cleaned = {key: value for key, value in params.items() if value is not None}

    try:
        return BookSearchQuery.model_validate(
            cleaned, context={"settings": settings}
        )
    except ValidationError as e:
        messages = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            message = error["msg"].removeprefix("Value error, ")
            messages.append(f"{location}: {message}" if location else message)

        raise QueryValidationError(
            "Invalid query parameters",
            query=cleaned.get("q") if isinstance(cleaned.get("q"), str) else None,
            validation_errors=messages,
            original_error=e,
        ) from e
