"""Provider-facing models.

Fetching from Google Books and Open Library is owned by the caller. A fetcher
is any async callable returning a ``ProviderPage`` whose items are
provider-metadata mappings (see ``result_processing.normalizers``).
"""

from typing import Any, Protocol

from pydantic import BaseModel, Field


class ProviderPage(BaseModel):
    """One page of records returned by a provider."""

    items: list[dict[str, Any]] = Field(
        default_factory=list, description="Provider metadata records"
    )
    total_items: int = Field(0, ge=0, description="Provider's total match estimate")


class BookFetcher(Protocol):
    """Fetches one page of book records from a provider."""

    async def __call__(
        self,
        query: str,
        *,
        limit: int,
        offset: int,
        language: str | None = None,
    ) -> ProviderPage: ...
