"""Result models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BookSource(str, Enum):
    """Provider a search result item was normalized from."""

    GOOGLE = "google"
    OPEN_LIBRARY = "openlib"


class SearchResultItem(BaseModel):
    """A single normalized book search result.

    Optional attributes are ``None`` when the source did not provide them and
    are omitted entirely from the serialized record (see ``to_dict``). They
    are never set to an empty string.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    id: str = Field(..., frozen=True, description="'<source>:<externalId>'")
    source: BookSource = Field(..., description="Source provider")
    title: str = Field(..., min_length=1, description="Book title")
    subtitle: str | None = Field(None, description="Book subtitle")
    authors: list[str] = Field(default_factory=list, description="Author names")
    description: str | None = Field(None, description="Book description")
    publish_year: int | None = Field(None, ge=0, description="Publication year")
    publisher: str | None = Field(None, description="Publisher")
    isbn10: str | None = Field(None, description="ISBN-10")
    isbn13: str | None = Field(None, description="ISBN-13")
    page_count: int | None = Field(None, ge=0, description="Number of pages")
    categories: list[str] = Field(
        default_factory=list, description="Book categories or subjects"
    )
    cover_image: str | None = Field(None, description="Cover image URL")
    language: str | None = Field(None, description="Language code")
    average_rating: float | None = Field(
        None, ge=0, le=5, description="Average rating (0-5)"
    )
    ratings_count: int | None = Field(None, ge=0, description="Number of ratings")
    has_full_text: bool | None = Field(
        None, description="Whether full text is available"
    )
    # Only ever materialized as True; a false source value reads as absent
    is_public_domain: bool | None = Field(
        None, description="Whether the book is in the public domain"
    )
    preview_link: str | None = Field(None, description="Preview link")

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, leaving absent fields out."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SourceAvailability(BaseModel):
    """Whether a provider answered and how many records it contributed."""

    available: bool = Field(..., description="Whether the provider responded")
    count: int = Field(0, ge=0, description="Records returned by the provider")


class SourceSummary(BaseModel):
    """Per-provider availability for a combined search."""

    google: SourceAvailability = Field(
        default_factory=lambda: SourceAvailability(available=False)
    )
    openlib: SourceAvailability = Field(
        default_factory=lambda: SourceAvailability(available=False)
    )


class CombinedSearchResult(BaseModel):
    """Combined, deduplicated and ranked response from both providers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_items: int = Field(
        ..., ge=0, description="Estimated total (max of the provider totals)"
    )
    items: list[SearchResultItem] = Field(..., description="Ranked results")
    offset: int = Field(..., ge=0, description="Current offset")
    limit: int = Field(..., ge=1, description="Items per page")
    has_more: bool = Field(..., description="Whether more results are available")
    query: str = Field(..., description="Search query")
    sources: SourceSummary = Field(
        default_factory=SourceSummary, description="Providers that were searched"
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, leaving absent item fields out."""
        return self.model_dump(by_alias=True, exclude_none=True)
