"""Redis-backed cache for combined search results."""

import hashlib
import json
from typing import Any

import redis.asyncio as redis

from ..models.query import BookSearchQuery
from ..models.results import CombinedSearchResult
from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_PREFIX = "search:"


def normalize_query_text(query: str) -> str:
    """Lowercase, trim and collapse whitespace so equivalent queries match."""
    return " ".join(query.lower().split())


def build_combined_search_cache_key(
    query: BookSearchQuery, prefix: str = DEFAULT_PREFIX
) -> str:
    """Generate the cache key for a combined search.

    Every effective parameter is a named member of a JSON object before
    hashing, so no two distinct parameter tuples can collide, while queries
    differing only in case or whitespace share a key.

    Args:
        query: Validated search query (defaults already applied)
        prefix: Key prefix for the cache store

    Returns:
        ``<prefix>combined:<sha256 hex digest>``
    """
    segments = {
        "q": normalize_query_text(query.q),
        "limit": query.limit,
        "offset": query.offset,
        "language": query.language.lower() if query.language else None,
        "source": query.source.value,
    }
    segments_str = json.dumps(segments, sort_keys=True)

    hash_obj = hashlib.sha256(segments_str.encode())
    return f"{prefix}combined:{hash_obj.hexdigest()}"


class SearchCache:
    """Redis-based cache with async interface and graceful error handling.

    Cache errors are logged and never propagate: a failing cache behaves like
    an empty one.

    Attributes:
        redis_client: The async Redis client instance, or None when disabled
        prefix: Key prefix used by ``generate_key``
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        prefix: str = DEFAULT_PREFIX,
        enabled: bool = True,
        client: Any = None,
    ):
        """Initialize the cache.

        Args:
            redis_url: Redis connection URL
            prefix: Key prefix for Redis (default: "search:")
            enabled: Whether to connect at all
            client: Pre-built async Redis client, used instead of ``redis_url``
        """
        self.redis_url = redis_url
        self.prefix = prefix
        self.redis_client = client

        if self.redis_client is not None or not enabled:
            return

        try:
            self.redis_client = redis.from_url(redis_url, decode_responses=False)
            logger.info(f"SearchCache: Redis client initialized at {redis_url}")
        except Exception as e:
            logger.error(f"SearchCache: Failed to initialize Redis client: {e}")

    def generate_key(self, query: BookSearchQuery) -> str:
        """Generate the cache key for a validated query."""
        return build_combined_search_cache_key(query, prefix=self.prefix)

    async def get(self, key: str) -> CombinedSearchResult | None:
        """Get a cached combined result.

        Args:
            key: Cache key from ``generate_key``

        Returns:
            Cached result or None if not found, expired, or error
        """
        if not self.redis_client:
            return None

        try:
            data = await self.redis_client.get(key)

            if data:
                if isinstance(data, bytes):
                    data = data.decode("utf-8")
                result = CombinedSearchResult.model_validate(json.loads(data))
                logger.debug(f"SearchCache: Cache hit for key {key[:24]}...")
                return result

            logger.debug(f"SearchCache: Cache miss for key {key[:24]}...")
            return None

        except Exception as e:
            logger.warning(f"SearchCache: Error getting from cache: {e}")
            return None

    async def set(self, key: str, value: CombinedSearchResult, ttl: int) -> None:
        """Store a combined result with a TTL.

        Args:
            key: Cache key from ``generate_key``
            value: The combined result to cache
            ttl: Time-to-live in seconds
        """
        if not self.redis_client:
            return

        try:
            data = json.dumps(value.to_dict()).encode("utf-8")
            await self.redis_client.setex(key, ttl, data)
            logger.debug(f"SearchCache: Set key {key[:24]}... with TTL {ttl}s")

        except Exception as e:
            logger.warning(f"SearchCache: Error setting in cache: {e}")

    async def close(self) -> None:
        """Close Redis connection gracefully."""
        if self.redis_client:
            try:
                await self.redis_client.aclose()
                logger.info("SearchCache: Redis connection closed")
            except Exception as e:
                logger.warning(f"SearchCache: Error closing Redis connection: {e}")
