"""Redis caching utilities for report aggregates.

Summaries are recomputed from every row of a tenant, so they are cached
per tenant and dropped whenever one of the tenant's records changes.
Redis being down only costs the cache: calls fall back to computing the
value directly.

Display-ID generation never goes through this cache; it must always read
the store.
"""

import functools
import hashlib
import json
import logging
from datetime import date, datetime
from typing import Callable, Optional

import redis.asyncio as redis

from zmeurel.config import settings
from zmeurel.tenancy import _tenant_ctx

logger = logging.getLogger(__name__)

# Global Redis connection pool
_redis_client: Optional[redis.Redis] = None


async def get_redis() -> redis.Redis:
    """Get or create Redis client connection."""
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
            max_connections=50,
        )
    return _redis_client


async def close_redis():
    """Close Redis connection (call on app shutdown)."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def cache_key(*args, **kwargs) -> str:
    """Generate a deterministic hash from function arguments."""
    if not args and not kwargs:
        return "default"

    key_data = json.dumps({"args": args, "kwargs": kwargs}, sort_keys=True)
    return hashlib.md5(key_data.encode()).hexdigest()


def build_key(prefix: str, func_name: str, kwargs: dict) -> str:
    """Full Redis key for a call, namespaced by the current tenant.

    Keys: t:{tenant}:{prefix}:{function_name}:{args_hash}
    or    {prefix}:{function_name}:{args_hash} outside tenant context.
    """
    # Only simple values identify a call; injected stores/sessions are skipped
    cache_kwargs = {}
    for k, v in kwargs.items():
        if k.startswith("_"):
            continue
        if isinstance(v, (int, str, bool, float, type(None))):
            cache_kwargs[k] = v
        elif isinstance(v, (date, datetime)):
            cache_kwargs[k] = v.isoformat()

    key_hash = cache_key(**cache_kwargs)
    tenant = _tenant_ctx.get()
    if tenant:
        return f"t:{tenant}:{prefix}:{func_name}:{key_hash}"
    return f"{prefix}:{func_name}:{key_hash}"


def cached(ttl: int | None = None, prefix: str = "cache"):
    """Decorator to cache an async function's JSON-serialisable result in Redis.

    Args:
        ttl: Time-to-live in seconds (default: settings.cache_ttl_seconds)
        prefix: Cache key prefix for namespacing

    Call the wrapped function with keyword arguments; positional arguments
    are treated as injected dependencies and do not take part in the key.

    Example:
        @cached(prefix="reports")
        async def farm_summary(store, *, tenant_id: str):
            ...
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            if not settings.cache_enabled:
                return await func(*args, **kwargs)

            key = build_key(prefix, func.__name__, kwargs)

            try:
                redis_client = await get_redis()
                cached_value = await redis_client.get(key)
                if cached_value:
                    logger.debug(f"Cache HIT: {key}")
                    return json.loads(cached_value)
            except redis.RedisError as e:
                logger.warning(f"Redis error (falling back to uncached): {e}")
                return await func(*args, **kwargs)

            logger.debug(f"Cache MISS: {key}")
            result = await func(*args, **kwargs)

            if hasattr(result, "model_dump"):
                serialized = result.model_dump(mode="json")
            else:
                serialized = result

            try:
                await redis_client.setex(
                    key,
                    ttl if ttl is not None else settings.cache_ttl_seconds,
                    json.dumps(serialized, default=str),
                )
            except redis.RedisError as e:
                logger.warning(f"Redis error while storing {key}: {e}")

            return result

        return wrapper

    return decorator


async def invalidate_cache(pattern: str, tenant_id: str | None = None):
    """Invalidate cache keys matching a pattern, scoped to one tenant.

    The tenant defaults to the current request's tenant context.  If there
    is none, the pattern is used as-is.

    Example:
        await invalidate_cache("reports:*")  # Clears current tenant's report caches
    """
    if not settings.cache_enabled:
        return

    tenant = tenant_id or _tenant_ctx.get()
    scoped_pattern = f"t:{tenant}:{pattern}" if tenant else pattern

    try:
        redis_client = await get_redis()
        keys = []
        async for key in redis_client.scan_iter(match=scoped_pattern):
            keys.append(key)

        if keys:
            await redis_client.delete(*keys)
            logger.info(f"Invalidated {len(keys)} cache keys matching {scoped_pattern}")
    except redis.RedisError as e:
        logger.warning(f"Failed to invalidate cache: {e}")
