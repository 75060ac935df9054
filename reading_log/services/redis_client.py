"""
Redis Connection

Shared Redis client for book notifications.

Redis is optional: when it cannot be reached get_redis_client() returns
None and callers degrade gracefully (notifications are skipped, the API
keeps working).
"""

import logging

import redis
from redis.exceptions import RedisError

from reading_log.config import get_settings

logger = logging.getLogger(__name__)

_redis_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis | None:
    """
    Get or create a Redis client connection.

    Uses a module-level singleton to maintain a single connection pool.
    A failed connection attempt is not cached, so the next call retries.

    Returns:
        Redis client instance or None if connection fails
    """
    global _redis_client

    if _redis_client is not None:
        return _redis_client

    settings = get_settings()

    try:
        client = redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        client.ping()
        logger.info("Successfully connected to Redis")
        _redis_client = client
        return _redis_client
    except RedisError as e:
        logger.warning(f"Failed to connect to Redis: {e}. Notifications disabled.")
        return None


def close_redis_connection() -> None:
    """Close the Redis connection on shutdown."""
    global _redis_client
    if _redis_client is not None:
        _redis_client.close()
        _redis_client = None
        logger.info("Redis connection closed")
