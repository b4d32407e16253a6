"""Redis cache for read-heavy listings"""
import json
import redis
from typing import Any, Optional
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class CacheService:
    """
    Advisory JSON cache in Redis. Entries expire after the TTL and are
    invalidated by prefix on writes. Every operation is best-effort: when Redis
    is disabled or unreachable reads miss and writes are skipped.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: Optional[int] = None,
        enabled: Optional[bool] = None,
    ):
        """
        Initialize the cache service.

        Args:
            redis_url: Redis URL (defaults to settings.cache_redis_url)
            ttl_seconds: Default TTL for entries (defaults to settings.CACHE_TTL_SECONDS)
            enabled: Override settings.CACHE_ENABLED
        """
        self.ttl_seconds = ttl_seconds or settings.CACHE_TTL_SECONDS
        self.redis_url = redis_url or settings.cache_redis_url
        self.redis_client = None

        if enabled is None:
            enabled = settings.CACHE_ENABLED
        if not enabled:
            logger.info("Cache disabled by configuration")
            return

        try:
            conn_params = {
                "decode_responses": True,
                "socket_connect_timeout": settings.REDIS_SOCKET_TIMEOUT,
                "socket_timeout": settings.REDIS_SOCKET_TIMEOUT,
                "retry_on_timeout": True,
                "health_check_interval": 30,
            }

            # Add SSL parameters for rediss:// URLs
            if self.redis_url.startswith("rediss://"):
                conn_params["ssl_cert_reqs"] = "none"

            client = redis.from_url(self.redis_url, **conn_params)
            client.ping()
            self.redis_client = client
            logger.info(f"Connected to Redis cache at {self.redis_url}")
        except redis.RedisError as e:
            logger.error(f"Failed to connect to Redis cache: {e}")

    @property
    def available(self) -> bool:
        return self.redis_client is not None

    @staticmethod
    def build_key(prefix: str, **params: Any) -> str:
        """
        Build a deterministic key from a prefix and query parameters.

        Example: build_key("categories", parent_id=None) -> "categories:parent_id=None"
        """
        parts = [f"{name}={params[name]}" for name in sorted(params)]
        return ":".join([prefix, *parts]) if parts else prefix

    def get_json(self, key: str) -> Optional[Any]:
        """
        Retrieve a cached value.

        Returns:
            Cached data if found, None otherwise
        """
        if not self.redis_client:
            return None

        try:
            raw = self.redis_client.get(key)
        except redis.RedisError as e:
            logger.warning(f"Failed to read cache key {key}: {e}")
            return None

        if raw is None:
            logger.debug(f"Cache miss for key: {key}")
            return None
        logger.debug(f"Cache hit for key: {key}")
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding undecodable cache entry {key}")
            return None

    def set_json(self, key: str, data: Any, ttl_seconds: Optional[int] = None) -> bool:
        """
        Cache a JSON-serialisable value.

        Returns:
            True if cached successfully, False otherwise
        """
        if not self.redis_client:
            return False

        try:
            payload = json.dumps(data, separators=(",", ":"), default=str)
            self.redis_client.setex(key, ttl_seconds or self.ttl_seconds, payload)
            return True
        except (redis.RedisError, TypeError, ValueError) as e:
            logger.warning(f"Failed to cache key {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete one cache key"""
        if not self.redis_client:
            return False

        try:
            return bool(self.redis_client.delete(key))
        except redis.RedisError as e:
            logger.warning(f"Failed to delete cache key {key}: {e}")
            return False

    def invalidate_prefix(self, prefix: str) -> int:
        """
        Delete every key starting with the prefix.

        Returns:
            Number of keys removed
        """
        if not self.redis_client:
            return 0

        try:
            keys = list(self.redis_client.scan_iter(match=f"{prefix}*"))
            if not keys:
                return 0
            removed = self.redis_client.delete(*keys)
            logger.info(f"Invalidated {removed} cache keys under '{prefix}'")
            return removed
        except redis.RedisError as e:
            logger.warning(f"Failed to invalidate cache prefix {prefix}: {e}")
            return 0

    def close(self):
        """Close Redis connection"""
        if self.redis_client:
            self.redis_client.close()
            logger.info("Closed Redis cache connection")


# Singleton instance
_cache_service: Optional[CacheService] = None


def get_cache_service() -> CacheService:
    """Get or create the cache service singleton"""
    global _cache_service
    if _cache_service is None:
        _cache_service = CacheService()
    return _cache_service
