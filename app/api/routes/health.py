"""Health check endpoints for monitoring service status"""
from fastapi import APIRouter, status
from app.services.cache_service import get_cache_service
from app.db.base import get_db_session
from sqlalchemy import text
import redis
from app.core.config import settings
from datetime import datetime, timezone

health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health/detailed",
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
    description="Check all service dependencies including database and Redis"
)
async def detailed_health_check():
    """Detailed health check including all dependencies"""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "marketplace-api",
        "dependencies": {}
    }

    # Check database
    try:
        db = next(get_db_session())
        db.execute(text("SELECT 1"))
        db.close()
        health_status["dependencies"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful"
        }
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["dependencies"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {str(e)}"
        }

    # Check Redis (Celery broker)
    try:
        conn_params = {"socket_connect_timeout": settings.REDIS_SOCKET_TIMEOUT}
        if settings.CELERY_BROKER_URL.startswith("rediss://"):
            conn_params["ssl_cert_reqs"] = "none"

        broker_client = redis.from_url(settings.celery_broker_url, **conn_params)
        broker_client.ping()
        health_status["dependencies"]["celery_broker"] = {
            "status": "healthy",
            "message": "Celery broker (Redis) connection successful"
        }
    except redis.RedisError as e:
        # Notifications are queued best-effort; a missing broker only degrades
        health_status["dependencies"]["celery_broker"] = {
            "status": "degraded",
            "message": f"Celery broker connection failed: {str(e)}"
        }

    # Check Redis cache
    cache_service = get_cache_service()
    if not cache_service.available:
        health_status["dependencies"]["cache"] = {
            "status": "disabled",
            "message": "Cache disabled or Redis unreachable"
        }
    else:
        test_key = "health:check"
        cache_service.set_json(test_key, {"timestamp": health_status["timestamp"]}, ttl_seconds=10)
        retrieved = cache_service.get_json(test_key)
        cache_service.delete(test_key)
        health_status["dependencies"]["cache"] = {
            "status": "healthy" if retrieved else "degraded",
            "redis_url": cache_service.redis_url,
            "write_read_test": "passed" if retrieved else "failed"
        }

    return health_status
