# Standard library
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

# Third party
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from yaml import dump

# Local imports
from app.core.logging import get_logger
from app.api.errors import register_exception_handlers
import app.api as api


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application startup and shutdown events"""
    logger.info("Marketplace API starting up...")

    # Test database connection
    try:
        from app.db.base import get_db_session

        session_gen = get_db_session()
        session = next(session_gen)
        session.execute(text("SELECT 1")).fetchone()
        session.close()
        logger.info("Database connection successful")
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        raise

    yield

    from app.services.cache_service import get_cache_service

    get_cache_service().close()
    logger.info("Marketplace API shutting down...")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title="Service Marketplace",
        description="Backend for a services marketplace: category tree, service catalog and reviews.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        default_response_class=JSONResponse,
    )

    for name, router in api.api_routers:
        app.include_router(router, prefix="/api/v1", tags=[name])

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()
        logger.info(f"[{request_id}] {request.method} {request.url.path} {dict(request.query_params)}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"[{request_id}] Request failed after {process_time:.4f}s: {str(e)}",
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        response.headers["X-Request-ID"] = request_id
        logger.info(f"[{request_id}] {response.status_code} in {process_time:.4f}s")
        return response

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint for load balancers and monitoring"""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/openapi.yaml", include_in_schema=False)
    async def get_openapi_yaml():
        """Serve full OpenAPI specification in YAML format"""
        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        yaml_content = dump(openapi_schema, default_flow_style=False, sort_keys=False)
        return Response(content=yaml_content, media_type="application/x-yaml")

    register_exception_handlers(app)

    return app


# Create the app instance
app = create_app()
