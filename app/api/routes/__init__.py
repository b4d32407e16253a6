from .health import health_router
from .users import users_router
from .categories import categories_router
from .services import services_router
from .service_reviews import service_reviews_router
from .reviews import reviews_router
from .notifications import notifications_router

api_routers = [
    ("health", health_router),
    ("users", users_router),
    ("categories", categories_router),
    ("service-reviews", service_reviews_router),
    ("services", services_router),
    ("reviews", reviews_router),
    ("notifications", notifications_router),
]

__all__ = ["api_routers"]
