# Marketplace routers, mounted under /api/v1
from .routes import api_routers

__all__ = ["api_routers"]
