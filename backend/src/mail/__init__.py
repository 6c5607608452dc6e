"""Mail desk HTTP endpoints (staff list and guest lookup)"""

from .router import router
from .public_router import router as public_router

__all__ = ["router", "public_router"]
