"""Route modules."""

from .internal import router as internal_router
from .me import router as me_router
from .users import router as users_router

__all__ = ["internal_router", "me_router", "users_router"]
