"""
Rate limiter configuration module.

Kept apart from main.py so routers can import `limiter` for per-route
@limiter.limit() decorators without circular imports.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from villa.core.config import settings

# - key_func: client IP
# - default_limits: applied to every route by SlowAPIMiddleware
# - enabled: killswitch via RATE_LIMIT_ENABLED env var
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)
