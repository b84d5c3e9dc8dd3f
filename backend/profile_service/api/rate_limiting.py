"""Rate Limiting — per-client request budget via slowapi.

Invariants:
    - One Limiter per app, keyed by client address
    - The default limit applies to every route through SlowAPIMiddleware
    - Exceeding it yields the 429 RATE_LIMITED envelope (api/error_handlers.py)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from profile_service.config import Settings


def build_limiter(settings: Settings) -> Limiter:
    """Create the app's limiter from settings."""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        enabled=settings.rate_limit_enabled,
    )
