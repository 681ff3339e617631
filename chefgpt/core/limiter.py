"""
Rate limiter shared by the app and every router.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

# Keyed on client IP; each generation call costs a paid completion.
# Per-endpoint limits come from settings.RATE_LIMIT_*.
limiter = Limiter(key_func=get_remote_address)
