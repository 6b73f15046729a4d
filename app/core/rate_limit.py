# rate_limit.py
# Shared slowapi limiter. Routers decorate endpoints with it and main.py
# registers it on the app state.

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

# Uses client IP address for rate limit key
# Disabled during testing (when DATABASE_URL contains 'test')
_is_testing = "test" in settings.DATABASE_URL.lower()
limiter = Limiter(key_func=get_remote_address, enabled=not _is_testing)
