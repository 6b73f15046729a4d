import logging
import json
import time
import random
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.core.config import settings

logger = logging.getLogger(__name__)

# Wide JSON events; handler and propagation are configured in logging.ini
structured_logger = logging.getLogger("api.structured_log")


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request as a one-line "METHOD -> path" debug message, plus a
    wide JSON event chosen by tail sampling.

    Rules:
    1. Always log errors (Status >= 500)
    2. Always log slow requests (> LOG_SLOW_THRESHOLD_MS)
    3. Otherwise log a random LOG_SAMPLE_RATE fraction of requests
    """

    SLOW_THRESHOLD_MS = settings.LOG_SLOW_THRESHOLD_MS
    SAMPLE_RATE = settings.LOG_SAMPLE_RATE

    async def dispatch(self, request: Request, call_next):
        logger.debug(f"{request.method} -> {request.url.path}")
        start_time = time.perf_counter()

        error_details = None
        status_code = 500  # Default to 500 if exception occurs

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            error_details = str(e)
            raise  # Re-raise exception after capturing it
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000

            if status_code >= 500:
                should_log = True
            elif duration_ms > self.SLOW_THRESHOLD_MS:
                should_log = True
            else:
                should_log = random.random() < self.SAMPLE_RATE

            if should_log:
                log_payload = {
                    "timestamp": time.time(),
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round(duration_ms, 2),
                    "client_ip": request.client.host if request.client else None,
                    "user_agent": request.headers.get("user-agent"),
                    "query_params": dict(request.query_params),
                    "error": error_details,
                }

                # Dump to JSON and log
                structured_logger.info(json.dumps(log_payload))

        return response
