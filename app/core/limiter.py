from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.core.config import settings

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def rate_limit_string(max_requests: int, window_ms: int) -> str:
    """e.g. 100 requests per 15 minutes -> "100/900 seconds"."""
    return f"{max_requests}/{max(1, window_ms // 1000)} seconds"


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(status_code=429, content={"error": RATE_LIMIT_MESSAGE})


def install_rate_limiting(app: FastAPI, app_limiter: Limiter):
    """Apply the limiter's default limits to every route. Add before CORSMiddleware so CORS wraps it."""
    app.state.limiter = app_limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)


# Redis keeps counters shared across workers; memory:// when REDIS_URL is unset
limiter = Limiter(
    key_func=client_ip,
    default_limits=[rate_limit_string(settings.RATE_LIMIT_MAX_REQUESTS, settings.RATE_LIMIT_WINDOW_MS)],
    storage_uri=settings.REDIS_URL or "memory://",
    in_memory_fallback_enabled=True,
)
