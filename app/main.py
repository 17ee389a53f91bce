import datetime
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import admin, auth, contact, portfolio
from app.core.config import settings
from app.core.database import create_tables
from app.core.limiter import install_rate_limiting, limiter
from app.services.email_service import create_sender
from app.services.sender_cache import SenderHolder
from app.utils.logger import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}

app = FastAPI(
    title="Portfolio API",
    description="Contact form, portfolio data and message admin for a personal portfolio site",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)

app.state.sender_holder = SenderHolder(
    create_sender,
    ttl_seconds=settings.SENDER_TTL_SECONDS,
    timeout_seconds=settings.SENDER_TIMEOUT_SECONDS,
)
# Before CORS, so CORS stays the outer layer
install_rate_limiting(app, limiter)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={"error": "Route not found", "message": "The requested endpoint does not exist"},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Something went wrong!", "message": "Internal server error"},
    )


# Register routers
app.include_router(contact.router, prefix="/api")
app.include_router(portfolio.router, prefix="/api")
app.include_router(auth.router, prefix="/api")
app.include_router(admin.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info("🚀 Starting Portfolio API...")
    create_tables()
    logger.info(f"📧 Mail mode: {settings.MAIL_MODE}, environment: {settings.ENVIRONMENT}")


@app.get("/")
@limiter.exempt
async def root():
    return {
        "message": "Portfolio API",
        "version": "1.0.0",
    }


@app.get("/api/health")
async def health_check():
    return {
        "status": "OK",
        "message": "Portfolio server is running",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }
