# app/main.py
"""
FastAPI application entry point.
Includes CORS, security headers, request timing, error handlers and all routers.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from app.routers import alerts, catalog, health, realtime
from app.database import create_tables
from app.errors import register_error_handlers
from app.config import settings
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Alarm Dashboard API",
    description="Panic button and alert intake with live dashboard notifications.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ─────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


def build_csp(origins: list) -> str:
    """default-src 'self'; websocket connections allowed back to every permitted origin."""
    connect = ["'self'"]
    for origin in origins:
        if origin == "*":
            continue
        if origin.startswith("https://"):
            connect.append("wss://" + origin[len("https://"):])
        elif origin.startswith("http://"):
            connect.append("ws://" + origin[len("http://"):])
    return f"default-src 'self'; connect-src {' '.join(connect)}"


CONTENT_SECURITY_POLICY = build_csp(settings.allowed_origins)


# ── Security Headers + Request Timing ────────────────────────────────────────
@app.middleware("http")
async def security_headers(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    # Swagger UI needs CDN assets, leave the docs pages alone
    if not request.url.path.startswith(("/docs", "/redoc")):
        response.headers.setdefault("Content-Security-Policy", CONTENT_SECURITY_POLICY)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


register_error_handlers(app)

# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(alerts.router,   tags=["🚨 Alerts"])
app.include_router(catalog.router,  tags=["📚 Catalog"])
app.include_router(realtime.router, tags=["📡 Live"])
app.include_router(health.router,   tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 Alarm backend starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    logger.info(f"🌐 Allowed origins: {settings.allowed_origins}")
    if not settings.media_configured:
        logger.warning("📷 Cloudinary credentials missing — alerts with photos will be rejected")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_HOST}:{settings.BACKEND_PORT}")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 Alarm backend shutting down...")
