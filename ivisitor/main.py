# ivisitor/main.py
"""
FastAPI application entry point.
Includes CORS, optional API key middleware, global error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from ivisitor.routers import visitors, approvals, gate, health
from ivisitor.database import create_tables
from ivisitor.config import settings
from ivisitor.utils.logger import get_logger
import time

logger = get_logger(__name__)

# Reachable without an API key: visitors submitting requests, residents
# clicking emailed links, health probes, and the docs.
OPEN_PATHS = {"/api/visitor-request", "/api/health", "/docs", "/redoc", "/openapi.json"}
OPEN_PREFIXES = ("/api/approve/", "/api/reject/")

app = FastAPI(
    title="iVisitor API",
    description="Visitor requests, resident approval, and gate verification.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth for resident and guard endpoints.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if (request.method == "OPTIONS" or path in OPEN_PATHS
                or path.startswith(OPEN_PREFIXES) or not settings.API_KEY):
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


app.add_middleware(APIKeyMiddleware)

# CORS is added last so it wraps the key check and preflights get their headers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(visitors.router,  prefix="/api", tags=["Visitors"])
app.include_router(approvals.router, prefix="/api", tags=["Approval Links"])
app.include_router(gate.router,      prefix="/api", tags=["Gate"])
app.include_router(health.router,    prefix="/api", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("iVisitor backend starting up...")
    create_tables()
    logger.info("Database tables ready")
    if not settings.mail_configured:
        logger.warning("EMAIL_USER/EMAIL_PASS not set — notification emails will be skipped")
    logger.info(f"Allowed origins: {settings.cors_origins}")
    logger.info(f"Listening on http://{settings.BACKEND_HOST}:{settings.BACKEND_PORT}")


@app.on_event("shutdown")
async def shutdown():
    logger.info("iVisitor backend shutting down...")
