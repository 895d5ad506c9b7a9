import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from applykit.config import settings
from applykit.models.common import ErrorResponse
from applykit.api import (
    cv_routes,
    job_routes,
    application_routes,
    llm_routes,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="AI-powered CV analysis, job matching and application writing",
)

# ── CORS ────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Error Bodies ────────────────────────────────────────────────────────────
# Every error is rendered as {"error": "..."}; malformed bodies count as 400.


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=str(exc.detail)).model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.info(f"Rejected request to {request.url.path}: {location} {message}")
    detail = f"Invalid request: {location}: {message}" if location else f"Invalid request: {message}"
    return JSONResponse(status_code=400, content=ErrorResponse(error=detail).model_dump())


# ── Routers ─────────────────────────────────────────────────────────────────

app.include_router(cv_routes.router, prefix=settings.api_prefix, tags=["CV"])
app.include_router(job_routes.router, prefix=settings.api_prefix, tags=["Jobs"])
app.include_router(application_routes.router, prefix=settings.api_prefix, tags=["Applications"])
app.include_router(llm_routes.router, prefix=f"{settings.api_prefix}/llm", tags=["LLM"])

# ── Health Check ────────────────────────────────────────────────────────────


@app.get(f"{settings.api_prefix}/health")
async def health_check():
    return {"status": "healthy", "app": settings.app_name, "version": "0.1.0"}
