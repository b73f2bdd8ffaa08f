"""
FastAPI application entry point.
"""

import logging
from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from kaptal.config import settings
from kaptal.api.router import api_router
from kaptal.exceptions import KaptalError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Personal finance API with monthly budgets and income distribution rules",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def field_errors(exc: RequestValidationError) -> Dict[str, List[str]]:
    """Group validation messages by field path, dropping the body/query prefix."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in ("body", "query", "path"):
            location = location[1:]
        errors.setdefault(".".join(location) or "__root__", []).append(error.get("msg", ""))
    return errors


@app.exception_handler(KaptalError)
async def kaptal_error_handler(request: Request, exc: KaptalError):
    content = {"success": False, "message": exc.message}
    if exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Dados inválidos", "errors": field_errors(exc)},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Erro na requisição"
    if exc.status_code == 404 and message == "Not Found":
        message = "Rota não encontrada"
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Erro interno do servidor"},
    )


# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/api/v1/health")
def health_check():
    """Health check endpoint."""
    return {
        "success": True,
        "status": "ok",
        "app_name": settings.app_name
    }
