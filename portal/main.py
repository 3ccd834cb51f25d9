"""
Forfettario Backoffice - Backend API
FastAPI over the finance engine, records from a RecordStore

Usage (lokal):
  uvicorn portal.main:app --reload
  python -m portal.main
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from common.errors import InvalidArgument, RenderError
from .routers import dashboard, health, worked_hours

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Forfettario Backoffice API v{app.version} started")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Forfettario Backoffice API",
    description="Invoices, expenses, worked hours and flat-tax projections",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - allow frontend origins
origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    os.getenv("FRONTEND_URL", "http://localhost:3000"),
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": str(exc), "parameter": exc.parameter},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    parameter = first.get("loc", [None])[-1]
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": f"Invalid {parameter}", "parameter": parameter},
    )


@app.exception_handler(RenderError)
async def render_error_handler(request: Request, exc: RenderError):
    logger.error(f"Report rendering failed: {exc}")
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal server error"})


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(worked_hours.router, prefix="/api/worked-hours", tags=["Worked Hours"])


@app.get("/")
async def root():
    return {
        "name": "Forfettario Backoffice API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))
