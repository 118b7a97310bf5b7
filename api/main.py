"""Main FastAPI application."""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from api import exercise_router
from config.settings import settings
from models.database import (
    close_mongo_connection,
    connect_to_mongo,
    init_indexes,
    resolve_database,
)
from utils.logger import setup_logger

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    logger.info("Starting application...")
    client = connect_to_mongo(settings)
    app.state.database = resolve_database(client, settings)
    await init_indexes(app.state.database)
    logger.info("Application started successfully")
    
    yield
    
    # Shutdown
    logger.info("Shutting down application...")
    close_mongo_connection(client)
    logger.info("Application shut down")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Exercise tracking API",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def first_validation_message(errors) -> str:
    """Message of the first validation failure, prefixed by its field."""
    if not errors:
        return "Invalid request"
    error = errors[0]
    field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query"))
    return f"{field}: {error['msg']}" if field else error["msg"]


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Invalid query parameters."""
    return PlainTextResponse(first_validation_message(exc.errors()), status_code=400)


@app.exception_handler(ValidationError)
async def payload_validation_handler(request: Request, exc: ValidationError):
    """Invalid request body."""
    return PlainTextResponse(first_validation_message(exc.errors()), status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unmatched routes get the not-found body; other HTTP errors are plain text."""
    if exc.status_code in (404, 405):
        return JSONResponse({"status": 404, "message": "not found"})
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything that escaped a route."""
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return PlainTextResponse("Internal Server Error", status_code=500)


# Include API routes
app.include_router(exercise_router.router)

if settings.public_dir.is_dir():
    app.mount("/public", StaticFiles(directory=settings.public_dir), name="public")


@app.get("/")
async def root():
    """Landing page."""
    return FileResponse(settings.views_dir / "index.html")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.app_name
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
