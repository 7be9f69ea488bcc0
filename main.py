"""
Main FastAPI application module.
Handles application lifecycle, error mapping and router setup.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from lifemate.api.router import api_router
from lifemate.core.config import get_settings
from lifemate.core.logger import logger
from lifemate.db.session import init_db
from lifemate.utils.exceptions import (
    DatabaseException,
    DeliveryException,
    DuplicateProfileException,
    ValidationException,
)

# Load environment variables
load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events.
    """
    logger.info("Starting application initialization...")
    try:
        init_db()
        logger.info("Database tables ready")
    except Exception as e:
        logger.error(f"Critical error during application startup: {str(e)}")
        raise

    yield

    logger.info("Application shutdown completed successfully")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Job seeker profiles and transactional email for healthcare recruiting",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_middleware(app, settings.FRONTEND_URL)
    _configure_exception_handlers(app)

    # Include API routers
    app.include_router(api_router)

    return app


def _configure_middleware(app: FastAPI, frontend_url: str) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
        max_age=600,
    )


def _configure_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationException)
    async def validation_exception_handler(request: Request, exc: ValidationException):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder({"detail": str(exc), "error": exc.to_dict()}),
        )

    @app.exception_handler(DuplicateProfileException)
    async def duplicate_exception_handler(
        request: Request, exc: DuplicateProfileException
    ):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc), "user_id": exc.user_id},
        )

    @app.exception_handler(DeliveryException)
    async def delivery_exception_handler(request: Request, exc: DeliveryException):
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": str(exc), "kind": exc.kind},
        )

    @app.exception_handler(DatabaseException)
    async def database_exception_handler(request: Request, exc: DatabaseException):
        logger.error(f"Database error on {request.url.path}: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Database error"},
        )


# Create application instance
app = create_application()


if __name__ == "__main__":
    """
    Development server entry point.
    For production deployment, use a proper ASGI server like uvicorn or gunicorn.
    """
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
