"""
FastAPI application entry point.
"""
from typing import Callable, Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from api.routes import webhook
from config.settings import Settings, get_settings
from services.google_sheets import GoogleSheetsService
from utils.logger import logger, setup_logger


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, X-Vapi-Signature, X-Vapi-Secret",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting call-center jobs webhook...")
    logger.info(f"Writing to Google Sheet {app.state.settings.google_sheet_id}")
    yield
    logger.info("Application shut down")


def create_app(
    settings: Optional[Settings] = None,
    sheets_factory: Optional[Callable[[Settings], GoogleSheetsService]] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration injected at startup; loaded from the environment if None
        sheets_factory: Builds a spreadsheet service per request; defaults to GoogleSheetsService
    """
    settings = settings or get_settings()
    setup_logger(settings)

    app = FastAPI(
        title="Call-Center Jobs Webhook",
        description="Records voice-agent call events as rows in Google Sheets",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.sheets_factory = sheets_factory or GoogleSheetsService

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    app.include_router(webhook.router, tags=["Webhook"])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Call-Center Jobs Webhook",
            "status": "running",
            "version": "1.0.0"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.environment
        }

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "details": str(exc) if not settings.is_production else "An error occurred"
            }
        )

    return app


if __name__ == "__main__":
    import uvicorn

    config = get_settings()
    uvicorn.run(create_app(config), host=config.api_host, port=config.api_port)
