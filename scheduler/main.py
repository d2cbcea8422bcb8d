"""Main FastAPI application for the Task Scheduler."""
from contextlib import asynccontextmanager
from typing import Optional
import os

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from scheduler.config import Settings
from scheduler.db.config import create_db_engine
from scheduler.db.init import init_db
from scheduler.routers import auth_router, nextdate_router, tasks_router
from scheduler.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Install the database schema on startup and release connections on shutdown."""
    settings: Settings = app.state.settings
    logger.info(
        "Starting Task Scheduler",
        port=settings.port,
        db_file=settings.db_file,
        auth_enabled=settings.auth_enabled,
    )
    init_db(app.state.engine)
    yield
    app.state.engine.dispose()
    logger.info("Task Scheduler stopped")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {"error": ...}, the shape the web UI expects."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "; ".join(messages) or "Invalid request"},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Runtime settings; read from the environment when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Task Scheduler API",
        description="Tasks with dates and repeat rules",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_db_engine(settings.database_url)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": "1.0.0"}

    app.include_router(auth_router, prefix="/api")  # /api/signin
    app.include_router(nextdate_router, prefix="/api")  # /api/nextdate
    app.include_router(tasks_router, prefix="/api")  # /api/task, /api/tasks, /api/task/done

    # Static UI goes last so it never shadows the API routes
    if os.path.isdir(settings.web_dir):
        app.mount("/", StaticFiles(directory=settings.web_dir, html=True), name="web")
        logger.info("Serving static files", web_dir=settings.web_dir)
    else:
        logger.warning("Static directory not found", web_dir=settings.web_dir)

    return app


app = create_app()


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)


if __name__ == "__main__":
    run()
