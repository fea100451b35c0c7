"""FastAPI application entrypoint for the Anganwadi backend.

Sets up the application, middleware and routes and provides a lifespan
context manager that initializes the database on startup and disposes the
engine on shutdown.
"""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from anganwadi.api.routes.auth import router as auth_router
from anganwadi.api.routes.dashboard import router as dashboard_router
from anganwadi.api.routes.programs import router as programs_router
from anganwadi.config.config import settings
from anganwadi.core.errors import AppError, app_error_handler
from anganwadi.core.logging import configure_logging, logger
from anganwadi.db.session import engine, initialize_database
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

configure_logging()

DB_INIT_ATTEMPTS = 5
DB_INIT_RETRY_DELAY = 2


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context to run startup and shutdown routines.

    On startup this creates the database tables, retrying a few times if
    the database isn't reachable yet.

    Yields:
        None: Control is returned to FastAPI while the app is running.
    """

    logger.info("Starting up")

    for attempt in range(DB_INIT_ATTEMPTS):
        try:
            await initialize_database()
            break
        except Exception as e:
            if attempt < DB_INIT_ATTEMPTS - 1:
                logger.warning(
                    "Database connection attempt {} failed: {}. Retrying..",
                    attempt + 1,
                    e,
                )
                await asyncio.sleep(DB_INIT_RETRY_DELAY)
            else:
                logger.exception(
                    "Failed to create database tables after {} attempts",
                    DB_INIT_ATTEMPTS,
                )
                raise

    yield

    logger.info("Shutting down")
    await engine.dispose()


app = FastAPI(title="Anganwadi Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness check used by the hosting platform."""

    return "Modern Anganwadi Backend Running"


app.include_router(auth_router)
app.include_router(programs_router)
app.include_router(dashboard_router)

# NOTE: mounted last so the API routes above take precedence
public_dir = Path(settings.PUBLIC_DIRECTORY)
if public_dir.is_dir():
    app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")
else:
    logger.info("No public directory at {}, static frontend disabled", public_dir)


def run() -> None:
    uvicorn.run("anganwadi.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
