"""Shared fixtures for the backend tests.

Settings are read from the environment when ``anganwadi.config.config`` is
first imported, so the test values are put in place before anything from
the application is imported.
"""

import asyncio
import os

os.environ.update(
    {
        "DATABASE_URL_ASYNC": "sqlite+aiosqlite:///:memory:",
        "CLOUD_NAME": "test-cloud",
        "API_KEY": "test-api-key",
        "API_SECRET": "test-api-secret",
        "ADMIN_EMAIL": "admin@gmail.com",
        "ADMIN_PASS": "s3cret-admin-pass",
        "PUBLIC_DIRECTORY": "/nonexistent/public",
        "LOG_LEVEL": "WARNING",
    }
)

from datetime import date  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from anganwadi.api.dependencies import (  # noqa: E402
    get_dashboard_service,
    get_image_host,
    get_program_store,
)
from anganwadi.db.session import Base, build_sessionmaker  # noqa: E402
from anganwadi.main import app  # noqa: E402
from anganwadi.services.dashboard import DashboardService  # noqa: E402
from anganwadi.services.image_host import (  # noqa: E402
    CloudinaryImageHost,
    UploadedImage,
)
from anganwadi.services.program_store import ProgramStore  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

ADMIN_EMAIL = "admin@gmail.com"
ADMIN_KEY = "s3cret-admin-pass"
ADMIN_HEADERS = {"adminkey": ADMIN_KEY}

TODAY = date(2026, 10, 18)
IMAGE_URL = (
    "https://res.cloudinary.com/test-cloud/image/upload/"
    "v1761318414/anganwadi-programs/uqvbxrqrah4szjijsmlm.jpg"
)


@pytest.fixture
def program_store(tmp_path):
    """A `ProgramStore` on a fresh SQLite file with the tables created.

    NullPool keeps connections from outliving the event loop that opened
    them, since the TestClient runs its own loop.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'programs.db'}", poolclass=NullPool
    )

    async def create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_tables())
    yield ProgramStore(build_sessionmaker(engine))
    asyncio.run(engine.dispose())


@pytest.fixture
def image_host():
    """Image host mock whose uploads always land at ``IMAGE_URL``."""
    host = AsyncMock(spec=CloudinaryImageHost)
    host.upload.return_value = UploadedImage(
        url=IMAGE_URL, public_id="anganwadi-programs/uqvbxrqrah4szjijsmlm"
    )
    return host


@pytest.fixture
def client(program_store, image_host):
    """TestClient wired to the temporary store and the mocked image host."""
    app.dependency_overrides[get_program_store] = lambda: program_store
    app.dependency_overrides[get_image_host] = lambda: image_host
    app.dependency_overrides[get_dashboard_service] = lambda: DashboardService(
        program_store=program_store, today=lambda: TODAY
    )
    yield TestClient(app)
    app.dependency_overrides.clear()

