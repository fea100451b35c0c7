"""FastAPI dependency providers.

Every gateway and service gets its configuration from the ``Settings``
object returned by :func:`get_settings`; tests swap any provider through
``app.dependency_overrides``.
"""

from typing import Annotated

from anganwadi.config.config import Settings, settings
from anganwadi.core.auth_helper import AdminAuth
from anganwadi.db.session import AsyncSessionLocal
from anganwadi.services.dashboard import DashboardService
from anganwadi.services.image_host import CloudinaryImageHost
from anganwadi.services.program_service import ProgramService
from anganwadi.services.program_store import ProgramStore
from fastapi import Depends, Header


def get_settings() -> Settings:
    """Return the application settings; overridden in tests."""
    return settings


def get_admin_auth(
    app_settings: Annotated[Settings, Depends(get_settings)],
) -> AdminAuth:
    """Build the admin credential checker from the configured email and secret."""
    return AdminAuth(
        admin_email=app_settings.ADMIN_EMAIL, admin_secret=app_settings.ADMIN_PASS
    )


async def require_admin(
    admin_auth: Annotated[AdminAuth, Depends(get_admin_auth)],
    adminkey: Annotated[str | None, Header()] = None,
) -> None:
    """Reject the request with 403 unless the ``adminkey`` header is valid."""
    admin_auth.verify_admin_key(adminkey)


def get_program_store() -> ProgramStore:
    """Return a `ProgramStore` bound to the application session factory.

    Usage:
        program_store: ProgramStore = Depends(get_program_store)
    """
    return ProgramStore(AsyncSessionLocal)


def get_image_host(
    app_settings: Annotated[Settings, Depends(get_settings)],
) -> CloudinaryImageHost:
    """Build the Cloudinary gateway from the configured credentials."""
    return CloudinaryImageHost(
        cloud_name=app_settings.CLOUD_NAME,
        api_key=app_settings.API_KEY,
        api_secret=app_settings.API_SECRET,
    )


def get_program_service(
    program_store: Annotated[ProgramStore, Depends(get_program_store)],
    image_host: Annotated[CloudinaryImageHost, Depends(get_image_host)],
    app_settings: Annotated[Settings, Depends(get_settings)],
) -> ProgramService:
    """Assemble the `ProgramService` used by the program routes.

    Images are uploaded into the folder named by ``IMAGE_FOLDER``.
    """
    return ProgramService(
        program_store=program_store,
        image_host=image_host,
        image_folder=app_settings.IMAGE_FOLDER,
    )


def get_dashboard_service(
    program_store: Annotated[ProgramStore, Depends(get_program_store)],
) -> DashboardService:
    """Assemble the `DashboardService`; it reads the current date from the UTC clock."""
    return DashboardService(program_store=program_store)
