"""Application settings loaded from environment for the Anganwadi backend.

This module defines the :class:`Settings` model (based on Pydantic's
``BaseSettings``) and instantiates ``settings``, which ``main`` hands to the
gateways and services at startup. Business logic never reads the process
environment directly.

Notable fields include the database connection URL, the Cloudinary
credentials used for program images and the shared admin credentials.
"""

from pathlib import Path

from pydantic_settings import BaseSettings

BACKEND_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BACKEND_DIR / ".env"


class Settings(BaseSettings):
    """Environment-backed application settings.

    Attributes:
        DATABASE_URL_ASYNC: Async database URL for SQLAlchemy.
        DATABASE_ECHO: Whether SQLAlchemy should echo emitted SQL.

        CLOUD_NAME: Cloudinary cloud name.
        API_KEY: Cloudinary API key.
        API_SECRET: Cloudinary API secret.
        IMAGE_FOLDER: Cloudinary folder holding program images.

        ADMIN_EMAIL: Email accepted by the admin login.
        ADMIN_PASS: Shared admin secret, also used as the ``adminkey`` header.

        PUBLIC_DIRECTORY: Directory with the static frontend, served at ``/``.
        CORS_ORIGINS: Origins allowed by the CORS middleware.
        HOST: Interface uvicorn binds to.
        PORT: Port uvicorn listens on.
    """

    DATABASE_URL_ASYNC: str = "sqlite+aiosqlite:///./anganwadi.db"
    DATABASE_ECHO: bool = False

    CLOUD_NAME: str
    API_KEY: str
    API_SECRET: str
    IMAGE_FOLDER: str = "anganwadi-programs"

    ADMIN_EMAIL: str
    ADMIN_PASS: str

    PUBLIC_DIRECTORY: str = "public"
    CORS_ORIGINS: list[str] = ["*"]
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    class Config:
        env_file = str(ENV_FILE)
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
