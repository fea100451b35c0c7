"""Pydantic schemas for the admin login endpoint."""

from pydantic import BaseModel


class AdminLogin(BaseModel):
    """Request body for ``POST /admin-login``.

    Both fields are optional here so that a missing value is reported with
    the login's own message instead of a generic 422.
    """

    email: str | None = None
    password: str | None = None


class AdminLoginResponse(BaseModel):
    """Successful login; ``adminKey`` goes into the ``adminkey`` header."""

    success: bool = True
    adminKey: str
