"""Admin login route.

Endpoints:
    - POST /admin-login: Check admin email + password, return the admin key
"""

from typing import Annotated

from anganwadi.api.dependencies import get_admin_auth
from anganwadi.core.auth_helper import AdminAuth
from anganwadi.core.logging import logger
from anganwadi.schemas.auth import AdminLogin, AdminLoginResponse
from fastapi import APIRouter, Depends, Request

router = APIRouter(tags=["auth"])


async def read_login_body(request: Request) -> AdminLogin:
    """Parse the login JSON body, treating anything unusable as empty.

    A missing body, a non-JSON body (e.g. an urlencoded form) or non-string
    fields all end up as missing credentials, so the login answers with its
    own 400 message instead of a validation error.
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.debug("Admin login without a JSON body")
        payload = {}

    if not isinstance(payload, dict):
        payload = {}

    return AdminLogin(
        email=payload.get("email") if isinstance(payload.get("email"), str) else None,
        password=(
            payload.get("password") if isinstance(payload.get("password"), str) else None
        ),
    )


@router.post("/admin-login", response_model=AdminLoginResponse)
async def admin_login(
    credentials: Annotated[AdminLogin, Depends(read_login_body)],
    admin_auth: Annotated[AdminAuth, Depends(get_admin_auth)],
):
    """Authenticate the admin and hand back the key for protected routes.

    Args:
        credentials: `email` and `password` from the JSON body.
        admin_auth: Admin credential checker built from settings.

    Returns:
        AdminLoginResponse: `{success: true, adminKey}` on success.

    Raises:
        LoginError: 400 for missing fields or a non-Gmail address, 401 for
            wrong credentials; rendered as `{success: false, message}`.
    """

    admin_key = admin_auth.login(credentials.email, credentials.password)
    return AdminLoginResponse(adminKey=admin_key)
