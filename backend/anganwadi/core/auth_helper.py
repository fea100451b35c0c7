"""
Admin authentication helper.

ADMIN FLOW:

1. LOGIN (/admin-login):
   - Admin provides email + password
   - Server checks, in order:
     * Are both fields present?          (400 otherwise)
     * Is the email a Gmail address?     (400 otherwise)
     * Do both match the configured admin credentials? (401 otherwise)
   - On success the admin secret itself is returned as `adminKey`

2. PROTECTED REQUESTS:
   - Client sends `adminKey` back in the `adminkey` header
   - Server compares it with the configured secret
   - If equal: request proceeds
   - Otherwise: 403 {"error": "Unauthorized"} before any handler logic runs

KNOWN WEAKNESS:
   - The key is a static shared secret with no expiry or hashing, and the
     login is not rate limited. A signed, expiring session token can replace
     it later without changing the header contract.
"""

import secrets

from anganwadi.core.errors import AuthError, LoginError
from anganwadi.core.logging import logger
from fastapi import status

ALLOWED_EMAIL_DOMAIN = "@gmail.com"


def matches(given: str, expected: str) -> bool:
    """Constant-time string equality."""
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


class AdminAuth:
    """Checks admin credentials against the configured email and secret.

    Attributes:
        admin_email: Email accepted by :meth:`login`.
        admin_secret: Shared secret expected in the ``adminkey`` header.
    """

    def __init__(self, admin_email: str, admin_secret: str) -> None:
        self.admin_email = admin_email
        self.admin_secret = admin_secret

    def verify_admin_key(self, admin_key: str | None) -> None:
        """Raise :class:`AuthError` unless ``admin_key`` equals the secret.

        Args:
            admin_key: Value of the ``adminkey`` request header, if any.

        Raises:
            AuthError: If the header is missing or does not match.
        """
        if not admin_key or not matches(admin_key, self.admin_secret):
            logger.warning("Rejected request with missing or invalid admin key")
            raise AuthError("Unauthorized")

    def login(self, email: str | None, password: str | None) -> str:
        """Validate login credentials and return the admin key.

        Args:
            email: Submitted email address.
            password: Submitted password.

        Returns:
            str: The admin secret, to be sent back as the ``adminkey`` header.

        Raises:
            LoginError: 400 for missing fields or a non-Gmail address,
                401 for wrong credentials.
        """
        if not email or not password:
            raise LoginError(
                "Email and Password required", status.HTTP_400_BAD_REQUEST
            )

        if not email.endswith(ALLOWED_EMAIL_DOMAIN):
            logger.warning("Admin login rejected for non-Gmail address {}", email)
            raise LoginError(
                "Only Gmail accounts allowed", status.HTTP_400_BAD_REQUEST
            )

        email_ok = matches(email, self.admin_email)
        password_ok = matches(password, self.admin_secret)
        if not (email_ok and password_ok):
            logger.warning("Failed admin login attempt for email={}", email)
            raise LoginError(
                "Invalid email or password", status.HTTP_401_UNAUTHORIZED
            )

        logger.info("Admin {} logged in", email)
        return self.admin_secret
