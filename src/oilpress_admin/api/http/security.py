"""Admin credential check for the dashboard routes."""

import hmac

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from loguru import logger

from src.oilpress_admin.runtime.context import get_config

http_basic = HTTPBasic(auto_error=False, realm="oilpress-admin")


def _matches(given: str, expected: str) -> bool:
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def require_admin(
    credentials: HTTPBasicCredentials | None = Depends(http_basic),
) -> str:
    """Return the admin username, or raise 401 when the credentials are wrong."""
    admin = get_config().admin
    if not admin.enabled:
        return admin.username

    if credentials is not None:
        # Evaluate both so timing does not reveal which one failed
        user_ok = _matches(credentials.username, admin.username)
        password_ok = _matches(credentials.password, admin.password)
        if user_ok and password_ok:
            return credentials.username

    logger.warning("Rejected admin credentials")
    raise HTTPException(
        status_code=401,
        detail="Invalid email or password",
        headers={"WWW-Authenticate": "Basic"},
    )
