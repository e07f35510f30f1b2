"""Admin session cookies.

Two cookies gate the dashboard:
    admin_auth       HS256 JWT (type "admin"), signed with ADMIN_SESSION_SECRET
    admin_auth_time  issue time in epoch milliseconds

A session is valid only when both are present, the JWT verifies, and the
issue time is no older than ADMIN_SESSION_MAX_AGE_SECONDS.

NOTE: No server-side revocation. Logging out clears the cookies in the
browser; a copied token stays valid until it expires.
"""

import hmac
from datetime import timedelta

from jose import JWTError, jwt
from starlette.responses import Response

from config.settings import Settings
from src.do_common.datetime_utils import epoch_millis, utc_now
from src.do_common.errors import InvalidAdminPasswordError

AUTH_COOKIE = "admin_auth"
AUTH_TIME_COOKIE = "admin_auth_time"

_TOKEN_TYPE = "admin"


def check_admin_password(settings: Settings, password: str) -> None:
    """Plain-text comparison against ADMIN_PASSWORD, in constant time."""
    if not password or not hmac.compare_digest(
        password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8")
    ):
        raise InvalidAdminPasswordError()


def create_session_token(settings: Settings) -> str:
    now = utc_now()
    payload = {
        "sub": "admin",
        "type": _TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(seconds=settings.ADMIN_SESSION_MAX_AGE_SECONDS),
    }
    return str(
        jwt.encode(
            payload,
            settings.ADMIN_SESSION_SECRET,
            algorithm=settings.ADMIN_SESSION_ALGORITHM,
        )
    )


def is_session_valid(
    settings: Settings,
    auth_cookie: str | None,
    auth_time_cookie: str | None,
    now_ms: int | None = None,
) -> bool:
    if not auth_cookie or not auth_time_cookie:
        return False

    try:
        issued_ms = int(auth_time_cookie)
    except ValueError:
        return False
    now_ms = epoch_millis() if now_ms is None else now_ms
    if now_ms - issued_ms > settings.ADMIN_SESSION_MAX_AGE_SECONDS * 1000:
        return False

    try:
        payload = jwt.decode(
            auth_cookie,
            settings.ADMIN_SESSION_SECRET,
            algorithms=[settings.ADMIN_SESSION_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        return False
    return payload.get("type") == _TOKEN_TYPE


def set_session_cookies(response: Response, settings: Settings) -> None:
    max_age = settings.ADMIN_SESSION_MAX_AGE_SECONDS
    for name, value in (
        (AUTH_COOKIE, create_session_token(settings)),
        (AUTH_TIME_COOKIE, str(epoch_millis())),
    ):
        response.set_cookie(
            name,
            value,
            max_age=max_age,
            httponly=True,
            secure=settings.SECURE_COOKIES,
            samesite="strict",
        )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(AUTH_COOKIE)
    response.delete_cookie(AUTH_TIME_COOKIE)
