"""FastAPI dependencies: settings access, bearer token, admin session.

Usage in any protected router:
    from src.do_gateway.auth.dependencies import require_api_token

    @router.get("/protected", dependencies=[Depends(require_api_token)])
    async def protected(): ...
"""

import hmac
from typing import Annotated

from fastapi import Cookie, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config.settings import Settings
from src.do_common.errors import AdminSessionRequiredError, InvalidApiTokenError
from src.do_gateway.auth.captcha import CaptchaVerifierProtocol
from src.do_gateway.auth.session import is_session_valid

# auto_error=False: a missing header becomes our 1001 error, not FastAPI's 403
_bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings built once by create_app(); never re-read from the environment."""
    return request.app.state.settings  # type: ignore[no-any-return]


def get_captcha_verifier(request: Request) -> CaptchaVerifierProtocol:
    return request.app.state.captcha  # type: ignore[no-any-return]


async def require_api_token(
    settings: Annotated[Settings, Depends(get_app_settings)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
) -> None:
    """Static bearer token check against API_AUTH_TOKEN. Raises 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidApiTokenError()
    if not hmac.compare_digest(
        credentials.credentials.encode("utf-8"),
        settings.API_AUTH_TOKEN.encode("utf-8"),
    ):
        raise InvalidApiTokenError()


async def require_admin_session(
    settings: Annotated[Settings, Depends(get_app_settings)],
    admin_auth: Annotated[str | None, Cookie()] = None,
    admin_auth_time: Annotated[str | None, Cookie()] = None,
) -> None:
    """Valid admin cookie pair required. Raises 401."""
    if not is_session_valid(settings, admin_auth, admin_auth_time):
        raise AdminSessionRequiredError()
