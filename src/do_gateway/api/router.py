"""Admin session router: log in, log out.

POST   /admin/session  check password, set admin_auth + admin_auth_time cookies
DELETE /admin/session  clear both cookies
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, Field

from config.settings import Settings
from src.do_common.errors import InvalidAdminPasswordError
from src.do_common.response import ApiResponse, success_response
from src.do_gateway.auth.dependencies import get_app_settings
from src.do_gateway.auth.session import (
    check_admin_password,
    clear_session_cookies,
    set_session_cookies,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/session", tags=["admin-session"])


class LoginRequest(BaseModel):
    password: str = Field(min_length=1)


def _get_request_id(request: Request) -> str:
    """Read request_id injected by RequestLogMiddleware, fallback if absent."""
    return getattr(request.state, "request_id", "req_unknown")


@router.post("", response_model=ApiResponse, summary="Admin login")
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ApiResponse:
    try:
        check_admin_password(settings, body.password)
    except InvalidAdminPasswordError:
        logger.warning("Admin login failed from %s", request.client.host if request.client else "-")
        raise

    set_session_cookies(response, settings)
    resp = success_response({"expires_in": settings.ADMIN_SESSION_MAX_AGE_SECONDS})
    resp.request_id = _get_request_id(request)
    resp.message = "Login successful"
    return resp


@router.delete("", response_model=ApiResponse, summary="Admin logout")
async def logout(request: Request, response: Response) -> ApiResponse:
    clear_session_cookies(response)
    resp = success_response()
    resp.request_id = _get_request_id(request)
    resp.message = "Logged out"
    return resp
