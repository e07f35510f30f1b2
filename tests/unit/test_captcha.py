"""Unit tests for TurnstileVerifier against a mocked HTTP transport."""

from urllib.parse import parse_qs

import httpx
import pytest

from src.do_common.errors import CaptchaUnavailableError
from src.do_gateway.auth.captcha import TurnstileVerifier

VERIFY_URL = "https://captcha.test/siteverify"


def _verifier(handler) -> TurnstileVerifier:
    return TurnstileVerifier(
        "secret-key", VERIFY_URL, timeout_seconds=1.0, transport=httpx.MockTransport(handler)
    )


@pytest.mark.asyncio
async def test_success_true() -> None:
    seen: dict[str, list[str]] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(parse_qs(request.content.decode()))
        return httpx.Response(200, json={"success": True})

    assert await _verifier(handler).verify("tok", "1.2.3.4") is True
    assert seen == {"secret": ["secret-key"], "response": ["tok"], "remoteip": ["1.2.3.4"]}


@pytest.mark.asyncio
async def test_remote_ip_optional() -> None:
    seen: dict[str, list[str]] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(parse_qs(request.content.decode()))
        return httpx.Response(200, json={"success": True})

    await _verifier(handler).verify("tok")
    assert "remoteip" not in seen


@pytest.mark.asyncio
async def test_rejected_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False, "error-codes": ["invalid-input-response"]})

    assert await _verifier(handler).verify("bad") is False


@pytest.mark.asyncio
async def test_server_error_raises_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    with pytest.raises(CaptchaUnavailableError) as exc_info:
        await _verifier(handler).verify("tok")
    assert exc_info.value.http_status == 502


@pytest.mark.asyncio
async def test_transport_error_raises_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(CaptchaUnavailableError):
        await _verifier(handler).verify("tok")


@pytest.mark.asyncio
async def test_non_json_body_raises_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(CaptchaUnavailableError):
        await _verifier(handler).verify("tok")
