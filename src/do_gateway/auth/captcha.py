"""CAPTCHA token verification against Cloudflare Turnstile.

The public offer-submit path calls verify() before anything is written.
A rejected token is a normal False; an unreachable or failing verification
service raises CaptchaUnavailableError so the caller sees a 502, not a
silent rejection.
"""

import logging
from typing import Protocol

import httpx

from src.do_common.errors import CaptchaUnavailableError

logger = logging.getLogger(__name__)


class CaptchaVerifierProtocol(Protocol):
    async def verify(self, token: str, remote_ip: str | None = None) -> bool: ...


class TurnstileVerifier:
    def __init__(
        self,
        secret_key: str,
        verify_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._secret_key = secret_key
        self._verify_url = verify_url
        self._timeout = timeout_seconds
        self._transport = transport  # tests inject httpx.MockTransport

    async def verify(self, token: str, remote_ip: str | None = None) -> bool:
        form = {"secret": self._secret_key, "response": token}
        if remote_ip:
            form["remoteip"] = remote_ip

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.post(self._verify_url, data=form)
                resp.raise_for_status()
                body = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            # ValueError: body was not JSON
            logger.exception("CAPTCHA verification call failed")
            raise CaptchaUnavailableError(type(e).__name__) from e

        success = bool(body.get("success", False))
        if not success:
            logger.warning("CAPTCHA rejected: error-codes=%s", body.get("error-codes"))
        return success
