"""FastAPI dependencies for ledger access and the ?domain= parameter."""

from typing import Annotated

from fastapi import Depends, Query, Request

from config.settings import Settings
from src.do_common.errors import DomainRequiredError
from src.do_gateway.auth.captcha import CaptchaVerifierProtocol
from src.do_gateway.auth.dependencies import get_app_settings, get_captcha_verifier
from src.do_ledger.application.service import OfferApplicationService
from src.do_ledger.domain.repository import OfferLedgerProtocol


def get_ledger(request: Request) -> OfferLedgerProtocol:
    return request.app.state.ledger  # type: ignore[no-any-return]


def get_offer_service(
    ledger: Annotated[OfferLedgerProtocol, Depends(get_ledger)],
    captcha: Annotated[CaptchaVerifierProtocol, Depends(get_captcha_verifier)],
) -> OfferApplicationService:
    return OfferApplicationService(ledger, captcha)


def resolve_domain(
    settings: Annotated[Settings, Depends(get_app_settings)],
    domain: str | None = Query(None, description="Domain name; falls back to DEFAULT_DOMAIN"),
) -> str:
    resolved = (domain or "").strip() or settings.DEFAULT_DOMAIN
    if not resolved:
        raise DomainRequiredError()
    return resolved
