"""Offers endpoint: one path, method picks the operation.

POST   /offers?domain=   submit an offer (public, CAPTCHA token required)
GET    /offers?domain=   list offers, newest first (bearer token)
DELETE /offers?domain=   delete all offers for the domain (bearer token)

Success bodies are the bare shapes landing-page clients expect; errors use
the ApiResponse envelope via the AppError handler in main.py.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.do_gateway.auth.dependencies import require_api_token
from src.do_ledger.api.dependencies import get_offer_service, resolve_domain
from src.do_ledger.application.schemas import (
    LedgerMessageOut,
    OffersListResponse,
    OfferSubmitRequest,
    SubmitOfferResponse,
)
from src.do_ledger.application.service import OfferApplicationService

router = APIRouter(prefix="/offers", tags=["offers"])


@router.post("", response_model=SubmitOfferResponse)
async def submit_offer(
    request: Request,
    body: OfferSubmitRequest,
    domain: Annotated[str, Depends(resolve_domain)],
    service: Annotated[OfferApplicationService, Depends(get_offer_service)],
) -> SubmitOfferResponse:
    remote_ip = request.headers.get("CF-Connecting-IP") or (
        request.client.host if request.client else None
    )
    return await service.submit_offer(domain, body, remote_ip)


@router.get(
    "",
    response_model=OffersListResponse,
    dependencies=[Depends(require_api_token)],
)
async def list_offers(
    domain: Annotated[str, Depends(resolve_domain)],
    service: Annotated[OfferApplicationService, Depends(get_offer_service)],
) -> OffersListResponse:
    return await service.list_offers(domain)


@router.delete(
    "",
    response_model=LedgerMessageOut,
    dependencies=[Depends(require_api_token)],
)
async def delete_offers(
    domain: Annotated[str, Depends(resolve_domain)],
    service: Annotated[OfferApplicationService, Depends(get_offer_service)],
) -> LedgerMessageOut:
    return await service.delete_offers(domain)
