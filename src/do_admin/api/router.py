# src/do_admin/api/router.py
"""Admin dashboard REST API. Every route needs a valid admin session cookie.

GET    /admin/stats                                 per-domain stats
GET    /admin/offers                                all offers, newest first
GET    /admin/domains                               domain names
GET    /admin/domains/{domain}/offers               one domain's offers + summary
POST   /admin/domains/{domain}                      initialize an empty offer list
DELETE /admin/domains/{domain}/offers               delete all offers
DELETE /admin/domains/{domain}/offers/{timestamp}   delete one offer
"""
from collections.abc import Sequence
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from src.do_admin.application.service import AdminService
from src.do_common.response import ApiResponse, success_response
from src.do_gateway.auth.dependencies import require_admin_session
from src.do_ledger.api.dependencies import get_ledger
from src.do_ledger.domain.repository import OfferLedgerProtocol

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin_session)],
)


def get_admin_service(
    ledger: Annotated[OfferLedgerProtocol, Depends(get_ledger)],
) -> AdminService:
    return AdminService(ledger)


_Service = Annotated[AdminService, Depends(get_admin_service)]


def _respond(request: Request, data: object) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


def _dump(models: Sequence[BaseModel]) -> list[dict[str, Any]]:
    return [m.model_dump(by_alias=True) for m in models]


@router.get("/stats")
async def domain_stats(request: Request, service: _Service) -> ApiResponse:
    return _respond(request, _dump(await service.get_domain_stats()))


@router.get("/offers")
async def all_offers(request: Request, service: _Service) -> ApiResponse:
    return _respond(request, _dump(await service.get_all_offers()))


@router.get("/domains")
async def all_domains(request: Request, service: _Service) -> ApiResponse:
    return _respond(request, await service.get_all_domains())


@router.get("/domains/{domain}/offers")
async def domain_offers(domain: str, request: Request, service: _Service) -> ApiResponse:
    result = await service.get_domain_offers(domain)
    return _respond(request, result.model_dump(by_alias=True))


@router.post("/domains/{domain}")
async def initialize_domain(domain: str, request: Request, service: _Service) -> ApiResponse:
    result = await service.initialize_domain(domain)
    return _respond(request, result.model_dump(by_alias=True))


@router.delete("/domains/{domain}/offers")
async def delete_domain_offers(domain: str, request: Request, service: _Service) -> ApiResponse:
    result = await service.delete_domain_offers(domain)
    return _respond(request, result.model_dump(by_alias=True))


@router.delete("/domains/{domain}/offers/{timestamp}")
async def delete_single_offer(
    domain: str, timestamp: str, request: Request, service: _Service
) -> ApiResponse:
    result = await service.delete_single_offer(domain, timestamp)
    return _respond(request, result.model_dump(by_alias=True) if result else None)
