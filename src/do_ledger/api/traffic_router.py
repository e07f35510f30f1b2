"""Visit and request counters.

POST /visits?domain=     count a landing-page view (public)
GET  /visits?domain=     read the visit counter (bearer token)
POST /requests?domain=   bump the legacy request counter (bearer token)
GET  /requests?domain=   read the legacy request counter (bearer token)
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.do_gateway.auth.dependencies import require_api_token
from src.do_ledger.api.dependencies import get_offer_service, resolve_domain
from src.do_ledger.application.schemas import RequestCountOut, VisitCountOut
from src.do_ledger.application.service import OfferApplicationService

router = APIRouter(tags=["traffic"])

_Domain = Annotated[str, Depends(resolve_domain)]
_Service = Annotated[OfferApplicationService, Depends(get_offer_service)]


@router.post("/visits", response_model=VisitCountOut)
async def record_visit(domain: _Domain, service: _Service) -> VisitCountOut:
    return await service.record_visit(domain)


@router.get(
    "/visits",
    response_model=VisitCountOut,
    response_model_exclude_none=True,
    dependencies=[Depends(require_api_token)],
)
async def get_visits(domain: _Domain, service: _Service) -> VisitCountOut:
    return await service.get_visits(domain)


@router.post("/requests", response_model=RequestCountOut, dependencies=[Depends(require_api_token)])
async def track_request(domain: _Domain, service: _Service) -> RequestCountOut:
    return await service.track_request(domain)


@router.get(
    "/requests",
    response_model=RequestCountOut,
    response_model_exclude_none=True,
    dependencies=[Depends(require_api_token)],
)
async def get_requests(domain: _Domain, service: _Service) -> RequestCountOut:
    return await service.get_requests(domain)
