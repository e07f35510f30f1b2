"""OfferApplicationService: public offer flow over the ledger.

The ledger does the storage work; this layer adds the CAPTCHA gate on
submission and maps domain results to response schemas. Ledger and store
errors propagate unchanged; main.py turns them into HTTP responses.
"""

import logging

from src.do_common.errors import CaptchaRejectedError, CaptchaTokenMissingError
from src.do_gateway.auth.captcha import CaptchaVerifierProtocol
from src.do_ledger.application.schemas import (
    LedgerMessageOut,
    OfferOut,
    OffersListResponse,
    OfferSubmitRequest,
    RequestCountOut,
    SubmitOfferResponse,
    VisitCountOut,
)
from src.do_ledger.domain.repository import OfferLedgerProtocol

logger = logging.getLogger(__name__)


class OfferApplicationService:
    def __init__(self, ledger: OfferLedgerProtocol, captcha: CaptchaVerifierProtocol) -> None:
        self._ledger = ledger
        self._captcha = captcha

    async def submit_offer(
        self,
        domain: str,
        body: OfferSubmitRequest,
        remote_ip: str | None = None,
    ) -> SubmitOfferResponse:
        """Verify the CAPTCHA token, then append the offer.

        Nothing is written unless verification succeeds.
        """
        if not body.token:
            raise CaptchaTokenMissingError()
        if not await self._captcha.verify(body.token, remote_ip):
            logger.warning("Offer rejected by CAPTCHA: domain=%s", domain)
            raise CaptchaRejectedError()

        result = await self._ledger.submit_domain_offer(domain, body.to_draft())
        return SubmitOfferResponse.from_domain(result)

    async def list_offers(self, domain: str) -> OffersListResponse:
        offers = await self._ledger.get_domain_offers(domain)
        return OffersListResponse(domain=domain, offers=[OfferOut.from_domain(o) for o in offers])

    async def delete_offers(self, domain: str) -> LedgerMessageOut:
        return LedgerMessageOut.from_domain(await self._ledger.delete_domain_offers(domain))

    async def record_visit(self, domain: str) -> VisitCountOut:
        return VisitCountOut.from_domain(await self._ledger.increment_visits(domain))

    async def get_visits(self, domain: str) -> VisitCountOut:
        return VisitCountOut(domain=domain, visits=await self._ledger.get_visits(domain))

    async def track_request(self, domain: str) -> RequestCountOut:
        return RequestCountOut.from_domain(await self._ledger.track_domain_request(domain))

    async def get_requests(self, domain: str) -> RequestCountOut:
        return RequestCountOut(domain=domain, requests=await self._ledger.get_domain_requests(domain))
