# src/do_admin/application/service.py
"""Admin dashboard service.

Cross-domain views (stats, all offers, domain list) need the
DomainCatalogProtocol capability; with a backing that lacks it they raise
CapabilityNotSupportedError. Per-domain operations work on any backing.
"""
import logging

from src.do_common.errors import CapabilityNotSupportedError
from src.do_ledger.application.schemas import (
    DomainOfferOut,
    DomainOffersSummary,
    DomainStatOut,
    LedgerMessageOut,
    OfferOut,
)
from src.do_ledger.domain.repository import DomainCatalogProtocol, OfferLedgerProtocol
from src.do_ledger.domain.stats import build_domain_stat

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, ledger: OfferLedgerProtocol) -> None:
        self._ledger = ledger

    def _catalog(self) -> DomainCatalogProtocol:
        if not isinstance(self._ledger, DomainCatalogProtocol):
            raise CapabilityNotSupportedError("domain enumeration")
        return self._ledger

    async def get_domain_stats(self) -> list[DomainStatOut]:
        stats = await self._catalog().get_domain_stats()
        return [DomainStatOut.from_domain(s) for s in stats]

    async def get_all_offers(self) -> list[DomainOfferOut]:
        offers = await self._catalog().get_all_offers()
        return [DomainOfferOut.from_domain(o) for o in offers]

    async def get_all_domains(self) -> list[str]:
        return await self._catalog().get_all_domains()

    async def get_domain_offers(self, domain: str) -> DomainOffersSummary:
        offers = await self._ledger.get_domain_offers(domain)
        stat = build_domain_stat(domain, offers, visits=0)
        return DomainOffersSummary(
            domain=domain,
            offers=[OfferOut.from_domain(o) for o in offers],
            offer_count=stat.offer_count,
            top_offer=stat.top_offer,
            avg_offer=stat.avg_offer,
        )

    async def initialize_domain(self, domain: str) -> LedgerMessageOut:
        return LedgerMessageOut.from_domain(await self._ledger.initialize_domain(domain))

    async def delete_domain_offers(self, domain: str) -> LedgerMessageOut:
        logger.info("Admin deleting all offers: domain=%s", domain)
        return LedgerMessageOut.from_domain(await self._ledger.delete_domain_offers(domain))

    async def delete_single_offer(self, domain: str, timestamp: str) -> LedgerMessageOut | None:
        result = await self._ledger.delete_single_offer(domain, timestamp)
        return LedgerMessageOut.from_domain(result) if result else None
