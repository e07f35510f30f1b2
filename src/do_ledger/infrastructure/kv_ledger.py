"""KVOfferLedger: the flat key-value backing of the offer ledger.

Key layout (one shared namespace):
    offers:<domain>    JSON list of offers
    requests:<domain>  legacy request counter
    visits:<domain>    page-view counter

Satisfies both OfferLedgerProtocol and DomainCatalogProtocol; domain
enumeration is a prefix scan over "offers:".

Consistency: counters go through the store's atomic incr(). Offer list
writes are read-modify-write with last-write-wins, so two concurrent submits
for one domain can lose one of the offers.
"""

import asyncio
import logging

from src.do_common.datetime_utils import iso_timestamp
from src.do_ledger.domain.codec import decode_counter, decode_offers, encode_offers
from src.do_ledger.domain.models import (
    MSG_DOMAIN_INITIALIZED,
    MSG_OFFER_DELETED,
    MSG_OFFERS_DELETED,
    DomainOffer,
    DomainStat,
    LedgerMessage,
    Offer,
    OfferDraft,
    RequestCount,
    SubmittedOffer,
    VisitCount,
)
from src.do_ledger.domain.repository import KeyValueStoreProtocol
from src.do_ledger.domain.stats import build_domain_stat, newest_first, sort_domain_stats

logger = logging.getLogger(__name__)

OFFERS_PREFIX = "offers:"
REQUESTS_PREFIX = "requests:"
VISITS_PREFIX = "visits:"


class KVOfferLedger:
    def __init__(self, store: KeyValueStoreProtocol) -> None:
        self._store = store

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    async def track_domain_request(self, domain: str) -> RequestCount:
        requests = await self._store.incr(f"{REQUESTS_PREFIX}{domain}")
        return RequestCount(domain=domain, requests=requests, timestamp=iso_timestamp())

    async def get_domain_requests(self, domain: str) -> int:
        key = f"{REQUESTS_PREFIX}{domain}"
        return decode_counter(key, await self._store.get(key))

    async def increment_visits(self, domain: str) -> VisitCount:
        visits = await self._store.incr(f"{VISITS_PREFIX}{domain}")
        return VisitCount(domain=domain, visits=visits, timestamp=iso_timestamp())

    async def get_visits(self, domain: str) -> int:
        key = f"{VISITS_PREFIX}{domain}"
        return decode_counter(key, await self._store.get(key))

    # ------------------------------------------------------------------
    # Offers
    # ------------------------------------------------------------------

    async def _load_offers(self, domain: str) -> tuple[str, str | None, list[Offer]]:
        key = f"{OFFERS_PREFIX}{domain}"
        raw = await self._store.get(key)
        return key, raw, decode_offers(key, raw)

    async def submit_domain_offer(self, domain: str, draft: OfferDraft) -> SubmittedOffer:
        key, _, offers = await self._load_offers(domain)
        offer = Offer(
            email=draft.email,
            amount=draft.amount,
            description=draft.description,
            timestamp=iso_timestamp(),
        )
        offers.append(offer)
        await self._store.put(key, encode_offers(offers))
        logger.info("Offer recorded: domain=%s total=%d", domain, len(offers))
        return SubmittedOffer(domain=domain, offer=offer, total_offers=len(offers))

    async def get_domain_offers(self, domain: str) -> list[Offer]:
        _, _, offers = await self._load_offers(domain)
        return newest_first(offers)

    async def delete_domain_offers(self, domain: str) -> LedgerMessage:
        await self._store.delete(f"{OFFERS_PREFIX}{domain}")
        logger.info("Offers deleted: domain=%s", domain)
        return LedgerMessage(domain=domain, message=MSG_OFFERS_DELETED, timestamp=iso_timestamp())

    async def delete_single_offer(self, domain: str, timestamp: str) -> LedgerMessage | None:
        key, raw, offers = await self._load_offers(domain)
        if raw is None:
            return None

        remaining = [o for o in offers if o.timestamp != timestamp]
        if remaining:
            await self._store.put(key, encode_offers(remaining))
        else:
            await self._store.delete(key)
        logger.info(
            "Offer delete: domain=%s timestamp=%s removed=%d",
            domain, timestamp, len(offers) - len(remaining),
        )
        return LedgerMessage(domain=domain, message=MSG_OFFER_DELETED, timestamp=iso_timestamp())

    async def initialize_domain(self, domain: str) -> LedgerMessage:
        key = f"{OFFERS_PREFIX}{domain}"
        if await self._store.get(key) is None:
            await self._store.put(key, encode_offers([]))
            logger.info("Domain initialized: domain=%s", domain)
        return LedgerMessage(
            domain=domain, message=MSG_DOMAIN_INITIALIZED, timestamp=iso_timestamp()
        )

    # ------------------------------------------------------------------
    # Catalog (cross-domain)
    # ------------------------------------------------------------------

    async def get_all_domains(self) -> list[str]:
        keys = await self._store.list_keys(OFFERS_PREFIX)
        return [k[len(OFFERS_PREFIX):] for k in keys]

    async def get_all_offers(self) -> list[DomainOffer]:
        tagged: list[DomainOffer] = []
        for domain in await self.get_all_domains():
            _, _, offers = await self._load_offers(domain)
            tagged.extend(
                DomainOffer(
                    email=o.email,
                    amount=o.amount,
                    description=o.description,
                    timestamp=o.timestamp,
                    domain=domain,
                )
                for o in offers
            )
        return newest_first(tagged)

    async def get_domain_stats(self) -> list[DomainStat]:
        domains = await self.get_all_domains()

        async def _one(domain: str) -> DomainStat:
            offers, visits = await asyncio.gather(
                self.get_domain_offers(domain), self.get_visits(domain)
            )
            return build_domain_stat(domain, offers, visits)

        stats = await asyncio.gather(*(_one(d) for d in domains))
        return sort_domain_stats(stats)
