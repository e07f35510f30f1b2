"""ActorOfferLedger: the single-actor backing of the offer ledger.

Each domain is served by the actor addressed by
id_from_name("domain-offers:<domain>"). Inside its private key space:
    domain:<domain>    offer list
    requests:<domain>  legacy request counter
    visits:<domain>    page-view counter

Implements OfferLedgerProtocol only. Actors have no view across domains, so
the DomainCatalogProtocol operations do not exist here.
"""

import logging

from src.do_common.datetime_utils import iso_timestamp
from src.do_ledger.domain.codec import decode_counter, offers_from_obj, offers_to_obj
from src.do_ledger.domain.models import (
    MSG_DOMAIN_INITIALIZED,
    MSG_OFFER_DELETED,
    MSG_OFFERS_DELETED,
    LedgerMessage,
    Offer,
    OfferDraft,
    RequestCount,
    SubmittedOffer,
    VisitCount,
)
from src.do_ledger.domain.repository import ActorStorageProtocol
from src.do_ledger.domain.stats import newest_first
from src.do_ledger.infrastructure.actor import ActorNamespace, DomainActor

logger = logging.getLogger(__name__)

ACTOR_NAME_PREFIX = "domain-offers:"


class ActorOfferLedger:
    def __init__(self, namespace: ActorNamespace) -> None:
        self._namespace = namespace

    def _actor(self, domain: str) -> DomainActor:
        actor_id = self._namespace.id_from_name(f"{ACTOR_NAME_PREFIX}{domain}")
        return self._namespace.get(actor_id)

    async def _increment(self, domain: str, key: str) -> int:
        async def op(storage: ActorStorageProtocol) -> int:
            value = decode_counter(key, await storage.get(key)) + 1
            await storage.put(key, value)
            return value

        return await self._actor(domain).call(op)

    async def _read_counter(self, domain: str, key: str) -> int:
        async def op(storage: ActorStorageProtocol) -> int:
            return decode_counter(key, await storage.get(key))

        return await self._actor(domain).call(op)

    async def track_domain_request(self, domain: str) -> RequestCount:
        requests = await self._increment(domain, f"requests:{domain}")
        return RequestCount(domain=domain, requests=requests, timestamp=iso_timestamp())

    async def get_domain_requests(self, domain: str) -> int:
        return await self._read_counter(domain, f"requests:{domain}")

    async def increment_visits(self, domain: str) -> VisitCount:
        visits = await self._increment(domain, f"visits:{domain}")
        return VisitCount(domain=domain, visits=visits, timestamp=iso_timestamp())

    async def get_visits(self, domain: str) -> int:
        return await self._read_counter(domain, f"visits:{domain}")

    async def submit_domain_offer(self, domain: str, draft: OfferDraft) -> SubmittedOffer:
        key = f"domain:{domain}"

        async def op(storage: ActorStorageProtocol) -> SubmittedOffer:
            offers = offers_from_obj(key, await storage.get(key))
            offer = Offer(
                email=draft.email,
                amount=draft.amount,
                description=draft.description,
                timestamp=iso_timestamp(),
            )
            offers.append(offer)
            await storage.put(key, offers_to_obj(offers))
            return SubmittedOffer(domain=domain, offer=offer, total_offers=len(offers))

        result = await self._actor(domain).call(op)
        logger.info("Offer recorded: domain=%s total=%d", domain, result.total_offers)
        return result

    async def get_domain_offers(self, domain: str) -> list[Offer]:
        key = f"domain:{domain}"

        async def op(storage: ActorStorageProtocol) -> list[Offer]:
            return offers_from_obj(key, await storage.get(key))

        return newest_first(await self._actor(domain).call(op))

    async def delete_domain_offers(self, domain: str) -> LedgerMessage:
        key = f"domain:{domain}"

        async def op(storage: ActorStorageProtocol) -> None:
            await storage.delete(key)

        await self._actor(domain).call(op)
        logger.info("Offers deleted: domain=%s", domain)
        return LedgerMessage(domain=domain, message=MSG_OFFERS_DELETED, timestamp=iso_timestamp())

    async def delete_single_offer(self, domain: str, timestamp: str) -> LedgerMessage | None:
        key = f"domain:{domain}"

        async def op(storage: ActorStorageProtocol) -> bool:
            stored = await storage.get(key)
            if stored is None:
                return False
            remaining = [o for o in offers_from_obj(key, stored) if o.timestamp != timestamp]
            if remaining:
                await storage.put(key, offers_to_obj(remaining))
            else:
                await storage.delete(key)
            return True

        if not await self._actor(domain).call(op):
            return None
        logger.info("Offer delete: domain=%s timestamp=%s", domain, timestamp)
        return LedgerMessage(domain=domain, message=MSG_OFFER_DELETED, timestamp=iso_timestamp())

    async def initialize_domain(self, domain: str) -> LedgerMessage:
        key = f"domain:{domain}"

        async def op(storage: ActorStorageProtocol) -> None:
            if await storage.get(key) is None:
                await storage.put(key, [])

        await self._actor(domain).call(op)
        return LedgerMessage(
            domain=domain, message=MSG_DOMAIN_INITIALIZED, timestamp=iso_timestamp()
        )
