"""Storage and ledger Protocols.

OfferLedgerProtocol is the capability set every backing offers.
DomainCatalogProtocol is the optional cross-domain capability; only the flat
key-value ledger satisfies it. Callers check with isinstance() before use.
"""

from typing import Any, Protocol, runtime_checkable

from src.do_ledger.domain.models import (
    DomainOffer,
    DomainStat,
    LedgerMessage,
    Offer,
    OfferDraft,
    RequestCount,
    SubmittedOffer,
    VisitCount,
)


class KeyValueStoreProtocol(Protocol):
    """Flat string-keyed store shared by every domain."""

    async def get(self, key: str) -> str | None: ...

    async def put(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def incr(self, key: str) -> int: ...

    async def list_keys(self, prefix: str) -> list[str]: ...


class ActorStorageProtocol(Protocol):
    """Private key space owned by exactly one actor."""

    async def get(self, key: str) -> Any: ...

    async def put(self, key: str, value: Any) -> None: ...

    async def delete(self, key: str) -> None: ...


@runtime_checkable
class OfferLedgerProtocol(Protocol):
    async def track_domain_request(self, domain: str) -> RequestCount: ...

    async def get_domain_requests(self, domain: str) -> int: ...

    async def increment_visits(self, domain: str) -> VisitCount: ...

    async def get_visits(self, domain: str) -> int: ...

    async def submit_domain_offer(self, domain: str, draft: OfferDraft) -> SubmittedOffer: ...

    async def get_domain_offers(self, domain: str) -> list[Offer]: ...

    async def delete_domain_offers(self, domain: str) -> LedgerMessage: ...

    async def delete_single_offer(self, domain: str, timestamp: str) -> LedgerMessage | None: ...

    async def initialize_domain(self, domain: str) -> LedgerMessage: ...


@runtime_checkable
class DomainCatalogProtocol(Protocol):
    async def get_all_domains(self) -> list[str]: ...

    async def get_all_offers(self) -> list[DomainOffer]: ...

    async def get_domain_stats(self) -> list[DomainStat]: ...
