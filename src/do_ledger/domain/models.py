"""Domain models for do_ledger: pure dataclasses, no storage logic."""

from dataclasses import asdict, dataclass
from typing import Any

Amount = int | float


@dataclass
class OfferDraft:
    """Client-supplied part of an offer; the ledger adds the timestamp."""

    email: str
    amount: Amount
    description: str | None = None


@dataclass
class Offer:
    email: str
    amount: Amount
    description: str | None
    timestamp: str  # ISO-8601 UTC, assigned by the ledger

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class DomainOffer(Offer):
    """Offer tagged with the domain it was made for (cross-domain listings)."""

    domain: str


@dataclass
class RequestCount:
    domain: str
    requests: int
    timestamp: str


@dataclass
class VisitCount:
    domain: str
    visits: int
    timestamp: str


@dataclass
class SubmittedOffer:
    domain: str
    offer: Offer
    total_offers: int


@dataclass
class LedgerMessage:
    domain: str
    message: str
    timestamp: str


@dataclass
class DomainStat:
    domain: str
    visits: int
    last_offer: str | None
    avg_offer: int
    top_offer: Amount
    offer_count: int


MSG_OFFERS_DELETED = "Domain offers deleted successfully"
MSG_OFFER_DELETED = "Offer deleted successfully"
MSG_DOMAIN_INITIALIZED = "Domain initialized successfully"
