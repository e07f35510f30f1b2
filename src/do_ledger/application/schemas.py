"""Pydantic schemas for do_ledger API requests and responses.

Field names go over the wire in camelCase (totalOffers, avgOffer, ...) to
match the landing-page and dashboard clients; Python code uses snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.do_ledger.domain.codec import OfferAmount
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


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class OfferSubmitRequest(BaseModel):
    # Unknown fields (including any client "timestamp") are dropped
    model_config = ConfigDict(extra="ignore")

    email: str = Field(min_length=1, max_length=320)
    amount: OfferAmount
    description: str | None = Field(None, max_length=5000)
    token: str | None = None  # CAPTCHA response token

    def to_draft(self) -> OfferDraft:
        return OfferDraft(email=self.email, amount=self.amount, description=self.description)


# ---------------------------------------------------------------------------
# Offers
# ---------------------------------------------------------------------------


class OfferOut(_CamelModel):
    email: str
    amount: int | float
    description: str | None
    timestamp: str

    @classmethod
    def from_domain(cls, o: Offer) -> "OfferOut":
        return cls(email=o.email, amount=o.amount, description=o.description, timestamp=o.timestamp)


class DomainOfferOut(OfferOut):
    domain: str

    @classmethod
    def from_domain(cls, o: DomainOffer) -> "DomainOfferOut":  # type: ignore[override]
        return cls(
            email=o.email,
            amount=o.amount,
            description=o.description,
            timestamp=o.timestamp,
            domain=o.domain,
        )


class SubmitOfferResponse(_CamelModel):
    domain: str
    offer: OfferOut
    total_offers: int

    @classmethod
    def from_domain(cls, r: SubmittedOffer) -> "SubmitOfferResponse":
        return cls(domain=r.domain, offer=OfferOut.from_domain(r.offer), total_offers=r.total_offers)


class OffersListResponse(_CamelModel):
    domain: str
    offers: list[OfferOut]


class LedgerMessageOut(_CamelModel):
    domain: str
    message: str
    timestamp: str

    @classmethod
    def from_domain(cls, m: LedgerMessage) -> "LedgerMessageOut":
        return cls(domain=m.domain, message=m.message, timestamp=m.timestamp)


# ---------------------------------------------------------------------------
# Counters
# ---------------------------------------------------------------------------


class VisitCountOut(_CamelModel):
    domain: str
    visits: int
    timestamp: str | None = None

    @classmethod
    def from_domain(cls, v: VisitCount) -> "VisitCountOut":
        return cls(domain=v.domain, visits=v.visits, timestamp=v.timestamp)


class RequestCountOut(_CamelModel):
    domain: str
    requests: int
    timestamp: str | None = None

    @classmethod
    def from_domain(cls, r: RequestCount) -> "RequestCountOut":
        return cls(domain=r.domain, requests=r.requests, timestamp=r.timestamp)


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


class DomainStatOut(_CamelModel):
    domain: str
    visits: int
    last_offer: str | None
    avg_offer: int
    top_offer: int | float
    offer_count: int

    @classmethod
    def from_domain(cls, s: DomainStat) -> "DomainStatOut":
        return cls(
            domain=s.domain,
            visits=s.visits,
            last_offer=s.last_offer,
            avg_offer=s.avg_offer,
            top_offer=s.top_offer,
            offer_count=s.offer_count,
        )


class DomainOffersSummary(_CamelModel):
    """Single-domain dashboard view: offers plus their headline numbers."""

    domain: str
    offers: list[OfferOut]
    offer_count: int
    top_offer: int | float
    avg_offer: int
