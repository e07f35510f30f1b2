"""Offer ordering and per-domain aggregation. Pure functions."""

import math
from collections.abc import Sequence
from typing import TypeVar

from src.do_common.datetime_utils import parse_iso_timestamp
from src.do_ledger.domain.models import DomainStat, Offer

_O = TypeVar("_O", bound=Offer)


def newest_first(offers: Sequence[_O]) -> list[_O]:
    """Sort by timestamp, newest first. Stable for equal timestamps."""
    return sorted(offers, key=lambda o: parse_iso_timestamp(o.timestamp), reverse=True)


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; averages round .5 upward.
    return math.floor(value + 0.5)


def build_domain_stat(domain: str, offers: Sequence[Offer], visits: int) -> DomainStat:
    """Aggregate one domain. `offers` must already be newest-first."""
    if not offers:
        return DomainStat(
            domain=domain,
            visits=visits,
            last_offer=None,
            avg_offer=0,
            top_offer=0,
            offer_count=0,
        )
    amounts = [o.amount for o in offers]
    return DomainStat(
        domain=domain,
        visits=visits,
        last_offer=offers[0].timestamp,
        avg_offer=round_half_up(sum(amounts) / len(amounts)),
        top_offer=max(amounts),
        offer_count=len(offers),
    )


def sort_domain_stats(stats: Sequence[DomainStat]) -> list[DomainStat]:
    """offer_count desc, then visits desc, then domain name asc."""
    return sorted(stats, key=lambda s: (-s.offer_count, -s.visits, s.domain))
