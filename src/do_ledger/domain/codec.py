"""Encoding of ledger values and validation on read.

Stored values are validated every time they are read back. Anything that
does not decode to an integer counter or a list of offer objects raises
CorruptLedgerDataError instead of being passed on.
"""

import json
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from src.do_common.datetime_utils import parse_iso_timestamp
from src.do_common.errors import CorruptLedgerDataError
from src.do_ledger.domain.models import Offer

# JSON numbers only: no booleans, no Infinity/NaN, never negative
OfferAmount = Annotated[StrictInt, Field(ge=0)] | Annotated[
    StrictFloat, Field(ge=0, allow_inf_nan=False)
]


class _StoredOffer(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: str
    amount: OfferAmount
    description: str | None = None
    timestamp: str

    @field_validator("timestamp")
    @classmethod
    def _parseable(cls, v: str) -> str:
        parse_iso_timestamp(v)  # offers are sorted by this value
        return v


_OFFER_LIST = TypeAdapter(list[_StoredOffer])


def offers_to_obj(offers: list[Offer]) -> list[dict[str, Any]]:
    return [o.to_dict() for o in offers]


def offers_from_obj(key: str, obj: Any) -> list[Offer]:
    """Validate an already-deserialized offer list (actor storage values)."""
    if obj is None:
        return []
    try:
        stored = _OFFER_LIST.validate_python(obj)
    except ValidationError as e:
        raise CorruptLedgerDataError(key, f"{e.error_count()} invalid field(s)") from e
    return [
        Offer(
            email=s.email,
            amount=s.amount,
            description=s.description,
            timestamp=s.timestamp,
        )
        for s in stored
    ]


def encode_offers(offers: list[Offer]) -> str:
    return json.dumps(offers_to_obj(offers))


def decode_offers(key: str, raw: str | None) -> list[Offer]:
    """Decode a JSON offer list from the flat store; None means absent."""
    if raw is None:
        return []
    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptLedgerDataError(key, "not valid JSON") from e
    return offers_from_obj(key, obj)


def decode_counter(key: str, raw: Any) -> int:
    """Decode a counter stored as int or decimal string; None means 0."""
    if raw is None:
        return 0
    if isinstance(raw, bool):
        raise CorruptLedgerDataError(key, "counter is a boolean")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw, 10)
        except ValueError as e:
            raise CorruptLedgerDataError(key, f"counter {raw!r} is not an integer") from e
    raise CorruptLedgerDataError(key, f"counter has type {type(raw).__name__}")
