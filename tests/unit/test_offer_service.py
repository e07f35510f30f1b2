"""Unit tests for OfferApplicationService using mock ledger and verifier."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.do_common.errors import CaptchaRejectedError, CaptchaTokenMissingError
from src.do_ledger.application.schemas import OfferSubmitRequest
from src.do_ledger.application.service import OfferApplicationService
from src.do_ledger.domain.models import (
    LedgerMessage,
    Offer,
    OfferDraft,
    RequestCount,
    SubmittedOffer,
    VisitCount,
)

TS = "2025-01-01T00:00:00.000Z"


def _offer(**kwargs) -> Offer:
    defaults = dict(email="a@b.com", amount=5000, description="x", timestamp=TS)
    defaults.update(kwargs)
    return Offer(**defaults)


@pytest.fixture
def mock_ledger():
    return MagicMock()


@pytest.fixture
def mock_captcha():
    captcha = MagicMock()
    captcha.verify = AsyncMock(return_value=True)
    return captcha


class TestSubmitOffer:
    @pytest.mark.asyncio
    async def test_verified_offer_is_recorded(self, mock_ledger, mock_captcha):
        mock_ledger.submit_domain_offer = AsyncMock(
            return_value=SubmittedOffer(domain="example.com", offer=_offer(), total_offers=1)
        )
        svc = OfferApplicationService(mock_ledger, mock_captcha)
        body = OfferSubmitRequest(email="a@b.com", amount=5000, description="x", token="valid")

        resp = await svc.submit_offer("example.com", body, remote_ip="1.2.3.4")

        assert resp.domain == "example.com"
        assert resp.total_offers == 1
        assert resp.offer.timestamp == TS
        mock_captcha.verify.assert_awaited_once_with("valid", "1.2.3.4")
        mock_ledger.submit_domain_offer.assert_awaited_once_with(
            "example.com", OfferDraft(email="a@b.com", amount=5000, description="x")
        )

    @pytest.mark.asyncio
    async def test_missing_token_writes_nothing(self, mock_ledger, mock_captcha):
        mock_ledger.submit_domain_offer = AsyncMock()
        svc = OfferApplicationService(mock_ledger, mock_captcha)
        body = OfferSubmitRequest(email="a@b.com", amount=5000)

        with pytest.raises(CaptchaTokenMissingError):
            await svc.submit_offer("example.com", body)

        mock_captcha.verify.assert_not_awaited()
        mock_ledger.submit_domain_offer.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejected_token_writes_nothing(self, mock_ledger, mock_captcha):
        mock_captcha.verify = AsyncMock(return_value=False)
        mock_ledger.submit_domain_offer = AsyncMock()
        svc = OfferApplicationService(mock_ledger, mock_captcha)
        body = OfferSubmitRequest(email="a@b.com", amount=5000, token="invalid")

        with pytest.raises(CaptchaRejectedError):
            await svc.submit_offer("example.com", body)

        mock_ledger.submit_domain_offer.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_storage_error_propagates(self, mock_ledger, mock_captcha):
        mock_ledger.submit_domain_offer = AsyncMock(side_effect=ConnectionError("down"))
        svc = OfferApplicationService(mock_ledger, mock_captcha)
        body = OfferSubmitRequest(email="a@b.com", amount=5000, token="valid")

        with pytest.raises(ConnectionError):
            await svc.submit_offer("example.com", body)


class TestReads:
    @pytest.mark.asyncio
    async def test_list_offers(self, mock_ledger, mock_captcha):
        mock_ledger.get_domain_offers = AsyncMock(return_value=[_offer(amount=1), _offer(amount=2)])
        svc = OfferApplicationService(mock_ledger, mock_captcha)

        resp = await svc.list_offers("example.com")

        assert resp.domain == "example.com"
        assert [o.amount for o in resp.offers] == [1, 2]

    @pytest.mark.asyncio
    async def test_delete_offers(self, mock_ledger, mock_captcha):
        mock_ledger.delete_domain_offers = AsyncMock(
            return_value=LedgerMessage("example.com", "Domain offers deleted successfully", TS)
        )
        svc = OfferApplicationService(mock_ledger, mock_captcha)

        resp = await svc.delete_offers("example.com")

        assert resp.message == "Domain offers deleted successfully"


class TestCounters:
    @pytest.mark.asyncio
    async def test_record_visit(self, mock_ledger, mock_captcha):
        mock_ledger.increment_visits = AsyncMock(return_value=VisitCount("example.com", 4, TS))
        svc = OfferApplicationService(mock_ledger, mock_captcha)

        resp = await svc.record_visit("example.com")

        assert (resp.visits, resp.timestamp) == (4, TS)

    @pytest.mark.asyncio
    async def test_get_visits(self, mock_ledger, mock_captcha):
        mock_ledger.get_visits = AsyncMock(return_value=9)
        svc = OfferApplicationService(mock_ledger, mock_captcha)

        resp = await svc.get_visits("example.com")

        assert resp.visits == 9
        assert resp.timestamp is None

    @pytest.mark.asyncio
    async def test_track_and_get_requests(self, mock_ledger, mock_captcha):
        mock_ledger.track_domain_request = AsyncMock(return_value=RequestCount("example.com", 1, TS))
        mock_ledger.get_domain_requests = AsyncMock(return_value=1)
        svc = OfferApplicationService(mock_ledger, mock_captcha)

        assert (await svc.track_request("example.com")).requests == 1
        assert (await svc.get_requests("example.com")).requests == 1
