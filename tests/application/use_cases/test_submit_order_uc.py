"""Tests for SubmitOrderUseCase."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from idistr.application.session import PosSession
from idistr.application.use_cases import SubmitOrderUseCase
from idistr.core.entities import OrderResult, PaymentMethod, PaymentSelection, SubmissionState
from idistr.core.exceptions import (
    EmptyCartError,
    MissingStoreError,
    OrderSubmissionError,
    SubmissionInProgressError,
)
from idistr.core.services import CartLedger, CatalogCache, ReceiptGenerator
from idistr.infrastructure.receipts import HtmlReceiptRenderer, ReceiptOutbox


@pytest.fixture
def mock_gateway():
    gateway = AsyncMock()
    gateway.create_order.return_value = OrderResult(order_id="1001")
    return gateway


@pytest.fixture
def outbox() -> ReceiptOutbox:
    return ReceiptOutbox()


@pytest.fixture
def use_case(mock_gateway, outbox):
    generator = ReceiptGenerator(HtmlReceiptRenderer(), outbox)
    return SubmitOrderUseCase(gateway=mock_gateway, receipt_generator=generator)


@pytest.fixture
async def session(ledger: CartLedger, catalog: CatalogCache, products) -> PosSession:
    await ledger.add(products[0], 2)
    await ledger.select_store("S1")
    return PosSession("U1", ledger, catalog)


class TestSubmitOrderUseCase:
    async def test_cash_order(self, use_case, session, mock_gateway, outbox):
        result = await use_case.execute(session, PaymentSelection(method=PaymentMethod.CASH))

        draft = mock_gateway.create_order.await_args.args[0]
        assert draft.to_payload() == {
            "telegram_id": "U1",
            "store_id": "S1",
            "items": [{"id": "P1", "qty": 2, "price": 100.0}],
            "payment": {"method": "Cash", "txn": ""},
            "note": "",
        }
        assert result.order.order_id == "1001"
        assert result.total == 200
        assert result.receipt is not None
        assert outbox.get("1001") is result.receipt
        assert session.state == SubmissionState.SUCCEEDED
        assert session.ledger.lines == []

    async def test_card_order_has_no_receipt(self, use_case, session, outbox):
        result = await use_case.execute(
            session, PaymentSelection(method=PaymentMethod.CARD, txn="RRN-1")
        )
        assert result.receipt is None
        assert len(outbox) == 0
        assert use_case.to_response(result).receipt_url is None

    async def test_note_defaults_to_cart_note(self, use_case, session, mock_gateway):
        session.ledger.set_note("до обеда")
        await use_case.execute(session, PaymentSelection())
        assert mock_gateway.create_order.await_args.args[0].note == "до обеда"

    async def test_validation_error_keeps_state(self, use_case, session, mock_gateway):
        await session.ledger.select_store(None)
        with pytest.raises(MissingStoreError):
            await use_case.execute(session, PaymentSelection())
        assert session.state == SubmissionState.IDLE
        mock_gateway.create_order.assert_not_called()

    async def test_empty_cart(self, use_case, session):
        await session.ledger.clear()
        with pytest.raises(EmptyCartError):
            await use_case.execute(session, PaymentSelection())

    async def test_failure_keeps_cart_and_allows_retry(self, use_case, session, mock_gateway):
        mock_gateway.create_order.side_effect = OrderSubmissionError("order failed", status=500)
        with pytest.raises(OrderSubmissionError):
            await use_case.execute(session, PaymentSelection())
        assert session.state == SubmissionState.FAILED
        assert len(session.ledger.lines) == 1

        mock_gateway.create_order.side_effect = None
        result = await use_case.execute(session, PaymentSelection())
        assert result.order.order_id == "1001"
        assert session.state == SubmissionState.SUCCEEDED

    async def test_cancelled_submission_allows_retry(self, use_case, session, mock_gateway):
        mock_gateway.create_order.side_effect = asyncio.CancelledError()
        with pytest.raises(asyncio.CancelledError):
            await use_case.execute(session, PaymentSelection())
        assert session.state == SubmissionState.FAILED
        assert len(session.ledger.lines) == 1

        mock_gateway.create_order.side_effect = None
        result = await use_case.execute(session, PaymentSelection())
        assert result.order.order_id == "1001"

    async def test_cancelled_request_task_releases_session(self, use_case, session, mock_gateway):
        never = asyncio.Event()

        async def hang(draft):
            await never.wait()

        mock_gateway.create_order.side_effect = hang
        task = asyncio.create_task(use_case.execute(session, PaymentSelection()))
        await asyncio.sleep(0)
        assert session.submitting

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert not session.submitting
        assert session.state == SubmissionState.FAILED

    async def test_rejects_overlapping_submission(self, use_case, session, mock_gateway):
        release = asyncio.Event()

        async def slow_create(draft):
            await release.wait()
            return OrderResult(order_id="1002")

        mock_gateway.create_order.side_effect = slow_create
        first = asyncio.create_task(use_case.execute(session, PaymentSelection()))
        await asyncio.sleep(0)
        assert session.state == SubmissionState.SUBMITTING

        with pytest.raises(SubmissionInProgressError):
            await use_case.execute(session, PaymentSelection())

        release.set()
        result = await first
        assert result.order.order_id == "1002"
        assert mock_gateway.create_order.await_count == 1

    async def test_receipt_failure_does_not_fail_order(self, mock_gateway, session):
        generator = MagicMock()
        generator.generate.side_effect = RuntimeError("renderer broke")
        use_case = SubmitOrderUseCase(gateway=mock_gateway, receipt_generator=generator)
        result = await use_case.execute(session, PaymentSelection())
        assert result.receipt is None
        assert session.ledger.lines == []

    async def test_to_response(self, use_case, session):
        result = await use_case.execute(session, PaymentSelection())
        response = use_case.to_response(result)
        assert response.order_id == "1001"
        assert response.receipt_url == "/api/receipts/1001"
        assert response.items == 1

    async def test_status_reports_last_order(self, use_case, session):
        assert use_case.status(session).last_order_id is None
        await use_case.execute(session, PaymentSelection())
        status = use_case.status(session)
        assert status.state == SubmissionState.SUCCEEDED
        assert status.last_order_id == "1001"
