"""Tests for order entities."""

import pytest
from pydantic import ValidationError

from idistr.core.entities import (
    OrderDraft,
    OrderItem,
    OrderResult,
    PaymentMethod,
    PaymentSelection,
)


class TestPaymentSelection:
    def test_default_is_cash(self):
        payment = PaymentSelection()
        assert payment.method == PaymentMethod.CASH
        assert payment.is_cash

    def test_txn_none_becomes_empty(self):
        assert PaymentSelection(method=PaymentMethod.CARD, txn=None).txn == ""

    def test_invoice_wire_value(self):
        assert PaymentSelection(method="Kaspi").method == PaymentMethod.INVOICE
        assert not PaymentSelection(method="Kaspi").is_cash


class TestOrderDraft:
    def test_to_payload(self):
        draft = OrderDraft(
            telegram_id="U1",
            store_id="S1",
            items=[OrderItem(id="P1", qty=2, price=100)],
            payment=PaymentSelection(method=PaymentMethod.CARD, txn="T-9"),
            note="после обеда",
        )
        assert draft.to_payload() == {
            "telegram_id": "U1",
            "store_id": "S1",
            "items": [{"id": "P1", "qty": 2, "price": 100.0}],
            "payment": {"method": "Card", "txn": "T-9"},
            "note": "после обеда",
        }


class TestOrderResult:
    def test_numeric_order_id(self):
        assert OrderResult.model_validate({"order_id": 42}).order_id == "42"

    def test_missing_order_id(self):
        with pytest.raises(ValidationError):
            OrderResult.model_validate({})
