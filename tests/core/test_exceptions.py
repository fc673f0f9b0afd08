"""Unit tests for domain exceptions."""

from idistr.core.exceptions import (
    CatalogLoadError,
    EmptyCartError,
    GatewayError,
    IdentityMissingError,
    IdistrError,
    InvalidQuantityError,
    MissingStoreError,
    OperatorNotFoundError,
    OrderSubmissionError,
    OrderValidationError,
    SubmissionInProgressError,
    UnresolvedLineItemError,
)


class TestIdistrError:
    """Tests for base IdistrError exception."""

    def test_code_defaults_to_class_name(self):
        error = IdistrError("boom")
        assert error.code == "IdistrError"
        assert error.details == {}

    def test_to_dict(self):
        error = IdistrError("boom", code="X", details={"a": 1})
        assert error.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}


class TestGatewayError:
    def test_carries_status_detail_url(self):
        error = GatewayError("failed", status=503, detail={"detail": "down"}, url="http://b/x")
        assert error.status == 503
        assert error.detail == {"detail": "down"}
        assert error.url == "http://b/x"
        assert error.code == "GATEWAY_ERROR"
        assert error.details["status"] == 503

    def test_wrap_keeps_transport_fields(self):
        base = GatewayError("Request failed 404", status=404, detail="rep not found", url="u")
        wrapped = OperatorNotFoundError.wrap(base, "reps/me failed")
        assert isinstance(wrapped, OperatorNotFoundError)
        assert wrapped.message == "reps/me failed"
        assert wrapped.status == 404
        assert wrapped.detail == "rep not found"
        assert wrapped.code == "OPERATOR_NOT_FOUND"

    def test_subclass_codes(self):
        assert CatalogLoadError("x").code == "CATALOG_LOAD_FAILED"
        assert OrderSubmissionError("x").code == "ORDER_SUBMISSION_FAILED"


class TestOrderValidationErrors:
    def test_all_are_validation_errors(self):
        for error in (
            MissingStoreError("S9"),
            EmptyCartError(),
            UnresolvedLineItemError(sku="A", title="Apple"),
            InvalidQuantityError("P1", 0),
        ):
            assert isinstance(error, OrderValidationError)

    def test_unresolved_line_message_names_product(self):
        error = UnresolvedLineItemError(sku="MLK-1", title="Молоко")
        assert "Молоко" in error.message
        assert "Remove it from the cart" in error.message
        assert error.details == {"sku": "MLK-1", "title": "Молоко"}

    def test_unresolved_line_falls_back_to_sku(self):
        assert "MLK-1" in UnresolvedLineItemError(sku="MLK-1", title="").message


class TestSessionErrors:
    def test_identity_missing_code(self):
        assert IdentityMissingError().code == "IDENTITY_MISSING"

    def test_submission_in_progress_code(self):
        assert SubmissionInProgressError().code == "SUBMISSION_IN_PROGRESS"
