"""Tests for request validation at the boundary."""

from datetime import date

import pytest

from procure.application.schemas import (
    ExternalStockDeductionRequest,
    ReceiveOrderRequest,
    StockUpdateRequest,
    parse_request,
)
from procure.domain.exceptions import ErrorKind, ValidationError
from procure.domain.model.movement import ReferenceType


class TestReceiveOrderRequest:

    def test_accepts_camel_case_wire_names(self):
        request = parse_request(
            ReceiveOrderRequest,
            {
                "receivedDate": "2026-02-03",
                "idempotencyKey": "abc",
                "receivedDetails": [{"orderDetailId": 4, "quantityReceived": 0}],
            },
        )
        assert request.received_date == date(2026, 2, 3)
        assert request.idempotency_key == "abc"
        assert request.received_details[0].order_detail_id == 4

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="quantityReceived") as info:
            parse_request(
                ReceiveOrderRequest,
                {"receivedDetails": [{"orderDetailId": 4, "quantityReceived": -1}]},
            )
        assert info.value.kind == ErrorKind.VALIDATION

    def test_empty_batch_rejected(self):
        with pytest.raises(ValidationError, match="receivedDetails"):
            parse_request(ReceiveOrderRequest, {"receivedDetails": []})

    def test_notes_length_limit(self):
        details = [{"orderDetailId": 1, "quantityReceived": 1}]
        assert parse_request(
            ReceiveOrderRequest, {"notes": "n" * 500, "receivedDetails": details}
        ).notes == "n" * 500
        with pytest.raises(ValidationError, match="notes"):
            parse_request(ReceiveOrderRequest, {"notes": "n" * 501, "receivedDetails": details})


class TestExternalStockDeductionRequest:

    def test_quantity_must_be_at_least_one(self):
        with pytest.raises(ValidationError, match="quantity"):
            parse_request(ExternalStockDeductionRequest, {"productCode": "P1", "quantity": 0})

    def test_code_length_limit(self):
        with pytest.raises(ValidationError, match="productCode"):
            parse_request(ExternalStockDeductionRequest, {"productCode": "X" * 51, "quantity": 1})

    def test_notes_length_limit(self):
        with pytest.raises(ValidationError, match="notes"):
            parse_request(
                ExternalStockDeductionRequest,
                {"productCode": "P1", "quantity": 1, "notes": "n" * 501},
            )

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError, match="price"):
            parse_request(
                ExternalStockDeductionRequest,
                {"productCode": "P1", "quantity": 1, "price": 3},
            )


class TestStockUpdateRequest:

    def test_reference_type_parsed(self):
        request = parse_request(StockUpdateRequest, {"quantity": 2, "referenceType": "TRANSFER"})
        assert request.reference_type == ReferenceType.TRANSFER

    def test_unknown_reference_type_rejected(self):
        with pytest.raises(ValidationError, match="referenceType"):
            parse_request(StockUpdateRequest, {"quantity": 2, "referenceType": "GIFT"})
