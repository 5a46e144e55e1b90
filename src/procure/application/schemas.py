"""Request shapes accepted from integrating callers.

Each model accepts the camelCase wire names as well as the Python
field names. Use ``parse_request()`` at the boundary so malformed input
surfaces as a domain ValidationError before any handler runs.
"""

from __future__ import annotations

from datetime import date
from typing import TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from procure.domain.exceptions import ValidationError
from procure.domain.model.movement import ReferenceType

M = TypeVar("M", bound=BaseModel)


class _Request(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
        frozen=True,
    )


class ReceivedDetailItem(_Request):
    order_detail_id: int
    quantity_received: int = Field(ge=0)


class ReceiveOrderRequest(_Request):
    received_date: date | None = None
    notes: str | None = Field(default=None, max_length=500)
    idempotency_key: str | None = Field(default=None, min_length=1, max_length=100)
    received_details: list[ReceivedDetailItem] = Field(min_length=1)


class ExternalStockDeductionRequest(_Request):
    product_code: str = Field(min_length=1, max_length=50)
    quantity: int = Field(ge=1)
    source_system: str | None = Field(default=None, max_length=50)
    notes: str | None = Field(default=None, max_length=500)


class StockUpdateRequest(_Request):
    quantity: int = Field(ge=1)
    reference_type: ReferenceType | None = None
    reference_id: int | None = None
    source_system: str | None = Field(default=None, max_length=50)
    notes: str | None = Field(default=None, max_length=500)


def parse_request(model: type[M], data: dict) -> M:
    """Validate *data* into *model*, raising the domain ValidationError."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'request'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ValidationError(f"Invalid request: {problems}") from exc
