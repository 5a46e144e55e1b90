"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each exception carries an ``ErrorKind`` so callers can branch on
``exc.kind`` instead of on the class hierarchy.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_IDENTIFIER = "DUPLICATE_IDENTIFIER"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INVALID_RECEIPT_QUANTITY = "INVALID_RECEIPT_QUANTITY"
    ORDER_STATE_CONFLICT = "ORDER_STATE_CONFLICT"
    INVALID_ORDER_OPERATION = "INVALID_ORDER_OPERATION"


class EntityKind(Enum):
    PRODUCT = "PRODUCT"
    ORDER = "ORDER"
    SUPPLIER = "SUPPLIER"


class IdentifierKind(Enum):
    PRODUCT_CODE = "PRODUCT_CODE"
    ORDER_NUMBER = "ORDER_NUMBER"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.VALIDATION


class ValidationError(DomainException):
    """Input is missing or malformed."""

    kind = ErrorKind.VALIDATION


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: EntityKind, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        label = entity.value.replace("_", " ").capitalize()
        super().__init__(f"{label} not found: {identifier}")


class DuplicateIdentifierError(DomainException):
    """A unique business identifier is already taken."""

    kind = ErrorKind.DUPLICATE_IDENTIFIER

    def __init__(self, identifier_kind: IdentifierKind, value: str) -> None:
        self.identifier_kind = identifier_kind
        self.value = value
        label = identifier_kind.value.replace("_", " ").lower()
        super().__init__(f"Duplicate {label}: '{value}'")


class InsufficientStockError(DomainException):
    """A stock decrease asked for more than is on hand."""

    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(
        self,
        product_id: int | None,
        code: str,
        available: int,
        requested: int,
    ) -> None:
        self.product_id = product_id
        self.code = code
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for product {code} (ID: {product_id}). "
            f"Available: {available}, requested: {requested}"
        )


class InvalidReceiptQuantityError(DomainException):
    """A line cannot receive the given quantity."""

    kind = ErrorKind.INVALID_RECEIPT_QUANTITY


class OrderStateConflictError(DomainException):
    """The order's current status forbids the operation."""

    kind = ErrorKind.ORDER_STATE_CONFLICT

    def __init__(self, order_id: int | None, message: str) -> None:
        self.order_id = order_id
        super().__init__(message)


class InvalidOrderOperationError(DomainException):
    """The operation does not make sense for this order."""

    kind = ErrorKind.INVALID_ORDER_OPERATION
