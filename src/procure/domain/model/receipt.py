"""ReceiptRecord — remembers a receiving batch submitted with a client key.

A retried batch carrying the same idempotency key is answered from the
stored summary instead of being applied a second time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from procure.domain.exceptions import ValidationError

MAX_KEY_LENGTH = 100


@dataclass(frozen=True)
class ReceiptRecord:

    idempotency_key: str
    order_id: int
    summary: dict  # the receiving summary payload as first returned
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.idempotency_key or not self.idempotency_key.strip():
            raise ValidationError("Idempotency key cannot be blank")
        if len(self.idempotency_key) > MAX_KEY_LENGTH:
            raise ValidationError(
                f"Idempotency key must be at most {MAX_KEY_LENGTH} characters"
            )
