"""Supplier aggregate — the party a purchase order is placed with."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from procure.domain.exceptions import ValidationError

MAX_NAME_LENGTH = 100


@dataclass
class Supplier:

    id: int | None
    name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        contact_person: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
    ) -> Supplier:
        if not name or not name.strip():
            raise ValidationError("Supplier name is required")
        if len(name.strip()) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Supplier name must be at most {MAX_NAME_LENGTH} characters"
            )
        if email is not None and "@" not in email:
            raise ValidationError(f"Invalid supplier email: {email!r}")
        return Supplier(
            id=None,
            name=name.strip(),
            contact_person=contact_person,
            email=email,
            phone=phone,
            address=address,
        )
