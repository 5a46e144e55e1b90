"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.unit_of_work import UnitOfWork
from procure.infrastructure.audit.composite_audit_recorder import (
    CompositeAuditRecorder,
)
from procure.infrastructure.audit.json_lines_audit_recorder import (
    JsonLinesAuditRecorder,
)
from procure.infrastructure.audit.logging_audit_recorder import LoggingAuditRecorder
from procure.infrastructure.config import Settings
from procure.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def load_settings(**overrides) -> Settings:
    """Environment and .env values, with explicit *overrides* taking precedence."""
    return Settings(**overrides)


def unit_of_work(settings: Settings) -> UnitOfWork:
    return JsonUnitOfWork(settings.data_dir)


def audit_recorder(settings: Settings) -> AuditRecorder:
    return CompositeAuditRecorder(
        JsonLinesAuditRecorder(settings.audit_path),
        LoggingAuditRecorder(),
    )
