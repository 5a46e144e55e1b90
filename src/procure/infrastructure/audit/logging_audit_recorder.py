"""Audit recorder that emits each fact as a structlog event."""

from __future__ import annotations

import structlog

from procure.domain.model.audit import AuditFact
from procure.domain.repository.audit_recorder import AuditRecorder


class LoggingAuditRecorder(AuditRecorder):

    def __init__(self, logger_name: str = "procure.audit") -> None:
        self._logger = structlog.get_logger(logger_name)

    def record(self, fact: AuditFact) -> None:
        payload = fact.to_dict()
        self._logger.info(
            "audit.recorded",
            action=payload["action"],
            entity_type=payload["entityType"],
            entity_id=payload["entityId"],
            actor=payload["actor"],
            old_values=payload["oldValues"],
            new_values=payload["newValues"],
        )
