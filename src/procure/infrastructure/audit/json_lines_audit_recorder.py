"""Audit recorder that appends one JSON object per line to a file."""

from __future__ import annotations

import json
from pathlib import Path

import structlog

from procure.domain.model.audit import AuditFact
from procure.domain.repository.audit_recorder import AuditRecorder

logger = structlog.get_logger(__name__)


class JsonLinesAuditRecorder(AuditRecorder):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def record(self, fact: AuditFact) -> None:
        # The business change is already committed; a lost audit line is
        # reported but must not turn a successful call into a failure.
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with self._file_path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(fact.to_dict(), default=str) + "\n")
        except OSError:
            logger.exception(
                "audit.write_failed",
                action=fact.action.value,
                entity_type=fact.entity_type.value,
                entity_id=fact.entity_id,
            )
