"""Fans one audit fact out to several recorders."""

from __future__ import annotations

from procure.domain.model.audit import AuditFact
from procure.domain.repository.audit_recorder import AuditRecorder


class CompositeAuditRecorder(AuditRecorder):

    def __init__(self, *recorders: AuditRecorder) -> None:
        self._recorders = recorders

    def record(self, fact: AuditFact) -> None:
        for recorder in self._recorders:
            recorder.record(fact)
