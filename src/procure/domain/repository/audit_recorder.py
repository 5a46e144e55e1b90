"""Abstract sink for audit facts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from procure.domain.model.audit import AuditFact


class AuditRecorder(ABC):

    @abstractmethod
    def record(self, fact: AuditFact) -> None:
        """Deliver one audit fact. Must not influence the calling use case."""
