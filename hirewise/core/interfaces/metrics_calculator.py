"""
Contract: Metrics Calculator

Aggregates documents and applications into dashboard metrics.
Read-only: never mutates what it is given.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable

from hirewise.core.entities.application import Application
from hirewise.core.entities.document import Document
from hirewise.core.entities.metrics import ApplicationStats, DocumentStats, VerificationJourney


class IMetricsCalculator(ABC):
    """Port: Metrics Calculator"""

    @abstractmethod
    def document_trust_score(self, document: Document, now: datetime | None = None) -> int:
        """Trust score of a single document, 0–100."""
        ...

    @abstractmethod
    def document_stats(self, documents: Iterable[Document], now: datetime | None = None) -> DocumentStats:
        """
        Status counts, completion rate and aggregate trust score.

        Args:
            documents: Any collection, possibly empty.
            now: Evaluation time for expiring-soon counts.

        Returns:
            DocumentStats.
        """
        ...

    @abstractmethod
    def verification_journey(self, documents: Iterable[Document]) -> VerificationJourney:
        """Weighted requirement categories satisfied by verified documents."""
        ...

    @abstractmethod
    def application_stats(self, applications: Iterable[Application]) -> ApplicationStats:
        """Counts per application status."""
        ...
