"""
Use Case: Metrics

Read-side queries. Loads collections through a unit of work and hands
them to the metrics calculator; nothing is written back.
"""

from datetime import datetime
from typing import Callable

from hirewise.core.entities.metrics import ApplicationStats, DocumentStats, VerificationJourney
from hirewise.core.interfaces.metrics_calculator import IMetricsCalculator
from hirewise.core.interfaces.repository import IUnitOfWork


class GetMetricsUseCase:
    def __init__(self, uow_factory: Callable[[], IUnitOfWork], calculator: IMetricsCalculator):
        self._uow_factory = uow_factory
        self._calculator = calculator

    def document_stats(self, now: datetime | None = None, **filters) -> DocumentStats:
        """Stats over documents matching `filters` (e.g. owner="u1"); all when empty."""
        with self._uow_factory() as uow:
            documents = uow.documents.query(**filters)
        return self._calculator.document_stats(documents, now)

    def document_trust(self, document_id: str, now: datetime | None = None) -> int:
        with self._uow_factory() as uow:
            document = uow.documents.get(document_id)
        return self._calculator.document_trust_score(document, now)

    def journey(self, owner: str) -> VerificationJourney:
        with self._uow_factory() as uow:
            documents = uow.documents.query(owner=owner)
        return self._calculator.verification_journey(documents)

    def application_stats(self, **filters) -> ApplicationStats:
        with self._uow_factory() as uow:
            applications = uow.applications.query(**filters)
        return self._calculator.application_stats(applications)

    def for_owner(self, owner: str, now: datetime | None = None) -> dict:
        """Dashboard bundle for one user."""
        with self._uow_factory() as uow:
            documents = uow.documents.query(owner=owner)
            applications = uow.applications.query(applicant=owner)
        return {
            "documents": self._calculator.document_stats(documents, now).to_dict(),
            "journey": self._calculator.verification_journey(documents).to_dict(),
            "applications": self._calculator.application_stats(applications).to_dict(),
        }
