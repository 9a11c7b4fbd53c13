"""Use Case: classify the remaining validity of a stored document."""

from datetime import datetime
from typing import Callable

from hirewise.core.entities.document import Document
from hirewise.core.interfaces.expiry_evaluator import ExpiryClassification, IExpiryEvaluator
from hirewise.core.interfaces.repository import IUnitOfWork


class ClassifyExpiryUseCase:
    def __init__(self, uow_factory: Callable[[], IUnitOfWork], expiry_evaluator: IExpiryEvaluator):
        self._uow_factory = uow_factory
        self._expiry = expiry_evaluator

    def execute(self, document: str | Document, now: datetime | None = None) -> ExpiryClassification:
        """Accepts a document id or an already loaded document. Read-only."""
        if not isinstance(document, Document):
            with self._uow_factory() as uow:
                document = uow.documents.get(document)
        return self._expiry.classify(document.expiry_date, document.status, now)
