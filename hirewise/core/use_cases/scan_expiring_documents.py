"""
Use Case: Expiry Scan

Periodic sweep over stored documents:
  1. documents whose expiry date has passed collapse to `expired`;
  2. verified documents inside the warning window are marked notified
     once; the expiry notice (optional callback) goes out after that
     flag is committed.

Each document is written in its own unit of work. A version conflict
on one document is logged and skipped; the sweep carries on and the
document is picked up again on the next run.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from hirewise.core.entities.audit import utcnow
from hirewise.core.entities.document import Document, DocumentStatus
from hirewise.core.errors import ConcurrencyConflictError
from hirewise.core.interfaces.expiry_evaluator import ExpiryClassification, IExpiryEvaluator
from hirewise.core.interfaces.repository import IUnitOfWork
from hirewise.core.use_cases.verify_document import apply_expiry

logger = logging.getLogger(__name__)

Notifier = Callable[[Document, ExpiryClassification], None]


@dataclass
class ScanReport:
    expired: list[str] = field(default_factory=list)
    notified: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "expired": list(self.expired),
            "notified": list(self.notified),
            "conflicts": list(self.conflicts),
        }


class ScanExpiringDocumentsUseCase:
    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        expiry_evaluator: IExpiryEvaluator,
        notifier: Notifier | None = None,
        threshold_days: int | None = None,
    ):
        self._uow_factory = uow_factory
        self._expiry = expiry_evaluator
        self._notifier = notifier
        self._threshold_days = threshold_days

    def execute(self, now: datetime | None = None) -> ScanReport:
        now = now or utcnow()
        report = ScanReport()

        with self._uow_factory() as uow:
            candidates = [
                d for d in uow.documents.query()
                if d.expiry_date is not None and d.status != DocumentStatus.EXPIRED
            ]

        for snapshot in candidates:
            try:
                self._expire_one(snapshot.id, now, report)
            except ConcurrencyConflictError as e:
                logger.warning(f"Expiry scan skipped {snapshot.id}: {e.message}")
                report.conflicts.append(snapshot.id)

        with self._uow_factory() as uow:
            expiring = self._expiry.find_expiring_soon(
                uow.documents.query(status=DocumentStatus.VERIFIED.value),
                self._threshold_days,
                now,
            )

        for snapshot in expiring:
            try:
                self._notify_one(snapshot.id, now, report)
            except ConcurrencyConflictError as e:
                logger.warning(f"Expiry notice skipped {snapshot.id}: {e.message}")
                report.conflicts.append(snapshot.id)

        logger.info(
            f"Expiry scan: {len(report.expired)} expired, "
            f"{len(report.notified)} notified, {len(report.conflicts)} conflicts"
        )
        return report

    def _expire_one(self, document_id: str, now: datetime, report: ScanReport) -> None:
        with self._uow_factory() as uow:
            document = uow.documents.get(document_id)
            if apply_expiry(document, self._expiry, now):
                uow.documents.update(document)
                report.expired.append(document_id)

    def _notify_one(self, document_id: str, now: datetime, report: ScanReport) -> None:
        with self._uow_factory() as uow:
            document = uow.documents.get(document_id)
            # Re-check against the fresh copy.
            if not self._expiry.find_expiring_soon([document], self._threshold_days, now):
                return
            if not self._expiry.mark_notified(document, now):
                return
            uow.documents.update(document)

        # Notify only after the flag is committed.
        report.notified.append(document_id)
        if self._notifier is not None:
            self._notifier(document, self._expiry.classify(document.expiry_date, document.status, now))
