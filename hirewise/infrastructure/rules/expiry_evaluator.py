"""
Calendar Expiry Evaluator.

days_remaining = ceil((expiry_date - now) / 1 day), floored at 0.

  expired   days <= 0, or status already `expired`
  critical  0 < days <= critical_days          (default 7)
  warning   critical_days < days <= warning_days (default 30)
  valid     days > warning_days
  none      no expiry date
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Iterable

from hirewise.core.entities.audit import as_utc, enum_value, utcnow
from hirewise.core.entities.document import Document, DocumentStatus
from hirewise.core.entities.policy import ExpiryThresholds
from hirewise.core.interfaces.expiry_evaluator import (
    ExpiryBucket,
    ExpiryClassification,
    IExpiryEvaluator,
)

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


def days_until(expiry_date: datetime, now: datetime) -> int:
    """Calendar-day ceiling of the time left, never negative."""
    remaining = (as_utc(expiry_date) - as_utc(now)) / _ONE_DAY
    return max(0, math.ceil(remaining))


class CalendarExpiryEvaluator(IExpiryEvaluator):
    """Expiry evaluator with injectable thresholds."""

    def __init__(self, thresholds: ExpiryThresholds | None = None):
        self.thresholds = thresholds or ExpiryThresholds()

    def classify(
        self,
        expiry_date: datetime | None,
        current_status: str,
        now: datetime | None = None,
    ) -> ExpiryClassification:
        now = now or utcnow()
        already_expired = enum_value(current_status) == DocumentStatus.EXPIRED.value

        if expiry_date is None:
            bucket = ExpiryBucket.EXPIRED if already_expired else ExpiryBucket.NONE
            return ExpiryClassification(days_remaining=None, bucket=bucket)

        days = days_until(expiry_date, now)
        if already_expired or days <= 0:
            bucket = ExpiryBucket.EXPIRED
        elif days <= self.thresholds.critical_days:
            bucket = ExpiryBucket.CRITICAL
        elif days <= self.thresholds.warning_days:
            bucket = ExpiryBucket.WARNING
        else:
            bucket = ExpiryBucket.VALID
        return ExpiryClassification(days_remaining=days, bucket=bucket)

    def is_expiring_soon(
        self,
        document: Document,
        threshold_days: int | None = None,
        now: datetime | None = None,
    ) -> bool:
        if document.expiry_date is None:
            return False
        threshold = self.thresholds.warning_days if threshold_days is None else threshold_days
        days = days_until(document.expiry_date, now or utcnow())
        return 0 < days <= threshold

    def mark_notified(self, document: Document, now: datetime | None = None) -> bool:
        if document.expiry_notified:
            logger.debug(f"Document {document.id} already notified, skipping")
            return False
        document.expiry_notified = True
        document.expiry_notification_date = now or utcnow()
        return True

    def find_expiring_soon(
        self,
        documents: Iterable[Document],
        threshold_days: int | None = None,
        now: datetime | None = None,
    ) -> list[Document]:
        """Verified, not yet notified documents inside the warning window."""
        now = now or utcnow()
        return [
            doc for doc in documents
            if doc.status == DocumentStatus.VERIFIED
            and not doc.expiry_notified
            and self.is_expiring_soon(doc, threshold_days, now)
        ]
