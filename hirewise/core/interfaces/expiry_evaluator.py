"""
Contract: Expiry Evaluator

Classifies the remaining validity of a dated credential and tracks
whether an expiry warning has already been dispatched.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable

from hirewise.core.entities.document import Document


class ExpiryBucket(str, Enum):
    EXPIRED = "expired"
    CRITICAL = "critical"
    WARNING = "warning"
    VALID = "valid"
    NONE = "none"


# Most urgent first; classification only ever moves left as time passes.
BUCKET_ORDER = [
    ExpiryBucket.EXPIRED,
    ExpiryBucket.CRITICAL,
    ExpiryBucket.WARNING,
    ExpiryBucket.VALID,
]


@dataclass(frozen=True)
class ExpiryClassification:
    days_remaining: int | None       # None when there is no expiry date
    bucket: ExpiryBucket

    @property
    def is_expired(self) -> bool:
        return self.bucket == ExpiryBucket.EXPIRED

    def to_dict(self) -> dict:
        return {"daysRemaining": self.days_remaining, "bucket": self.bucket.value}


class IExpiryEvaluator(ABC):
    """
    Port: Expiry Evaluator

    Pure computation over an expiry date, a status and a clock, plus the
    idempotent notification marker.
    """

    @abstractmethod
    def classify(
        self,
        expiry_date: datetime | None,
        current_status: str,
        now: datetime | None = None,
    ) -> ExpiryClassification:
        """
        Classifies remaining validity.

        Args:
            expiry_date: When the credential stops being valid, if ever.
            current_status: Status of the entity (already `expired` wins).
            now: Evaluation time, defaults to the current UTC time.

        Returns:
            ExpiryClassification with days remaining and bucket.
        """
        ...

    @abstractmethod
    def is_expiring_soon(
        self,
        document: Document,
        threshold_days: int | None = None,
        now: datetime | None = None,
    ) -> bool:
        """True iff 0 < days remaining <= threshold."""
        ...

    @abstractmethod
    def mark_notified(self, document: Document, now: datetime | None = None) -> bool:
        """
        Records that an expiry warning went out. Never changes status.

        Returns:
            True if the marker was set by this call, False if it was
            already set.
        """
        ...

    @abstractmethod
    def find_expiring_soon(
        self,
        documents: Iterable[Document],
        threshold_days: int | None = None,
        now: datetime | None = None,
    ) -> list[Document]:
        """Verified documents inside the window that were not notified yet."""
        ...
