"""
Verification Metrics Calculator.

Per-document trust score:
  +40 verified, +20 verification date recorded, +20 expiry date in the
  future, +10 file attached, +10 category other than `other`; capped.

Aggregate over a collection:
  completion_rate = round(100 * verified / total)
  trust_score     = max(0, round(100 * (verified - expired) / total))
  both 0 for an empty collection.

Verification journey: a requirement category is satisfied iff at least
one document of that category is verified; the score is the sum of the
satisfied weights.
"""

import math
from collections import Counter
from datetime import datetime
from typing import Iterable

from hirewise.core.entities.application import Application, ApplicationStatus
from hirewise.core.entities.audit import as_utc, utcnow
from hirewise.core.entities.document import Document, DocumentCategory, DocumentStatus
from hirewise.core.entities.metrics import (
    ApplicationStats,
    DocumentStats,
    JourneyRequirement,
    VerificationJourney,
)
from hirewise.core.entities.policy import JourneyWeights, TrustWeights
from hirewise.core.interfaces.expiry_evaluator import IExpiryEvaluator
from hirewise.core.interfaces.metrics_calculator import IMetricsCalculator
from hirewise.infrastructure.rules.expiry_evaluator import CalendarExpiryEvaluator

# Both must be satisfied for the user-level KYC flag.
KYC_CATEGORIES = (DocumentCategory.IDENTITY, DocumentCategory.ADDRESS)


def _percent(part: int, total: int) -> int:
    """Percentage rounded half up (12.5 -> 13)."""
    if total == 0:
        return 0
    return math.floor(100 * part / total + 0.5)


class VerificationMetricsCalculator(IMetricsCalculator):
    """Metrics calculator with injectable weight tables."""

    def __init__(
        self,
        trust_weights: TrustWeights | None = None,
        journey_weights: JourneyWeights | None = None,
        expiry_evaluator: IExpiryEvaluator | None = None,
        expiring_soon_days: int = 30,
    ):
        self.trust_weights = trust_weights or TrustWeights()
        self.journey_weights = journey_weights or JourneyWeights()
        self._expiry = expiry_evaluator or CalendarExpiryEvaluator()
        self.expiring_soon_days = expiring_soon_days

    def document_trust_score(self, document: Document, now: datetime | None = None) -> int:
        now = now or utcnow()
        w = self.trust_weights
        score = 0
        if document.status == DocumentStatus.VERIFIED:
            score += w.verified
        if document.verification_details.verification_date is not None:
            score += w.verification_date
        if document.expiry_date is not None and as_utc(document.expiry_date) > now:
            score += w.future_expiry
        if document.file_ref:
            score += w.file_present
        if document.category != DocumentCategory.OTHER:
            score += w.categorized
        return max(0, min(score, w.cap))

    def document_stats(self, documents: Iterable[Document], now: datetime | None = None) -> DocumentStats:
        now = now or utcnow()
        docs = list(documents)
        by_status = Counter(d.status for d in docs)

        stats = DocumentStats(
            total=len(docs),
            uploaded=by_status[DocumentStatus.UPLOADED],
            pending=by_status[DocumentStatus.PENDING],
            under_review=by_status[DocumentStatus.UNDER_REVIEW],
            verified=by_status[DocumentStatus.VERIFIED],
            rejected=by_status[DocumentStatus.REJECTED],
            expired=by_status[DocumentStatus.EXPIRED],
            expiring_soon=sum(
                1 for d in docs
                if self._expiry.is_expiring_soon(d, self.expiring_soon_days, now)
            ),
            by_category=dict(Counter(d.category.value for d in docs)),
            by_type=dict(Counter(d.type.value for d in docs)),
        )
        stats.completion_rate = _percent(stats.verified, stats.total)
        stats.trust_score = max(0, _percent(stats.verified - stats.expired, stats.total))
        return stats

    def verification_journey(self, documents: Iterable[Document]) -> VerificationJourney:
        verified_categories = {
            d.category for d in documents if d.status == DocumentStatus.VERIFIED
        }
        requirements = [
            JourneyRequirement(
                category=category.value,
                weight=weight,
                satisfied=category in verified_categories,
            )
            for category, weight in self.journey_weights.weights.items()
        ]
        satisfied = [r for r in requirements if r.satisfied]
        return VerificationJourney(
            requirements=requirements,
            score=min(100, sum(r.weight for r in satisfied)),
            completed=len(satisfied),
            total=len(requirements),
            kyc_verified=all(c in verified_categories for c in KYC_CATEGORIES),
        )

    def application_stats(self, applications: Iterable[Application]) -> ApplicationStats:
        counts = Counter(a.status for a in applications)
        return ApplicationStats(
            total=sum(counts.values()),
            by_status={s.value: counts[s] for s in ApplicationStatus if counts[s]},
        )
