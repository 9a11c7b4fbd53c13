"""
Entity: Metrics

Read-side aggregates computed on demand for dashboards. Never
persisted, never fed back into a transition.
"""

from dataclasses import dataclass, field


@dataclass
class DocumentStats:
    """Aggregate verification health of a collection of documents."""
    total: int = 0
    uploaded: int = 0
    pending: int = 0
    under_review: int = 0
    verified: int = 0
    rejected: int = 0
    expired: int = 0
    expiring_soon: int = 0
    completion_rate: int = 0          # 0–100
    trust_score: int = 0              # 0–100
    by_category: dict[str, int] = field(default_factory=dict)
    by_type: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "uploaded": self.uploaded,
            "pending": self.pending,
            "underReview": self.under_review,
            "verified": self.verified,
            "rejected": self.rejected,
            "expired": self.expired,
            "expiringSoon": self.expiring_soon,
            "completionRate": self.completion_rate,
            "trustScore": self.trust_score,
            "byCategory": dict(self.by_category),
            "byType": dict(self.by_type),
        }


@dataclass
class JourneyRequirement:
    category: str
    weight: int
    satisfied: bool = False


@dataclass
class VerificationJourney:
    requirements: list[JourneyRequirement] = field(default_factory=list)
    score: int = 0
    completed: int = 0
    total: int = 0
    kyc_verified: bool = False

    def to_dict(self) -> dict:
        return {
            "requirements": [
                {"category": r.category, "weight": r.weight, "satisfied": r.satisfied}
                for r in self.requirements
            ],
            "score": self.score,
            "completed": self.completed,
            "total": self.total,
            "kycVerified": self.kyc_verified,
        }


@dataclass
class ApplicationStats:
    total: int = 0
    by_status: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"total": self.total, **self.by_status}
