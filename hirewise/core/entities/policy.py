"""
Entity: Policy values

Thresholds and weight tables consumed by the expiry evaluator and the
metrics calculator. Built from Settings in production, constructed
directly in tests. Inconsistent values raise ConfigurationError at
construction time.
"""

from dataclasses import dataclass, field

from hirewise.core.entities.document import DocumentCategory
from hirewise.core.errors import ConfigurationError


@dataclass(frozen=True)
class ExpiryThresholds:
    critical_days: int = 7
    warning_days: int = 30

    def __post_init__(self):
        if self.critical_days < 0 or self.warning_days < 0:
            raise ConfigurationError(
                f"Expiry thresholds must be non-negative "
                f"(critical={self.critical_days}, warning={self.warning_days})"
            )
        if self.critical_days > self.warning_days:
            raise ConfigurationError(
                f"Critical threshold ({self.critical_days}d) cannot exceed "
                f"warning threshold ({self.warning_days}d)"
            )


@dataclass(frozen=True)
class TrustWeights:
    """Points awarded per satisfied factor of a single document."""
    verified: int = 40
    verification_date: int = 20
    future_expiry: int = 20
    file_present: int = 10
    categorized: int = 10
    cap: int = 100

    def __post_init__(self):
        for name in ("verified", "verification_date", "future_expiry", "file_present", "categorized"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"Trust weight '{name}' cannot be negative")
        if self.cap <= 0:
            raise ConfigurationError("Trust score cap must be positive")


def _default_journey() -> dict[DocumentCategory, int]:
    return {
        DocumentCategory.IDENTITY: 40,
        DocumentCategory.ADDRESS: 30,
        DocumentCategory.EDUCATION: 20,
        DocumentCategory.PROFESSIONAL: 10,
    }


@dataclass(frozen=True)
class JourneyWeights:
    """Requirement categories of the verification journey and their points."""
    weights: dict[DocumentCategory, int] = field(default_factory=_default_journey)

    def __post_init__(self):
        if not self.weights:
            raise ConfigurationError("Verification journey needs at least one requirement")
        try:
            normalized = {DocumentCategory(k): int(v) for k, v in self.weights.items()}
        except ValueError as e:
            raise ConfigurationError(f"Invalid journey requirement: {e}") from e
        object.__setattr__(self, "weights", normalized)
        if any(w < 0 for w in normalized.values()):
            raise ConfigurationError("Journey weights cannot be negative")
        if sum(normalized.values()) > 100:
            raise ConfigurationError(
                f"Journey weights sum to {sum(normalized.values())}, max is 100"
            )
