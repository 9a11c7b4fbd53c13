"""
Contract: Transition Guard

Decides whether a requested status change is permitted for an entity,
given the actor's role and the payload that came with the request.
The guard never raises: it returns a decision that the workflow layer
must inspect.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from hirewise.core.entities.actor import Actor, ActorRole
from hirewise.core.entities.application import Application, OfferDetails
from hirewise.core.errors import (
    InvalidTransitionError,
    PermissionDeniedError,
    ValidationError,
)


class EntityKind(str, Enum):
    DOCUMENT = "document"
    APPLICATION = "application"
    JOB = "job"


class DenialRule(str, Enum):
    INVALID_TRANSITION = "invalid-transition"
    INSUFFICIENT_ROLE = "insufficient-role"
    MISSING_PAYLOAD = "missing-payload"
    INVALID_DATE_ORDER = "invalid-date-order"


@dataclass
class OfferTerms:
    """Offer payload as received; any field may be missing."""
    salary_amount: float | None = None
    salary_currency: str | None = None
    salary_period: str = "monthly"
    start_date: datetime | None = None
    expiry_date: datetime | None = None
    benefits: list[str] = field(default_factory=list)

    def missing_fields(self) -> list[str]:
        missing = []
        if not self.salary_amount or self.salary_amount <= 0:
            missing.append("salary.amount")
        if not self.salary_currency:
            missing.append("salary.currency")
        if self.start_date is None:
            missing.append("startDate")
        if self.expiry_date is None:
            missing.append("expiryDate")
        return missing


@dataclass
class TransitionPayload:
    """Extra data that may accompany a transition request."""
    notes: str | None = None
    rejection_reason: str | None = None
    offer: OfferTerms | None = None


@dataclass
class TransitionContext:
    """Entity facts the guard needs beyond the two statuses."""
    has_offer: bool = False
    is_owner: bool = False
    is_job_sponsor: bool = False
    is_job_agent: bool = False
    offer: OfferDetails | None = None
    now: datetime | None = None


@dataclass(frozen=True)
class GuardDecision:
    allowed: bool
    rule: DenialRule | None = None
    reason: str = ""

    @classmethod
    def allow(cls) -> "GuardDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, rule: DenialRule, reason: str) -> "GuardDecision":
        return cls(allowed=False, rule=rule, reason=reason)

    def __bool__(self) -> bool:
        return self.allowed

    def raise_if_denied(self) -> None:
        """Raises the error matching the violated rule; no-op when allowed."""
        if self.allowed:
            return
        if self.rule == DenialRule.INSUFFICIENT_ROLE:
            raise PermissionDeniedError(self.reason, self.rule.value)
        if self.rule in (DenialRule.MISSING_PAYLOAD, DenialRule.INVALID_DATE_ORDER):
            raise ValidationError(self.reason, self.rule.value)
        raise InvalidTransitionError(self.reason, DenialRule.INVALID_TRANSITION.value)


class ITransitionGuard(ABC):
    """
    Port: Transition Guard

    Adjacency, role and payload checks over fixed transition tables,
    one table set per entity kind.
    """

    @abstractmethod
    def can_transition(
        self,
        entity_kind: EntityKind,
        current_status: str,
        requested_status: str,
        actor_role: ActorRole,
        payload: TransitionPayload | None = None,
        context: TransitionContext | None = None,
    ) -> GuardDecision:
        """
        Evaluates one requested transition.

        Args:
            entity_kind: Which table set applies.
            current_status: Status the entity is in now.
            requested_status: Status the actor asked for.
            actor_role: Role of the requesting actor.
            payload: Offer terms, rejection reason, notes.
            context: Entity facts (ownership, existing offer, evaluation time).

        Returns:
            GuardDecision, allowed or denied with the violated rule.
        """
        ...

    @abstractmethod
    def can_respond_to_offer(
        self,
        application: Application,
        actor: Actor,
        accept: bool,
        now: datetime | None = None,
    ) -> GuardDecision:
        """
        Evaluates an applicant's answer to an offer.

        Args:
            application: Application carrying the offer.
            actor: Who is answering; must be the applicant.
            accept: True to accept, False to decline.
            now: Evaluation time (offer expiry).

        Returns:
            GuardDecision.
        """
        ...
