"""
Table-driven Transition Guard.

Applies, in order:
  1. Adjacency: is `requested` an outgoing edge of `current`?
  2. Role: may this actor role request `requested`?
  3. Ownership: applications are moved only by their applicant, the
     job's sponsor, the job's agent or an admin.
  4. Payload: offer terms for `offered`, rejection reason when an
     offer is already on the table, date ordering of the offer, an
     open offer for `accepted`.

All rules come from `transition_tables`; nothing here is configurable
at runtime.
"""

from datetime import datetime
from enum import Enum

from hirewise.core.entities.actor import Actor, ActorRole
from hirewise.core.entities.application import (
    Application,
    ApplicationStatus,
    OfferDetails,
    OfferStatus,
)
from hirewise.core.entities.audit import as_utc, utcnow
from hirewise.core.entities.document import DocumentStatus
from hirewise.core.entities.job import JobStatus
from hirewise.core.interfaces.transition_guard import (
    DenialRule,
    EntityKind,
    GuardDecision,
    ITransitionGuard,
    TransitionContext,
    TransitionPayload,
)
from hirewise.infrastructure.rules.transition_tables import (
    APPLICATION_ROLE_PERMISSIONS,
    APPLICATION_TRANSITIONS,
    DOCUMENT_OWNER_STATUSES,
    DOCUMENT_TRANSITIONS,
    DOCUMENT_VERIFIER_ROLES,
    JOB_ADMIN_ONLY,
    JOB_ROLE_PERMISSIONS,
    JOB_TRANSITIONS,
)


_STATUS_ENUMS: dict[EntityKind, type[Enum]] = {
    EntityKind.APPLICATION: ApplicationStatus,
    EntityKind.JOB: JobStatus,
    EntityKind.DOCUMENT: DocumentStatus,
}

_TABLES: dict[EntityKind, dict] = {
    EntityKind.APPLICATION: APPLICATION_TRANSITIONS,
    EntityKind.JOB: JOB_TRANSITIONS,
    EntityKind.DOCUMENT: DOCUMENT_TRANSITIONS,
}


class TableTransitionGuard(ITransitionGuard):
    """Transition guard backed by the fixed adjacency/permission tables."""

    def can_transition(
        self,
        entity_kind: EntityKind,
        current_status: str,
        requested_status: str,
        actor_role: ActorRole,
        payload: TransitionPayload | None = None,
        context: TransitionContext | None = None,
    ) -> GuardDecision:
        kind = EntityKind(entity_kind)
        payload = payload or TransitionPayload()
        context = context or TransitionContext()
        status_enum = _STATUS_ENUMS[kind]

        try:
            current = status_enum(current_status)
            requested = status_enum(requested_status)
        except ValueError:
            return GuardDecision.deny(
                DenialRule.INVALID_TRANSITION,
                f"Unknown {kind.value} status: {current_status!r} -> {requested_status!r}",
            )

        adjacency = self._check_adjacency(kind, current, requested)
        if not adjacency:
            return adjacency

        try:
            role = ActorRole(actor_role)
        except ValueError:
            return GuardDecision.deny(DenialRule.INSUFFICIENT_ROLE, f"Unknown actor role: {actor_role!r}")

        if kind == EntityKind.APPLICATION:
            decision = self._check_application_role(role, requested)
            if decision:
                decision = self._check_application_ownership(role, context)
            if decision:
                decision = self._check_application_payload(requested, payload, context)
            return decision
        if kind == EntityKind.JOB:
            return self._check_job_role(role, requested)
        return self._check_document_role(role, current, requested, context)

    def can_respond_to_offer(
        self,
        application: Application,
        actor: Actor,
        accept: bool,
        now: datetime | None = None,
    ) -> GuardDecision:
        now = now or utcnow()
        if actor.id != application.applicant:
            return GuardDecision.deny(
                DenialRule.INSUFFICIENT_ROLE,
                "Only the applicant can respond to this offer",
            )
        requested = ApplicationStatus.ACCEPTED if accept else ApplicationStatus.REJECTED
        adjacency = self._check_adjacency(EntityKind.APPLICATION, application.status, requested)
        if not adjacency:
            return adjacency

        return self._check_offer_open(application.offer_details, accept, now)

    # ── Rules ──────────────────────────────────────────────────────

    @staticmethod
    def _check_adjacency(kind: EntityKind, current, requested) -> GuardDecision:
        allowed = _TABLES[kind].get(current, frozenset())
        if requested not in allowed:
            return GuardDecision.deny(
                DenialRule.INVALID_TRANSITION,
                f"Invalid status transition from {current.value} to {requested.value}",
            )
        return GuardDecision.allow()

    @staticmethod
    def _check_application_role(role: ActorRole, requested: ApplicationStatus) -> GuardDecision:
        permitted = APPLICATION_ROLE_PERMISSIONS.get(role, frozenset())
        if permitted is not None and requested not in permitted:
            return GuardDecision.deny(
                DenialRule.INSUFFICIENT_ROLE,
                f"Role {role.value} cannot set application status to {requested.value}",
            )
        return GuardDecision.allow()

    @staticmethod
    def _check_application_ownership(role: ActorRole, context: TransitionContext) -> GuardDecision:
        if role == ActorRole.JOB_SEEKER and not context.is_owner:
            return GuardDecision.deny(
                DenialRule.INSUFFICIENT_ROLE,
                "Only the applicant can update this application",
            )
        if role == ActorRole.SPONSOR and not context.is_job_sponsor:
            return GuardDecision.deny(
                DenialRule.INSUFFICIENT_ROLE,
                "Sponsor does not own the job for this application",
            )
        if role == ActorRole.AGENT and not context.is_job_agent:
            return GuardDecision.deny(
                DenialRule.INSUFFICIENT_ROLE,
                "Agent is not assigned to the job for this application",
            )
        return GuardDecision.allow()

    @staticmethod
    def _check_offer_open(offer: OfferDetails | None, accept: bool, now: datetime) -> GuardDecision:
        if offer is None:
            return GuardDecision.deny(DenialRule.MISSING_PAYLOAD, "No offer exists for this application")
        if offer.status != OfferStatus.PENDING:
            return GuardDecision.deny(
                DenialRule.INVALID_TRANSITION,
                f"Offer has already been {offer.status.value}",
            )
        if accept and as_utc(offer.expiry_date) <= now:
            return GuardDecision.deny(DenialRule.INVALID_TRANSITION, "Offer has expired")
        return GuardDecision.allow()

    @classmethod
    def _check_application_payload(
        cls,
        requested: ApplicationStatus,
        payload: TransitionPayload,
        context: TransitionContext,
    ) -> GuardDecision:
        if requested == ApplicationStatus.OFFERED:
            offer = payload.offer
            if offer is None:
                return GuardDecision.deny(
                    DenialRule.MISSING_PAYLOAD,
                    "Offer details are required when setting status to offered",
                )
            missing = offer.missing_fields()
            if missing:
                return GuardDecision.deny(
                    DenialRule.MISSING_PAYLOAD,
                    f"Offer details incomplete, missing: {', '.join(missing)}",
                )
            start = as_utc(offer.start_date)
            expiry = as_utc(offer.expiry_date)
            if expiry <= start:
                return GuardDecision.deny(
                    DenialRule.INVALID_DATE_ORDER,
                    "Offer expiry date must be after the start date",
                )
            if expiry <= (context.now or utcnow()):
                return GuardDecision.deny(
                    DenialRule.INVALID_DATE_ORDER,
                    "Offer expiry date must be in the future",
                )

        if requested == ApplicationStatus.ACCEPTED:
            return cls._check_offer_open(context.offer, True, context.now or utcnow())

        if requested == ApplicationStatus.REJECTED and context.has_offer:
            if not (payload.rejection_reason or "").strip():
                return GuardDecision.deny(
                    DenialRule.MISSING_PAYLOAD,
                    "A rejection reason is required once an offer has been made",
                )
        return GuardDecision.allow()

    @staticmethod
    def _check_job_role(role: ActorRole, requested: JobStatus) -> GuardDecision:
        if requested in JOB_ADMIN_ONLY and role != ActorRole.ADMIN:
            return GuardDecision.deny(
                DenialRule.INSUFFICIENT_ROLE,
                f"Only admins can change status to {requested.value}",
            )
        permitted = JOB_ROLE_PERMISSIONS.get(role, frozenset())
        if permitted is not None and requested not in permitted:
            return GuardDecision.deny(
                DenialRule.INSUFFICIENT_ROLE,
                f"Role {role.value} cannot set job status to {requested.value}",
            )
        return GuardDecision.allow()

    @staticmethod
    def _check_document_role(
        role: ActorRole,
        current: DocumentStatus,
        requested: DocumentStatus,
        context: TransitionContext,
    ) -> GuardDecision:
        if role in DOCUMENT_VERIFIER_ROLES:
            return GuardDecision.allow()
        if (
            context.is_owner
            and current == DocumentStatus.UPLOADED
            and requested in DOCUMENT_OWNER_STATUSES
        ):
            return GuardDecision.allow()
        return GuardDecision.deny(
            DenialRule.INSUFFICIENT_ROLE,
            f"Role {role.value} cannot set document status to {requested.value}",
        )
