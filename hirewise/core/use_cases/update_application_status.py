"""
Use Case: Application Workflow

Load → guard → mutate status + ledger (+ offer sub-record) → persist.

Accepting an offer also marks the parent job `filled`; both writes go
through the same unit of work, so they commit together or not at all.
"""

import logging
from datetime import datetime
from typing import Callable

from hirewise.core.entities.actor import Actor
from hirewise.core.entities.application import (
    Application,
    ApplicationStatus,
    OfferDetails,
    OfferStatus,
    Salary,
)
from hirewise.core.entities.audit import enum_value, utcnow
from hirewise.core.entities.job import Job, JobStatus
from hirewise.core.errors import InvalidTransitionError
from hirewise.core.interfaces.repository import IUnitOfWork
from hirewise.core.interfaces.transition_guard import (
    EntityKind,
    ITransitionGuard,
    TransitionContext,
    TransitionPayload,
)
from hirewise.infrastructure.rules.transition_tables import JOB_TRANSITIONS
from hirewise.schemas.payloads import parse_transition_payload

logger = logging.getLogger(__name__)


def apply_application_transition(
    application: Application,
    requested: ApplicationStatus,
    actor: Actor,
    payload: TransitionPayload,
    now: datetime,
) -> None:
    """Mutates status, ledger and offer sub-record. Assumes the guard passed."""
    previous = application.status
    application.status = requested
    application.status_history.append(
        requested,
        actor=actor.id,
        notes=payload.notes or f"Status changed from {previous.value} to {requested.value}",
        timestamp=now,
    )

    offer = application.offer_details
    if requested == ApplicationStatus.OFFERED:
        terms = payload.offer
        application.offer_details = OfferDetails(
            salary=Salary(
                amount=terms.salary_amount,
                currency=terms.salary_currency,
                period=terms.salary_period,
            ),
            benefits=list(terms.benefits),
            start_date=terms.start_date,
            expiry_date=terms.expiry_date,
            status=OfferStatus.PENDING,
            offer_date=now,
        )
    elif requested == ApplicationStatus.ACCEPTED and offer is not None:
        offer.status = OfferStatus.ACCEPTED
        offer.accepted_at = now
    elif requested == ApplicationStatus.REJECTED and offer is not None:
        offer.status = OfferStatus.REJECTED
        offer.rejected_at = now
        offer.rejection_reason = payload.rejection_reason


def application_context(
    application: Application,
    job: Job,
    actor: Actor,
    now: datetime,
) -> TransitionContext:
    """Ownership and offer facts for a guard check on `application`."""
    return TransitionContext(
        has_offer=application.has_offer,
        is_owner=actor.id == application.applicant,
        is_job_sponsor=job.sponsor is not None and actor.id == job.sponsor,
        is_job_agent=job.agent is not None and actor.id == job.agent,
        offer=application.offer_details,
        now=now,
    )


def mark_job_filled(job: Job, actor: Actor, application_id: str, now: datetime) -> bool:
    """
    Marks the job `filled` as a consequence of an accepted offer.

    Only the job's adjacency applies here; the acceptance itself was
    already authorized on the application.

    Returns:
        True if the job changed, False if it was already filled.

    Raises:
        InvalidTransitionError: The job cannot be filled from its status.
    """
    if job.status == JobStatus.FILLED:
        return False
    if JobStatus.FILLED not in JOB_TRANSITIONS[job.status]:
        raise InvalidTransitionError(
            f"Job {job.id} cannot be filled from status {job.status.value}"
        )
    job.status = JobStatus.FILLED
    job.status_history.append(
        JobStatus.FILLED,
        actor=actor.id,
        notes=f"Offer accepted on application {application_id}",
        timestamp=now,
    )
    return True


class UpdateApplicationStatusUseCase:
    """Use Case: moves one application through its lifecycle."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork], guard: ITransitionGuard):
        self._uow_factory = uow_factory
        self._guard = guard

    def execute(
        self,
        application_id: str,
        requested_status: ApplicationStatus | str,
        actor: Actor,
        payload: dict | TransitionPayload | None = None,
        now: datetime | None = None,
    ) -> Application:
        """
        Requests an application status change.

        A closed job freezes its applications.

        Raises:
            NotFoundError, InvalidTransitionError, PermissionDeniedError,
            ValidationError, ConcurrencyConflictError.
        """
        now = now or utcnow()
        parsed = parse_transition_payload(payload)

        with self._uow_factory() as uow:
            application = uow.applications.get(application_id)
            job = uow.jobs.get(application.job)
            if job.status == JobStatus.CLOSED:
                raise InvalidTransitionError(
                    f"Cannot update application {application_id}: job {job.id} is closed"
                )

            decision = self._guard.can_transition(
                EntityKind.APPLICATION,
                application.status,
                enum_value(requested_status),
                actor.role,
                parsed,
                application_context(application, job, actor, now),
            )
            if not decision:
                logger.warning(f"Application {application_id}: {decision.rule.value}: {decision.reason}")
                decision.raise_if_denied()

            requested = ApplicationStatus(enum_value(requested_status))
            apply_application_transition(application, requested, actor, parsed, now)

            if requested == ApplicationStatus.ACCEPTED:
                if mark_job_filled(job, actor, application.id, now):
                    uow.jobs.update(job)
            uow.applications.update(application)

        logger.info(f"Application {application_id} -> {application.status.value} by {actor.id}")
        return application
