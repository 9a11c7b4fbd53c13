"""
Use Case: Respond to Offer

The applicant accepts or declines a pending offer. Accepting fills the
job in the same unit of work.
"""

import logging
from datetime import datetime
from typing import Callable

from hirewise.core.entities.actor import Actor
from hirewise.core.entities.application import Application, ApplicationStatus
from hirewise.core.entities.audit import utcnow
from hirewise.core.interfaces.repository import IUnitOfWork
from hirewise.core.interfaces.transition_guard import ITransitionGuard, TransitionPayload
from hirewise.core.use_cases.update_application_status import (
    apply_application_transition,
    mark_job_filled,
)

logger = logging.getLogger(__name__)

DEFAULT_DECLINE_REASON = "Declined by applicant"


class RespondToOfferUseCase:
    def __init__(self, uow_factory: Callable[[], IUnitOfWork], guard: ITransitionGuard):
        self._uow_factory = uow_factory
        self._guard = guard

    def execute(
        self,
        application_id: str,
        actor: Actor,
        accept: bool,
        reason: str | None = None,
        now: datetime | None = None,
    ) -> Application:
        now = now or utcnow()

        with self._uow_factory() as uow:
            application = uow.applications.get(application_id)

            decision = self._guard.can_respond_to_offer(application, actor, accept, now)
            if not decision:
                logger.warning(f"Offer response on {application_id}: {decision.rule.value}: {decision.reason}")
                decision.raise_if_denied()

            if accept:
                apply_application_transition(
                    application,
                    ApplicationStatus.ACCEPTED,
                    actor,
                    TransitionPayload(notes="Offer accepted by applicant"),
                    now,
                )
                job = uow.jobs.get(application.job)
                if mark_job_filled(job, actor, application.id, now):
                    uow.jobs.update(job)
            else:
                apply_application_transition(
                    application,
                    ApplicationStatus.REJECTED,
                    actor,
                    TransitionPayload(
                        notes="Offer declined by applicant",
                        rejection_reason=reason or DEFAULT_DECLINE_REASON,
                    ),
                    now,
                )
            uow.applications.update(application)

        logger.info(f"Offer on application {application_id} {'accepted' if accept else 'declined'}")
        return application
