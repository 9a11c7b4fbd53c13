"""
Use Case: Interviews

Scheduling an interview on a shortlisted application moves it to
`interview` through the guard; later interviews are appended while the
application stays there. Interview status changes are free-form within
the interview's own status set.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable

from hirewise.core.entities.actor import Actor, ActorRole
from hirewise.core.entities.application import (
    Application,
    ApplicationStatus,
    Interview,
    InterviewStatus,
)
from hirewise.core.entities.audit import enum_value, utcnow
from hirewise.core.errors import (
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from hirewise.core.interfaces.repository import IUnitOfWork
from hirewise.core.interfaces.transition_guard import (
    EntityKind,
    ITransitionGuard,
    TransitionPayload,
)
from hirewise.core.use_cases.update_application_status import (
    application_context,
    apply_application_transition,
)
from hirewise.schemas.payloads import InterviewIn, parse

logger = logging.getLogger(__name__)

SCHEDULER_ROLES = frozenset({ActorRole.ADMIN, ActorRole.SPONSOR, ActorRole.AGENT})
SCHEDULABLE_STATUSES = frozenset({ApplicationStatus.SHORTLISTED, ApplicationStatus.INTERVIEW})


class ScheduleInterviewUseCase:
    def __init__(self, uow_factory: Callable[[], IUnitOfWork], guard: ITransitionGuard):
        self._uow_factory = uow_factory
        self._guard = guard

    def execute(
        self,
        application_id: str,
        actor: Actor,
        data: dict | InterviewIn,
        interview_id: str | None = None,
        now: datetime | None = None,
    ) -> Application:
        now = now or utcnow()
        if actor.role not in SCHEDULER_ROLES:
            raise PermissionDeniedError("Not authorized to schedule interviews", "insufficient-role")
        request = parse(InterviewIn, data)

        with self._uow_factory() as uow:
            application = uow.applications.get(application_id)
            if application.status not in SCHEDULABLE_STATUSES:
                raise InvalidTransitionError(
                    f"Cannot schedule an interview for an application in status "
                    f"{application.status.value}"
                )

            job = uow.jobs.get(application.job)
            if not (actor.is_admin or actor.id in (job.sponsor, job.agent)):
                raise PermissionDeniedError("Not authorized to schedule interviews for this job", "not-owner")
            if not job.accepts_applications(now):
                raise ValidationError(f"Job {job.id} is no longer active", rule="job-not-open")

            interview = Interview(
                id=interview_id or str(uuid.uuid4()),
                scheduled_date=request.scheduled_date,
                location=request.location,
                interviewers=list(request.interviewers) or [actor.id],
                notes=request.notes,
            )

            if application.status == ApplicationStatus.SHORTLISTED:
                decision = self._guard.can_transition(
                    EntityKind.APPLICATION,
                    application.status,
                    ApplicationStatus.INTERVIEW.value,
                    actor.role,
                    context=application_context(application, job, actor, now),
                )
                if not decision:
                    logger.warning(f"Interview on {application_id}: {decision.rule.value}: {decision.reason}")
                    decision.raise_if_denied()
                apply_application_transition(
                    application,
                    ApplicationStatus.INTERVIEW,
                    actor,
                    TransitionPayload(notes="Interview scheduled"),
                    now,
                )

            application.interview_details.append(interview)
            uow.applications.update(application)

        logger.info(f"Interview {interview.id} scheduled on application {application_id}")
        return application


class UpdateInterviewUseCase:
    def __init__(self, uow_factory: Callable[[], IUnitOfWork]):
        self._uow_factory = uow_factory

    def execute(
        self,
        application_id: str,
        interview_id: str,
        actor: Actor,
        status: InterviewStatus | str,
        notes: str | None = None,
        scheduled_date: datetime | None = None,
    ) -> Application:
        """
        Updates one interview's status.

        `rescheduled` requires a new date.
        """
        if actor.role not in SCHEDULER_ROLES:
            raise PermissionDeniedError("Not authorized to update interviews", "insufficient-role")
        try:
            new_status = InterviewStatus(enum_value(status))
        except ValueError as e:
            raise ValidationError(f"Unknown interview status: {status}", rule="malformed-payload") from e
        if new_status == InterviewStatus.RESCHEDULED and scheduled_date is None:
            raise ValidationError("Rescheduling requires a new date", rule="missing-payload")

        with self._uow_factory() as uow:
            application = uow.applications.get(application_id)
            interview = application.get_interview(interview_id)
            if interview is None:
                raise NotFoundError("interview", interview_id)

            interview.status = new_status
            if notes is not None:
                interview.notes = notes
            if scheduled_date is not None:
                interview.scheduled_date = scheduled_date
            uow.applications.update(application)

        logger.info(f"Interview {interview_id} on {application_id} -> {new_status.value}")
        return application
