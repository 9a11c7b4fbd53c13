"""
Use Case: Job Workflow

Load → ownership check → guard → mutate status + ledger → persist.
"""

import logging
from datetime import datetime
from typing import Callable

from hirewise.core.entities.actor import Actor
from hirewise.core.entities.audit import enum_value, utcnow
from hirewise.core.entities.job import Job, JobStatus
from hirewise.core.errors import PermissionDeniedError
from hirewise.core.interfaces.repository import IUnitOfWork
from hirewise.core.interfaces.transition_guard import (
    EntityKind,
    ITransitionGuard,
    TransitionContext,
    TransitionPayload,
)
from hirewise.schemas.payloads import parse_transition_payload

logger = logging.getLogger(__name__)


class UpdateJobStatusUseCase:
    def __init__(self, uow_factory: Callable[[], IUnitOfWork], guard: ITransitionGuard):
        self._uow_factory = uow_factory
        self._guard = guard

    def execute(
        self,
        job_id: str,
        requested_status: JobStatus | str,
        actor: Actor,
        payload: dict | TransitionPayload | None = None,
        now: datetime | None = None,
    ) -> Job:
        now = now or utcnow()
        parsed = parse_transition_payload(payload)

        with self._uow_factory() as uow:
            job = uow.jobs.get(job_id)
            is_owner = actor.id in (job.sponsor, job.agent)
            if not (is_owner or actor.is_admin):
                raise PermissionDeniedError("Not authorized to update this job", "not-owner")

            decision = self._guard.can_transition(
                EntityKind.JOB,
                job.status,
                enum_value(requested_status),
                actor.role,
                parsed,
                TransitionContext(is_owner=is_owner, now=now),
            )
            if not decision:
                logger.warning(f"Job {job_id}: {decision.rule.value}: {decision.reason}")
                decision.raise_if_denied()

            previous = job.status
            job.status = JobStatus(enum_value(requested_status))
            job.status_history.append(
                job.status,
                actor=actor.id,
                notes=parsed.notes or f"Status changed from {previous.value} to {job.status.value}",
                timestamp=now,
            )
            uow.jobs.update(job)

        logger.info(f"Job {job_id} -> {job.status.value} by {actor.id}")
        return job
