"""Use Case: create a job posting."""

import logging
import uuid
from datetime import datetime
from typing import Callable

from hirewise.core.entities.actor import Actor, ActorRole
from hirewise.core.entities.audit import as_utc, utcnow
from hirewise.core.entities.job import Job, JobStatus
from hirewise.core.errors import PermissionDeniedError, ValidationError
from hirewise.core.interfaces.repository import IUnitOfWork

logger = logging.getLogger(__name__)


class CreateJobUseCase:
    def __init__(self, uow_factory: Callable[[], IUnitOfWork]):
        self._uow_factory = uow_factory

    def execute(
        self,
        title: str,
        actor: Actor,
        expires_at: datetime,
        sponsor: str | None = None,
        agent: str | None = None,
        job_id: str | None = None,
        now: datetime | None = None,
    ) -> Job:
        """
        A sponsor's own posting starts `pending` (awaiting admin approval);
        postings created by anyone else start as `draft`.
        """
        now = now or utcnow()
        if actor.role == ActorRole.JOB_SEEKER:
            raise PermissionDeniedError("Job seekers cannot create jobs", "insufficient-role")
        if not title or not title.strip():
            raise ValidationError("Job title is required", rule="missing-payload")
        if as_utc(expires_at) <= now:
            raise ValidationError("Job expiry must be in the future", rule="invalid-date-order")

        is_sponsor = actor.role == ActorRole.SPONSOR
        initial = JobStatus.PENDING if is_sponsor else JobStatus.DRAFT
        job = Job(
            id=job_id or str(uuid.uuid4()),
            title=title.strip(),
            sponsor=actor.id if is_sponsor else (sponsor or actor.id),
            agent=agent if agent else (actor.id if actor.role == ActorRole.AGENT else None),
            expires_at=expires_at,
            status=initial,
            created_at=now,
        )
        job.status_history.append(initial, actor=actor.id, notes="Job created", timestamp=now)

        with self._uow_factory() as uow:
            uow.jobs.add(job)

        logger.info(f"Job {job.id} created as {initial.value} by {actor.id}")
        return job
