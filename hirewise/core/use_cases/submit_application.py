"""
Use Case: Submit Application

A job seeker applies to an open job. The application starts in
`submitted` with its first ledger entry, and the job's application
counter moves in the same unit of work.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable

from hirewise.core.entities.actor import Actor, ActorRole
from hirewise.core.entities.application import Application, ApplicationStatus
from hirewise.core.entities.audit import utcnow
from hirewise.core.errors import PermissionDeniedError, ValidationError
from hirewise.core.interfaces.repository import IUnitOfWork

logger = logging.getLogger(__name__)


class SubmitApplicationUseCase:
    def __init__(self, uow_factory: Callable[[], IUnitOfWork]):
        self._uow_factory = uow_factory

    def execute(
        self,
        job_id: str,
        applicant: Actor,
        cover_letter: str | None = None,
        application_id: str | None = None,
        now: datetime | None = None,
    ) -> Application:
        """
        Raises:
            PermissionDeniedError: The actor is not a job seeker.
            NotFoundError: Unknown job.
            ValidationError: Job not open, or an active application exists.
        """
        now = now or utcnow()
        if applicant.role != ActorRole.JOB_SEEKER:
            raise PermissionDeniedError("Only job seekers can apply to jobs", "insufficient-role")

        with self._uow_factory() as uow:
            job = uow.jobs.get(job_id)
            if not job.accepts_applications(now):
                raise ValidationError(
                    f"Job {job_id} is not accepting applications", rule="job-not-open"
                )

            existing = uow.applications.query(job=job_id, applicant=applicant.id)
            if any(a.status != ApplicationStatus.WITHDRAWN for a in existing):
                raise ValidationError(
                    "You have already applied for this job", rule="duplicate-application"
                )

            application = Application.submit(
                id=application_id or str(uuid.uuid4()),
                job=job_id,
                applicant=applicant.id,
                cover_letter=cover_letter,
                now=now,
            )
            uow.applications.add(application)
            job.applications_count += 1
            uow.jobs.update(job)

        logger.info(f"Application {application.id} submitted to job {job_id} by {applicant.id}")
        return application
