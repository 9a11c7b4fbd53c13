"""Use Case: append reviewer feedback to an application."""

import logging
from datetime import datetime
from typing import Callable

from hirewise.core.entities.actor import Actor, ActorRole
from hirewise.core.entities.application import Application, Feedback, FeedbackVisibility
from hirewise.core.entities.audit import utcnow
from hirewise.core.errors import PermissionDeniedError
from hirewise.core.interfaces.repository import IUnitOfWork
from hirewise.schemas.payloads import FeedbackIn, parse

logger = logging.getLogger(__name__)

REVIEWER_ROLES = frozenset({ActorRole.ADMIN, ActorRole.SPONSOR, ActorRole.AGENT})


class AddFeedbackUseCase:
    def __init__(self, uow_factory: Callable[[], IUnitOfWork]):
        self._uow_factory = uow_factory

    def execute(
        self,
        application_id: str,
        actor: Actor,
        data: dict | FeedbackIn,
        now: datetime | None = None,
    ) -> Application:
        if actor.role not in REVIEWER_ROLES:
            raise PermissionDeniedError("Not authorized to add feedback", "insufficient-role")
        request = parse(FeedbackIn, data)

        with self._uow_factory() as uow:
            application = uow.applications.get(application_id)
            application.add_feedback(
                Feedback(
                    author=actor.id,
                    comment=request.comment,
                    rating=request.rating,
                    visibility=FeedbackVisibility(request.visibility),
                    created_at=now or utcnow(),
                )
            )
            uow.applications.update(application)

        logger.info(f"Feedback added to application {application_id} by {actor.id}")
        return application
