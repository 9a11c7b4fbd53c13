"""
Use Case: Request Transition

Single entry point for status changes: routes the request to the
workflow of the given entity kind. Returns the updated entity or raises
the error matching the denial.
"""

from datetime import datetime
from typing import Callable

from hirewise.core.entities.actor import Actor
from hirewise.core.errors import ValidationError
from hirewise.core.interfaces.expiry_evaluator import IExpiryEvaluator
from hirewise.core.interfaces.repository import IUnitOfWork
from hirewise.core.interfaces.transition_guard import EntityKind, ITransitionGuard
from hirewise.core.use_cases.update_application_status import UpdateApplicationStatusUseCase
from hirewise.core.use_cases.update_job_status import UpdateJobStatusUseCase
from hirewise.core.use_cases.verify_document import VerifyDocumentUseCase


class RequestTransitionUseCase:
    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        guard: ITransitionGuard,
        expiry_evaluator: IExpiryEvaluator,
    ):
        self._workflows = {
            EntityKind.DOCUMENT: VerifyDocumentUseCase(uow_factory, guard, expiry_evaluator),
            EntityKind.APPLICATION: UpdateApplicationStatusUseCase(uow_factory, guard),
            EntityKind.JOB: UpdateJobStatusUseCase(uow_factory, guard),
        }

    def execute(
        self,
        entity_kind: EntityKind | str,
        entity_id: str,
        requested_status: str,
        actor: Actor,
        payload: dict | None = None,
        now: datetime | None = None,
    ):
        try:
            kind = EntityKind(entity_kind)
        except ValueError as e:
            raise ValidationError(f"Unknown entity kind: {entity_kind}", rule="malformed-payload") from e
        return self._workflows[kind].execute(entity_id, requested_status, actor, payload, now)
