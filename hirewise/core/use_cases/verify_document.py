"""
Use Case: Verification Workflow (Document)

Load → expiry check → guard → mutate status + ledger → persist.

The expiry check runs before any guard. A document whose expiry date
has passed collapses to `expired` (with its own ledger entry) and the
requested transition is not applied.
"""

import logging
from datetime import datetime
from typing import Callable

from hirewise.core.entities.actor import Actor
from hirewise.core.entities.audit import enum_value, utcnow
from hirewise.core.entities.document import Document, DocumentStatus
from hirewise.core.interfaces.expiry_evaluator import IExpiryEvaluator
from hirewise.core.interfaces.repository import IUnitOfWork
from hirewise.core.interfaces.transition_guard import (
    EntityKind,
    ITransitionGuard,
    TransitionContext,
    TransitionPayload,
)
from hirewise.schemas.payloads import parse_transition_payload

logger = logging.getLogger(__name__)

AUTO_EXPIRY_NOTE = "Document automatically marked as expired by system"


def apply_expiry(document: Document, evaluator: IExpiryEvaluator, now: datetime) -> bool:
    """
    Collapses the document to `expired` if its expiry date has passed.

    Returns:
        True if the status changed (and a ledger entry was appended).
    """
    if document.expiry_date is None or document.status == DocumentStatus.EXPIRED:
        return False
    classification = evaluator.classify(document.expiry_date, document.status, now)
    if not classification.is_expired:
        return False
    document.status = DocumentStatus.EXPIRED
    document.history.append(DocumentStatus.EXPIRED, actor=None, notes=AUTO_EXPIRY_NOTE, timestamp=now)
    logger.info(f"Document {document.id} expired on {document.expiry_date.date()}")
    return True


def apply_verification(
    document: Document,
    requested: DocumentStatus,
    actor: Actor,
    payload: TransitionPayload,
    now: datetime,
) -> None:
    previous = document.status
    document.status = requested
    document.history.append(
        requested,
        actor=actor.id,
        notes=payload.notes or f"Status changed from {previous.value} to {requested.value}",
        timestamp=now,
    )

    if requested in (DocumentStatus.VERIFIED, DocumentStatus.REJECTED):
        details = document.verification_details
        details.verified_by = actor.id
        details.verification_date = now
        if requested == DocumentStatus.REJECTED:
            details.rejection_reason = payload.rejection_reason or payload.notes
        elif payload.notes:
            details.verification_notes = payload.notes


class VerifyDocumentUseCase:
    """
    Use Case: moves one document through verification.

    Dependencies come in through the constructor; each call runs inside
    its own unit of work.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        guard: ITransitionGuard,
        expiry_evaluator: IExpiryEvaluator,
    ):
        self._uow_factory = uow_factory
        self._guard = guard
        self._expiry = expiry_evaluator

    def execute(
        self,
        document_id: str,
        requested_status: DocumentStatus | str,
        actor: Actor,
        payload: dict | TransitionPayload | None = None,
        now: datetime | None = None,
    ) -> Document:
        """
        Requests a verification status change.

        Returns:
            The updated document. Its status is `expired` instead of the
            requested one when the expiry check fired first.

        Raises:
            NotFoundError, InvalidTransitionError, PermissionDeniedError,
            ValidationError, ConcurrencyConflictError.
        """
        now = now or utcnow()
        parsed = parse_transition_payload(payload)

        with self._uow_factory() as uow:
            document = uow.documents.get(document_id)

            if apply_expiry(document, self._expiry, now):
                logger.warning(
                    f"Document {document_id} expired before "
                    f"{enum_value(requested_status)} could be applied"
                )
                uow.documents.update(document)
                return document

            decision = self._guard.can_transition(
                EntityKind.DOCUMENT,
                document.status,
                enum_value(requested_status),
                actor.role,
                parsed,
                TransitionContext(is_owner=actor.id == document.owner, now=now),
            )
            if not decision:
                logger.warning(f"Document {document_id}: {decision.rule.value}: {decision.reason}")
                decision.raise_if_denied()

            apply_verification(document, DocumentStatus(enum_value(requested_status)), actor, parsed, now)
            uow.documents.update(document)

        logger.info(f"Document {document_id} -> {document.status.value} by {actor.id}")
        return document
