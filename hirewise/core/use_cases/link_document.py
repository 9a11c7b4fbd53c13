"""
Use Case: Link Document

Attaches a document to an application or a profile. Linking is logged
in the document's history with its status unchanged.
"""

import logging
from datetime import datetime
from typing import Callable

from hirewise.core.entities.actor import Actor
from hirewise.core.entities.audit import utcnow
from hirewise.core.entities.document import Document
from hirewise.core.errors import PermissionDeniedError
from hirewise.core.interfaces.repository import IUnitOfWork

logger = logging.getLogger(__name__)


class LinkDocumentUseCase:
    def __init__(self, uow_factory: Callable[[], IUnitOfWork]):
        self._uow_factory = uow_factory

    def to_application(
        self,
        document_id: str,
        application_id: str,
        actor: Actor,
        now: datetime | None = None,
    ) -> Document:
        with self._uow_factory() as uow:
            document = uow.documents.get(document_id)
            self._check_owner(document, actor)
            application = uow.applications.get(application_id)
            if application.applicant != document.owner:
                raise PermissionDeniedError(
                    "Documents can only be linked to their owner's applications",
                    "not-owner",
                )
            if document.application == application_id:
                logger.debug(f"Document {document_id} already linked to application {application_id}")
                return document

            document.application = application_id
            document.history.append(
                document.status,
                actor=actor.id,
                notes=f"Document linked to application {application_id}",
                timestamp=now or utcnow(),
            )
            uow.documents.update(document)
        return document

    def to_profile(
        self,
        document_id: str,
        profile_id: str,
        actor: Actor,
        now: datetime | None = None,
    ) -> Document:
        with self._uow_factory() as uow:
            document = uow.documents.get(document_id)
            self._check_owner(document, actor)
            if document.profile == profile_id:
                logger.debug(f"Document {document_id} already linked to profile {profile_id}")
                return document

            document.profile = profile_id
            document.history.append(
                document.status,
                actor=actor.id,
                notes=f"Document linked to profile {profile_id}",
                timestamp=now or utcnow(),
            )
            uow.documents.update(document)
        return document

    @staticmethod
    def _check_owner(document: Document, actor: Actor) -> None:
        if document.owner != actor.id and not actor.is_admin:
            raise PermissionDeniedError("Not authorized to link this document", "not-owner")
