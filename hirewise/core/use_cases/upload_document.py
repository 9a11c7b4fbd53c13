"""
Use Case: Upload Document

Registers an uploaded credential. The file itself already lives in
storage; only its reference arrives here.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable

from hirewise.core.entities.actor import Actor
from hirewise.core.entities.audit import utcnow
from hirewise.core.entities.document import Document
from hirewise.core.interfaces.expiry_evaluator import IExpiryEvaluator
from hirewise.core.interfaces.repository import IUnitOfWork
from hirewise.core.use_cases.verify_document import apply_expiry
from hirewise.schemas.payloads import DocumentUploadIn, parse

logger = logging.getLogger(__name__)


class UploadDocumentUseCase:
    def __init__(self, uow_factory: Callable[[], IUnitOfWork], expiry_evaluator: IExpiryEvaluator):
        self._uow_factory = uow_factory
        self._expiry = expiry_evaluator

    def execute(
        self,
        owner: Actor,
        data: dict | DocumentUploadIn,
        document_id: str | None = None,
        now: datetime | None = None,
    ) -> Document:
        now = now or utcnow()
        upload = parse(DocumentUploadIn, data)

        document = Document.upload(
            id=document_id or str(uuid.uuid4()),
            owner=owner.id,
            doc_type=upload.type,
            file_ref=upload.file_ref,
            expiry_date=upload.expiry_date,
            now=now,
            file_name=upload.file_name,
            file_type=upload.file_type,
            file_size=upload.file_size,
            document_number=upload.document_number,
            issuing_country=upload.issuing_country,
            issue_date=upload.issue_date,
        )
        # Already-expired credentials are recorded as such from the start.
        apply_expiry(document, self._expiry, now)

        with self._uow_factory() as uow:
            uow.documents.add(document)

        logger.info(f"Document {document.id} ({document.type.value}) uploaded by {owner.id}")
        return document
