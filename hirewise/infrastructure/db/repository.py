"""
SQLAlchemy Repositories + Unit of Work.

Handles:
  - Loading / storing Documents, Applications and Jobs
  - Filtering on the indexed columns
  - Optimistic concurrency: UPDATE ... WHERE id = :id AND version = :read
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session, sessionmaker

from hirewise.core.entities.audit import enum_value
from hirewise.core.errors import ConcurrencyConflictError, NotFoundError
from hirewise.core.interfaces.repository import IRepository, IUnitOfWork
from hirewise.infrastructure.db.database import get_session_factory
from hirewise.infrastructure.db.models import ApplicationRecord, DocumentRecord, JobRecord

logger = logging.getLogger(__name__)


class SqlAlchemyRepository(IRepository):
    """Repository over one record table, bound to the unit of work's session."""

    record_cls = None
    order_column: str = "id"

    def __init__(self, session: Session):
        self._session = session

    @property
    def _filterable(self) -> set[str]:
        return {c.name for c in self.record_cls.__table__.columns if c.name != "raw_json"}

    def get(self, entity_id: str):
        record = self._session.get(self.record_cls, entity_id)
        if record is None:
            raise NotFoundError(self.entity_kind, entity_id)
        return record.to_entity()

    def add(self, entity) -> None:
        self._session.add(self.record_cls.from_entity(entity))
        self._session.flush()
        logger.debug(f"Added {self.entity_kind} {entity.id}")

    def update(self, entity) -> None:
        expected = entity.version
        new_version = expected + 1
        stmt = (
            update(self.record_cls)
            .where(self.record_cls.id == entity.id, self.record_cls.version == expected)
            .values(
                version=new_version,
                raw_json={**entity.to_dict(), "version": new_version},
                **self.record_cls.columns_for(entity),
            )
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        if result.rowcount == 0:
            exists = self._session.execute(
                select(self.record_cls.id).where(self.record_cls.id == entity.id)
            ).first()
            if exists is None:
                raise NotFoundError(self.entity_kind, entity.id)
            logger.warning(f"Version conflict on {self.entity_kind} {entity.id} (read v{expected})")
            raise ConcurrencyConflictError(self.entity_kind, entity.id, expected)

        # Drop the cached row so a later get() in this unit reads the new version
        self._session.expire_all()
        entity.version = new_version
        logger.info(f"Saved {self.entity_kind} {entity.id} v{new_version}")

    def query(self, **filters) -> list:
        unknown = set(filters) - self._filterable
        if unknown:
            raise ValueError(f"Cannot filter {self.entity_kind} on: {', '.join(sorted(unknown))}")
        stmt = select(self.record_cls)
        if filters:
            stmt = stmt.filter_by(**{k: enum_value(v) for k, v in filters.items()})
        stmt = stmt.order_by(getattr(self.record_cls, self.order_column), self.record_cls.id)
        return [r.to_entity() for r in self._session.scalars(stmt)]


class DocumentRepository(SqlAlchemyRepository):
    entity_kind = "document"
    record_cls = DocumentRecord
    order_column = "upload_date"


class ApplicationRepository(SqlAlchemyRepository):
    entity_kind = "application"
    record_cls = ApplicationRecord
    order_column = "created_at"


class JobRepository(SqlAlchemyRepository):
    entity_kind = "job"
    record_cls = JobRecord
    order_column = "created_at"


class SqlAlchemyUnitOfWork(IUnitOfWork):
    """
    One session, one transaction.

    Usage:
        with SqlAlchemyUnitOfWork(factory) as uow:
            doc = uow.documents.get(doc_id)
            ...
            uow.documents.update(doc)
        # committed here, or rolled back if the block raised
    """

    def __init__(self, session_factory: sessionmaker | None = None):
        self._session_factory = session_factory or get_session_factory()
        self._session: Session | None = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._session = self._session_factory()
        self.documents = DocumentRepository(self._session)
        self.applications = ApplicationRepository(self._session)
        self.jobs = JobRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self._session.close()
            self._session = None

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
