"""
Database Models: SQLAlchemy.

Tables:
  - documents: credentials under verification
  - applications: job applications with their sub-records
  - jobs: job postings

Each row keeps the columns that queries filter on, an integer `version`
for optimistic concurrency, and the full entity as JSON in `raw_json`.
"""

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase

from hirewise.core.entities.application import Application
from hirewise.core.entities.document import Document
from hirewise.core.entities.job import Job


class Base(DeclarativeBase):
    pass


class DocumentRecord(Base):
    """One row per uploaded document."""
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True)
    owner = Column(String(64), nullable=False, index=True)
    type = Column(String(40), nullable=False)
    category = Column(String(20), nullable=False, index=True)
    status = Column(String(20), nullable=False, index=True)
    expiry_date = Column(DateTime(timezone=True), nullable=True, index=True)
    expiry_notified = Column(Boolean, default=False)
    application = Column(String(36), nullable=True, index=True)
    profile = Column(String(36), nullable=True)
    upload_date = Column(DateTime(timezone=True), nullable=False)
    version = Column(Integer, nullable=False, default=1)

    raw_json = Column(JSON, default=dict)

    def __repr__(self):
        return f"<Document {self.id} [{self.status}] v{self.version}>"

    @staticmethod
    def columns_for(doc: Document) -> dict:
        return {
            "owner": doc.owner,
            "type": doc.type.value,
            "category": doc.category.value,
            "status": doc.status.value,
            "expiry_date": doc.expiry_date,
            "expiry_notified": doc.expiry_notified,
            "application": doc.application,
            "profile": doc.profile,
            "upload_date": doc.upload_date,
        }

    @classmethod
    def from_entity(cls, doc: Document) -> "DocumentRecord":
        return cls(id=doc.id, version=doc.version, raw_json=doc.to_dict(), **cls.columns_for(doc))

    def to_entity(self) -> Document:
        return Document.from_dict({**self.raw_json, "version": self.version})


class ApplicationRecord(Base):
    """One row per application."""
    __tablename__ = "applications"

    id = Column(String(36), primary_key=True)
    job = Column(String(36), nullable=False, index=True)
    applicant = Column(String(64), nullable=False, index=True)
    status = Column(String(20), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    version = Column(Integer, nullable=False, default=1)

    raw_json = Column(JSON, default=dict)

    def __repr__(self):
        return f"<Application {self.id} [{self.status}] v{self.version}>"

    @staticmethod
    def columns_for(app: Application) -> dict:
        return {
            "job": app.job,
            "applicant": app.applicant,
            "status": app.status.value,
            "created_at": app.created_at,
        }

    @classmethod
    def from_entity(cls, app: Application) -> "ApplicationRecord":
        return cls(id=app.id, version=app.version, raw_json=app.to_dict(), **cls.columns_for(app))

    def to_entity(self) -> Application:
        return Application.from_dict({**self.raw_json, "version": self.version})


class JobRecord(Base):
    """One row per job posting."""
    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True)
    sponsor = Column(String(64), nullable=False, index=True)
    agent = Column(String(64), nullable=True, index=True)
    status = Column(String(20), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    version = Column(Integer, nullable=False, default=1)

    raw_json = Column(JSON, default=dict)

    def __repr__(self):
        return f"<Job {self.id} [{self.status}] v{self.version}>"

    @staticmethod
    def columns_for(job: Job) -> dict:
        return {
            "sponsor": job.sponsor,
            "agent": job.agent,
            "status": job.status.value,
            "expires_at": job.expires_at,
            "created_at": job.created_at,
        }

    @classmethod
    def from_entity(cls, job: Job) -> "JobRecord":
        return cls(id=job.id, version=job.version, raw_json=job.to_dict(), **cls.columns_for(job))

    def to_entity(self) -> Job:
        return Job.from_dict({**self.raw_json, "version": self.version})
