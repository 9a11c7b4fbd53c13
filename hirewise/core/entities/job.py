"""
Entity: Job

Minimal job posting, only as much as the application lifecycle needs:
its own status machine and the expiry of the posting.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from hirewise.core.entities.audit import AuditLedger, as_utc, format_dt, parse_dt, utcnow


class JobStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    ACTIVE = "active"
    FILLED = "filled"
    CLOSED = "closed"
    REJECTED = "rejected"


@dataclass
class Job:
    """Domain entity: Job."""
    id: str
    title: str
    sponsor: str
    expires_at: datetime
    agent: str | None = None
    status: JobStatus = JobStatus.DRAFT
    applications_count: int = 0
    status_history: AuditLedger = field(default_factory=AuditLedger)
    created_at: datetime = field(default_factory=utcnow)
    version: int = 1

    def __post_init__(self):
        self.status = JobStatus(self.status)
        self.expires_at = as_utc(self.expires_at)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) > self.expires_at

    def accepts_applications(self, now: datetime | None = None) -> bool:
        return self.status == JobStatus.ACTIVE and not self.is_expired(now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "sponsor": self.sponsor,
            "agent": self.agent,
            "status": self.status.value,
            "expiresAt": format_dt(self.expires_at),
            "applicationsCount": self.applications_count,
            "statusHistory": self.status_history.to_list("changedBy"),
            "createdAt": format_dt(self.created_at),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Job":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            sponsor=data["sponsor"],
            agent=data.get("agent"),
            status=JobStatus(data.get("status") or "draft"),
            expires_at=parse_dt(data["expiresAt"]),
            applications_count=int(data.get("applicationsCount", 0)),
            status_history=AuditLedger.from_list(data.get("statusHistory"), "changedBy"),
            created_at=parse_dt(data.get("createdAt")) or utcnow(),
            version=int(data.get("version", 1)),
        )
