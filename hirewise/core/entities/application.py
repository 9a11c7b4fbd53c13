"""
Entity: Application

A job seeker's submission to a job posting, moving through review to an
offer or a rejection. Interviews, the offer and feedback are nested
sub-records owned by the application.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from hirewise.core.entities.audit import (
    AuditLedger,
    enum_value,
    format_dt,
    parse_dt,
    utcnow,
)


class ApplicationStatus(str, Enum):
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under-review"
    SHORTLISTED = "shortlisted"
    INTERVIEW = "interview"
    OFFER_PENDING = "offer-pending"
    OFFERED = "offered"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class InterviewStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"
    NO_SHOW = "no-show"


class OfferStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class FeedbackVisibility(str, Enum):
    PRIVATE = "private"
    PUBLIC = "public"
    APPLICANT = "applicant"


@dataclass
class Interview:
    id: str
    scheduled_date: datetime
    location: str
    interviewers: list[str] = field(default_factory=list)
    notes: str | None = None
    status: InterviewStatus = InterviewStatus.SCHEDULED

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "scheduledDate": format_dt(self.scheduled_date),
            "location": self.location,
            "interviewers": list(self.interviewers),
            "notes": self.notes,
            "status": enum_value(self.status),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Interview":
        return cls(
            id=data["id"],
            scheduled_date=parse_dt(data["scheduledDate"]),
            location=data.get("location", ""),
            interviewers=list(data.get("interviewers") or []),
            notes=data.get("notes"),
            status=InterviewStatus(data.get("status") or "scheduled"),
        )


@dataclass
class Salary:
    amount: float
    currency: str
    period: str = "monthly"           # hourly, daily, weekly, monthly, yearly


@dataclass
class OfferDetails:
    salary: Salary
    start_date: datetime
    expiry_date: datetime
    benefits: list[str] = field(default_factory=list)
    status: OfferStatus = OfferStatus.PENDING
    offer_date: datetime = field(default_factory=utcnow)
    accepted_at: datetime | None = None
    rejected_at: datetime | None = None
    rejection_reason: str | None = None

    def to_dict(self) -> dict:
        return {
            "salary": {
                "amount": self.salary.amount,
                "currency": self.salary.currency,
                "period": self.salary.period,
            },
            "benefits": list(self.benefits),
            "startDate": format_dt(self.start_date),
            "expiryDate": format_dt(self.expiry_date),
            "status": enum_value(self.status),
            "offerDate": format_dt(self.offer_date),
            "acceptedAt": format_dt(self.accepted_at),
            "rejectedAt": format_dt(self.rejected_at),
            "rejectionReason": self.rejection_reason,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OfferDetails":
        salary = data.get("salary") or {}
        return cls(
            salary=Salary(
                amount=salary.get("amount"),
                currency=salary.get("currency"),
                period=salary.get("period") or "monthly",
            ),
            benefits=list(data.get("benefits") or []),
            start_date=parse_dt(data.get("startDate")),
            expiry_date=parse_dt(data.get("expiryDate")),
            status=OfferStatus(data.get("status") or "pending"),
            offer_date=parse_dt(data.get("offerDate")) or utcnow(),
            accepted_at=parse_dt(data.get("acceptedAt")),
            rejected_at=parse_dt(data.get("rejectedAt")),
            rejection_reason=data.get("rejectionReason"),
        )


@dataclass(frozen=True)
class Feedback:
    author: str
    comment: str
    rating: int
    visibility: FeedbackVisibility = FeedbackVisibility.PRIVATE
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "from": self.author,
            "comment": self.comment,
            "rating": self.rating,
            "visibility": enum_value(self.visibility),
            "createdAt": format_dt(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Feedback":
        return cls(
            author=data["from"],
            comment=data.get("comment", ""),
            rating=int(data["rating"]),
            visibility=FeedbackVisibility(data.get("visibility") or "private"),
            created_at=parse_dt(data.get("createdAt")) or utcnow(),
        )


@dataclass
class Application:
    """Domain entity: Application."""
    id: str
    job: str
    applicant: str
    status: ApplicationStatus = ApplicationStatus.SUBMITTED
    cover_letter: str | None = None
    status_history: AuditLedger = field(default_factory=AuditLedger)
    interview_details: list[Interview] = field(default_factory=list)
    offer_details: OfferDetails | None = None
    feedback: tuple[Feedback, ...] = field(default_factory=tuple)
    created_at: datetime = field(default_factory=utcnow)
    version: int = 1

    def __post_init__(self):
        self.status = ApplicationStatus(self.status)

    @classmethod
    def submit(
        cls,
        id: str,
        job: str,
        applicant: str,
        cover_letter: str | None = None,
        now: datetime | None = None,
    ) -> "Application":
        """New application in `submitted` status with its first ledger entry."""
        now = now or utcnow()
        app = cls(id=id, job=job, applicant=applicant, cover_letter=cover_letter, created_at=now)
        app.status_history.append(
            ApplicationStatus.SUBMITTED,
            actor=applicant,
            notes="Application submitted",
            timestamp=now,
        )
        return app

    @property
    def has_offer(self) -> bool:
        return self.offer_details is not None

    def get_interview(self, interview_id: str) -> Interview | None:
        for interview in self.interview_details:
            if interview.id == interview_id:
                return interview
        return None

    def add_feedback(self, feedback: Feedback) -> None:
        self.feedback = self.feedback + (feedback,)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "job": self.job,
            "applicant": self.applicant,
            "status": self.status.value,
            "coverLetter": self.cover_letter,
            "statusHistory": self.status_history.to_list("changedBy"),
            "interviewDetails": [i.to_dict() for i in self.interview_details],
            "offerDetails": self.offer_details.to_dict() if self.offer_details else None,
            "feedback": [f.to_dict() for f in self.feedback],
            "createdAt": format_dt(self.created_at),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Application":
        offer = data.get("offerDetails")
        return cls(
            id=data["id"],
            job=data["job"],
            applicant=data["applicant"],
            status=ApplicationStatus(data.get("status") or "submitted"),
            cover_letter=data.get("coverLetter"),
            status_history=AuditLedger.from_list(data.get("statusHistory"), "changedBy"),
            interview_details=[Interview.from_dict(i) for i in data.get("interviewDetails") or []],
            offer_details=OfferDetails.from_dict(offer) if offer else None,
            feedback=tuple(Feedback.from_dict(f) for f in data.get("feedback") or []),
            created_at=parse_dt(data.get("createdAt")) or utcnow(),
            version=int(data.get("version", 1)),
        )
