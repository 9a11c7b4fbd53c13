"""
Pydantic schemas: request payloads accepted by the use cases.

Transport-agnostic: whatever front end receives the request hands the
raw dict here. Malformed input becomes the core's ValidationError;
missing-but-optional fields are left for the transition guard to judge.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from hirewise.core.entities.document import DocumentType
from hirewise.core.errors import ValidationError
from hirewise.core.interfaces.transition_guard import OfferTerms, TransitionPayload

SalaryPeriod = Literal["hourly", "daily", "weekly", "monthly", "yearly"]
AllowedFileType = Literal["image/jpeg", "image/png", "image/jpg", "application/pdf"]


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SalaryIn(_Payload):
    amount: float | None = None
    currency: str | None = None
    period: SalaryPeriod = "monthly"


class OfferIn(_Payload):
    salary: SalaryIn | None = None
    benefits: list[str] = Field(default_factory=list)
    start_date: datetime | None = Field(default=None, alias="startDate")
    expiry_date: datetime | None = Field(default=None, alias="expiryDate")

    def to_domain(self) -> OfferTerms:
        salary = self.salary or SalaryIn()
        return OfferTerms(
            salary_amount=salary.amount,
            salary_currency=salary.currency,
            salary_period=salary.period,
            start_date=self.start_date,
            expiry_date=self.expiry_date,
            benefits=list(self.benefits),
        )


class TransitionPayloadIn(_Payload):
    notes: str | None = None
    rejection_reason: str | None = Field(default=None, alias="rejectionReason")
    offer_details: OfferIn | None = Field(default=None, alias="offerDetails")

    def to_domain(self) -> TransitionPayload:
        return TransitionPayload(
            notes=self.notes,
            rejection_reason=self.rejection_reason,
            offer=self.offer_details.to_domain() if self.offer_details else None,
        )


class InterviewIn(_Payload):
    scheduled_date: datetime = Field(alias="scheduledDate")
    location: str = Field(min_length=1)
    interviewers: list[str] = Field(default_factory=list)
    notes: str | None = None


class FeedbackIn(_Payload):
    comment: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    visibility: Literal["private", "public", "applicant"] = "private"


class DocumentUploadIn(_Payload):
    type: DocumentType
    file_ref: str | None = Field(default=None, alias="fileRef")
    file_name: str | None = Field(default=None, alias="fileName")
    file_type: AllowedFileType | None = Field(default=None, alias="fileType")
    file_size: int | None = Field(default=None, alias="fileSize", ge=0)
    document_number: str | None = Field(default=None, alias="documentNumber")
    issuing_country: str | None = Field(default=None, alias="issuingCountry")
    issue_date: datetime | None = Field(default=None, alias="issueDate")
    expiry_date: datetime | None = Field(default=None, alias="expiryDate")


def parse(schema: type[BaseModel], raw: dict | BaseModel | None):
    """Validates `raw` against `schema`, raising the core ValidationError."""
    if isinstance(raw, schema):
        return raw
    try:
        return schema.model_validate(raw or {})
    except PydanticValidationError as e:
        raise ValidationError(
            f"Malformed {schema.__name__} payload: {e.error_count()} error(s)",
            rule="malformed-payload",
            errors=e.errors(include_url=False, include_context=False),
        ) from e


def parse_transition_payload(raw: dict | TransitionPayload | None) -> TransitionPayload:
    if isinstance(raw, TransitionPayload):
        return raw
    return parse(TransitionPayloadIn, raw).to_domain()
