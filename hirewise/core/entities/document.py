"""
Entity: Document

An identity, education, professional or business credential uploaded
by a user and verified by staff. Pure model: no framework or database
dependency.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from hirewise.core.entities.audit import (
    AuditLedger,
    as_utc,
    enum_value,
    format_dt,
    parse_dt,
    utcnow,
)


class DocumentType(str, Enum):
    # Identity
    PASSPORT = "passport"
    NATIONAL_ID = "nationalID"
    DRIVER_LICENSE = "driverLicense"
    BIRTH_CERTIFICATE = "birthCertificate"
    # Education
    DIPLOMA = "diploma"
    DEGREE = "degree"
    CERTIFICATE = "certificate"
    # Professional
    EMPLOYMENT_LETTER = "employmentLetter"
    REFERENCE_LETTER = "referenceLetter"
    WORK_PERMIT = "workPermit"
    VISA = "visa"
    # Business (agents / sponsors)
    BUSINESS_LICENSE = "businessLicense"
    REGISTRATION_CERTIFICATE = "registrationCertificate"
    TAX_CERTIFICATE = "taxCertificate"
    # Proof of address
    ADDRESS = "address"
    OTHER = "other"


class DocumentCategory(str, Enum):
    IDENTITY = "identity"
    EDUCATION = "education"
    PROFESSIONAL = "professional"
    BUSINESS = "business"
    ADDRESS = "address"
    OTHER = "other"


class DocumentStatus(str, Enum):
    UPLOADED = "uploaded"
    PENDING = "pending"
    UNDER_REVIEW = "underReview"
    VERIFIED = "verified"
    REJECTED = "rejected"
    EXPIRED = "expired"


class VerificationMethod(str, Enum):
    MANUAL = "manual"
    AUTOMATED = "automated"
    HYBRID = "hybrid"


TYPE_CATEGORY: dict[DocumentType, DocumentCategory] = {
    DocumentType.PASSPORT: DocumentCategory.IDENTITY,
    DocumentType.NATIONAL_ID: DocumentCategory.IDENTITY,
    DocumentType.DRIVER_LICENSE: DocumentCategory.IDENTITY,
    DocumentType.BIRTH_CERTIFICATE: DocumentCategory.IDENTITY,
    DocumentType.DIPLOMA: DocumentCategory.EDUCATION,
    DocumentType.DEGREE: DocumentCategory.EDUCATION,
    DocumentType.CERTIFICATE: DocumentCategory.EDUCATION,
    DocumentType.EMPLOYMENT_LETTER: DocumentCategory.PROFESSIONAL,
    DocumentType.REFERENCE_LETTER: DocumentCategory.PROFESSIONAL,
    DocumentType.WORK_PERMIT: DocumentCategory.PROFESSIONAL,
    DocumentType.VISA: DocumentCategory.PROFESSIONAL,
    DocumentType.BUSINESS_LICENSE: DocumentCategory.BUSINESS,
    DocumentType.REGISTRATION_CERTIFICATE: DocumentCategory.BUSINESS,
    DocumentType.TAX_CERTIFICATE: DocumentCategory.BUSINESS,
    DocumentType.ADDRESS: DocumentCategory.ADDRESS,
    DocumentType.OTHER: DocumentCategory.OTHER,
}


def category_for(doc_type: DocumentType) -> DocumentCategory:
    return TYPE_CATEGORY.get(DocumentType(doc_type), DocumentCategory.OTHER)


@dataclass
class AutomatedScoreDetails:
    """Scores from automated checks, each 0–100."""
    score: float | None = None
    authenticity: float | None = None
    completeness: float | None = None
    readability: float | None = None

    def __post_init__(self):
        for name in ("score", "authenticity", "completeness", "readability"):
            value = getattr(self, name)
            if value is not None and not 0 <= value <= 100:
                raise ValueError(f"{name} must be between 0 and 100, got {value}")


@dataclass
class VerificationDetails:
    verified_by: str | None = None
    verification_date: datetime | None = None
    rejection_reason: str | None = None
    verification_notes: str | None = None
    verification_method: VerificationMethod = VerificationMethod.MANUAL
    automated_scores: AutomatedScoreDetails | None = None

    def to_dict(self) -> dict:
        scores = self.automated_scores
        return {
            "verifiedBy": self.verified_by,
            "verificationDate": format_dt(self.verification_date),
            "rejectionReason": self.rejection_reason,
            "verificationNotes": self.verification_notes,
            "verificationMethod": enum_value(self.verification_method),
            "automatedScoreDetails": None if scores is None else {
                "score": scores.score,
                "authenticityScore": scores.authenticity,
                "completenessScore": scores.completeness,
                "readabilityScore": scores.readability,
            },
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "VerificationDetails":
        data = data or {}
        scores = data.get("automatedScoreDetails")
        return cls(
            verified_by=data.get("verifiedBy"),
            verification_date=parse_dt(data.get("verificationDate")),
            rejection_reason=data.get("rejectionReason"),
            verification_notes=data.get("verificationNotes"),
            verification_method=VerificationMethod(data.get("verificationMethod") or "manual"),
            automated_scores=None if not scores else AutomatedScoreDetails(
                score=scores.get("score"),
                authenticity=scores.get("authenticityScore"),
                completeness=scores.get("completenessScore"),
                readability=scores.get("readabilityScore"),
            ),
        )


@dataclass
class DocumentMetadata:
    is_critical: bool = False
    requires_translation: bool = False
    translation_provided: bool = False
    tags: list[str] = field(default_factory=list)


@dataclass
class Document:
    """Domain entity: Document."""
    id: str
    owner: str
    type: DocumentType = DocumentType.OTHER
    status: DocumentStatus = DocumentStatus.UPLOADED
    file_ref: str | None = None              # storage key / URL
    file_name: str | None = None
    file_type: str | None = None             # MIME type
    file_size: int | None = None
    document_number: str | None = None
    issuing_country: str | None = None
    issue_date: datetime | None = None
    expiry_date: datetime | None = None
    expiry_notified: bool = False
    expiry_notification_date: datetime | None = None
    verification_details: VerificationDetails = field(default_factory=VerificationDetails)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    application: str | None = None
    profile: str | None = None
    history: AuditLedger = field(default_factory=AuditLedger)
    upload_date: datetime = field(default_factory=utcnow)
    version: int = 1

    def __post_init__(self):
        self.type = DocumentType(self.type)
        self.status = DocumentStatus(self.status)
        self.expiry_date = as_utc(self.expiry_date)
        self.issue_date = as_utc(self.issue_date)

    @property
    def category(self) -> DocumentCategory:
        return category_for(self.type)

    @classmethod
    def upload(
        cls,
        id: str,
        owner: str,
        doc_type: DocumentType,
        file_ref: str | None = None,
        expiry_date: datetime | None = None,
        now: datetime | None = None,
        **fields,
    ) -> "Document":
        """New document in `uploaded` status with its first ledger entry."""
        now = now or utcnow()
        doc = cls(
            id=id,
            owner=owner,
            type=doc_type,
            file_ref=file_ref,
            expiry_date=expiry_date,
            upload_date=now,
            **fields,
        )
        doc.history.append(
            DocumentStatus.UPLOADED,
            actor=owner,
            notes="Document uploaded by user",
            timestamp=now,
        )
        return doc

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "owner": self.owner,
            "type": self.type.value,
            "category": self.category.value,
            "status": self.status.value,
            "fileRef": self.file_ref,
            "fileName": self.file_name,
            "fileType": self.file_type,
            "fileSize": self.file_size,
            "documentNumber": self.document_number,
            "issuingCountry": self.issuing_country,
            "issueDate": format_dt(self.issue_date),
            "expiryDate": format_dt(self.expiry_date),
            "expiryNotified": self.expiry_notified,
            "expiryNotificationDate": format_dt(self.expiry_notification_date),
            "verificationDetails": self.verification_details.to_dict(),
            "metadata": {
                "isCritical": self.metadata.is_critical,
                "requiresTranslation": self.metadata.requires_translation,
                "translationProvided": self.metadata.translation_provided,
                "tags": list(self.metadata.tags),
            },
            "application": self.application,
            "profile": self.profile,
            "history": self.history.to_list("performedBy"),
            "uploadDate": format_dt(self.upload_date),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Document":
        meta = data.get("metadata") or {}
        return cls(
            id=data["id"],
            owner=data["owner"],
            type=DocumentType(data.get("type") or "other"),
            status=DocumentStatus(data.get("status") or "uploaded"),
            file_ref=data.get("fileRef"),
            file_name=data.get("fileName"),
            file_type=data.get("fileType"),
            file_size=data.get("fileSize"),
            document_number=data.get("documentNumber"),
            issuing_country=data.get("issuingCountry"),
            issue_date=parse_dt(data.get("issueDate")),
            expiry_date=parse_dt(data.get("expiryDate")),
            expiry_notified=bool(data.get("expiryNotified", False)),
            expiry_notification_date=parse_dt(data.get("expiryNotificationDate")),
            verification_details=VerificationDetails.from_dict(data.get("verificationDetails")),
            metadata=DocumentMetadata(
                is_critical=bool(meta.get("isCritical", False)),
                requires_translation=bool(meta.get("requiresTranslation", False)),
                translation_provided=bool(meta.get("translationProvided", False)),
                tags=list(meta.get("tags") or []),
            ),
            application=data.get("application"),
            profile=data.get("profile"),
            history=AuditLedger.from_list(data.get("history"), "performedBy"),
            upload_date=parse_dt(data.get("uploadDate")) or utcnow(),
            version=int(data.get("version", 1)),
        )
