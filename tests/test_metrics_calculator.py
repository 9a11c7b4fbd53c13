"""Unit tests for trust score, document stats and the verification journey."""

from datetime import datetime, timedelta, timezone

import pytest

from hirewise.core.entities.application import Application, ApplicationStatus
from hirewise.core.entities.document import Document, DocumentStatus, DocumentType
from hirewise.core.entities.policy import JourneyWeights, TrustWeights
from hirewise.core.errors import ConfigurationError
from hirewise.infrastructure.rules.metrics_calculator import VerificationMetricsCalculator

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _make_document(
    doc_type: DocumentType = DocumentType.PASSPORT,
    status: DocumentStatus = DocumentStatus.VERIFIED,
    expiry_in_days: int | None = None,
    file_ref: str | None = None,
    verified: bool = False,
    doc_id: str = "doc-1",
) -> Document:
    doc = Document(
        id=doc_id,
        owner="seeker-1",
        type=doc_type,
        status=status,
        file_ref=file_ref,
        expiry_date=NOW + timedelta(days=expiry_in_days) if expiry_in_days is not None else None,
    )
    if verified:
        doc.verification_details.verification_date = NOW - timedelta(days=1)
    return doc


# ===================================================================
# Single-document trust score
# ===================================================================

class TestDocumentTrustScore:
    def test_bare_document_scores_zero(self) -> None:
        doc = _make_document(doc_type=DocumentType.OTHER, status=DocumentStatus.UPLOADED)
        assert VerificationMetricsCalculator().document_trust_score(doc, NOW) == 0

    def test_fully_verified_document_scores_hundred(self) -> None:
        doc = _make_document(expiry_in_days=365, file_ref="s3://bucket/p.pdf", verified=True)
        assert VerificationMetricsCalculator().document_trust_score(doc, NOW) == 100

    def test_past_expiry_earns_nothing(self) -> None:
        doc = _make_document(status=DocumentStatus.EXPIRED, expiry_in_days=-1)
        # only the category point
        assert VerificationMetricsCalculator().document_trust_score(doc, NOW) == 10

    def test_cap_applies_to_custom_weights(self) -> None:
        weights = TrustWeights(verified=90, verification_date=90, cap=100)
        calc = VerificationMetricsCalculator(trust_weights=weights)
        doc = _make_document(verified=True)
        assert calc.document_trust_score(doc, NOW) == 100

    @pytest.mark.parametrize("status", list(DocumentStatus))
    def test_bounded_for_every_status(self, status) -> None:
        doc = _make_document(status=status, expiry_in_days=10, file_ref="f", verified=True)
        assert 0 <= VerificationMetricsCalculator().document_trust_score(doc, NOW) <= 100


# ===================================================================
# Aggregate stats
# ===================================================================

class TestDocumentStats:
    def test_empty_collection(self) -> None:
        stats = VerificationMetricsCalculator().document_stats([], NOW)
        assert stats.total == 0
        assert stats.completion_rate == 0
        assert stats.trust_score == 0

    def test_counts_and_rates(self) -> None:
        docs = [
            _make_document(doc_id="1", status=DocumentStatus.VERIFIED, expiry_in_days=10),
            _make_document(doc_id="2", status=DocumentStatus.VERIFIED, doc_type=DocumentType.DIPLOMA),
            _make_document(doc_id="3", status=DocumentStatus.PENDING),
            _make_document(doc_id="4", status=DocumentStatus.REJECTED),
            _make_document(doc_id="5", status=DocumentStatus.EXPIRED),
            _make_document(doc_id="6", status=DocumentStatus.UNDER_REVIEW),
            _make_document(doc_id="7", status=DocumentStatus.UPLOADED),
            _make_document(doc_id="8", status=DocumentStatus.VERIFIED, expiry_in_days=90),
        ]
        stats = VerificationMetricsCalculator().document_stats(docs, NOW)
        assert stats.total == 8
        assert stats.verified == 3
        assert stats.expired == 1
        assert stats.under_review == 1
        assert stats.expiring_soon == 1
        # 3/8 = 37.5 -> 38, (3-1)/8 = 25
        assert stats.completion_rate == 38
        assert stats.trust_score == 25
        assert stats.by_category == {"identity": 7, "education": 1}
        assert stats.to_dict()["underReview"] == 1

    def test_trust_score_floors_at_zero(self) -> None:
        docs = [
            _make_document(doc_id="1", status=DocumentStatus.EXPIRED),
            _make_document(doc_id="2", status=DocumentStatus.EXPIRED),
            _make_document(doc_id="3", status=DocumentStatus.VERIFIED),
        ]
        assert VerificationMetricsCalculator().document_stats(docs, NOW).trust_score == 0

    def test_rounds_half_up(self) -> None:
        docs = [_make_document(doc_id=str(i), status=DocumentStatus.PENDING) for i in range(8)]
        docs[0].status = DocumentStatus.VERIFIED
        # 1/8 = 12.5
        assert VerificationMetricsCalculator().document_stats(docs, NOW).completion_rate == 13


# ===================================================================
# Verification journey
# ===================================================================

class TestVerificationJourney:
    def test_two_of_four_categories(self) -> None:
        docs = [
            _make_document(doc_id="1", doc_type=DocumentType.PASSPORT),
            _make_document(doc_id="2", doc_type=DocumentType.ADDRESS),
            _make_document(doc_id="3", doc_type=DocumentType.OTHER),
            _make_document(doc_id="4", doc_type=DocumentType.DIPLOMA, status=DocumentStatus.PENDING),
        ]
        journey = VerificationMetricsCalculator().verification_journey(docs)
        assert journey.completed == 2
        assert journey.total == 4
        assert journey.score == 70
        assert journey.kyc_verified is True

    def test_unverified_documents_do_not_count(self) -> None:
        docs = [_make_document(status=DocumentStatus.UNDER_REVIEW)]
        journey = VerificationMetricsCalculator().verification_journey(docs)
        assert journey.score == 0
        assert journey.kyc_verified is False

    def test_custom_weights(self) -> None:
        calc = VerificationMetricsCalculator(journey_weights=JourneyWeights({"identity": 60, "business": 40}))
        journey = calc.verification_journey([_make_document()])
        assert journey.total == 2
        assert journey.score == 60

    def test_weights_over_hundred_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            JourneyWeights({"identity": 80, "address": 30})

    def test_unknown_category_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            JourneyWeights({"hobbies": 10})


class TestApplicationStats:
    def test_counts_per_status(self) -> None:
        apps = [
            Application(id="1", job="j", applicant="a", status=ApplicationStatus.SUBMITTED),
            Application(id="2", job="j", applicant="b", status=ApplicationStatus.SUBMITTED),
            Application(id="3", job="j", applicant="c", status=ApplicationStatus.OFFERED),
        ]
        stats = VerificationMetricsCalculator().application_stats(apps)
        assert stats.total == 3
        assert stats.by_status == {"submitted": 2, "offered": 1}
        assert stats.to_dict() == {"total": 3, "submitted": 2, "offered": 1}
