"""Unit tests for the transition tables and the table-driven guard.

Pure computation: no store, no clock beyond the injected `now`.
"""

from datetime import datetime, timedelta, timezone

import pytest

from hirewise.core.entities.actor import Actor, ActorRole
from hirewise.core.entities.application import (
    Application,
    ApplicationStatus,
    OfferDetails,
    OfferStatus,
    Salary,
)
from hirewise.core.entities.document import DocumentStatus
from hirewise.core.entities.job import JobStatus
from hirewise.core.errors import (
    InvalidTransitionError,
    PermissionDeniedError,
    ValidationError,
)
from hirewise.core.interfaces.transition_guard import (
    DenialRule,
    EntityKind,
    GuardDecision,
    OfferTerms,
    TransitionContext,
    TransitionPayload,
)
from hirewise.infrastructure.rules.transition_guard import TableTransitionGuard
from hirewise.infrastructure.rules.transition_tables import (
    APPLICATION_ROLE_PERMISSIONS,
    APPLICATION_TRANSITIONS,
    DOCUMENT_TRANSITIONS,
    JOB_TRANSITIONS,
    is_terminal,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _make_offer(
    amount: float | None = 5000,
    currency: str | None = "USD",
    start: datetime | None = NOW + timedelta(days=30),
    expiry: datetime | None = NOW + timedelta(days=45),
) -> OfferTerms:
    return OfferTerms(
        salary_amount=amount,
        salary_currency=currency,
        start_date=start,
        expiry_date=expiry,
    )


def _make_offered_application(
    applicant: str = "seeker-1",
    offer_status: OfferStatus = OfferStatus.PENDING,
    expiry: datetime = NOW + timedelta(days=10),
) -> Application:
    app = Application(id="app-1", job="job-1", applicant=applicant, status=ApplicationStatus.OFFERED)
    app.offer_details = OfferDetails(
        salary=Salary(amount=5000, currency="USD"),
        start_date=NOW + timedelta(days=5),
        expiry_date=expiry,
        status=offer_status,
        offer_date=NOW - timedelta(days=1),
    )
    return app


def _all_pairs(table: dict):
    for current in table:
        for requested in table:
            yield current, requested


# ===================================================================
# Tables as data
# ===================================================================

class TestTables:
    def test_no_self_loops(self) -> None:
        for table in (APPLICATION_TRANSITIONS, JOB_TRANSITIONS, DOCUMENT_TRANSITIONS):
            for status, targets in table.items():
                assert status not in targets

    def test_every_status_has_a_row(self) -> None:
        assert set(APPLICATION_TRANSITIONS) == set(ApplicationStatus)
        assert set(JOB_TRANSITIONS) == set(JobStatus)
        assert set(DOCUMENT_TRANSITIONS) == set(DocumentStatus)

    def test_terminal_statuses(self) -> None:
        assert is_terminal(APPLICATION_TRANSITIONS, ApplicationStatus.REJECTED)
        assert is_terminal(APPLICATION_TRANSITIONS, ApplicationStatus.WITHDRAWN)
        assert is_terminal(JOB_TRANSITIONS, JobStatus.CLOSED)
        assert not is_terminal(APPLICATION_TRANSITIONS, ApplicationStatus.ACCEPTED)

    def test_role_tables_only_name_reachable_statuses(self) -> None:
        reachable = set().union(*APPLICATION_TRANSITIONS.values())
        for permitted in APPLICATION_ROLE_PERMISSIONS.values():
            if permitted is not None:
                assert permitted <= reachable


# ===================================================================
# Application adjacency and roles
# ===================================================================

class TestApplicationGuard:
    def test_every_adjacent_pair_allowed_for_admin(self) -> None:
        guard = TableTransitionGuard()
        context = TransitionContext(offer=_make_offered_application().offer_details, now=NOW)
        for current, targets in APPLICATION_TRANSITIONS.items():
            for requested in targets:
                payload = TransitionPayload(
                    offer=_make_offer() if requested == ApplicationStatus.OFFERED else None,
                )
                decision = guard.can_transition(
                    EntityKind.APPLICATION, current, requested, ActorRole.ADMIN,
                    payload, context,
                )
                assert decision.allowed, (current, requested, decision.reason)

    def test_every_non_adjacent_pair_denied_for_every_role(self) -> None:
        guard = TableTransitionGuard()
        for current, requested in _all_pairs(APPLICATION_TRANSITIONS):
            if requested in APPLICATION_TRANSITIONS[current]:
                continue
            for role in ActorRole:
                decision = guard.can_transition(EntityKind.APPLICATION, current, requested, role)
                assert not decision.allowed
                assert decision.rule == DenialRule.INVALID_TRANSITION

    def test_job_seeker_may_only_withdraw(self) -> None:
        guard = TableTransitionGuard()
        denied = guard.can_transition(
            EntityKind.APPLICATION, "submitted", "rejected", ActorRole.JOB_SEEKER,
        )
        assert denied.rule == DenialRule.INSUFFICIENT_ROLE
        with pytest.raises(PermissionDeniedError):
            denied.raise_if_denied()

        allowed = guard.can_transition(
            EntityKind.APPLICATION, "submitted", "withdrawn", ActorRole.JOB_SEEKER,
            context=TransitionContext(is_owner=True),
        )
        assert allowed.allowed

    def test_agent_cannot_schedule_interview_status(self) -> None:
        decision = TableTransitionGuard().can_transition(
            EntityKind.APPLICATION, "shortlisted", "interview", ActorRole.AGENT,
        )
        assert decision.rule == DenialRule.INSUFFICIENT_ROLE

    def test_sponsor_cannot_accept_on_behalf_of_applicant(self) -> None:
        decision = TableTransitionGuard().can_transition(
            EntityKind.APPLICATION, "offered", "accepted", ActorRole.SPONSOR,
        )
        assert decision.rule == DenialRule.INSUFFICIENT_ROLE

    def test_adjacency_checked_before_role(self) -> None:
        decision = TableTransitionGuard().can_transition(
            EntityKind.APPLICATION, "submitted", "offered", ActorRole.JOB_SEEKER,
        )
        assert decision.rule == DenialRule.INVALID_TRANSITION

    @pytest.mark.parametrize("role, context", [
        (ActorRole.JOB_SEEKER, TransitionContext(is_job_sponsor=True, is_job_agent=True)),
        (ActorRole.SPONSOR, TransitionContext(is_owner=True, is_job_agent=True)),
        (ActorRole.AGENT, TransitionContext(is_owner=True, is_job_sponsor=True)),
    ])
    def test_actor_must_own_the_application_or_its_job(self, role, context) -> None:
        requested = "withdrawn" if role == ActorRole.JOB_SEEKER else "rejected"
        decision = TableTransitionGuard().can_transition(
            EntityKind.APPLICATION, "submitted", requested, role, context=context,
        )
        assert decision.rule == DenialRule.INSUFFICIENT_ROLE
        with pytest.raises(PermissionDeniedError):
            decision.raise_if_denied()

    def test_admin_needs_no_ownership(self) -> None:
        assert TableTransitionGuard().can_transition(
            EntityKind.APPLICATION, "submitted", "rejected", ActorRole.ADMIN,
        ).allowed

    def test_unknown_role_is_denied(self) -> None:
        decision = TableTransitionGuard().can_transition(
            EntityKind.APPLICATION, "submitted", "withdrawn", "recruiter",
        )
        assert decision.rule == DenialRule.INSUFFICIENT_ROLE

    def test_accept_requires_an_open_offer(self) -> None:
        guard = TableTransitionGuard()
        expired = _make_offered_application(expiry=NOW - timedelta(days=10))
        decision = guard.can_transition(
            EntityKind.APPLICATION, "offered", "accepted", ActorRole.ADMIN,
            context=TransitionContext(offer=expired.offer_details, now=NOW),
        )
        assert decision.rule == DenialRule.INVALID_TRANSITION

        missing = guard.can_transition(
            EntityKind.APPLICATION, "offered", "accepted", ActorRole.ADMIN,
            context=TransitionContext(now=NOW),
        )
        assert missing.rule == DenialRule.MISSING_PAYLOAD

    def test_unknown_status_is_invalid_transition(self) -> None:
        decision = TableTransitionGuard().can_transition(
            EntityKind.APPLICATION, "submitted", "hired", ActorRole.ADMIN,
        )
        assert decision.rule == DenialRule.INVALID_TRANSITION


# ===================================================================
# Payload requirements
# ===================================================================

class TestOfferPayload:
    def _check(self, payload, context=None) -> GuardDecision:
        return TableTransitionGuard().can_transition(
            EntityKind.APPLICATION, "offer-pending", "offered", ActorRole.SPONSOR,
            payload, context or TransitionContext(is_job_sponsor=True, now=NOW),
        )

    def test_complete_offer_allowed(self) -> None:
        assert self._check(TransitionPayload(offer=_make_offer())).allowed

    def test_missing_offer_denied(self) -> None:
        decision = self._check(TransitionPayload())
        assert decision.rule == DenialRule.MISSING_PAYLOAD
        with pytest.raises(ValidationError) as exc:
            decision.raise_if_denied()
        assert exc.value.rule == "missing-payload"

    @pytest.mark.parametrize("offer", [
        _make_offer(amount=None),
        _make_offer(amount=0),
        _make_offer(currency=""),
        _make_offer(start=None),
        _make_offer(expiry=None),
    ])
    def test_incomplete_offer_denied(self, offer) -> None:
        assert self._check(TransitionPayload(offer=offer)).rule == DenialRule.MISSING_PAYLOAD

    def test_expiry_before_start_denied(self) -> None:
        offer = _make_offer(start=NOW + timedelta(days=20), expiry=NOW + timedelta(days=10))
        decision = self._check(TransitionPayload(offer=offer))
        assert decision.rule == DenialRule.INVALID_DATE_ORDER

    def test_expiry_equal_to_start_denied(self) -> None:
        day = NOW + timedelta(days=20)
        decision = self._check(TransitionPayload(offer=_make_offer(start=day, expiry=day)))
        assert decision.rule == DenialRule.INVALID_DATE_ORDER

    def test_expiry_in_past_denied(self) -> None:
        offer = _make_offer(start=NOW - timedelta(days=20), expiry=NOW - timedelta(days=1))
        decision = self._check(TransitionPayload(offer=offer))
        assert decision.rule == DenialRule.INVALID_DATE_ORDER
        with pytest.raises(ValidationError):
            decision.raise_if_denied()

    def test_reject_with_offer_requires_reason(self) -> None:
        guard = TableTransitionGuard()
        context = TransitionContext(has_offer=True, is_job_sponsor=True, now=NOW)
        denied = guard.can_transition(
            EntityKind.APPLICATION, "offered", "rejected", ActorRole.SPONSOR,
            TransitionPayload(rejection_reason="   "), context,
        )
        assert denied.rule == DenialRule.MISSING_PAYLOAD

        allowed = guard.can_transition(
            EntityKind.APPLICATION, "offered", "rejected", ActorRole.SPONSOR,
            TransitionPayload(rejection_reason="Position cancelled"), context,
        )
        assert allowed.allowed

    def test_reject_without_offer_needs_no_reason(self) -> None:
        decision = TableTransitionGuard().can_transition(
            EntityKind.APPLICATION, "submitted", "rejected", ActorRole.AGENT,
            context=TransitionContext(is_job_agent=True),
        )
        assert decision.allowed


# ===================================================================
# Job and document rules
# ===================================================================

class TestJobGuard:
    def test_active_is_admin_only(self) -> None:
        guard = TableTransitionGuard()
        assert guard.can_transition(EntityKind.JOB, "pending", "active", ActorRole.ADMIN).allowed
        denied = guard.can_transition(EntityKind.JOB, "pending", "active", ActorRole.SPONSOR)
        assert denied.rule == DenialRule.INSUFFICIENT_ROLE

    def test_rejected_is_admin_only(self) -> None:
        denied = TableTransitionGuard().can_transition(
            EntityKind.JOB, "pending", "rejected", ActorRole.AGENT,
        )
        assert denied.rule == DenialRule.INSUFFICIENT_ROLE

    def test_sponsor_closes_own_posting(self) -> None:
        assert TableTransitionGuard().can_transition(
            EntityKind.JOB, "active", "closed", ActorRole.SPONSOR,
        ).allowed

    def test_closed_is_terminal(self) -> None:
        decision = TableTransitionGuard().can_transition(
            EntityKind.JOB, "closed", "pending", ActorRole.ADMIN,
        )
        assert decision.rule == DenialRule.INVALID_TRANSITION
        with pytest.raises(InvalidTransitionError):
            decision.raise_if_denied()


class TestDocumentGuard:
    @pytest.mark.parametrize("current", ["pending", "underReview"])
    @pytest.mark.parametrize("requested", ["verified", "rejected"])
    @pytest.mark.parametrize("role", [ActorRole.ADMIN, ActorRole.AGENT])
    def test_verifier_decides(self, current, requested, role) -> None:
        assert TableTransitionGuard().can_transition(
            EntityKind.DOCUMENT, current, requested, role,
        ).allowed

    def test_owner_cannot_verify_own_document(self) -> None:
        decision = TableTransitionGuard().can_transition(
            EntityKind.DOCUMENT, "pending", "verified", ActorRole.JOB_SEEKER,
            context=TransitionContext(is_owner=True),
        )
        assert decision.rule == DenialRule.INSUFFICIENT_ROLE

    def test_owner_submits_upload_for_review(self) -> None:
        guard = TableTransitionGuard()
        assert guard.can_transition(
            EntityKind.DOCUMENT, "uploaded", "pending", ActorRole.JOB_SEEKER,
            context=TransitionContext(is_owner=True),
        ).allowed
        assert not guard.can_transition(
            EntityKind.DOCUMENT, "uploaded", "pending", ActorRole.JOB_SEEKER,
            context=TransitionContext(is_owner=False),
        ).allowed

    def test_verified_document_is_final(self) -> None:
        decision = TableTransitionGuard().can_transition(
            EntityKind.DOCUMENT, "verified", "rejected", ActorRole.ADMIN,
        )
        assert decision.rule == DenialRule.INVALID_TRANSITION


# ===================================================================
# Offer response
# ===================================================================

class TestRespondToOffer:
    def test_applicant_accepts_pending_offer(self) -> None:
        decision = TableTransitionGuard().can_respond_to_offer(
            _make_offered_application(), Actor("seeker-1", ActorRole.JOB_SEEKER), True, NOW,
        )
        assert decision.allowed

    def test_other_user_denied(self) -> None:
        decision = TableTransitionGuard().can_respond_to_offer(
            _make_offered_application(), Actor("seeker-2", ActorRole.JOB_SEEKER), True, NOW,
        )
        assert decision.rule == DenialRule.INSUFFICIENT_ROLE

    def test_expired_offer_cannot_be_accepted(self) -> None:
        app = _make_offered_application(expiry=NOW - timedelta(hours=1))
        actor = Actor("seeker-1", ActorRole.JOB_SEEKER)
        guard = TableTransitionGuard()
        assert guard.can_respond_to_offer(app, actor, True, NOW).rule == DenialRule.INVALID_TRANSITION
        # Declining is still possible
        assert guard.can_respond_to_offer(app, actor, False, NOW).allowed

    def test_already_answered_offer_denied(self) -> None:
        app = _make_offered_application(offer_status=OfferStatus.ACCEPTED)
        decision = TableTransitionGuard().can_respond_to_offer(
            app, Actor("seeker-1", ActorRole.JOB_SEEKER), False, NOW,
        )
        assert decision.rule == DenialRule.INVALID_TRANSITION

    def test_not_offered_status_denied(self) -> None:
        app = Application(id="a", job="j", applicant="seeker-1", status=ApplicationStatus.INTERVIEW)
        decision = TableTransitionGuard().can_respond_to_offer(
            app, Actor("seeker-1", ActorRole.JOB_SEEKER), True, NOW,
        )
        assert decision.rule == DenialRule.INVALID_TRANSITION
