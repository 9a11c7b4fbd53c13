"""
Transition tables: fixed, compiled-in lifecycle data.

One adjacency table and one role-permission table per entity kind.
Directed edges, no self-loops. A status with an empty edge set is
terminal. Tables are plain data so they can be tested on their own.
"""

from hirewise.core.entities.actor import ActorRole
from hirewise.core.entities.application import ApplicationStatus as A
from hirewise.core.entities.document import DocumentStatus as D
from hirewise.core.entities.job import JobStatus as J


# ── Application ─────────────────────────────────────────────────────
APPLICATION_TRANSITIONS: dict[A, frozenset[A]] = {
    A.SUBMITTED:     frozenset({A.UNDER_REVIEW, A.REJECTED, A.WITHDRAWN}),
    A.UNDER_REVIEW:  frozenset({A.SHORTLISTED, A.REJECTED, A.WITHDRAWN}),
    A.SHORTLISTED:   frozenset({A.INTERVIEW, A.REJECTED, A.WITHDRAWN}),
    A.INTERVIEW:     frozenset({A.OFFER_PENDING, A.REJECTED, A.WITHDRAWN}),
    A.OFFER_PENDING: frozenset({A.OFFERED, A.REJECTED, A.WITHDRAWN}),
    A.OFFERED:       frozenset({A.ACCEPTED, A.REJECTED, A.WITHDRAWN}),
    A.ACCEPTED:      frozenset({A.WITHDRAWN}),
    A.REJECTED:      frozenset(),
    A.WITHDRAWN:     frozenset(),
}

# None = whatever the adjacency table allows.
APPLICATION_ROLE_PERMISSIONS: dict[ActorRole, frozenset[A] | None] = {
    ActorRole.JOB_SEEKER: frozenset({A.WITHDRAWN}),
    ActorRole.SPONSOR: frozenset({
        A.UNDER_REVIEW, A.SHORTLISTED, A.INTERVIEW,
        A.OFFER_PENDING, A.OFFERED, A.REJECTED,
    }),
    ActorRole.AGENT: frozenset({A.UNDER_REVIEW, A.SHORTLISTED, A.REJECTED}),
    ActorRole.ADMIN: None,
}


# ── Job ─────────────────────────────────────────────────────────────
JOB_TRANSITIONS: dict[J, frozenset[J]] = {
    J.DRAFT:    frozenset({J.PENDING, J.CLOSED}),
    J.PENDING:  frozenset({J.ACTIVE, J.REJECTED, J.CLOSED}),
    J.ACTIVE:   frozenset({J.FILLED, J.CLOSED}),
    J.FILLED:   frozenset({J.CLOSED}),
    J.REJECTED: frozenset({J.PENDING, J.CLOSED}),
    J.CLOSED:   frozenset(),
}

JOB_ADMIN_ONLY: frozenset[J] = frozenset({J.ACTIVE, J.REJECTED})

# Sponsors and agents run their own postings; job seekers never touch jobs.
JOB_ROLE_PERMISSIONS: dict[ActorRole, frozenset[J] | None] = {
    ActorRole.JOB_SEEKER: frozenset(),
    ActorRole.SPONSOR: frozenset({J.PENDING, J.FILLED, J.CLOSED}),
    ActorRole.AGENT: frozenset({J.PENDING, J.FILLED, J.CLOSED}),
    ActorRole.ADMIN: None,
}


# ── Document ────────────────────────────────────────────────────────
# `expired` is never requested: the expiry check sets it.
DOCUMENT_TRANSITIONS: dict[D, frozenset[D]] = {
    D.UPLOADED:     frozenset({D.PENDING, D.UNDER_REVIEW}),
    D.PENDING:      frozenset({D.UNDER_REVIEW, D.VERIFIED, D.REJECTED}),
    D.UNDER_REVIEW: frozenset({D.VERIFIED, D.REJECTED}),
    D.VERIFIED:     frozenset(),
    D.REJECTED:     frozenset(),
    D.EXPIRED:      frozenset(),
}

DOCUMENT_VERIFIER_ROLES: frozenset[ActorRole] = frozenset({ActorRole.ADMIN, ActorRole.AGENT})

# Owners may only submit their own upload for review.
DOCUMENT_OWNER_STATUSES: frozenset[D] = frozenset({D.PENDING})


def is_terminal(table: dict, status) -> bool:
    return not table.get(status)
