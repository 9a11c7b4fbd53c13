"""
Entity: Actor

Whoever requests a status change. Identity and role come from the
session layer, which is outside this package.
"""

from dataclasses import dataclass
from enum import Enum


class ActorRole(str, Enum):
    JOB_SEEKER = "jobSeeker"
    SPONSOR = "sponsor"
    AGENT = "agent"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    id: str
    role: ActorRole

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN
