"""
Entity: Audit Ledger

Append-only trail of status changes attached to a Document, an
Application or a Job. Entries are frozen and the backing sequence is a
tuple: the only way to change a ledger is `append`.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops tzinfo)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_dt(value) -> datetime | None:
    """Parse an ISO timestamp coming back from JSON storage."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    return as_utc(datetime.fromisoformat(str(value).replace("Z", "+00:00")))


def enum_value(value):
    """Plain string for a str-Enum member or a string."""
    return getattr(value, "value", value)


def format_dt(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class AuditEntry:
    """One status change."""
    status: str
    timestamp: datetime
    actor: str | None = None
    notes: str | None = None

    def to_dict(self, actor_key: str = "performedBy") -> dict:
        return {
            "status": self.status,
            "timestamp": format_dt(self.timestamp),
            actor_key: self.actor,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict, actor_key: str = "performedBy") -> "AuditEntry":
        return cls(
            status=data["status"],
            timestamp=parse_dt(data["timestamp"]),
            actor=data.get(actor_key),
            notes=data.get("notes"),
        )


@dataclass
class AuditLedger:
    """Ordered, append-only sequence of AuditEntry."""
    _entries: tuple[AuditEntry, ...] = field(default_factory=tuple)

    def append(
        self,
        status: str,
        actor: str | None = None,
        notes: str | None = None,
        timestamp: datetime | None = None,
    ) -> AuditEntry:
        entry = AuditEntry(
            status=enum_value(status),
            timestamp=timestamp or utcnow(),
            actor=actor,
            notes=notes,
        )
        self._entries = self._entries + (entry,)
        return entry

    @property
    def entries(self) -> tuple[AuditEntry, ...]:
        """Entries in insertion order."""
        return self._entries

    def ordered(self, descending: bool = True) -> list[AuditEntry]:
        """
        Entries sorted by timestamp.

        Descending by default. The sort is stable in both directions, so
        entries sharing a timestamp keep their insertion order.
        """
        return sorted(self._entries, key=lambda e: e.timestamp, reverse=descending)

    def latest(self) -> AuditEntry | None:
        return self._entries[-1] if self._entries else None

    def for_status(self, status: str) -> list[AuditEntry]:
        return [e for e in self._entries if e.status == enum_value(status)]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def to_list(self, actor_key: str = "performedBy") -> list[dict]:
        return [e.to_dict(actor_key) for e in self._entries]

    @classmethod
    def from_list(cls, items: list[dict] | None, actor_key: str = "performedBy") -> "AuditLedger":
        entries = tuple(AuditEntry.from_dict(i, actor_key) for i in (items or []))
        return cls(_entries=entries)
