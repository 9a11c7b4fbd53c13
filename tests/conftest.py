"""Shared fixtures: an in-memory unit of work and the default rule engines."""

import pytest

from hirewise.core.entities.application import Application
from hirewise.core.entities.audit import enum_value
from hirewise.core.entities.document import Document
from hirewise.core.entities.job import Job
from hirewise.core.errors import ConcurrencyConflictError, NotFoundError
from hirewise.core.interfaces.repository import IRepository, IUnitOfWork
from hirewise.infrastructure.rules.expiry_evaluator import CalendarExpiryEvaluator
from hirewise.infrastructure.rules.metrics_calculator import VerificationMetricsCalculator
from hirewise.infrastructure.rules.transition_guard import TableTransitionGuard


class InMemoryStore:
    """Committed state, entities kept serialized so every read is a fresh copy."""

    def __init__(self):
        self.tables: dict[str, dict[str, dict]] = {
            "document": {},
            "application": {},
            "job": {},
        }
        self.commits = 0


class InMemoryRepository(IRepository):
    def __init__(self, entity_kind: str, entity_cls, store: InMemoryStore, staged: dict):
        self.entity_kind = entity_kind
        self._entity_cls = entity_cls
        self._committed = store.tables[entity_kind]
        self._staged = staged

    def _current(self, entity_id: str) -> dict | None:
        if entity_id in self._staged:
            return self._staged[entity_id]
        return self._committed.get(entity_id)

    def get(self, entity_id: str):
        data = self._current(entity_id)
        if data is None:
            raise NotFoundError(self.entity_kind, entity_id)
        return self._entity_cls.from_dict(data)

    def add(self, entity) -> None:
        self._staged[entity.id] = entity.to_dict()

    def update(self, entity) -> None:
        current = self._current(entity.id)
        if current is None:
            raise NotFoundError(self.entity_kind, entity.id)
        if current["version"] != entity.version:
            raise ConcurrencyConflictError(self.entity_kind, entity.id, entity.version)
        entity.version += 1
        self._staged[entity.id] = entity.to_dict()

    def query(self, **filters) -> list:
        merged = {**self._committed, **self._staged}
        entities = [self._entity_cls.from_dict(d) for d in merged.values()]
        return [
            e for e in entities
            if all(enum_value(getattr(e, k)) == enum_value(v) for k, v in filters.items())
        ]


class InMemoryUnitOfWork(IUnitOfWork):
    def __init__(self, store: InMemoryStore):
        self._store = store
        self._staged: dict[str, dict] = {}

    def __enter__(self) -> "InMemoryUnitOfWork":
        self._staged = {"document": {}, "application": {}, "job": {}}
        self.documents = InMemoryRepository("document", Document, self._store, self._staged["document"])
        self.applications = InMemoryRepository(
            "application", Application, self._store, self._staged["application"]
        )
        self.jobs = InMemoryRepository("job", Job, self._store, self._staged["job"])
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    def commit(self) -> None:
        for kind, rows in self._staged.items():
            self._store.tables[kind].update(rows)
            rows.clear()
        self._store.commits += 1

    def rollback(self) -> None:
        for rows in self._staged.values():
            rows.clear()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow_factory(store):
    return lambda: InMemoryUnitOfWork(store)


@pytest.fixture
def guard() -> TableTransitionGuard:
    return TableTransitionGuard()


@pytest.fixture
def evaluator() -> CalendarExpiryEvaluator:
    return CalendarExpiryEvaluator()


@pytest.fixture
def calculator(evaluator) -> VerificationMetricsCalculator:
    return VerificationMetricsCalculator(expiry_evaluator=evaluator)
