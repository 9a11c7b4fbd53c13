"""
Contract: Repository / Unit of Work

The store offers create, read and update-by-id plus query-by-filter.
Updates are conditional on the entity's `version`: a write is accepted
only if the stored version still equals the one that was read.
"""

from abc import ABC, abstractmethod


class IRepository(ABC):
    """
    Port: Repository

    One per entity kind. Entities are Document, Application or Job.
    """

    entity_kind: str = ""

    @abstractmethod
    def get(self, entity_id: str):
        """
        Loads an entity.

        Raises:
            NotFoundError: No entity with that id.
        """
        ...

    @abstractmethod
    def add(self, entity) -> None:
        """Stores a new entity (version 1)."""
        ...

    @abstractmethod
    def update(self, entity) -> None:
        """
        Persists a modified entity.

        The stored version must equal `entity.version`; on success the
        entity's version is incremented in place.

        Raises:
            ConcurrencyConflictError: The stored version moved on.
            NotFoundError: The entity disappeared.
        """
        ...

    @abstractmethod
    def query(self, **filters) -> list:
        """
        Entities whose indexed fields equal the given filters.

        Args:
            filters: Field name → value (e.g. owner="u1", status="verified").
        """
        ...


class IUnitOfWork(ABC):
    """
    Port: Unit of Work

    Transactional scope over the three repositories. Used as a context
    manager: commits when the block exits cleanly, rolls back when it
    raises. Writes made inside one unit become visible together or not
    at all.
    """

    documents: IRepository
    applications: IRepository
    jobs: IRepository

    @abstractmethod
    def __enter__(self) -> "IUnitOfWork":
        ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None:
        ...

    @abstractmethod
    def commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        ...
