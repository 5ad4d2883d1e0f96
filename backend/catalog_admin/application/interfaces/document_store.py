"""Abstract document store interface (port) shared by every catalog screen."""

from abc import ABC, abstractmethod
from typing import Any

from catalog_admin.domain.entities import Record, SortDirection


class DocumentStore(ABC):
    """Port for collection-scoped document persistence.

    Every call is independent: there are no transactions spanning calls, and
    multi-step workflows accept the resulting eventual consistency.
    """

    @abstractmethod
    async def list_all(
        self,
        collection: str,
        *,
        order_by: str | None = None,
        direction: SortDirection = SortDirection.DESC,
        filters: dict[str, Any] | None = None,
    ) -> list[Record]:
        """Return every matching document, optionally ordered by a data field.

        Documents lacking ``order_by`` are left out when ordering. An empty
        collection yields an empty list, never an error.
        """
        ...

    @abstractmethod
    async def get_by_id(self, collection: str, record_id: str) -> Record | None:
        """Retrieve a single document by its internal id."""
        ...

    @abstractmethod
    async def get_top_by_field(
        self,
        collection: str,
        field: str,
        direction: SortDirection,
        limit: int,
    ) -> list[Record]:
        """Return the first ``limit`` documents ordered by ``field``."""
        ...

    @abstractmethod
    async def create(self, collection: str, data: dict[str, Any]) -> str:
        """Persist a new document and return its generated id."""
        ...

    @abstractmethod
    async def update(self, collection: str, record_id: str, partial: dict[str, Any]) -> None:
        """Merge ``partial`` into an existing document; other fields are kept."""
        ...

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> None:
        """Delete a document. Raises EntityNotFoundError if it is already gone."""
        ...
