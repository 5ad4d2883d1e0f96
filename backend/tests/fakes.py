"""In-memory fakes of the document store and asset uploader ports."""

import itertools
from typing import Any

from catalog_admin.application.interfaces import AssetUploader, DocumentStore
from catalog_admin.domain.entities import Record, SortDirection
from catalog_admin.domain.exceptions import EntityNotFoundError, InvalidAssetError


def _sort_key(value: Any) -> tuple[int, Any]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value))


class FakeDocumentStore(DocumentStore):
    """Dict-backed store that records every call in ``calls``.

    ``fail_with`` makes the next matching operations raise, e.g.
    ``store.fail_with["create"] = PermissionDeniedError()``.
    """

    def __init__(self, seed: dict[str, list[dict[str, Any]]] | None = None):
        self._docs: dict[str, dict[str, dict[str, Any]]] = {}
        self._ids = itertools.count(1)
        self.calls: list[tuple[str, str, Any]] = []
        self.fail_with: dict[str, Exception] = {}
        for collection, documents in (seed or {}).items():
            for document in documents:
                document = dict(document)
                record_id = document.pop("_id", None) or f"doc-{next(self._ids)}"
                self._docs.setdefault(collection, {})[record_id] = document

    def _maybe_fail(self, operation: str) -> None:
        error = self.fail_with.get(operation)
        if error is not None:
            raise error

    def documents(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._docs.get(collection, {})

    def writes(self) -> list[tuple[str, str, Any]]:
        return [c for c in self.calls if c[0] in ("create", "update", "delete")]

    async def list_all(
        self,
        collection: str,
        *,
        order_by: str | None = None,
        direction: SortDirection = SortDirection.DESC,
        filters: dict[str, Any] | None = None,
    ) -> list[Record]:
        self.calls.append(("list_all", collection, filters))
        self._maybe_fail("list_all")
        records = [
            Record(id=record_id, collection=collection, data=dict(data))
            for record_id, data in self.documents(collection).items()
        ]
        if filters:
            records = [
                r for r in records
                if all(name in r.data and r.data[name] == value for name, value in filters.items())
            ]
        if order_by is not None:
            records = [r for r in records if r.data.get(order_by) is not None]
            records.sort(
                key=lambda r: _sort_key(r.data[order_by]),
                reverse=direction is SortDirection.DESC,
            )
        return records

    async def get_by_id(self, collection: str, record_id: str) -> Record | None:
        self.calls.append(("get_by_id", collection, record_id))
        self._maybe_fail("get_by_id")
        data = self.documents(collection).get(record_id)
        if data is None:
            return None
        return Record(id=record_id, collection=collection, data=dict(data))

    async def get_top_by_field(
        self, collection: str, field: str, direction: SortDirection, limit: int
    ) -> list[Record]:
        self.calls.append(("get_top_by_field", collection, field))
        self._maybe_fail("get_top_by_field")
        records = await self.list_all(collection, order_by=field, direction=direction)
        return records[:limit]

    async def create(self, collection: str, data: dict[str, Any]) -> str:
        self.calls.append(("create", collection, dict(data)))
        self._maybe_fail("create")
        record_id = f"doc-{next(self._ids)}"
        self._docs.setdefault(collection, {})[record_id] = dict(data)
        return record_id

    async def update(self, collection: str, record_id: str, partial: dict[str, Any]) -> None:
        self.calls.append(("update", collection, (record_id, dict(partial))))
        self._maybe_fail("update")
        documents = self.documents(collection)
        if record_id not in documents:
            raise EntityNotFoundError(collection, record_id)
        documents[record_id] = {**documents[record_id], **partial}

    async def delete(self, collection: str, record_id: str) -> None:
        self.calls.append(("delete", collection, record_id))
        self._maybe_fail("delete")
        documents = self.documents(collection)
        if record_id not in documents:
            raise EntityNotFoundError(collection, record_id)
        del documents[record_id]


class FakeAssetUploader(AssetUploader):
    """Returns a predictable hosted URL, or raises ``error`` when set."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.uploads: list[tuple[str, str, int]] = []

    async def upload(self, content: bytes, mime_type: str, filename: str = "upload") -> str:
        if not mime_type.startswith("image/"):
            raise InvalidAssetError(f"expected an image, got '{mime_type}'")
        self.uploads.append((filename, mime_type, len(content)))
        if self.error is not None:
            raise self.error
        return f"https://res.cloudinary.com/demo/image/upload/{filename}"
