"""
In-memory document store for tests and local development.

Runs the subset of the MongoDB aggregation language the API uses
(`$match`, `$unwind`, `$group`, `$sort`, `$limit`, `$project`) in
application code, following the server's semantics for missing fields,
empty arrays and non-numeric values.
"""

import copy
import uuid
from typing import Any, Dict, Iterable, List, Optional

from campus_survey.core.errors import InfrastructureError
from campus_survey.db.collections import COLLECTION_SCHEMAS, prepare_document
from campus_survey.db.store import Document, SortSpec

_MISSING = object()


def _get_path(doc: Document, path: str) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _evaluate(doc: Document, expression: Any) -> Any:
    """Resolve a `"$field.path"` reference, or return a literal as is."""
    if isinstance(expression, str) and expression.startswith("$"):
        value = _get_path(doc, expression[1:])
        return None if value is _MISSING else value
    return expression


def _matches(doc: Document, filter: Optional[Document]) -> bool:
    for path, expected in (filter or {}).items():
        value = _get_path(doc, path)
        if value is _MISSING:
            value = None
        if isinstance(value, list) and expected in value:
            continue
        if value != expected:
            return False
    return True


def _sort_key(value: Any):
    # Missing and null sort before everything else
    if value is _MISSING or value is None:
        return (0, 0)
    return (1, value)


def _sort(docs: List[Document], spec: Iterable[tuple]) -> List[Document]:
    result = list(docs)
    for path, direction in reversed(list(spec)):
        result.sort(key=lambda d: _sort_key(_get_path(d, path)), reverse=direction < 0)
    return result


def _project(doc: Document, projection: Optional[Dict[str, int]]) -> Document:
    if not projection:
        return doc
    include_id = projection.get("_id", 1)
    fields = [name for name, flag in projection.items() if name != "_id" and flag]
    if not fields:
        # exclusion projection
        excluded = {name for name, flag in projection.items() if not flag}
        return {k: v for k, v in doc.items() if k not in excluded}
    projected = {}
    if include_id and "_id" in doc:
        projected["_id"] = doc["_id"]
    for name in fields:
        if name in doc:
            projected[name] = doc[name]
    return projected


def _unwind(docs: List[Document], path: str) -> List[Document]:
    field = path.lstrip("$")
    result = []
    for doc in docs:
        value = _get_path(doc, field)
        if value is _MISSING or value is None or value == []:
            continue
        if not isinstance(value, list):
            result.append(doc)
            continue
        for item in value:
            row = dict(doc)
            row[field] = item
            result.append(row)
    return result


def _group_key(key: Any) -> Any:
    # Numbers of different types group together, booleans stay apart
    try:
        hash(key)
    except TypeError:
        return ("unhashable", repr(key))
    return (isinstance(key, bool), key)


def _group(docs: List[Document], spec: Document) -> List[Document]:
    key_expr = spec["_id"]
    accumulators = {name: acc for name, acc in spec.items() if name != "_id"}

    groups: Dict[Any, List[Document]] = {}
    keys: Dict[Any, Any] = {}
    for doc in docs:
        key = _evaluate(doc, key_expr)
        hashable = _group_key(key)
        if hashable not in groups:
            groups[hashable] = []
            keys[hashable] = key
        groups[hashable].append(doc)

    result = []
    for hashable, members in groups.items():
        row: Document = {"_id": keys[hashable]}
        for name, acc in accumulators.items():
            (op, expression), = acc.items()
            values = [_evaluate(doc, expression) for doc in members]
            numbers = [v for v in values if _is_number(v)]
            if op == "$sum":
                row[name] = sum(numbers)
            elif op == "$avg":
                row[name] = sum(numbers) / len(numbers) if numbers else None
            else:
                raise InfrastructureError(f"Unsupported accumulator: {op}")
        result.append(row)
    return result


class InMemoryDocumentStore:
    """Simple in-memory document store for development and tests."""

    def __init__(self):
        self.collections: Dict[str, List[Document]] = {name: [] for name in COLLECTION_SCHEMAS}
        self.connected = True

    async def connect(self, uri: str = "memory://") -> bool:
        self.connected = True
        return True

    async def is_connected(self) -> bool:
        return self.connected

    def _documents(self, collection: str) -> List[Document]:
        if not self.connected:
            raise InfrastructureError("Database is not connected")
        return self.collections.setdefault(collection, [])

    async def insert(self, collection: str, document: Any) -> str:
        doc = prepare_document(collection, document)
        docs = self._documents(collection)
        doc["_id"] = uuid.uuid4().hex[:24]
        docs.append(copy.deepcopy(doc))
        return doc["_id"]

    async def find(
        self,
        collection: str,
        filter: Optional[Document] = None,
        projection: Optional[Dict[str, int]] = None,
        sort: Optional[SortSpec] = None,
        limit: int = 0,
    ) -> List[Document]:
        docs = [d for d in self._documents(collection) if _matches(d, filter)]
        if sort:
            docs = _sort(docs, sort)
        if limit:
            docs = docs[:limit]
        return [copy.deepcopy(_project(d, projection)) for d in docs]

    async def count(self, collection: str, filter: Optional[Document] = None) -> int:
        return sum(1 for d in self._documents(collection) if _matches(d, filter))

    async def aggregate(self, collection: str, pipeline: List[Document]) -> List[Document]:
        docs = [copy.deepcopy(d) for d in self._documents(collection)]
        for stage in pipeline:
            (name, spec), = stage.items()
            if name == "$match":
                docs = [d for d in docs if _matches(d, spec)]
            elif name == "$unwind":
                docs = _unwind(docs, spec)
            elif name == "$group":
                docs = _group(docs, spec)
            elif name == "$sort":
                docs = _sort(docs, spec.items())
            elif name == "$limit":
                docs = docs[:spec]
            elif name == "$project":
                docs = [_project(d, spec) for d in docs]
            else:
                raise InfrastructureError(f"Unsupported pipeline stage: {name}")
        return docs

    async def close(self) -> None:
        self.connected = False

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        for docs in self.collections.values():
            docs.clear()
