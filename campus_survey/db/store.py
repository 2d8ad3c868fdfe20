"""
Storage interface shared by the MongoDB and in-memory document stores.

Handlers only talk to a `DocumentStore`; aggregation pipelines are written
in MongoDB syntax and executed by whichever store is active.
"""

from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

Document = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]


class DocumentStore(Protocol):

    async def connect(self, uri: str) -> bool:
        ...

    async def is_connected(self) -> bool:
        ...

    async def insert(self, collection: str, document: Any) -> str:
        ...

    async def find(
        self,
        collection: str,
        filter: Optional[Document] = None,
        projection: Optional[Dict[str, int]] = None,
        sort: Optional[SortSpec] = None,
        limit: int = 0,
    ) -> List[Document]:
        ...

    async def count(self, collection: str, filter: Optional[Document] = None) -> int:
        ...

    async def aggregate(self, collection: str, pipeline: List[Document]) -> List[Document]:
        ...

    async def close(self) -> None:
        ...
