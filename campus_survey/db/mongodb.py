from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from fastapi import FastAPI, Request
from bson import ObjectId
from pymongo.errors import PyMongoError
from typing import Any, Dict, List, Optional
import logging
import certifi

from campus_survey.core.config import Settings
from campus_survey.core.errors import InfrastructureError
from campus_survey.db.collections import FEEDBACK, SURVEYS, prepare_document
from campus_survey.db.memory import InMemoryDocumentStore
from campus_survey.db.store import Document, DocumentStore, SortSpec


logger = logging.getLogger(__name__)


def _stringify_id(doc: Document) -> Document:
    if isinstance(doc.get("_id"), ObjectId):
        doc["_id"] = str(doc["_id"])
    return doc


class MongoDocumentStore:
    """Document store backed by a MongoDB server through motor."""

    def __init__(
        self,
        db_name: str = "campus-survey",
        timeout_ms: int = 5000,
        tls: bool = False,
    ):
        self.db_name = db_name
        self.timeout_ms = timeout_ms
        self.tls = tls
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self, uri: str) -> bool:
        options: Dict[str, Any] = {
            "serverSelectionTimeoutMS": self.timeout_ms,
            "maxPoolSize": 10,
            "tz_aware": True,
        }
        if self.tls:
            options["tlsCAFile"] = certifi.where()

        try:
            self.client = AsyncIOMotorClient(uri, **options)
            # connection test
            await self.client.admin.command('ping')
            self.db = self.client.get_default_database(self.db_name)
            logger.info(f"Connected to MongoDB successfully! Database: {self.db.name}")
            return True

        except Exception as e:
            logger.error(f"MongoDB connection error: {e}", exc_info=True)
            if self.client is not None:
                self.client.close()
            self.client = None
            self.db = None
            return False

    async def is_connected(self) -> bool:
        if self.client is None:
            return False
        try:
            await self.client.admin.command('ping')
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    def _collection(self, collection: str):
        if self.db is None:
            raise InfrastructureError("Database is not connected")
        return self.db[collection]

    async def insert(self, collection: str, document: Any) -> str:
        doc = prepare_document(collection, document)
        try:
            result = await self._collection(collection).insert_one(doc)
        except PyMongoError as e:
            raise InfrastructureError(str(e)) from e
        return str(result.inserted_id)

    async def find(
        self,
        collection: str,
        filter: Optional[Document] = None,
        projection: Optional[Dict[str, int]] = None,
        sort: Optional[SortSpec] = None,
        limit: int = 0,
    ) -> List[Document]:
        try:
            cursor = self._collection(collection).find(filter or {}, projection)
            if sort:
                cursor = cursor.sort(list(sort))
            if limit:
                cursor = cursor.limit(limit)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise InfrastructureError(str(e)) from e
        return [_stringify_id(doc) for doc in docs]

    async def count(self, collection: str, filter: Optional[Document] = None) -> int:
        try:
            return await self._collection(collection).count_documents(filter or {})
        except PyMongoError as e:
            raise InfrastructureError(str(e)) from e

    async def aggregate(self, collection: str, pipeline: List[Document]) -> List[Document]:
        try:
            cursor = self._collection(collection).aggregate(pipeline)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise InfrastructureError(str(e)) from e
        return [_stringify_id(doc) for doc in docs]

    async def create_indexes(self) -> None:
        if self.db is None:
            return
        try:
            await self.db[FEEDBACK].create_index([("timestamp", -1)])
            await self.db[SURVEYS].create_index([("contactForInterview", 1)])
            await self.db[SURVEYS].create_index([("department", 1)])
            logger.info("MongoDB indexes created.")
        except PyMongoError as e:
            logger.error(f"Failed to create indexes: {e}")

    async def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB disconnected")
        self.client = None
        self.db = None


# Store creation at startup
async def init_store(settings: Settings) -> DocumentStore:
    if settings.USE_IN_MEMORY_STORE:
        logger.warning("Using in-memory document store; data is lost on restart.")
        return InMemoryDocumentStore()

    store = MongoDocumentStore(
        db_name=settings.MONGODB_DB_NAME,
        timeout_ms=settings.MONGODB_TIMEOUT_MS,
        tls=settings.MONGODB_TLS,
    )
    # A failed connection leaves the store disconnected; /api/health reports it
    await store.connect(settings.MONGODB_URI)
    await store.create_indexes()
    return store


async def close_store(app: FastAPI):
    store = getattr(app.state, 'store', None)
    if store is not None:
        await store.close()


# Store injected into the route handlers
async def get_store(request: Request) -> DocumentStore:
    return request.app.state.store
