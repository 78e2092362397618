"""MongoDB document store client."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ..core.errors import QueryError, StartupError, StoreError

logger = logging.getLogger(__name__)


class MongoRepository:
    """Insert-one / find-all access to a single MongoDB collection."""

    def __init__(
        self,
        uri: str,
        database: str,
        collection: str,
        timeout_ms: int = 5000,
    ) -> None:
        self._uri = uri
        self._database = database
        self._collection_name = collection
        self._timeout_ms = timeout_ms
        self._client: Optional[MongoClient] = None
        self._collection: Optional[Collection] = None

    def connect(self) -> None:
        """Open the client and verify the server answers a ping."""
        try:
            self._client = MongoClient(self._uri, serverSelectionTimeoutMS=self._timeout_ms)
            self._client.admin.command("ping")
        except PyMongoError as exc:
            raise StartupError(f"Error connecting to mongo: {exc}") from exc

        self._collection = self._client[self._database][self._collection_name]
        logger.info(
            "Connected to MongoDB (database=%s collection=%s)",
            self._database,
            self._collection_name,
        )

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            raise RuntimeError("MongoRepository is not connected")
        return self._collection

    def insert_one(self, document: Mapping[str, Any]) -> Any:
        """Insert ``document`` and return the id MongoDB assigned to it."""
        try:
            result = self.collection.insert_one(document)
        except (PyMongoError, BSONError, OverflowError, RecursionError) as exc:
            raise StoreError(str(exc)) from exc
        return result.inserted_id

    @contextmanager
    def find_all(self) -> Iterator[Iterator[Mapping[str, Any]]]:
        """Yield an iterator over every stored document in natural order.

        The cursor is closed when the ``with`` block exits, however it exits.
        """
        try:
            cursor = self.collection.find({})
        except PyMongoError as exc:
            raise QueryError(str(exc)) from exc
        try:
            yield _iterate(cursor)
        finally:
            cursor.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            self._collection = None


def _iterate(cursor) -> Iterator[Mapping[str, Any]]:
    try:
        for doc in cursor:
            yield doc
    except (PyMongoError, BSONError) as exc:
        raise QueryError(str(exc)) from exc
