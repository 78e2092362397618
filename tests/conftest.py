from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from measurestore.core.errors import QueryError, StoreError
from measurestore.main import AppContext, create_app
from measurestore.services.rendering import TableRenderer, load_template

TEMPLATE_PATH = Path(__file__).resolve().parents[1] / "measurestore" / "templates" / "table.html"


class FakeRepository:
    """In-memory stand-in for MongoRepository."""

    def __init__(self) -> None:
        self.documents: list[dict] = []
        self.insert_error: str | None = None
        self.query_error: str | None = None
        self.cursors_open = 0
        self.closed = False

    def insert_one(self, document):
        if self.insert_error:
            raise StoreError(self.insert_error)
        doc = dict(document)
        doc.setdefault("_id", ObjectId())
        self.documents.append(doc)
        return doc["_id"]

    @contextmanager
    def find_all(self):
        if self.query_error:
            raise QueryError(self.query_error)
        self.cursors_open += 1
        try:
            yield iter(list(self.documents))
        finally:
            self.cursors_open -= 1

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def repo() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def renderer() -> TableRenderer:
    return TableRenderer(load_template(TEMPLATE_PATH))


@pytest.fixture
def client(repo, renderer):
    app = create_app(AppContext(repo=repo, renderer=renderer))
    with TestClient(app) as c:
        yield c
