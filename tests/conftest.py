"""Общие фикстуры: in-memory подмена коллекций MongoDB, сервисы, TestClient."""
import copy
import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

# Добавляем корневую директорию проекта в путь
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Минимальная стоимость bcrypt, чтобы тесты не тормозили
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from store_api.dependencies import get_product_service, get_user_service  # noqa: E402
from store_api.repositories.products import ProductRepository  # noqa: E402
from store_api.repositories.users import UserRepository  # noqa: E402
from store_api.services.products import ProductService  # noqa: E402
from store_api.services.users import UserService  # noqa: E402


def _matches(document, query):
    return all(document.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, documents):
        self._documents = iter(documents)

    def __aiter__(self):
        return self

    async def __anext__(self):
        try:
            return next(self._documents)
        except StopIteration:
            raise StopAsyncIteration


class FakeCollection:
    """Подмножество API AsyncCollection, которое использует репозиторий."""

    def __init__(self, name):
        self.name = name
        self.documents = {}
        self.unique_fields = []
        self.fail_deletes = False

    def _check_unique(self, document):
        for field in self.unique_fields:
            for other in self.documents.values():
                if other["_id"] != document["_id"] and field in document and other.get(field) == document[field]:
                    raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {field}_1")

    async def create_index(self, keys, unique=False):
        if unique:
            self.unique_fields.extend(field for field, _ in keys)
        return "_".join(f"{field}_{direction}" for field, direction in keys)

    async def insert_one(self, document):
        stored = copy.deepcopy(document)
        stored.setdefault("_id", ObjectId())
        self._check_unique(stored)
        self.documents[stored["_id"]] = stored
        return SimpleNamespace(inserted_id=stored["_id"])

    def find(self, query=None):
        query = query or {}
        return FakeCursor([copy.deepcopy(d) for d in self.documents.values() if _matches(d, query)])

    async def find_one(self, query):
        for document in self.documents.values():
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    async def find_one_and_update(self, query, update, return_document=None):
        for document in self.documents.values():
            if _matches(document, query):
                updated = {**document, **update["$set"]}
                self._check_unique(updated)
                self.documents[document["_id"]] = updated
                return copy.deepcopy(updated)
        return None

    async def delete_one(self, query):
        if self.fail_deletes:
            return SimpleNamespace(deleted_count=0)
        for key, document in list(self.documents.items()):
            if _matches(document, query):
                del self.documents[key]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    name = "test"

    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


@pytest.fixture
def fake_db():
    database = FakeDatabase()
    # То же, что создаёт db.ensure_indexes при старте
    database["users"].unique_fields.append("email")
    return database


@pytest.fixture
def user_service(fake_db):
    return UserService(UserRepository(fake_db))


@pytest.fixture
def product_service(fake_db):
    return ProductService(ProductRepository(fake_db))


@pytest.fixture
def client(user_service, product_service):
    from fastapi.testclient import TestClient

    from store_api.main import app

    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_product_service] = lambda: product_service
    # Без контекстного менеджера startup-события не запускаются, MongoDB не нужна
    yield TestClient(app)
    app.dependency_overrides.clear()
