"""
Pytest fixtures for the bookstore query tests.

Unit tests use ``MagicMock`` collections and never touch a server.
Integration tests use a real MongoDB at ``TEST_MONGO_URI`` and are skipped
when nothing answers a ping there.
"""

import os
from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from seed import seed_books

TEST_MONGO_URI = os.getenv("TEST_MONGO_URI", "mongodb://127.0.0.1:27017")
TEST_DATABASE = "plp_bookstore_test"


def make_cursor(docs: List[Dict[str, Any]]) -> MagicMock:
    """Mock cursor whose sort/skip/limit chain back to itself."""
    cursor = MagicMock(name="cursor")
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.__iter__.side_effect = lambda: iter([dict(d) for d in docs])
    return cursor


@pytest.fixture
def mock_collection():
    """A collection mock with canned results for every call the runner makes."""
    collection = MagicMock(name="collection")
    collection.name = "books"
    collection.full_name = "plp_bookstore.books"
    collection.find.return_value = make_cursor([{"title": "Book Title 1", "price": 19.99}])
    collection.update_one.return_value = MagicMock(matched_count=1, modified_count=1)
    collection.delete_one.return_value = MagicMock(deleted_count=1)
    collection.aggregate.side_effect = lambda pipeline, **kwargs: iter([{"_id": "Fiction", "avgPrice": 15.0}])
    collection.create_index.side_effect = lambda keys: "_".join(f"{k}_{d}" for k, d in keys)
    collection.index_information.return_value = {
        "_id_": {"key": [("_id", 1)]},
        "title_1": {"key": [("title", 1)]},
    }
    collection.database.command.return_value = {
        "queryPlanner": {
            "winningPlan": {
                "stage": "FETCH",
                "inputStage": {"stage": "IXSCAN", "indexName": "title_1"},
            },
        },
        "executionStats": {"nReturned": 1, "totalKeysExamined": 1, "totalDocsExamined": 1},
    }
    return collection


@pytest.fixture(scope="session")
def mongo():
    client = MongoClient(TEST_MONGO_URI, serverSelectionTimeoutMS=1000)
    try:
        client.admin.command("ping")
    except PyMongoError:
        client.close()
        pytest.skip(f"MongoDB not reachable at {TEST_MONGO_URI}")
    yield client
    client.drop_database(TEST_DATABASE)
    client.close()


@pytest.fixture
def books(mongo):
    """The seeded ``books`` collection, rebuilt for every test."""
    collection = mongo[TEST_DATABASE]["books"]
    collection.drop()
    seed_books(collection)
    yield collection
    collection.drop()
