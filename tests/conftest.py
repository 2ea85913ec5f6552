import pytest
from fastapi.testclient import TestClient

from string_analyzer.main import create_app
from string_analyzer.store import RecordStore


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def client(store):
    app = create_app(store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_store(store):
    for value in ["racecar", "race car", "hello world", "Noon", "abcdefghij", "abcdefghijk"]:
        store.insert(value)
    return store
