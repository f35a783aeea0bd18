import pytest
from fastapi.testclient import TestClient

from src.services.storage import InMemoryStorage, get_storage
from src.services.translation import TranslationService, get_translation_service


@pytest.fixture
def storage():
    return InMemoryStorage(seed=False)


@pytest.fixture
def seeded_storage():
    return InMemoryStorage(seed=True)


@pytest.fixture
def client(seeded_storage):
    from src.main import app

    app.dependency_overrides[get_storage] = lambda: seeded_storage
    app.dependency_overrides[get_translation_service] = lambda: TranslationService(api_key="")
    yield TestClient(app)
    app.dependency_overrides.clear()
