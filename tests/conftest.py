"""
Pytest configuration and shared fixtures
"""

import json
import os
from typing import Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"

from core.config import Settings
from core.dependencies import get_ranker, get_storage
from main import create_app
from services.storage_service import StorageError

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class FakeStorage:
    """In-memory stand-in for the object storage client"""

    def __init__(self):
        self.uploads: List[Dict] = []
        self.fail = False

    async def upload(self, bucket: str, path: str, content: bytes, content_type: str) -> str:
        if self.fail:
            raise StorageError("storage unavailable")
        self.uploads.append({
            "bucket": bucket,
            "path": path,
            "size": len(content),
            "content_type": content_type,
        })
        return f"https://storage.test/{bucket}/{path}"


class FakeRanker:
    """Ranking client whose answer is set by the test"""

    def __init__(self):
        self.ranked_ids: Optional[List[str]] = None
        self.calls: List[Dict] = []

    async def rank_recipes(self, terms, candidates):
        self.calls.append({"terms": list(terms), "ids": [c.id for c in candidates]})
        return self.ranked_ids


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Test settings configuration backed by a throwaway SQLite file"""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'recipebox.db'}",
        ENVIRONMENT="testing",
        JWT_SECRET_KEY="test-secret",
        PASSWORD_HASH_ROUNDS=4,
        LOG_LEVEL="WARNING",
        SUPABASE_URL="https://storage.test",
        OLLAMA_URL="http://ollama.test",
    )


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def fake_ranker() -> FakeRanker:
    return FakeRanker()


@pytest.fixture
def app(test_settings, fake_storage, fake_ranker):
    """Create test FastAPI application"""
    application = create_app(test_settings)
    application.dependency_overrides[get_storage] = lambda: fake_storage
    application.dependency_overrides[get_ranker] = lambda: fake_ranker
    return application


@pytest.fixture
def client(app):
    """Create test client; entering it runs the lifespan (database setup)"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signup_and_login(client) -> Callable[..., Dict]:
    """Register an account, sign in as it and return the signed-in user"""

    def _signup_and_login(username: str = "chef", email: str = "chef@example.com",
                          password: str = "password123") -> Dict:
        response = client.post(
            "/api/auth/signup",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text

        client.cookies.clear()
        response = client.post("/api/auth/signin", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    return _signup_and_login


@pytest.fixture
def create_recipe(client) -> Callable[..., Dict]:
    """Submit a recipe through the multipart endpoint and return it"""

    def _create_recipe(title: str = "Pancakes", ingredients=None, steps=None,
                       category: str = "Breakfast") -> Dict:
        response = client.post(
            "/api/recipe/add",
            data={
                "title": title,
                "ingredients": json.dumps(ingredients if ingredients is not None else ["egg", "flour"]),
                "steps": json.dumps(steps if steps is not None else ["mix", "bake"]),
                "category": category,
            },
            files={"image": ("pancakes.png", PNG_BYTES, "image/png")},
        )
        assert response.status_code == 201, response.text
        return response.json()["recipe"]

    return _create_recipe
