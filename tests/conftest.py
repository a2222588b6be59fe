"""
Pytest configuration and fixtures for the API tests.
"""

import pytest
from fastapi.testclient import TestClient

from blogcms.core.config import Settings
from blogcms.main import create_app


def build_settings(tmp_path, **overrides) -> Settings:
    data_dir = tmp_path / "data"
    data_dir.mkdir(exist_ok=True)
    values = dict(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        ADMIN_DIR=str(tmp_path / "admin"),
        DATA_DIR=str(data_dir),
        I18N_PATH=str(data_dir / "i18n.json"),
        JWT_SECRET="test-secret",
        RATE_LIMIT="1000/minute",
        AUTH_RATE_LIMIT="50/15 minutes",
        LOG_LEVEL="WARNING",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory(tmp_path):
    def _build(**overrides) -> Settings:
        return build_settings(tmp_path, **overrides)

    return _build


@pytest.fixture
def settings(settings_factory) -> Settings:
    return settings_factory()


@pytest.fixture
def client(settings):
    """A client for a freshly created app; the lifespan seeds the database."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token(client) -> str:
    response = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def post_payload():
    """Build a valid post body; keyword arguments override fields."""
    counter = {"n": 0}

    def _build(**overrides):
        counter["n"] += 1
        n = counter["n"]
        payload = {
            "title_en": f"Post {n}",
            "title_zh": f"文章 {n}",
            "slug_en": f"post-{n}",
            "slug_zh": f"wen-zhang-{n}",
            "content_en": f"English content {n}",
            "content_zh": f"中文内容 {n}",
            "excerpt_en": "Excerpt",
            "excerpt_zh": "摘要",
            "category": "technology",
            "tags": ["python"],
            "featured": False,
            "published": True,
        }
        payload.update(overrides)
        return payload

    return _build


@pytest.fixture
def create_post(client, auth_headers, post_payload):
    def _create(**overrides) -> int:
        response = client.post("/api/posts", json=post_payload(**overrides), headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()["postId"]

    return _create
