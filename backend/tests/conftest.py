import pytest
from fastapi.testclient import TestClient

from sitecms.core.config import Settings
from sitecms.main import create_app


@pytest.fixture()
def cfg(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'data' / 'site.db'}",
        media_dir=str(tmp_path / "media"),
        jwt_secret="test-secret",
        jwt_expires_min=None,
        api_prefix="/api",
        cors_origins="",
        seed_admin_user="admin",
        seed_admin_pass="changeme",
    )


@pytest.fixture()
def client(cfg):
    app = create_app(cfg)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def token(client):
    r = client.post("/api/login", json={"username": "admin", "password": "changeme"})
    assert r.status_code == 200, r.text
    return r.json()["token"]


@pytest.fixture()
def auth(token):
    return {"Authorization": f"Bearer {token}"}
