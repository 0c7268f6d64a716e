import mongomock
import pytest
from fastapi.testclient import TestClient

import main
from database import get_db
from secret_store import AdminSecretStore

PASSWORD = "Secret@123"


@pytest.fixture
def db():
    return mongomock.MongoClient()["reviews_test"]


@pytest.fixture
def client(db):
    main.app.dependency_overrides[get_db] = lambda: db
    main.app.state.secret_store = AdminSecretStore("truview")
    with TestClient(main.app) as c:
        yield c
    main.app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user and return (user_id, auth headers)."""
    counter = {"n": 0}

    def _register(first_name="Jane", last_name="Doe"):
        counter["n"] += 1
        n = counter["n"]
        res = client.post("/auth/register", json={
            "first_name": first_name,
            "last_name": last_name,
            "email": f"user{n}@example.com",
            "phone_number": f"55500000{n:02d}",
            "password": PASSWORD,
        })
        assert res.status_code == 201, res.text
        body = res.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['access_token']}"}

    return _register


@pytest.fixture
def admin_headers(client):
    res = client.post("/init/bootstrap", json={
        "first_name": "Site",
        "last_name": "Admin",
        "email": "admin@example.com",
        "phone_number": "9990000000",
        "password": PASSWORD,
        "secret_code": "truview",
    })
    assert res.status_code == 201, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}
