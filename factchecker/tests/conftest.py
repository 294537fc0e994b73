import os
import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

os.environ["APP_ENV"] = "test"

from factchecker.db import Store, ensure_schema  # noqa: E402
from factchecker.logs import LogContext, ensure_log_schema  # noqa: E402
from factchecker.repository import company_repo, job_repo, post_repo, topic_repo, user_repo  # noqa: E402
from factchecker.security import create_token, hash_password  # noqa: E402

PASSWORD = "password1"


def _seed(store: Store):
    for i in (1, 2, 3):
        company_repo.insert(store, {
            "handle": f"c{i}",
            "name": f"C{i}",
            "description": f"Desc{i}",
            "numEmployees": i,
            "logoUrl": f"http://c{i}.img",
        })
    job_repo.insert(store, {"title": "j1", "salary": 100, "equity": 0, "companyHandle": "c1"})
    job_repo.insert(store, {"title": "j2", "salary": 200, "equity": 0.01, "companyHandle": "c1"})
    job_repo.insert(store, {"title": "j3", "salary": 300, "equity": None, "companyHandle": "c2"})

    for username, is_admin in (("u1", False), ("u2", False), ("admin", True)):
        user_repo.insert(store, {
            "username": username,
            "firstName": f"{username.upper()}F",
            "lastName": f"{username.upper()}L",
            "email": f"{username}@email.com",
            "isAdmin": is_admin,
        }, hash_password(PASSWORD))

    topic_repo.insert(store, "t1")
    topic_repo.insert(store, "t2")
    post_repo.insert(store, "u1", "t1", "2024-01-01T00:00:00+00:00", "First post about Cats")
    post_repo.insert(store, "u2", "t2", "2024-01-02T00:00:00+00:00", "dogs are great")


@pytest.fixture()
def db_path(tmp_path):
    return str(tmp_path / "factchecker_test.db")


@pytest.fixture()
def store(db_path):
    store = Store(db_path).open()
    ensure_schema(store)
    ensure_log_schema(store)
    _seed(store)
    try:
        yield store
    finally:
        store.close()


@pytest.fixture()
def log(store):
    return LogContext(store, "TEST", user="pytest")


@pytest.fixture()
def client(store, db_path):
    # app gets its own Store on the same (already seeded) file
    from fastapi.testclient import TestClient
    from factchecker.api import create_app
    with TestClient(create_app(db_path=db_path)) as test_client:
        yield test_client


@pytest.fixture()
def u1_headers():
    return {"Authorization": f"Bearer {create_token({'username': 'u1', 'isAdmin': False})}"}


@pytest.fixture()
def u2_headers():
    return {"Authorization": f"Bearer {create_token({'username': 'u2', 'isAdmin': False})}"}


@pytest.fixture()
def admin_headers():
    return {"Authorization": f"Bearer {create_token({'username': 'admin', 'isAdmin': True})}"}
