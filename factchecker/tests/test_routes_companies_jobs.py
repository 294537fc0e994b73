from __future__ import annotations

import pytest


# ---------------- /companies ----------------

def test_create_company_as_admin(client, admin_headers):
    body = {"handle": "new", "name": "New", "description": "DescNew", "numEmployees": 10, "logoUrl": "http://new.img"}
    r = client.post("/companies", json=body, headers=admin_headers)
    assert r.status_code == 201
    assert r.json() == {"company": body}


@pytest.mark.parametrize("headers_fixture, status", [(None, 401), ("u1_headers", 401)])
def test_create_company_requires_admin(client, request, headers_fixture, status):
    headers = request.getfixturevalue(headers_fixture) if headers_fixture else {}
    r = client.post("/companies", json={"handle": "new", "name": "New"}, headers=headers)
    assert r.status_code == status
    assert r.json()["error"]["status"] == status


@pytest.mark.parametrize(
    "body",
    [
        {"handle": "new"},
        {"handle": "new", "name": "New", "numEmployees": "lots"},
        {"handle": "new", "name": "New", "bogus": 1},
        {"handle": "Bad Handle", "name": "New"},
    ],
)
def test_create_company_invalid_body(client, admin_headers, body):
    r = client.post("/companies", json=body, headers=admin_headers)
    assert r.status_code == 400
    assert isinstance(r.json()["error"]["message"], list)


def test_create_company_duplicate(client, admin_headers):
    r = client.post("/companies", json={"handle": "c1", "name": "Again"}, headers=admin_headers)
    assert r.status_code == 400
    assert "Duplicate" in r.json()["error"]["message"]


def test_create_company_duplicate_name(client, admin_headers):
    r = client.post("/companies", json={"handle": "newco", "name": "C1"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Duplicate company name: C1"


def test_update_company_onto_existing_name(client, admin_headers):
    r = client.patch("/companies/c2", json={"name": "C1"}, headers=admin_headers)
    assert r.status_code == 400
    assert "Duplicate" in r.json()["error"]["message"]
    # keeping its own name is not a clash
    assert client.patch("/companies/c1", json={"name": "C1"}, headers=admin_headers).status_code == 200


def test_unique_constraint_maps_to_duplicate(client, admin_headers, monkeypatch):
    # two writers that both passed the existence checks
    from factchecker.repository import company_repo

    monkeypatch.setattr(company_repo, "exists", lambda store, handle: False)
    monkeypatch.setattr(company_repo, "name_taken", lambda store, name, exclude_handle=None: False)
    r = client.post("/companies", json={"handle": "c1", "name": "Other"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["error"]["message"].startswith("Duplicate")

    r = client.post("/companies", json={"handle": "newco", "name": "C2"}, headers=admin_headers)
    assert r.status_code == 400


def test_list_companies(client):
    r = client.get("/companies")
    assert r.status_code == 200
    assert [c["handle"] for c in r.json()["companies"]] == ["c1", "c2", "c3"]


def test_list_companies_filters(client):
    r = client.get("/companies", params={"minEmployees": 2, "nameLike": "c"})
    assert [c["handle"] for c in r.json()["companies"]] == ["c2", "c3"]


def test_list_companies_inverted_range(client):
    r = client.get("/companies", params={"minEmployees": 3, "maxEmployees": 1})
    assert r.status_code == 400


def test_list_companies_unknown_filter_is_ignored(client):
    r = client.get("/companies", params={"bogus": "x"})
    assert r.status_code == 200
    assert len(r.json()["companies"]) == 3


def test_get_company(client):
    r = client.get("/companies/c1")
    assert r.status_code == 200
    company = r.json()["company"]
    assert company["name"] == "C1"
    assert [j["id"] for j in company["jobs"]] == [1, 2]
    assert client.get("/companies/nope").status_code == 404


def test_update_company(client, admin_headers):
    r = client.patch("/companies/c1", json={"name": "C1-new"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["company"]["name"] == "C1-new"


def test_update_company_rules(client, admin_headers, u1_headers):
    assert client.patch("/companies/c1", json={"name": "x"}, headers=u1_headers).status_code == 401
    assert client.patch("/companies/nope", json={"name": "x"}, headers=admin_headers).status_code == 404
    # handle is not updatable
    assert client.patch("/companies/c1", json={"handle": "c9"}, headers=admin_headers).status_code == 400
    # name may not be nulled out
    assert client.patch("/companies/c1", json={"name": None}, headers=admin_headers).status_code == 400
    # nothing to change
    r = client.patch("/companies/c1", json={}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "No data supplied"


def test_update_company_clears_nullable_field(client, admin_headers):
    r = client.patch("/companies/c1", json={"logoUrl": None}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["company"]["logoUrl"] is None


def test_delete_company(client, admin_headers, u1_headers):
    assert client.delete("/companies/c1", headers=u1_headers).status_code == 401
    r = client.delete("/companies/c1", headers=admin_headers)
    assert r.json() == {"deleted": "c1"}
    assert client.delete("/companies/c1", headers=admin_headers).status_code == 404


# ---------------- /jobs ----------------

def test_create_job(client, admin_headers):
    body = {"title": "J-new", "salary": 10, "equity": 0.2, "companyHandle": "c1"}
    r = client.post("/jobs", json=body, headers=admin_headers)
    assert r.status_code == 201
    job = r.json()["job"]
    assert job["id"] == 4
    assert job["title"] == "J-new"


@pytest.mark.parametrize(
    "body, status",
    [
        ({"title": "x", "companyHandle": "nope"}, 404),
        ({"title": "x", "equity": 1.5, "companyHandle": "c1"}, 400),
        ({"title": "x", "salary": -1, "companyHandle": "c1"}, 400),
        ({"companyHandle": "c1"}, 400),
    ],
)
def test_create_job_rejects(client, admin_headers, body, status):
    assert client.post("/jobs", json=body, headers=admin_headers).status_code == status


@pytest.mark.parametrize(
    "params, expected",
    [
        ({}, [1, 2, 3]),
        ({"minSalary": 150}, [2, 3]),
        ({"hasEquity": "true"}, [2]),
        ({"hasEquity": "false"}, [1, 2, 3]),
        ({"titleLike": "J1"}, [1]),
        ({"minSalary": 150, "hasEquity": "true", "titleLike": "j"}, [2]),
    ],
)
def test_list_jobs_filters(client, params, expected):
    r = client.get("/jobs", params=params)
    assert r.status_code == 200
    assert [j["id"] for j in r.json()["jobs"]] == expected


def test_title_like_wildcards_match_literally(client, admin_headers):
    assert client.get("/jobs", params={"titleLike": "_"}).json()["jobs"] == []
    assert client.get("/jobs", params={"titleLike": "%"}).json()["jobs"] == []
    client.post("/jobs", json={"title": "100% remote_dev", "companyHandle": "c3"}, headers=admin_headers)
    r = client.get("/jobs", params={"titleLike": "0% remote_"})
    assert [j["title"] for j in r.json()["jobs"]] == ["100% remote_dev"]


def test_list_jobs_bad_filter_value(client):
    assert client.get("/jobs", params={"minSalary": "lots"}).status_code == 400


def test_get_job(client):
    r = client.get("/jobs/1")
    assert r.json()["job"]["title"] == "j1"
    assert client.get("/jobs/999").status_code == 404


def test_update_job(client, admin_headers, u1_headers):
    assert client.patch("/jobs/1", json={"title": "x"}, headers=u1_headers).status_code == 401
    r = client.patch("/jobs/1", json={"title": "J-new", "salary": 999}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["job"]["salary"] == 999
    assert client.patch("/jobs/999", json={"title": "x"}, headers=admin_headers).status_code == 404
    assert client.patch("/jobs/1", json={"id": 5}, headers=admin_headers).status_code == 400


def test_delete_job(client, admin_headers):
    assert client.delete("/jobs/1", headers=admin_headers).json() == {"deleted": 1}
    assert client.get("/jobs/1").status_code == 404
