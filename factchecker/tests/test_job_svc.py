from __future__ import annotations

import pytest

from factchecker.errors import DuplicateError, NotFoundError, UsageError
from factchecker.services.job_svc import create_job, get_job, list_jobs, remove_job, update_job


def test_create_job(store, log):
    job = create_job(store, {"title": "j4", "salary": 400, "equity": 0.002, "companyHandle": "c3"}, log)
    assert job["id"] == 4
    assert job["title"] == "j4"
    assert job["companyHandle"] == "c3"
    assert abs(job["equity"] - 0.002) < 1e-12


def test_create_job_duplicate(store, log):
    with pytest.raises(DuplicateError):
        create_job(store, {"title": "j1", "salary": 1, "equity": 0, "companyHandle": "c1"}, log)


def test_create_job_unknown_company(store, log):
    with pytest.raises(NotFoundError):
        create_job(store, {"title": "jx", "companyHandle": "nope"}, log)


@pytest.mark.parametrize(
    "criteria, expected",
    [
        (None, ["j1", "j2", "j3"]),
        ({"minSalary": 150}, ["j2", "j3"]),
        ({"minSalary": 0}, ["j1", "j2", "j3"]),
        ({"hasEquity": True}, ["j2"]),
        ({"hasEquity": False}, ["j1", "j2", "j3"]),
        ({"titleLike": "J"}, ["j1", "j2", "j3"]),
        ({"titleLike": "3"}, ["j3"]),
        ({"minSalary": 150, "hasEquity": True}, ["j2"]),
        ({"minSalary": 150, "hasEquity": True, "titleLike": "j"}, ["j2"]),
        ({"companyHandle": "c2"}, ["j3"]),
    ],
)
def test_list_jobs_filters(store, criteria, expected):
    assert [j["title"] for j in list_jobs(store, criteria)] == expected


def test_get_job(store):
    assert get_job(store, 1) == {"id": 1, "title": "j1", "salary": 100, "equity": 0, "companyHandle": "c1"}


def test_get_job_not_found(store):
    with pytest.raises(NotFoundError):
        get_job(store, 999)


def test_update_job(store, log):
    job = update_job(store, 1, {"title": "new", "salary": 500, "companyHandle": "c2"}, log)
    assert job == {"id": 1, "title": "new", "salary": 500, "equity": 0, "companyHandle": "c2"}


def test_update_job_unknown_company(store, log):
    with pytest.raises(NotFoundError):
        update_job(store, 1, {"companyHandle": "nope"}, log)


def test_update_job_not_found(store, log):
    with pytest.raises(NotFoundError):
        update_job(store, 999, {"title": "x"}, log)


def test_update_job_no_data(store, log):
    with pytest.raises(UsageError):
        update_job(store, 1, {}, log)


def test_remove_job(store, log):
    remove_job(store, 1, log)
    with pytest.raises(NotFoundError):
        get_job(store, 1)
    with pytest.raises(NotFoundError):
        remove_job(store, 1, log)
