from __future__ import annotations

# factchecker/services/job_svc.py
from typing import Any, Mapping, Optional

from ..db import Store
from ..errors import DuplicateError, NotFoundError
from ..logs import LogContext
from ..repository import company_repo, job_repo


def create_job(store: Store, data: Mapping[str, Any], log: LogContext) -> dict:
    title, handle = data["title"], data["companyHandle"]
    if not company_repo.exists(store, handle):
        raise NotFoundError(f"No company: {handle}")
    if job_repo.exists_for_company(store, title, handle):
        raise DuplicateError(f"Duplicate job: {title} at {handle}")
    job = job_repo.insert(store, data)
    log.set_entity("JOB", job["id"])
    log.set_after(job)
    return job


def list_jobs(store: Store, criteria: Optional[Mapping[str, Any]] = None) -> list[dict]:
    return job_repo.find_all(store, criteria)


def get_job(store: Store, job_id: int) -> dict:
    job = job_repo.get_one(store, job_id)
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    return job


def update_job(store: Store, job_id: int, data: Mapping[str, Any], log: LogContext) -> dict:
    handle = data.get("companyHandle")
    if handle is not None and not company_repo.exists(store, handle):
        raise NotFoundError(f"No company: {handle}")
    job = job_repo.update(store, job_id, data)
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    log.set_entity("JOB", job_id)
    log.set_after(job)
    return job


def remove_job(store: Store, job_id: int, log: LogContext) -> None:
    if not job_repo.remove(store, job_id):
        raise NotFoundError(f"No job: {job_id}")
    log.set_entity("JOB", job_id)
