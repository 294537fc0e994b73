from __future__ import annotations

# factchecker/services/company_svc.py
import logging
from typing import Any, Mapping, Optional

from ..db import Store
from ..errors import DuplicateError, NotFoundError, UsageError
from ..logs import LogContext
from ..repository import company_repo, job_repo

logger = logging.getLogger(__name__)


def create_company(store: Store, data: Mapping[str, Any], log: LogContext) -> dict:
    """Create a company; DuplicateError if the handle or the name is taken."""
    handle = data["handle"]
    if company_repo.exists(store, handle):
        raise DuplicateError(f"Duplicate company: {handle}")
    if company_repo.name_taken(store, data["name"]):
        raise DuplicateError(f"Duplicate company name: {data['name']}")
    company = company_repo.insert(store, data)
    log.set_entity("COMPANY", handle)
    log.set_after(company)
    return company


def list_companies(store: Store, criteria: Optional[Mapping[str, Any]] = None) -> list[dict]:
    criteria = criteria or {}
    lo, hi = criteria.get("minEmployees"), criteria.get("maxEmployees")
    if lo is not None and hi is not None and lo > hi:
        raise UsageError("minEmployees cannot be greater than maxEmployees")
    return company_repo.find_all(store, criteria)


def get_company(store: Store, handle: str) -> dict:
    """Company with its jobs: { handle, name, ..., jobs: [{ id, title, salary, equity }, ...] }"""
    company = company_repo.get_one(store, handle)
    if not company:
        raise NotFoundError(f"No company: {handle}")
    company["jobs"] = [
        {k: v for k, v in job.items() if k != "companyHandle"}
        for job in job_repo.find_all(store, {"companyHandle": handle})
    ]
    return company


def update_company(store: Store, handle: str, data: Mapping[str, Any], log: LogContext) -> dict:
    name = data.get("name")
    if name is not None and company_repo.name_taken(store, name, exclude_handle=handle):
        raise DuplicateError(f"Duplicate company name: {name}")
    company = company_repo.update(store, handle, data)
    if not company:
        raise NotFoundError(f"No company: {handle}")
    log.set_entity("COMPANY", handle)
    log.set_after(company)
    return company


def remove_company(store: Store, handle: str, log: LogContext) -> None:
    if not company_repo.remove(store, handle):
        raise NotFoundError(f"No company: {handle}")
    log.set_entity("COMPANY", handle)
    logger.info("company removed: %s", handle)
