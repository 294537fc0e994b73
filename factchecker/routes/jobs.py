from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from ..db import Store
from ..services.job_svc import create_job, get_job, list_jobs, remove_job, update_job
from .deps import audit, ensure_admin, get_store

router = APIRouter()


class JobNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str = Field(min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25, alias="companyHandle")


class JobUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(None, min_length=1, max_length=25, alias="companyHandle")


@router.post("/jobs", status_code=201)
def api_job_create(
    body: JobNew,
    user: dict = Depends(ensure_admin),
    store: Store = Depends(get_store),
):
    data = body.model_dump(by_alias=True)
    log = audit(store, "CREATE_JOB", user)
    log.set_payload(data)
    try:
        job = create_job(store, data, log)
        log.write("OK")
        return {"job": job}
    except Exception as e:
        log.write("ERROR", str(e))
        raise


@router.get("/jobs")
def api_job_list(
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    title_like: Optional[str] = Query(None, alias="titleLike"),
    company_handle: Optional[str] = Query(None, alias="companyHandle"),
    store: Store = Depends(get_store),
):
    """
    Filters (all optional): minSalary, hasEquity (only "true" filters),
    titleLike (case-insensitive, partial match), companyHandle.
    """
    criteria = {
        "minSalary": min_salary,
        "hasEquity": has_equity,
        "titleLike": title_like,
        "companyHandle": company_handle,
    }
    return {"jobs": list_jobs(store, criteria)}


@router.get("/jobs/{job_id}")
def api_job_get(job_id: int, store: Store = Depends(get_store)):
    return {"job": get_job(store, job_id)}


@router.patch("/jobs/{job_id}")
def api_job_update(
    job_id: int,
    body: JobUpdate,
    user: dict = Depends(ensure_admin),
    store: Store = Depends(get_store),
):
    data = body.model_dump(by_alias=True, exclude_unset=True)
    log = audit(store, "UPDATE_JOB", user)
    log.set_payload(data)
    try:
        job = update_job(store, job_id, data, log)
        log.write("OK")
        return {"job": job}
    except Exception as e:
        log.write("ERROR", str(e))
        raise


@router.delete("/jobs/{job_id}")
def api_job_delete(
    job_id: int,
    user: dict = Depends(ensure_admin),
    store: Store = Depends(get_store),
):
    log = audit(store, "DELETE_JOB", user)
    try:
        remove_job(store, job_id, log)
        log.write("OK")
        return {"deleted": job_id}
    except Exception as e:
        log.write("ERROR", str(e))
        raise
