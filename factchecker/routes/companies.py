from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from ..db import Store
from ..services.company_svc import (
    create_company,
    get_company,
    list_companies,
    remove_company,
    update_company,
)
from .deps import audit, ensure_admin, get_store

router = APIRouter()


class CompanyNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    handle: str = Field(min_length=1, max_length=25, pattern=r"^[a-z0-9_-]+$")
    name: str = Field(min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    # name is NOT NULL: may be omitted but not set to null
    name: str = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


@router.post("/companies", status_code=201)
def api_company_create(
    body: CompanyNew,
    user: dict = Depends(ensure_admin),
    store: Store = Depends(get_store),
):
    """{ company } => { company: { handle, name, description, numEmployees, logoUrl } }"""
    data = body.model_dump(by_alias=True)
    log = audit(store, "CREATE_COMPANY", user)
    log.set_payload(data)
    try:
        company = create_company(store, data, log)
        log.write("OK")
        return {"company": company}
    except Exception as e:
        log.write("ERROR", str(e))
        raise


@router.get("/companies")
def api_company_list(
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    name_like: Optional[str] = Query(None, alias="nameLike"),
    store: Store = Depends(get_store),
):
    """
    Filters (all optional): minEmployees, maxEmployees,
    nameLike (case-insensitive, partial match).
    """
    criteria = {
        "minEmployees": min_employees,
        "maxEmployees": max_employees,
        "nameLike": name_like,
    }
    return {"companies": list_companies(store, criteria)}


@router.get("/companies/{handle}")
def api_company_get(handle: str, store: Store = Depends(get_store)):
    return {"company": get_company(store, handle)}


@router.patch("/companies/{handle}")
def api_company_update(
    handle: str,
    body: CompanyUpdate,
    user: dict = Depends(ensure_admin),
    store: Store = Depends(get_store),
):
    data = body.model_dump(by_alias=True, exclude_unset=True)
    log = audit(store, "UPDATE_COMPANY", user)
    log.set_payload(data)
    try:
        company = update_company(store, handle, data, log)
        log.write("OK")
        return {"company": company}
    except Exception as e:
        log.write("ERROR", str(e))
        raise


@router.delete("/companies/{handle}")
def api_company_delete(
    handle: str,
    user: dict = Depends(ensure_admin),
    store: Store = Depends(get_store),
):
    log = audit(store, "DELETE_COMPANY", user)
    try:
        remove_company(store, handle, log)
        log.write("OK")
        return {"deleted": handle}
    except Exception as e:
        log.write("ERROR", str(e))
        raise
