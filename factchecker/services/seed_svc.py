# factchecker/services/seed_svc.py
import pandas as pd

from ..db import Store
from ..logs import LogContext
from ..repository import company_repo, job_repo


def _opt(v, cast=None):
    if pd.isna(v):
        return None
    if cast is not None:
        return cast(v)
    s = str(v).strip()
    return s or None


def seed_load(store: Store, companies_csv: str, jobs_csv: str | None, log: LogContext) -> dict:
    """从 CSV 导入公司与职位；已存在的记录跳过。CSV 需含必要列：
       companies.csv: handle, name, description, num_employees, logo_url
       jobs.csv: title, salary, equity, company_handle
       若职位所属公司不存在，则跳过该行。
    """
    comp_df = pd.read_csv(companies_csv)
    job_df = pd.read_csv(jobs_csv) if jobs_csv else pd.DataFrame(columns=["title", "company_handle"])

    created_companies = 0
    created_jobs = 0
    skipped = 0

    for _, r in comp_df.iterrows():
        handle = str(r["handle"]).strip().lower()
        if company_repo.exists(store, handle):
            skipped += 1
            continue
        company_repo.insert(store, {
            "handle": handle,
            "name": str(r["name"]).strip(),
            "description": _opt(r.get("description")),
            "numEmployees": _opt(r.get("num_employees"), int),
            "logoUrl": _opt(r.get("logo_url")),
        })
        created_companies += 1

    for _, r in job_df.iterrows():
        title = str(r["title"]).strip()
        handle = str(r["company_handle"]).strip().lower()
        if not company_repo.exists(store, handle) or job_repo.exists_for_company(store, title, handle):
            skipped += 1
            continue
        job_repo.insert(store, {
            "title": title,
            "salary": _opt(r.get("salary"), int),
            "equity": _opt(r.get("equity"), float),
            "companyHandle": handle,
        })
        created_jobs += 1

    out = {"created_companies": created_companies, "created_jobs": created_jobs, "skipped": skipped}
    log.set_after(out)
    return out
