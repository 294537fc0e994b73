"""
Load companies and jobs from seed CSVs into the configured database.

Existing rows (same company handle, same job title at a company) are skipped.

Usage:
  python -m factchecker.scripts.load_seeds \
      --companies seeds/companies.csv \
      --jobs seeds/jobs.csv
"""
from __future__ import annotations

import argparse

from factchecker.db import ensure_schema, open_store
from factchecker.logs import LogContext, ensure_log_schema
from factchecker.services.seed_svc import seed_load


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--companies", required=True)
    ap.add_argument("--jobs", required=False)
    ap.add_argument("--db", required=False, help="sqlite path (default: from config)")
    args = ap.parse_args(argv)

    with open_store(args.db) as store:
        ensure_schema(store)
        ensure_log_schema(store)
        log = LogContext(store, "LOAD_SEEDS", user="cli")
        log.set_payload({"companies": args.companies, "jobs": args.jobs})
        try:
            res = seed_load(store, args.companies, args.jobs, log)
        except Exception as e:
            log.write("ERROR", str(e))
            raise
        log.write("OK")
    print({"message": "ok", **res})
    return res


if __name__ == "__main__":
    main()
