#!/usr/bin/env python3
"""Validate runtime configuration for pre-production/production deploys.

Examples:
  python backend/scripts/validate_runtime_config.py
  python backend/scripts/validate_runtime_config.py --require-ssl --pretty
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any

# Add backend/ to path when run as a script.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import DEFAULT_DB_PASSWORD, LOCAL_ENVS, Settings


def _validate_settings(*, require_ssl: bool) -> tuple[list[str], dict[str, Any]]:
    # Settings() directly: get_settings() would raise before we can report every failure
    settings = Settings()
    local_env = settings.app_env.strip().lower() in LOCAL_ENVS
    failures: list[str] = []

    if not local_env:
        if settings.debug:
            failures.append("DEBUG=true is not allowed outside local/dev/test")
        if not settings.database_url.strip() and settings.db_password == DEFAULT_DB_PASSWORD:
            failures.append("DB_PASSWORD must not use the default value outside local/dev/test")
        if settings.database_auto_create:
            failures.append("DATABASE_AUTO_CREATE must be false outside local/dev/test; run migrations")
        if require_ssl and not settings.database_ssl:
            failures.append("DATABASE_SSL must be true when --require-ssl is set")

    summary = {
        "status": "success" if not failures else "failed",
        "app_env": settings.app_env,
        "local_env": local_env,
        "require_ssl": bool(require_ssl),
        "failures": failures,
    }
    return failures, summary


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate deployment runtime config")
    parser.add_argument(
        "--require-ssl",
        action="store_true",
        help="Require TLS to the database for this deploy target",
    )
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    args = parser.parse_args()

    try:
        failures, summary = _validate_settings(require_ssl=bool(args.require_ssl))
    except Exception as exc:  # noqa: BLE001
        summary = {
            "status": "failed",
            "error": str(exc),
            "require_ssl": bool(args.require_ssl),
        }
        failures = [str(exc)]

    if args.pretty:
        print(json.dumps(summary, indent=2, sort_keys=True))
    else:
        print(json.dumps(summary))

    return 0 if not failures else 1


if __name__ == "__main__":
    raise SystemExit(main())
