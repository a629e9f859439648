from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.classroom_ledger.classroom_ledger.database.bootstrap import ensure_admin_account


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    if not settings.ADMIN_PASSWORD:
        raise SystemExit("ADMIN_PASSWORD is not set.")

    ensure_admin_account(db_config, username=settings.ADMIN_USERNAME, password=settings.ADMIN_PASSWORD)
    print(f"OK: Admin account {settings.ADMIN_USERNAME!r} ready in {db_config.get('database')}")


if __name__ == "__main__":
    main()
