from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hrmstech.hrmstech.database.bootstrap import DEMO_ADMIN_EMAIL, ensure_demo_organization


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the demo organization and its admin account.")
    parser.add_argument("--password", default="admin123", help="password for the demo admin")
    args = parser.parse_args()

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    org_id = ensure_demo_organization(db_config, password=args.password)
    print(f"demo organization {org_id} seeded in {db_config.get('database')}; sign in as {DEMO_ADMIN_EMAIL}")


if __name__ == "__main__":
    main()
