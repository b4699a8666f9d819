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

from src.hrmstech.hrmstech.database.bootstrap import apply_schema, list_tables


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the HRMSTech database and apply its schema.")
    parser.add_argument(
        "--schema",
        type=Path,
        default=REPO_ROOT / "database" / "schema.sql",
        help="schema file to apply (default: database/schema.sql)",
    )
    args = parser.parse_args()

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    executed = apply_schema(db_config, schema_path=args.schema)
    tables = list_tables(db_config)
    print(f"schema {args.schema.name}: {executed} statements, {len(tables)} tables in {db_config.get('database')}")


if __name__ == "__main__":
    main()
