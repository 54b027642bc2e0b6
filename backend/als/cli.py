"""Management commands.

Usage:
    python -m als.cli export-backup [path]     Write ALS_BACKUP_<date>.json (or path)
    python -m als.cli import-backup path       Restore a backup into the local store
    python -m als.cli migrate                  Alembic upgrade head on the cloud database
    python -m als.cli status                   Local store / cloud status
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from als.config import settings
from als.database import dispose_engine, get_sessionmaker
from als.middleware.exceptions import CloudUnavailableError, ValidationFailedError
from als.services.storage import StorageFacade
from als.store.local import build_local_store

logger = logging.getLogger("als.cli")

ALEMBIC_DIR = Path(__file__).resolve().parent.parent / "alembic"


def _storage() -> StorageFacade:
    return StorageFacade(build_local_store(settings), get_sessionmaker())


async def export_backup(path: str | None) -> Path:
    storage = _storage()
    try:
        payload = await storage.export_backup()
    finally:
        await storage.local.close()
    target = Path(path) if path else Path(storage.backup_filename())
    target.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info(f"Backup written to {target}")
    return target


async def import_backup(path: str) -> list[str]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    storage = _storage()
    try:
        return await storage.import_backup(payload)
    finally:
        await storage.local.close()


async def show_status() -> dict:
    storage = _storage()
    try:
        # A read refreshes the cloud indicator
        await storage.get_categories()
        return {
            "local_store": settings.local_store_backend,
            "local_store_ok": await storage.local.ping(),
            "local_store_empty": await storage.local.is_empty(),
            **storage.status().model_dump(by_alias=True, mode="json"),
        }
    finally:
        await storage.local.close()
        await dispose_engine()


def migrate() -> None:
    from alembic import command
    from alembic.config import Config

    if not settings.cloud_database_url_sync:
        raise CloudUnavailableError("CLOUD_DATABASE_URL_SYNC is not set")
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    command.upgrade(config, "head")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="als", description="ALS back office management")
    sub = parser.add_subparsers(dest="command", required=True)

    p_export = sub.add_parser("export-backup", help="Export the local store to a JSON file")
    p_export.add_argument("path", nargs="?", help="Output file (default ALS_BACKUP_<date>.json)")

    p_import = sub.add_parser("import-backup", help="Restore a JSON backup")
    p_import.add_argument("path", help="Backup file to restore")

    sub.add_parser("migrate", help="Apply cloud database migrations")
    sub.add_parser("status", help="Show local store and cloud status")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command == "export-backup":
        print(asyncio.run(export_backup(args.path)))
    elif args.command == "import-backup":
        try:
            restored = asyncio.run(import_backup(args.path))
        except (ValidationFailedError, json.JSONDecodeError) as e:
            print(f"Backup rejected: {e}", file=sys.stderr)
            return 1
        print(f"Restored: {', '.join(restored) or 'nothing'}")
    elif args.command == "migrate":
        try:
            migrate()
        except CloudUnavailableError as e:
            print(f"Migration skipped: {e}", file=sys.stderr)
            return 1
    elif args.command == "status":
        print(json.dumps(asyncio.run(show_status()), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
