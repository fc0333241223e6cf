#!/usr/bin/env python3
"""
Sync league data from the source provider.

Usage:
    python scripts/sync_league.py
    python scripts/sync_league.py --full
    python scripts/sync_league.py --season 2025/26 --create-tables

Exits with status 1 when the sync fails or exceeds its time limit.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import get_settings
from app.database import AsyncSessionLocal, Base, engine
from app.services.source_client import SourceProviderClient
from app.services.sync import SyncOrchestrator

logger = logging.getLogger("sync_league")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sync darts league data from the source provider")
    parser.add_argument("--full", action="store_true", help="Re-sync the whole season")
    parser.add_argument("--season", help="Season to sync, e.g. 2025/26")
    parser.add_argument(
        "--create-tables", action="store_true", help="Create missing tables before syncing"
    )
    return parser


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()

    try:
        if args.create_tables:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        async with AsyncSessionLocal() as db:
            orchestrator = SyncOrchestrator(db, SourceProviderClient(), args.season)
            result = await asyncio.wait_for(
                orchestrator.sync(full_sync=args.full),
                timeout=settings.sync_timeout_seconds,
            )
    except asyncio.TimeoutError:
        logger.error(f"Sync exceeded {settings.sync_timeout_seconds}s and was aborted")
        return 1
    except Exception as e:
        logger.error(f"Sync failed: {e}")
        return 1
    finally:
        await engine.dispose()

    print(f"Mode:             {result.mode.value}")
    print(f"Records updated:  {result.records_updated}")
    print(f"Matchdays synced: {result.matchdays_synced}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
