"""Recompute title_normalized / username_normalized on existing documents.

Run after importing data written without the search keys, or after changing
normalize_search_text, so stored keys match what the read path computes.

Usage:
    uv run python -m scripts.backfill_search_keys [--kind post|user] [--dry-run]

Requires: FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from blogsearch.core.config import get_settings
from blogsearch.domain.enums import EntityKind
from blogsearch.infrastructure.firebase import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)
from blogsearch.infrastructure.firebase.services import (
    BackfillReport,
    FirestoreSearchKeyBackfill,
)
from blogsearch.shared.telemetry import setup_logging


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees FIREBASE_* when run as script."""
    load_dotenv(_project_root() / ".env", override=True)
    get_settings.cache_clear()


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--kind",
        choices=EntityKind.values(),
        help="Only backfill one collection (default: both)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Count documents with stale keys without writing",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=500,
        help="Writes per commit (1-500)",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> list[BackfillReport]:
    _load_env()
    setup_logging()
    if not init_firebase():
        print("Firestore is not configured; set FIREBASE_SERVICE_ACCOUNT_*", file=sys.stderr)
        sys.exit(1)
    try:
        backfill = FirestoreSearchKeyBackfill(get_firestore_client(), batch_size=args.batch_size)
        if args.kind:
            return [await backfill.run(EntityKind(args.kind), dry_run=args.dry_run)]
        return await backfill.run_all(dry_run=args.dry_run)
    finally:
        await close_firebase()


def main() -> None:
    args = _parse_args()
    reports = asyncio.run(run(args))
    suffix = " (dry run)" if args.dry_run else ""
    for report in reports:
        print(f"{report.kind.value}: scanned={report.scanned} updated={report.updated}{suffix}")


if __name__ == "__main__":
    main()
