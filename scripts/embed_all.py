#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: embed_all.py
# -----------------------------------------------------------------------------
"""
Backfill embeddings for every transcription and enrichment that has none yet.

Usage:
    python scripts/embed_all.py path/to/catalog.json
    python scripts/embed_all.py            # uses VOICE_SOURCE_CATALOG
"""
import argparse
import os
import sys
from pathlib import Path

# Add project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def _print_stats(title: str, stats: dict) -> None:
    print(title)
    print(f"  Total embeddings: {stats['total']}")
    for source_type, counts in stats["by_type"].items():
        print(f"  {source_type}: {counts['embeddings']} embeddings, {counts['unique_sources']} sources")


def main() -> int:
    parser = argparse.ArgumentParser(description="Embed all transcriptions and enrichments")
    parser.add_argument(
        "catalog",
        nargs="?",
        default=None,
        help="JSON export with recordings / transcriptions / enrichments",
    )
    args = parser.parse_args()

    if args.catalog:
        if not os.path.isfile(args.catalog):
            print(f"Error: catalog not found: {args.catalog}")
            return 1
        # settings reads this at import
        os.environ["VOICE_SOURCE_CATALOG"] = args.catalog

    from api.AppContainer import AppContainer
    from utility.logging_utils import get_logger

    logger = get_logger("scripts.embed_all")

    container = AppContainer()
    svc = container.rag_service

    print("Voice RAG backfill")
    print("=" * 50)
    _print_stats("Before:", svc.get_stats())
    print()

    logger.info("Backfill started (catalog=%s)", args.catalog or "VOICE_SOURCE_CATALOG")
    result = svc.embed_all()

    for name, summary in result.items():
        print(
            f"{name}: embedded={summary.embedded} skipped={summary.skipped} "
            f"errors={summary.errors} total={summary.total}"
        )
        for failure in summary.failures:
            print(f"  ! {failure.source_id}: {failure.error}")

    print()
    _print_stats("After:", svc.get_stats())

    logger.info("Backfill finished")
    return 1 if any(s.errors for s in result.values()) else 0


if __name__ == "__main__":
    sys.exit(main())
