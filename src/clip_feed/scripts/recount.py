"""
Maintenance job that re-derives item rank scores from the vote table.

Casts and undos already recompute the touched item. Run this after changing
the elevated voter weights so untouched items pick up the new weights too.

Usage:
    clip-feed-recount            # every item
    clip-feed-recount --item 42  # one item
"""

from __future__ import annotations

import argparse
import logging
import sys

from clip_feed.core.errors import NotFound
from clip_feed.db.session import SessionLocal
from clip_feed.services.ledger import VoteLedger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Recompute item rank scores from votes.")
    parser.add_argument("--item", type=int, default=None, help="Only recount this item id")
    parser.add_argument("--verbose", action="store_true", help="Log every corrected item")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    ledger = VoteLedger()
    db = SessionLocal()
    try:
        if args.item is not None:
            try:
                score = ledger.recount(db, args.item)
            except NotFound:
                print(f"Item {args.item} not found", file=sys.stderr)
                return 1
            print(f"Item {args.item} rank score: {score}")
        else:
            changed = ledger.recount_all(db)
            print(f"Recounted rank scores; {changed} item(s) corrected")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
