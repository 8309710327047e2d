"""Command-line front end for the in-memory record store.

Usage
-----
    # Load a few records and list those tagged with both "a" and "c":
    python main.py --record 1:a,b --record 2:b,c --record 3:a,c --tag a --tag c

    # Look a record up by id, with debug logging:
    python main.py --record 1:a,b --id 1 --verbose

Settings are read from the environment (a ``.env`` file is honoured):

    LOG_LEVEL   default logging level when --verbose is not given (INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

from storage import InMemoryStorage, QueryCriteria, Record, StorageError


def parse_record(spec: str) -> Record:
    """Turn ``"id:tag1,tag2"`` into a ``Record``; tags are optional."""
    record_id, _, raw_tags = spec.partition(":")
    tags = [tag for tag in raw_tags.split(",") if tag] if raw_tags else []
    return Record(id=record_id, tags=tags)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Query an in-memory tagged record store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--record",
        action="append",
        default=[],
        type=parse_record,
        dest="records",
        metavar="ID:TAGS",
        help="Record to load, e.g. '1:a,b'. May be repeated.",
    )
    parser.add_argument(
        "--id",
        default=None,
        help="Only match the record with this id.",
    )
    parser.add_argument(
        "--tag",
        action="append",
        default=[],
        dest="tags",
        help="Only match records carrying this tag. May be repeated.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        dest="as_json",
        help="Print the matches as a JSON list of {id, tags} objects.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )
    return parser


def resolve_log_level(name: str | None) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give INFO."""
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def run(args: argparse.Namespace) -> list[Record]:
    """Build a store from *args* and return the matching records."""
    store = InMemoryStorage()
    for record in args.records:
        store.add(record)
    return store.query(QueryCriteria(id=args.id, tags=args.tags))


def main(argv: list[str] | None = None) -> None:
    load_dotenv()

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else resolve_log_level(os.environ.get("LOG_LEVEL")),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        matches = run(args)
    except StorageError as exc:
        sys.exit(f"Error: {exc}")

    matches.sort(key=lambda r: r.id)
    if args.as_json:
        print(json.dumps([record.to_dict() for record in matches]))
        return

    for record in matches:
        print(f"{record.id}: {', '.join(record.tags)}")
    print(f"{len(matches)} record(s) matched")


if __name__ == "__main__":
    main()
