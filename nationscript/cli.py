"""Command-line interface for querying the NationStates API.

WHY: Looking at a nation, a region or a filtered slice of a data dump
should not require writing code. The CLI wires the client, the dump
reader and the response shapes behind a handful of subcommands.

HOW: argparse subcommands build the request; the async request runs via
asyncio.run(). The delivered product is printed as JSON on stdout so the
output can be piped into jq. Status and errors go to stderr through
logging.

RULES:
- Subcommands: nation, region, world, wa, card, dump
- nation --password (or NS_PASSWORD) unlocks private shards
- Shards are given comma-separated (--shards name,motto)
- dump --match keeps entries whose name matches one of the given names
- Exit code 1 on any nationscript error
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from nationscript.api.client import Credential, NSClient, to_id_form
from nationscript.api.dump import DumpMode, DumpReader
from nationscript.config import load_password
from nationscript.errors import NSError

logger = logging.getLogger(__name__)


def _split_shards(value: str | None) -> list[str]:
    if not value:
        return []
    return [s.strip() for s in value.split(",") if s.strip()]


def _name_filter(names: list[str] | None):
    """Predicate matching dump entries by name, ignoring case and spaces."""
    if not names:
        return None
    wanted = {to_id_form(n) for n in names}

    def _match(item: Any) -> bool:
        name = item.get("name") if isinstance(item, dict) else None
        return name is not None and to_id_form(name) in wanted

    return _match


async def _run(args: argparse.Namespace) -> Any:
    async with NSClient(user_agent=args.user_agent) as client:
        if args.command == "nation":
            password = args.password or load_password()
            credential = Credential(args.name, password=password) if password else None
            return await client.nation(args.name, *_split_shards(args.shards), credential=credential)
        if args.command == "region":
            return await client.region(args.name, *_split_shards(args.shards))
        if args.command == "world":
            return await client.world(*_split_shards(args.shards))
        if args.command == "wa":
            return await client.wa(args.council, *_split_shards(args.shards), resolution_id=args.resolution)
        if args.command == "card":
            return await client.card(args.card_id, args.season, *_split_shards(args.shards))

        reader = DumpReader(client, directory=args.directory)
        mode = DumpMode(args.mode)
        predicate = _name_filter(args.match)
        if args.kind == "nations":
            return await reader.nations(predicate, mode)
        return await reader.regions(predicate, mode)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="nationscript",
        description="Query the NationStates API and print the result as JSON.",
    )
    parser.add_argument(
        "--user-agent",
        default=None,
        help="User-Agent identifying you to NationStates (default: NS_USER_AGENT).",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log requests and rate limiting to stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for command in ("nation", "region"):
        p = sub.add_parser(command, help=f"Fetch one {command}.")
        p.add_argument("name", help=f"Name of the {command}.")
        p.add_argument("--shards", default=None, help="Comma-separated shards to request.")

    sub.choices["nation"].add_argument(
        "--password",
        default=None,
        help="Nation password for private shards (default: NS_PASSWORD).",
    )

    p = sub.add_parser("wa", help="Fetch World Assembly shards.")
    p.add_argument("council", type=int, choices=[1, 2], help="1 = General Assembly, 2 = Security Council.")
    p.add_argument("--shards", default=None, help="Comma-separated shards to request.")
    p.add_argument("--resolution", type=int, default=None, help="ID of a passed resolution.")

    p = sub.add_parser("world", help="Fetch world shards.")
    p.add_argument("--shards", required=True, help="Comma-separated shards to request.")

    p = sub.add_parser("card", help="Fetch one trading card.")
    p.add_argument("card_id", type=int, help="Card ID (the depicted nation's database ID).")
    p.add_argument("season", type=int, help="Card season.")
    p.add_argument("--shards", default=None, help="Comma-separated card shards (e.g. owners,markets).")

    p = sub.add_parser("dump", help="Read a daily data dump.")
    p.add_argument("kind", choices=["nations", "regions"])
    p.add_argument(
        "--mode",
        choices=[m.value for m in DumpMode],
        default=DumpMode.LOCAL_OR_DOWNLOAD.value,
        help="Where to read the dump from (default: %(default)s).",
    )
    p.add_argument(
        "--match",
        action="append",
        default=None,
        help="Keep only entries with this name. Can be specified multiple times.",
    )
    p.add_argument("--directory", default=None, help="Directory holding local dump copies.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    try:
        product = asyncio.run(_run(args))
    except (NSError, ValueError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    json.dump(product, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
