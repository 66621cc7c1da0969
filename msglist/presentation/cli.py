import argparse
import json
import logging
import sys
import time
import uuid
from datetime import datetime, timedelta, timezone

import httpx

from msglist.config.settings import settings
from msglist.container import configure_container, container
from msglist.core.errors import SearchError
from msglist.core.models.search import SearchSpec, SortClause, TimeRange
from msglist.core.services.message_list_service import MessageListService

logger = logging.getLogger(__name__)


def wait_for_backend(attempts: int = 30) -> bool:
    """Wait until the search backend answers.

    Returns:
        True if backend ready, False otherwise.
    """
    base_url = f"{settings.es_scheme}://{settings.es_host}:{settings.es_port}"
    logger.info(f"Checking search backend: {base_url}")

    for attempt in range(attempts):
        try:
            resp = httpx.get(base_url, timeout=5)
            if resp.status_code == 200:
                version = resp.json().get("version", {}).get("number", "unknown")
                logger.info(f"Backend is ready (version {version})")
                return True
            logger.info(f"Backend answered {resp.status_code}")
        except httpx.HTTPError:
            logger.info(f"Waiting for backend... ({attempt + 1}/{attempts})")
        time.sleep(2)

    logger.error("Search backend not available")
    return False


def parse_sort(value: str) -> SortClause:
    field, _, order = value.rpartition(":")
    if not field:
        return SortClause.create(value)
    return SortClause.create(field, order)


def parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def build_spec(args: argparse.Namespace) -> SearchSpec:
    to = parse_time(args.to) if args.to else datetime.now(timezone.utc)
    from_ = parse_time(args.from_) if args.from_ else to - timedelta(minutes=5)
    fields = [f.strip() for f in args.fields.split(",") if f.strip()] if args.fields else []

    return SearchSpec(
        id=args.id or str(uuid.uuid4()),
        name=args.name,
        query_string=args.query,
        time_range=TimeRange(from_=from_, to=to),
        limit=settings.default_limit if args.limit is None else args.limit,
        offset=args.offset,
        fields=tuple(fields),
        sorts=tuple(parse_sort(s) for s in args.sort),
        effective_stream_ids=frozenset(args.stream),
    )


def cmd_ping(args: argparse.Namespace) -> int:
    """Ping command - wait for the backend."""
    return 0 if wait_for_backend(args.attempts) else 1


def cmd_search(args: argparse.Namespace) -> int:
    """Search command - run a message list search and print it."""
    configure_container(settings)
    service = container.resolve(MessageListService)

    try:
        result = service.search(build_spec(args))
    except SearchError as e:
        logger.error(f"Search failed: {e}")
        return 1

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False, default=str))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="msglist", description="Message list search")
    commands = parser.add_subparsers(dest="command", required=True)

    ping = commands.add_parser("ping", help="Wait for the search backend")
    ping.add_argument("--attempts", type=int, default=30)
    ping.set_defaults(handler=cmd_ping)

    search = commands.add_parser("search", help="Run a message list search")
    search.add_argument("query", nargs="?", default="*")
    search.add_argument("--from", dest="from_", help="ISO-8601 start (default: 5 minutes ago)")
    search.add_argument("--to", help="ISO-8601 end (default: now)")
    search.add_argument("--limit", type=int)
    search.add_argument("--offset", type=int, default=0)
    search.add_argument("--fields", help="Comma separated field names")
    search.add_argument("--sort", action="append", default=[], help="field:ASC|DESC")
    search.add_argument("--stream", action="append", default=[], help="Stream id")
    search.add_argument("--id", help="Search type id")
    search.add_argument("--name", help="Search type name")
    search.set_defaults(handler=cmd_search)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(level=settings.log_level, format="%(message)s")
    args = build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except (SearchError, ValueError) as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
