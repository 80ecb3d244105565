"""
EmySound client CLI - register tracks and query for similar ones.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

from emysound_client.core.config import Config, load_config
from emysound_client.core.output import setup_loguru
from emysound_client.domain import operations
from emysound_client.domain.exceptions import EmySoundError
from emysound_client.domain.media import FromFile
from emysound_client.domain.models import QueryResult, sort_by_query_coverage
from emysound_client.domain.transport import HttpTransport, Transport


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="emysound-client",
        description="Register audio tracks with an EmySound server and query for matches",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Show only match scores and errors"
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="Path to config.toml"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    insert_parser = subparsers.add_parser("insert", help="Add tracks to the database")
    insert_parser.add_argument("-f", "--file", type=Path, required=True, help="Track filename")
    insert_parser.add_argument("-a", "--artist", required=True, help="Track artist")
    insert_parser.add_argument("-t", "--title", required=True, help="Track title")
    insert_parser.add_argument(
        "-e", "--extra", default=None, help="Extra metadata folded into the track id"
    )

    query_parser = subparsers.add_parser(
        "query", help="Query database for similar tracks"
    )
    query_parser.add_argument("-f", "--file", type=Path, required=True, help="Track filename")
    query_parser.add_argument(
        "-m",
        "--min-confidence",
        type=float,
        default=None,
        help="Minimum match confidence in [0, 1] (default from config)",
    )

    return parser


def format_result(result: QueryResult, quiet: bool = False) -> str:
    """Render one result as "<coverage> <track id>[ <artist> - <title>]"."""
    line = f"{result.query_coverage or 0.0:0.3f} {result.track.id}"
    if quiet:
        return line

    label = " - ".join(p for p in (result.track.artist, result.track.title) if p)
    return f"{line} {label}" if label else line


def run_insert(
    transport: Transport, config: Config, args: argparse.Namespace
) -> int:
    identity = operations.insert(
        transport,
        FromFile(args.file),
        args.artist,
        args.title,
        extra=args.extra,
        policy=config.identity.policy(),
    )
    print(identity.value)
    return 0


def run_query(
    transport: Transport, config: Config, args: argparse.Namespace
) -> int:
    min_confidence = (
        args.min_confidence
        if args.min_confidence is not None
        else config.query.min_confidence
    )
    results = operations.query(transport, FromFile(args.file), min_confidence)
    logger.debug(f"{results!r}")

    if not results:
        logger.info("No results.")
        if not args.quiet:
            print("No matches.")
        return 0

    for result in sort_by_query_coverage(results):
        print(format_result(result, quiet=args.quiet))
    return 0


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, run one command and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    level = "WARNING" if args.quiet else config.logging.level
    setup_loguru(
        config.logging.log_file,
        level=level,
        console_output=config.logging.console_output and not args.quiet,
    )

    with HttpTransport(
        api_root=config.service.api_root,
        username=config.service.username,
        password=config.service.password,
        timeout=config.service.timeout_seconds,
    ) as transport:
        try:
            if args.command == "insert":
                return run_insert(transport, config, args)
            return run_query(transport, config, args)
        except EmySoundError as e:
            logger.error(f"Failed to {args.command} track {args.file}: {e}")
            print(f"Error: failed to {args.command} track {args.file}: {e}", file=sys.stderr)
            return 1


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the emysound-client command."""
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
