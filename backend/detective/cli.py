"""Command-line interface for the path synthesis engine.

Reads an investigation graph as JSON (file or stdin) and prints either the
ranked path list or a briefing.

Exit codes:
    0 - success
    1 - the graph was rejected (validation, duplicate ids, dangling edges)
        or the policy configuration is invalid
    2 - the input could not be read or is not JSON
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from detective.config import get_settings
from detective.core.errors import DetectiveError
from detective.core.path_policy import PathPolicy
from detective.infrastructure.observability import setup_logging
from detective.services.path_service import brief_investigation, synthesize_paths

logger = logging.getLogger(__name__)


class InputError(Exception):
    """Input file missing, unreadable or not JSON."""


def load_json(source: str) -> object:
    """Load JSON from a path, or from stdin when source is '-'."""
    try:
        if source == "-":
            return json.load(sys.stdin)
        with Path(source).open(encoding="utf-8") as fh:
            return json.load(fh)
    except OSError as e:
        raise InputError(f"Cannot read {source}: {e}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"{source} is not valid JSON: {e}") from e


def resolve_policy(args: argparse.Namespace) -> PathPolicy:
    """Policy from settings, with CLI overrides. Raises ValueError on a bad knob."""
    policy = get_settings().path_policy()
    if args.depth is not None:
        policy = dataclasses.replace(policy, max_depth=args.depth)
    return policy


def _print(data: object, indent: int | None) -> None:
    print(json.dumps(data, indent=indent, ensure_ascii=False))


def cmd_paths(args: argparse.Namespace) -> int:
    """Print ranked paths for a graph."""
    payload = load_json(args.graph)
    paths = synthesize_paths(
        payload,
        policy=args.policy,
        investigation_id=args.investigation_id,
        include_breakdown=args.breakdown,
    )
    _print(paths, args.indent)
    return 0


def cmd_briefing(args: argparse.Namespace) -> int:
    """Print a briefing for a graph and optional thread."""
    payload = load_json(args.graph)
    thread = load_json(args.thread) if args.thread else None
    briefing = brief_investigation(
        payload,
        thread=thread,
        policy=args.policy,
        investigation_id=args.investigation_id,
    )
    _print(briefing, args.indent)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="detective",
        description="Investigation path synthesis - ranked competing hypotheses from an evidence graph",
    )
    parser.add_argument(
        "--investigation-id",
        help="Identifier attached to log records and error envelopes",
    )
    parser.add_argument(
        "--depth",
        type=int,
        help="Override the maximum enumeration depth",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default 2)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    paths_parser = subparsers.add_parser("paths", help="Rank and classify investigation paths")
    paths_parser.add_argument("graph", help="Graph JSON file, or - for stdin")
    paths_parser.add_argument("--breakdown", action="store_true",
                              help="Include per-signal score breakdown")
    paths_parser.set_defaults(func=cmd_paths)

    briefing_parser = subparsers.add_parser("briefing", help="Summarize paths into a briefing")
    briefing_parser.add_argument("graph", help="Graph JSON file, or - for stdin")
    briefing_parser.add_argument("--thread", help="Investigation thread JSON file")
    briefing_parser.set_defaults(func=cmd_briefing)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        settings = get_settings()
        args.policy = resolve_policy(args)
    except ValueError as e:
        # Invalid policy knob (--depth or DETECTIVE_* settings)
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1
    setup_logging(settings.log_level, settings.log_format)

    try:
        return args.func(args)
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except DetectiveError as e:
        logger.error(e.message, extra={"error_code": e.code})
        print(json.dumps(e.to_response(), ensure_ascii=False), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
