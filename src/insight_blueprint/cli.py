"""CLI entrypoint for querying Insight data sources."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from insight_blueprint.config.loader import load_client_config
from insight_blueprint.source import Source
from insight_blueprint.source.errors import SourceError
from insight_blueprint.source.filters import Filter, FilterOperator, FilterValue
from insight_blueprint.utils.logging import get_logger

logger = get_logger(__name__)


def _parse_scalar(raw: str) -> FilterValue:
    """Keep the text as given unless it converts back to exactly the same text."""
    if raw in ("true", "false"):
        return raw == "true"
    try:
        number = int(raw)
    except ValueError:
        return raw
    return number if str(number) == raw else raw


def parse_filter_arg(arg: str) -> tuple[str, Filter]:
    """
    Parse a ``--filter`` argument.

    Forms: ``field=value`` (equality) and ``field:op=value``. For ``in``,
    the value is a comma-separated list.

    Raises:
        argparse.ArgumentTypeError: If the argument is malformed
    """
    key, sep, raw_value = arg.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Invalid filter '{arg}': expected FIELD[:OP]=VALUE")

    field, _, op = key.partition(":")
    if not op:
        return field, Filter(value=_parse_scalar(raw_value))

    try:
        operator = FilterOperator(op.lower())
    except ValueError:
        choices = ", ".join(o.value for o in FilterOperator)
        raise argparse.ArgumentTypeError(f"Invalid filter operator '{op}' (choose from {choices})")

    if operator is FilterOperator.IN and "," in raw_value:
        value: Any = [_parse_scalar(v) for v in raw_value.split(",")]
    else:
        value = _parse_scalar(raw_value)
    return field, Filter(operator=operator, value=value)


def build_options(args: argparse.Namespace) -> Dict[str, Any]:
    options: Dict[str, Any] = {}

    filters: Dict[str, List[Filter]] = {}
    for field, predicate in args.filter or []:
        filters.setdefault(field, []).append(predicate)
    if filters:
        options["filters"] = filters

    if args.order_by:
        options["order_by"] = {"field": args.order_by}
        if args.direction:
            options["order_by"]["direction"] = args.direction
    if args.page is not None or args.limit is not None:
        options["pagination"] = {"page": args.page, "limit": args.limit}

    if args.aggregate:
        options["aggregation"] = args.aggregate
        if args.group_by:
            options["group_by"] = args.group_by
    return options


def cmd_query(args: argparse.Namespace) -> None:
    """Run one query against the chosen resource and print JSON."""
    config = load_client_config(Path(args.config) if args.config else None)
    source = Source(config)
    resource = getattr(source, args.command)
    options = build_options(args)

    if "aggregation" in options:
        response = resource.get_aggregated(args.chain_id, options)
    else:
        if args.group_by:
            logger.warning("--group-by is ignored without --aggregate")
        response = resource.get(args.chain_id, options)

    print(json.dumps(response.model_dump(mode="json"), indent=2))


def _add_query_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("chain_id", type=str, help="Chain identifier, e.g. 1 for Ethereum mainnet")
    parser.add_argument(
        "--filter",
        type=parse_filter_arg,
        action="append",
        metavar="FIELD[:OP]=VALUE",
        help="Filter predicate; repeat to AND several (ops: gte, gt, lte, lt, ne, in)",
    )
    parser.add_argument(
        "--order-by",
        type=str,
        action="append",
        metavar="FIELD",
        help="Sort field; repeat for a composite key",
    )
    parser.add_argument(
        "--direction",
        type=str,
        choices=["asc", "desc"],
        help="Sort direction",
    )
    parser.add_argument("--page", type=int, help="Page number")
    parser.add_argument("--limit", type=int, help="Page size")
    parser.add_argument(
        "--group-by",
        type=str,
        action="append",
        metavar="FIELD",
        help="Group field for aggregation queries; repeatable",
    )
    parser.add_argument(
        "--aggregate",
        type=str,
        action="append",
        metavar="EXPR",
        help="Aggregation expression such as 'count()'; repeatable. Switches to an aggregation query",
    )
    parser.set_defaults(func=cmd_query)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="insight-blueprint",
        description="Query on-chain events and transactions from the Insight API",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to insight.yaml (default: config/insight.yaml if present)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # events command
    events_parser = subparsers.add_parser("events", help="Query contract events")
    _add_query_arguments(events_parser)

    # transactions command
    transactions_parser = subparsers.add_parser("transactions", help="Query transactions")
    _add_query_arguments(transactions_parser)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except (SourceError, ValueError, FileNotFoundError) as e:
        logger.error(f"Error running command '{args.command}': {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
