#!/usr/bin/env python3
"""
TRADE semantics - Indicator Condition Inspector

Non-interactive CLI over the semantics registry. This is a PURE SHELL - it only:
- Parses arguments
- Calls registry / validation functions
- Prints results

Usage:
  python semantics_cli.py list                     # Indicators and their subjects
  python semantics_cli.py show MACD                # Subject/target/operator table
  python semantics_cli.py validate rules.yml       # Validate a YAML condition file
"""

import argparse
import json
import sys

from trade_semantics.cli.utils import (
    build_indicator_table,
    build_pairing_table,
    build_validation_table,
    console,
    print_error,
    summarize,
)
from trade_semantics.config.config import get_config
from trade_semantics.semantics.conditions import load_conditions, validate_conditions
from trade_semantics.semantics.registry import get_registry


def _condition_cap(value: str) -> int:
    """argparse type for --max-conditions: 0 or a positive integer."""
    try:
        cap = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'") from None
    if cap < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {cap}")
    return cap


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for semantics_cli."""
    parser = argparse.ArgumentParser(
        description="TRADE - Indicator condition semantics inspector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python semantics_cli.py list
  python semantics_cli.py show RSI
  python semantics_cli.py show MACD --json
  python semantics_cli.py validate strategies/entry_rules.yml
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List indicators and their subjects")
    list_parser.add_argument("--json", action="store_true", dest="json_output", help="Output results as JSON")

    show_parser = subparsers.add_parser("show", help="Show one indicator's pairings")
    show_parser.add_argument("indicator", help="Indicator id (e.g., RSI, MACD)")
    show_parser.add_argument("--json", action="store_true", dest="json_output", help="Output results as JSON")

    validate_parser = subparsers.add_parser("validate", help="Validate a YAML condition file")
    validate_parser.add_argument("path", help="YAML file with a top-level 'conditions' list")
    validate_parser.add_argument(
        "--max-conditions", type=_condition_cap, default=None,
        help="Override the configured rule-set size cap (0 disables)",
    )
    validate_parser.add_argument("--json", action="store_true", dest="json_output", help="Output results as JSON")

    return parser


def handle_list(args) -> int:
    registry = get_registry()
    if args.json_output:
        payload = [registry.get_semantics(i).to_dict() for i in registry.list_indicators()]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        console.print(build_indicator_table(registry))
    return 0


def handle_show(args) -> int:
    registry = get_registry()
    semantics = registry.get_semantics(args.indicator)
    if semantics is None:
        print_error(
            f"Unknown indicator '{args.indicator}'",
            f"Known: {', '.join(registry.list_indicators())}",
        )
        return 1

    if args.json_output:
        print(json.dumps(semantics.to_dict(), indent=2, ensure_ascii=False))
    else:
        console.print(build_pairing_table(registry, args.indicator))
    return 0


def handle_validate(args) -> int:
    conditions = load_conditions(args.path)

    max_conditions = get_config().semantics.max_conditions
    if args.max_conditions is not None:
        max_conditions = args.max_conditions or None

    results = validate_conditions(conditions, max_conditions=max_conditions)

    if args.json_output:
        print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
    else:
        console.print(build_validation_table(conditions, results))
        console.print(summarize(results))
    return 0 if all(r.ok for r in results) else 1


HANDLERS = {
    "list": handle_list,
    "show": handle_show,
    "validate": handle_validate,
}


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handler = HANDLERS.get(args.command)
    if handler is None:
        parser.print_help()
        return 2

    try:
        return handler(args)
    except (ValueError, FileNotFoundError) as e:
        print_error(str(e), f"Command: {args.command}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
