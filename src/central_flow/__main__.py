"""CLI entry point: python -m central_flow <command>."""

from __future__ import annotations

import argparse
import logging
import sys

from central_flow.icons.categories import AppCategory


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="central-flow",
        description="central-flow launcher CLI",
    )
    parser.add_argument("--config", default="", help="Path to a launcher config YAML file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    se = sub.add_parser("search", help="Search all providers and print ranked results")
    se.add_argument("query", help="Search text (may be empty)")
    se.add_argument("--provider", default=None, help="Only query this provider id")
    se.add_argument("--json", action="store_true", default=False, help="Output as JSON")
    se.add_argument("--run", type=int, default=None, metavar="N", help="Execute result N (1-based)")
    se.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Print commands instead of running them",
    )

    ic = sub.add_parser("icon", help="Resolve an application icon to a data URI")
    ic.add_argument("identifier", help="Icon name, application id or absolute path")
    ic.add_argument(
        "--category",
        choices=[c.value for c in AppCategory],
        default=None,
        help="Fallback category override",
    )

    sub.add_parser("providers", help="List loaded providers and load failures")

    sub.add_parser("playground", help="Interactive launcher playground")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "search":
        from central_flow.cli.search import run_search
        run_search(args)
    elif args.command == "icon":
        from central_flow.cli.icon import run_icon
        run_icon(args)
    elif args.command == "providers":
        from central_flow.cli.search import run_providers
        run_providers(args)
    elif args.command == "playground":
        from central_flow.cli.playground import run_playground
        run_playground(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
