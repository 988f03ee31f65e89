"""CLI handler for ``central-flow icon``."""

from __future__ import annotations

from argparse import Namespace

from central_flow.cli import load_config
from central_flow.icons import AppCategory, IconResolver, IconSearchOptions


def run_icon(args: Namespace) -> None:
    icons = IconResolver.from_config(load_config(args))
    category = AppCategory(args.category) if args.category else None

    path = icons.find_icon_path(args.identifier)
    print(f"path: {path or '(fallback)'}")
    print(icons.resolve(args.identifier, IconSearchOptions(category=category)))
