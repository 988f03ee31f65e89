"""Command handlers for ``python -m central_flow``."""

from __future__ import annotations

import sys
from argparse import Namespace

import yaml

from central_flow.config import LauncherConfig, load_config_or_default
from central_flow.errors import log_and_describe_failure


def load_config(args: Namespace) -> LauncherConfig:
    """Config from ``--config``/``$CENTRAL_FLOW_CONFIG``; exits 2 on a bad file."""
    try:
        return load_config_or_default(args.config or None)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        message = log_and_describe_failure(
            operation="load_config",
            exc=exc,
            user_message=f"Error: could not load config: {exc}",
        )
        print(message, file=sys.stderr)
        sys.exit(2)
