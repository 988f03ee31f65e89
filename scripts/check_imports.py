#!/usr/bin/env python3
"""CI enforcement: process spawning only happens in effects.py.

Providers describe commands and hand them to a ``CommandExecutor``.
Any ``subprocess`` import, ``os.system``/``os.popen`` call or
``asyncio.create_subprocess_*`` call elsewhere in the package is a
violation.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ALLOWED_FILES = {"effects.py"}
SRC_DIR = Path(__file__).resolve().parent.parent / "src" / "central_flow"

_SPAWN_ATTRIBUTES = {
    "create_subprocess_exec",
    "create_subprocess_shell",
    "system",
    "popen",
    "spawnv",
    "spawnvp",
}


def check() -> list[str]:
    violations: list[str] = []
    for py_file in SRC_DIR.rglob("*.py"):
        if py_file.name in ALLOWED_FILES:
            continue
        try:
            tree = ast.parse(py_file.read_text())
        except SyntaxError:
            continue
        rel = py_file.relative_to(SRC_DIR)
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name == "subprocess" or alias.name.endswith(".subprocess"):
                        violations.append(f"{rel}:{node.lineno}: import {alias.name}")
            elif isinstance(node, ast.ImportFrom):
                if node.module and node.module.split(".")[-1] == "subprocess":
                    violations.append(f"{rel}:{node.lineno}: from {node.module}")
            elif isinstance(node, ast.Attribute) and node.attr in _SPAWN_ATTRIBUTES:
                violations.append(f"{rel}:{node.lineno}: .{node.attr}")
    return violations


def main() -> None:
    violations = check()
    if violations:
        print("ERROR: process spawning found outside effects.py:")
        for v in violations:
            print(f"  {v}")
        sys.exit(1)
    print("OK: no process spawning outside effects.py")


if __name__ == "__main__":
    main()
