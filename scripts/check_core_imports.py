#!/usr/bin/env python3
"""
Keep the core layer self-contained.

Modules under src/cloud_alm_mcp/core/ may not import the MCP server runtime
or the higher layers (api, tools, server). Relative imports that climb out
of the core package (``from ..api import x``) count as well.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path
from typing import Iterable, List

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "cloud_alm_mcp" / "core"

FORBIDDEN_PREFIXES = (
    "mcp.server",
    "fastmcp",
    "cloud_alm_mcp.api",
    "cloud_alm_mcp.tools",
    "cloud_alm_mcp.server",
)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def _imported_modules(tree: ast.AST) -> Iterable[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom):
            if node.level >= 2:
                # climbs above cloud_alm_mcp.core
                yield node.lineno, "cloud_alm_mcp." + (node.module or "")
            elif node.level == 0 and node.module:
                yield node.lineno, node.module


def scan_file(path: Path) -> List[str]:
    errors: List[str] = []
    tree = ast.parse(path.read_text(encoding="utf-8"))
    for lineno, module in _imported_modules(tree):
        if is_forbidden(module) or module == "cloud_alm_mcp.":
            errors.append(f"{path}:{lineno}: forbidden import '{module}'")
    return errors


def main(core_dir: Path = CORE_DIR) -> int:
    violations: List[str] = []
    for py_file in sorted(core_dir.rglob("*.py")):
        violations.extend(scan_file(py_file))

    for v in violations:
        print(v, file=sys.stderr)
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
