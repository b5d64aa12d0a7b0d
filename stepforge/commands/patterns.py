"""stepforge patterns — list the effective pattern registry in match order."""
from __future__ import annotations

import sys

from stepforge.commands.project import load_project
from stepforge.engine.patterns import DEFAULT_REGISTRY
from stepforge.types import CATEGORIES


def format_registry(registry) -> str:
    builtin = set(DEFAULT_REGISTRY)
    lines = []
    for category in CATEGORIES:
        patterns = registry.patterns(category)
        lines.append(f"{category} ({len(patterns)}):")
        for i, p in enumerate(patterns, 1):
            origin = "" if p in builtin else " [project]"
            desc = f" — {p.description}" if p.description else ""
            lines.append(f"  {i}. {p.name}{origin}{desc}")
    return "\n".join(lines)


def cmd_patterns(cwd: str):
    try:
        project = load_project(cwd)
    except ValueError as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)
    print(format_registry(project.registry))
