"""stepforge check <analysis> — static analysis only, no output written."""
from __future__ import annotations

import sys

from stepforge.commands.project import load_project, resolve_analysis
from stepforge.compiler import format_errors, has_errors, parse_analysis_yaml, validate_analysis
from stepforge.engine.dedup import unique_steps
from stepforge.types import CATEGORIES


def cmd_check(analysis_name: str, cwd: str):
    analysis_path = resolve_analysis(analysis_name, cwd)
    if analysis_path is None:
        print(f"Analysis file not found: {analysis_name}", file=sys.stderr)
        sys.exit(1)

    try:
        project = load_project(cwd)
        analysis = parse_analysis_yaml(analysis_path.read_text(encoding="utf-8"))
    except ValueError as e:
        print(f"✗ Parse error: {e}", file=sys.stderr)
        sys.exit(1)

    errors = validate_analysis(analysis, project.registry, project.config)
    if has_errors(errors):
        print(f'✗ Analysis "{analysis.feature_name}" failed validation:')
        print(format_errors(errors))
        sys.exit(1)

    counts = ", ".join(f"{len(unique_steps(analysis.scenarios, c))} {c}" for c in CATEGORIES)
    print(f'✓ Analysis "{analysis.feature_name}" is valid ({counts})')
    if errors:
        print(format_errors(errors))
