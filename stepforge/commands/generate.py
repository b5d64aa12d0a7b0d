"""stepforge generate <analysis> — validate an analysis and emit its step definitions."""
from __future__ import annotations

import sys
from pathlib import Path

from stepforge.commands.project import load_project, output_filename, resolve_analysis
from stepforge.compiler import format_errors, has_errors, parse_analysis_yaml, validate_analysis
from stepforge.engine import assemble
from stepforge.engine.dedup import unique_steps
from stepforge.types import CATEGORIES


def cmd_generate(analysis_name: str, cwd: str, output: str | None = None):
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

    # Static analysis
    errors = validate_analysis(analysis, project.registry, project.config)
    if has_errors(errors):
        print(f'✗ Analysis "{analysis.feature_name}" failed validation:', file=sys.stderr)
        print(format_errors(errors), file=sys.stderr)
        sys.exit(1)

    content = assemble(analysis, project.registry, project.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)

    # "-o -" streams the module to stdout
    if output == "-":
        sys.stdout.write(content)
        return

    if output:
        out_path = Path(cwd) / output
    else:
        out_path = Path(cwd) / project.config.output_dir / output_filename(analysis.feature_name)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(content, encoding="utf-8")

    step_count = sum(len(unique_steps(analysis.scenarios, c)) for c in CATEGORIES)
    print(f'✓ Step definitions for "{analysis.feature_name}" written to {out_path} ({step_count} steps)')
