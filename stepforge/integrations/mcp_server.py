"""MCP Server — exposes stepforge_* tools to MCP clients."""
from __future__ import annotations

import json
import os

from mcp.server.fastmcp import FastMCP

from stepforge.commands.patterns import format_registry
from stepforge.commands.project import Project, load_project
from stepforge.compiler import format_errors, has_errors, parse_analysis, validate_analysis
from stepforge.engine import assemble
from stepforge.engine.dedup import unique_steps
from stepforge.types import CATEGORIES

mcp = FastMCP("stepforge")


def _get_project() -> Project:
    return load_project(os.getcwd())


@mcp.tool()
def stepforge_generate(analysis: dict) -> str:
    """Generate a cucumber-js step definitions module from an analysis mapping."""
    try:
        project = _get_project()
        parsed = parse_analysis(analysis)
        errors = validate_analysis(parsed, project.registry, project.config)
        if has_errors(errors):
            return json.dumps({"error": "Analysis failed validation", "details": format_errors(errors)}, ensure_ascii=False)
        return json.dumps({
            "featureName": parsed.feature_name,
            "content": assemble(parsed, project.registry, project.config),
            "warnings": [str(e) for e in errors],
        }, ensure_ascii=False, indent=2)
    except Exception as e:
        return json.dumps({"error": str(e)}, ensure_ascii=False)


@mcp.tool()
def stepforge_check(analysis: dict) -> str:
    """Validate an analysis mapping without generating code."""
    try:
        project = _get_project()
        parsed = parse_analysis(analysis)
        errors = validate_analysis(parsed, project.registry, project.config)
        return json.dumps({
            "valid": not has_errors(errors),
            "steps": {c: len(unique_steps(parsed.scenarios, c)) for c in CATEGORIES},
            "findings": [
                {"level": e.level, "message": e.message, "step": e.step, "category": e.category} for e in errors
            ],
        }, ensure_ascii=False, indent=2)
    except Exception as e:
        return json.dumps({"error": str(e)}, ensure_ascii=False)


@mcp.tool()
def stepforge_list_patterns() -> str:
    """List the effective step pattern registry in match order."""
    try:
        return format_registry(_get_project().registry)
    except Exception as e:
        return json.dumps({"error": str(e)}, ensure_ascii=False)


def run_server():
    mcp.run(transport="stdio")
