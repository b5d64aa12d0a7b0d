"""Shared fixtures for stepforge tests."""
from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from stepforge.commands.init import init_project

if TYPE_CHECKING:
    from pathlib import Path


def make_analysis(*scenarios, feature="Project Management", **extra) -> dict:
    """Raw analysis mapping; each scenario is a list of (keyword, text) or (keyword, text, data)."""
    raw = {
        "featureName": feature,
        "cucumberScenarios": [
            {
                "name": f"Scenario {i + 1}",
                "steps": [
                    {"keyword": s[0], "text": s[1], **({"dataTable": s[2]} if len(s) > 2 else {})}
                    for s in steps
                ],
            }
            for i, steps in enumerate(scenarios)
        ],
    }
    raw.update(extra)
    return raw


@pytest.fixture
def analysis_factory():
    """Factory fixture building raw analysis mappings."""
    return make_analysis


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A freshly initialized project with the example analysis."""
    init_project(target_dir=tmp_path)
    return tmp_path


@pytest.fixture
def write_pattern(project_dir: Path):
    """Write a pattern file into .stepforge/patterns/."""
    def _write(filename: str, code: str) -> Path:
        dst = project_dir / ".stepforge" / "patterns" / filename
        dst.write_text(code, encoding="utf-8")
        return dst
    return _write
