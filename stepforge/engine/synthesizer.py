"""Stub step definitions for steps no registered pattern recognises.

The body is picked by plain substring heuristics on the step text. Every
stub carries a ``TODO: Implement`` completion marker and is still a complete,
bindable step definition so the generated module always loads.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from stepforge.engine.extraction import (
    extract_element,
    extract_expected_content,
    extract_expected_text,
    extract_field,
    extract_value,
)
from stepforge.engine.render import comment_text, js_string, step_definition
from stepforge.types import GIVEN, THEN, WHEN

if TYPE_CHECKING:
    from stepforge.engine.patterns import PatternRegistry
    from stepforge.types import Step

COMPLETION_MARKER = "TODO: Implement"

_PHASES = {
    GIVEN: "setup",
    WHEN: "action",
    THEN: "verification",
}


def _pending(phase: str) -> list[str]:
    return [f"// {COMPLETION_MARKER} {phase} logic", "return 'pending';"]


def _setup_body(text: str) -> list[str]:
    if "project" in text:
        return [
            "// Setup project data",
            "const projectData = TestDataFactory.createProject();",
            "this.currentProject = await this.testDataManager.createTestProject(projectData);",
        ]
    if "feature" in text:
        return [
            "// Setup feature data",
            "const featureData = TestDataFactory.createFeature();",
            "this.currentFeature = await this.testDataManager.createTestFeature(featureData);",
        ]
    return _pending("setup")


def _action_body(text: str) -> list[str]:
    if "click" in text:
        return [
            "// Click action",
            f"await pageObjects.main.click({js_string(extract_element(text))});",
        ]
    if "enter" in text or "type" in text:
        return [
            "// Input action",
            f"const value = {js_string(extract_value(text))};",
            f"const field = {js_string(extract_field(text))};",
            "await pageObjects.main.type(field, value);",
        ]
    return _pending("action")


def _verification_body(text: str) -> list[str]:
    if "should see" in text:
        return [
            "// Visibility verification",
            f"const isVisible = await pageObjects.main.isVisible({js_string(extract_expected_text(text))});",
            "expect(isVisible).toBe(true);",
        ]
    if "should contain" in text:
        return [
            "// Content verification",
            "const actualContent = await pageObjects.main.getText('.content');",
            f"expect(actualContent).toContain({js_string(extract_expected_content(text))});",
        ]
    return _pending("verification")


_BODIES = {
    GIVEN: _setup_body,
    WHEN: _action_body,
    THEN: _verification_body,
}


def synthesize(step: Step, category: str, architecture: Any = None) -> str:
    """Placeholder step definition for ``step`` under ``category``."""
    if category not in _BODIES:
        raise ValueError(f"Unknown step category: {category!r}")
    marker = f'// {COMPLETION_MARKER} {_PHASES[category]} for "{comment_text(step.text)}"'
    return step_definition(step, [marker, *_BODIES[category](step.text)])


def render_step(step: Step, category: str, registry: PatternRegistry, architecture: Any = None) -> str:
    """Registry match if any, synthesized stub otherwise."""
    pattern = registry.match(step, category)
    if pattern:
        return pattern.generator(step, architecture)
    return synthesize(step, category, architecture)
