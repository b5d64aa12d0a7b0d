"""Assemble a complete cucumber-js step definitions module.

Section order is fixed and part of the output contract:

  1. header comment naming the feature
  2. imports (core, page objects, integration helper)
  3. page object instances (omitted without page objects)
  4. Before/After lifecycle hooks
  5. Given steps
  6. When steps
  7. Then steps
  8. helper functions

Output is a pure function of the inputs: identical analysis, registry and
config always yield byte-identical text.
"""
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from stepforge.compiler.parser import parse_analysis
from stepforge.engine.dedup import unique_steps
from stepforge.engine.page_objects import bind
from stepforge.engine.patterns import DEFAULT_REGISTRY
from stepforge.engine.render import INDENT, comment_text, js_string
from stepforge.engine.synthesizer import render_step
from stepforge.types import GIVEN, THEN, WHEN, AnalysisResult, GeneratorConfig

if TYPE_CHECKING:
    from stepforge.engine.patterns import PatternRegistry

# Generated helper API consumed by hand-written steps; do not change silently
WAIT_TIMEOUT_MS = 5000
RETRY_COUNT = 3
RETRY_DELAY_MS = 1000

DATA_KINDS = ("project", "feature", "configuration")
DEFAULT_INTEGRATIONS = ("dataManager", "configManager")

_STEP_BLOCK_TITLES = {
    GIVEN: "Given Steps - Setup and Preconditions",
    WHEN: "When Steps - Actions and Interactions",
    THEN: "Then Steps - Verification and Assertions",
}

_JS_IDENT = re.compile(r"^[A-Za-z_$][\w$]*$")


def generate_step_definitions(
    analysis: AnalysisResult | Mapping[str, Any],
    registry: PatternRegistry = DEFAULT_REGISTRY,
    config: GeneratorConfig | None = None,
) -> str:
    """Entry point: parse a raw mapping or check a built AnalysisResult, then assemble."""
    analysis = parse_analysis(analysis)
    return assemble(analysis, registry, config)


def assemble(
    analysis: AnalysisResult,
    registry: PatternRegistry = DEFAULT_REGISTRY,
    config: GeneratorConfig | None = None,
) -> str:
    config = config or GeneratorConfig()
    binding = bind(analysis.page_object_design, config.page_objects_dir)
    architecture = analysis.technical_architecture

    sections = [
        _header(analysis.feature_name),
        _imports(analysis, binding.imports, config),
        binding.instantiation,
        _hooks(analysis),
        _step_block(analysis, GIVEN, registry, architecture),
        _step_block(analysis, WHEN, registry, architecture),
        _step_block(analysis, THEN, registry, architecture),
        _helpers(analysis),
    ]
    return "\n\n".join(s for s in sections if s) + "\n"


# ─── Sections ───

def _header(feature_name: str) -> str:
    name = comment_text(feature_name)
    return "\n".join([
        "/**",
        f" * Step Definitions: {name}",
        " *",
        f" * Generated step definitions for {name} feature.",
        " * Includes page objects, data setup, and integration test patterns.",
        " */",
    ])


def _imports(analysis: AnalysisResult, page_object_imports: list[str], config: GeneratorConfig) -> str:
    lines = [
        "const { Given, When, Then, Before, After } = require('@cucumber/cucumber');",
        "const { expect } = require('@playwright/test');",
        f"const TestDataFactory = require({js_string(config.support_dir + '/test-data-factory')});",
        f"const TestDataManager = require({js_string(config.support_dir + '/test-data-manager')});",
        *page_object_imports,
    ]
    if analysis.integration_points:
        lines.append(f"const IntegrationTestHelper = require({js_string(config.support_dir + '/integration-helper')});")
    return "\n".join(lines)


def _mock_names(mock_requirements: Any) -> list[str]:
    if isinstance(mock_requirements, Mapping):
        return [str(k) for k in mock_requirements]
    if isinstance(mock_requirements, Sequence) and not isinstance(mock_requirements, str):
        names = []
        for item in mock_requirements:
            if isinstance(item, Mapping):
                names.append(str(item.get("name", "unnamed")))
            else:
                names.append(str(item))
        return names
    return []


def _feature_setup(analysis: AnalysisResult) -> list[str]:
    lines = [
        f"// Initialize {comment_text(analysis.feature_name)} specific components",
        "// Setup mocks and test data",
        *(f"// Mock required: {comment_text(name)}" for name in _mock_names(analysis.mock_requirements)),
        "// Configure integration points",
    ]
    if analysis.integration_points:
        lines.append("this.integrationHelper = new IntegrationTestHelper(this);")
    return lines


def _feature_cleanup(analysis: AnalysisResult) -> list[str]:
    return [
        f"// Cleanup {comment_text(analysis.feature_name)} specific resources",
        "// Reset mocks",
        "// Clear temporary data",
    ]


def _hooks(analysis: AnalysisResult) -> str:
    before = [
        "// Initialize test data manager",
        "this.testDataManager = new TestDataManager(this);",
        "",
        "// Setup feature-specific test environment",
        *_feature_setup(analysis),
    ]
    after = [
        "// Cleanup test data",
        "if (this.testDataManager) {",
        f"{INDENT}await this.testDataManager.cleanup();",
        "}",
        "",
        "// Feature-specific cleanup",
        *_feature_cleanup(analysis),
    ]
    return "\n".join([
        "// Test Setup and Cleanup Hooks",
        "Before(async function() {",
        *_indent(before),
        "});",
        "",
        "After(async function() {",
        *_indent(after),
        "});",
    ])


def _step_block(analysis: AnalysisResult, category: str, registry: PatternRegistry, architecture: Any) -> str:
    steps = unique_steps(analysis.scenarios, category)
    parts = [f"// {_STEP_BLOCK_TITLES[category]}"]
    parts.extend(render_step(step, category, registry, architecture) for step in steps)
    return "\n\n".join(parts)


def _helpers(analysis: AnalysisResult) -> str:
    return "\n\n".join([
        "// Helper Functions",
        _data_helpers(),
        _ui_helpers(),
        _integration_helpers(analysis),
    ])


def _data_helpers() -> str:
    cases: list[str] = []
    for kind in DATA_KINDS:
        cases.append(f"case '{kind}':")
        cases.append(f"{INDENT}return TestDataFactory.create{kind.capitalize()}(overrides);")
    return "\n".join([
        "async function setupTestData(dataType, overrides = {}) {",
        f"{INDENT}switch (dataType) {{",
        *_indent(cases, 2),
        f"{INDENT * 2}default:",
        f"{INDENT * 3}throw new Error(`Unknown data type: ${{dataType}}`);",
        f"{INDENT}}}",
        "}",
        "",
        "async function cleanupTestData(world) {",
        f"{INDENT}if (world.testDataManager) {{",
        f"{INDENT * 2}await world.testDataManager.cleanup();",
        f"{INDENT}}}",
        "}",
    ])


def _ui_helpers() -> str:
    return "\n".join([
        f"async function waitForElementVisible(page, selector, timeout = {WAIT_TIMEOUT_MS}) {{",
        f"{INDENT}await page.waitForSelector(selector, {{ state: 'visible', timeout }});",
        "}",
        "",
        f"async function waitForElementHidden(page, selector, timeout = {WAIT_TIMEOUT_MS}) {{",
        f"{INDENT}await page.waitForSelector(selector, {{ state: 'hidden', timeout }});",
        "}",
        "",
        f"async function retryOperation(operation, maxRetries = {RETRY_COUNT}, delay = {RETRY_DELAY_MS}) {{",
        f"{INDENT}for (let attempt = 1; attempt <= maxRetries; attempt++) {{",
        f"{INDENT * 2}try {{",
        f"{INDENT * 3}return await operation();",
        f"{INDENT * 2}}} catch (error) {{",
        f"{INDENT * 3}if (attempt === maxRetries) throw error;",
        f"{INDENT * 3}await new Promise(resolve => setTimeout(resolve, delay));",
        f"{INDENT * 2}}}",
        f"{INDENT}}}",
        "}",
    ])


def _world_member(name: str) -> str:
    return f"world.{name}" if _JS_IDENT.match(name) else f"world[{js_string(name)}]"


def _integration_names(analysis: AnalysisResult) -> list[str]:
    names = list(DEFAULT_INTEGRATIONS)
    for point in analysis.integration_points:
        if point.name not in names:
            names.append(point.name)
    return names


def _integration_helpers(analysis: AnalysisResult) -> str:
    cases: list[str] = []
    for name in _integration_names(analysis):
        cases.append(f"case {js_string(name)}:")
        cases.append(f"{INDENT}return await {_world_member(name)}.validate();")
    return "\n".join([
        "async function validateIntegrationPoint(world, integrationName) {",
        f"{INDENT}switch (integrationName) {{",
        *_indent(cases, 2),
        f"{INDENT * 2}default:",
        f"{INDENT * 3}return true;",
        f"{INDENT}}}",
        "}",
        "",
        "async function mockExternalDependency(dependencyName, mockBehavior) {",
        f"{INDENT}// TODO: Implement mock setup for external dependencies",
        f"{INDENT}console.log(`Mocking ${{dependencyName}} with behavior ${{mockBehavior}}`);",
        "}",
    ])


def _indent(lines: list[str], depth: int = 1) -> list[str]:
    return [f"{INDENT * depth}{line}" if line else "" for line in lines]
