"""Parse analysis descriptors (YAML, JSON or plain mappings) into an AnalysisResult.

Malformed input fails fast with a ValueError naming the offending field, so
no partial module is ever generated from it.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

import yaml

from stepforge.types import (
    CATEGORIES,
    AnalysisResult,
    GeneratorConfig,
    IntegrationPoint,
    PageObjectSpec,
    Scenario,
    Step,
)

# Upstream (camelCase) keys -> internal key
KEYWORD_MAP = {
    "featureName": "feature_name",
    "cucumberScenarios": "scenarios",
    "cucumber_scenarios": "scenarios",
    "technicalArchitecture": "technical_architecture",
    "integrationPoints": "integration_points",
    "mockRequirements": "mock_requirements",
    "pageObjectDesign": "page_object_design",
    "className": "class_name",
    "fileName": "file_name",
    "dataTable": "data",
    "docString": "data",
}

# Keywords that continue the previous step's category
CONJUNCTIONS = frozenset({"And", "But", "*"})

# Well-known page objects: registry name -> (className, fileName)
PAGE_OBJECT_TEMPLATES = {
    "main": ("MainPage", "main-page.js"),
    "modal": ("ModalPage", "modal-page.js"),
}

_JS_IDENT = re.compile(r"^[A-Za-z_$][\w$]*$")


def _normalize_keys(raw: Mapping[str, Any], path: str) -> dict[str, Any]:
    """Shallow key normalization; nested opaque values are left untouched."""
    body: dict[str, Any] = {}
    for k, v in raw.items():
        key = KEYWORD_MAP.get(k, k)
        if key in body:
            raise ValueError(f'{path}: conflicting keys for "{key}"')
        body[key] = v
    return body


def _expect_list(value: Any, path: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{path}: expected a list, got {type(value).__name__}")
    return value


def _expect_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{path}: expected a mapping, got {type(value).__name__}")
    return value


# ─── Scenarios & steps ───

def _parse_step(raw: Any, path: str, previous: str | None) -> Step:
    body = _normalize_keys(_expect_mapping(raw, path), path)

    keyword = body.get("keyword")
    if not isinstance(keyword, str) or not keyword.strip():
        raise ValueError(f'{path}: missing "keyword"')
    text = body.get("text")
    if not isinstance(text, str) or not text.strip():
        raise ValueError(f'{path}: missing "text"')

    keyword = keyword.strip().capitalize()
    if keyword in CONJUNCTIONS:
        if previous is None:
            raise ValueError(f'{path}: "{keyword}" cannot open a scenario')
        keyword = previous
    elif keyword not in CATEGORIES:
        raise ValueError(f"{path}: unknown keyword {keyword!r} (expected Given, When, Then, And or But)")

    return Step(keyword=keyword, text=text, data=body.get("data"))


def _parse_scenario(raw: Any, path: str) -> Scenario:
    body = _normalize_keys(_expect_mapping(raw, path), path)
    raw_steps = _expect_list(body.get("steps"), f"{path}.steps")

    steps: list[Step] = []
    previous: str | None = None
    for i, raw_step in enumerate(raw_steps):
        step = _parse_step(raw_step, f"{path}.steps[{i}]", previous)
        steps.append(step)
        previous = step.keyword

    name = body.get("name", "")
    return Scenario(steps=steps, name=name if isinstance(name, str) else str(name))


# ─── Integration points & page objects ───

def _parse_integration_point(raw: Any, path: str) -> IntegrationPoint:
    if isinstance(raw, str) and raw.strip():
        return IntegrationPoint(name=raw.strip())
    body = dict(_expect_mapping(raw, path))
    name = body.pop("name", None)
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f'{path}: missing "name"')
    return IntegrationPoint(name=name.strip(), details=body)


def _parse_page_object(raw: Any, path: str) -> PageObjectSpec:
    body = _normalize_keys(_expect_mapping(raw, path), path)

    name = body.get("name")
    if not isinstance(name, str) or not _JS_IDENT.match(name):
        raise ValueError(f'{path}: "name" must be a JavaScript identifier, got {name!r}')

    template_class, template_file = PAGE_OBJECT_TEMPLATES.get(name, (None, None))
    class_name = body.get("class_name") or template_class
    file_name = body.get("file_name") or template_file

    if not isinstance(class_name, str) or not _JS_IDENT.match(class_name):
        raise ValueError(f'{path}: "className" must be a JavaScript identifier, got {class_name!r}')
    if not isinstance(file_name, str) or not file_name.strip():
        raise ValueError(f'{path}: missing "fileName"')

    return PageObjectSpec(name=name, class_name=class_name, file_name=file_name.strip())


def _check_page_objects(page_objects: list[PageObjectSpec]) -> None:
    names: set[str] = set()
    files: dict[str, str] = {}
    for po in page_objects:
        if po.name in names:
            raise ValueError(f"pageObjectDesign: duplicate page object name {po.name!r}")
        names.add(po.name)
        known = files.setdefault(po.class_name, po.file_name)
        if known != po.file_name:
            raise ValueError(
                f"pageObjectDesign: class {po.class_name!r} imported from both {known!r} and {po.file_name!r}"
            )


# ─── Entry points ───

def _expect_list_of(value: Any, kind: type, path: str) -> list:
    if not isinstance(value, list):
        raise ValueError(f"{path}: expected a list, got {type(value).__name__}")
    for i, item in enumerate(value):
        if not isinstance(item, kind):
            raise ValueError(f"{path}[{i}]: expected {kind.__name__}, got {type(item).__name__}")
    return value


def check_analysis(analysis: AnalysisResult) -> AnalysisResult:
    """Structural check of an already-built AnalysisResult, same field paths as the mapping parser."""
    if not isinstance(analysis.feature_name, str) or not analysis.feature_name.strip():
        raise ValueError('Invalid analysis: missing "featureName"')

    for i, scenario in enumerate(_expect_list_of(analysis.scenarios, Scenario, "cucumberScenarios")):
        path = f"cucumberScenarios[{i}]"
        for j, step in enumerate(_expect_list_of(scenario.steps, Step, f"{path}.steps")):
            step_path = f"{path}.steps[{j}]"
            if not isinstance(step.text, str) or not step.text.strip():
                raise ValueError(f'{step_path}: missing "text"')
            if step.keyword not in CATEGORIES:
                raise ValueError(f"{step_path}: unknown keyword {step.keyword!r} (expected Given, When or Then)")

    points = _expect_list_of(analysis.integration_points, IntegrationPoint, "integrationPoints")
    for i, point in enumerate(points):
        if not isinstance(point.name, str) or not point.name.strip():
            raise ValueError(f'integrationPoints[{i}]: missing "name"')

    page_objects = _expect_list_of(analysis.page_object_design, PageObjectSpec, "pageObjectDesign")
    for i, po in enumerate(page_objects):
        path = f"pageObjectDesign[{i}]"
        if not isinstance(po.name, str) or not _JS_IDENT.match(po.name):
            raise ValueError(f'{path}: "name" must be a JavaScript identifier, got {po.name!r}')
        if not isinstance(po.class_name, str) or not _JS_IDENT.match(po.class_name):
            raise ValueError(f'{path}: "className" must be a JavaScript identifier, got {po.class_name!r}')
        if not isinstance(po.file_name, str) or not po.file_name.strip():
            raise ValueError(f'{path}: missing "fileName"')
    _check_page_objects(page_objects)
    return analysis


def parse_analysis(raw: Any) -> AnalysisResult:
    if isinstance(raw, AnalysisResult):
        return check_analysis(raw)
    if not isinstance(raw, Mapping):
        raise ValueError("Invalid analysis: expected a mapping")

    body = _normalize_keys(raw, "analysis")

    feature_name = body.get("feature_name")
    if not isinstance(feature_name, str) or not feature_name.strip():
        raise ValueError('Invalid analysis: missing "featureName"')

    raw_scenarios = _expect_list(body.get("scenarios"), "cucumberScenarios")
    scenarios = [_parse_scenario(s, f"cucumberScenarios[{i}]") for i, s in enumerate(raw_scenarios)]

    raw_points = _expect_list(body.get("integration_points"), "integrationPoints")
    integration_points = [_parse_integration_point(p, f"integrationPoints[{i}]") for i, p in enumerate(raw_points)]

    raw_pages = _expect_list(body.get("page_object_design"), "pageObjectDesign")
    page_objects = [_parse_page_object(p, f"pageObjectDesign[{i}]") for i, p in enumerate(raw_pages)]
    _check_page_objects(page_objects)

    return AnalysisResult(
        feature_name=feature_name.strip(),
        scenarios=scenarios,
        technical_architecture=body.get("technical_architecture"),
        integration_points=integration_points,
        mock_requirements=body.get("mock_requirements"),
        page_object_design=page_objects,
    )


def parse_analysis_yaml(content: str) -> AnalysisResult:
    """Parse YAML (or JSON, a YAML subset) analysis text."""
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError("Invalid YAML: expected a mapping")
    return parse_analysis(raw)


def parse_config_yaml(content: str) -> GeneratorConfig:
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid config YAML: {e}") from e
    if raw is None:
        return GeneratorConfig()
    if not isinstance(raw, dict):
        raise ValueError("Invalid config: expected a mapping")

    known = {f.name: f for f in fields(GeneratorConfig)}
    unknown = sorted(set(raw) - set(known))
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

    for key, value in raw.items():
        expected = bool if key == "strict_namespace" else str
        if not isinstance(value, expected):
            raise ValueError(f'Invalid config: "{key}" must be a {expected.__name__}')
    return GeneratorConfig(**raw)
