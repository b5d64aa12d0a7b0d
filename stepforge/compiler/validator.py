"""Static analysis for step-definition generation: catch binding issues before emitting code."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING

from stepforge.engine.dedup import unique_steps
from stepforge.engine.patterns import DEFAULT_REGISTRY
from stepforge.engine.synthesizer import render_step
from stepforge.types import CATEGORIES, GeneratorConfig

if TYPE_CHECKING:
    from stepforge.engine.patterns import PatternRegistry
    from stepforge.types import AnalysisResult, Step

_PAGE_OBJECT_REF = re.compile(r"\bpageObjects\.([A-Za-z_$][\w$]*)")


class ValidationError:
    """One finding, keyed by step text and, when it concerns a single binding, its category."""

    def __init__(self, level: str, message: str, step: str | None = None, category: str | None = None):
        self.level = level  # "error" | "warning"
        self.message = message
        self.step = step
        self.category = category  # Given / When / Then; None for cross-category findings

    def __str__(self):
        if self.step and self.category:
            prefix = f"[{self.category} {self.step}] "
        elif self.step:
            prefix = f"[{self.step}] "
        else:
            prefix = ""
        return f"{self.level.upper()}: {prefix}{self.message}"


def validate_analysis(
    analysis: AnalysisResult,
    registry: PatternRegistry = DEFAULT_REGISTRY,
    config: GeneratorConfig | None = None,
) -> list[ValidationError]:
    """Run all static checks on an analysis."""
    config = config or GeneratorConfig()
    errors: list[ValidationError] = []

    steps = {c: unique_steps(analysis.scenarios, c) for c in CATEGORIES}
    if not any(steps.values()):
        errors.append(ValidationError("warning", "Analysis has no steps; only hooks and helpers will be generated"))
        return errors

    errors.extend(_check_namespace(steps, config))
    errors.extend(_check_data_variants(steps, config))
    errors.extend(_check_page_object_refs(analysis, steps, registry))
    errors.extend(_check_stubs(steps, registry))

    return errors


def format_errors(errors: list[ValidationError]) -> str:
    if not errors:
        return ""
    lines = []
    errs = [e for e in errors if e.level == "error"]
    warns = [e for e in errors if e.level == "warning"]
    if errs:
        lines.append(f"  {len(errs)} error(s):")
        for e in errs:
            lines.append(f"    ✗ {e}")
    if warns:
        lines.append(f"  {len(warns)} warning(s):")
        for e in warns:
            lines.append(f"    ⚠ {e}")
    return "\n".join(lines)


def has_errors(errors: list[ValidationError]) -> bool:
    return any(e.level == "error" for e in errors)


# ─── Checks ───

def _check_namespace(steps: dict[str, list[Step]], config: GeneratorConfig) -> list[ValidationError]:
    """Cucumber-js binds by text alone: one text under two keywords is registered twice."""
    level = "error" if config.strict_namespace else "warning"
    categories_by_text: dict[str, list[str]] = {}
    for category in CATEGORIES:
        for step in steps[category]:
            seen = categories_by_text.setdefault(step.text, [])
            if category not in seen:
                seen.append(category)

    return [
        ValidationError(level, f"Step text is bound under {' and '.join(cats)} (duplicate definition at runtime)", text)
        for text, cats in categories_by_text.items()
        if len(cats) > 1
    ]


def _check_data_variants(steps: dict[str, list[Step]], config: GeneratorConfig) -> list[ValidationError]:
    """Same keyword and text with different attached data yields two bindings for one text."""
    level = "error" if config.strict_namespace else "warning"
    errors: list[ValidationError] = []
    for category in CATEGORIES:
        counts: dict[str, int] = {}
        for step in steps[category]:
            counts[step.text] = counts.get(step.text, 0) + 1
        for text, n in counts.items():
            if n > 1:
                errors.append(ValidationError(
                    level, f"Step has {n} data variants and will be generated {n} times", text, category
                ))
    return errors


def _check_page_object_refs(
    analysis: AnalysisResult,
    steps: dict[str, list[Step]],
    registry: PatternRegistry,
) -> list[ValidationError]:
    """Generated steps that use pageObjects.<name> need that page object declared."""
    declared = {po.name for po in analysis.page_object_design}
    missing: dict[str, tuple[str, str]] = {}
    for category in CATEGORIES:
        for step in steps[category]:
            source = render_step(step, category, registry, analysis.technical_architecture)
            for name in _PAGE_OBJECT_REF.findall(source):
                if name not in declared:
                    missing.setdefault(name, (step.text, category))

    return [
        ValidationError(
            "warning", f"Generated code uses page object '{name}' but pageObjectDesign does not declare it", text, category
        )
        for name, (text, category) in missing.items()
    ]


def _check_stubs(steps: dict[str, list[Step]], registry: PatternRegistry) -> list[ValidationError]:
    """Steps without a registered pattern fall back to stubs that need manual completion."""
    return [
        ValidationError("warning", "No pattern matches this step; a stub will be generated", step.text, category)
        for category in CATEGORIES
        for step in steps[category]
        if registry.match(step, category) is None
    ]
