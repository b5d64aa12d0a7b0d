r"""Ordered registry of well-known step phrasings.

Each category (Given / When / Then) owns an ordered tuple of patterns. For a
step the registry scans its category's tuple and the first pattern whose
matcher accepts the step text wins, so reordering patterns changes the
generated output.

Project patterns live in ``.stepforge/patterns/*.py`` and take priority over
the built-in ones:

    # .stepforge/patterns/navigation.py
    import re

    from stepforge import given, step_definition

    @given(r"I am on the (\w+) tab")
    def on_tab(step, architecture):
        # Open a named tab
        tab = re.search(r"on the (\w+) tab", step.text).group(1)
        return step_definition(step, [f"await pageObjects.main.openTab('{tab}');"])
"""
from __future__ import annotations

import importlib.util
import re
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from stepforge.engine.extraction import to_test_id
from stepforge.engine.render import js_string, step_definition
from stepforge.types import CATEGORIES, GIVEN, THEN, WHEN, Step, StepPattern

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

DEFAULT_TEST_ID_ATTRIBUTE = "data-testid"


def _pattern_factory(category: str):
    def factory(regex: str | re.Pattern[str], *, flags: int = re.IGNORECASE):
        compiled = regex if isinstance(regex, re.Pattern) else re.compile(regex, flags)

        def decorator(fn: Callable[[Step, Any], str]) -> StepPattern:
            return StepPattern(
                category=category,
                name=fn.__name__,
                matcher=lambda text: compiled.search(text) is not None,
                generator=fn,
                description=(fn.__doc__ or "").strip().split("\n")[0],
            )
        return decorator
    return factory


given = _pattern_factory(GIVEN)
when = _pattern_factory(WHEN)
then = _pattern_factory(THEN)


class PatternRegistry:
    """Immutable, category-scoped ordered pattern table."""

    def __init__(self, table: Mapping[str, Iterable[StepPattern]] | None = None):
        table = table or {}
        unknown = set(table) - set(CATEGORIES)
        if unknown:
            raise ValueError(f"Unknown step categories: {', '.join(sorted(unknown))}")
        self._table = MappingProxyType({c: tuple(table.get(c, ())) for c in CATEGORIES})

    @classmethod
    def from_patterns(cls, patterns: Iterable[StepPattern]) -> PatternRegistry:
        table: dict[str, list[StepPattern]] = {c: [] for c in CATEGORIES}
        for p in patterns:
            if p.category not in table:
                raise ValueError(f"Pattern {p.name!r} has unknown category {p.category!r}")
            table[p.category].append(p)
        return cls(table)

    def patterns(self, category: str) -> tuple[StepPattern, ...]:
        return self._table.get(category, ())

    def match(self, step: Step, category: str) -> StepPattern | None:
        for p in self.patterns(category):
            if p.matcher(step.text):
                return p
        return None

    def with_patterns(self, patterns: Iterable[StepPattern]) -> PatternRegistry:
        """New registry with ``patterns`` ahead of the existing ones."""
        extra = PatternRegistry.from_patterns(patterns)
        return PatternRegistry({c: extra.patterns(c) + self.patterns(c) for c in CATEGORIES})

    def __iter__(self) -> Iterator[StepPattern]:
        for c in CATEGORIES:
            yield from self._table[c]

    def __len__(self) -> int:
        return sum(len(v) for v in self._table.values())


# ─── Built-in patterns ───

def _test_id_attribute(architecture: Any) -> str:
    if isinstance(architecture, Mapping):
        attr = architecture.get("testIdAttribute")
        if isinstance(attr, str) and attr:
            return attr
    return DEFAULT_TEST_ID_ATTRIBUTE


@given(r"the Software Estimation Manager application is running")
def application_running(step: Step, architecture: Any) -> str:
    """Application surface exists and the page reached network idle."""
    return step_definition(step, [
        "// Application should already be running from hooks",
        "expect(this.page).toBeDefined();",
        "await this.page.waitForLoadState('networkidle');",
    ])


@given(r"I have a project loaded")
def project_loaded(step: Step, architecture: Any) -> str:
    """Create a test project and load it through the main page."""
    return step_definition(step, [
        "const projectData = TestDataFactory.createProject();",
        "this.currentProject = await this.testDataManager.createTestProject(projectData);",
        "await pageObjects.main.loadProject(this.currentProject.id);",
    ])


_CLICK_RE = re.compile(r'I click "([^"]+)"', re.IGNORECASE)


@when(_CLICK_RE)
def click_button(step: Step, architecture: Any) -> str:
    """Click the button whose test id derives from the quoted label."""
    label = _CLICK_RE.search(step.text).group(1)
    selector = f'[{_test_id_attribute(architecture)}="{to_test_id(label, "-btn")}"]'
    return step_definition(step, [f"await pageObjects.main.click({js_string(selector)});"])


_SEE_RE = re.compile(r'I should see "([^"]+)"', re.IGNORECASE)


@then(_SEE_RE)
def should_see_text(step: Step, architecture: Any) -> str:
    """Assert the quoted text is visible on the main page."""
    expected = _SEE_RE.search(step.text).group(1)
    return step_definition(step, [
        f"const isVisible = await pageObjects.main.isTextVisible({js_string(expected)});",
        "expect(isVisible).toBe(true);",
    ])


DEFAULT_REGISTRY = PatternRegistry({
    GIVEN: (application_running, project_loaded),
    WHEN: (click_button,),
    THEN: (should_see_text,),
})


# ─── Project patterns ───

def load_patterns(patterns_dir: str | Path) -> list[StepPattern]:
    """Collect StepPattern objects from *.py files, files sorted by name, patterns in definition order."""
    patterns_path = Path(patterns_dir)
    if not patterns_path.is_dir():
        return []

    found: list[StepPattern] = []
    for py_file in sorted(patterns_path.glob("*.py")):
        if py_file.name.startswith("_"):
            continue
        module_name = f"stepforge_patterns_{py_file.stem}"
        spec = importlib.util.spec_from_file_location(module_name, py_file)
        if not spec or not spec.loader:
            continue
        mod = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(mod)
        except Exception as e:
            raise ValueError(f"Failed to load pattern file {py_file}: {e}") from e

        # Skip patterns imported from elsewhere (e.g. re-exported built-ins)
        found.extend(
            obj for obj in vars(mod).values()
            if isinstance(obj, StepPattern) and getattr(obj.generator, "__module__", None) == module_name
        )
    return found


def load_registry(stepforge_dir: str | Path | None) -> PatternRegistry:
    """Built-in registry extended with a project's patterns, if any."""
    if stepforge_dir is None:
        return DEFAULT_REGISTRY
    return DEFAULT_REGISTRY.with_patterns(load_patterns(Path(stepforge_dir) / "patterns"))
