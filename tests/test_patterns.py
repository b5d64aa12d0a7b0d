"""Tests for the pattern registry and project pattern loading."""
from __future__ import annotations

import pytest

from stepforge.engine.patterns import (
    DEFAULT_REGISTRY,
    PatternRegistry,
    given,
    load_patterns,
    load_registry,
    when,
)
from stepforge.engine.render import step_definition
from stepforge.types import GIVEN, THEN, WHEN, Step


@when(r"I click")
def generic_click(step, architecture):
    """Generic click."""
    return step_definition(step, ["// generic"])


@when(r'I click "Save"')
def save_click(step, architecture):
    return step_definition(step, ["// save"])


class TestDefaultRegistry:
    def test_application_running(self):
        step = Step(GIVEN, "the Software Estimation Manager application is running")
        p = DEFAULT_REGISTRY.match(step, GIVEN)
        assert p is not None
        out = p.generator(step, None)
        assert "await this.page.waitForLoadState('networkidle');" in out
        assert "TODO" not in out

    def test_click_uses_test_id(self):
        step = Step(WHEN, 'I click "Save Project"')
        out = DEFAULT_REGISTRY.match(step, WHEN).generator(step, None)
        assert "await pageObjects.main.click('[data-testid=\"save-project-btn\"]');" in out

    def test_click_custom_test_id_attribute(self):
        step = Step(WHEN, 'I click "Save"')
        out = DEFAULT_REGISTRY.match(step, WHEN).generator(step, {"testIdAttribute": "data-qa"})
        assert '[data-qa="save-btn"]' in out

    def test_should_see(self):
        step = Step(THEN, 'I should see "Saved"')
        out = DEFAULT_REGISTRY.match(step, THEN).generator(step, None)
        assert "isTextVisible('Saved')" in out

    def test_category_scoped(self):
        step = Step(WHEN, "the Software Estimation Manager application is running")
        assert DEFAULT_REGISTRY.match(step, WHEN) is None
        assert DEFAULT_REGISTRY.match(step, THEN) is None

    def test_binds_to_step_text(self):
        step = Step(WHEN, 'I click "Save" twice')
        out = DEFAULT_REGISTRY.match(step, WHEN).generator(step, None)
        assert out.startswith("When('I click \"Save\" twice', async function() {")

    def test_no_match(self):
        assert DEFAULT_REGISTRY.match(Step(WHEN, "I scroll to the footer"), WHEN) is None


class TestRegistryOrdering:
    def test_first_registered_wins(self):
        reg = PatternRegistry({WHEN: (generic_click, save_click)})
        assert reg.match(Step(WHEN, 'I click "Save"'), WHEN) is generic_click

        reg = PatternRegistry({WHEN: (save_click, generic_click)})
        assert reg.match(Step(WHEN, 'I click "Save"'), WHEN) is save_click

    def test_with_patterns_prepends(self):
        reg = DEFAULT_REGISTRY.with_patterns([save_click])
        assert reg.patterns(WHEN)[0] is save_click
        assert len(reg) == len(DEFAULT_REGISTRY) + 1
        # Original untouched
        assert save_click not in DEFAULT_REGISTRY.patterns(WHEN)

    def test_unknown_category_rejected(self):
        with pytest.raises(ValueError, match="Unknown step categories"):
            PatternRegistry({"And": ()})

    def test_iteration_order(self):
        names = [p.name for p in DEFAULT_REGISTRY]
        assert names == ["application_running", "project_loaded", "click_button", "should_see_text"]

    def test_description_from_docstring(self):
        assert generic_click.description == "Generic click."
        assert save_click.description == ""

    def test_decorator_sets_category(self):
        @given(r"^anything$")
        def anything(step, architecture):
            return ""

        assert anything.category == GIVEN
        assert anything.matcher("anything")
        assert not anything.matcher("something else")


PATTERN_FILE = '''
from stepforge import step_definition, when


@when(r"I scroll to the footer")
def scroll_footer(step, architecture):
    """Scroll to the page footer."""
    return step_definition(step, ["await pageObjects.main.scrollToFooter();"])
'''


class TestLoadPatterns:
    def test_missing_dir(self, tmp_path):
        assert load_patterns(tmp_path / "nope") == []

    def test_loads_project_patterns(self, tmp_path):
        (tmp_path / "scroll.py").write_text(PATTERN_FILE, encoding="utf-8")
        patterns = load_patterns(tmp_path)
        assert [p.name for p in patterns] == ["scroll_footer"]
        assert patterns[0].description == "Scroll to the page footer."

    def test_underscore_files_skipped(self, tmp_path):
        (tmp_path / "_disabled.py").write_text(PATTERN_FILE, encoding="utf-8")
        assert load_patterns(tmp_path) == []

    def test_reexported_builtins_ignored(self, tmp_path):
        (tmp_path / "reexport.py").write_text(
            "from stepforge.engine.patterns import click_button\n", encoding="utf-8"
        )
        assert load_patterns(tmp_path) == []

    def test_broken_file_is_fatal(self, tmp_path):
        (tmp_path / "broken.py").write_text("raise RuntimeError('boom')\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Failed to load pattern file"):
            load_patterns(tmp_path)

    def test_project_patterns_take_priority(self, tmp_path):
        patterns_dir = tmp_path / "patterns"
        patterns_dir.mkdir()
        (patterns_dir / "clicks.py").write_text(
            "from stepforge import step_definition, when\n\n"
            "@when(r'I click')\n"
            "def any_click(step, architecture):\n"
            "    return step_definition(step, ['// project click'])\n",
            encoding="utf-8",
        )
        reg = load_registry(tmp_path)
        assert reg.match(Step(WHEN, 'I click "Save"'), WHEN).name == "any_click"

    def test_no_project_dir(self):
        assert load_registry(None) is DEFAULT_REGISTRY
