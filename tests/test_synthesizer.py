"""Tests for stub synthesis of unmatched steps."""
from __future__ import annotations

import pytest

from stepforge.engine.patterns import DEFAULT_REGISTRY, PatternRegistry
from stepforge.engine.synthesizer import COMPLETION_MARKER, render_step, synthesize
from stepforge.types import GIVEN, THEN, WHEN, Step


class TestSetup:
    def test_project(self):
        out = synthesize(Step(GIVEN, "a project exists"), GIVEN)
        assert "TestDataFactory.createProject()" in out
        assert f'// {COMPLETION_MARKER} setup for "a project exists"' in out

    def test_feature(self):
        out = synthesize(Step(GIVEN, "a feature exists"), GIVEN)
        assert "createTestFeature(featureData)" in out

    def test_project_checked_before_feature(self):
        out = synthesize(Step(GIVEN, "a project with a feature"), GIVEN)
        assert "createProject" in out
        assert "createFeature" not in out

    def test_pending(self):
        out = synthesize(Step(GIVEN, "the weather is nice"), GIVEN)
        assert "// TODO: Implement setup logic" in out
        assert "return 'pending';" in out


class TestAction:
    def test_click(self):
        out = synthesize(Step(WHEN, 'I double click "Row"'), WHEN)
        assert "await pageObjects.main.click('Row');" in out

    def test_click_fallback_element(self):
        out = synthesize(Step(WHEN, "I click something"), WHEN)
        assert "await pageObjects.main.click('button');" in out

    def test_enter(self):
        out = synthesize(Step(WHEN, 'I enter "Apollo" into "Project name"'), WHEN)
        assert "const value = 'Apollo';" in out
        assert "const field = 'Project name';" in out
        assert "await pageObjects.main.type(field, value);" in out

    def test_type_fallbacks(self):
        out = synthesize(Step(WHEN, "I type quickly"), WHEN)
        assert "const value = 'test value';" in out
        assert "const field = 'input';" in out

    def test_case_sensitive(self):
        out = synthesize(Step(WHEN, "I Click it"), WHEN)
        assert "return 'pending';" in out

    def test_unmatched(self):
        out = synthesize(Step(WHEN, "I scroll to the footer"), WHEN)
        assert out.startswith("When('I scroll to the footer', async function() {")
        assert '// TODO: Implement action for "I scroll to the footer"' in out
        assert out.endswith("});")


class TestVerification:
    def test_should_see(self):
        out = synthesize(Step(THEN, 'I should see "Done"'), THEN)
        assert "isVisible('Done')" in out
        assert "expect(isVisible).toBe(true);" in out

    def test_should_contain(self):
        out = synthesize(Step(THEN, 'the page should contain "Apollo"'), THEN)
        assert "getText('.content')" in out
        assert "toContain('Apollo')" in out

    def test_pending(self):
        out = synthesize(Step(THEN, "everything is fine"), THEN)
        assert "// TODO: Implement verification logic" in out


class TestArguments:
    def test_data_table_argument(self):
        out = synthesize(Step(GIVEN, "these users", [["name"], ["ann"]]), GIVEN)
        assert out.startswith("Given('these users', async function(dataTable) {")

    def test_doc_string_argument(self):
        out = synthesize(Step(GIVEN, "this text", "hello"), GIVEN)
        assert "async function(docString) {" in out

    def test_special_characters_escaped(self):
        out = synthesize(Step(WHEN, "I pay (roughly) the user's bill"), WHEN)
        assert out.startswith("When('I pay \\\\(roughly\\\\) the user\\'s bill', async function() {")


def test_unknown_category():
    with pytest.raises(ValueError, match="Unknown step category"):
        synthesize(Step("And", "x"), "And")


def test_render_step_prefers_registry():
    step = Step(WHEN, 'I click "Save"')
    assert "save-btn" in render_step(step, WHEN, DEFAULT_REGISTRY)
    assert COMPLETION_MARKER in render_step(step, WHEN, PatternRegistry())
