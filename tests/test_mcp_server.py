"""Tests for the MCP tool functions (called directly, no transport)."""
from __future__ import annotations

import json

from stepforge.integrations.mcp_server import stepforge_check, stepforge_generate, stepforge_list_patterns


def test_generate(analysis_factory, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = json.loads(stepforge_generate(analysis_factory([("When", 'I click "Save"')])))
    assert result["featureName"] == "Project Management"
    assert "When('I click \"Save\"', async function() {" in result["content"]
    assert any("page object 'main'" in w for w in result["warnings"])


def test_generate_invalid(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = json.loads(stepforge_generate({"cucumberScenarios": []}))
    assert result == {"error": 'Invalid analysis: missing "featureName"'}


def test_generate_strict_collision(analysis_factory, tmp_path, monkeypatch):
    sf = tmp_path / ".stepforge"
    sf.mkdir()
    (sf / "config.yaml").write_text("strict_namespace: true\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    result = json.loads(stepforge_generate(analysis_factory([("Given", "x"), ("Then", "x")])))
    assert result["error"] == "Analysis failed validation"
    assert "bound under Given and Then" in result["details"]


def test_check(analysis_factory, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = json.loads(stepforge_check(analysis_factory([("Given", "a"), ("And", "b"), ("Then", "c")])))
    assert result["valid"] is True
    assert result["steps"] == {"Given": 2, "When": 0, "Then": 1}
    assert all(f["level"] == "warning" for f in result["findings"])
    assert {f["category"] for f in result["findings"]} == {"Given", "Then"}


def test_list_patterns(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = stepforge_list_patterns()
    assert "When (1):" in out
    assert "click_button" in out
