"""Tests for page-object binding."""
from __future__ import annotations

from stepforge.engine.page_objects import bind
from stepforge.types import PageObjectSpec

MAIN = PageObjectSpec("main", "MainPage", "main-page")


def test_empty_design():
    binding = bind([])
    assert binding.imports == []
    assert binding.instantiation == ""


def test_single_page_object():
    binding = bind([MAIN])
    assert binding.imports == ["const MainPage = require('../page-objects/main-page');"]
    assert binding.instantiation.splitlines() == [
        "// Page Object Instances",
        "let pageObjects = {};",
        "",
        "Before(async function() {",
        "    pageObjects.main = new MainPage(this.page);",
        "});",
    ]


def test_shared_class_imported_once():
    binding = bind([MAIN, PageObjectSpec("dashboard", "MainPage", "main-page")])
    assert len(binding.imports) == 1
    assert "pageObjects.dashboard = new MainPage(this.page);" in binding.instantiation


def test_declaration_order_kept():
    modal = PageObjectSpec("modal", "ModalPage", "modal-page.js")
    binding = bind([modal, MAIN])
    assert binding.imports[0].startswith("const ModalPage")
    lines = binding.instantiation.splitlines()
    assert lines.index("    pageObjects.modal = new ModalPage(this.page);") < lines.index(
        "    pageObjects.main = new MainPage(this.page);"
    )


def test_custom_dir():
    binding = bind([MAIN], "./pages")
    assert binding.imports == ["const MainPage = require('./pages/main-page');"]
