"""Bind page-object descriptors to imports and a shared ``pageObjects`` registry."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from stepforge.engine.render import INDENT, js_string

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stepforge.types import PageObjectSpec


@dataclass(frozen=True)
class PageObjectBinding:
    imports: list[str] = field(default_factory=list)
    instantiation: str = ""


def bind(page_object_design: Sequence[PageObjectSpec], page_objects_dir: str = "../page-objects") -> PageObjectBinding:
    if not page_object_design:
        return PageObjectBinding()

    imports: list[str] = []
    imported: set[str] = set()
    for po in page_object_design:
        if po.class_name in imported:
            continue
        imported.add(po.class_name)
        imports.append(f"const {po.class_name} = require({js_string(f'{page_objects_dir}/{po.file_name}')});")

    lines = [
        "// Page Object Instances",
        "let pageObjects = {};",
        "",
        "Before(async function() {",
        *(f"{INDENT}pageObjects.{po.name} = new {po.class_name}(this.page);" for po in page_object_design),
        "});",
    ]
    return PageObjectBinding(imports=imports, instantiation="\n".join(lines))
