"""JavaScript literal rendering shared by every step generator."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stepforge.types import Step

INDENT = "    "

# Cucumber expression metacharacters: optional text, parameters, alternation
_CUCUMBER_SPECIAL = re.compile(r"([\\(){}/])")
_NEWLINES = re.compile(r"[\r\n]+")


def js_string(text: str) -> str:
    """Render text as a single-quoted JavaScript string literal."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\r", "\\r")
        .replace("\n", "\\n")
    )
    return f"'{escaped}'"


def cucumber_expression(text: str) -> str:
    """Escape text so a Cucumber expression matches it literally."""
    return _CUCUMBER_SPECIAL.sub(r"\\\1", text)


def comment_text(text: str) -> str:
    """Flatten text for use inside a // or /* */ comment."""
    return _NEWLINES.sub(" ", text).replace("*/", "* /")


def step_arguments(step: Step) -> str:
    if step.data is None:
        return ""
    if isinstance(step.data, str):
        return "docString"
    return "dataTable"


def binding_open(step: Step) -> str:
    """Opening line of a step definition bound to exactly ``step.text``."""
    expression = js_string(cucumber_expression(step.text))
    return f"{step.keyword}({expression}, async function({step_arguments(step)}) {{"


def step_definition(step: Step, body: list[str]) -> str:
    """Wrap body lines (unindented) into a complete step definition."""
    lines = [binding_open(step)]
    lines.extend(f"{INDENT}{line}" if line else "" for line in body)
    lines.append("});")
    return "\n".join(lines)
