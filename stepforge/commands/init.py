"""Initialize a stepforge project.

Creates .stepforge/ with a config file, an analyses/ directory holding a
starter analysis and a patterns/ directory with a disabled example pattern.
"""
from __future__ import annotations

from pathlib import Path

CONFIG_TEMPLATE = """\
# Paths are emitted verbatim into require() calls of the generated module
support_dir: ../support
page_objects_dir: ../page-objects
output_dir: features/step_definitions

# Fail generation when one step text is bound under several keywords
strict_namespace: false
"""

EXAMPLE_ANALYSIS = """\
featureName: Project Management
cucumberScenarios:
  - name: Save a new project
    steps:
      - keyword: Given
        text: the Software Estimation Manager application is running
      - keyword: And
        text: I have a project loaded
      - keyword: When
        text: I enter "Apollo" into "Project name"
      - keyword: And
        text: I click "Save Project"
      - keyword: Then
        text: I should see "Project saved"
technicalArchitecture:
  testIdAttribute: data-testid
integrationPoints:
  - name: dataManager
mockRequirements:
  - name: fileSystem
pageObjectDesign:
  - name: main
    className: MainPage
    fileName: main-page
"""

EXAMPLE_PATTERN = '''\
"""Example project pattern. Rename to navigation.py to enable it."""
import re

from stepforge import step_definition, when


@when(r'I open the "([^"]+)" tab')
def open_tab(step, architecture):
    """Switch to a named navigation tab."""
    tab = re.search(r'"([^"]+)"', step.text).group(1)
    return step_definition(step, [f"await pageObjects.main.openTab('{tab}');"])
'''

TEMPLATES = {
    "example": ("example.yaml", "Worked example analysis (project management)"),
    "empty": ("analysis.yaml", "Empty analysis skeleton"),
}

EMPTY_ANALYSIS = """\
featureName: New Feature
cucumberScenarios: []
pageObjectDesign: []
"""


def list_templates() -> list[tuple[str, str, str]]:
    """Return list of (key, filename, description) for available templates."""
    return [(k, v[0], v[1]) for k, v in TEMPLATES.items()]


def init_project(template: str | None = None, target_dir: Path | None = None) -> str:
    """Initialize a stepforge project.

    Args:
        template: Template key (example, empty); defaults to example
        target_dir: Target directory (default: current directory)

    Returns:
        Success message
    """
    target = target_dir or Path.cwd()
    sf_dir = target / ".stepforge"
    analyses_dir = sf_dir / "analyses"
    patterns_dir = sf_dir / "patterns"

    if sf_dir.exists():
        return f"Already initialized: {sf_dir} exists"

    template = template or "example"
    if template not in TEMPLATES:
        available = ", ".join(TEMPLATES.keys())
        return f"Unknown template: {template}. Available: {available}"

    analyses_dir.mkdir(parents=True)
    patterns_dir.mkdir()

    (sf_dir / "config.yaml").write_text(CONFIG_TEMPLATE, encoding="utf-8")
    filename = TEMPLATES[template][0]
    content = EXAMPLE_ANALYSIS if template == "example" else EMPTY_ANALYSIS
    (analyses_dir / filename).write_text(content, encoding="utf-8")
    (patterns_dir / "_example.py").write_text(EXAMPLE_PATTERN, encoding="utf-8")

    stem = Path(filename).stem
    return f"""Initialized stepforge project:
  {sf_dir}/
  ├── config.yaml
  ├── analyses/
  │   └── {filename}
  └── patterns/
      └── _example.py

Next steps:
  1. Run: stepforge check {stem}
  2. Run: stepforge generate {stem}
"""


def main(args: list[str]) -> int:
    """CLI entry point."""
    template = args[0] if args else None
    result = init_project(template)
    print(result)
    return 0
