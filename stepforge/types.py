from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

# ─── Step categories ───

GIVEN = "Given"  # precondition
WHEN = "When"    # action
THEN = "Then"    # verification

CATEGORIES = (GIVEN, WHEN, THEN)


def freeze(value: Any) -> Any:
    """Turn nested lists/mappings into hashable tagged tuples, keeping value equality.

    Containers keep their kind (``map`` / ``seq`` / ``set``), so a mapping
    never equals the list of its pairs. Mapping items are ordered by key
    repr only; keys keep their original type.
    """
    if isinstance(value, Mapping):
        items = sorted(((k, freeze(v)) for k, v in value.items()), key=lambda kv: repr(kv[0]))
        return ("map", tuple(items))
    if isinstance(value, (list, tuple)):
        return ("seq", tuple(freeze(v) for v in value))
    if isinstance(value, (set, frozenset)):
        return ("set", tuple(sorted((freeze(v) for v in value), key=repr)))
    return value


# ─── Analysis IR (parsed from the upstream analysis stage) ───

@dataclass(frozen=True)
class Step:
    keyword: str
    text: str
    data: Any = None  # data table (rows) or doc string; part of identity

    def __post_init__(self):
        object.__setattr__(self, "keyword", self.keyword.strip())
        object.__setattr__(self, "data", freeze(self.data))


@dataclass
class Scenario:
    steps: list[Step] = field(default_factory=list)
    name: str = ""


@dataclass
class IntegrationPoint:
    name: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PageObjectSpec:
    name: str        # key in the shared pageObjects registry
    class_name: str
    file_name: str   # require() target under the page-objects dir


@dataclass
class AnalysisResult:
    feature_name: str
    scenarios: list[Scenario] = field(default_factory=list)
    technical_architecture: Any = None
    integration_points: list[IntegrationPoint] = field(default_factory=list)
    mock_requirements: Any = None
    page_object_design: list[PageObjectSpec] = field(default_factory=list)


# ─── Step patterns ───

@dataclass(frozen=True)
class StepPattern:
    category: str
    name: str
    matcher: Callable[[str], bool]
    generator: Callable[[Step, Any], str]
    description: str = ""


# ─── Generator configuration (.stepforge/config.yaml) ───

@dataclass(frozen=True)
class GeneratorConfig:
    support_dir: str = "../support"
    page_objects_dir: str = "../page-objects"
    output_dir: str = "features/step_definitions"
    # Treat steps whose text is bound under more than one category as errors.
    # Cucumber-js keys step definitions by expression alone, not by keyword.
    strict_namespace: bool = False
