"""Collapse the steps of one category across all scenarios."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from stepforge.types import Scenario, Step


def unique_steps(scenarios: Iterable[Scenario], category: str) -> list[Step]:
    """Steps of ``category`` in first-seen order, structural duplicates removed.

    Two steps are the same iff keyword, text and data are all equal, so a
    Given and a Then sharing wording both survive.
    """
    seen: set[Step] = set()
    result: list[Step] = []
    for scenario in scenarios:
        for step in scenario.steps:
            if step.keyword != category or step in seen:
                continue
            seen.add(step)
            result.append(step)
    return result
