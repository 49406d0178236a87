# cv_analyzer/app/services/scoring/requirements.py
# Requirement-list editing helpers. Every function returns a new list.
from __future__ import annotations
from dataclasses import replace
from typing import Any, List, Mapping, Sequence, Union

from .convert import to_number
from .models import Requirement

NEW_ROW_WEIGHT = 0.1

RequirementLike = Union[Requirement, Mapping[str, Any], str]


def weight_sum(requirements: Sequence[Requirement]) -> float:
    return sum(to_number(getattr(r, "weight", 0)) for r in requirements)


def is_weight_sum_ok(requirements: Sequence[Requirement]) -> bool:
    return weight_sum(requirements) <= 1


def add_requirement(requirements: Sequence[Requirement]) -> List[Requirement]:
    return [*requirements, Requirement(skill="", weight=NEW_ROW_WEIGHT)]


def update_requirement(requirements: Sequence[Requirement], index: int, **patch: Any) -> List[Requirement]:
    if "weight" in patch:
        patch["weight"] = to_number(patch["weight"])
    if "skill" in patch and patch["skill"] is None:
        patch["skill"] = ""
    return [replace(r, **patch) if i == index else r for i, r in enumerate(requirements)]


def remove_requirement(requirements: Sequence[Requirement], index: int) -> List[Requirement]:
    return [r for i, r in enumerate(requirements) if i != index]


def skill_names(requirements: Sequence[RequirementLike]) -> List[str]:
    """Skill labels sent alongside a score request; blanks are dropped."""
    names = []
    for r in requirements or []:
        if isinstance(r, str):
            name = r
        elif isinstance(r, Mapping):
            name = r.get("skill")
        else:
            name = getattr(r, "skill", "")
        if name:
            names.append(name)
    return names
