from .models import AnalysisResult, Candidate, FileRef, RawScoreItem, Requirement
from .jd_parser import RequirementParser, coerce_requirement, parse_requirements_string, resolve_analysis, titleize_skill
from .ranking import CandidateRanker, normalize_candidates, sort_candidates
from .requirements import (
    add_requirement,
    is_weight_sum_ok,
    remove_requirement,
    skill_names,
    update_requirement,
    weight_sum,
)

__all__ = [
    "AnalysisResult", "Candidate", "FileRef", "RawScoreItem", "Requirement",
    "RequirementParser", "coerce_requirement", "parse_requirements_string", "resolve_analysis", "titleize_skill",
    "CandidateRanker", "normalize_candidates", "sort_candidates",
    "add_requirement", "is_weight_sum_ok", "remove_requirement", "skill_names",
    "update_requirement", "weight_sum",
]
