# cv_analyzer/app/services/scoring/jd_parser.py
# ------------------------------------------------------------
# "javascript proficiency 5, rest api 4, docker" -> [Requirement(skill, weight)]
# plus resolving the analysis webhook reply (structured list vs. free text)
# ------------------------------------------------------------

from __future__ import annotations
import math
import re
from fractions import Fraction
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

from .convert import to_number
from .models import AnalysisResult, RawScoreItem, Requirement

# ---- Patterns / Normalization ----------------------------------------------
# label, whitespace, then a 1-2 digit score at the very end of the chunk
TRAILING_SCORE = re.compile(r"(.+?)\s+([0-9]{1,2})$", re.DOTALL)

MIN_SCORE, MAX_SCORE = 1, 5

SPECIAL_CASING: Mapping[str, str] = MappingProxyType({
    "api": "API",
    "sql": "SQL",
    "json": "JSON",
    "n8n": "n8n",
    "js": "JS",
    "ui": "UI",
    "ux": "UX",
})

# reply fields that may carry the "label score, ..." text, in priority order
TEXT_FIELDS = ("requirements_text", "output", "result", "text")


def titleize_skill(label: str, special: Mapping[str, str] = SPECIAL_CASING) -> str:
    """Capitalize the first letter of each word; known abbreviations get fixed casing.

    Not str.title(): the rest of each word is left untouched ("fastAPI" -> "FastAPI").
    """
    words = []
    for word in (label or "").split():
        low = word.lower()
        if low in special:
            words.append(special[low])
        else:
            words.append(word[:1].upper() + word[1:])
    return " ".join(words)


def _round_half_up(value: Fraction, places: int = 2) -> float:
    q = 10 ** places
    return math.floor(value * q + Fraction(1, 2)) / q


class RequirementParser:
    """Turns a comma-separated "label score" listing into weighted requirements.

    Weights are score/5, scaled down proportionally when they add up to more
    than 1, then rounded to 2 decimals. Order and duplicates are kept.
    """

    def __init__(self, special: Optional[Mapping[str, str]] = None):
        self.special = MappingProxyType(dict(special)) if special is not None else SPECIAL_CASING

    def split_items(self, text: Any) -> List[RawScoreItem]:
        if not text or not isinstance(text, str):
            return []
        chunks = [c.strip() for c in text.split(",")]
        items = []
        for chunk in chunks:
            if not chunk:
                continue
            m = TRAILING_SCORE.match(chunk)
            if m:
                label = m.group(1).strip()
                score = max(MIN_SCORE, min(MAX_SCORE, int(m.group(2))))
            else:
                label, score = chunk, MAX_SCORE
            items.append(RawScoreItem(label=label, score=score))
        return items

    def parse(self, text: Any) -> List[Requirement]:
        items = self.split_items(text)
        if not items:
            return []

        # exact arithmetic so 0.375 rounds to 0.38 instead of drifting to 0.37
        weights = [Fraction(it.score, MAX_SCORE) for it in items]
        total = sum(weights)
        if total > 1:
            weights = [w / total for w in weights]

        return [
            Requirement(skill=titleize_skill(it.label, self.special), weight=_round_half_up(w))
            for it, w in zip(items, weights)
        ]


_default_parser = RequirementParser()


def parse_requirements_string(text: Any) -> List[Requirement]:
    return _default_parser.parse(text)


# ---- Analysis reply --------------------------------------------------------
def coerce_requirement(entry: Any) -> Optional[Requirement]:
    if isinstance(entry, str):
        return Requirement(skill=entry, weight=0.0)
    if isinstance(entry, Mapping):
        skill = entry.get("skill")
        raw = entry.get("weight")
        if raw is None:
            raw = entry.get("score")
        return Requirement(
            skill=skill if isinstance(skill, str) else ("" if skill is None else str(skill)),
            weight=to_number(raw),
        )
    return None


def resolve_analysis(payload: Any, parser: Optional[RequirementParser] = None) -> AnalysisResult:
    """
    Normalize the analyze-webhook reply into one shape.
    Priority: structured `requirements` list > first non-empty text field > empty.
    """
    parser = parser or _default_parser
    if not isinstance(payload, Mapping):
        return AnalysisResult(jd_id=None, source="text", requirements=[])

    jd_id = payload.get("jd_id") or None
    if jd_id is not None and not isinstance(jd_id, str):
        jd_id = str(jd_id)

    structured = payload.get("requirements")
    if isinstance(structured, list):
        reqs = [r for r in (coerce_requirement(e) for e in structured) if r is not None]
        return AnalysisResult(jd_id=jd_id, source="structured", requirements=reqs)

    text = ""
    for key in TEXT_FIELDS:
        if payload.get(key):
            text = payload[key]
            break
    return AnalysisResult(jd_id=jd_id, source="text", requirements=parser.parse(text))
