# cv_analyzer/app/services/scoring/models.py
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Requirement:
    skill: str
    weight: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RawScoreItem:
    label: str
    score: int


@dataclass(frozen=True)
class FileRef:
    """Non-owning description of one uploaded document."""
    filename: str
    content_type: Optional[str] = None
    size: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Candidate:
    id: str
    name: str
    email: str
    score: float
    file: Optional[FileRef] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AnalysisResult:
    jd_id: Optional[str]
    source: str                     # "structured" | "text"
    requirements: List[Requirement] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
