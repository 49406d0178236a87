# cv_analyzer/app/services/scoring/ranking.py
from __future__ import annotations
from typing import Any, List, Mapping, Optional, Sequence

from .convert import text_or, to_number
from .models import Candidate, FileRef


def _response_items(data: Any) -> List[Any]:
    """
    Accepts every reply shape the scoring webhook produces:
      [ {...}, {...} ]          -> as-is
      {"items": [ ... ]}        -> the wrapped list
      { ... }                   -> one candidate
      None / "" / 0             -> nothing
    """
    if isinstance(data, (list, tuple)):
        return list(data)
    if isinstance(data, Mapping):
        wrapped = data.get("items")
        if isinstance(wrapped, (list, tuple)):
            return list(wrapped)
        if wrapped:
            return [wrapped]
        return [data]
    if data:
        return [data]
    return []


def _item_score(item: Mapping) -> float:
    raw = item.get("overall")
    if raw is None:
        raw = item.get("score")
    return to_number(raw)


def to_candidate(item: Any, index: int, file: Optional[FileRef] = None) -> Candidate:
    if not isinstance(item, Mapping):
        item = {}
    return Candidate(
        id=text_or(item.get("id"), f"cand_{index}"),
        name=text_or(item.get("name"), "Unknown"),
        email=text_or(item.get("email"), "unknown"),
        score=_item_score(item),
        file=file,
    )


def normalize_candidates(data: Any, files: Optional[Sequence[FileRef]] = None) -> List[Candidate]:
    """Map a raw scoring reply to canonical candidates.

    Files are matched by position only: candidate i gets files[i]. If the
    webhook reorders its items the files are silently mis-attributed.
    """
    files = list(files or [])
    out = []
    for i, item in enumerate(_response_items(data)):
        f = files[i] if i < len(files) else None
        out.append(to_candidate(item, i, f))
    return out


def sort_candidates(candidates: Sequence[Candidate], descending: bool = True) -> List[Candidate]:
    # sorted() is stable and leaves the input untouched
    return sorted(candidates, key=lambda c: c.score, reverse=descending)


class CandidateRanker:
    """Thin stateful wrapper for UIs that keep a sort-direction toggle."""

    def __init__(self, descending: bool = True):
        self.descending = descending

    def sort(self, candidates: Sequence[Candidate]) -> List[Candidate]:
        return sort_candidates(candidates, self.descending)

    def rank(self, data: Any, files: Optional[Sequence[FileRef]] = None) -> List[Candidate]:
        return self.sort(normalize_candidates(data, files))

    def toggle(self) -> bool:
        self.descending = not self.descending
        return self.descending
