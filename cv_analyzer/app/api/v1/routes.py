# cv_analyzer/app/api/v1/routes.py
import json
from typing import Any, List, Optional, Tuple

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from ...core import config
from ...core.logging import get_logger
from ...services.scoring import (
    CandidateRanker,
    FileRef,
    is_weight_sum_ok,
    parse_requirements_string,
    resolve_analysis,
    weight_sum,
)
from ...services.webhook import Upload, WebhookClient

# ----- models -----
class ParseRequest(BaseModel):
    text: Optional[str] = None


class RankRequest(BaseModel):
    response: Any = None            # raw scoring-webhook reply, any shape
    filenames: List[str] = []
    descending: bool = True


router = APIRouter(prefix="/api/v1", tags=["v1"])
logger = get_logger("cv_analyzer.v1")


def get_webhook_client() -> WebhookClient:
    return WebhookClient()


# ----- helpers -----
async def _read_pdfs(files: Optional[List[UploadFile]], limit: Optional[int] = None) -> Tuple[List[Upload], List[FileRef]]:
    """Keep PDF uploads only (up to `limit`), returning the multipart tuples and their FileRefs."""
    uploads: List[Upload] = []
    refs: List[FileRef] = []
    for f in files or []:
        if not f or not f.filename:
            continue
        if f.content_type != config.PDF_CONTENT_TYPE:
            logger.info(f"Skip non-PDF upload {f.filename} ({f.content_type})")
            continue
        if limit is not None and len(uploads) >= limit:
            logger.info(f"Upload limit {limit} reached; dropping {f.filename}")
            continue
        content = await f.read()
        uploads.append((f.filename, content, f.content_type))
        refs.append(FileRef(filename=f.filename, content_type=f.content_type, size=len(content)))
    return uploads, refs


def _requirements_summary(requirements) -> dict:
    return {
        "requirements": [r.to_dict() for r in requirements],
        "weight_sum": round(weight_sum(requirements), 2),
        "weight_sum_ok": is_weight_sum_ok(requirements),
    }


# ----- endpoints -----
@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/requirements/parse")
def parse_requirements(body: ParseRequest):
    reqs = parse_requirements_string(body.text)
    return _requirements_summary(reqs)


@router.post("/jd/analyze")
async def analyze_jd(
    raw_text: str = Form(""),
    files: Optional[List[UploadFile]] = File(default=None),
    client: WebhookClient = Depends(get_webhook_client),
):
    uploads, _ = await _read_pdfs(files)
    if not raw_text.strip() and not uploads:
        raise HTTPException(status_code=400, detail="Provide JD text or at least one PDF file.")

    payload = await run_in_threadpool(client.analyze_jd, raw_text, uploads)
    result = resolve_analysis(payload)
    logger.info(f"Analyze resolved {len(result.requirements)} requirement(s) from {result.source}")
    return {"jd_id": result.jd_id, "source": result.source, **_requirements_summary(result.requirements)}


@router.post("/cv/score")
async def score_cvs(
    requirements: str = Form(...),
    files: Optional[List[UploadFile]] = File(default=None),
    descending: bool = Query(True, description="Sort by score, highest first"),
    client: WebhookClient = Depends(get_webhook_client),
):
    try:
        reqs = json.loads(requirements)
    except ValueError:
        reqs = None
    if not isinstance(reqs, list):
        raise RequestValidationError([{
            "type": "list_type",
            "loc": ("body", "requirements"),
            "msg": "requirements must be a JSON list",
            "input": requirements,
        }])

    uploads, refs = await _read_pdfs(files, limit=config.MAX_CV_FILES)
    if not reqs or not uploads:
        raise HTTPException(status_code=400, detail="Scoring needs at least one requirement and one PDF file.")

    # forwarded as sent: strings and {skill, weight} rows both pass through untouched
    payload = await run_in_threadpool(client.score_cvs, reqs, uploads)
    candidates = CandidateRanker(descending).rank(payload, refs)
    logger.info(f"Scored {len(candidates)} candidate(s) for {len(uploads)} file(s)")
    return {
        "count": len(candidates),
        "descending": descending,
        "candidates": [c.to_dict() for c in candidates],
    }


@router.post("/candidates/rank")
def rank_candidates(body: RankRequest):
    refs = [FileRef(filename=name) for name in body.filenames]
    candidates = CandidateRanker(body.descending).rank(body.response, refs)
    return {
        "count": len(candidates),
        "descending": body.descending,
        "candidates": [c.to_dict() for c in candidates],
    }
