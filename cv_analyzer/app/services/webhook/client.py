# cv_analyzer/app/services/webhook/client.py
# Talks to the n8n workflow: one multipart POST per analyze / score call.
from __future__ import annotations
import json
from typing import Any, List, Optional, Sequence, Tuple

import httpx

from ...core import config
from ...core.errors import WebhookError
from ...core.logging import get_logger
from ..scoring.models import Requirement
from ..scoring.requirements import skill_names

logger = get_logger("cv_analyzer.webhook")

# (filename, content, content_type), the tuple httpx takes for a multipart part
Upload = Tuple[str, bytes, Optional[str]]


def _requirements_json(requirements: Sequence[Any]) -> str:
    rows = [r.to_dict() if isinstance(r, Requirement) else r for r in requirements or []]
    return json.dumps(rows, ensure_ascii=False)


class WebhookClient:
    def __init__(
        self,
        analyze_url: str = config.ANALYZE_URL,
        score_url: str = config.SCORE_URL,
        timeout: float = config.WEBHOOK_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.analyze_url = analyze_url
        self.score_url = score_url
        self.timeout = timeout
        self.transport = transport

    def _post(self, url: str, operation: str, label: str, data: dict, files: Sequence[Upload]) -> Any:
        # plain fields go in as filename-less parts so the body is multipart even with no files
        parts: List[Tuple[str, tuple]] = [(k, (None, str(v).encode("utf-8"))) for k, v in data.items()]
        parts += [("files", f) for f in files or []]
        logger.info(f"POST {operation} -> {url} ({len(files or [])} file(s))")
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                res = client.post(url, files=parts)
        except httpx.HTTPError as e:
            logger.warning(f"{operation} transport error: {e}")
            raise WebhookError(f"{label} failed: {e}", operation=operation) from e

        if not res.is_success:
            try:
                text = res.text
            except Exception:
                text = ""
            logger.warning(f"{operation} -> {res.status_code}")
            raise WebhookError(
                f"{label} failed {res.status_code}: {text}",
                operation=operation,
                status_code=res.status_code,
            )

        try:
            payload = res.json()
        except ValueError as e:
            raise WebhookError(
                f"{label} failed: reply is not JSON",
                operation=operation,
                status_code=res.status_code,
            ) from e
        logger.info(f"{operation} completed -> {res.status_code}")
        return payload

    def analyze_jd(self, raw_text: Optional[str], files: Sequence[Upload] = ()) -> Any:
        data = {"mode": "analyze", "raw_text": raw_text or ""}
        return self._post(self.analyze_url, "analyze", "Analyze", data, files)

    def score_cvs(self, requirements: Sequence[Any], files: Sequence[Upload] = ()) -> Any:
        data = {
            "mode": "score",
            "skills": json.dumps(skill_names(requirements), ensure_ascii=False),
            "requirements": _requirements_json(requirements),
        }
        return self._post(self.score_url, "score", "Scoring", data, files)
