import json

import pytest

from .conftest import pdf


def test_health(client):
    r = client.get("/api/v1/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_parse_requirements_endpoint(client):
    r = client.post("/api/v1/requirements/parse", json={"text": "python 5, sql 3"})
    assert r.status_code == 200
    data = r.json()
    assert data["requirements"] == [{"skill": "Python", "weight": 0.63}, {"skill": "SQL", "weight": 0.38}]
    assert data["weight_sum"] == 1.01
    assert data["weight_sum_ok"] is False


def test_parse_requirements_missing_text(client):
    r = client.post("/api/v1/requirements/parse", json={})
    assert r.status_code == 200
    assert r.json()["requirements"] == []


def test_analyze_with_text_reply(client, webhook):
    webhook.reply({"jd_id": "jd-1", "output": "docker, kubernetes 3"})
    r = client.post("/api/v1/jd/analyze", data={"raw_text": "DevOps role"}, files=[pdf("jd.pdf")])
    assert r.status_code == 200
    data = r.json()
    assert data["jd_id"] == "jd-1"
    assert data["source"] == "text"
    assert [x["skill"] for x in data["requirements"]] == ["Docker", "Kubernetes"]
    assert b'filename="jd.pdf"' in webhook.last.read()


def test_analyze_with_structured_reply(client, webhook):
    webhook.reply({"requirements": [{"skill": "Python", "weight": 0.7}]})
    r = client.post("/api/v1/jd/analyze", data={"raw_text": "Python dev"})
    assert r.status_code == 200
    assert r.json()["source"] == "structured"
    assert r.json()["requirements"] == [{"skill": "Python", "weight": 0.7}]


def test_analyze_skips_non_pdf_and_needs_input(client, webhook):
    r = client.post("/api/v1/jd/analyze", files=[("files", ("notes.txt", b"hi", "text/plain"))])
    assert r.status_code == 400
    assert webhook.requests == []


def test_analyze_upstream_failure_is_502(client, webhook):
    webhook.reply(b"boom", status=500)
    r = client.post("/api/v1/jd/analyze", data={"raw_text": "x"})
    assert r.status_code == 502
    body = r.json()
    assert body["error"] == "Upstream service failed"
    assert body["detail"] == "Analyze failed 500: boom"
    assert body["request_id"] == r.headers["X-Request-ID"]


def test_score_ranks_and_attaches_files(client, webhook):
    webhook.reply({"items": [
        {"id": "c1", "name": "Ada", "email": "ada@x.io", "overall": 40},
        {"name": "Grace", "score": "91"},
    ]})
    reqs = [{"skill": "Python", "weight": 0.63}, {"skill": "SQL", "weight": 0.38}]
    r = client.post(
        "/api/v1/cv/score",
        data={"requirements": json.dumps(reqs)},
        files=[pdf("ada.pdf", b"%PDF-ada"), pdf("grace.pdf")],
    )
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 2 and data["descending"] is True
    top, second = data["candidates"]
    assert top["name"] == "Grace" and top["id"] == "cand_1" and top["score"] == 91.0
    assert top["email"] == "unknown"
    assert top["file"]["filename"] == "grace.pdf"
    assert second["file"] == {"filename": "ada.pdf", "content_type": "application/pdf", "size": 8}

    body = webhook.last.read().decode("utf-8")
    assert json.dumps(["Python", "SQL"]) in body


def test_score_ascending(client, webhook):
    webhook.reply([{"score": 10}, {"score": 30}])
    r = client.post(
        "/api/v1/cv/score?descending=false",
        data={"requirements": json.dumps(["Python"])},
        files=[pdf("a.pdf"), pdf("b.pdf")],
    )
    assert r.status_code == 200
    assert [c["score"] for c in r.json()["candidates"]] == [10.0, 30.0]


def test_score_caps_file_count(client, webhook, monkeypatch):
    from cv_analyzer.app.core import config
    monkeypatch.setattr(config, "MAX_CV_FILES", 2)
    webhook.reply([])
    r = client.post(
        "/api/v1/cv/score",
        data={"requirements": json.dumps([{"skill": "Go", "weight": 1}])},
        files=[pdf("1.pdf"), pdf("2.pdf"), pdf("3.pdf")],
    )
    assert r.status_code == 200
    assert r.json()["count"] == 0
    assert webhook.last.read().count(b'name="files"') == 2


@pytest.mark.parametrize("raw", ["not json", '{"skill": "Python"}', "3"])
def test_score_bad_requirements_json(client, webhook, raw):
    r = client.post("/api/v1/cv/score", data={"requirements": raw}, files=[pdf("a.pdf")])
    assert r.status_code == 422
    body = r.json()
    assert body["error"] == "Invalid request payload"
    assert body["details"][0]["loc"] == ["body", "requirements"]
    assert body["request_id"] == r.headers["X-Request-ID"]
    assert "detail" not in body
    assert webhook.requests == []


def test_score_forwards_requirements_as_sent(client, webhook):
    webhook.reply([{"score": 70}])
    reqs = ["Python", {"skill": "SQL", "weight": 0.4}]
    r = client.post("/api/v1/cv/score", data={"requirements": json.dumps(reqs)}, files=[pdf("a.pdf")])
    assert r.status_code == 200
    body = webhook.last.read().decode("utf-8")
    assert json.dumps(reqs) in body
    assert json.dumps(["Python", "SQL"]) in body


def test_score_needs_requirements_and_files(client):
    r = client.post("/api/v1/cv/score", data={"requirements": "[]"}, files=[pdf("a.pdf")])
    assert r.status_code == 400


def test_rank_endpoint_is_total(client):
    r = client.post("/api/v1/candidates/rank", json={"response": {}, "filenames": ["cv.pdf"]})
    assert r.status_code == 200
    (only,) = r.json()["candidates"]
    assert only == {
        "id": "cand_0", "name": "Unknown", "email": "unknown", "score": 0.0,
        "file": {"filename": "cv.pdf", "content_type": None, "size": None},
    }


def test_rank_endpoint_null_response(client):
    r = client.post("/api/v1/candidates/rank", json={"response": None})
    assert r.status_code == 200
    assert r.json() == {"count": 0, "descending": True, "candidates": []}
