# frontend/streamlit_app.py
# streamlit run frontend/streamlit_app.py
from typing import List

import pandas as pd
import streamlit as st

from cv_analyzer.app.core import config
from cv_analyzer.app.core.errors import WebhookError
from cv_analyzer.app.services.scoring import (
    CandidateRanker,
    FileRef,
    Requirement,
    coerce_requirement,
    is_weight_sum_ok,
    normalize_candidates,
    resolve_analysis,
    weight_sum,
)
from cv_analyzer.app.services.webhook import WebhookClient

# ---------------- Page Config ----------------
st.set_page_config(page_title="CV Analyzer", layout="wide")

DEFAULT_STATE = {
    "requirements": [],
    "req_df": pd.DataFrame(columns=["skill", "weight"]),
    "candidates": [],
    "jd_id": None,
    "ranker": CandidateRanker(descending=True),
}
for k, v in DEFAULT_STATE.items():
    st.session_state.setdefault(k, v)

client = WebhookClient()

# ---------------- Helpers ----------------
def _pdf_uploads(files, limit=None):
    files = [f for f in (files or []) if f.type == config.PDF_CONTENT_TYPE]
    if limit is not None:
        files = files[:limit]
    uploads = [(f.name, f.getvalue(), f.type) for f in files]
    refs = [FileRef(filename=f.name, content_type=f.type, size=f.size) for f in files]
    return uploads, refs

def _requirements_frame(reqs: List[Requirement]) -> pd.DataFrame:
    return pd.DataFrame([r.to_dict() for r in reqs], columns=["skill", "weight"])

def _frame_to_requirements(df: pd.DataFrame) -> List[Requirement]:
    rows = df.fillna({"skill": "", "weight": 0.0}).to_dict(orient="records")
    return [r for r in (coerce_requirement(row) for row in rows) if r is not None]

# ---------------- Header ----------------
st.title("CV Analyzer")
st.caption("Analyze job postings, organize requirements, and score resumes.")

badge_slot = st.empty()

# ---------------- 1) JD ----------------
st.subheader("1) Job description")
jd_text = st.text_area("JD text (optional)", height=160)
jd_files = st.file_uploader("JD PDF files", type=["pdf"], accept_multiple_files=True, key="jd_files")

if st.button("Analyze", disabled=not jd_files and not jd_text.strip()):
    uploads, _ = _pdf_uploads(jd_files)
    with st.spinner("Analyzing JD ..."):
        try:
            result = resolve_analysis(client.analyze_jd(jd_text, uploads))
        except WebhookError as e:
            st.error(str(e))
        else:
            st.session_state.jd_id = result.jd_id
            st.session_state.req_df = _requirements_frame(result.requirements)
            st.session_state.pop("req_editor", None)  # drop edits made against the old table
            st.rerun()

if st.session_state.jd_id:
    st.caption(f"JD id: {st.session_state.jd_id}")

# ---------------- 2) Requirements ----------------
st.subheader("2) Requirements")
st.caption("Weights should be in 0..1 range, total ≤ 1 recommended.")
edited = st.data_editor(
    st.session_state.req_df,
    num_rows="dynamic",
    width="stretch",
    column_config={
        "skill": st.column_config.TextColumn("Skill"),
        "weight": st.column_config.NumberColumn("Weight", min_value=0.0, max_value=1.0, step=0.01),
    },
    key="req_editor",
)
reqs = _frame_to_requirements(edited)
st.session_state.requirements = reqs
badge = ":green" if is_weight_sum_ok(reqs) else ":red"
badge_slot.markdown(f"**Total weight:** {badge}[{weight_sum(reqs):.2f}]")

# ---------------- 3) CVs ----------------
st.subheader("3) Candidate CVs")
cv_files = st.file_uploader(
    f"CV PDF files (max {config.MAX_CV_FILES})", type=["pdf"], accept_multiple_files=True, key="cv_files"
)

can_score = bool(st.session_state.requirements) and bool(cv_files)
if st.button("Score", disabled=not can_score):
    uploads, refs = _pdf_uploads(cv_files, limit=config.MAX_CV_FILES)
    with st.spinner("Scoring CVs ..."):
        try:
            payload = client.score_cvs(st.session_state.requirements, uploads)
        except WebhookError as e:
            st.error(str(e))
        else:
            st.session_state.candidates = normalize_candidates(payload, refs)

# ---------------- 4) Ranking ----------------
candidates = st.session_state.candidates
st.subheader(f"4) Candidates ({len(candidates)})")
ranker: CandidateRanker = st.session_state.ranker
label = "Descending" if ranker.descending else "Ascending"
if st.button(f"Sort: {label}"):
    ranker.toggle()
    st.rerun()

ranked = ranker.sort(candidates)
if ranked:
    st.dataframe(
        pd.DataFrame([{
            "name": c.name,
            "email": c.email,
            # displayed as a percentage bar, clamped to 0..100
            "score": max(0.0, min(100.0, c.score)),
            "file": c.file.filename if c.file else "-",
        } for c in ranked]),
        width="stretch",
        column_config={
            "score": st.column_config.ProgressColumn("Score", min_value=0, max_value=100, format="%.0f%%"),
        },
        hide_index=True,
    )
else:
    st.info("No candidates scored yet.")
