# frontend/streamlit_app.py

import os
import time
import streamlit as st

from api_client import BackendClient

st.set_page_config(page_title="🎯 MatchIQ Resume Optimizer", layout="wide")

# Backend URL (can be set via env BACKEND_URL)
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")
client = BackendClient(base_url=BACKEND_URL)

st.title("🎯 MatchIQ: ATS Resume Optimizer")
st.caption(f"Backend: {BACKEND_URL}")

with st.expander("ℹ️ Instructions", expanded=False):
    st.markdown("""
    1) Provide your **Resume** (PDF/DOCX/TXT upload or pasted text).
    2) Provide the **Job Description** (pasted text or a link to the posting).
    3) Click **Optimize**: the backend extracts keywords, scores your resume and
       writes ATS-friendly bullets plus a cover letter.
    """)

st.markdown("---")

# ---------- Session state ----------
if "job_history" not in st.session_state:
    # list of dicts: {"id": str, "score": int | None, "ts": float}
    st.session_state.job_history = []

def _push_history(job_id: str, score):
    # Avoid duplicates; keep most recent first; cap length to 20
    st.session_state.job_history = [
        j for j in st.session_state.job_history if j["id"] != job_id
    ]
    st.session_state.job_history.insert(0, {"id": job_id, "score": score, "ts": time.time()})
    st.session_state.job_history = st.session_state.job_history[:20]

# ---------- Inputs ----------
col1, col2 = st.columns(2)

with col1:
    st.subheader("📄 Resume")
    resume_input = st.radio("Input method", ["Upload File", "Paste Text"], key="resume_method")
    resume_text = ""
    if resume_input == "Upload File":
        up_res = st.file_uploader("Upload Resume", type=["pdf", "docx", "txt"], key="resume_file")
        if up_res:
            with st.spinner("Parsing resume..."):
                try:
                    resume_text = client.parse_document(up_res.read(), filename=up_res.name)
                except Exception as e:
                    st.error(f"Resume parsing failed: {e}")
    else:
        resume_text = st.text_area("Paste Resume Text", height=250, key="resume_textarea")

    if resume_text:
        with st.expander("🔍 Resume Preview"):
            st.text_area("Resume Text", resume_text, height=150, key="resume_preview")

with col2:
    st.subheader("📑 Job Description")
    jd_input = st.radio("Input method", ["Paste Text", "Job Posting URL"], key="jd_method")
    jd_text = ""
    jd_url = ""
    if jd_input == "Paste Text":
        jd_text = st.text_area("Paste JD Text", height=250, key="jd_textarea")
    else:
        jd_url = st.text_input("Job posting URL", placeholder="https://...", key="jd_url")

st.markdown("---")

# ---------- Actions ----------
disabled = not (resume_text and (jd_text or jd_url))
output = st.empty()

def _render_result(result: dict):
    score = result.get("ats_score")
    st.metric("ATS Score", f"{score}%" if score is not None else "N/A")
    keywords = result.get("extracted_keywords") or []
    st.markdown("**Keywords:** " + (", ".join(f"`{k}`" for k in keywords) if keywords else "_None_"))
    st.subheader("✨ Optimized Bullet Points")
    st.markdown(result.get("optimized_bullet_points") or "_None_")
    st.subheader("✉️ Cover Letter")
    st.text(result.get("tailored_cover_letter") or "")

def _run_job(resume: str, jd: str, url: str):
    with output.container():
        st.info("Submitting optimization job...")
        try:
            if url:
                job_id = client.submit_with_job_url(resume, url)
            else:
                job_id = client.submit_text(resume, jd)
        except Exception as e:
            st.error(f"Failed to submit job: {e}")
            return

        st.success(f"Job submitted. ID: `{job_id}`")
        prog = st.progress(0)
        status_box = st.empty()

        def on_tick(elapsed, status):
            pct = min(100, int((elapsed / 60.0) * 100))  # scale to 60s
            prog.progress(pct)
            status_box.write(f"⏳ Elapsed: {int(elapsed)}s · Status: **{status}**")

        with st.spinner("Waiting for result..."):
            result = client.wait_with_progress(job_id, total_wait=120.0, poll_interval=1.5, on_tick=on_tick)

        prog.progress(100)
        st.write("")

        status = result.get("status")
        if status == "COMPLETED":
            st.success("✅ Optimization finished")
            _render_result(result)
            _push_history(job_id, result.get("ats_score"))
        elif status == "FAILED":
            st.error(f"❌ Job failed: {result.get('error_message')}")
        else:
            st.warning(f"Job is still {status}. Check back later with ID `{job_id}`.")
        st.write("---")

if st.button("🚀 Optimize", disabled=disabled, use_container_width=True):
    _run_job(resume_text, jd_text, jd_url)

# ---------- History ----------
if st.session_state.job_history:
    st.markdown("---")
    st.subheader("📜 Job History")

    # show the most recent 10
    for i, item in enumerate(st.session_state.job_history[:10], start=1):
        ts = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(item["ts"]))
        score = item["score"]
        st.write(f"**{i}.** `{item['id']}`  ·  score {score if score is not None else 'N/A'}%  ·  {ts}")
