# dashboards/app.py
# Run: streamlit run dashboards/app.py
import os, sys
import pandas as pd
import streamlit as st

# ---------------- Path guard (imports work when launched from anywhere) ----------------
HERE = os.path.dirname(os.path.abspath(__file__))
REPO_ROOT = os.path.abspath(os.path.join(HERE, ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from docaudit.config import load_settings
from docaudit.report.history import latest_report, load_history

st.set_page_config(page_title="Evidence Compliance", layout="wide")
st.title("Documentation Compliance — Evidence Validation")

settings = load_settings()
evidence_dir = st.sidebar.text_input("Evidence folder", settings.evidence_dir)
if not os.path.isdir(evidence_dir):
    st.error(f"Evidence folder not found: {evidence_dir}")
    st.stop()

history = load_history(evidence_dir)
if history.empty:
    st.info("No SchemaValidation_*.json reports yet. Run `docaudit-validate` first.")
    st.stop()

rep = latest_report(evidence_dir)

# ---------------- Latest verdict ----------------
c1, c2, c3, c4, c5 = st.columns(5)
c1.metric("Status", rep.get("status", "?"))
c2.metric("Completeness", f"{rep.get('completeness_percent', 0.0):.2f}%")
c3.metric("Valid", rep.get("valid_count", 0))
c4.metric("Invalid", rep.get("invalid_count", 0))
c5.metric("Missing", rep.get("missing_count", 0))

reasons = rep.get("review_reasons") or []
if reasons:
    st.warning("Review required: " + ", ".join(reasons))
else:
    st.success("All evidence valid; no review required.")

de = rep.get("draft_enforcement") or {}
st.subheader(f"Draft enforcement: {de.get('status', '?')}")
if de.get("non_compliant"):
    st.write("Non-compliant schemas: " + ", ".join(de["non_compliant"]))

footer = rep.get("footer_check")
if footer:
    st.caption(f"Footer check: {footer.get('status')} {footer.get('detail') or ''} (informational)")

# ---------------- Results ----------------
st.subheader("Results")
st.dataframe(pd.DataFrame(rep.get("results") or []), use_container_width=True, hide_index=True)

# ---------------- Trend ----------------
st.subheader("Completeness over time")
st.line_chart(history.set_index("timestamp_utc")["completeness_percent"])

with st.expander("All reports", expanded=False):
    st.dataframe(history, use_container_width=True, hide_index=True)
