import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))

import streamlit as st

from pipeline.dataset_classifier import classify_dataset
from preprocessor.helpers import load_settings
from streamlit_app.state import require_login
from streamlit_app.utils.results_utils import evidence_frame

st.title("📂 Upload Dataset")

require_login()

settings = load_settings()

st.markdown("""
Upload a **network traffic dataset** (CSV or JSON).  
The file is checked for cybersecurity content before it is analysed.
""")

uploaded_file = st.file_uploader(
    "Upload dataset",
    type=["csv", "json"]
)

if uploaded_file is not None:
    if uploaded_file.size > settings.max_upload_mb * 1024 * 1024:
        st.error(f"File exceeds {settings.max_upload_mb} MB")
        st.stop()

    with st.spinner("Classifying dataset..."):
        result = classify_dataset(
            uploaded_file.getvalue(),
            uploaded_file.name,
            **settings.classifier_options()
        )

    col1, col2, col3 = st.columns(3)
    col1.metric("Confidence", f"{result.confidence:.2f}")
    col2.metric("Keywords", len(result.matched_keywords))
    col3.metric("Patterns", len(result.matched_patterns))

    if not result.is_cybersecurity_related:
        # parse failures and unrelated data look the same to the user
        st.session_state["classification_result"] = None
        st.error(
            "This file does not appear to be a cybersecurity dataset. "
            "Please upload network intrusion or security data."
        )
    else:
        st.session_state["classification_result"] = result
        st.session_state["uploaded_name"] = uploaded_file.name
        st.success("✅ Cybersecurity dataset detected. Open **Inference Results** to continue.")

        st.subheader("Evidence")
        st.dataframe(evidence_frame(result), use_container_width=True)

    with st.expander("Debug info"):
        st.json(dict(result.debug_info))
