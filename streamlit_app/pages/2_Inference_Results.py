import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))

import streamlit as st
import pandas as pd

from streamlit_app.state import require_login
from streamlit_app.utils.results_utils import (
    SECURE_ACCURACIES,
    UNSAFE_ACCURACIES,
    average_accuracy,
    performance_band,
    security_status
)

st.set_page_config(page_title="Inference Results", layout="wide")

st.title("📊 Inference Results")

require_login()

# -------------------------
# CHECK CLASSIFIED DATA
# -------------------------
show_unsafe = st.toggle("Show unsafe system example")

if not show_unsafe and st.session_state["classification_result"] is None:
    st.warning("Please upload a cybersecurity dataset first.")
    st.stop()

accuracies = UNSAFE_ACCURACIES if show_unsafe else SECURE_ACCURACIES

if show_unsafe:
    st.info("THIS IS AN EXAMPLE PAGE: how a compromised system would appear in the dashboard")
else:
    st.info(f"Results for **{st.session_state['uploaded_name']}**")

# -------------------------
# SECURITY STATUS
# -------------------------
is_safe, threat_level = security_status(accuracies)

if is_safe:
    st.success("System secure: no significant threats detected.")
elif threat_level == "high":
    st.error("CRITICAL ALERT: patterns matching known attack signatures were identified.")
else:
    st.warning(f"Threat level: {threat_level}")

# -------------------------
# MODEL CARDS
# -------------------------
col1, col2 = st.columns(2)

with col1:
    st.subheader("K-Nearest-Neighbor (KNN)")
    st.metric("Binary Class Accuracy", f"{accuracies['KNN Binary']:.4f}")
    st.metric("Multi Class Accuracy", f"{accuracies['KNN Multi']:.4f}")

with col2:
    st.subheader("Random Forest")
    st.metric("Binary Class Accuracy", f"{accuracies['Random Forest Binary']:.4f}")
    st.metric("Multi Class Accuracy", f"{accuracies['Random Forest Multi']:.4f}")

st.write(f"Average Model Accuracy: **{average_accuracy(accuracies):.4f}**")

# -------------------------
# TABLE
# -------------------------
table = pd.DataFrame(
    [{"Model": k, "Accuracy": v, "Band": performance_band(v)} for k, v in accuracies.items()]
)
st.dataframe(table, use_container_width=True)
