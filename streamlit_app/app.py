import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

import streamlit as st

from streamlit_app.state import init_state, logout

st.set_page_config(
    page_title="Cyber Threat Detection",
    layout="wide"
)

init_state()

with st.sidebar:
    st.header("Navigation")
    st.write("Use pages to navigate")
    if st.session_state["is_authenticated"]:
        st.write(f"Signed in as **{st.session_state['user']['username']}**")
        if st.button("Log out"):
            logout()
            st.info("Logged out successfully")

st.title("🛡️ Cyber Threat Detection Dashboard")

st.markdown("""
Welcome to the **threat detection demo**.

1. Sign in
2. Upload a network traffic dataset (CSV or JSON)
3. The dataset is checked for cybersecurity content before analysis
4. Review the classification results
""")
