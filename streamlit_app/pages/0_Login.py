import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))

import streamlit as st

from streamlit_app.state import init_state, login, validate_signup

st.title("🔐 Sign In")

init_state()

if st.session_state["is_authenticated"]:
    st.success(f"Already signed in as {st.session_state['user']['email']}")
    st.stop()

with st.form("login_form"):
    email = st.text_input("Email")
    password = st.text_input("Password", type="password")
    submitted = st.form_submit_button("Sign in")

if submitted:
    if login(email, password):
        st.success("Login successful!")
    else:
        st.error("Please enter both email and password")

st.subheader("Create an account")

with st.form("signup_form"):
    new_email = st.text_input("Email", key="signup_email")
    new_password = st.text_input("Password", type="password", key="signup_password")
    confirm_password = st.text_input("Confirm password", type="password")
    signed_up = st.form_submit_button("Sign up")

if signed_up:
    errors = validate_signup(new_email, new_password, confirm_password)
    if errors:
        for message in errors.values():
            st.error(message)
    elif login(new_email, new_password):
        st.success("Account created successfully!")
