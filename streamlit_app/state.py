import re

import streamlit as st

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6

def init_state():
    defaults = {
        "is_authenticated": False,
        "user": None,
        "classification_result": None,
        "uploaded_name": None
    }

    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v


def make_user(email, password):
    """Demo sign-in: any non-empty email/password pair is accepted."""
    email = (email or "").strip()
    if not email or not password:
        return None
    return {"email": email, "username": email.split("@")[0]}


def validate_signup(email, password, confirm_password):
    """Field -> message for every problem; empty dict when the form is valid."""
    errors = {}
    email = (email or "").strip()

    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_RE.search(email):
        errors["email"] = "Please enter a valid email"

    if not password:
        errors["password"] = "Password is required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"

    if password != confirm_password:
        errors["confirm_password"] = "Passwords do not match"

    return errors


def login(email, password):
    user = make_user(email, password)
    if user is None:
        return False
    st.session_state["user"] = user
    st.session_state["is_authenticated"] = True
    return True


def logout():
    st.session_state["user"] = None
    st.session_state["is_authenticated"] = False
    st.session_state["classification_result"] = None
    st.session_state["uploaded_name"] = None


def require_login():
    init_state()
    if not st.session_state["is_authenticated"]:
        st.warning("Please sign in first.")
        st.stop()
