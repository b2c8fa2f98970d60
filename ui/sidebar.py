import json
import streamlit as st
from core.presets import BORROWER_TYPES, LOAN_PURPOSES, YES_NO
from core.state import save_state

STAGE_OPTIONS = ["DIP", "Indicative"]
EXTRA_ANSWERS_KEY = "extra_answers_json"


def _index(options, value):
    return options.index(value) if value in options else 0


def render_quote_sidebar():
    """Sidebar with the quote answers the requirement conditions read."""
    st.session_state.setdefault("quote_data", {})
    data = dict(st.session_state["quote_data"])

    st.sidebar.header("Quote")
    quote_id = st.sidebar.text_input("Quote / DIP reference", value=st.session_state.get("quote_id", ""))
    stage = st.sidebar.selectbox(
        "Stage", STAGE_OPTIONS, index=_index(STAGE_OPTIONS, st.session_state.get("stage", "DIP"))
    )
    data["loan_purpose"] = st.sidebar.selectbox(
        "Loan purpose", LOAN_PURPOSES, index=_index(LOAN_PURPOSES, data.get("loan_purpose"))
    )
    data["borrower_type"] = st.sidebar.selectbox(
        "Borrower type", BORROWER_TYPES, index=_index(BORROWER_TYPES, data.get("borrower_type"))
    )
    data["hmo"] = st.sidebar.selectbox("HMO", YES_NO, index=_index(YES_NO, data.get("hmo")))
    data["holiday"] = st.sidebar.selectbox("Holiday let", YES_NO, index=_index(YES_NO, data.get("holiday")))
    data["mufb"] = st.sidebar.selectbox("MUFB", YES_NO, index=_index(YES_NO, data.get("mufb")))
    data["borrower_name"] = st.sidebar.text_input("Borrower name", value=data.get("borrower_name", ""))
    data["property_address"] = st.sidebar.text_input("Property address", value=data.get("property_address", ""))
    data["reference_number"] = quote_id

    st.session_state.setdefault(
        EXTRA_ANSWERS_KEY, json.dumps(st.session_state.get("extra_answers", {}), indent=2)
    )
    extra_json = st.sidebar.text_area("Other quote answers (JSON)", key=EXTRA_ANSWERS_KEY)
    try:
        extra = json.loads(extra_json or "{}")
        if not isinstance(extra, dict):
            raise ValueError("expected a JSON object")
        st.session_state["extra_answers"] = extra
    except ValueError as exc:
        st.sidebar.error(f"Ignoring other answers: {exc}")
        extra = st.session_state.get("extra_answers", {})

    show_guidance = st.sidebar.toggle("Show UW guidance", value=st.session_state.get("show_guidance", False))

    st.session_state["quote_id"] = quote_id
    st.session_state["stage"] = stage
    st.session_state["quote_data"] = data
    st.session_state["show_guidance"] = show_guidance
    save_state()
    return quote_id, stage, {**extra, **data}, show_guidance
