import logging

import streamlit as st

from core.presets import DISCLAIMER
from core.state import load_state
from core.version import __version__
from ui.admin import render_admin
from ui.documents import render_uw_checklist
from ui.sidebar import render_quote_sidebar

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def init_state():
    ss = st.session_state
    ss.setdefault("quote_id", "")
    ss.setdefault("stage", "DIP")
    ss.setdefault("quote_data", {})
    ss.setdefault("show_guidance", False)
    ss.setdefault("admin_user", "admin")


def main():
    st.set_page_config(page_title="UW Requirements", layout="wide")
    load_state()
    init_state()

    quote_id, stage, quote_data, show_guidance = render_quote_sidebar()
    nav = st.sidebar.radio("Navigate", ["Checklist", "Admin"])

    st.title("UW REQUIREMENTS CHECKLIST")
    st.caption(f"v{__version__} • DIP and indicative terms • Conditional requirements")

    if nav == "Checklist":
        render_uw_checklist(quote_id, stage, quote_data, show_guidance)
        st.divider()
        st.caption(DISCLAIMER)
    else:
        st.session_state["admin_user"] = st.sidebar.text_input(
            "Admin user", value=st.session_state.get("admin_user", "admin")
        )
        render_admin()


if __name__ == "__main__":
    main()
