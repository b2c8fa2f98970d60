"""UI for the underwriting requirements checklist."""
from __future__ import annotations
import streamlit as st
from core.checklist import check_all, checklist_progress, get_applicable_requirements, set_item_checked, uncheck_all
from core.presets import CATEGORY_ORDER
from core.state import CheckedItemsStore, ConfigStore
from core.utils import slug
from export.pdf_export import default_filename, generate_checklist_pdf
from ui.components import render_progress


def _key(quote_id, req_id):
    # bumping the revision resets every checkbox after check/uncheck all
    rev = st.session_state.get("checklist_rev", 0)
    return f"chk_{slug(quote_id or 'draft')}_{rev}_{req_id}"


def _load_checked(quote_id, store):
    if quote_id:
        return store.load(quote_id)
    return st.session_state.setdefault("draft_checked", [])


def _save_checked(quote_id, store, ids):
    if quote_id:
        store.save(quote_id, ids)
    else:
        st.session_state["draft_checked"] = ids


def _on_toggle(quote_id, store, req_id, key):
    ids = set_item_checked(_load_checked(quote_id, store), req_id, st.session_state[key])
    _save_checked(quote_id, store, ids)


def _on_bulk(quote_id, store, ids):
    _save_checked(quote_id, store, ids)
    st.session_state["checklist_rev"] = st.session_state.get("checklist_rev", 0) + 1


def render_uw_checklist(quote_id, stage, quote_data, show_guidance=False, config=None, checked_store=None):
    """Render the applicable requirements with checkboxes and return the checked IDs."""
    config = config or ConfigStore()
    checked_store = checked_store or CheckedItemsStore()
    catalog = config.load()
    grouped = get_applicable_requirements(
        catalog, stage, quote_data, exclude_pdf_only=True, category_order=CATEGORY_ORDER
    )
    checked = _load_checked(quote_id, checked_store)

    st.subheader("Document Checklist")
    if not grouped:
        st.info(f"No requirements applicable for this {stage}.")
        return checked

    c1, c2, c3 = st.columns([1, 1, 2])
    c1.button("Check all", key="check_all", on_click=_on_bulk, args=(quote_id, checked_store, check_all(grouped)))
    c2.button("Uncheck all", key="uncheck_all", on_click=_on_bulk, args=(quote_id, checked_store, uncheck_all()))

    for category, reqs in grouped.items():
        done = sum(1 for r in reqs if r.id in checked)
        with st.expander(f"{category} ({done}/{len(reqs)})", expanded=True):
            for req in reqs:
                key = _key(quote_id, req.id)
                label = req.description + ("" if req.required else " (optional)")
                st.checkbox(
                    label,
                    value=req.id in checked,
                    key=key,
                    on_change=_on_toggle,
                    args=(quote_id, checked_store, req.id, key),
                )
                if show_guidance and req.guidance:
                    st.caption(f"Note: {req.guidance}")

    render_progress(checklist_progress(grouped, checked))

    c3.download_button(
        "Download PDF",
        data=generate_checklist_pdf(catalog, checked, quote_data, stage, show_guidance),
        file_name=default_filename(quote_data),
        mime="application/pdf",
    )
    return checked
