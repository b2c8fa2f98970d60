"""Admin screen for the underwriting requirement catalog."""
import json
import streamlit as st
import pandas as pd
from core.admin import RequirementsEditor, RequirementValidationError
from core.presets import CATEGORY_ORDER, UW_STAGES
from core.state import ConfigStore
from export.pdf_export import build_checklist_pdf

STAGE_FILTERS = {"All Stages": "all", "DIP Only": "DIP", "Indicative Only": "Indicative", "Both (DIP & Indicative)": "Both"}


def _editor(config):
    if "uw_editor" not in st.session_state:
        st.session_state["uw_editor"] = RequirementsEditor(
            config.load(), user=st.session_state.get("admin_user") or "admin"
        )
    return st.session_state["uw_editor"]


def render_add_form(editor):
    with st.form("add_requirement"):
        st.markdown("**Add requirement**")
        c1, c2 = st.columns(2)
        new_id = c1.text_input("ID")
        category = c2.selectbox("Category", CATEGORY_ORDER, index=CATEGORY_ORDER.index("Borrower"))
        description = st.text_area("Description")
        c3, c4 = st.columns(2)
        stage = c3.selectbox("Stage", list(UW_STAGES.values()), index=2)
        required = c4.checkbox("Required", value=True)
        condition = st.text_input("Condition (JSON, optional)", placeholder='{"field": "hmo", "operator": "notEquals", "value": "No"}')
        guidance = st.text_input("Internal guidance")
        if st.form_submit_button("Add"):
            try:
                conditions = [json.loads(condition)] if condition.strip() else []
                editor.add({
                    "id": new_id.strip(),
                    "category": category,
                    "description": description.strip(),
                    "stage": stage,
                    "required": required,
                    "conditions": conditions,
                    "guidance": guidance,
                })
                st.success(f"Added {new_id}")
            except json.JSONDecodeError as exc:
                st.error(f"Condition is not valid JSON: {exc}")
            except RequirementValidationError as exc:
                st.error(str(exc))


def render_admin(config=None):
    """Edit, filter and save the requirement catalog."""
    config = config or ConfigStore()
    editor = _editor(config)

    st.header("UW Requirements Configuration")
    st.caption(f"{len(editor.requirements)} items. Requirements can be conditional on quote answers.")

    c1, c2 = st.columns(2)
    stage = STAGE_FILTERS[c1.selectbox("Filter by Stage", list(STAGE_FILTERS))]
    search = c2.text_input("Search descriptions", key="admin_search")

    for category, reqs in editor.filter(stage, search).items():
        with st.expander(f"{category} ({len(reqs)})"):
            for req in reqs:
                cols = st.columns([6, 1, 1, 1, 1])
                flags = "" if req.enabled else " ~~disabled~~"
                cols[0].markdown(f"`{req.id}` {req.description}{flags}")
                if req.conditions:
                    cols[0].caption("If " + " and ".join(f"{c.field} {c.operator} {c.value}" for c in req.conditions))
                if cols[1].button("↑", key=f"up_{req.id}"):
                    editor.move(req.id, "up")
                    st.rerun()
                if cols[2].button("↓", key=f"down_{req.id}"):
                    editor.move(req.id, "down")
                    st.rerun()
                if cols[3].button("On/Off", key=f"toggle_{req.id}"):
                    editor.toggle_enabled(req.id)
                    st.rerun()
                if cols[4].button("Delete", key=f"del_{req.id}"):
                    editor.delete(req.id)
                    st.rerun()

    with st.expander("Edit as table"):
        edited = st.data_editor(editor.to_frame(), num_rows="dynamic", key="uw_table", use_container_width=True)
        if st.button("Apply table edits"):
            try:
                editor.from_frame(pd.DataFrame(edited))
                st.success("Table edits applied")
            except RequirementValidationError as exc:
                st.error(str(exc))

    render_add_form(editor)

    c1, c2, c3, c4 = st.columns(4)
    if c1.button("Save", type="primary"):
        config.save(editor.requirements)
        st.success("UW Requirements saved successfully")
    if c2.button("Reset to defaults"):
        editor.reset_to_defaults()
        config.save(editor.requirements)
        st.success(f"Requirements have been reset to defaults ({len(editor.requirements)} items)")
    if c3.button("Sync with defaults"):
        editor.sync_with_defaults()
        st.success(f"Synced with defaults. Now showing {len(editor.requirements)} items")
    # blank template: every item, all stages, guidance shown
    c4.download_button(
        "PDF",
        data=build_checklist_pdf(editor.requirements, [], {}, None, True),
        file_name="UW_Requirements_Template.pdf",
        mime="application/pdf",
        key="admin_pdf",
    )

    if editor.audit.entries:
        with st.expander("Change log"):
            st.dataframe(pd.DataFrame(editor.audit.as_dict()).astype(str), use_container_width=True)
