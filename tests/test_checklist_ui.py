import json

from streamlit.testing.v1 import AppTest

from core import state
from core.state import CheckedItemsStore


def checklist_app():
    from ui.documents import render_uw_checklist

    render_uw_checklist(
        "Q1", "DIP",
        {"hmo": "Yes", "holiday": "No", "mufb": "No", "borrower_type": "company", "loan_purpose": "purchase"},
    )


def _paths(tmp_path, monkeypatch):
    monkeypatch.setattr(state, "REQUIREMENTS_FILE", str(tmp_path / "reqs.json"))
    monkeypatch.setattr(state, "CHECKLIST_DIR", str(tmp_path / "checklists"))
    monkeypatch.setattr(state, "SESSION_FILE", str(tmp_path / "session.json"))


def test_checklist_groups_applicable_items(tmp_path, monkeypatch):
    _paths(tmp_path, monkeypatch)
    at = AppTest.from_function(checklist_app)
    at.run()
    assert not at.exception
    labels = [e.label for e in at.expander]
    assert "Property - HMO (0/3)" in labels
    assert "Company (0/2)" in labels
    assert not any(label.startswith("Property - Holiday Let") for label in labels)
    assert not any(label.startswith("Assumptions") for label in labels)


def test_checking_an_item_persists_for_the_quote(tmp_path, monkeypatch):
    _paths(tmp_path, monkeypatch)
    at = AppTest.from_function(checklist_app)
    at.run()
    at.checkbox(key="chk_q1_0_hmo_licence").check().run()
    assert not at.exception
    assert CheckedItemsStore(str(tmp_path / "checklists")).load("Q1") == ["hmo_licence"]
    assert "Property - HMO (1/3)" in [e.label for e in at.expander]


def test_disabled_override_hides_item(tmp_path, monkeypatch):
    _paths(tmp_path, monkeypatch)
    (tmp_path / "reqs.json").write_text(json.dumps([{"id": "hmo_licence", "enabled": False}]))
    at = AppTest.from_function(checklist_app)
    at.run()
    assert "Property - HMO (0/2)" in [e.label for e in at.expander]


def sidebar_app():
    import streamlit as st
    from ui.sidebar import render_quote_sidebar

    quote_id, stage, data, guidance = render_quote_sidebar()
    st.session_state["resolved_data"] = data


def test_sidebar_merges_extra_answers(tmp_path, monkeypatch):
    _paths(tmp_path, monkeypatch)
    at = AppTest.from_function(sidebar_app)
    at.session_state["quote_data"] = {"hmo": "Yes"}
    at.run()
    assert at.session_state["resolved_data"]["hmo"] == "Yes"
    assert at.session_state["stage"] == "DIP"

    at.sidebar.text_area[0].set_value('{"hmo_beds": {"option_label": "Up to 6 beds", "tier": 2}}').run()
    assert at.session_state["resolved_data"]["hmo_beds"]["option_label"] == "Up to 6 beds"

    at.sidebar.text_area[0].set_value("[1, 2]").run()
    assert len(at.sidebar.error) == 1


def admin_app():
    from ui.admin import render_admin

    render_admin()


def test_admin_save_writes_overrides(tmp_path, monkeypatch):
    _paths(tmp_path, monkeypatch)
    at = AppTest.from_function(admin_app)
    at.run()
    assert not at.exception
    at.button(key="toggle_hmo_licence").click().run()
    next(b for b in at.button if b.label == "Save").click().run()
    stored = json.loads((tmp_path / "reqs.json").read_text())
    assert next(r for r in stored if r["id"] == "hmo_licence")["enabled"] is False


def test_unanswered_holiday_question_keeps_holiday_items(tmp_path, monkeypatch):
    _paths(tmp_path, monkeypatch)

    def app():
        from ui.documents import render_uw_checklist

        render_uw_checklist("Q2", "DIP", {"hmo": "No", "mufb": "No"})

    at = AppTest.from_function(app)
    at.run()
    assert any(e.label.startswith("Property - Holiday Let") for e in at.expander)


def test_sidebar_keeps_successive_json_edits(tmp_path, monkeypatch):
    _paths(tmp_path, monkeypatch)
    at = AppTest.from_function(sidebar_app)
    at.run()
    at.sidebar.text_area[0].set_value('{"a": 1}').run()
    at.sidebar.text_area[0].set_value('{"a": 2}').run()
    assert at.sidebar.text_area[0].value == '{"a": 2}'
    assert at.session_state["resolved_data"]["a"] == 2
    assert len(at.sidebar.error) == 0


def test_admin_offers_blank_template_pdf(tmp_path, monkeypatch):
    _paths(tmp_path, monkeypatch)
    at = AppTest.from_function(admin_app)
    at.run()
    assert not at.exception
    assert len(at.get("download_button")) == 1
