import pytest

from core.admin import RequirementsEditor, RequirementValidationError
from core.presets import DEFAULT_UW_REQUIREMENTS
from core.state import default_requirements


def _editor():
    return RequirementsEditor(default_requirements(), user="alice")


def test_update_records_audit_entry():
    editor = _editor()
    editor.update("borrower_dd_mandate", "description", "Signed DD mandate")
    assert editor.get("borrower_dd_mandate").description == "Signed DD mandate"
    entry = editor.audit.entries[-1]
    assert entry.user == "alice"
    assert entry.requirement_id == "borrower_dd_mandate"
    assert entry.old_value == "Completed and signed direct debit mandate"


def test_editor_works_on_a_copy():
    reqs = default_requirements()
    editor = RequirementsEditor(reqs)
    editor.toggle_enabled("borrower_als")
    assert editor.get("borrower_als").enabled is False
    assert next(r for r in reqs if r.id == "borrower_als").enabled is True


def test_update_rejects_invalid_values():
    editor = _editor()
    with pytest.raises(RequirementValidationError):
        editor.update("borrower_als", "stage", "Offer")
    with pytest.raises(RequirementValidationError):
        editor.update("borrower_als", "id", "renamed")
    with pytest.raises(RequirementValidationError):
        editor.update("missing", "enabled", False)


def test_move_swaps_order_within_category():
    editor = _editor()
    editor.move("company_accounts", "up")
    assert editor.get("company_accounts").order == 1
    assert editor.get("company_incorporation").order == 2
    editor.move("company_accounts", "up")
    assert editor.get("company_accounts").order == 1
    editor.move("additional_rental_bank_statements", "down")
    assert editor.get("additional_rental_bank_statements").order == 2


def test_add_validates_and_appends_to_category():
    editor = _editor()
    new = editor.add({"id": "property_epc", "category": "Property", "description": "EPC certificate", "stage": "DIP"})
    assert new.order == 8
    assert editor.requirements[-1].id == "property_epc"
    with pytest.raises(RequirementValidationError, match="already exists"):
        editor.add({"id": "property_epc", "category": "Property", "description": "again"})
    with pytest.raises(RequirementValidationError, match="required"):
        editor.add({"id": "  ", "category": "Property", "description": "blank id"})
    with pytest.raises(RequirementValidationError, match="required"):
        editor.add({"id": "no_desc", "category": "Property", "description": ""})


def test_add_to_empty_category_starts_at_one():
    editor = _editor()
    assert editor.add({"id": "x", "category": "Valuation", "description": "Valuer instructed"}).order == 1


def test_delete():
    editor = _editor()
    assert editor.delete("hmo_licence")
    assert editor.get("hmo_licence") is None
    assert not editor.delete("hmo_licence")


def test_sync_keeps_admin_wording_and_custom_items():
    editor = _editor()
    editor.update("hmo_licence", "description", "HMO licence before completion")
    editor.update("hmo_licence", "required", False)
    editor.toggle_enabled("hmo_planning")
    editor.add({"id": "custom", "category": "Broker", "description": "Broker FCA number"})
    editor.delete("borrower_als")
    editor.sync_with_defaults()

    assert len(editor.requirements) == len(DEFAULT_UW_REQUIREMENTS) + 1
    assert editor.get("hmo_licence").description == "HMO licence before completion"
    assert editor.get("hmo_licence").required is True
    assert editor.get("hmo_planning").enabled is False
    assert editor.get("borrower_als") is not None
    assert editor.requirements[-1].id == "custom"


def test_reset_to_defaults_drops_custom_items():
    editor = _editor()
    editor.add({"id": "custom", "category": "Broker", "description": "Broker FCA number"})
    editor.reset_to_defaults()
    assert editor.get("custom") is None
    assert len(editor.requirements) == len(DEFAULT_UW_REQUIREMENTS)


def test_filter_by_stage_and_search():
    editor = _editor()
    grouped = editor.filter("Indicative", "")
    stages = {r.stage for reqs in grouped.values() for r in reqs}
    assert stages <= {"Indicative", "Both"}
    assert list(grouped)[0] == "Assumptions"

    grouped = editor.filter("all", "HMO LICENCE")
    assert {c: [r.id for r in reqs] for c, reqs in grouped.items()} == {"Property - HMO": ["hmo_licence"]}


def test_frame_round_trip_records_changes():
    editor = _editor()
    df = editor.to_frame()
    df.loc[df["id"] == "borrower_als", "required"] = False
    df.loc[df["id"] == "hmo_licence", "conditions"] = '[{"field": "hmo", "operator": "equals", "value": "Yes"}]'
    editor.from_frame(df)
    assert editor.get("borrower_als").required is False
    assert editor.get("hmo_licence").conditions[0].operator == "equals"
    fields = {(e.requirement_id, e.field) for e in editor.audit.entries}
    assert ("borrower_als", "required") in fields
    assert ("hmo_licence", "conditions") in fields


def test_from_frame_rejects_bad_conditions_and_duplicates():
    editor = _editor()
    df = editor.to_frame()
    df.loc[0, "conditions"] = "{oops"
    with pytest.raises(RequirementValidationError):
        editor.from_frame(df)
    dup = editor.to_frame()
    dup.loc[1, "id"] = dup.loc[0, "id"]
    with pytest.raises(RequirementValidationError, match="unique"):
        editor.from_frame(dup)
