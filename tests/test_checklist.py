from core.checklist import (
    check_all,
    checklist_progress,
    filter_by_conditions,
    filter_by_stage,
    flatten_groups,
    get_applicable_requirements,
    is_checked,
    resolve,
    set_item_checked,
    toggle_item,
)
from core.models import Requirement
from core.presets import CATEGORY_ORDER
from core.state import default_requirements


def _req(id, category="Borrower", stage="Both", required=True, order=1, conditions=None, enabled=True, **kw):
    return Requirement(
        id=id, category=category, stage=stage, required=required, order=order,
        conditions=conditions or [], enabled=enabled, **kw,
    )


def _scenario():
    return [
        _req("a", stage="DIP", required=True, order=1),
        _req("b", stage="Indicative", required=False, order=2,
             conditions=[{"field": "hmo", "operator": "notEquals", "value": "No"}]),
    ]


def _ids(grouped):
    return {cat: [r.id for r in reqs] for cat, reqs in grouped.items()}


def test_dip_scenario_excludes_indicative_item():
    grouped = get_applicable_requirements(_scenario(), "DIP", {"hmo": "Yes"})
    assert _ids(grouped) == {"Borrower": ["a"]}
    progress = checklist_progress(grouped, [])
    assert progress.total == 1
    assert progress.checked == 0
    assert progress.percent_complete == 0


def test_both_stage_scenario_complete():
    grouped = get_applicable_requirements(_scenario(), "Both", {"hmo": "Yes"})
    assert _ids(grouped) == {"Borrower": ["a", "b"]}
    progress = checklist_progress(grouped, ["a", "b"])
    assert progress.total == 2
    assert progress.checked == 2
    assert progress.percent_complete == 100
    assert progress.is_complete
    assert progress.is_required_complete


def test_resolve_is_deterministic_and_does_not_mutate():
    reqs = default_requirements()
    before = [r.model_dump() for r in reqs]
    data = {"hmo": "Yes", "borrower_type": "company", "loan_purpose": "refinance"}
    first = resolve(reqs, "DIP", data, category_order=CATEGORY_ORDER)
    second = resolve(reqs, "DIP", data, category_order=CATEGORY_ORDER)
    assert _ids(first) == _ids(second)
    assert list(first) == list(second)
    assert [r.model_dump() for r in reqs] == before


def test_empty_conditions_always_apply():
    req = _req("always")
    for data in ({}, None, {"hmo": "No"}, {"anything": {"option_label": "x"}}):
        assert filter_by_conditions([req], data) == [req]


def test_one_false_condition_excludes():
    req = _req("x", conditions=[
        {"field": "hmo", "operator": "equals", "value": "Yes"},
        {"field": "holiday", "operator": "equals", "value": "Yes"},
    ])
    assert filter_by_conditions([req], {"hmo": "Yes", "holiday": "No"}) == []


def test_disabled_requirement_excluded():
    assert filter_by_conditions([_req("off", enabled=False)], {}) == []


def test_both_stage_passes_every_filter():
    reqs = [_req("both", stage="Both"), _req("dip", stage="DIP"), _req("ind", stage="Indicative")]
    for stage in ("DIP", "Indicative", "Both"):
        assert "both" in [r.id for r in filter_by_stage(reqs, stage)]
    assert [r.id for r in filter_by_stage(reqs, "DIP")] == ["both", "dip"]
    assert [r.id for r in filter_by_stage(reqs, "Indicative")] == ["both", "ind"]


def test_stage_passthrough_values():
    reqs = [_req("dip", stage="DIP"), _req("ind", stage="Indicative")]
    for stage in (None, "", "all", "Both"):
        assert filter_by_stage(reqs, stage) == reqs
    assert filter_by_stage(reqs, "dip") == []


def test_groups_sorted_by_order_with_stable_ties():
    reqs = [
        _req("c", order=3),
        _req("first_tie", order=1),
        _req("second_tie", order=1),
        _req("p", category="Property", order=1),
    ]
    grouped = get_applicable_requirements(reqs, None, {})
    assert _ids(grouped) == {"Borrower": ["first_tie", "second_tie", "c"], "Property": ["p"]}


def test_category_order_then_first_seen():
    reqs = [
        _req("custom", category="Zeta"),
        _req("prop", category="Property"),
        _req("broker", category="Broker"),
    ]
    grouped = get_applicable_requirements(reqs, None, {}, category_order=CATEGORY_ORDER)
    assert list(grouped) == ["Broker", "Property", "Zeta"]


def test_pdf_only_excluded_for_display():
    reqs = [_req("shown"), _req("pdf", pdf_only=True)]
    assert _ids(get_applicable_requirements(reqs, "DIP", {}, exclude_pdf_only=True)) == {"Borrower": ["shown"]}
    assert _ids(get_applicable_requirements(reqs, "DIP", {})) == {"Borrower": ["shown", "pdf"]}


def test_default_catalog_hmo_and_company_items():
    grouped = get_applicable_requirements(
        default_requirements(), "DIP",
        {"hmo": {"option_label": "Up to 6 beds", "tier": 2}, "holiday": "No", "mufb": "No",
         "borrower_type": "company", "loan_purpose": "purchase"},
        category_order=CATEGORY_ORDER,
    )
    ids = [r.id for r in flatten_groups(grouped)]
    assert "hmo_licence" in ids
    assert "company_accounts" in ids
    assert "borrower_purchase_contract" in ids
    assert "borrower_redemption_statement" not in ids
    assert "holiday_let_planning" not in ids
    assert "borrower_occupation" not in ids
    assert "Property - MUFB" not in grouped


def test_progress_empty_set_is_zero_percent():
    progress = checklist_progress([], [])
    assert progress.percent_complete == 0
    assert progress.required_percent_complete == 0
    assert progress.total == 0


def test_progress_accepts_checked_map_and_rounds_half_up():
    reqs = [_req(str(i), required=i < 2) for i in range(8)]
    progress = checklist_progress(reqs, {"0": True, "1": True, "2": True, "3": "yes", "9": True})
    assert progress.checked == 3
    assert progress.percent_complete == 38
    assert progress.required_checked == 2
    assert progress.is_required_complete
    assert not progress.is_complete
    assert progress.outstanding == 5
    assert progress.required_outstanding == 0

    half = checklist_progress([_req(str(i)) for i in range(8)], ["0", "1", "2", "3", "4"])
    assert half.percent_complete == 63  # 62.5 rounds up


def test_checked_set_operations():
    checked = toggle_item([], "a")
    assert checked == ["a"]
    assert toggle_item(checked, "a") == []
    assert toggle_item(checked, "") == ["a"]
    assert set_item_checked(checked, "b", True) == ["a", "b"]
    assert set_item_checked(checked, "a", True) == ["a"]
    assert set_item_checked(checked, "a", False) == []
    assert is_checked({"a": True}, "a")
    assert not is_checked(["a"], None)
    assert check_all({"Borrower": [_req("x"), _req("y")]}) == ["x", "y"]


def test_progress_ignores_non_string_checked_entries():
    progress = checklist_progress([_req("a"), _req("b")], [{"id": "a"}, "b", None, 3])
    assert progress.checked == 1
    assert not is_checked([{"id": "a"}], "a")
