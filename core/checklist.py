"""Underwriting checklist helpers.

Filters the requirement catalog down to the items that apply to a quote at a
given stage, groups them for display and derives progress statistics from the
set of checked requirement IDs.  Everything here is pure: results are rebuilt
from the inputs on every call.
"""
from __future__ import annotations
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from core.models import ChecklistProgress, Requirement
from core.rules import matches_all_conditions
from core.utils import checked_ids

BOTH = "Both"
ALL_STAGES = "all"

Grouped = Dict[str, List[Requirement]]


def filter_by_stage(requirements: List[Requirement], stage: Optional[str]) -> List[Requirement]:
    """Keep requirements for ``stage``; ``None``, ``"Both"`` and ``"all"`` keep everything."""
    if not stage or stage in (BOTH, ALL_STAGES):
        return requirements
    return [r for r in requirements if r.stage == BOTH or r.stage == stage]


def filter_by_conditions(requirements: Iterable[Requirement], data: Optional[Mapping[str, Any]]) -> List[Requirement]:
    """Keep enabled requirements whose conditions all hold for ``data``."""
    return [r for r in requirements if r.enabled and matches_all_conditions(r, data)]


def group_by_category(requirements: Iterable[Requirement], category_order: Optional[Sequence[str]] = None) -> Grouped:
    """Group by category and sort each group by ``order``.

    Categories named in ``category_order`` come first in that order, anything
    else follows in first-seen order.  The sort is stable so equal ``order``
    values keep their catalog order.
    """

    buckets: Grouped = {}
    for req in requirements:
        buckets.setdefault(req.category, []).append(req)

    keys = [c for c in (category_order or []) if c in buckets]
    keys += [c for c in buckets if c not in keys]
    return {c: sorted(buckets[c], key=lambda r: r.order) for c in keys}


def get_applicable_requirements(
    requirements: List[Requirement],
    stage: Optional[str],
    data: Optional[Mapping[str, Any]],
    exclude_pdf_only: bool = False,
    category_order: Optional[Sequence[str]] = None,
) -> Grouped:
    """Return the applicable requirements for ``stage`` grouped by category.

    ``exclude_pdf_only`` drops items that only belong in generated documents,
    which is what the on-screen checklist wants.
    """

    applicable = filter_by_conditions(filter_by_stage(requirements, stage), data)
    if exclude_pdf_only:
        applicable = [r for r in applicable if not r.pdf_only]
    return group_by_category(applicable, category_order)


resolve = get_applicable_requirements


def flatten_groups(grouped: Mapping[str, List[Requirement]]) -> List[Requirement]:
    return [r for reqs in grouped.values() for r in reqs]


def _percent(part: int, whole: int) -> int:
    # round half up, not Python's banker's rounding
    return int(math.floor(part / whole * 100 + 0.5)) if whole > 0 else 0


def checklist_progress(
    applicable: Union[Iterable[Requirement], Mapping[str, List[Requirement]]],
    checked: Union[Iterable[str], Mapping[str, bool], None],
) -> ChecklistProgress:
    """Derive progress statistics for the applicable requirements."""

    reqs = flatten_groups(applicable) if isinstance(applicable, Mapping) else [r for r in applicable if r]
    done = set(checked_ids(checked))

    total = len(reqs)
    n_checked = sum(1 for r in reqs if r.id in done)
    required = sum(1 for r in reqs if r.required)
    required_checked = sum(1 for r in reqs if r.required and r.id in done)
    return ChecklistProgress(
        total=total,
        checked=n_checked,
        required=required,
        required_checked=required_checked,
        percent_complete=_percent(n_checked, total),
        required_percent_complete=_percent(required_checked, required),
        is_complete=n_checked == total,
        is_required_complete=required_checked == required,
        outstanding=total - n_checked,
        required_outstanding=required - required_checked,
    )


# ---------------------------------------------------------------------------
# Checked-set operations.  Each returns a new list of IDs.
# ---------------------------------------------------------------------------

def is_checked(checked, req_id: str) -> bool:
    if not req_id:
        return False
    return req_id in checked_ids(checked)


def toggle_item(checked, req_id: str) -> List[str]:
    ids = checked_ids(checked)
    if not req_id:
        return ids
    if req_id in ids:
        return [i for i in ids if i != req_id]
    return ids + [req_id]


def set_item_checked(checked, req_id: str, value: bool) -> List[str]:
    ids = checked_ids(checked)
    if not req_id:
        return ids
    if value and req_id not in ids:
        return ids + [req_id]
    if not value and req_id in ids:
        return [i for i in ids if i != req_id]
    return ids


def check_all(applicable: Union[Iterable[Requirement], Mapping[str, List[Requirement]]]) -> List[str]:
    reqs = flatten_groups(applicable) if isinstance(applicable, Mapping) else list(applicable)
    return [r.id for r in reqs]


def uncheck_all() -> List[str]:
    return []
