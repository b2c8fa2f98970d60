"""Conditional underwriting requirement rules.

A requirement carries a list of declarative conditions (``field``,
``operator``, ``value``) that are evaluated against the current quote/DIP
answers.  All conditions must hold for the requirement to apply.  Evaluation
never raises: malformed conditions degrade to a safe boolean so that a typo in
the admin configuration cannot break the checklist.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping, Optional, Union

from core.models import Condition, Requirement, SelectedOption

logger = logging.getLogger(__name__)

EQUALS = "equals"
NOT_EQUALS = "notEquals"
IN = "in"
NOT_IN = "notIn"
GREATER_THAN = "greaterThan"
LESS_THAN = "lessThan"
EXISTS = "exists"
NOT_EXISTS = "notExists"
CONTAINS = "contains"

ConditionLike = Union[Condition, Mapping[str, Any]]


def unwrap_answer(value: Any) -> Any:
    """Return the label of a rich selector answer, or ``value`` unchanged.

    Criteria selectors store answers such as ``{"option_label": "Yes",
    "tier": 2}``; conditions are written against the label.
    """

    if isinstance(value, SelectedOption):
        return value.option_label
    if isinstance(value, Mapping) and value.get("option_label"):
        return value["option_label"]
    return value


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(_text(v) for v in value)
    return str(value)


def _normalize(value: Any) -> str:
    """Lower-cased comparison text; empty answers (``None``, ``""``, ``0``) become ``""``."""
    if not value:
        return ""
    return _text(value).lower()


_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}
_RADIX = {"0x": 16, "0o": 8, "0b": 2}


def _number(value: Any) -> float:
    """Coerce to a float the way the quote forms do, ``nan`` when not numeric.

    Lists are read through their comma-joined text, so ``[]`` is 0 and
    ``["5"]`` is 5.  Only the exact ``Infinity`` spellings are infinite, and
    ``0x``/``0o``/``0b`` prefixes are integer literals.
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, (list, tuple)):
        return _number(_text(value))
    if not isinstance(value, str):
        return math.nan
    s = value.strip()
    if not s:
        return 0.0
    if s in _INFINITY:
        return _INFINITY[s]
    if "_" in s or s.lower().lstrip("+-").startswith(("inf", "nan")):
        return math.nan
    radix = _RADIX.get(s[:2].lower())
    if radix:
        digits = s[2:]
        if not digits.isalnum():
            return math.nan
        try:
            return float(int(digits, radix))
        except ValueError:
            return math.nan
    try:
        return float(s)
    except ValueError:
        return math.nan


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _parts(condition: ConditionLike):
    if isinstance(condition, Condition):
        return condition.field, condition.operator, condition.value
    return condition.get("field"), condition.get("operator"), condition.get("value")


def evaluate_condition(condition: ConditionLike, data: Optional[Mapping[str, Any]]) -> bool:
    """Evaluate a single condition against the quote/DIP ``data``."""

    field, operator, value = _parts(condition)
    raw = unwrap_answer((data or {}).get(field)) if isinstance(field, str) else None
    field_str = _normalize(raw)
    value_str = _normalize(value)

    if operator == EQUALS:
        return field_str == value_str
    if operator == NOT_EQUALS:
        return field_str != value_str
    if operator == IN:
        if isinstance(value, (list, tuple)):
            return any(field_str == _text(v).lower() for v in value)
        return False
    if operator == NOT_IN:
        if isinstance(value, (list, tuple)):
            return not any(field_str == _text(v).lower() for v in value)
        return True
    if operator == GREATER_THAN:
        return _number(raw) > _number(value)
    if operator == LESS_THAN:
        return _number(raw) < _number(value)
    if operator == EXISTS:
        return not _is_blank(raw)
    if operator == NOT_EXISTS:
        return _is_blank(raw)
    if operator == CONTAINS:
        return value_str in field_str

    # Unknown operators keep the requirement visible.
    logger.debug("Unknown condition operator %r on field %r; treating as satisfied", operator, field)
    return True


def evaluate_conditions(conditions: Optional[Iterable[ConditionLike]], data: Optional[Mapping[str, Any]]) -> bool:
    """Return ``True`` when every condition holds (an empty list always holds)."""
    if not conditions:
        return True
    return all(evaluate_condition(c, data) for c in conditions)


def matches_all_conditions(requirement: Requirement, data: Optional[Mapping[str, Any]]) -> bool:
    return evaluate_conditions(requirement.conditions, data)
