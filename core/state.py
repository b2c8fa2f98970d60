"""Persistence for the requirement catalog, per-quote checklists and session state."""
import json
import logging
import os
from typing import Any, Dict, List, Optional

import streamlit as st
from pydantic import ValidationError

from core.models import Requirement
from core.presets import DEFAULT_UW_REQUIREMENTS
from core.utils import checked_ids, slug

logger = logging.getLogger(__name__)

DATA_DIR = os.getenv("UW_DATA_DIR", ".uw_data")
REQUIREMENTS_FILE = os.path.join(DATA_DIR, "uw_requirements.json")
CHECKLIST_DIR = os.path.join(DATA_DIR, "checklists")
SESSION_FILE = os.getenv("UW_SESSION_FILE", "session_data.json")

# Only persist a curated subset of ``st.session_state`` keys. Widgets inject
# their own keys (``chk_<id>``, button keys) and assigning to those on the
# next run raises ``StreamlitAPIException``.
PERSISTED_KEYS = {
    "quote_id",
    "stage",
    "quote_data",
    "show_guidance",
    "admin_user",
}


def parse_requirements(records: List[Dict[str, Any]]) -> List[Requirement]:
    """Validate stored records, skipping the ones that are not usable."""
    out: List[Requirement] = []
    for rec in records:
        try:
            out.append(Requirement.model_validate(rec))
        except ValidationError as exc:
            rid = rec.get("id") if isinstance(rec, dict) else None
            logger.warning("Skipping invalid requirement %r: %s", rid, exc.errors()[0].get("msg"))
    return out


def default_requirements() -> List[Requirement]:
    return parse_requirements(DEFAULT_UW_REQUIREMENTS)


def merge_with_defaults(overrides: List[Dict[str, Any]], defaults: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Shallow-merge override records onto the defaults by ``id``.

    Defaults keep their position; overrides for unknown IDs are custom items
    and are appended in override order.
    """

    by_id = {o["id"]: o for o in overrides if isinstance(o, dict) and o.get("id")}
    default_ids = {d["id"] for d in defaults}
    merged = [{**d, **by_id[d["id"]]} if d["id"] in by_id else dict(d) for d in defaults]
    for o in overrides:
        if isinstance(o, dict) and o.get("id") and o["id"] not in default_ids:
            merged.append(dict(o))
    return merged


def _read_json(path: str) -> Optional[Any]:
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return None


def _write_json(path: str, data: Any) -> None:
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


class ConfigStore:
    """Requirement catalog = built-in defaults + admin overrides saved as JSON."""

    def __init__(self, path: Optional[str] = None, defaults: Optional[List[Dict[str, Any]]] = None) -> None:
        self.path = path or REQUIREMENTS_FILE
        self.defaults = defaults if defaults is not None else DEFAULT_UW_REQUIREMENTS

    def read_overrides(self) -> Optional[List[Dict[str, Any]]]:
        data = _read_json(self.path)
        if data is None:
            return None
        if not isinstance(data, list):
            logger.warning("Ignoring %s: expected a list of requirements", self.path)
            return None
        return data

    def load(self) -> List[Requirement]:
        overrides = self.read_overrides()
        if overrides is None:
            return parse_requirements(self.defaults)
        return parse_requirements(merge_with_defaults(overrides, self.defaults))

    def save(self, requirements: List[Requirement]) -> None:
        _write_json(self.path, [r.as_record() for r in requirements])
        logger.info("Saved %d requirements to %s", len(requirements), self.path)

    def reset(self) -> List[Requirement]:
        reqs = parse_requirements(self.defaults)
        self.save(reqs)
        return reqs


class CheckedItemsStore:
    """Checked requirement IDs, one JSON file per quote."""

    def __init__(self, directory: Optional[str] = None) -> None:
        self.directory = directory or CHECKLIST_DIR

    def path_for(self, quote_id: str) -> str:
        return os.path.join(self.directory, f"uw_checklist_{slug(quote_id)}.json")

    def load(self, quote_id: Optional[str]) -> List[str]:
        if not quote_id:
            return []
        data = _read_json(self.path_for(quote_id))
        if not isinstance(data, (list, dict)):
            return []
        return checked_ids(data)

    def save(self, quote_id: Optional[str], items) -> None:
        if not quote_id:
            return
        _write_json(self.path_for(quote_id), checked_ids(items))


def _serializable(value: Any) -> bool:
    return isinstance(value, (int, float, str, bool, list, dict))


def load_state() -> None:
    """Restore Streamlit session state from ``SESSION_FILE`` if it exists."""
    data = _read_json(SESSION_FILE)
    if not isinstance(data, dict):
        return
    for key, val in data.items():
        if key in PERSISTED_KEYS:
            st.session_state.setdefault(key, val)


def save_state() -> None:
    """Persist serializable session state to ``SESSION_FILE``."""
    data = {
        k: v
        for k, v in st.session_state.items()
        if k in PERSISTED_KEYS and _serializable(v)
    }
    try:
        _write_json(SESSION_FILE, data)
    except OSError as exc:
        logger.warning("Could not save session state: %s", exc)
