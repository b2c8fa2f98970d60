"""Admin editing of the underwriting requirement catalog."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Union

import pandas as pd
from pydantic import ValidationError

from core.audit import AuditLog
from core.checklist import ALL_STAGES, BOTH, Grouped
from core.models import Requirement
from core.presets import CATEGORY_ORDER, DEFAULT_UW_REQUIREMENTS
from core.state import parse_requirements

logger = logging.getLogger(__name__)

FRAME_COLUMNS = [
    "id", "category", "description", "stage", "required", "order",
    "enabled", "pdfOnly", "guidance", "conditions",
]

# Fields taken from the defaults on sync; everything else is the admin's.
SYNC_KEEP_FIELDS = ("enabled", "description", "guidance")


class RequirementValidationError(ValueError):
    """Raised when an admin edit would leave the catalog invalid."""


class RequirementsEditor:
    """Work on a copy of the catalog until the admin saves it."""

    def __init__(
        self,
        requirements: List[Requirement],
        user: str = "admin",
        audit: Optional[AuditLog] = None,
        defaults: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        self.requirements = [r.model_copy(deep=True) for r in requirements]
        self.user = user
        self.audit = audit if audit is not None else AuditLog()
        self.defaults = defaults if defaults is not None else DEFAULT_UW_REQUIREMENTS

    def get(self, req_id: str) -> Optional[Requirement]:
        return next((r for r in self.requirements if r.id == req_id), None)

    def _replace(self, new: Requirement) -> None:
        self.requirements = [new if r.id == new.id else r for r in self.requirements]

    def update(self, req_id: str, field: str, value: Any) -> Requirement:
        req = self.get(req_id)
        if req is None:
            raise RequirementValidationError(f"Unknown requirement: {req_id}")
        name = "pdf_only" if field == "pdfOnly" else field
        if name not in Requirement.model_fields or name == "id":
            raise RequirementValidationError(f"Field cannot be edited: {field}")
        data = req.model_dump()
        old = data[name]
        data[name] = value
        try:
            new = Requirement.model_validate(data)
        except ValidationError as exc:
            raise RequirementValidationError(str(exc)) from exc
        if getattr(new, name) != getattr(req, name):
            self._replace(new)
            self.audit.record(self.user, req_id, name, old, new.model_dump()[name])
        return new

    def toggle_enabled(self, req_id: str) -> Requirement:
        req = self.get(req_id)
        if req is None:
            raise RequirementValidationError(f"Unknown requirement: {req_id}")
        return self.update(req_id, "enabled", not req.enabled)

    def move(self, req_id: str, direction: str) -> None:
        """Swap ``order`` with the neighbour above/below in the same category."""
        req = self.get(req_id)
        if req is None:
            return
        peers = sorted((r for r in self.requirements if r.category == req.category), key=lambda r: r.order)
        idx = next(i for i, r in enumerate(peers) if r.id == req_id)
        new_idx = idx - 1 if direction == "up" else idx + 1
        if new_idx < 0 or new_idx >= len(peers):
            return
        other = peers[new_idx]
        mine, theirs = req.order, other.order
        self.update(req_id, "order", theirs)
        self.update(other.id, "order", mine)

    def delete(self, req_id: str) -> bool:
        before = len(self.requirements)
        self.requirements = [r for r in self.requirements if r.id != req_id]
        deleted = len(self.requirements) < before
        if deleted:
            self.audit.record(self.user, req_id, "deleted", False, True)
            logger.info("Requirement %s deleted by %s", req_id, self.user)
        return deleted

    def add(self, requirement: Union[Requirement, Dict[str, Any]]) -> Requirement:
        data = requirement.model_dump() if isinstance(requirement, Requirement) else dict(requirement)
        if not str(data.get("id") or "").strip() or not str(data.get("description") or "").strip():
            raise RequirementValidationError("ID and Description are required")
        if self.get(data["id"]) is not None:
            raise RequirementValidationError("A requirement with this ID already exists")
        category = data.get("category")
        data["order"] = max([0] + [r.order for r in self.requirements if r.category == category]) + 1
        try:
            new = Requirement.model_validate(data)
        except ValidationError as exc:
            raise RequirementValidationError(str(exc)) from exc
        self.requirements.append(new)
        self.audit.record(self.user, new.id, "created", None, new.description)
        logger.info("Requirement %s added to %s by %s", new.id, new.category, self.user)
        return new

    def reset_to_defaults(self) -> None:
        self.requirements = parse_requirements(self.defaults)
        logger.info("Requirements reset to %d defaults by %s", len(self.requirements), self.user)

    def sync_with_defaults(self) -> None:
        """Refresh default items from the built-in catalog, keeping the admin's
        enabled flag, wording and guidance, and keep custom items."""
        current = {r.id: r for r in self.requirements}
        default_ids = {d["id"] for d in self.defaults}
        merged: List[Dict[str, Any]] = []
        for d in self.defaults:
            rec = dict(d)
            mine = current.get(d["id"])
            if mine is not None:
                rec.update({f: getattr(mine, f) for f in SYNC_KEEP_FIELDS})
            merged.append(rec)
        synced = parse_requirements(merged)
        synced += [r for r in self.requirements if r.id not in default_ids]
        self.requirements = synced
        logger.info(
            "Synced with defaults: %d items (%d default + %d custom)",
            len(synced), len(self.defaults), len(synced) - len(self.defaults),
        )

    def filter(self, stage: str = ALL_STAGES, search: str = "") -> Grouped:
        """Admin table view: stage filter plus description search, in display order."""
        term = (search or "").lower()
        visible = [
            r for r in self.requirements
            if (stage == ALL_STAGES or r.stage in (stage, BOTH))
            and (not term or term in r.description.lower())
        ]
        grouped: Grouped = {}
        for cat in CATEGORY_ORDER:
            reqs = sorted((r for r in visible if r.category == cat), key=lambda r: r.order)
            if reqs:
                grouped[cat] = reqs
        return grouped

    def to_frame(self) -> pd.DataFrame:
        rows = []
        for r in self.requirements:
            rec = r.as_record()
            rec["conditions"] = json.dumps(rec["conditions"])
            rec["guidance"] = rec.get("guidance") or ""
            rows.append(rec)
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

    def from_frame(self, df: pd.DataFrame) -> None:
        """Replace the catalog with the rows of an edited data frame."""
        records = []
        df = df.astype(object).where(pd.notna(df), None)
        for rec in df.to_dict(orient="records"):
            if rec.get("guidance") is None:
                rec["guidance"] = ""
            raw = rec.get("conditions")
            try:
                rec["conditions"] = json.loads(raw) if isinstance(raw, str) and raw.strip() else []
            except json.JSONDecodeError as exc:
                raise RequirementValidationError(f"Invalid conditions for {rec.get('id')}: {exc}") from exc
            records.append(rec)
        ids = [r.get("id") for r in records]
        if len(ids) != len(set(ids)):
            raise RequirementValidationError("Requirement IDs must be unique")
        try:
            new = [Requirement.model_validate(rec) for rec in records]
        except ValidationError as exc:
            raise RequirementValidationError(str(exc)) from exc
        before = {r.id: r for r in self.requirements}
        for r in new:
            old = before.get(r.id)
            if old is None:
                self.audit.record(self.user, r.id, "created", None, r.description)
                continue
            for name in Requirement.model_fields:
                if getattr(old, name) != getattr(r, name):
                    self.audit.record(self.user, r.id, name, getattr(old, name), getattr(r, name))
        self.requirements = new
