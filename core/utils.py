"""Assorted utility helpers."""
import re


def checked_ids(checked):
    """Return checked requirement IDs as a list.

    Checklists are stored either as a list of IDs or as an ``{id: bool}`` map;
    only entries set to exactly ``True`` count as checked in the map form.
    Anything that is not a string ID is dropped.
    """
    if not checked:
        return []
    if isinstance(checked, dict):
        return [k for k, v in checked.items() if v is True]
    return [c for c in checked if isinstance(c, str) and c]


def slug(label):
    """Widget-safe key for a label or requirement ID."""
    return re.sub(r"[^a-z0-9]+", "_", str(label).lower()).strip("_")
