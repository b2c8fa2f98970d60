from __future__ import annotations
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

StageName = Literal["DIP", "Indicative", "Both"]

# ``in`` / ``notIn`` expect a list, every other operator a scalar.
ConditionValue = Union[List[Union[str, int, float, bool]], str, int, float, bool, None]


class Condition(BaseModel):
    field: str
    operator: str
    value: ConditionValue = None


class SelectedOption(BaseModel):
    """A rich answer from a criteria selector, e.g. ``{"option_label": "Yes", "tier": 2}``."""

    model_config = ConfigDict(extra="allow")

    option_label: str
    tier: Optional[int] = None


class Requirement(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str = ""
    stage: StageName = "Both"
    required: bool = True
    order: int = 0
    conditions: List[Condition] = Field(default_factory=list)
    guidance: Optional[str] = ""
    enabled: bool = True
    pdf_only: bool = Field(default=False, alias="pdfOnly")

    def as_record(self) -> Dict[str, Any]:
        """Return the stored JSON shape (``pdfOnly`` keeps its wire name)."""
        return self.model_dump(by_alias=True)


class ChecklistProgress(BaseModel):
    total: int = 0
    checked: int = 0
    required: int = 0
    required_checked: int = 0
    percent_complete: int = 0
    required_percent_complete: int = 0
    is_complete: bool = True
    is_required_complete: bool = True
    outstanding: int = 0
    required_outstanding: int = 0
