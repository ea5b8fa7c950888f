# protoready/schemas/finding.py
from typing import List, Optional
from pydantic import ConfigDict, Field

from protoready.core.constants import EffortLevel, FindingCategory, SeverityLevel
from protoready.schemas.base import CamelModel


class Finding(CamelModel):
    """A single detected issue in one quality dimension."""

    model_config = ConfigDict(frozen=True)

    category: FindingCategory
    severity: SeverityLevel
    title: str
    description: str
    recommendation: str
    effort: Optional[EffortLevel] = None
    rule_id: str = ""
    references: List[str] = Field(default_factory=list)
