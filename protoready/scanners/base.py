# protoready/scanners/base.py
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from itertools import islice
from typing import Any, Callable, Dict, Optional, Pattern, Tuple

from protoready.core.constants import EffortLevel, FindingCategory, SeverityLevel
from protoready.schemas.finding import Finding


class RuleGroup(str, Enum):
    SECURITY_VULNERABILITY = "security-vulnerability"
    SECURITY_GOOD_PRACTICE = "security-good-practice"
    PERFORMANCE_ISSUE = "performance-issue"
    PERFORMANCE_OPTIMIZATION = "performance-optimization"
    SCALABILITY_CONCERN = "scalability-concern"
    SCALABILITY_GOOD_PRACTICE = "scalability-good-practice"
    MAINTAINABILITY_ISSUE = "maintainability-issue"
    TOOL_SPECIFIC = "tool-specific"


# A derived-metric predicate returns None when it does not fire, otherwise a
# (possibly empty) dict of values interpolated into the finding description.
Predicate = Callable[[str], Optional[Dict[str, Any]]]


@dataclass(frozen=True)
class Signal:
    """Named good-practice pattern consulted by derived rules"""
    id: str
    group: RuleGroup
    label: str
    pattern: Pattern[str]

    def present(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def count(self, text: str) -> int:
        return sum(1 for _ in self.pattern.finditer(text))


@dataclass(frozen=True)
class DetectionRule:
    """
    One catalog entry.

    A rule fires either when ``pattern`` matches at least ``min_matches`` times,
    or when its derived-metric ``predicate`` returns a context dict. Severity is
    always declared on the rule itself.
    """
    id: str
    group: RuleGroup
    category: FindingCategory
    severity: SeverityLevel
    title: str
    description: str
    recommendation: str
    effort: EffortLevel
    pattern: Optional[Pattern[str]] = None
    min_matches: int = 1
    predicate: Optional[Predicate] = None
    tool_types: Tuple[str, ...] = ()
    references: Tuple[str, ...] = ()

    def __post_init__(self):
        if (self.pattern is None) == (self.predicate is None):
            raise ValueError(f"Rule {self.id} needs exactly one of pattern or predicate")
        if self.min_matches < 1:
            raise ValueError(f"Rule {self.id} has min_matches < 1")

    def evaluate(self, text: str) -> Optional[Dict[str, Any]]:
        """Return the description context if the rule fires, else None"""
        if self.predicate is not None:
            return self.predicate(text)

        if self.min_matches == 1:
            return {} if self.pattern.search(text) else None

        # Stop counting once the threshold is reached
        count = sum(1 for _ in islice(self.pattern.finditer(text), self.min_matches))
        return {"count": count} if count >= self.min_matches else None

    def to_finding(self, context: Optional[Dict[str, Any]] = None) -> Finding:
        description = self.description.format(**context) if context else self.description
        return Finding(
            category=self.category,
            severity=self.severity,
            title=self.title,
            description=description,
            recommendation=self.recommendation,
            effort=self.effort,
            rule_id=self.id,
            references=list(self.references),
        )


class BaseAnalyzer(ABC):
    """Abstract base class for text analyzers"""

    name: str
    version: str
    description: str

    @abstractmethod
    def scan(self, text: str, options: Optional[Dict[str, Any]] = None) -> Any:
        """Analyze text; must be pure and never raise for any string input"""
        pass
