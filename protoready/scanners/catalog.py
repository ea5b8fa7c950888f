# protoready/scanners/catalog.py
"""
Pattern Catalog

Immutable, versioned registry of detection rules and good-practice signals.
Built once at import time and shared by every scanner instance; nothing in
here is mutated after construction, so concurrent readers need no locking.
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from protoready.core.constants import FindingCategory
from protoready.core.logging import logger
from .base import DetectionRule, RuleGroup, Signal
from .rules import CATALOG_VERSION, RULES, SIGNALS

# Rule groups that produce findings, per dimension, in scan order
DIMENSION_GROUPS: Mapping[FindingCategory, RuleGroup] = MappingProxyType({
    FindingCategory.SECURITY: RuleGroup.SECURITY_VULNERABILITY,
    FindingCategory.PERFORMANCE: RuleGroup.PERFORMANCE_ISSUE,
    FindingCategory.SCALABILITY: RuleGroup.SCALABILITY_CONCERN,
    FindingCategory.MAINTAINABILITY: RuleGroup.MAINTAINABILITY_ISSUE,
})


class PatternCatalog:
    """Read-only registry of detection rules grouped by dimension"""

    def __init__(
        self,
        rules: Iterable[DetectionRule],
        signals: Iterable[Signal] = (),
        version: str = CATALOG_VERSION,
    ):
        self.version = version

        by_id: Dict[str, DetectionRule] = {}
        grouped: Dict[RuleGroup, List[DetectionRule]] = {group: [] for group in RuleGroup}
        for rule in rules:
            if rule.id in by_id:
                raise ValueError(f"Duplicate rule id: {rule.id}")
            by_id[rule.id] = rule
            grouped[rule.group].append(rule)

        signal_map: Dict[str, Signal] = {}
        signal_groups: Dict[RuleGroup, List[Signal]] = {group: [] for group in RuleGroup}
        for signal in signals:
            if signal.id in signal_map or signal.id in by_id:
                raise ValueError(f"Duplicate catalog id: {signal.id}")
            signal_map[signal.id] = signal
            signal_groups[signal.group].append(signal)

        self._rules: Mapping[str, DetectionRule] = MappingProxyType(by_id)
        self._groups: Mapping[RuleGroup, Tuple[DetectionRule, ...]] = MappingProxyType(
            {group: tuple(items) for group, items in grouped.items()}
        )
        self._signals: Mapping[str, Signal] = MappingProxyType(signal_map)
        self._signal_groups: Mapping[RuleGroup, Tuple[Signal, ...]] = MappingProxyType(
            {group: tuple(items) for group, items in signal_groups.items()}
        )

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: str) -> bool:
        return rule_id in self._rules

    def get(self, rule_id: str) -> Optional[DetectionRule]:
        return self._rules.get(rule_id)

    def group(self, group: RuleGroup) -> Tuple[DetectionRule, ...]:
        return self._groups[RuleGroup(group)]

    def rules_for(self, category: FindingCategory) -> Tuple[DetectionRule, ...]:
        """Finding-producing rules of one dimension, in evaluation order"""
        return self.group(DIMENSION_GROUPS[FindingCategory(category)])

    def tool_rules(self, tool_type: Optional[str]) -> Tuple[DetectionRule, ...]:
        """Supplementary rules for a tool type; unknown tools get none"""
        if not tool_type:
            return ()
        tool = str(getattr(tool_type, "value", tool_type)).lower()
        return tuple(
            rule for rule in self._groups[RuleGroup.TOOL_SPECIFIC]
            if tool in rule.tool_types
        )

    def signal(self, signal_id: str) -> Signal:
        return self._signals[signal_id]

    def signals(self, group: Optional[RuleGroup] = None) -> Tuple[Signal, ...]:
        if group is None:
            return tuple(self._signals.values())
        return self._signal_groups[RuleGroup(group)]

    def summary(self) -> Dict[str, object]:
        """Version and entry counts per group, for diagnostics"""
        groups = {}
        for group in RuleGroup:
            groups[group.value] = len(self._groups[group]) + len(self._signal_groups[group])
        return {
            "version": self.version,
            "rules": len(self._rules),
            "signals": len(self._signals),
            "groups": groups,
        }


default_catalog = PatternCatalog(RULES, SIGNALS)
logger.debug(
    f"Loaded pattern catalog v{default_catalog.version}: "
    f"{len(default_catalog)} rules, {len(default_catalog.signals())} signals"
)
