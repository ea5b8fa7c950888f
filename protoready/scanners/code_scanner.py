# protoready/scanners/code_scanner.py
"""
Code Scanner
Applies catalog rules to a codebase dump and emits findings per dimension
"""

from typing import Any, Dict, List, Optional

from protoready.core.constants import FindingCategory
from protoready.core.logging import get_logger
from protoready.schemas.finding import Finding
from .base import BaseAnalyzer
from .catalog import DIMENSION_GROUPS, PatternCatalog, default_catalog

logger = get_logger("scanner")


class CodeScanner(BaseAnalyzer):
    """Rule-driven scanner over opaque code text"""

    name = "code_scanner"
    version = "1.0.0"
    description = "Security, performance, scalability and maintainability rule scanner"

    def __init__(self, catalog: PatternCatalog = default_catalog):
        self.catalog = catalog

    def scan(self, text: str, options: Optional[Dict[str, Any]] = None) -> List[Finding]:
        """
        Run all four dimension passes, then tool-specific rules.

        Args:
            text: raw codebase dump
            options: may carry ``tool_type`` to enable supplementary rules

        Returns:
            Findings in dimension order (security, performance, scalability,
            maintainability) followed by tool-specific findings
        """
        options = options or {}
        findings: List[Finding] = []

        for category in DIMENSION_GROUPS:
            findings.extend(self.scan_dimension(text, category))

        findings.extend(self.scan_tool_rules(text, options.get("tool_type")))
        return findings

    def scan_dimension(self, text: str, category: FindingCategory) -> List[Finding]:
        """Run one dimension's rules in catalog order"""
        rules = self.catalog.rules_for(category)
        findings = self._apply(rules, text or "")
        logger.debug(f"{FindingCategory(category).value} pass: {len(findings)} findings")
        return findings

    def scan_tool_rules(self, text: str, tool_type: Optional[str]) -> List[Finding]:
        rules = self.catalog.tool_rules(tool_type)
        if not rules:
            return []
        return self._apply(rules, text or "")

    def _apply(self, rules, text: str) -> List[Finding]:
        findings: List[Finding] = []

        for rule in rules:
            context = rule.evaluate(text)
            if context is None:
                continue

            findings.append(rule.to_finding(context))

        return findings
