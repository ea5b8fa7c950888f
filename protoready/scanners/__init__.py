# protoready/scanners/__init__.py
from protoready.scanners.base import BaseAnalyzer, DetectionRule, RuleGroup, Signal
from protoready.scanners.catalog import PatternCatalog, default_catalog
from protoready.scanners.code_scanner import CodeScanner
from protoready.scanners.data_classifier import DataClassifier, DATA_TYPES

__all__ = [
    "BaseAnalyzer",
    "DetectionRule",
    "RuleGroup",
    "Signal",
    "PatternCatalog",
    "default_catalog",
    "CodeScanner",
    "DataClassifier",
    "DATA_TYPES",
]
