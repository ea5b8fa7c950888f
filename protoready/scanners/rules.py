# Detection rules for the code scanner.
#
# Each dimension owns an ordered tuple of rules. Order only controls the order
# findings are reported in; severity is always declared on the rule.
#
# Good-practice groups hold signals rather than rules: they never produce
# findings themselves, derived rules consult them to decide whether a
# safeguard or optimization is already in place.
#
# Adding or removing a detection is a change to these tables only.

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

from protoready.core.constants import (
    OWASP_WEB_TOP_10,
    EffortLevel,
    FindingCategory,
    SeverityLevel,
)
from .base import DetectionRule, RuleGroup, Signal

CATALOG_VERSION = "2024.1"

_I = re.IGNORECASE

# Thresholds for derived-metric rules
MAX_AVG_FUNCTION_LINES = 50
MAX_LOCAL_STATE_DECLARATIONS = 10
MIN_LINES_FOR_DOC_CHECK = 100
MIN_CHARS_FOR_LAZY_LOADING = 10_000
CONCERN_MIN_OCCURRENCES = 6  # "more than 5"


# ==================== Signals ====================

ENV_VARS = Signal(
    "env-vars", RuleGroup.SECURITY_GOOD_PRACTICE, "Environment variables",
    re.compile(r"process\.env\b|os\.environ|os\.getenv\(|import\.meta\.env|\bENV\[|\bgetenv\("),
)
PASSWORD_HASHING = Signal(
    "password-hashing", RuleGroup.SECURITY_GOOD_PRACTICE, "Password hashing",
    re.compile(r"bcrypt|argon2|scrypt|pbkdf2", _I),
)
SECURITY_HEADERS = Signal(
    "security-headers", RuleGroup.SECURITY_GOOD_PRACTICE, "Security middleware",
    re.compile(r"helmet", _I),
)
CORS = Signal("cors", RuleGroup.SECURITY_GOOD_PRACTICE, "CORS policy", re.compile(r"cors", _I))
RATE_LIMITING = Signal(
    "rate-limiting", RuleGroup.SECURITY_GOOD_PRACTICE, "Rate limiting",
    re.compile(r"rate.?limit", _I),
)
CSRF = Signal("csrf", RuleGroup.SECURITY_GOOD_PRACTICE, "CSRF protection", re.compile(r"csrf", _I))

MEMOIZATION = Signal(
    "memoization", RuleGroup.PERFORMANCE_OPTIMIZATION, "Memoization",
    re.compile(r"useMemo|useCallback|React\.memo|lru_cache|@cache\b"),
)
LAZY_LOADING = Signal(
    "lazy-loading", RuleGroup.PERFORMANCE_OPTIMIZATION, "Lazy loading",
    re.compile(r"lazy\(|Suspense", _I),
)
CODE_SPLITTING = Signal(
    "code-splitting", RuleGroup.PERFORMANCE_OPTIMIZATION, "Dynamic imports",
    re.compile(r"\bimport\([^)\n]*\)"),
)

LOCAL_STATE = Signal(
    "local-state", RuleGroup.SCALABILITY_GOOD_PRACTICE, "Local component state",
    re.compile(r"\buseState\b"),
)
CENTRALIZED_STATE = Signal(
    "centralized-state", RuleGroup.SCALABILITY_GOOD_PRACTICE, "Centralized state management",
    re.compile(r"redux|zustand|context", _I),
)
DATA_FETCHING = Signal(
    "data-fetching", RuleGroup.SCALABILITY_GOOD_PRACTICE, "Data fetching library",
    re.compile(r"react-query|tanstack|\bswr\b|apollo", _I),
)

SIGNALS = (
    ENV_VARS,
    PASSWORD_HASHING,
    SECURITY_HEADERS,
    CORS,
    RATE_LIMITING,
    CSRF,
    MEMOIZATION,
    LAZY_LOADING,
    CODE_SPLITTING,
    LOCAL_STATE,
    CENTRALIZED_STATE,
    DATA_FETCHING,
)


# ==================== Derived-metric predicates ====================

_CREDENTIAL_TOKENS = re.compile(
    r"(?i:password|passwd|secret|api[_-]?key|authenticat|authoriz)|\b[Aa]uth\b|\b[Aa]uth(?:_|[A-Z])"
)
_PASSWORD_TOKEN = re.compile(r"password|passwd", _I)
_LOGIN_FLOW = re.compile(r"\b(?:log[_-]?in|sign[_-]?in|sign[_-]?up|authenticate)\b", _I)
_LOOP_HEAD = re.compile(r"\bfor\b[^\n]*?\b(?:in|of)\b")
_FUNCTION_DECLARATION = re.compile(r"function\s+\w+|const\s+\w+\s*=|\bdef\s+\w+")
_COMMENT_MARKER = re.compile(r"/\*|//|\"\"\"|^\s*#\s", re.MULTILINE)
_JS_FILE = re.compile(r"\.jsx?\b")
_TS_IDIOM = re.compile(r"\binterface\s+\w+|\btype\s+\w+\s*=|\.tsx?\b")
_PY_FILE = re.compile(r"\.py\b")
_PY_ANNOTATION = re.compile(
    r"->\s*[\w\[\"']|\bfrom typing import\b|\bimport typing\b"
    r"|\w:\s*(?:int|str|float|bool|bytes|dict|list|tuple|Dict|List|Optional|Any)\b"
)
_REACT_MARKER = re.compile(r"React|next")

HARDCODED_PASSWORD = re.compile(r"password.*=.*[\"'].*[\"']", _I)
HARDCODED_API_KEY = re.compile(r"api[_-]?key.*=.*[\"'].*[\"']", _I)
HARDCODED_SECRET = re.compile(r"secret.*=.*[\"'].*[\"']", _I)
HARDCODED_CREDENTIAL_PATTERNS = (HARDCODED_PASSWORD, HARDCODED_API_KEY, HARDCODED_SECRET)


def _line_count(text: str) -> int:
    return len(text.split("\n"))


def _outside_hardcoded_credentials(text: str) -> str:
    for pattern in HARDCODED_CREDENTIAL_PATTERNS:
        text = pattern.sub("", text)
    return text


def _missing_env_vars(text: str) -> Optional[Dict[str, Any]]:
    # Tokens inside a hardcoded assignment are reported by the hardcoded-credential rules
    if ENV_VARS.present(text):
        return None
    if _CREDENTIAL_TOKENS.search(_outside_hardcoded_credentials(text)):
        return {}
    return None


def _missing_password_hashing(text: str) -> Optional[Dict[str, Any]]:
    if (
        _PASSWORD_TOKEN.search(text)
        and _LOGIN_FLOW.search(text)
        and not PASSWORD_HASHING.present(text)
    ):
        return {}
    return None


def _nested_loops(text: str) -> Optional[Dict[str, Any]]:
    for line in text.split("\n"):
        outer = _LOOP_HEAD.search(line)
        if outer and _LOOP_HEAD.search(line, outer.end()):
            return {}
    return None


def _unmanaged_interval(text: str) -> Optional[Dict[str, Any]]:
    if "setInterval" in text and "clearInterval" not in text:
        return {}
    return None


def _missing_lazy_loading(text: str) -> Optional[Dict[str, Any]]:
    if len(text) > MIN_CHARS_FOR_LAZY_LOADING and not LAZY_LOADING.present(text):
        return {}
    return None


def _complex_state(text: str) -> Optional[Dict[str, Any]]:
    if CENTRALIZED_STATE.present(text):
        return None
    count = LOCAL_STATE.count(text)
    if count > MAX_LOCAL_STATE_DECLARATIONS:
        return {"count": count}
    return None


def _large_functions(text: str) -> Optional[Dict[str, Any]]:
    function_count = len(_FUNCTION_DECLARATION.findall(text))
    average = Decimal(_line_count(text)) / max(function_count, 1)
    if average > MAX_AVG_FUNCTION_LINES:
        return {"average": int(average.quantize(Decimal("1"), rounding=ROUND_HALF_UP))}
    return None


def _missing_documentation(text: str) -> Optional[Dict[str, Any]]:
    if _line_count(text) > MIN_LINES_FOR_DOC_CHECK and not _COMMENT_MARKER.search(text):
        return {}
    return None


def _missing_typescript(text: str) -> Optional[Dict[str, Any]]:
    if _JS_FILE.search(text) and not _TS_IDIOM.search(text):
        return {}
    return None


def _missing_type_hints(text: str) -> Optional[Dict[str, Any]]:
    if _PY_FILE.search(text) and not _PY_ANNOTATION.search(text):
        return {}
    return None


def _missing_react_keys(text: str) -> Optional[Dict[str, Any]]:
    if _REACT_MARKER.search(text) and "key=" not in text and ".map(" in text:
        return {}
    return None


def _missing_error_boundaries(text: str) -> Optional[Dict[str, Any]]:
    if "ErrorBoundary" not in text and "throw" in text:
        return {}
    return None


# ==================== Security ====================

SECURITY_RULES = (
    DetectionRule(
        id="sec-hardcoded-password",
        group=RuleGroup.SECURITY_VULNERABILITY,
        category=FindingCategory.SECURITY,
        severity=SeverityLevel.CRITICAL,
        title="Hardcoded Password Detected",
        description="Hardcoded passwords in source code pose a critical security risk",
        recommendation="Use environment variables and secure password hashing (bcrypt, argon2)",
        effort=EffortLevel.HIGH,
        pattern=HARDCODED_PASSWORD,
        references=("CWE-798", OWASP_WEB_TOP_10[6]),
    ),
    DetectionRule(
        id="sec-hardcoded-api-key",
        group=RuleGroup.SECURITY_VULNERABILITY,
        category=FindingCategory.SECURITY,
        severity=SeverityLevel.CRITICAL,
        title="Hardcoded API Key Found",
        description="API keys should never be hardcoded in source code",
        recommendation="Store API keys in environment variables and use secure key management",
        effort=EffortLevel.HIGH,
        pattern=HARDCODED_API_KEY,
        references=("CWE-798", OWASP_WEB_TOP_10[6]),
    ),
    DetectionRule(
        id="sec-hardcoded-secret",
        group=RuleGroup.SECURITY_VULNERABILITY,
        category=FindingCategory.SECURITY,
        severity=SeverityLevel.CRITICAL,
        title="Hardcoded Secret Exposed",
        description="Secrets and sensitive data must be stored securely",
        recommendation="Move all secrets to environment variables or secret management systems",
        effort=EffortLevel.HIGH,
        pattern=HARDCODED_SECRET,
        references=("CWE-798", OWASP_WEB_TOP_10[1]),
    ),
    DetectionRule(
        id="sec-console-logging",
        group=RuleGroup.SECURITY_VULNERABILITY,
        category=FindingCategory.SECURITY,
        severity=SeverityLevel.HIGH,
        title="Console Logging in Production",
        description="Console.log statements can leak sensitive information in production",
        recommendation="Remove console.log statements and implement proper logging solutions",
        effort=EffortLevel.MEDIUM,
        pattern=re.compile(r"console\.log\(", _I),
        references=("CWE-532", OWASP_WEB_TOP_10[8]),
    ),
    DetectionRule(
        id="sec-eval",
        group=RuleGroup.SECURITY_VULNERABILITY,
        category=FindingCategory.SECURITY,
        severity=SeverityLevel.HIGH,
        title="Dangerous eval() Usage",
        description="eval() function can execute malicious code and should be avoided",
        recommendation="Replace eval() with safer alternatives like JSON.parse() or explicit dispatch",
        effort=EffortLevel.MEDIUM,
        pattern=re.compile(r"\beval\(", _I),
        references=("CWE-95", OWASP_WEB_TOP_10[2]),
    ),
    DetectionRule(
        id="sec-document-write",
        group=RuleGroup.SECURITY_VULNERABILITY,
        category=FindingCategory.SECURITY,
        severity=SeverityLevel.HIGH,
        title="Unsafe document.write() Usage",
        description="document.write() can lead to XSS vulnerabilities",
        recommendation="Use safer DOM manipulation methods like textContent or proper templating",
        effort=EffortLevel.MEDIUM,
        pattern=re.compile(r"document\.write\(", _I),
        references=("CWE-79", OWASP_WEB_TOP_10[2]),
    ),
    DetectionRule(
        id="sec-inner-html",
        group=RuleGroup.SECURITY_VULNERABILITY,
        category=FindingCategory.SECURITY,
        severity=SeverityLevel.MEDIUM,
        title="XSS Vulnerability Risk",
        description="Direct innerHTML assignment without sanitization risks XSS attacks",
        recommendation="Sanitize all user input before setting innerHTML or use textContent",
        effort=EffortLevel.LOW,
        pattern=re.compile(r"innerHTML.*=.*[^\"]"),
        references=("CWE-79", OWASP_WEB_TOP_10[2]),
    ),
    DetectionRule(
        id="sec-template-injection",
        group=RuleGroup.SECURITY_VULNERABILITY,
        category=FindingCategory.SECURITY,
        severity=SeverityLevel.MEDIUM,
        title="Template Injection Risk",
        description="Template literals with user input can lead to injection attacks",
        recommendation="Validate and sanitize all user input in template literals",
        effort=EffortLevel.LOW,
        pattern=re.compile(r"\$\{.*\}"),
        references=("CWE-94", OWASP_WEB_TOP_10[2]),
    ),
    DetectionRule(
        id="sec-missing-env-vars",
        group=RuleGroup.SECURITY_VULNERABILITY,
        category=FindingCategory.SECURITY,
        severity=SeverityLevel.CRITICAL,
        title="Missing Environment Variable Usage",
        description="Credentials are referenced but configuration is not read from environment variables",
        recommendation="Use environment variables for all configuration values and secrets",
        effort=EffortLevel.MEDIUM,
        predicate=_missing_env_vars,
        references=(OWASP_WEB_TOP_10[4],),
    ),
    DetectionRule(
        id="sec-missing-password-hashing",
        group=RuleGroup.SECURITY_VULNERABILITY,
        category=FindingCategory.SECURITY,
        severity=SeverityLevel.CRITICAL,
        title="Missing Password Hashing",
        description="Authentication system detected without proper password hashing",
        recommendation="Implement bcrypt or argon2 for password hashing",
        effort=EffortLevel.HIGH,
        predicate=_missing_password_hashing,
        references=("CWE-916", OWASP_WEB_TOP_10[1]),
    ),
)


# ==================== Performance ====================

PERFORMANCE_RULES = (
    DetectionRule(
        id="perf-nested-loops",
        group=RuleGroup.PERFORMANCE_ISSUE,
        category=FindingCategory.PERFORMANCE,
        severity=SeverityLevel.MEDIUM,
        title="Nested Loop Performance Issue",
        description="Nested loops can cause O(n^2) complexity and performance issues",
        recommendation="Optimize nested loops or use more efficient algorithms",
        effort=EffortLevel.MEDIUM,
        predicate=_nested_loops,
    ),
    DetectionRule(
        id="perf-nested-maps",
        group=RuleGroup.PERFORMANCE_ISSUE,
        category=FindingCategory.PERFORMANCE,
        severity=SeverityLevel.MEDIUM,
        title="Nested Array Operations",
        description="Chained .map() operations can be inefficient for large datasets",
        recommendation="Consider using reduce() or combining operations for better performance",
        effort=EffortLevel.MEDIUM,
        pattern=re.compile(r"\.map\(.*\.map\("),
    ),
    DetectionRule(
        id="perf-multiple-timeouts",
        group=RuleGroup.PERFORMANCE_ISSUE,
        category=FindingCategory.PERFORMANCE,
        severity=SeverityLevel.MEDIUM,
        title="Multiple setTimeout Usage",
        description="Multiple setTimeout calls can impact performance and user experience",
        recommendation="Batch operations or use requestAnimationFrame for better timing",
        effort=EffortLevel.MEDIUM,
        pattern=re.compile(r"setTimeout.*setTimeout", _I),
    ),
    DetectionRule(
        id="perf-unmanaged-interval",
        group=RuleGroup.PERFORMANCE_ISSUE,
        category=FindingCategory.PERFORMANCE,
        severity=SeverityLevel.MEDIUM,
        title="Unmanaged setInterval",
        description="setInterval without proper cleanup can cause memory leaks",
        recommendation="Always clear intervals and implement proper cleanup",
        effort=EffortLevel.MEDIUM,
        predicate=_unmanaged_interval,
    ),
    DetectionRule(
        id="perf-multiple-fetch",
        group=RuleGroup.PERFORMANCE_ISSUE,
        category=FindingCategory.PERFORMANCE,
        severity=SeverityLevel.MEDIUM,
        title="Multiple Fetch Calls",
        description="Multiple fetch calls should be batched or optimized",
        recommendation="Implement request batching or use libraries like react-query",
        effort=EffortLevel.MEDIUM,
        pattern=re.compile(r"\bfetch\(.*\bfetch\("),
    ),
    DetectionRule(
        id="perf-date-creation",
        group=RuleGroup.PERFORMANCE_ISSUE,
        category=FindingCategory.PERFORMANCE,
        severity=SeverityLevel.MEDIUM,
        title="Excessive Date Object Creation",
        description="Excessive Date object creation can impact performance",
        recommendation="Cache Date objects or use more efficient date handling",
        effort=EffortLevel.MEDIUM,
        pattern=re.compile(r"new\s+Date\(\)"),
    ),
    DetectionRule(
        id="perf-missing-lazy-loading",
        group=RuleGroup.PERFORMANCE_ISSUE,
        category=FindingCategory.PERFORMANCE,
        severity=SeverityLevel.MEDIUM,
        title="Missing Lazy Loading",
        description="Large codebase without lazy loading can impact initial load time",
        recommendation="Implement lazy loading for routes and components",
        effort=EffortLevel.MEDIUM,
        predicate=_missing_lazy_loading,
    ),
)


# ==================== Scalability ====================

def _concern(rule_id: str, pattern: str, title: str, description: str, recommendation: str) -> DetectionRule:
    return DetectionRule(
        id=rule_id,
        group=RuleGroup.SCALABILITY_CONCERN,
        category=FindingCategory.SCALABILITY,
        severity=SeverityLevel.MEDIUM,
        title=title,
        description=description,
        recommendation=recommendation,
        effort=EffortLevel.MEDIUM,
        pattern=re.compile(pattern, _I),
        min_matches=CONCERN_MIN_OCCURRENCES,
    )


SCALABILITY_RULES = (
    _concern(
        "scal-local-storage", r"localStorage",
        "Client-Side Storage Limitations",
        "localStorage has size limitations and can affect performance",
        "Implement server-side storage or use IndexedDB for larger datasets",
    ),
    _concern(
        "scal-session-storage", r"sessionStorage",
        "Session Storage Scalability",
        "sessionStorage is limited and not suitable for large-scale applications",
        "Use proper state management solutions like Redux or Context API",
    ),
    _concern(
        "scal-dom-manipulation", r"document\.",
        "Direct DOM Manipulation",
        "Direct DOM manipulation can cause performance issues at scale",
        "Use React state management and avoid direct DOM manipulation",
    ),
    _concern(
        "scal-window-dependencies", r"window\.",
        "Window Object Dependencies",
        "Heavy window object usage can limit scalability across environments",
        "Minimize window object usage and use React patterns instead",
    ),
    _concern(
        "scal-alert-dialogs", r"\balert\(",
        "User Alert Dialog Usage",
        "Alert dialogs provide poor user experience and are not scalable",
        "Replace alerts with proper UI notifications and toast messages",
    ),
    _concern(
        "scal-confirm-dialogs", r"\bconfirm\(",
        "Blocking Confirm Dialogs",
        "Confirm dialogs block user interaction and hurt user experience",
        "Implement modal dialogs or proper confirmation UI components",
    ),
    DetectionRule(
        id="scal-complex-state",
        group=RuleGroup.SCALABILITY_CONCERN,
        category=FindingCategory.SCALABILITY,
        severity=SeverityLevel.HIGH,
        title="Complex State Management",
        description="Found {count} useState hooks without centralized state management",
        recommendation="Consider implementing Redux, Zustand, or Context API for state management",
        effort=EffortLevel.HIGH,
        predicate=_complex_state,
    ),
)


# ==================== Maintainability ====================

MAINTAINABILITY_RULES = (
    DetectionRule(
        id="maint-large-functions",
        group=RuleGroup.MAINTAINABILITY_ISSUE,
        category=FindingCategory.MAINTAINABILITY,
        severity=SeverityLevel.MEDIUM,
        title="Large Function Size",
        description="Average function size is {average} lines",
        recommendation="Break down large functions into smaller, focused functions",
        effort=EffortLevel.MEDIUM,
        predicate=_large_functions,
    ),
    DetectionRule(
        id="maint-missing-documentation",
        group=RuleGroup.MAINTAINABILITY_ISSUE,
        category=FindingCategory.MAINTAINABILITY,
        severity=SeverityLevel.LOW,
        title="Missing Documentation",
        description="Code lacks comments and documentation",
        recommendation="Add comments explaining complex logic and business rules",
        effort=EffortLevel.LOW,
        predicate=_missing_documentation,
    ),
    DetectionRule(
        id="maint-missing-typescript",
        group=RuleGroup.MAINTAINABILITY_ISSUE,
        category=FindingCategory.MAINTAINABILITY,
        severity=SeverityLevel.MEDIUM,
        title="Missing TypeScript",
        description="JavaScript codebase without type safety",
        recommendation="Migrate to TypeScript for better type safety and developer experience",
        effort=EffortLevel.HIGH,
        predicate=_missing_typescript,
    ),
    DetectionRule(
        id="maint-missing-type-hints",
        group=RuleGroup.MAINTAINABILITY_ISSUE,
        category=FindingCategory.MAINTAINABILITY,
        severity=SeverityLevel.MEDIUM,
        title="Missing Type Hints",
        description="Python code without type annotations",
        recommendation="Add type hints to public functions and check them in CI",
        effort=EffortLevel.MEDIUM,
        predicate=_missing_type_hints,
    ),
)


# ==================== Tool-specific ====================

TOOL_RULES = (
    DetectionRule(
        id="tool-missing-react-keys",
        group=RuleGroup.TOOL_SPECIFIC,
        category=FindingCategory.MAINTAINABILITY,
        severity=SeverityLevel.MEDIUM,
        title="Missing React Keys",
        description="List rendering without proper keys detected",
        recommendation="Add unique keys to list items for better React performance",
        effort=EffortLevel.LOW,
        predicate=_missing_react_keys,
        tool_types=("lovable", "replit"),
    ),
    DetectionRule(
        id="tool-missing-error-boundaries",
        group=RuleGroup.TOOL_SPECIFIC,
        category=FindingCategory.MAINTAINABILITY,
        severity=SeverityLevel.MEDIUM,
        title="Missing Error Boundaries",
        description="Error throwing code without proper error boundaries",
        recommendation="Implement React Error Boundaries for better error handling",
        effort=EffortLevel.MEDIUM,
        predicate=_missing_error_boundaries,
        tool_types=("bolt",),
    ),
)


RULES = SECURITY_RULES + PERFORMANCE_RULES + SCALABILITY_RULES + MAINTAINABILITY_RULES + TOOL_RULES
