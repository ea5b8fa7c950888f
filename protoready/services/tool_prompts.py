# protoready/services/tool_prompts.py
"""
Tool prompt catalog.

Each supported AI builder gets a short shell recipe that dumps the project
structure, dependencies and a few telling grep counts into one block of text.
That block is what users paste as ``codeOutput``.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from protoready.core.config import settings
from protoready.core.constants import ToolType
from protoready.schemas.base import CamelModel

_START = 'echo "=== PROTOREADY ANALYSIS START ==="'
_END = 'echo "=== PROTOREADY ANALYSIS END ==="'


class ToolPrompt(CamelModel):
    tool_type: ToolType
    name: str
    description: str
    prompt: str
    expected_output: List[str]


def _shell(title: str, *steps: str) -> str:
    body = " && \\\n".join((_START,) + steps + (_END,))
    return f"# ProtoReady Assessment - {title}\n\nRun this in your project root and paste the complete output:\n\n```bash\n{body}\n```"


TOOL_PROMPTS: Dict[str, ToolPrompt] = {
    ToolType.LOVABLE.value: ToolPrompt(
        tool_type=ToolType.LOVABLE,
        name="Lovable",
        description="For React/Next.js apps built with Lovable",
        prompt=_shell(
            "Lovable Project Analysis",
            'echo "=== PROJECT STRUCTURE ===" && find . -type f \\( -name "*.js" -o -name "*.jsx" -o -name "*.ts" -o -name "*.tsx" \\) -not -path "*/node_modules/*" | head -30',
            'echo "=== PACKAGE DEPENDENCIES ===" && grep -A 50 \'"dependencies"\' package.json',
            'echo "=== SECURITY SCAN ===" && grep -rn "API_KEY\\|SECRET\\|PASSWORD\\|console\\.log" src | head -10',
            'echo "=== STATE MANAGEMENT ===" && grep -r "useState\\|redux\\|zustand\\|context" src | wc -l',
            'echo "=== PERFORMANCE PATTERNS ===" && grep -r "useMemo\\|useCallback\\|React\\.memo\\|lazy" src | wc -l',
        ),
        expected_output=[
            "Project file structure",
            "Package.json dependencies",
            "Security pattern analysis",
            "State management usage",
            "Performance optimization indicators",
        ],
    ),
    ToolType.REPLIT.value: ToolPrompt(
        tool_type=ToolType.REPLIT,
        name="Replit",
        description="For Python/JavaScript apps in Replit",
        prompt=_shell(
            "Replit Project Analysis",
            'echo "=== PROJECT STRUCTURE ===" && find . -type f \\( -name "*.py" -o -name "*.js" -o -name "*.html" \\) -not -path "*/node_modules/*" -not -path "*/.pythonlibs/*" | head -30',
            'echo "=== DEPENDENCIES ===" && (head -c 1000 requirements.txt pyproject.toml package.json 2>/dev/null || true)',
            'echo "=== SECURITY SCAN ===" && grep -rn "password\\|secret\\|token\\|api_key" --include="*.py" --include="*.js" . | head -10',
            'echo "=== DATABASE USAGE ===" && grep -rln "sqlite\\|postgres\\|mysql\\|mongo" --include="*.py" --include="*.js" . | head -5',
        ),
        expected_output=[
            "Project file structure",
            "Dependencies and requirements",
            "Security pattern detection",
            "Database usage analysis",
            "Framework detection",
        ],
    ),
    ToolType.BOLT.value: ToolPrompt(
        tool_type=ToolType.BOLT,
        name="Bolt/Claude",
        description="For apps built with Bolt or Claude Artifacts",
        prompt=_shell(
            "Bolt/Claude Project Analysis",
            'echo "=== SOURCE FILES ===" && find . -type f \\( -name "*.jsx" -o -name "*.tsx" -o -name "*.js" -o -name "*.ts" \\) -not -path "*/node_modules/*" | head -20 | xargs cat',
            'echo "=== PACKAGE DEPENDENCIES ===" && cat package.json',
        ),
        expected_output=[
            "Complete project code structure",
            "Framework and library usage",
            "Component architecture",
            "State management patterns",
            "Security implementation",
        ],
    ),
    ToolType.CURSOR.value: ToolPrompt(
        tool_type=ToolType.CURSOR,
        name="Cursor",
        description="For projects built with Cursor IDE",
        prompt=_shell(
            "Cursor Project Analysis",
            'echo "=== PROJECT OVERVIEW ===" && find . -type f -not -path "*/node_modules/*" -not -path "*/.git/*" | wc -l',
            'echo "=== DIRECTORY STRUCTURE ===" && find . -type d -not -path "*/node_modules/*" -not -path "*/.git/*" | head -30',
            'echo "=== PACKAGE CONFIGURATION ===" && (cat package.json pyproject.toml 2>/dev/null || true)',
            'echo "=== SECURITY SCAN ===" && grep -rn "API_KEY\\|SECRET\\|PASSWORD\\|eval(" --exclude-dir=node_modules . | head -10',
            'echo "=== TESTING SETUP ===" && find . -name "*.test.*" -o -name "test_*.py" | grep -v node_modules | wc -l',
        ),
        expected_output=[
            "Project overview and metrics",
            "Directory structure",
            "Package configuration",
            "Security pattern analysis",
            "Testing setup",
        ],
    ),
    ToolType.GITHUB.value: ToolPrompt(
        tool_type=ToolType.GITHUB,
        name="GitHub Repository",
        description="Upload from any GitHub repository",
        prompt=_shell(
            "GitHub Repository Analysis",
            'echo "=== REPOSITORY INFO ===" && git log --oneline | head -10',
            'echo "=== PROJECT STRUCTURE ===" && git ls-files | head -50',
            'echo "=== CI/CD ===" && (ls .github/workflows 2>/dev/null || echo "none")',
            'echo "=== DOCUMENTATION ===" && (head -50 README.md 2>/dev/null || echo "no README")',
            'echo "=== SECURITY SCAN ===" && git grep -n "API_KEY\\|SECRET\\|PASSWORD" | head -10',
        ),
        expected_output=[
            "Repository metadata and history",
            "Project structure and organization",
            "CI/CD pipeline configuration",
            "Documentation coverage",
            "Security configuration",
        ],
    ),
}


def get_tool_prompt(tool_type: Optional[str]) -> Optional[ToolPrompt]:
    if not tool_type:
        return None
    return TOOL_PROMPTS.get(str(getattr(tool_type, "value", tool_type)))


def get_all_tool_prompts() -> List[ToolPrompt]:
    return list(TOOL_PROMPTS.values())


def get_prompt_instructions(tool_type: Optional[str]) -> str:
    """Markdown instructions for one tool, or "Tool not supported"."""
    prompt = get_tool_prompt(tool_type)
    if prompt is None:
        return "Tool not supported"

    expected = "\n".join(f"- {item}" for item in prompt.expected_output)
    return (
        f"## {prompt.name} Analysis Instructions\n\n"
        f"{prompt.description}\n\n"
        f"{prompt.prompt}\n\n"
        f"### Expected Output\n"
        f"This analysis will provide:\n{expected}\n\n"
        f"### Next Steps\n"
        f"1. Copy and paste the complete output from the commands above\n"
        f"2. Provide any additional context about your project\n"
        f"3. Submit for analysis to receive your production readiness report\n"
    )


def validate_assessment_input(payload: Mapping[str, Any]) -> Tuple[bool, List[str]]:
    """
    Check a raw (camelCase) assessment payload without raising.

    Returns:
        (valid, errors) with errors in field order
    """
    errors: List[str] = []

    tool_type = payload.get("toolType")
    if not tool_type:
        errors.append("Tool type is required")
    elif not isinstance(tool_type, str) or tool_type not in TOOL_PROMPTS:
        errors.append("Invalid tool type")

    code_output = payload.get("codeOutput")
    if not isinstance(code_output, str) or len(code_output.strip()) < settings.MIN_CODE_OUTPUT_CHARS:
        errors.append(
            f"Code output is required and must be substantial "
            f"(minimum {settings.MIN_CODE_OUTPUT_CHARS} characters)"
        )

    if not payload.get("projectType"):
        errors.append("Project type is required")

    return not errors, errors
