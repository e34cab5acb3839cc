"""Ordered category rules for natural-language requests.

Each rule pairs a category predicate with a builder. Predicates test
fixed keyword sets by substring containment on the lowercased query; the
first rule whose predicate holds answers the request.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from .corpus import NAVIGATE_TOOL, PROJECT_TOOL, UPLOAD_TOOL, VERIFICATION_TOOL
from .value_objects import Example, SlotGroup

Context = Mapping[str, Any]
Predicate = Callable[[str], bool]
Builder = Callable[[str, Optional[Context], Sequence[Example]], Dict[str, Any]]


@dataclass(frozen=True)
class IntentRule:
    category: str
    predicate: Predicate
    builder: Builder


def _contains_any(query: str, keywords: Tuple[str, ...]) -> bool:
    return any(keyword in query for keyword in keywords)


# ============================================================
# Keyword sets
# ============================================================

CREATION_VERBS = ("create", "new", "start", "setup", "initialize", "begin")
CREATION_NOUNS = ("project", "verification", "analysis")
VERIFICATION_VERBS = ("verify", "check", "analyze", "test", "validate", "run", "execute")
VERIFICATION_KINDS = ("formal", "equivalence", "power", "security", "fpga")
FILE_KEYWORDS = ("upload", "add", "import", "load", "file", "design")
NAVIGATION_VERBS = ("go", "navigate", "show", "view", "open", "list")
NAVIGATION_SECTIONS = ("home", "projects", "documentation", "settings")
RESULTS_KEYWORDS = ("result", "report", "output", "findings", "status")
HELP_KEYWORDS = ("help", "how", "what", "explain", "guide", "tutorial")


# ============================================================
# Slot groups
# ============================================================

PROJECT_TYPES = SlotGroup(
    entries=(
        ("formal", ("formal", "property", "assertion", "correctness", "safety")),
        ("equivalence", ("equivalence", "equivalent", "compare", "match", "same")),
        ("power", ("power", "energy", "consumption", "optimization", "low-power")),
        ("security", ("security", "secure", "vulnerability", "crypto", "attack")),
        ("fpga", ("fpga", "synthesis", "implementation", "xilinx", "altera")),
    ),
    default="formal",
)

VERIFICATION_TYPES = SlotGroup(
    entries=(
        ("formal", ("formal", "property", "assertion", "prove", "theorem")),
        ("equivalence", ("equivalence", "equivalent", "compare", "netlist", "rtl")),
        ("power", ("power", "energy", "consumption", "watts", "dynamic")),
        ("security", ("security", "secure", "vulnerability", "attack", "leak")),
        ("fpga", ("fpga", "synthesis", "implementation", "timing", "resource")),
    ),
    default="formal",
)

FILE_TYPES = SlotGroup(
    entries=(
        ("verilog", ("verilog", ".v", "rtl")),
        ("systemverilog", ("systemverilog", ".sv", "testbench")),
        ("vhdl", ("vhdl", ".vhd")),
        ("constraints", ("constraint", "sdc", "xdc", "timing")),
    ),
    default="verilog",
)

NAVIGATION_TARGETS = SlotGroup(
    entries=(
        ("home", ("home", "dashboard", "main")),
        ("projects", ("projects", "list", "all")),
        ("new-project", ("new", "create")),
        ("documentation", ("docs", "documentation", "help", "guide")),
        ("settings", ("settings", "config", "preferences")),
    ),
    default="home",
)

SUPPORTED_FORMATS = [
    "Verilog (.v)",
    "SystemVerilog (.sv)",
    "VHDL (.vhd, .vhdl)",
    "Constraint files (.sdc, .xdc)",
]

AVAILABLE_TOOLS = [
    f"{PROJECT_TOOL} - Project management",
    f"{UPLOAD_TOOL} - File uploads",
    f"{VERIFICATION_TOOL} - Run verifications",
    f"{NAVIGATE_TOOL} - Platform navigation",
]

RESOURCES = [
    "arcas://projects - List all projects",
    "arcas://verification-results - Latest results",
    "arcas://platform-status - Platform status",
    "arcas://documentation - Full documentation",
]


# ============================================================
# Predicates
# ============================================================

def is_project_creation(query: str) -> bool:
    return _contains_any(query, CREATION_VERBS) and _contains_any(query, CREATION_NOUNS)


def is_verification(query: str) -> bool:
    return _contains_any(query, VERIFICATION_VERBS) or _contains_any(query, VERIFICATION_KINDS)


def is_file_operation(query: str) -> bool:
    return _contains_any(query, FILE_KEYWORDS)


def is_navigation(query: str) -> bool:
    return _contains_any(query, NAVIGATION_VERBS) or _contains_any(query, NAVIGATION_SECTIONS)


def is_results_query(query: str) -> bool:
    return _contains_any(query, RESULTS_KEYWORDS)


def is_help_query(query: str) -> bool:
    return _contains_any(query, HELP_KEYWORDS)


# ============================================================
# Builders
# ============================================================

def _examples_for(examples: Sequence[Example], tool: str, **params: Any) -> list:
    return [
        example.to_dict()
        for example in examples
        if example.tool == tool
        and all(example.params.get(key) == value for key, value in params.items())
    ]


def suggest_project_creation(
    query: str, context: Optional[Context], examples: Sequence[Example]
) -> Dict[str, Any]:
    return {
        "interpretation": "Create a new project",
        "suggestedTool": PROJECT_TOOL,
        "suggestedParams": {
            "action": "create",
            "projectType": PROJECT_TYPES.detect(query),
            "projectName": "Suggested: Extract from your requirements",
        },
        "examples": _examples_for(examples, PROJECT_TOOL, action="create"),
        "nextSteps": [
            "After creating project, upload design files",
            "Configure verification settings",
            "Run verification",
        ],
    }


def suggest_verification(
    query: str, context: Optional[Context], examples: Sequence[Example]
) -> Dict[str, Any]:
    return {
        "interpretation": "Run verification",
        "suggestedTool": VERIFICATION_TOOL,
        "suggestedParams": {
            "verificationType": VERIFICATION_TYPES.detect(query),
            "projectId": _project_hint(context),
        },
        "examples": _examples_for(examples, VERIFICATION_TOOL),
        "tips": [
            "Ensure all design files are uploaded",
            "Check project status before running verification",
            "Review verification options for specific requirements",
        ],
    }


def suggest_file_upload(
    query: str, context: Optional[Context], examples: Sequence[Example]
) -> Dict[str, Any]:
    return {
        "interpretation": "Upload design files",
        "suggestedTool": UPLOAD_TOOL,
        "suggestedParams": {
            "projectId": _project_hint(context),
            "filePath": "Required: Path to your design file",
            "fileType": FILE_TYPES.detect(query),
        },
        "examples": _examples_for(examples, UPLOAD_TOOL),
        "supportedFormats": list(SUPPORTED_FORMATS),
    }


def suggest_navigation(
    query: str, context: Optional[Context], examples: Sequence[Example]
) -> Dict[str, Any]:
    return {
        "interpretation": "Navigate to platform section",
        "suggestedTool": NAVIGATE_TOOL,
        "suggestedParams": {"action": NAVIGATION_TARGETS.detect(query)},
        "availableActions": list(NAVIGATION_TARGETS.values),
    }


def suggest_results(
    query: str, context: Optional[Context], examples: Sequence[Example]
) -> Dict[str, Any]:
    project_id = _current_project(context)
    params: Dict[str, Any] = {"action": "projects"}
    if project_id:
        params["projectId"] = project_id
        action = f"Navigate to project {project_id} results page"
    else:
        action = "First select a project, then navigate to its results"
    return {
        "interpretation": "Get verification results",
        "suggestedAction": action,
        "suggestedTool": NAVIGATE_TOOL,
        "suggestedParams": params,
        "note": "Results are typically shown after running verification",
        "tip": "You can also use the arcas://verification-results resource",
    }


def provide_help(
    query: str, context: Optional[Context], examples: Sequence[Example]
) -> Dict[str, Any]:
    return {
        "interpretation": "Help requested",
        "suggestedTool": NAVIGATE_TOOL,
        "suggestedParams": {"action": "documentation"},
        "overview": "Arcas OnlineEDA is a comprehensive web-based EDA platform",
        "availableTools": [
            {
                "name": NAVIGATE_TOOL,
                "description": "Navigate platform sections",
                "actions": list(NAVIGATION_TARGETS.values),
            },
            {
                "name": PROJECT_TOOL,
                "description": "Manage projects",
                "actions": ["create", "open", "list", "delete"],
            },
            {
                "name": UPLOAD_TOOL,
                "description": "Upload design files to projects",
            },
            {
                "name": VERIFICATION_TOOL,
                "description": "Run verification on projects",
                "types": list(VERIFICATION_KINDS),
            },
        ],
        "exampleQueries": [example.query for example in examples[:5]],
        "workflow": [
            "1. Create or open a project",
            "2. Upload design files",
            "3. Configure verification settings",
            "4. Run verification",
            "5. Review results",
        ],
        "resources": list(RESOURCES),
    }


def _current_project(context: Optional[Context]) -> Optional[str]:
    if not context:
        return None
    project_id = context.get("currentProject")
    return project_id or None


def _project_hint(context: Optional[Context]) -> str:
    return _current_project(context) or "Required: Use current project ID"


INTENT_RULES: Tuple[IntentRule, ...] = (
    IntentRule("project_creation", is_project_creation, suggest_project_creation),
    IntentRule("verification", is_verification, suggest_verification),
    IntentRule("file_operation", is_file_operation, suggest_file_upload),
    IntentRule("navigation", is_navigation, suggest_navigation),
    IntentRule("results_query", is_results_query, suggest_results),
    IntentRule("help", is_help_query, provide_help),
)
"""Evaluated in order; the first matching predicate wins."""
