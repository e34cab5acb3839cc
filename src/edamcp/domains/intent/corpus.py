"""Built-in example corpus for natural-language requests.

Order matters: ties in similarity go to the earliest example, and the
help and fallback answers quote the first examples.
"""
from __future__ import annotations

from typing import Tuple

from .value_objects import WORKFLOW_TOOL, Example

PROJECT_TOOL = "arcas_onlineeda_project"
VERIFICATION_TOOL = "arcas_onlineeda_run_verification"
UPLOAD_TOOL = "arcas_onlineeda_upload_file"
NAVIGATE_TOOL = "arcas_onlineeda_navigate"

DEFAULT_EXAMPLES: Tuple[Example, ...] = (
    # Project creation
    Example(
        query="I want to create a new formal verification project for my CPU design",
        interpretation="Create formal verification project",
        tool=PROJECT_TOOL,
        params={"action": "create", "projectType": "formal",
                "projectName": "cpu_formal_verification"},
    ),
    Example(
        query="Let's start a power analysis project for the GPU controller",
        interpretation="Create power analysis project",
        tool=PROJECT_TOOL,
        params={"action": "create", "projectType": "power",
                "projectName": "gpu_controller_power"},
    ),
    Example(
        query="Set up equivalence checking between RTL and gate-level netlist",
        interpretation="Create equivalence checking project",
        tool=PROJECT_TOOL,
        params={"action": "create", "projectType": "equivalence",
                "projectName": "rtl_gate_equivalence"},
    ),
    # Verification runs
    Example(
        query="Check if my RISC-V core meets all safety properties",
        interpretation="Run formal verification with safety properties",
        tool=VERIFICATION_TOOL,
        params={"verificationType": "formal",
                "options": {"properties": ["safety"], "depth": 20}},
    ),
    Example(
        query="Verify that the optimized design is functionally equivalent to the original",
        interpretation="Run equivalence verification",
        tool=VERIFICATION_TOOL,
        params={"verificationType": "equivalence"},
    ),
    Example(
        query="Analyze power consumption during different operating modes",
        interpretation="Run power analysis verification",
        tool=VERIFICATION_TOOL,
        params={"verificationType": "power", "options": {"timeout": 600}},
    ),
    Example(
        query="Find security vulnerabilities in my crypto module",
        interpretation="Run security verification",
        tool=VERIFICATION_TOOL,
        params={"verificationType": "security",
                "options": {"properties": ["information_leakage", "timing_attacks"]}},
    ),
    # File operations
    Example(
        query="Upload my Verilog files for the memory controller",
        interpretation="Upload Verilog design files",
        tool=UPLOAD_TOOL,
        params={"fileType": "verilog"},
    ),
    Example(
        query="Add the SystemVerilog testbench to the project",
        interpretation="Upload SystemVerilog testbench",
        tool=UPLOAD_TOOL,
        params={"fileType": "systemverilog"},
    ),
    Example(
        query="Import SDC timing constraints",
        interpretation="Upload constraint files",
        tool=UPLOAD_TOOL,
        params={"fileType": "constraints"},
    ),
    # Navigation
    Example(
        query="Show me all my verification projects",
        interpretation="Navigate to projects list",
        tool=NAVIGATE_TOOL,
        params={"action": "projects"},
    ),
    Example(
        query="Go to the documentation",
        interpretation="Navigate to documentation",
        tool=NAVIGATE_TOOL,
        params={"action": "documentation"},
    ),
    # Multi-step workflows
    Example(
        query="I need to verify my AES encryption module meets FIPS standards",
        interpretation="Security verification workflow for cryptographic module",
        tool=WORKFLOW_TOOL,
        params={"steps": [
            {"tool": PROJECT_TOOL,
             "params": {"action": "create", "projectType": "security",
                        "projectName": "aes_fips_verification"}},
            {"tool": UPLOAD_TOOL, "params": {"fileType": "verilog"}},
            {"tool": VERIFICATION_TOOL,
             "params": {"verificationType": "security",
                        "options": {"properties": ["fips_compliance"]}}},
        ]},
    ),
    Example(
        query="Compare power consumption before and after optimization",
        interpretation="Power comparison workflow",
        tool=WORKFLOW_TOOL,
        params={"steps": [
            {"tool": PROJECT_TOOL,
             "params": {"action": "create", "projectType": "power",
                        "projectName": "optimization_comparison"}},
            {"tool": UPLOAD_TOOL,
             "params": {"fileType": "verilog", "note": "Upload both versions"}},
            {"tool": VERIFICATION_TOOL, "params": {"verificationType": "power"}},
        ]},
    ),
)
