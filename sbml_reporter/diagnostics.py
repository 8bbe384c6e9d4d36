"""Environment and resource diagnostics for SBML-Reporter.

This module checks the libraries and the shipped data files the report
pipeline needs, so users get actionable guidance instead of a traceback
halfway through a run.
"""

from __future__ import annotations

from dataclasses import dataclass
import importlib.util
from pathlib import Path
from typing import Dict, List

from .config import HTML_MASKING_TABLE, LATEX_MASKING_TABLE, SBO_TERMS_FILE
from .exceptions import MaskingTableError
from .masking import load_masking_table
from .ontology import load_term_catalog


@dataclass
class CheckResult:
    """Represents a diagnostic check with status and human-readable detail."""

    name: str
    status: str  # ok | warn | error
    detail: str


def _module_available(module_name: str) -> bool:
    return importlib.util.find_spec(module_name) is not None


def _check_dependency(module: str, friendly: str, required: bool = False) -> CheckResult:
    available = _module_available(module)
    status = "ok" if available else ("error" if required else "warn")
    detail = f"{friendly} available" if available else f"{friendly} missing"
    return CheckResult(friendly, status, detail)


def _check_masking_table(fmt: str, path: Path) -> CheckResult:
    name = f"{fmt} masking table"
    try:
        table = load_masking_table(path)
    except MaskingTableError as e:
        return CheckResult(name, "error", str(e))
    if len(table) == 0:
        return CheckResult(name, "warn", f"{path.name} has no rules; text is emitted unescaped")
    return CheckResult(name, "ok", f"{len(table)} rules in {path.name}")


def _check_term_catalog(path: Path = SBO_TERMS_FILE) -> CheckResult:
    name = "SBO term catalog"
    if not path.exists():
        return CheckResult(name, "warn", "Missing; glossary entries will show bare codes.")
    try:
        catalog = load_term_catalog(path)
    except (OSError, ValueError) as e:
        return CheckResult(name, "error", f"Unreadable: {e}")
    return CheckResult(name, "ok", f"{len(catalog)} terms")


def run_diagnostics() -> List[CheckResult]:
    """Run a series of lightweight checks and return their results."""

    checks: List[CheckResult] = []

    # Core dependencies
    checks.append(_check_dependency("libsbml", "python-libsbml", required=True))
    checks.append(_check_dependency("sympy", "SymPy", required=True))

    # Resources
    checks.append(_check_masking_table("HTML", HTML_MASKING_TABLE))
    checks.append(_check_masking_table("LaTeX", LATEX_MASKING_TABLE))
    checks.append(_check_term_catalog())

    return checks


def summarize_checks(checks: List[CheckResult]) -> Dict[str, int]:
    summary = {"ok": 0, "warn": 0, "error": 0}
    for c in checks:
        if c.status in summary:
            summary[c.status] += 1
    return summary
