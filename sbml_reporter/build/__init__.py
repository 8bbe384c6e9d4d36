"""
Build module: assembling reports from a model index.

This module provides:
- Builder, the section composition shared by all formats
- ReportContext and SectionNumbering, the per-run state
- HTMLBuilder and LaTeXBuilder
- create_builder() to pick a builder by format name
"""

from sbml_reporter.build.base import (
    Builder,
    ReportContext,
    SectionNumbering,
    create_builder,
    format_participants,
)
from sbml_reporter.build.html import HTMLBuilder
from sbml_reporter.build.latex import LaTeXBuilder

__all__ = [
    "Builder",
    "ReportContext",
    "SectionNumbering",
    "create_builder",
    "format_participants",
    "HTMLBuilder",
    "LaTeXBuilder",
]
