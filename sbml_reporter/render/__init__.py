"""
Rendering module: output-format backends.

This module provides:
- Cell, the unit of table rows and inline cross-references
- Translator, the interface every output format implements
- HTMLTranslator (HTML5 with MathML) and LaTeXTranslator (KOMA-Script)
- create_translator() to pick a backend by name
"""

from sbml_reporter.render.cell import Cell
from sbml_reporter.render.base import Translator, create_translator, round_half_up
from sbml_reporter.render.html import HTMLTranslator
from sbml_reporter.render.latex import LaTeXTranslator

__all__ = [
    "Cell",
    "Translator",
    "create_translator",
    "round_half_up",
    "HTMLTranslator",
    "LaTeXTranslator",
]
