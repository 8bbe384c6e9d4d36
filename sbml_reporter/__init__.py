"""
SBML-Reporter: documentation generator for biochemical models

Turns an SBML model into a human-readable report, as a single HTML page
or a LaTeX document: compartments with their species and reactions,
reaction details with rendered kinetic laws, and a glossary of the
Systems Biology Ontology terms the model uses.

License: MIT
"""

__version__ = "0.1.0"

from sbml_reporter.models import Compartment, Species, Reaction, Model
from sbml_reporter.pipeline import ReportConfig, ReportDirector, render_report, generate_reports

__all__ = [
    "Compartment",
    "Species",
    "Reaction",
    "Model",
    "ReportConfig",
    "ReportDirector",
    "render_report",
    "generate_reports",
]
