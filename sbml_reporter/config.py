"""
Project-wide configuration and resource locations.

This module defines the paths of the data files shipped with SBML-Reporter
and the constants shared by every output format.

Module Contents:
    APP_NAME: Application name for display purposes
    DATA_DIR: Package data directory (masking tables, ontology catalog)
    MASKING_DIR: Directory holding one escaping table per output format
    HTML_MASKING_TABLE: Escaping table for the HTML backend
    LATEX_MASKING_TABLE: Escaping table for the LaTeX backend
    SBO_TERMS_FILE: Catalog of Systems Biology Ontology terms
    ROUND_PRECISION: Fractional digits used for sizes and initial values
    PLACEHOLDER: Text rendered in place of any unset optional field

Example:
    >>> from sbml_reporter.config import HTML_MASKING_TABLE, ROUND_PRECISION
    >>> print(f"Masking rules at: {HTML_MASKING_TABLE}")
"""

from pathlib import Path

# Application name for display and identification
APP_NAME = "SBML-Reporter"

# Data shipped inside the package
DATA_DIR = Path(__file__).resolve().parent / "data"

# Escaping tables, one per backend
MASKING_DIR = DATA_DIR / "masking"
HTML_MASKING_TABLE = MASKING_DIR / "html.csv"
LATEX_MASKING_TABLE = MASKING_DIR / "latex.csv"

# SBO term names and definitions used for the glossary
SBO_TERMS_FILE = DATA_DIR / "sbo_terms.csv"

# Numbers are rounded half-up to this many fractional digits
ROUND_PRECISION = 3

# Rendered for unset optional fields and empty participant lists
PLACEHOLDER = "-"
