"""
Ingestion module for reading model files.

This module provides:
- SBML reading with python-libsbml
- A JSON model format for hand-written models
- load_model(), choosing the reader from the file suffix
"""

from __future__ import annotations

from pathlib import Path

from sbml_reporter.ingest.json_model import load_model_json
from sbml_reporter.models import Model

SBML_SUFFIXES = (".xml", ".sbml")
JSON_SUFFIXES = (".json",)


def load_model(path: str | Path) -> Model:
    """Read a model file, picking the reader by suffix.

    ``.json`` files use the JSON format, everything else is read as SBML.
    """
    path = Path(path)
    if path.suffix.lower() in JSON_SUFFIXES:
        return load_model_json(path)

    from sbml_reporter.ingest.sbml import parse_sbml
    return parse_sbml(path)


__all__ = [
    "load_model",
    "load_model_json",
    "SBML_SUFFIXES",
    "JSON_SUFFIXES",
]
