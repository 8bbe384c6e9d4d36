"""
Entry point for running SBML-Reporter as a module.

Usage:
    python -m sbml_reporter --help
    python -m sbml_reporter report model.xml out/
    python -m sbml_reporter doctor
"""
from .cli import app


if __name__ == "__main__":
    app()
