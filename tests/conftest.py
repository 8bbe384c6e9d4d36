"""
Shared fixtures: small models covering the report features.
"""

import copy
import json

import pytest

from sbml_reporter.build import HTMLBuilder, LaTeXBuilder
from sbml_reporter.models import Compartment, Model, Reaction, Species


GLYCOLYSIS = {
    "id": "glycolysis",
    "name": "Glycolysis & Co",
    "compartments": [
        {"id": "cytosol", "name": "Cytosol", "size": 1.0, "units": "litre",
         "sbo_term": "SBO:0000290"},
        {"id": "nucleus", "constant": False},
    ],
    "species": [
        {"id": "glc", "compartment": "cytosol", "name": "Glucose",
         "initial_amount": 10.0, "units": "mole", "sbo_term": "SBO:0000247"},
        {"id": "g6p", "compartment": "cytosol", "name": "Glucose_6_phosphate",
         "initial_concentration": 0.12345, "sbo_term": "SBO:0000247"},
        {"id": "hk", "compartment": "cytosol", "name": "Hexokinase",
         "sbo_term": "SBO:0000252"},
        {"id": "dna", "compartment": "nucleus"},
    ],
    "reactions": [
        {"id": "hexokinase", "name": "Glucose phosphorylation",
         "reactants": ["glc"], "products": ["g6p"], "modifiers": ["hk"],
         "reversible": False, "sbo_term": "SBO:0000176", "compartment": "cytosol",
         "kinetic_law": "Vm * glc / (Km + glc)"},
    ],
    "history": {
        "creators": [
            {"given_name": "Ada", "family_name": "Lovelace"},
            {"given_name": "Alan", "family_name": "Turing"},
        ],
        "created": "2024-01-01T00:00:00Z",
    },
}


@pytest.fixture
def two_compartment_model():
    """c1 holds s1 and s2, c2 holds s3; r1 turns s1 into s3."""
    return Model(
        id="toy",
        compartments=(Compartment("c1"), Compartment("c2")),
        species=(
            Species("s1", "c1"),
            Species("s2", "c1"),
            Species("s3", "c2"),
        ),
        reactions=(
            Reaction("r1", reactants=("s1",), products=("s3",), reversible=False),
        ),
    )


@pytest.fixture
def glycolysis_dict():
    return copy.deepcopy(GLYCOLYSIS)


@pytest.fixture
def glycolysis_model(glycolysis_dict):
    """Named model with units, SBO terms, a kinetic law and a history."""
    return Model.from_dict(glycolysis_dict)


@pytest.fixture
def glycolysis_json(tmp_path, glycolysis_dict):
    path = tmp_path / "glycolysis.json"
    path.write_text(json.dumps(glycolysis_dict), encoding="utf-8")
    return path


@pytest.fixture
def html_builder():
    return HTMLBuilder()


@pytest.fixture
def latex_builder():
    return LaTeXBuilder()
