"""
JSON model format.

A hand-writable alternative to SBML, mirroring the fields of
``sbml_reporter.models``:

    {
      "id": "toy",
      "name": "Toy model",
      "compartments": [{"id": "c1", "size": 1.0}],
      "species": [{"id": "s1", "compartment": "c1", "initial_amount": 10}],
      "reactions": [{"id": "r1", "reactants": ["s1"], "products": [],
                     "kinetic_law": "k * s1"}],
      "history": {"creators": [{"given_name": "Ada", "family_name": "Lovelace"}],
                  "created": "2024-01-01T00:00:00Z"}
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from sbml_reporter.exceptions import ModelReadError
from sbml_reporter.models import Model

logger = logging.getLogger(__name__)


def load_model_json(path: str | Path) -> Model:
    """Load a model from a JSON file.

    Raises:
        ModelReadError: If the file cannot be read, is not valid JSON or
            lacks required fields
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ModelReadError(str(path), [str(e)]) from e
    except json.JSONDecodeError as e:
        raise ModelReadError(str(path), [f"invalid JSON: {e}"]) from e

    try:
        model = Model.from_dict(data)
    except (KeyError, TypeError) as e:
        raise ModelReadError(str(path), [f"missing or malformed field: {e}"]) from e

    logger.info("Read model %s from %s", model.id, path)
    return model
