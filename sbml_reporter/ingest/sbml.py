"""
SBML reading with python-libsbml.

Converts a libsbml document into the immutable models of
``sbml_reporter.models``. Only what the reports show is read:
compartments, species, reactions with their participants and kinetic
laws, SBO terms, derived units and the model history.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Optional

import libsbml
import sympy as sp

from sbml_reporter.exceptions import ModelReadError
from sbml_reporter.formula import CONSTANTS, call_function
from sbml_reporter.models import (
    Compartment,
    Creator,
    Model,
    ModelHistory,
    Reaction,
    Species,
)

logger = logging.getLogger(__name__)


def parse_sbml(path: str | Path) -> Model:
    """Read an SBML file.

    Args:
        path: Path to an SBML file (any level/version libsbml reads)

    Returns:
        The model contained in the file

    Raises:
        ModelReadError: If libsbml reports errors or the file holds no model
    """
    path = Path(path)
    if not path.exists():
        raise ModelReadError(str(path), ["file not found"])

    document = libsbml.readSBMLFromFile(str(path))
    return _convert_document(document, str(path))


def parse_sbml_string(text: str, source: str = "<string>") -> Model:
    """Read SBML from an XML string."""
    document = libsbml.readSBMLFromString(text)
    return _convert_document(document, source)


def _convert_document(document: libsbml.SBMLDocument, source: str) -> Model:
    errors = []
    for i in range(document.getNumErrors()):
        error = document.getError(i)
        if error.getSeverity() >= libsbml.LIBSBML_SEV_ERROR:
            errors.append(error.getMessage().strip())
        else:
            logger.warning("%s: %s", source, error.getMessage().strip())
    if errors:
        raise ModelReadError(source, errors)

    sbml_model = document.getModel()
    if sbml_model is None:
        raise ModelReadError(source, ["document contains no model"])

    model = Model(
        id=sbml_model.getId(),
        name=sbml_model.getName() or None,
        compartments=tuple(_compartment(c) for c in sbml_model.getListOfCompartments()),
        species=tuple(_species(s) for s in sbml_model.getListOfSpecies()),
        reactions=tuple(_reaction(r) for r in sbml_model.getListOfReactions()),
        history=_history(sbml_model),
    )
    logger.info(
        "Read model %s from %s (%d compartments, %d species, %d reactions)",
        model.id, source, len(model.compartments), len(model.species), len(model.reactions),
    )
    return model


def _sbo_term(sbase: libsbml.SBase) -> Optional[str]:
    return sbase.getSBOTermID() if sbase.isSetSBOTerm() else None


def _units(sbase: libsbml.SBase) -> Optional[str]:
    """Label of the derived unit, None when unknown or dimensionless."""
    definition = sbase.getDerivedUnitDefinition()
    if definition is None or definition.getNumUnits() == 0:
        return None
    label = libsbml.UnitDefinition.printUnits(definition, True)
    if not label or label == "dimensionless":
        return None
    return label


def _compartment(sbml: libsbml.Compartment) -> Compartment:
    return Compartment(
        id=sbml.getId(),
        name=sbml.getName() or None,
        size=sbml.getSize() if sbml.isSetSize() else None,
        constant=sbml.getConstant(),
        sbo_term=_sbo_term(sbml),
        units=_units(sbml),
    )


def _species(sbml: libsbml.Species) -> Species:
    return Species(
        id=sbml.getId(),
        compartment=sbml.getCompartment(),
        name=sbml.getName() or None,
        initial_amount=sbml.getInitialAmount() if sbml.isSetInitialAmount() else None,
        initial_concentration=(
            sbml.getInitialConcentration() if sbml.isSetInitialConcentration() else None
        ),
        conversion_factor=sbml.getConversionFactor() if sbml.isSetConversionFactor() else None,
        sbo_term=_sbo_term(sbml),
        units=_units(sbml),
    )


def _reaction(sbml: libsbml.Reaction) -> Reaction:
    kinetic_law = None
    if sbml.isSetKineticLaw() and sbml.getKineticLaw().isSetMath():
        kinetic_law = convert_math(sbml.getKineticLaw().getMath(), sbml.getId())

    return Reaction(
        id=sbml.getId(),
        name=sbml.getName() or None,
        reactants=tuple(r.getSpecies() for r in sbml.getListOfReactants()),
        products=tuple(p.getSpecies() for p in sbml.getListOfProducts()),
        modifiers=tuple(m.getSpecies() for m in sbml.getListOfModifiers()),
        reversible=sbml.getReversible() if sbml.isSetReversible() else None,
        sbo_term=_sbo_term(sbml),
        compartment=sbml.getCompartment() if sbml.isSetCompartment() else None,
        kinetic_law=kinetic_law,
    )


def convert_math(node: libsbml.ASTNode, owner: str = "<math>") -> sp.Basic:
    """Convert a libsbml math tree into a sympy expression.

    Walks the tree directly, so user-defined function calls, piecewise
    definitions, relational and logical operators and identifiers such
    as ``lambda`` all survive without a round trip through formula text.

    Raises:
        ModelReadError: If a node has neither a known type nor a name
    """
    if node.isInteger():
        return sp.Integer(node.getInteger())
    if node.isRational():
        return sp.Rational(node.getNumerator(), node.getDenominator())
    if node.isReal():
        value = node.getReal()
        if math.isnan(value):
            return sp.nan
        if math.isinf(value):
            return sp.oo if value > 0 else -sp.oo
        return sp.Float(value)

    node_type = node.getType()
    args = [convert_math(node.getChild(i), owner) for i in range(node.getNumChildren())]

    if node_type == libsbml.AST_PLUS:
        return sp.Add(*args)
    if node_type == libsbml.AST_MINUS:
        return -args[0] if len(args) == 1 else args[0] - sp.Add(*args[1:])
    if node_type == libsbml.AST_TIMES:
        return sp.Mul(*args)
    if node_type == libsbml.AST_DIVIDE:
        return args[0] / args[1]
    if node_type in (libsbml.AST_POWER, libsbml.AST_FUNCTION_POWER):
        return sp.Pow(args[0], args[1])
    # MathML log: optional base first, base 10 when absent
    if node_type == libsbml.AST_FUNCTION_LOG:
        return sp.log(args[-1], args[0] if len(args) == 2 else 10)
    if node_type == libsbml.AST_FUNCTION_ROOT and len(args) == 1:
        return sp.sqrt(args[0])

    name = node.getName()
    if not name:
        raise ModelReadError(owner, [f"unsupported math node type {node_type}"])
    if node.isName():
        return sp.Symbol(name)
    if node.isConstant():
        return CONSTANTS.get(name, sp.Symbol(name))
    if node_type == libsbml.AST_FUNCTION:
        return sp.Function(name)(*args)
    return call_function(name, args)


def _history(sbml_model: libsbml.Model) -> Optional[ModelHistory]:
    if not sbml_model.isSetModelHistory():
        return None
    history = sbml_model.getModelHistory()
    creators = []
    for i in range(history.getNumCreators()):
        creator = history.getCreator(i)
        creators.append(Creator(
            given_name=creator.getGivenName(),
            family_name=creator.getFamilyName(),
            email=creator.getEmail(),
            organisation=creator.getOrganisation(),
        ))
    created = None
    if history.isSetCreatedDate():
        created = history.getCreatedDate().getDateAsString()
    return ModelHistory(creators=tuple(creators), created=created)
