"""
Tests for reading model files.

Tests cover:
- The JSON model format and its error cases
- Reader selection by file suffix
- SBML conversion through python-libsbml
"""

import json

import pytest
import sympy as sp

from sbml_reporter.exceptions import ModelReadError
from sbml_reporter.ingest import load_model, load_model_json


class TestJSONModel:
    """Test the JSON model reader."""

    def test_load(self, glycolysis_json):
        """Test reading a complete model."""
        model = load_model_json(glycolysis_json)

        assert model.id == "glycolysis"
        assert len(model.species) == 4
        assert model.reactions[0].kinetic_law is not None

    def test_missing_file(self, tmp_path):
        with pytest.raises(ModelReadError):
            load_model_json(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        """Test that malformed JSON is reported as a read error."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ModelReadError, match="invalid JSON"):
            load_model_json(path)

    def test_missing_id(self, tmp_path):
        """Test that a model without id is rejected."""
        path = tmp_path / "noid.json"
        path.write_text(json.dumps({"compartments": []}), encoding="utf-8")

        with pytest.raises(ModelReadError):
            load_model_json(path)

    def test_species_without_compartment(self, tmp_path):
        path = tmp_path / "species.json"
        path.write_text(json.dumps({"id": "m", "species": [{"id": "s1"}]}), encoding="utf-8")

        with pytest.raises(ModelReadError):
            load_model_json(path)

    def test_bad_kinetic_law(self, tmp_path):
        """Test that an unparseable kinetic law is a read error."""
        path = tmp_path / "law.json"
        path.write_text(
            json.dumps({"id": "m", "reactions": [{"id": "r1", "kinetic_law": "k * ("}]}),
            encoding="utf-8",
        )
        with pytest.raises(ModelReadError):
            load_model_json(path)


class TestLoadModel:
    """Test reader dispatch."""

    def test_json_suffix(self, glycolysis_json):
        assert load_model(glycolysis_json).id == "glycolysis"

    def test_missing_sbml_file(self, tmp_path):
        """Test that a missing SBML file is a read error."""
        pytest.importorskip("libsbml")
        with pytest.raises(ModelReadError, match="file not found"):
            load_model(tmp_path / "missing.xml")


class TestSBML:
    """Test SBML conversion."""

    @pytest.fixture
    def libsbml(self):
        return pytest.importorskip("libsbml")

    @pytest.fixture
    def sbml_file(self, libsbml, tmp_path):
        """A small L3V2 model: A -> B in cell, catalysed by E."""
        document = libsbml.SBMLDocument(3, 2)
        model = document.createModel()
        model.setId("toy")
        model.setName("Toy model")

        compartment = model.createCompartment()
        compartment.setId("cell")
        compartment.setName("Cell")
        compartment.setSize(1.5)
        compartment.setSpatialDimensions(3)
        compartment.setUnits("litre")
        compartment.setConstant(True)
        compartment.setSBOTerm(290)

        for species_id, amount in (("A", 10.0), ("B", None), ("E", 1.0)):
            species = model.createSpecies()
            species.setId(species_id)
            species.setCompartment("cell")
            species.setHasOnlySubstanceUnits(True)
            species.setBoundaryCondition(False)
            species.setConstant(False)
            if amount is not None:
                species.setInitialAmount(amount)

        parameter = model.createParameter()
        parameter.setId("k1")
        parameter.setValue(0.1)
        parameter.setConstant(True)

        reaction = model.createReaction()
        reaction.setId("r1")
        reaction.setReversible(False)
        reaction.setSBOTerm(176)
        reactant = reaction.createReactant()
        reactant.setSpecies("A")
        reactant.setStoichiometry(1)
        reactant.setConstant(True)
        product = reaction.createProduct()
        product.setSpecies("B")
        product.setStoichiometry(1)
        product.setConstant(True)
        modifier = reaction.createModifier()
        modifier.setSpecies("E")
        law = reaction.createKineticLaw()
        law.setMath(libsbml.parseL3Formula("k1 * E * A"))

        path = tmp_path / "toy.xml"
        assert libsbml.writeSBMLToFile(document, str(path)) == 1
        return path

    def test_parse(self, sbml_file):
        """Test conversion of compartments, species and reactions."""
        from sbml_reporter.ingest.sbml import parse_sbml

        model = parse_sbml(sbml_file)

        assert (model.id, model.name) == ("toy", "Toy model")
        cell = model.compartments[0]
        assert (cell.id, cell.name, cell.size, cell.constant) == ("cell", "Cell", 1.5, True)
        assert cell.sbo_term == "SBO:0000290"
        assert "litre" in cell.units

        assert [s.id for s in model.species] == ["A", "B", "E"]
        assert model.species[0].initial_amount == 10.0
        assert model.species[1].initial_amount is None
        assert model.species[1].name is None

        reaction = model.reactions[0]
        assert reaction.reactants == ("A",)
        assert reaction.products == ("B",)
        assert reaction.modifiers == ("E",)
        assert reaction.reversible is False
        assert reaction.sbo_term == "SBO:0000176"
        assert reaction.kinetic_law == sp.Symbol("k1") * sp.Symbol("E") * sp.Symbol("A")

    def test_kinetic_laws_beyond_arithmetic(self, libsbml, tmp_path):
        """Test user-defined functions, piecewise and logical operators in laws."""
        from sbml_reporter.ingest.sbml import parse_sbml

        document = libsbml.SBMLDocument(3, 2)
        model = document.createModel()
        model.setId("laws")
        compartment = model.createCompartment()
        compartment.setId("cell")
        compartment.setConstant(True)
        species = model.createSpecies()
        species.setId("A")
        species.setCompartment("cell")
        species.setHasOnlySubstanceUnits(False)
        species.setBoundaryCondition(False)
        species.setConstant(False)
        for parameter_id in ("k1", "lambda"):
            parameter = model.createParameter()
            parameter.setId(parameter_id)
            parameter.setConstant(True)
        function = model.createFunctionDefinition()
        function.setId("f")
        function.setMath(libsbml.parseL3Formula("lambda(x, y, x * y)"))

        laws = {
            "r1": "f(A, k1)",
            "r2": "piecewise(k1, and(gt(A, 0), lt(A, 10)), 0)",
        }
        for reaction_id, formula in laws.items():
            reaction = model.createReaction()
            reaction.setId(reaction_id)
            reaction.setReversible(False)
            reactant = reaction.createReactant()
            reactant.setSpecies("A")
            reactant.setStoichiometry(1)
            reactant.setConstant(True)
            math = libsbml.parseL3Formula(formula)
            assert math is not None, formula
            reaction.createKineticLaw().setMath(math)

        # lambda is a formula keyword, so r3 is built node by node
        product = libsbml.ASTNode(libsbml.AST_TIMES)
        for name in ("lambda", "A"):
            child = libsbml.ASTNode(libsbml.AST_NAME)
            child.setName(name)
            product.addChild(child)
        reaction = model.createReaction()
        reaction.setId("r3")
        reaction.setReversible(False)
        reaction.createKineticLaw().setMath(product)

        path = tmp_path / "laws.xml"
        assert libsbml.writeSBMLToFile(document, str(path)) == 1

        A, k1 = sp.symbols("A k1")
        r1, r2, r3 = parse_sbml(path).reactions
        assert r1.kinetic_law == sp.Function("f")(A, k1)
        assert r2.kinetic_law == sp.Piecewise((k1, sp.And(A > 0, A < 10)), (0, True))
        assert r3.kinetic_law == sp.Symbol("lambda") * A

    def test_load_model_reads_xml(self, sbml_file):
        assert load_model(sbml_file).id == "toy"

    def test_invalid_document(self, libsbml, tmp_path):
        """Test that XML errors surface as ModelReadError."""
        path = tmp_path / "broken.xml"
        path.write_text("<sbml><model", encoding="utf-8")

        with pytest.raises(ModelReadError):
            load_model(path)

    def test_parse_string(self, libsbml, sbml_file):
        from sbml_reporter.ingest.sbml import parse_sbml_string

        model = parse_sbml_string(sbml_file.read_text(encoding="utf-8"))
        assert [r.id for r in model.reactions] == ["r1"]
