"""
Core data models for SBML-Reporter.

These models are a read-only snapshot of a biochemical model. They are
filled by an ingest adapter (SBML via libsbml, or JSON) and never touch
the source file format themselves.

Design Philosophy:
- Immutable: every entity is a frozen dataclass, sequences are tuples
- Identity-bearing: each entity has a stable identifier, which is also
  its anchor in generated reports
- Optional fields are None when unset; renderers decide how to show that
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union
import json

import sympy as sp


@dataclass(frozen=True)
class Compartment:
    """A bounded region of the model containing species.

    Attributes:
        id: Unique identifier (also the report anchor)
        name: Optional human-readable name
        size: Compartment size, None if unset
        constant: Whether the size is constant
        sbo_term: Optional SBO term code
        units: Label of the derived unit of the size (e.g. "litre")
    """
    id: str
    name: Optional[str] = None
    size: Optional[float] = None
    constant: bool = True
    sbo_term: Optional[str] = None
    units: Optional[str] = None

    @classmethod
    def from_dict(cls, d: dict) -> Compartment:
        return cls(
            id=d["id"],
            name=d.get("name"),
            size=d.get("size"),
            constant=d.get("constant", True),
            sbo_term=d.get("sbo_term"),
            units=d.get("units"),
        )


@dataclass(frozen=True)
class Species:
    """A molecular entity located in exactly one compartment."""
    id: str
    compartment: str
    name: Optional[str] = None
    initial_amount: Optional[float] = None
    initial_concentration: Optional[float] = None
    conversion_factor: Optional[str] = None
    sbo_term: Optional[str] = None
    units: Optional[str] = None

    @classmethod
    def from_dict(cls, d: dict) -> Species:
        return cls(
            id=d["id"],
            compartment=d["compartment"],
            name=d.get("name"),
            initial_amount=d.get("initial_amount"),
            initial_concentration=d.get("initial_concentration"),
            conversion_factor=d.get("conversion_factor"),
            sbo_term=d.get("sbo_term"),
            units=d.get("units"),
        )


@dataclass(frozen=True)
class Reaction:
    """A transformation of reactants into products.

    Participants are species identifiers. Modifiers take part in the
    reaction without being consumed or produced.

    Attributes:
        id: Unique identifier (also the report anchor)
        reactants: Identifiers of consumed species
        products: Identifiers of produced species
        modifiers: Identifiers of modifying species
        reversible: Reversibility flag, None if unset
        kinetic_law: Rate expression as a sympy expression tree
        compartment: Optional compartment the reaction is declared in
    """
    id: str
    name: Optional[str] = None
    reactants: tuple[str, ...] = ()
    products: tuple[str, ...] = ()
    modifiers: tuple[str, ...] = ()
    reversible: Optional[bool] = None
    sbo_term: Optional[str] = None
    compartment: Optional[str] = None
    kinetic_law: Optional[sp.Expr] = None

    @property
    def participants(self) -> tuple[str, ...]:
        """Reactants and products, the species that decide compartment membership."""
        return self.reactants + self.products

    @classmethod
    def from_dict(cls, d: dict) -> Reaction:
        from sbml_reporter.formula import parse_formula
        law = d.get("kinetic_law")
        return cls(
            id=d["id"],
            name=d.get("name"),
            reactants=tuple(d.get("reactants", ())),
            products=tuple(d.get("products", ())),
            modifiers=tuple(d.get("modifiers", ())),
            reversible=d.get("reversible"),
            sbo_term=d.get("sbo_term"),
            compartment=d.get("compartment"),
            kinetic_law=parse_formula(law) if law else None,
        )


@dataclass(frozen=True)
class Creator:
    """One author entry of the model history."""
    given_name: str = ""
    family_name: str = ""
    email: str = ""
    organisation: str = ""

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.given_name, self.family_name) if p)

    def __str__(self) -> str:
        return self.full_name or self.email or self.organisation

    @classmethod
    def from_dict(cls, d: dict) -> Creator:
        return cls(
            given_name=d.get("given_name", ""),
            family_name=d.get("family_name", ""),
            email=d.get("email", ""),
            organisation=d.get("organisation", ""),
        )


@dataclass(frozen=True)
class ModelHistory:
    """Authorship metadata of a model."""
    creators: tuple[Creator, ...] = ()
    created: Optional[str] = None  # W3C date-time string

    @classmethod
    def from_dict(cls, d: dict) -> ModelHistory:
        return cls(
            creators=tuple(Creator.from_dict(c) for c in d.get("creators", [])),
            created=d.get("created"),
        )


@dataclass(frozen=True)
class Model:
    """A complete biochemical model ready for reporting.

    Entities keep the order of the source model; reports list them in
    that order.
    """
    id: str
    name: Optional[str] = None
    compartments: tuple[Compartment, ...] = ()
    species: tuple[Species, ...] = ()
    reactions: tuple[Reaction, ...] = ()
    history: Optional[ModelHistory] = None
    _species_by_id: dict[str, Species] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        object.__setattr__(self, "_species_by_id", {s.id: s for s in self.species})

    @property
    def creators(self) -> tuple[Creator, ...]:
        return self.history.creators if self.history else ()

    @property
    def created(self) -> Optional[str]:
        return self.history.created if self.history else None

    def get_species(self, species_id: str) -> Optional[Species]:
        return self._species_by_id.get(species_id)

    def get_compartment(self, compartment_id: str) -> Optional[Compartment]:
        for compartment in self.compartments:
            if compartment.id == compartment_id:
                return compartment
        return None

    @classmethod
    def from_dict(cls, d: dict) -> Model:
        history = d.get("history")
        return cls(
            id=d["id"],
            name=d.get("name"),
            compartments=tuple(Compartment.from_dict(c) for c in d.get("compartments", [])),
            species=tuple(Species.from_dict(s) for s in d.get("species", [])),
            reactions=tuple(Reaction.from_dict(r) for r in d.get("reactions", [])),
            history=ModelHistory.from_dict(history) if history else None,
        )

    @classmethod
    def from_json(cls, json_str: str) -> Model:
        """Deserialize a model from a JSON string."""
        return cls.from_dict(json.loads(json_str))

    def summary(self) -> str:
        """Return a human-readable summary of the model."""
        return (
            f"Model '{describe(self)}'\n"
            f"  Compartments: {len(self.compartments)}\n"
            f"  Species: {len(self.species)}\n"
            f"  Reactions: {len(self.reactions)}"
        )


Entity = Union[Model, Compartment, Species, Reaction]


def describe(entity: Entity) -> str:
    """Display text of an entity: its name, or its identifier when unnamed."""
    return entity.name if entity.name else entity.id
