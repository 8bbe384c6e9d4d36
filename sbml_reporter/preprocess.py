"""
Model indexing ahead of rendering.

The preprocessor walks the model once and produces every lookup table
the builders need:
- species grouped by the compartment they declare
- reactions grouped by the compartments of their reactants and products
  (a reaction can belong to several compartments)
- the sorted, duplicate-free set of SBO terms used anywhere in the model
- the order in which reactions get their single detail block

Rendering never traverses the model by itself; it reads this index.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sbml_reporter.exceptions import UnresolvedReferenceError
from sbml_reporter.models import Model, Reaction, Species
from sbml_reporter.ontology import OntologyTerm, TermCatalog, get_default_catalog, normalize_sbo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelIndex:
    """Read-only lookup tables for one report run.

    Attributes:
        species_by_compartment: Compartment id -> species in model order
        reactions_by_compartment: Compartment id -> reactions in model order
        terms: Referenced ontology terms, sorted by code
        reaction_order: Every reaction exactly once, grouped by the first
            compartment that owns it, unowned reactions last
    """
    species_by_compartment: dict[str, tuple[Species, ...]]
    reactions_by_compartment: dict[str, tuple[Reaction, ...]]
    terms: tuple[OntologyTerm, ...] = ()
    reaction_order: tuple[Reaction, ...] = ()
    _terms_by_code: dict[str, OntologyTerm] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        object.__setattr__(self, "_terms_by_code", {t.id: t for t in self.terms})

    def species_in(self, compartment_id: str) -> tuple[Species, ...]:
        return self.species_by_compartment.get(compartment_id, ())

    def reactions_in(self, compartment_id: str) -> tuple[Reaction, ...]:
        return self.reactions_by_compartment.get(compartment_id, ())

    def term(self, code: Optional[str]) -> Optional[OntologyTerm]:
        """Canonical term of an SBO code, None for unset codes."""
        if not code:
            return None
        term = self._terms_by_code.get(code)
        if term is None:
            term = self._terms_by_code.get(normalize_sbo(code))
        return term


class Preprocessor:
    """Builds a ModelIndex from a model.

    Usage:
        index = Preprocessor().run(model)
        for species in index.species_in("cytosol"):
            ...
    """

    def __init__(self, catalog: TermCatalog | None = None):
        self.catalog = catalog if catalog is not None else get_default_catalog()

    def run(self, model: Model) -> ModelIndex:
        species_compartment = self._locate_species(model)
        species_by_compartment = self._group_species(model)
        reactions_by_compartment = self._group_reactions(model, species_compartment)
        index = ModelIndex(
            species_by_compartment=species_by_compartment,
            reactions_by_compartment=reactions_by_compartment,
            terms=self._collect_terms(model),
            reaction_order=self._order_reactions(model, reactions_by_compartment),
        )
        logger.debug(
            "Indexed model %s: %d compartments, %d species, %d reactions, %d terms",
            model.id, len(model.compartments), len(model.species),
            len(model.reactions), len(index.terms),
        )
        return index

    def _locate_species(self, model: Model) -> dict[str, str]:
        """Species id -> compartment id, checking every compartment exists."""
        compartment_ids = {c.id for c in model.compartments}
        located = {}
        for species in model.species:
            if species.compartment not in compartment_ids:
                raise UnresolvedReferenceError(species.id, species.compartment, "compartment")
            located[species.id] = species.compartment
        return located

    def _group_species(self, model: Model) -> dict[str, tuple[Species, ...]]:
        groups: dict[str, list[Species]] = {c.id: [] for c in model.compartments}
        for species in model.species:
            groups[species.compartment].append(species)
        return {cid: tuple(members) for cid, members in groups.items()}

    def _group_reactions(
        self,
        model: Model,
        species_compartment: dict[str, str],
    ) -> dict[str, tuple[Reaction, ...]]:
        compartment_ids = {c.id for c in model.compartments}
        owners: dict[str, set[str]] = {}

        for reaction in model.reactions:
            for species_id in reaction.participants + reaction.modifiers:
                if species_id not in species_compartment:
                    raise UnresolvedReferenceError(reaction.id, species_id)
            if reaction.compartment and reaction.compartment not in compartment_ids:
                raise UnresolvedReferenceError(reaction.id, reaction.compartment, "compartment")
            # Modifiers do not decide membership
            owners[reaction.id] = {species_compartment[s] for s in reaction.participants}

        return {
            c.id: tuple(r for r in model.reactions if c.id in owners[r.id])
            for c in model.compartments
        }

    def _order_reactions(
        self,
        model: Model,
        reactions_by_compartment: dict[str, tuple[Reaction, ...]],
    ) -> tuple[Reaction, ...]:
        ordered: list[Reaction] = []
        seen: set[str] = set()
        for compartment in model.compartments:
            for reaction in reactions_by_compartment[compartment.id]:
                if reaction.id not in seen:
                    seen.add(reaction.id)
                    ordered.append(reaction)
        for reaction in model.reactions:
            if reaction.id not in seen:
                seen.add(reaction.id)
                ordered.append(reaction)
        return tuple(ordered)

    def _collect_terms(self, model: Model) -> tuple[OntologyTerm, ...]:
        terms: set[OntologyTerm] = set()
        for entity in (*model.compartments, *model.species, *model.reactions):
            if not entity.sbo_term:
                continue
            try:
                terms.add(self.catalog.resolve(entity.sbo_term))
            except ValueError as e:
                raise UnresolvedReferenceError(entity.id, entity.sbo_term, "SBO term") from e
        return tuple(sorted(terms))


def preprocess(model: Model, catalog: TermCatalog | None = None) -> ModelIndex:
    """Index a model with the given (or default) term catalog."""
    return Preprocessor(catalog).run(model)
