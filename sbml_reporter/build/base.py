"""
Document assembly shared by all output formats.

A builder decides what a report says and in which order: title block,
contents, compartment overview, one section per compartment, reaction
details and glossary. It speaks only through its Translator, so the same
composition code produces HTML and LaTeX alike. Format subclasses add
the document head and foot and the way sections are numbered.

Cross-references use the model identifier of each entity as its anchor:
- compartment: the heading of its section
- species: its name cell in the species table of its compartment
- reaction: the heading of its detail block in the reactions section
- SBO term: its glossary entry

Design Philosophy:
- Builders hold no per-document state; numbering lives in the
  ReportContext created for each run, so one builder can render any
  number of reports
- Raw model text is masked exactly once, by the translator call that
  embeds it
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Union

from sbml_reporter.config import PLACEHOLDER, ROUND_PRECISION
from sbml_reporter.models import Compartment, Model, Reaction, Species, describe
from sbml_reporter.ontology import OntologyTerm
from sbml_reporter.preprocess import ModelIndex
from sbml_reporter.render.base import Translator
from sbml_reporter.render.cell import Cell


# Fixed anchors of structural sections
ANCHOR_TOP = "top"
ANCHOR_CONTENTS = "contentTable"
ANCHOR_COMPARTMENTS = "sectionCompartments"
ANCHOR_REACTIONS = "reactions"
ANCHOR_GLOSSARY = "glossary"


@dataclass
class SectionNumbering:
    """Section counters of one report.

    Compartment sections are numbered ``chapter.section`` and their
    subsections ``chapter.section.subsection``.
    """
    chapter: int = 1
    section: int = 0
    subsection: int = 0

    def next_section(self) -> str:
        self.section += 1
        self.subsection = 0
        return f"{self.chapter}.{self.section}"

    def next_subsection(self) -> str:
        self.subsection += 1
        return f"{self.chapter}.{self.section}.{self.subsection}"


@dataclass
class ReportContext:
    """Everything a builder needs for one report run."""
    model: Model
    index: ModelIndex
    numbering: SectionNumbering = field(default_factory=SectionNumbering)

    @property
    def terms(self) -> tuple[OntologyTerm, ...]:
        return self.index.terms

    @property
    def title(self) -> str:
        return describe(self.model)


def format_participants(species_ids: Sequence[str]) -> str:
    """Join participant ids, one per line, comma after all but the last.

    Example:
        >>> format_participants(["s1", "s2"])
        's1,\\ns2'
        >>> format_participants([])
        '-'
    """
    if not species_ids:
        return PLACEHOLDER
    return ",\n".join(species_ids)


class Builder(ABC):
    """Abstract base class for report builders.

    Subclasses implement the document head and foot and the numbering
    hooks; the sections in between are composed here.
    """

    # Added to every logical heading level (1 = chapter)
    heading_offset = 0

    def __init__(self, translator: Translator):
        self.translator = translator

    @property
    def name(self) -> str:
        return self.translator.name

    @property
    def file_extension(self) -> str:
        return self.translator.file_extension

    # ------------------------------------------------------------------
    # Format-specific parts

    @abstractmethod
    def create_document_head(self, ctx: ReportContext) -> str:
        """Title block, authors, date and contents."""
        pass

    @abstractmethod
    def create_document_foot(self, ctx: ReportContext) -> str:
        """Glossary and closing markup."""
        pass

    @abstractmethod
    def section_title(self, ctx: ReportContext, title: str) -> str:
        """Title of the next compartment section."""
        pass

    @abstractmethod
    def subsection_title(self, ctx: ReportContext, title: str) -> str:
        """Title of the next subsection of the current compartment."""
        pass

    @abstractmethod
    def chapter_title(self, ctx: ReportContext, title: str) -> str:
        """Title of the compartments chapter."""
        pass

    # ------------------------------------------------------------------
    # Sections

    def create_compartment_overview(self, ctx: ReportContext) -> str:
        count = len(ctx.model.compartments)
        return (
            self.section_heading(self.chapter_title(ctx, "Compartments"), 1, ANCHOR_COMPARTMENTS)
            + self.translator.simple_text(f"This model contains {count} compartment(s).")
            + self.table_of_compartments(ctx)
        )

    def create_single_compartment_section(self, ctx: ReportContext, compartment: Compartment) -> str:
        """Section heading, information table and the linked lists of members."""
        label = describe(compartment)
        return (
            self.section_heading(
                self.section_title(ctx, f"Compartment {label}"), 2, compartment.id
            )
            + self.compartment_information_table(ctx, compartment)
            + self.section_heading(self.subsection_title(ctx, f"List of Species in {label}"), 3)
            + self.linked_list(ctx.index.species_in(compartment.id))
            + self.section_heading(self.subsection_title(ctx, f"List of Reactions in {label}"), 3)
            + self.linked_list(ctx.index.reactions_in(compartment.id))
        )

    def create_species_section_of_compartment(self, ctx: ReportContext, compartment: Compartment) -> str:
        return (
            self.section_heading(self.subsection_title(ctx, "Species Definitions"), 3)
            + self.table_of_species(ctx, compartment)
        )

    def create_reaction_section_of_compartment(self, ctx: ReportContext, compartment: Compartment) -> str:
        return (
            self.section_heading(self.subsection_title(ctx, "Reactions Definitions"), 3)
            + self.table_of_reactions(ctx, compartment)
        )

    def create_section_of_reactions(self, ctx: ReportContext) -> str:
        """One detail block per reaction, grouped by owning compartment."""
        reactions = ctx.index.reaction_order
        parts = [
            self.section_heading("Reactions", 1, ANCHOR_REACTIONS),
            self.translator.simple_text(f"This model contains {len(reactions)} reaction(s)."),
        ]
        parts.extend(self.reaction_details(ctx, r) for r in reactions)
        return "".join(parts)

    # ------------------------------------------------------------------
    # Shared composition

    def section_heading(self, text: str, level: int, anchor: str | None = None) -> str:
        return self.translator.heading(text, level + self.heading_offset, anchor)

    def linked_list(self, entities: Iterable[Union[Species, Reaction, Compartment]]) -> str:
        """Bulleted list of entity names linking to their anchors."""
        entities = list(entities)
        if not entities:
            return self.translator.simple_text(PLACEHOLDER)
        t = self.translator
        return (
            t.open_list(False)
            + "".join(t.list_entry(describe(e), e.id) for e in entities)
            + t.close_list(False)
        )

    def compartment_information_table(self, ctx: ReportContext, compartment: Compartment) -> str:
        t = self.translator
        size_label = f"Size [{compartment.units}]" if compartment.units else "Size"
        rows = [
            [Cell("Name", is_heading=True), Cell(describe(compartment))],
            [Cell(size_label, is_heading=True), self.number_cell(compartment.size)],
            [Cell("Constant", is_heading=True), Cell.markup(t.true_false_mask(compartment.constant))],
        ]
        if compartment.sbo_term:
            rows.append([Cell("SBO Term", is_heading=True), self.term_cell(ctx, compartment.sbo_term)])
        return (
            t.open_table(f"Information on compartment {describe(compartment)}", 2)
            + "".join(t.table_row(row) for row in rows)
            + t.close_table()
        )

    def table_of_compartments(self, ctx: ReportContext) -> str:
        t = self.translator
        if not ctx.model.compartments:
            return t.simple_text(PLACEHOLDER)
        rows = [
            [
                Cell.link(describe(c), c.id),
                Cell(str(len(ctx.index.species_in(c.id)))),
                Cell(str(len(ctx.index.reactions_in(c.id)))),
            ]
            for c in ctx.model.compartments
        ]
        return (
            t.open_table("Compartments of the model", 3)
            + t.table_heading("Compartment", "Species", "Reactions")
            + "".join(t.table_row(row) for row in rows)
            + t.close_table()
        )

    def table_of_species(self, ctx: ReportContext, compartment: Compartment) -> str:
        t = self.translator
        members = ctx.index.species_in(compartment.id)
        if not members:
            return t.simple_text(PLACEHOLDER)
        rows = [
            [
                Cell.target(describe(s), s.id),
                self.number_cell(s.initial_amount, s.units),
                self.number_cell(s.initial_concentration, s.units),
                Cell(s.conversion_factor or PLACEHOLDER),
                self.term_cell(ctx, s.sbo_term),
                self.compartment_cell(ctx, s.compartment),
            ]
            for s in members
        ]
        return (
            t.open_table(f"Species in compartment {describe(compartment)}", 6)
            + t.table_heading(
                "Name", "Initial Amount", "Initial Concentration",
                "Conversion Factor", "SBO Term", "Compartment",
            )
            + "".join(t.table_row(row) for row in rows)
            + t.close_table()
        )

    def table_of_reactions(self, ctx: ReportContext, compartment: Compartment) -> str:
        t = self.translator
        members = ctx.index.reactions_in(compartment.id)
        if not members:
            return t.simple_text(PLACEHOLDER)
        rows = [
            [
                Cell.link(describe(r), r.id),
                self.flag_cell(r.reversible),
                Cell(format_participants(r.reactants)),
                Cell(format_participants(r.products)),
                self.term_cell(ctx, r.sbo_term),
                self.compartment_cell(ctx, r.compartment),
            ]
            for r in members
        ]
        return (
            t.open_table(f"Reactions in compartment {describe(compartment)}", 6)
            + t.table_heading(
                "Name", "Reversible", "Reactants", "Products", "SBO Term", "Compartment",
            )
            + "".join(t.table_row(row) for row in rows)
            + t.close_table()
        )

    def reaction_details(self, ctx: ReportContext, reaction: Reaction) -> str:
        """Detail block of one reaction; the reaction's anchor target."""
        t = self.translator
        entries = []
        if reaction.name:
            entries.append(("Name", Cell(reaction.name)))
        if reaction.reversible is not None:
            entries.append(("Reversible", Cell.markup(t.true_false_mask(reaction.reversible))))
        if reaction.modifiers:
            entries.append(("Modifiers", Cell(format_participants(reaction.modifiers))))
        if reaction.reactants:
            entries.append(("Reactants", Cell(format_participants(reaction.reactants))))
        if reaction.products:
            entries.append(("Products", Cell(format_participants(reaction.products))))
        if reaction.sbo_term:
            entries.append(("SBO Term", self.term_cell(ctx, reaction.sbo_term)))
        if reaction.compartment:
            entries.append(("Compartment", self.compartment_cell(ctx, reaction.compartment)))

        parts = [
            self.section_heading(describe(reaction), 2, reaction.id),
            self.section_heading("Basic Information", 3),
        ]
        if entries:
            parts.append(t.listing_begin())
            for label, value in entries:
                parts.append(t.new_entry(t.table_row_inline([Cell(label, is_heading=True), value])))
            parts.append(t.listing_end())
        else:
            parts.append(t.simple_text(PLACEHOLDER))

        if reaction.kinetic_law is not None:
            parts.append(self.section_heading("Kinetic Law", 3))
            parts.append(t.kinetic_law(reaction.kinetic_law) + "\n")
        return "".join(parts)

    # ------------------------------------------------------------------
    # Cells

    def number_cell(self, value: Optional[float], units: Optional[str] = None) -> Cell:
        """Rounded value with optional unit label, or the placeholder."""
        if value is None:
            return Cell(PLACEHOLDER)
        text = self.translator.round(value, ROUND_PRECISION)
        if units:
            text += " " + self.translator.mask(units)
        return Cell.markup(text)

    def flag_cell(self, value: Optional[bool]) -> Cell:
        if value is None:
            return Cell(PLACEHOLDER)
        return Cell.markup(self.translator.true_false_mask(value))

    def term_cell(self, ctx: ReportContext, code: Optional[str]) -> Cell:
        term = ctx.index.term(code)
        if term is None:
            return Cell(PLACEHOLDER)
        return Cell.markup(self.translator.glossary_link(term.label, term.id))

    def compartment_cell(self, ctx: ReportContext, compartment_id: Optional[str]) -> Cell:
        if not compartment_id:
            return Cell(PLACEHOLDER)
        compartment = ctx.model.get_compartment(compartment_id)
        label = describe(compartment) if compartment else compartment_id
        return Cell.link(label, compartment_id)


def create_builder(fmt: str, **kwargs) -> Builder:
    """Factory function to create a builder by format name.

    Args:
        fmt: Format name ('html', 'latex') or alias ('htm', 'tex')
        **kwargs: Passed to the format's translator

    Returns:
        Builder wrapping a freshly constructed translator
    """
    from sbml_reporter.render.base import create_translator

    translator = create_translator(fmt, **kwargs)
    if translator.name == "html":
        from sbml_reporter.build.html import HTMLBuilder
        return HTMLBuilder(translator)
    else:
        from sbml_reporter.build.latex import LaTeXBuilder
        return LaTeXBuilder(translator)
