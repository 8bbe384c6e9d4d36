"""
HTML report builder.

HTML has no native section numbering, so compartment sections and
their subsections carry explicit numbers ("1.2", "1.2.3") taken from the
run's SectionNumbering. The document title is the only <h1>.
"""

from __future__ import annotations

from sbml_reporter.build.base import (
    ANCHOR_COMPARTMENTS,
    ANCHOR_CONTENTS,
    ANCHOR_GLOSSARY,
    ANCHOR_REACTIONS,
    ANCHOR_TOP,
    Builder,
    ReportContext,
)
from sbml_reporter.config import PLACEHOLDER
from sbml_reporter.models import describe
from sbml_reporter.render.cell import Cell
from sbml_reporter.render.html import HTMLTranslator


class HTMLBuilder(Builder):
    """Builder for a single HTML page."""

    heading_offset = 1

    def __init__(self, translator: HTMLTranslator | None = None):
        super().__init__(translator or HTMLTranslator())

    def chapter_title(self, ctx: ReportContext, title: str) -> str:
        return f"{ctx.numbering.chapter} {title}"

    def section_title(self, ctx: ReportContext, title: str) -> str:
        return f"{ctx.numbering.next_section()} {title}"

    def subsection_title(self, ctx: ReportContext, title: str) -> str:
        return f"{ctx.numbering.next_subsection()} {title}"

    def create_document_head(self, ctx: ReportContext) -> str:
        t = self.translator
        parts = [
            t.initialize_document(ctx.title),
            t.heading(ctx.title, 1, ANCHOR_TOP),
        ]
        creators = [str(c) for c in ctx.model.creators if str(c)]
        if creators:
            parts.append(t.simple_text("Authors: " + ", ".join(creators)))
        if ctx.model.created:
            parts.append(t.simple_text(f"Created: {ctx.model.created}"))

        parts.append(t.heading("Contents", 2, ANCHOR_CONTENTS))
        parts.append(t.open_list(True))
        compartments = ""
        if ctx.model.compartments:
            compartments = (
                t.open_list(True)
                + "".join(t.list_entry(describe(c), c.id) for c in ctx.model.compartments)
                + t.close_list(True)
            )
        parts.append(t.list_entry("Compartments", ANCHOR_COMPARTMENTS, compartments))
        parts.append(t.list_entry_plain("Reactions", ANCHOR_REACTIONS))
        if ctx.terms:
            parts.append(t.list_entry_plain("Glossary", ANCHOR_GLOSSARY))
        parts.append(t.close_list(True))
        return "".join(parts)

    def create_document_foot(self, ctx: ReportContext) -> str:
        t = self.translator
        parts = []
        if ctx.terms:
            parts.append(self.section_heading("Glossary", 1, ANCHOR_GLOSSARY))
            parts.append(t.open_table("Systems Biology Ontology terms", 3))
            parts.append(t.table_heading("Term", "Name", "Definition"))
            for term in ctx.terms:
                parts.append(t.table_row([
                    Cell.target(term.label, term.id),
                    Cell(term.name or PLACEHOLDER),
                    Cell(term.definition or PLACEHOLDER),
                ]))
            parts.append(t.close_table())
        parts.append(t.terminate_document())
        return "".join(parts)
