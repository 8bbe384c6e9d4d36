"""
LaTeX report builder.

Numbering and the table of contents are left to LaTeX. Glossary
entries must be defined before \\begin{document}, so the head emits one
\\newglossaryentry per referenced SBO term and the foot prints the
glossary.
"""

from __future__ import annotations

from sbml_reporter.build.base import Builder, ReportContext
from sbml_reporter.ontology import OntologyTerm
from sbml_reporter.render.latex import LaTeXTranslator


class LaTeXBuilder(Builder):
    """Builder for a KOMA-Script report."""

    def __init__(self, translator: LaTeXTranslator | None = None):
        super().__init__(translator or LaTeXTranslator())

    def chapter_title(self, ctx: ReportContext, title: str) -> str:
        return title

    def section_title(self, ctx: ReportContext, title: str) -> str:
        return title

    def subsection_title(self, ctx: ReportContext, title: str) -> str:
        return title

    def create_document_head(self, ctx: ReportContext) -> str:
        t = self.translator
        parts = [t.preamble()]

        if ctx.terms:
            parts.append("\\makeglossaries\n")
            parts.extend(
                t.glossary_entry(term.id, term.label, glossary_description(term))
                for term in ctx.terms
            )

        creators = " \\and ".join(t.mask(str(c)) for c in ctx.model.creators if str(c))
        parts.append(f"\\author{{{creators}}}\n")
        created = t.mask(ctx.model.created) if ctx.model.created else ""
        parts.append(f"\\date{{{created}}}\n")
        parts.append(t.initialize_document(ctx.title))
        return "".join(parts)

    def create_document_foot(self, ctx: ReportContext) -> str:
        parts = ["\\clearpage\n"]
        if ctx.terms:
            parts.append("\\printglossary\n")
        parts.append(self.translator.terminate_document())
        return "".join(parts)


def glossary_description(term: OntologyTerm) -> str:
    """Glossary text "name. definition", or the code for unknown terms."""
    name = term.name.rstrip(".")
    return ". ".join(p for p in (name, term.definition) if p) or term.label
