"""
LaTeX output format.

Produces a KOMA-Script report. Numbering of chapters and sections is
left to LaTeX, cross-references use hyperref's hypertarget/hyperlink
pairs, glossary entries use the glossaries package and numbers are
typeset with siunitx.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import sympy as sp

from sbml_reporter.config import LATEX_MASKING_TABLE
from sbml_reporter.render.base import Number, Translator, round_half_up
from sbml_reporter.render.cell import Cell


DOCUMENT_CLASS = r"\documentclass[a4paper,11pt]{scrreprt}"

# (options, package) in load order; hyperref and cleveref must come late
PACKAGES = [
    ("utf8", "inputenc"),
    ("english", "babel"),
    ("scaled=0.9", "helvet"),
    ("", "amsmath"),
    ("", "amssymb"),
    ("", "float"),
    ("", "mathptmx"),
    ("", "booktabs"),
    ("", "longtable"),
    ("", "siunitx"),
    ("", "hyperref"),
    ("", "cleveref"),
    ("toc", "glossaries"),
]

SECTION_COMMANDS = {
    1: "chapter",
    2: "section",
    3: "subsection",
    4: "subsubsection",
}

CHECKED_BOX = r"\makebox[0pt][l]{$\square$}\raisebox{.15ex}{\hspace{0.1em}$\checkmark$}"
UNCHECKED_BOX = r"$\square$"

# Total width shared by the columns of a long table
TABLE_WIDTH = 0.9


class LaTeXTranslator(Translator):
    """Translator producing a LaTeX document for pdflatex."""

    @property
    def name(self) -> str:
        return "latex"

    @property
    def file_extension(self) -> str:
        return ".tex"

    @property
    def default_masking_table(self) -> Path:
        return LATEX_MASKING_TABLE

    def preamble(self) -> str:
        """Document class and package declarations."""
        lines = [DOCUMENT_CLASS]
        for options, package in PACKAGES:
            opts = f"[{options}]" if options else ""
            lines.append(f"\\usepackage{opts}{{{package}}}")
        return "\n".join(lines) + "\n"

    def initialize_document(self, title: str | None = None) -> str:
        head = f"\\title{{{self.mask(title)}}}\n" if title else ""
        return head + "\\begin{document}\n\\maketitle\n\\tableofcontents\n"

    def terminate_document(self) -> str:
        return "\\end{document}\n"

    def heading(self, text: str, level: int, anchor: str | None = None) -> str:
        command = SECTION_COMMANDS.get(level, "paragraph")
        result = f"\\{command}{{{self.mask(text)}}}"
        if anchor:
            result += f"\\hypertarget{{{anchor}}}{{}}"
        return result + "\n"

    def simple_text(self, text: str) -> str:
        return self.mask(text) + "\n\n"

    # Tables

    def open_table(self, caption: str, num_columns: int) -> str:
        width = TABLE_WIDTH / max(num_columns, 1)
        columns = "".join(f"p{{{width:.2f}\\linewidth}}" for _ in range(num_columns))
        return (
            f"\\begin{{longtable}}{{@{{}}{columns}@{{}}}}\n"
            f"\\caption{{{self.mask(caption)}}} \\\\\n"
            "\\toprule\n"
        )

    def table_heading(self, *names: str) -> str:
        return self.table_row([Cell(name, is_heading=True) for name in names]) + "\\midrule\n"

    def table_row(self, cells: Sequence[Cell]) -> str:
        return " & ".join(self.cell(c) for c in cells) + " \\\\\n"

    def table_row_inline(self, cells: Sequence[Cell]) -> str:
        return self.join_inline(cells, [self.cell(c) for c in cells])

    def close_table(self) -> str:
        return "\\bottomrule\n\\end{longtable}\n"

    # Lists

    def open_list(self, ordered: bool) -> str:
        return "\\begin{enumerate}\n" if ordered else "\\begin{itemize}\n"

    def list_entry(self, text: str, anchor: str | None = None, sublist: str = "") -> str:
        content = self.mask(text)
        if anchor:
            content = f"\\hyperlink{{{anchor}}}{{{content}}}"
        return f"\\item {content}\n{sublist}"

    def list_entry_plain(self, text: str, anchor: str) -> str:
        return f"\\item[] \\hyperlink{{{anchor}}}{{{self.mask(text)}}}\n"

    def close_list(self, ordered: bool) -> str:
        return "\\end{enumerate}\n" if ordered else "\\end{itemize}\n"

    def new_entry(self, text: str) -> str:
        return f"\\item {text}\n"

    def listing_begin(self) -> str:
        return "\\begin{description}\n"

    def listing_end(self) -> str:
        return "\\end{description}\n"

    # Inline content

    def cell(self, cell: Cell) -> str:
        content = cell.content if cell.is_markup else self.mask(cell.content)
        if cell.is_heading:
            content = f"\\textbf{{{content}}}"
        if cell.is_link:
            return f"\\hyperlink{{{cell.anchor}}}{{{content}}}"
        if cell.is_target:
            return f"\\hypertarget{{{cell.anchor}}}{{{content}}}"
        return content

    def round(self, value: Number, precision: int) -> str:
        return f"\\num{{{format(round_half_up(value, precision), 'f')}}}"

    def true_false_mask(self, value: bool) -> str:
        return CHECKED_BOX if value else UNCHECKED_BOX

    def kinetic_law(self, expr: sp.Expr) -> str:
        return f"${sp.latex(expr)}$"

    def glossary_link(self, display_text: str, term_id: str) -> str:
        return f"\\glslink{{{term_id}}}{{{self.mask(display_text)}}}"

    def glossary_entry(self, term_id: str, label: str, description: str) -> str:
        """Define a glossary entry; must appear in the preamble."""
        return (
            f"\\newglossaryentry{{{term_id}}}"
            f"{{name={{{self.mask(label)}}}, description={{{self.mask(description)}}}}}\n"
        )
