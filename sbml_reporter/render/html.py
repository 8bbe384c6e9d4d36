"""
HTML5 output format.

Headings carry ``id`` attributes, cross-references are ``#id`` fragment
links, kinetic laws are presentation MathML, and nested ordered lists
are numbered "1", "1.1", ... by the embedded style sheet.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import sympy as sp
from sympy.printing.mathml import mathml

from sbml_reporter.config import HTML_MASKING_TABLE
from sbml_reporter.render.base import Number, Translator, round_half_up
from sbml_reporter.render.cell import Cell


MATHML_NAMESPACE = "http://www.w3.org/1998/Math/MathML"

CHECKED_BOX = "☑"
UNCHECKED_BOX = "□"

STYLE_SHEET = """\
<style type="text/css">
  body { font-family: Helvetica, Arial, sans-serif; margin: 2em 4em; }
  h1, h2, h3, h4 { font-weight: bold; }
  table { border-collapse: collapse; margin: 1em 0; }
  caption { font-weight: bold; text-align: left; padding: 0.3em 0; }
  th, td { border: 1px solid #999; padding: 0.3em 0.6em; text-align: left; vertical-align: top; }
  th { background-color: #eee; }
  ol { counter-reset: item; }
  ol > li { display: block; }
  ol > li:before { content: counters(item, ".") " "; counter-increment: item; }
  li.plain:before { content: none; counter-increment: none; }
</style>"""


class HTMLTranslator(Translator):
    """Translator producing a single self-contained HTML5 page."""

    @property
    def name(self) -> str:
        return "html"

    @property
    def file_extension(self) -> str:
        return ".html"

    @property
    def default_masking_table(self) -> Path:
        return HTML_MASKING_TABLE

    def initialize_document(self, title: str | None = None) -> str:
        lines = [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '<meta charset="utf-8">',
        ]
        if title:
            lines.append(f"<title>{self.mask(title)}</title>")
        lines += [STYLE_SHEET, "</head>", "<body>"]
        return "\n".join(lines) + "\n"

    def terminate_document(self) -> str:
        return "</body>\n</html>\n"

    def heading(self, text: str, level: int, anchor: str | None = None) -> str:
        level = min(max(level, 1), 6)
        id_attr = f' id="{anchor}"' if anchor else ""
        return f"<h{level}{id_attr}>{self.mask(text)}</h{level}>\n"

    def simple_text(self, text: str) -> str:
        return f"<p>{self.mask(text)}</p>\n"

    # Tables

    def open_table(self, caption: str, num_columns: int) -> str:
        return f"<table>\n<caption>{self.mask(caption)}</caption>\n"

    def table_heading(self, *names: str) -> str:
        return self.table_row([Cell(name, is_heading=True) for name in names])

    def table_row(self, cells: Sequence[Cell]) -> str:
        return "<tr>" + "".join(self.cell(c) for c in cells) + "</tr>\n"

    def table_row_inline(self, cells: Sequence[Cell]) -> str:
        return self.join_inline(cells, [self._inline(c) for c in cells])

    def close_table(self) -> str:
        return "</table>\n"

    # Lists

    def open_list(self, ordered: bool) -> str:
        return "<ol>\n" if ordered else "<ul>\n"

    def list_entry(self, text: str, anchor: str | None = None, sublist: str = "") -> str:
        content = self.mask(text)
        if anchor:
            content = f'<a href="#{anchor}">{content}</a>'
        if sublist:
            content = f"{content}\n{sublist}"
        return f"<li>{content}</li>\n"

    def list_entry_plain(self, text: str, anchor: str) -> str:
        return f'<li class="plain"><a href="#{anchor}">{self.mask(text)}</a></li>\n'

    def close_list(self, ordered: bool) -> str:
        return "</ol>\n" if ordered else "</ul>\n"

    def new_entry(self, text: str) -> str:
        return f"<li>{text}</li>\n"

    def listing_begin(self) -> str:
        return "<ul>\n"

    def listing_end(self) -> str:
        return "</ul>\n"

    # Inline content

    def cell(self, cell: Cell) -> str:
        tag = "th" if cell.is_heading else "td"
        content = self._content(cell)
        if cell.is_link:
            return f'<{tag}><a href="#{cell.anchor}">{content}</a></{tag}>'
        if cell.is_target:
            return f'<{tag} id="{cell.anchor}">{content}</{tag}>'
        return f"<{tag}>{content}</{tag}>"

    def round(self, value: Number, precision: int) -> str:
        text = format(round_half_up(value, precision), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        if text == "-0":
            text = "0"
        return text

    def true_false_mask(self, value: bool) -> str:
        return CHECKED_BOX if value else UNCHECKED_BOX

    def kinetic_law(self, expr: sp.Expr) -> str:
        body = mathml(expr, printer="presentation")
        return f'<math xmlns="{MATHML_NAMESPACE}" display="block">{body}</math>\n'

    def glossary_link(self, display_text: str, term_id: str) -> str:
        return f'<a href="#{term_id}">{self.mask(display_text)}</a>'

    def _content(self, cell: Cell) -> str:
        return cell.content if cell.is_markup else self.mask(cell.content)

    def _inline(self, cell: Cell) -> str:
        content = self._content(cell)
        if cell.is_link:
            return f'<a href="#{cell.anchor}">{content}</a>'
        if cell.is_target:
            return f'<span id="{cell.anchor}">{content}</span>'
        if cell.is_heading:
            return f"<strong>{content}</strong>"
        return content
