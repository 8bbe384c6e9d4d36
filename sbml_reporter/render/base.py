"""
Base translator interface shared by all output formats.

This module defines:
- Abstract Translator interface that every output format implements
- round_half_up() used by all backends for numeric formatting
- create_translator() factory resolving a format name to a backend

A translator turns abstract document structure (headings, tables,
lists, cells, formulas, glossary links) into the concrete syntax of one
output format. It knows nothing about models or section ordering; the
builders in ``sbml_reporter.build`` decide what to say, translators
decide how it is spelled.

Design Philosophy:
- Translators are stateless apart from their masking table, which is
  loaded once at construction and never modified
- Every method returns a string fragment; nothing is written directly
- Raw text goes through mask() exactly once; fragments that are already
  markup are never masked again
- Adding a format means adding a Translator subclass, never a branch in
  shared code
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from pathlib import Path
from typing import Sequence, Union

import sympy as sp

from sbml_reporter.masking import MaskingTable, load_masking_table
from sbml_reporter.render.cell import Cell


Number = Union[str, int, float, Decimal]


def round_half_up(value: Number, precision: int) -> Decimal:
    """Round a number half-up to exactly ``precision`` fractional digits.

    Args:
        value: Numeric string (e.g. "3.14159") or number
        precision: Number of fractional digits, >= 0

    Returns:
        Decimal with exactly ``precision`` fractional digits

    Raises:
        ValueError: If value is not a finite number or precision < 0

    Example:
        >>> str(round_half_up("3.14159", 3))
        '3.142'
        >>> str(round_half_up("2.5", 0))
        '3'
    """
    if precision < 0:
        raise ValueError(f"precision must be >= 0, got {precision}")
    try:
        number = Decimal(str(value).strip())
        if not number.is_finite():
            raise ValueError(f"Not a finite number: {value!r}")
        with localcontext() as ctx:
            # Room for every integer digit plus the requested fraction
            ctx.prec = max(ctx.prec, number.adjusted() + precision + 2)
            return number.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {value!r}") from e


class Translator(ABC):
    """Abstract base class for all output formats.

    All translators must implement the document lifecycle, headings,
    tables, lists, cells, rounding, boolean glyphs, formulas and
    glossary links. Escaping is shared: mask() applies the table given at
    construction, or the format's default table.
    """

    def __init__(self, masking_table: MaskingTable | None = None):
        if masking_table is None:
            masking_table = load_masking_table(self.default_masking_table)
        self.masking_table = masking_table

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the format name (e.g., 'html', 'latex')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Suffix of generated files, including the dot."""
        pass

    @property
    @abstractmethod
    def default_masking_table(self) -> Path:
        """Escaping table used when none is passed to the constructor."""
        pass

    def mask(self, text: str) -> str:
        """Escape raw user-supplied text for this format."""
        return self.masking_table.apply(text)

    @staticmethod
    def join_inline(cells: Sequence[Cell], rendered: Sequence[str]) -> str:
        """Join inline cell renderings into running text.

        A heading cell acts as a label for what follows it ("Name: A"),
        other neighbours are separated by commas.
        """
        parts = []
        for i, text in enumerate(rendered):
            if i > 0:
                parts.append(": " if cells[i - 1].is_heading else ", ")
            parts.append(text)
        return "".join(parts)

    # ------------------------------------------------------------------
    # Document lifecycle

    @abstractmethod
    def initialize_document(self, title: str | None = None) -> str:
        """Open the document; ``title`` is the document title, if any."""
        pass

    @abstractmethod
    def terminate_document(self) -> str:
        pass

    # ------------------------------------------------------------------
    # Text

    @abstractmethod
    def heading(self, text: str, level: int, anchor: str | None = None) -> str:
        """Render a heading; with ``anchor`` it becomes a link target."""
        pass

    @abstractmethod
    def simple_text(self, text: str) -> str:
        pass

    # ------------------------------------------------------------------
    # Tables

    @abstractmethod
    def open_table(self, caption: str, num_columns: int) -> str:
        pass

    @abstractmethod
    def table_heading(self, *names: str) -> str:
        pass

    @abstractmethod
    def table_row(self, cells: Sequence[Cell]) -> str:
        pass

    @abstractmethod
    def table_row_inline(self, cells: Sequence[Cell]) -> str:
        """Render cells as running text, for use outside of tables."""
        pass

    @abstractmethod
    def close_table(self) -> str:
        pass

    # ------------------------------------------------------------------
    # Lists

    @abstractmethod
    def open_list(self, ordered: bool) -> str:
        pass

    @abstractmethod
    def list_entry(self, text: str, anchor: str | None = None, sublist: str = "") -> str:
        """Render a numbered entry; with ``anchor`` the entry links there.

        ``sublist`` is an already rendered list nested inside the entry.
        """
        pass

    @abstractmethod
    def list_entry_plain(self, text: str, anchor: str) -> str:
        """Render an unnumbered entry linking to ``anchor``."""
        pass

    @abstractmethod
    def close_list(self, ordered: bool) -> str:
        pass

    @abstractmethod
    def new_entry(self, text: str) -> str:
        """Render one item of a description block."""
        pass

    @abstractmethod
    def listing_begin(self) -> str:
        pass

    @abstractmethod
    def listing_end(self) -> str:
        pass

    # ------------------------------------------------------------------
    # Inline content

    @abstractmethod
    def cell(self, cell: Cell) -> str:
        pass

    @abstractmethod
    def round(self, value: Number, precision: int) -> str:
        """Round half-up and format the result for this format."""
        pass

    @abstractmethod
    def true_false_mask(self, value: bool) -> str:
        """Checked or unchecked box glyph."""
        pass

    @abstractmethod
    def kinetic_law(self, expr: sp.Expr) -> str:
        """Render a rate-law expression in the format's formula syntax."""
        pass

    @abstractmethod
    def glossary_link(self, display_text: str, term_id: str) -> str:
        pass


def create_translator(fmt: str, **kwargs) -> Translator:
    """Factory function to create a translator by format name.

    Args:
        fmt: Format name ('html', 'latex') or alias
        **kwargs: Passed to the translator (e.g. masking_table)

    Returns:
        Configured Translator instance

    Supported formats and aliases:
        - html, htm: HTML5 document
        - latex, tex: LaTeX document (KOMA-Script report)
    """
    fmt_lower = fmt.lower().strip()

    if fmt_lower in ("html", "htm"):
        from sbml_reporter.render.html import HTMLTranslator
        return HTMLTranslator(**kwargs)

    elif fmt_lower in ("latex", "tex"):
        from sbml_reporter.render.latex import LaTeXTranslator
        return LaTeXTranslator(**kwargs)

    else:
        raise ValueError(
            f"Unknown output format: {fmt}. "
            "Available: html, latex"
        )
