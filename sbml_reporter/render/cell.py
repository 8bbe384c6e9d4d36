"""
Table cells with optional cross-references.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Cell:
    """The atomic renderable unit of a table row.

    When ``anchor`` is set, ``clickable`` decides its meaning: a clickable
    cell links to the anchor elsewhere in the document, a non-clickable
    cell is the anchor target other cells link to.

    Attributes:
        content: Cell text
        is_heading: Render as a header cell
        anchor: Optional anchor identifier
        clickable: Outbound link (True) or inbound target (False)
        is_markup: Content is already markup (rounded numbers, glyphs,
            glossary links, formulas) and is emitted without masking
    """
    content: str
    is_heading: bool = False
    anchor: Optional[str] = None
    clickable: bool = False
    is_markup: bool = False

    @property
    def is_link(self) -> bool:
        return self.anchor is not None and self.clickable

    @property
    def is_target(self) -> bool:
        return self.anchor is not None and not self.clickable

    @classmethod
    def link(cls, content: str, anchor: str) -> Cell:
        """A cell pointing at ``anchor``."""
        return cls(content, anchor=anchor, clickable=True)

    @classmethod
    def target(cls, content: str, anchor: str) -> Cell:
        """A cell other cells can link to."""
        return cls(content, anchor=anchor, clickable=False)

    @classmethod
    def markup(cls, content: str) -> Cell:
        return cls(content, is_markup=True)
