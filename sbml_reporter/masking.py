"""
Masking module for escaping user-supplied text.

Every backend escapes names, dates, author strings and descriptions
before embedding them in its markup. The substitutions come from a
per-format table shipped as package data.

Design:
- A table is an ordered, immutable tuple of (pattern, replacement) rules
- Rules apply in table order, each against the output of the previous
  one, so rule order is significant (the LaTeX table escapes backslashes
  before any rule inserts new ones)
- Replacements are literal text; backslashes in them are not
  interpreted as group references
- Masking is not idempotent: "&" becomes "&amp;", and masking that
  again yields "&amp;amp;". Mask each raw value exactly once.
"""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from sbml_reporter.exceptions import MaskingTableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaskRule:
    """One substitution: every match of ``pattern`` becomes ``replacement``."""
    pattern: re.Pattern
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(lambda _: self.replacement, text)


@dataclass(frozen=True)
class MaskingTable:
    """Ordered substitution rules for one output format."""
    rules: tuple[MaskRule, ...] = ()
    source: str = "<memory>"

    def __len__(self) -> int:
        return len(self.rules)

    def apply(self, text: str) -> str:
        """Apply every rule in order to ``text``."""
        for rule in self.rules:
            text = rule.apply(text)
        return text

    @classmethod
    def from_pairs(cls, pairs, source: str = "<memory>") -> MaskingTable:
        """Build a table from (pattern, replacement) string pairs."""
        rules = []
        for pattern, replacement in pairs:
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                raise MaskingTableError(source, f"bad pattern {pattern!r}: {e}") from e
            rules.append(MaskRule(compiled, replacement))
        return cls(rules=tuple(rules), source=source)


def load_masking_table(path: str | Path) -> MaskingTable:
    """Load a masking table from a CSV file.

    Expected format:
        pattern,replacement

    Cells are taken verbatim (no stripping), so a replacement may end in
    a significant space such as ``\\textbackslash ``.

    Raises:
        MaskingTableError: If the file is missing, a row does not have
            exactly two columns, or a pattern does not compile
    """
    path = Path(path)
    pairs = []

    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f)
            next(reader, None)  # Skip header

            for line_no, row in enumerate(reader, start=2):
                if not row:
                    continue
                if len(row) != 2:
                    raise MaskingTableError(
                        str(path), f"line {line_no}: expected 2 columns, got {len(row)}"
                    )
                pairs.append((row[0], row[1]))
    except OSError as e:
        raise MaskingTableError(str(path), str(e)) from e

    table = MaskingTable.from_pairs(pairs, source=str(path))
    logger.debug("Loaded %d masking rules from %s", len(table), path)
    return table
