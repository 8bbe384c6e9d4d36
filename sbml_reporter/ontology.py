"""
Systems Biology Ontology (SBO) terms.

This module handles:
- Normalizing SBO term codes ("SBO:0000290", "290", 290)
- Loading the term catalog (id, name, definition) from CSV or from
  the OBO release of the ontology (sbo.obo)
- Resolving codes to canonical OntologyTerm objects for the glossary

Design Philosophy:
- Terms are immutable and ordered by their canonical code, so any set
  of terms iterates in the same order on every run
- Unknown codes still resolve; the glossary then shows the code alone
"""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Union

from sbml_reporter.config import SBO_TERMS_FILE

logger = logging.getLogger(__name__)

SBO_PATTERN = re.compile(r"^(?:SBO:)?(\d{1,7})$")


@dataclass(frozen=True, order=True)
class OntologyTerm:
    """A controlled-vocabulary term rendered as a glossary entry.

    Ordering and equality use the canonical code only.

    Attributes:
        id: Canonical code, e.g. "SBO:0000290" (also the glossary anchor)
        name: Term name, empty if unknown
        definition: Term definition, empty if unknown
    """
    id: str
    name: str = field(default="", compare=False)
    definition: str = field(default="", compare=False)

    @property
    def label(self) -> str:
        """Short text used for links to this term."""
        return self.id

    def __str__(self) -> str:
        return self.label


def normalize_sbo(code: Union[str, int]) -> str:
    """Return the canonical form "SBO:" + seven digits of an SBO code.

    Example:
        >>> normalize_sbo(290)
        'SBO:0000290'
        >>> normalize_sbo("SBO:0000290")
        'SBO:0000290'
    """
    if isinstance(code, int):
        number = code
    else:
        match = SBO_PATTERN.match(code.strip())
        if not match:
            raise ValueError(f"Not an SBO term code: {code!r}")
        number = int(match.group(1))
    if number < 0:
        raise ValueError(f"Not an SBO term code: {code!r}")
    return f"SBO:{number:07d}"


@dataclass
class TermCatalog:
    """Lookup table from canonical SBO code to term."""
    terms: dict[str, OntologyTerm] = field(default_factory=dict)
    name: str = "sbo"

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self) -> Iterator[OntologyTerm]:
        return iter(self.terms.values())

    def __contains__(self, code: object) -> bool:
        try:
            return normalize_sbo(code) in self.terms
        except (TypeError, ValueError):
            return False

    def resolve(self, code: Union[str, int]) -> OntologyTerm:
        """Resolve a code to its canonical term."""
        canonical = normalize_sbo(code)
        term = self.terms.get(canonical)
        if term is None:
            logger.debug("SBO term %s not in catalog %s", canonical, self.name)
            term = OntologyTerm(canonical)
        return term


def load_term_catalog(path: str | Path) -> TermCatalog:
    """Load a term catalog from a CSV file, or from an OBO file by suffix.

    Expected CSV format:
        id,name,definition
    """
    path = Path(path)
    if path.suffix.lower() == ".obo":
        return load_obo_catalog(path)
    terms = {}

    with open(path, "r", encoding="utf-8") as f:
        reader = csv.reader(f)
        next(reader, None)  # Skip header

        for row in reader:
            if not row or not row[0].strip():
                continue
            code = normalize_sbo(row[0])
            name = row[1].strip() if len(row) > 1 else ""
            definition = row[2].strip() if len(row) > 2 else ""
            terms[code] = OntologyTerm(code, name, definition)

    logger.debug("Loaded %d SBO terms from %s", len(terms), path)
    return TermCatalog(terms=terms, name=path.stem)


OBO_DEFINITION = re.compile(r'^"((?:[^"\\]|\\.)*)"')
OBO_ESCAPE = re.compile(r"\\(.)")


def load_obo_catalog(path: str | Path) -> TermCatalog:
    """Load a term catalog from the OBO release of SBO.

    Only ``[Term]`` stanzas with an SBO id are read; their ``name`` and
    the quoted part of ``def`` become the term name and definition.
    Obsolete terms are kept so old models still resolve.

    Example stanza:
        [Term]
        id: SBO:0000290
        name: physical compartment
        def: "Specific location of space..." []
    """
    path = Path(path)
    terms = {}

    def add(stanza: dict[str, str]) -> None:
        code = stanza.get("id", "")
        if not code.startswith("SBO:"):
            return
        try:
            code = normalize_sbo(code)
        except ValueError:
            logger.warning("Skipping malformed SBO id %r in %s", code, path)
            return
        terms[code] = OntologyTerm(code, stanza.get("name", ""), stanza.get("def", ""))

    stanza = None
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line.startswith("["):
                if stanza is not None:
                    add(stanza)
                stanza = {} if line == "[Term]" else None
                continue
            if stanza is None or ":" not in line:
                continue
            tag, _, value = line.partition(":")
            value = value.strip()
            if tag == "def":
                match = OBO_DEFINITION.match(value)
                value = OBO_ESCAPE.sub(r"\1", match.group(1)) if match else value
            if tag in ("id", "name", "def"):
                stanza.setdefault(tag, value)
    if stanza is not None:
        add(stanza)

    logger.debug("Loaded %d SBO terms from %s", len(terms), path)
    return TermCatalog(terms=terms, name=path.stem)


@lru_cache(maxsize=1)
def get_default_catalog() -> TermCatalog:
    """Get the catalog shipped with the package."""
    return load_term_catalog(SBO_TERMS_FILE)
