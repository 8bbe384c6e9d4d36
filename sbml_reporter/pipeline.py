"""
Report generation pipeline for SBML-Reporter.

This module orchestrates the complete reporting workflow:
1. Index the model (species and reactions by compartment, SBO terms)
2. Assemble the document section by section through a Builder
3. Write the finished document to its sink

Design Philosophy:
- Indexing completes before the first rendering call
- The whole document is assembled in memory, then written at once
- All numbering state belongs to one run (ReportContext), so builders
  can be reused
- Files are written to a temporary name and renamed on success; a
  failed run leaves no partial report behind
- Progress callbacks for CLI integration
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Optional, TextIO, Union

from sbml_reporter.build.base import Builder, ReportContext, create_builder
from sbml_reporter.models import Model
from sbml_reporter.ontology import TermCatalog
from sbml_reporter.preprocess import preprocess

logger = logging.getLogger(__name__)

# Type alias for progress callbacks
ProgressCallback = Callable[[str, float], None]

FORMATS = ("html", "latex")


@dataclass
class ReportConfig:
    """Configuration of one reporting run.

    Attributes:
        formats: Output formats to generate ('html', 'latex')
        output_dir: Directory receiving the reports
        stem: File name without extension, defaults to the model id
    """
    formats: tuple[str, ...] = FORMATS
    output_dir: Path = field(default_factory=Path.cwd)
    stem: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging."""
        return {
            "formats": list(self.formats),
            "output_dir": str(self.output_dir),
            "stem": self.stem,
        }


class ReportDirector:
    """Runs indexing and assembly in the fixed section order.

    Usage:
        director = ReportDirector(HTMLBuilder(), model)
        with open("model.html", "w", encoding="utf-8") as sink:
            director.write(sink)
    """

    def __init__(
        self,
        builder: Builder,
        model: Model,
        catalog: TermCatalog | None = None,
        progress_callback: ProgressCallback | None = None,
    ):
        self.builder = builder
        self.model = model
        self.catalog = catalog
        self.progress_callback = progress_callback or (lambda msg, pct: None)

    def fragments(self, ctx: ReportContext) -> Iterator[str]:
        """Yield the document sections in order."""
        b = self.builder
        yield b.create_document_head(ctx)
        yield b.create_compartment_overview(ctx)

        total = max(len(self.model.compartments), 1)
        for i, compartment in enumerate(self.model.compartments):
            self.progress_callback(
                f"Compartment {i + 1}/{total}: {compartment.id}", 0.2 + 0.6 * i / total
            )
            yield b.create_single_compartment_section(ctx, compartment)
            yield b.create_species_section_of_compartment(ctx, compartment)
            yield b.create_reaction_section_of_compartment(ctx, compartment)

        self.progress_callback("Reactions...", 0.8)
        yield b.create_section_of_reactions(ctx)
        yield b.create_document_foot(ctx)

    def render(self) -> str:
        """Index the model and return the complete document."""
        self.progress_callback("Indexing model...", 0.0)
        index = preprocess(self.model, self.catalog)
        ctx = ReportContext(model=self.model, index=index)

        self.progress_callback("Assembling document...", 0.1)
        document = "".join(self.fragments(ctx))
        self.progress_callback("Complete!", 1.0)
        return document

    def write(self, sink: TextIO) -> None:
        """Render the document and write it to ``sink``."""
        sink.write(self.render())
        sink.flush()


def write_report(builder: Builder, model: Model, sink: TextIO, **kwargs) -> None:
    """Write the report of ``model`` built by ``builder`` to ``sink``."""
    ReportDirector(builder, model, **kwargs).write(sink)


def render_report(fmt: Union[str, Builder], model: Model, **kwargs) -> str:
    """Render a report to a string.

    Args:
        fmt: Format name ('html', 'latex') or a ready Builder
        model: Model to report on
    """
    builder = create_builder(fmt) if isinstance(fmt, str) else fmt
    buffer = io.StringIO()
    write_report(builder, model, buffer, **kwargs)
    return buffer.getvalue()


def write_atomically(path: Path, director: ReportDirector) -> None:
    """Write a report next to ``path`` and move it into place on success."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as sink:
            director.write(sink)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def generate_reports(
    model: Model,
    config: ReportConfig | None = None,
    catalog: TermCatalog | None = None,
    progress_callback: ProgressCallback | None = None,
) -> list[Path]:
    """Generate one report file per configured format.

    Returns:
        Paths of the written reports, in format order
    """
    config = config or ReportConfig()
    logger.info("Generating reports for model %s: %s", model.id, config.to_dict())

    stem = config.stem or model.id
    written = []
    for fmt in config.formats:
        builder = create_builder(fmt)
        path = Path(config.output_dir) / f"{stem}{builder.file_extension}"
        director = ReportDirector(builder, model, catalog, progress_callback)
        write_atomically(path, director)
        logger.info("Wrote %s report to %s", builder.name, path)
        written.append(path)
    return written
