"""
Tests for the output-format translators.

Tests cover:
- Half-up rounding and per-format number presentation
- Headings, lists and tables in HTML and LaTeX
- Cell rendering: links, targets, headings, markup
- Boolean glyphs, kinetic laws and glossary links
- Translator factory and masking-table loading at construction
"""

import pytest
from decimal import Decimal

from sbml_reporter.exceptions import MaskingTableError
from sbml_reporter.formula import parse_formula
from sbml_reporter.masking import MaskingTable
from sbml_reporter.render import (
    Cell,
    HTMLTranslator,
    LaTeXTranslator,
    create_translator,
    round_half_up,
)


@pytest.fixture(scope="module")
def html():
    return HTMLTranslator()


@pytest.fixture(scope="module")
def latex():
    return LaTeXTranslator()


class TestRounding:
    """Test half-up rounding shared by both formats."""

    @pytest.mark.parametrize("value, precision, expected", [
        ("3.14159", 3, "3.142"),
        ("2.5", 0, "3"),
        ("1.0005", 3, "1.001"),
        ("0.0004", 3, "0.000"),
        (10, 3, "10.000"),
        (0.12345, 3, "0.123"),
    ])
    def test_round_half_up(self, value, precision, expected):
        """Test rounding to exactly the requested digits."""
        assert str(round_half_up(value, precision)) == expected

    @pytest.mark.parametrize("value", ["abc", "", "inf", "nan"])
    def test_invalid_numbers(self, value):
        """Test that non-numbers raise ValueError."""
        with pytest.raises(ValueError):
            round_half_up(value, 3)

    def test_negative_precision(self):
        """Test that a negative precision is rejected."""
        with pytest.raises(ValueError):
            round_half_up("1.5", -1)

    @pytest.mark.parametrize("value, expected", [
        (1e25, "10000000000000000000000000.000"),
        ("6.022e30", "6022000000000000000000000000000.000"),
        (-1.5e27, "-1500000000000000000000000000.000"),
    ])
    def test_large_magnitudes(self, value, expected):
        """Test values with more integer digits than the default context precision."""
        assert str(round_half_up(value, 3)) == expected

    def test_large_magnitudes_per_format(self, html, latex):
        assert html.round(6.022e30, 3) == "6022000000000000000000000000000"
        assert html.round(1e25, 3) == "10000000000000000000000000"
        assert latex.round(1e25, 3) == r"\num{10000000000000000000000000.000}"
        assert latex.round(6.022e30, 3) == r"\num{6022000000000000000000000000000.000}"

    def test_returns_decimal(self):
        """Test the rounded value type."""
        assert round_half_up("1.25", 1) == Decimal("1.3")

    @pytest.mark.parametrize("value, precision, expected", [
        ("3.14159", 3, "3.142"),
        ("2.5", 0, "3"),
        ("2.000", 3, "2"),
        ("0.5", 3, "0.5"),
        ("0.0004", 3, "0"),
        (10.0, 3, "10"),
    ])
    def test_html_trims_zeros(self, html, value, precision, expected):
        """Test that HTML drops trailing zeros."""
        assert html.round(value, precision) == expected

    @pytest.mark.parametrize("value, precision, expected", [
        ("3.14159", 3, r"\num{3.142}"),
        ("2.5", 0, r"\num{3}"),
        ("2", 3, r"\num{2.000}"),
    ])
    def test_latex_uses_siunitx(self, latex, value, precision, expected):
        """Test that LaTeX keeps all digits inside \\num."""
        assert latex.round(value, precision) == expected


class TestHTMLTranslator:
    """Test HTML markup."""

    def test_document_lifecycle(self, html):
        """Test document head and foot."""
        head = html.initialize_document("A & B")

        assert head.startswith("<!DOCTYPE html>")
        assert '<meta charset="utf-8">' in head
        assert "<title>A &amp; B</title>" in head
        assert "<style" in head
        assert head.rstrip().endswith("<body>")
        assert html.terminate_document() == "</body>\n</html>\n"

    def test_headings(self, html):
        """Test plain and anchored headings."""
        assert html.heading("A & B", 2) == "<h2>A &amp; B</h2>\n"
        assert html.heading("Cytosol", 3, "cytosol") == '<h3 id="cytosol">Cytosol</h3>\n'

    def test_heading_level_clamped(self, html):
        """Test that levels outside 1-6 are clamped."""
        assert html.heading("x", 9).startswith("<h6>")

    def test_simple_text(self, html):
        assert html.simple_text("a < b") == "<p>a &lt; b</p>\n"

    def test_lists(self, html):
        """Test list markup and link entries."""
        assert html.open_list(True) == "<ol>\n"
        assert html.close_list(False) == "</ul>\n"
        assert html.list_entry("Cell & Co", "c1") == '<li><a href="#c1">Cell &amp; Co</a></li>\n'
        assert html.list_entry("plain") == "<li>plain</li>\n"
        nested = html.open_list(True) + html.list_entry("Cytosol", "cytosol") + html.close_list(True)
        assert html.list_entry("Compartments", "compartments", nested) == (
            '<li><a href="#compartments">Compartments</a>\n'
            '<ol>\n<li><a href="#cytosol">Cytosol</a></li>\n</ol>\n</li>\n'
        )
        assert html.list_entry_plain("Reactions", "reactions") == (
            '<li class="plain"><a href="#reactions">Reactions</a></li>\n'
        )

    def test_cells(self, html):
        """Test each cell variant."""
        assert html.cell(Cell("a_b")) == "<td>a_b</td>"
        assert html.cell(Cell("Name", is_heading=True)) == "<th>Name</th>"
        assert html.cell(Cell.link("Glucose", "glc")) == '<td><a href="#glc">Glucose</a></td>'
        assert html.cell(Cell.target("Glucose", "glc")) == '<td id="glc">Glucose</td>'

    def test_raw_cells_masked_markup_cells_not(self, html):
        """Test that only raw text is escaped."""
        assert html.cell(Cell("<b>")) == "<td>&lt;b&gt;</td>"
        assert html.cell(Cell.markup("<b>")) == "<td><b></td>"

    def test_table(self, html):
        """Test table structure."""
        table = (
            html.open_table("Species", 2)
            + html.table_heading("Name", "Amount")
            + html.table_row([Cell("s1"), Cell("-")])
            + html.close_table()
        )
        assert table == (
            "<table>\n<caption>Species</caption>\n"
            "<tr><th>Name</th><th>Amount</th></tr>\n"
            "<tr><td>s1</td><td>-</td></tr>\n"
            "</table>\n"
        )

    def test_inline_row(self, html):
        """Test a row rendered as running text."""
        cells = [Cell("Compartment", is_heading=True), Cell.link("Cytosol", "cytosol"), Cell("x")]
        assert html.table_row_inline(cells) == (
            '<strong>Compartment</strong>: <a href="#cytosol">Cytosol</a>, x'
        )

    def test_description_listing(self, html):
        assert html.listing_begin() + html.new_entry("a") + html.listing_end() == (
            "<ul>\n<li>a</li>\n</ul>\n"
        )

    def test_glyphs(self, html):
        """Test distinct checked and unchecked glyphs."""
        assert html.true_false_mask(True) == "☑"
        assert html.true_false_mask(False) == "□"

    def test_kinetic_law(self, html):
        """Test MathML output."""
        markup = html.kinetic_law(parse_formula("kf * A"))

        assert markup.startswith('<math xmlns="http://www.w3.org/1998/Math/MathML"')
        assert "<mi>kf</mi>" in markup
        assert "<mi>A</mi>" in markup
        assert markup.rstrip().endswith("</math>")

    def test_piecewise_kinetic_law(self, html):
        """Test that conditional laws render as MathML."""
        markup = html.kinetic_law(parse_formula("piecewise(k, gt(S, 0), 0)"))

        assert markup.startswith("<math")
        assert "<mi>k</mi>" in markup
        assert "<mi>S</mi>" in markup

    def test_glossary_link(self, html):
        assert html.glossary_link("SBO:0000290", "SBO:0000290") == (
            '<a href="#SBO:0000290">SBO:0000290</a>'
        )


class TestLaTeXTranslator:
    """Test LaTeX markup."""

    def test_preamble(self, latex):
        """Test document class and packages."""
        preamble = latex.preamble()

        assert preamble.startswith(r"\documentclass")
        assert "{scrreprt}" in preamble
        for package in ("longtable", "booktabs", "siunitx", "hyperref", "amssymb"):
            assert f"{{{package}}}" in preamble
        assert r"\usepackage[toc]{glossaries}" in preamble
        assert r"\usepackage[utf8]{inputenc}" in preamble

    def test_document_lifecycle(self, latex):
        assert latex.initialize_document() == "\\begin{document}\n\\maketitle\n\\tableofcontents\n"
        assert latex.initialize_document("A & B") == (
            "\\title{A \\& B}\n\\begin{document}\n\\maketitle\n\\tableofcontents\n"
        )
        assert latex.terminate_document() == "\\end{document}\n"

    @pytest.mark.parametrize("level, command", [
        (1, "chapter"), (2, "section"), (3, "subsection"), (4, "subsubsection"), (5, "paragraph"),
    ])
    def test_heading_levels(self, latex, level, command):
        """Test mapping of levels to sectioning commands."""
        assert latex.heading("T", level) == f"\\{command}{{T}}\n"

    def test_anchored_heading(self, latex):
        """Test that anchored headings get a hypertarget."""
        assert latex.heading("Species_1", 2, "s1") == "\\section{Species\\_1}\\hypertarget{s1}{}\n"

    def test_lists(self, latex):
        """Test list environments and link entries."""
        assert latex.open_list(True) == "\\begin{enumerate}\n"
        assert latex.close_list(False) == "\\end{itemize}\n"
        assert latex.list_entry("a_b", "c1") == "\\item \\hyperlink{c1}{a\\_b}\n"
        nested = latex.open_list(True) + latex.list_entry("x") + latex.close_list(True)
        assert latex.list_entry("Compartments", "compartments", nested) == (
            "\\item \\hyperlink{compartments}{Compartments}\n"
            "\\begin{enumerate}\n\\item x\n\\end{enumerate}\n"
        )
        assert latex.list_entry_plain("Reactions", "reactions") == (
            "\\item[] \\hyperlink{reactions}{Reactions}\n"
        )

    def test_cells(self, latex):
        """Test each cell variant."""
        assert latex.cell(Cell("a_b")) == "a\\_b"
        assert latex.cell(Cell("Name", is_heading=True)) == "\\textbf{Name}"
        assert latex.cell(Cell.link("Glucose", "glc")) == "\\hyperlink{glc}{Glucose}"
        assert latex.cell(Cell.target("Glucose", "glc")) == "\\hypertarget{glc}{Glucose}"
        assert latex.cell(Cell.markup("\\num{1}")) == "\\num{1}"

    def test_table(self, latex):
        """Test longtable structure with booktabs rules."""
        opened = latex.open_table("Species & more", 2)

        assert opened.startswith("\\begin{longtable}{@{}p{0.45\\linewidth}p{0.45\\linewidth}@{}}\n")
        assert "\\caption{Species \\& more} \\\\\n" in opened
        assert opened.endswith("\\toprule\n")
        assert latex.table_heading("A", "B") == "\\textbf{A} & \\textbf{B} \\\\\n\\midrule\n"
        assert latex.table_row([Cell("x"), Cell("y")]) == "x & y \\\\\n"
        assert latex.close_table() == "\\bottomrule\n\\end{longtable}\n"

    def test_inline_row(self, latex):
        cells = [Cell("Reactants", is_heading=True), Cell("s1,\ns2")]
        assert latex.table_row_inline(cells) == "\\textbf{Reactants}: s1, \\newline s2"

    def test_description_listing(self, latex):
        assert latex.listing_begin() == "\\begin{description}\n"
        assert latex.new_entry("x") == "\\item x\n"
        assert latex.listing_end() == "\\end{description}\n"

    def test_glyphs(self, latex):
        """Test checked and unchecked boxes."""
        assert latex.true_false_mask(False) == "$\\square$"
        checked = latex.true_false_mask(True)
        assert "\\checkmark" in checked
        assert checked != latex.true_false_mask(False)

    def test_kinetic_law(self, latex):
        """Test inline math output."""
        markup = latex.kinetic_law(parse_formula("Vm * S / (Km + S)"))

        assert markup.startswith("$")
        assert markup.endswith("$")
        assert "\\frac" in markup

    def test_piecewise_kinetic_law(self, latex):
        markup = latex.kinetic_law(parse_formula("piecewise(k, gt(S, 0), 0)"))
        assert "\\begin{cases}" in markup
        assert "S > 0" in markup

    def test_glossary(self, latex):
        """Test glossary links and entry definitions."""
        assert latex.glossary_link("SBO:0000290", "SBO:0000290") == (
            "\\glslink{SBO:0000290}{SBO:0000290}"
        )
        assert latex.glossary_entry("SBO:0000290", "SBO:0000290", "place_holder") == (
            "\\newglossaryentry{SBO:0000290}{name={SBO:0000290}, description={place\\_holder}}\n"
        )


class TestFactory:
    """Test create_translator and translator construction."""

    @pytest.mark.parametrize("name, cls", [
        ("html", HTMLTranslator),
        ("HTM", HTMLTranslator),
        ("latex", LaTeXTranslator),
        ("tex", LaTeXTranslator),
    ])
    def test_aliases(self, name, cls):
        """Test format names and aliases."""
        assert isinstance(create_translator(name), cls)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown output format"):
            create_translator("pdf")

    def test_properties(self, html, latex):
        assert (html.name, html.file_extension) == ("html", ".html")
        assert (latex.name, latex.file_extension) == ("latex", ".tex")

    def test_custom_masking_table(self):
        """Test that a table passed to the constructor replaces the default."""
        translator = HTMLTranslator(masking_table=MaskingTable.from_pairs([("x", "y")]))
        assert translator.mask("x & x") == "y & y"

    def test_missing_masking_table_fails_construction(self, monkeypatch, tmp_path):
        """Test that a translator cannot be built without its escaping table."""
        monkeypatch.setattr(
            HTMLTranslator, "default_masking_table",
            property(lambda self: tmp_path / "missing.csv"),
        )
        with pytest.raises(MaskingTableError):
            HTMLTranslator()
