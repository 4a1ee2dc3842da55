import pytest

pytest.importorskip("lxml")

from seismic_toolkit.core.models import Cell
from seismic_toolkit.core.parser.table_extractor import PARAGRAPH_BREAK, extract_table


class TestExtractTable:
    """Row/cell grid extraction."""

    def test_header_and_data_rows(self, table_element):
        table = table_element(
            "<table><tr><th>Name</th><th>Age</th></tr><tr><td>Ann</td><td>30</td></tr></table>"
        )
        assert extract_table(table) == (
            (Cell("Name"), Cell("Age")),
            (Cell("Ann"), Cell("30")),
        )

    def test_rows_without_cells_are_omitted(self, table_element):
        table = table_element("<table><tr></tr><tr><td>Only</td></tr></table>")
        assert extract_table(table) == ((Cell("Only"),),)

    def test_tbody_rows_are_found(self, table_element):
        table = table_element("<table><tbody><tr><td>A</td></tr></tbody></table>")
        assert extract_table(table) == ((Cell("A"),),)

    def test_empty_table(self, table_element):
        assert extract_table(table_element("<table></table>")) == ()


class TestCellContent:
    """Paragraph breaks and whitespace inside a cell."""

    def test_line_break_becomes_paragraph_break(self, table_element):
        table = table_element("<table><tr><td>Line one<br>Line two</td></tr></table>")
        assert extract_table(table)[0][0].content == f"Line one{PARAGRAPH_BREAK}Line two"

    def test_divs_start_new_paragraphs(self, table_element):
        table = table_element("<table><tr><td><div>First</div><div>Second</div></td></tr></table>")
        assert extract_table(table)[0][0].content == "First\n\nSecond"

    def test_blank_lines_collapse(self, table_element):
        table = table_element("<table><tr><td>A<br><br><br>B</td></tr></table>")
        assert extract_table(table)[0][0].content == "A\n\nB"

    def test_nbsp_and_spaces_are_normalised(self, table_element):
        table = table_element("<table><tr><td>  A&nbsp;B   C  </td></tr></table>")
        assert extract_table(table)[0][0].content == "A B C"

    def test_rich_content_keeps_emphasis(self, table_element):
        table = table_element(
            '<table><tr><td><span>Plain</span> and <strong class="x">bold</strong></td></tr></table>'
        )
        cell = extract_table(table)[0][0]
        assert cell.content == "Plain and bold"
        assert cell.rich_content == "Plain and <strong>bold</strong>"

    def test_rich_content_none_without_emphasis(self, table_element):
        table = table_element('<table><tr><td><a href="#"><u>Link</u></a></td></tr></table>')
        assert extract_table(table)[0][0].rich_content is None

    def test_rich_content_keeps_paragraph_breaks(self, table_element):
        table = table_element("<table><tr><td><b>Title</b><br>body</td></tr></table>")
        cell = extract_table(table)[0][0]
        assert cell.content == "Title\n\nbody"
        assert cell.rich_content == "<b>Title</b>\n\nbody"

    def test_break_at_end_of_bold_run_moves_outside(self, table_element):
        """A trailing <br> inside <b> leaves no dangling closing tag."""
        table = table_element("<table><tr><td><b>Bold<br></b></td></tr></table>")
        cell = extract_table(table)[0][0]
        assert cell.content == "Bold"
        assert cell.rich_content == "<b>Bold</b>"

    def test_break_at_start_of_italic_run_moves_outside(self, table_element):
        table = table_element("<table><tr><td>Lead<i><br>note</i></td></tr></table>")
        cell = extract_table(table)[0][0]
        assert cell.content == "Lead\n\nnote"
        assert cell.rich_content == "Lead\n\n<i>note</i>"

    def test_source_tree_is_untouched(self, table_element):
        table = table_element("<table><tr><td>A<br>B</td></tr></table>")
        extract_table(table)
        assert table.find(".//br") is not None
