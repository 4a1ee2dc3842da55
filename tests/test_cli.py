import io

import pytest

pytest.importorskip("lxml")

from seismic_toolkit.cli import main


@pytest.fixture
def source_file(tmp_path, markup):
    path = tmp_path / "article.html"
    path.write_text(
        markup.page(
            markup.divider("Overview", level=1),
            markup.paragraph("<h2>Details</h2><ul><li>Step 1</li></ul>"),
            markup.divider("Appendix", level=1),
            markup.paragraph("<div>Contact support</div>"),
        ),
        encoding="utf-8",
    )
    return path


class TestCli:
    """Batch command-line front-end."""

    def test_list_sections(self, source_file, capsys):
        assert main([str(source_file), "--list-sections"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "[x]   0  Overview",
            "[x]   1    Details",
            "[x]   2  Appendix",
        ]

    def test_exclude_marks_cascade(self, source_file, capsys):
        assert main([str(source_file), "--list-sections", "--exclude", "0"]) == 0
        out = capsys.readouterr().out
        assert "[ ]   1    Details" in out
        assert "[x]   2  Appendix" in out

    def test_output_file(self, source_file, tmp_path):
        target = tmp_path / "out" / "word.html"
        assert main([str(source_file), "--exclude", "2", "-o", str(target)]) == 0
        html = target.read_text(encoding="utf-8")
        assert "Details" in html
        assert "Contact support" not in html

    def test_stdin_to_stdout(self, monkeypatch, capsys, markup):
        monkeypatch.setattr("sys.stdin", io.StringIO(markup.page(markup.paragraph("<div>Hello</div>"))))
        assert main([]) == 0
        assert "Hello" in capsys.readouterr().out

    def test_conversion_error_exits_one(self, tmp_path, capsys):
        empty = tmp_path / "empty.html"
        empty.write_text("   ", encoding="utf-8")
        assert main([str(empty)]) == 1
        assert capsys.readouterr().err.strip() == "Error: Please paste Seismic HTML content"

    def test_missing_source_exits_one(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.html")]) == 1
        assert "cannot read" in capsys.readouterr().err
