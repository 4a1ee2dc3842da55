import pytest

pytest.importorskip("lxml")

from seismic_toolkit.core.exceptions import EmptyInputError, ExportSinkFailure, NoContentFound
from seismic_toolkit.core.models import Divider, Paragraph
from seismic_toolkit.core.parser import ClassifierThresholds
from seismic_toolkit.core.services import ConversionService, ConversionSnapshot


class _ListSink:
    def __init__(self):
        self.calls = []

    def write(self, markup):
        self.calls.append(markup)


class _BrokenSink:
    def __init__(self, exc):
        self.exc = exc
        self.calls = 0

    def write(self, markup):
        self.calls += 1
        raise self.exc


@pytest.fixture
def service():
    return ConversionService()


@pytest.fixture
def overview_raw(markup):
    return markup.page(
        markup.divider("Overview", level=1),
        markup.paragraph("<h2>Details</h2><ul><li>Step 1</li></ul>"),
        markup.divider("Appendix", level=1),
        markup.table([["Name", "Age"], ["Ann", "30"]]),
    )


class TestParse:
    """Snapshot creation."""

    def test_document_and_sections_together(self, service, overview_raw):
        snapshot = service.parse(overview_raw)
        assert isinstance(snapshot, ConversionSnapshot)
        assert isinstance(snapshot.document[0], Divider)
        assert isinstance(snapshot.document[1], Paragraph)
        assert [s.title for s in snapshot.sections] == ["Overview", "Details", "Appendix"]

    def test_blank_input(self, service):
        with pytest.raises(EmptyInputError):
            service.parse("  ")

    def test_no_content_found(self, service):
        with pytest.raises(NoContentFound) as excinfo:
            service.parse("<p>copied the wrong thing</p>")
        assert "No content found" in str(excinfo.value)

    def test_thresholds_from_config(self, tmp_path, monkeypatch, markup):
        """User classifier overrides change styled-heading detection."""
        pytest.importorskip("yaml")
        user_dir = tmp_path / "overrides"
        user_dir.mkdir()
        (user_dir / "classifier.yml").write_text("h1_min_font_size: 40\n", encoding="utf-8")
        monkeypatch.setenv("SEISMIC_CONFIG_DIR", str(user_dir))
        from seismic_toolkit.config import ConfigManager

        ConfigManager.reset()
        service = ConversionService()
        assert service.thresholds == ClassifierThresholds(h1_min=40)

        raw = markup.page(markup.paragraph('<div><span style="font-size:30px">Title</span></div>'))
        item = service.parse(raw).document[0].items[0]
        assert item.level == 2


class TestSelection:
    """Snapshot selection helpers."""

    def test_toggle_returns_new_snapshot(self, service, overview_raw):
        snapshot = service.parse(overview_raw)
        toggled = service.toggle(snapshot, 0)
        assert toggled.document is snapshot.document
        assert [s.selected for s in toggled.sections] == [False, False, True]
        assert all(s.selected for s in snapshot.sections)

    def test_filtered_document(self, service, overview_raw):
        snapshot = service.toggle(service.parse(overview_raw), 0)
        assert service.filtered_document(snapshot) == snapshot.document[2:]

    def test_select_and_deselect_all(self, service, overview_raw):
        snapshot = service.deselect_all(service.parse(overview_raw))
        assert service.filtered_document(snapshot) == ()
        assert service.filtered_document(service.select_all(snapshot)) == snapshot.document

    def test_summary(self, service, overview_raw):
        snapshot = service.toggle(service.parse(overview_raw), 2)
        assert service.summary(snapshot) == {"blocks": 4, "tables": 1, "sections": 3, "selected": 2}


class TestRenderAndExport:
    """Rendering and the export boundary."""

    def test_render_omits_deselected_sections(self, service, overview_raw):
        html = service.render(service.toggle(service.parse(overview_raw), 0))
        assert "Overview" not in html
        assert "Details" not in html
        assert "Appendix" in html
        assert "Ann" in html

    def test_export_calls_sink_once(self, service, overview_raw):
        sink = _ListSink()
        markup = service.export(service.parse(overview_raw), sink)
        assert sink.calls == [markup]

    def test_sink_failure_is_wrapped(self, service, overview_raw):
        sink = _BrokenSink(PermissionError(13, "Permission denied"))
        with pytest.raises(ExportSinkFailure) as excinfo:
            service.export(service.parse(overview_raw), sink)
        assert sink.calls == 1
        assert excinfo.value.reason == "Permission denied"
        assert isinstance(excinfo.value.__cause__, PermissionError)

    def test_unexpected_sink_error_is_wrapped(self, service, overview_raw):
        sink = _BrokenSink(RuntimeError("clipboard busy"))
        with pytest.raises(ExportSinkFailure) as excinfo:
            service.export(service.parse(overview_raw), sink)
        assert excinfo.value.reason == "clipboard busy"
