import pytest

pytest.importorskip("yaml")

from seismic_toolkit.config import ConfigManager


class TestConfigManager:
    """Packaged defaults and user overrides."""

    def test_singleton(self):
        assert ConfigManager() is ConfigManager()

    def test_packaged_sections(self):
        config = ConfigManager()
        assert config.get_logging_config()["version"] == 1
        assert config.get_classifier_config()["h1_min_font_size"] == 28
        assert set(config.get_word_styles()["headings"]) == {1, 2, 3}

    def test_user_override_is_merged(self, tmp_path, monkeypatch):
        user_dir = tmp_path / "overrides"
        user_dir.mkdir()
        (user_dir / "classifier.yml").write_text("h2_min_font_size: 22\n", encoding="utf-8")
        monkeypatch.setenv("SEISMIC_CONFIG_DIR", str(user_dir))
        ConfigManager.reset()

        classifier = ConfigManager().get_classifier_config()
        assert classifier["h2_min_font_size"] == 22
        assert classifier["h1_min_font_size"] == 28

    def test_invalid_user_file_keeps_defaults(self, tmp_path, monkeypatch):
        user_dir = tmp_path / "overrides"
        user_dir.mkdir()
        (user_dir / "classifier.yml").write_text("h1_min_font_size: [unclosed\n", encoding="utf-8")
        monkeypatch.setenv("SEISMIC_CONFIG_DIR", str(user_dir))
        ConfigManager.reset()

        assert ConfigManager().get_classifier_config()["h1_min_font_size"] == 28
