"""Unit tests for the Settings singleton and YAML loading."""

from pathlib import Path

import pytest

from journalbot.config import Settings, _load_settings_file, save_settings


class TestSettings:
    """Test suite for Settings."""

    def test_singleton(self, isolated_settings) -> None:
        assert Settings.load() is isolated_settings
        assert Settings() is isolated_settings

    def test_defaults(self, isolated_settings, tmp_path) -> None:
        assert isolated_settings.port == 5050
        assert isolated_settings.verification_batch_size == 50
        assert isolated_settings.db_path == tmp_path / "journals.db"
        assert isolated_settings.metadata_dir == tmp_path / ".metadata"
        assert isolated_settings.metadata_dir.is_dir()
        assert isolated_settings.is_production is False

    def test_update(self, isolated_settings) -> None:
        isolated_settings.update(environment="production")

        assert Settings.load().is_production is True
        with pytest.raises(AttributeError):
            isolated_settings.update(no_such_field=1)

    def test_reload_reads_yaml(self, tmp_path) -> None:
        (tmp_path / ".metadata" / "settings.yaml").write_text(
            "port: 8080\ndb_path: data/app.db\nrecommendation_limit: '3'\n",
            encoding="utf-8",
        )

        settings = Settings.reload(base_dir=tmp_path)

        assert settings.port == 8080
        assert settings.db_path == tmp_path / "data" / "app.db"
        assert settings.recommendation_limit == 3

    def test_example_files_are_copied(self, tmp_path) -> None:
        base = tmp_path / "project"
        (base / ".metadata.example").mkdir(parents=True)
        (base / ".metadata.example" / "settings.yaml").write_text("port: 6000\n", encoding="utf-8")

        settings = Settings.reload(base_dir=base)

        assert (base / ".metadata" / "settings.yaml").exists()
        assert settings.port == 6000


class TestLoadSettingsFile:
    def test_missing_file(self, tmp_path) -> None:
        assert _load_settings_file(tmp_path / "nope.yaml") == {}

    def test_invalid_values_are_dropped(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(
            "port: not-a-number\nenvironment: staging\nunknown: 1\nscholar_timeout: 2\n",
            encoding="utf-8",
        )

        assert _load_settings_file(path) == {"scholar_timeout": 2.0}

    def test_malformed_yaml(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("port: [unclosed\n", encoding="utf-8")

        assert _load_settings_file(path) == {}

    def test_non_mapping(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        assert _load_settings_file(path) == {}


class TestSaveSettings:
    def test_round_trip(self, isolated_settings, tmp_path) -> None:
        isolated_settings.update(port=7070, db_path=Path("custom.db"))
        path = tmp_path / "saved.yaml"

        save_settings(path, isolated_settings)
        values = _load_settings_file(path)

        assert path.read_text(encoding="utf-8").startswith("# JournalBot settings")
        assert values["port"] == 7070
        assert values["db_path"] == "custom.db"
        assert "metadata_dir" not in values
