from pathlib import Path

import pytest

from puptrail.config.settings import Settings, get_settings


class TestSettings:

    def test_derived_paths(self, tmp_path):
        settings = Settings(DATA_DIR=tmp_path / "Docs")
        root = (tmp_path / "Docs").resolve()

        assert settings.DOCS_ROOT == root
        assert settings.STORE_DIR == root / "data"
        assert settings.ATTACHMENTS_DIR == root / "attachments"
        assert settings.BACKUPS_DIR == root / "backups"
        assert settings.LOGS_DIR == root / "logs"
        assert settings.STORE_PATH == root / "data" / "PupTrail.db"
        assert settings.DATABASE_URL == f"sqlite:///{(root / 'data' / 'PupTrail.db').as_posix()}"

    def test_default_data_dir_is_expanded(self, monkeypatch):
        monkeypatch.delenv("PUPTRAIL_DATA_DIR", raising=False)

        settings = Settings()

        assert settings.DATA_DIR.is_absolute()
        assert "~" not in str(settings.DATA_DIR)
        assert settings.DATA_DIR.parts[-2:] == ("PupTrails", "PupTrailsDocs")

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """
        Behavior:
            - PUPTRAIL_ prefixed variables override defaults and are normalized
              (log level upper-cased, log format lower-cased).
        """
        monkeypatch.setenv("PUPTRAIL_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("PUPTRAIL_LOG_LEVEL", "debug")
        monkeypatch.setenv("PUPTRAIL_LOG_FORMAT", "JSON")
        monkeypatch.setenv("PUPTRAIL_LOG_TO_STDOUT", "false")

        settings = Settings()

        assert settings.DATA_DIR == tmp_path.resolve()
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.LOG_FORMAT == "json"
        assert settings.LOG_TO_STDOUT is False

    def test_invalid_level_rejected(self):
        with pytest.raises(ValueError):
            Settings(LOG_LEVEL="chatty")

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

    def test_custom_file_name(self, tmp_path):
        settings = Settings(DATA_DIR=tmp_path, DB_FILE_NAME="Other.db")

        assert settings.STORE_PATH == Path(tmp_path).resolve() / "data" / "Other.db"
