"""Tests for environment configuration."""

from pathlib import Path

import pytest

from gedcom_map import config


class TestResolveGedcomPath:
    """Tests for GEDCOM path resolution."""

    def test_missing_env_var_raises_error(self, monkeypatch):
        """Should raise FileNotFoundError when GEDCOM_FILE env var not set."""
        monkeypatch.delenv("GEDCOM_FILE", raising=False)
        with pytest.raises(FileNotFoundError, match="GEDCOM_FILE environment variable not set"):
            config.resolve_gedcom_path()

    def test_nonexistent_file_raises_error(self, monkeypatch):
        monkeypatch.setenv("GEDCOM_FILE", "/nonexistent/path/tree.ged")
        with pytest.raises(FileNotFoundError, match="GEDCOM file not found"):
            config.resolve_gedcom_path()

    def test_valid_path_returns_resolved(self, monkeypatch, tmp_path):
        gedcom = tmp_path / "test.ged"
        gedcom.write_text("0 HEAD\n0 TRLR\n")

        monkeypatch.setenv("GEDCOM_FILE", str(gedcom))
        result = config.resolve_gedcom_path()

        assert result == gedcom.resolve()
        assert result.is_absolute()


class TestGoogleKey:
    """Tests for the Google Maps key setting."""

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
        assert config.get_google_key() is None

    def test_blank_is_unset(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "  ")
        assert config.get_google_key() is None

    def test_set(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "AIzaKEY")
        assert config.get_google_key() == "AIzaKEY"


class TestCacheDir:
    """Tests for the geocode cache location."""

    def test_default(self, monkeypatch):
        monkeypatch.delenv("GEOCODE_CACHE_DIR", raising=False)
        assert config.get_cache_dir() == Path("~/.cache/gedcom-map").expanduser()

    def test_custom(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GEOCODE_CACHE_DIR", str(tmp_path))
        assert config.get_cache_dir() == tmp_path


class TestUserAgent:
    def test_default(self, monkeypatch):
        monkeypatch.delenv("NOMINATIM_USER_AGENT", raising=False)
        assert config.get_nominatim_user_agent() == "gedcom-map/0.1"

    def test_custom(self, monkeypatch):
        monkeypatch.setenv("NOMINATIM_USER_AGENT", "my-tree/2.0 (me@example.com)")
        assert config.get_nominatim_user_agent() == "my-tree/2.0 (me@example.com)"
