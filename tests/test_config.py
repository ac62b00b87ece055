"""Tests for the configuration module."""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from linearsync.config import Settings, load_settings
from linearsync.errors import ConfigurationError


@pytest.fixture
def clean_cwd(tmp_path: Path):
    """Run in an empty directory so no stray .env is picked up."""
    original_cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)


class TestSettings:
    """Test Settings class."""

    def test_default_values(self, clean_cwd: Path):
        """Test default configuration values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()
            assert settings.linear_api_key == ""
            assert settings.linear_api_url == "https://api.linear.app/graphql"
            assert settings.log_level == "INFO"
            assert settings.retry_attempts == 3
            assert settings.retry_base_delay == 1.0
            assert settings.linear_sync_root == clean_cwd.resolve()

    def test_custom_values(self, clean_cwd: Path):
        """Test custom configuration values."""
        with patch.dict(
            os.environ,
            {
                "LINEAR_API_KEY": "lin_api_custom",
                "LINEAR_TEAM_ID": "team-9",
                "LOG_LEVEL": "DEBUG",
                "RETRY_ATTEMPTS": "5",
            },
            clear=True,
        ):
            settings = Settings()
            assert settings.linear_api_key == "lin_api_custom"
            assert settings.linear_team_id == "team-9"
            assert settings.log_level == "DEBUG"
            assert settings.retry_attempts == 5

    def test_require_linear_lists_missing(self, clean_cwd: Path):
        """Test missing credentials raise a configuration error."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()
            with pytest.raises(ConfigurationError) as exc_info:
                settings.require_linear()
            assert "LINEAR_API_KEY" in str(exc_info.value)
            assert "LINEAR_TEAM_ID" in str(exc_info.value)

    def test_require_linear_ok(self, clean_cwd: Path):
        """Test complete credentials pass."""
        with patch.dict(
            os.environ,
            {"LINEAR_API_KEY": "key", "LINEAR_TEAM_ID": "team"},
            clear=True,
        ):
            Settings().require_linear()


class TestLoadSettings:
    """Test load_settings function."""

    def test_load_from_specified_root(self, clean_cwd: Path):
        """Test loading settings with specified root."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()

            with patch.dict(os.environ, {}, clear=True):
                settings = load_settings(root)

                assert settings.linear_sync_root == root
                assert settings.specify_dir == root / ".specify"
                assert settings.mapping_path == root / ".specify" / "linear-mapping.json"

    def test_load_from_env_file(self, clean_cwd: Path):
        """Test values are read from root/.env."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            (root / ".env").write_text("LINEAR_API_KEY=from-env-file\nLINEAR_TEAM_ID=t1\n")

            with patch.dict(os.environ, {}, clear=True):
                settings = load_settings(root)

                assert settings.linear_api_key == "from-env-file"
                assert settings.linear_team_id == "t1"

    def test_load_from_specify_env_file(self, clean_cwd: Path):
        """Test root/.specify/.env is used when root/.env is absent."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            (root / ".specify").mkdir()
            (root / ".specify" / ".env").write_text("LINEAR_TEAM_ID=from-specify\n")

            with patch.dict(os.environ, {}, clear=True):
                settings = load_settings(root)

                assert settings.linear_team_id == "from-specify"


class TestPathConfiguration:
    """Test path configuration."""

    def test_mapping_path_override(self, clean_cwd: Path):
        """Test MAPPING_FILE_PATH is resolved against the root."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()

            with patch.dict(os.environ, {"MAPPING_FILE_PATH": "state/map.json"}, clear=True):
                settings = load_settings(root)

                assert settings.mapping_path == root / "state" / "map.json"

    def test_absolute_mapping_path_override(self, clean_cwd: Path):
        """Test an absolute MAPPING_FILE_PATH is used as is."""
        with patch.dict(os.environ, {"MAPPING_FILE_PATH": "/var/lib/map.json"}, clear=True):
            settings = load_settings(clean_cwd)

            assert settings.mapping_path == Path("/var/lib/map.json")

    def test_paths_are_absolute(self, clean_cwd: Path):
        """Test that derived paths are absolute."""
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings(clean_cwd)

            assert settings.linear_sync_root.is_absolute()
            assert settings.mapping_path.is_absolute()
