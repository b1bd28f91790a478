# Tests for Settings.
# Created: 2026-10-19

import pytest
from pydantic import ValidationError

from indexserve.config import DEFAULT_PORT, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("ROOT", "HOST", "PORT", "SORT_ENTRIES", "LOG_LEVEL"):
        monkeypatch.delenv(f"INDEXSERVE_{key}", raising=False)


class TestSettings:
    def test_defaults_serve_cwd_on_3000(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        settings = Settings.load()
        assert settings.root == tmp_path.resolve()
        assert settings.port == DEFAULT_PORT == 3000
        assert settings.host == "0.0.0.0"
        assert settings.sort_entries is False

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INDEXSERVE_PORT", "8080")
        monkeypatch.setenv("INDEXSERVE_ROOT", str(tmp_path))
        settings = Settings.load()
        assert settings.port == 8080
        assert settings.root == tmp_path.resolve()

    def test_explicit_overrides_win_and_none_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INDEXSERVE_PORT", "8080")
        settings = Settings.load(root=str(tmp_path), port=9000, host=None)
        assert settings.port == 9000
        assert settings.host == "0.0.0.0"

    def test_root_must_be_directory(self, tmp_path):
        (tmp_path / "file.txt").write_text("x")
        with pytest.raises(ValidationError):
            Settings(root=tmp_path / "file.txt")
        with pytest.raises(ValidationError):
            Settings(root=tmp_path / "missing")

    def test_port_range(self, tmp_path):
        with pytest.raises(ValidationError):
            Settings(root=tmp_path, port=70000)

    def test_log_level_normalized(self, tmp_path):
        assert Settings(root=tmp_path, log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            Settings(root=tmp_path, log_level="chatty")

    def test_frozen(self, tmp_path):
        settings = Settings(root=tmp_path)
        with pytest.raises(ValidationError):
            settings.port = 1234

    def test_root_dir_is_string(self, tmp_path):
        assert Settings(root=tmp_path).root_dir == str(tmp_path.resolve())
