"""Tests for configuration loading and XDG paths."""

import pytest

from flaremail.config import (
    Config,
    ConfigError,
    ensure_directories,
    get_xdg_config_home,
)


class TestXdgPaths:
    def test_env_override(self, xdg_dirs):
        assert get_xdg_config_home() == xdg_dirs["XDG_CONFIG_HOME"] / "flaremail"
        assert Config.database_path() == xdg_dirs["XDG_DATA_HOME"] / "flaremail" / "flaremail.db"
        assert Config.log_file_path() == xdg_dirs["XDG_STATE_HOME"] / "flaremail" / "flaremail.log"

    def test_ensure_directories(self, xdg_dirs):
        dirs = ensure_directories()

        assert all(path.is_dir() for path in dirs.values())


class TestConfig:
    def test_defaults_when_missing(self, tmp_path):
        config = Config.load(tmp_path / "missing.toml")

        assert config.importing.separator == "----"
        assert config.directory.page_size == 10
        assert config.directory.page_size_options == [10, 20, 50]
        assert config.session.default_folder == "INBOX"
        assert config.session.report_sync_failures is True
        assert config.folders.junk_terms == ["junk", "spam", "垃圾"]
        assert config.notifications.duration_ms == 2000

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.toml"
        config = Config()
        config.importing.separator = "|"
        config.directory.page_size = 20
        config.session.report_sync_failures = False
        config.folders.junk_terms = ["junk", "bulk"]

        config.save(path)
        loaded = Config.load(path)

        assert loaded.importing.separator == "|"
        assert loaded.directory.page_size == 20
        assert loaded.session.report_sync_failures is False
        assert loaded.folders.junk_terms == ["junk", "bulk"]

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[session]\ndefault_folder = "junk"\n', encoding="utf-8")

        config = Config.load(path)

        assert config.session.default_folder == "JUNK"
        assert config.importing.separator == "----"

    @pytest.mark.parametrize("toml", [
        '[import]\nseparator = ""\n',
        "[directory]\npage_size = 15\n",
        "[directory]\npage_size = 10\npage_size_options = [0, 10]\n",
        '[session]\ndefault_folder = "archive"\n',
        "[notifications]\nduration_ms = -1\n",
        "not = valid = toml\n",
    ])
    def test_invalid_values(self, tmp_path, toml):
        path = tmp_path / "config.toml"
        path.write_text(toml, encoding="utf-8")

        with pytest.raises(ConfigError):
            Config.load(path)

    @pytest.mark.parametrize("toml", [
        'import = "----"\n',
        "[import]\nseparator = 4\n",
        '[directory]\npage_size = "10"\n',
        "[directory]\npage_size = true\npage_size_options = [10, 20]\n",
        '[directory]\npage_size = 10\npage_size_options = ["10"]\n',
        "[directory]\npage_size = 10\npage_size_options = 10\n",
        "[session]\ndefault_folder = 1\n",
        '[session]\nreport_sync_failures = "yes"\n',
        '[folders]\njunk_terms = "spam"\n',
        "[folders]\njunk_terms = [1, 2]\n",
        '[notifications]\nduration_ms = "2000"\n',
        "[updates]\nrelease_url = 42\n",
    ])
    def test_wrong_types_raise_config_error(self, tmp_path, toml):
        path = tmp_path / "config.toml"
        path.write_text(toml, encoding="utf-8")

        with pytest.raises(ConfigError):
            Config.load(path)

    def test_release_url_is_read(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[updates]\nrelease_url = "https://example.com/dl"\n', encoding="utf-8")

        config = Config.load(path)

        assert config.updates.release_url == "https://example.com/dl"
