"""Tests for configuration loading."""

from pathlib import Path

import pytest
from urlshort.config import Config, RedirectsConfig, ServerConfig


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / "urlshort.toml"
        config_file.write_text("""
[server]
host = "127.0.0.1"
port = 3000

[redirects]
yaml_file = "redirects/links.yaml"
""")

        config = Config.load(config_file)

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 3000
        assert config.redirects.yaml_file == tmp_path / "redirects/links.yaml"
        assert config.config_path == config_file

    def test__minimal_config__uses_defaults(self, tmp_path: Path) -> None:
        """Load minimal config with defaults relative to config file."""
        config_file = tmp_path / "urlshort.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 8080
        assert config.redirects.yaml_file == tmp_path / "pathsToUrls.yaml"

    def test__missing_explicit_path__raises_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "nonexistent.toml")

    def test__no_config_discovered__returns_defaults(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Use defaults when no urlshort.toml exists up the tree."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(Config, "_discover_config", classmethod(lambda cls: None))

        config = Config.load()

        assert config == Config.default()
        assert config.redirects.yaml_file == Path("pathsToUrls.yaml")
        assert config.config_path is None

    def test__config_in_parent__is_discovered(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Search parent directories for urlshort.toml."""
        config_file = tmp_path / "urlshort.toml"
        config_file.write_text("[server]\nport = 9000\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = Config.load()

        assert config.config_path == config_file
        assert config.server.port == 9000

    def test__invalid_toml__raises_value_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "urlshort.toml"
        config_file.write_text("[server\n")

        with pytest.raises(ValueError, match="Invalid configuration file"):
            Config.load(config_file)

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('server = "x"', "server section must be a dictionary"),
            ("[server]\nhost = 1", "server.host must be a string"),
            ('[server]\nport = "8080"', "server.port must be an integer"),
            ("[server]\nport = true", "server.port must be an integer"),
            ("[server]\nport = 70000", "server.port must be between"),
            ("redirects = 1", "redirects section must be a dictionary"),
            ("[redirects]\nyaml_file = 3", "redirects.yaml_file must be a string"),
        ],
    )
    def test__invalid_values__raise_value_error(
        self,
        tmp_path: Path,
        content: str,
        message: str,
    ) -> None:
        config_file = tmp_path / "urlshort.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestWithOverrides:
    """Tests for Config.with_overrides()."""

    @pytest.fixture
    def config(self) -> Config:
        return Config(
            server=ServerConfig(host="0.0.0.0", port=8080),
            redirects=RedirectsConfig(yaml_file=Path("pathsToUrls.yaml")),
        )

    def test__no_overrides__returns_equal_config(self, config: Config) -> None:
        assert config.with_overrides() == config

    def test__overrides__replace_values(self, config: Config) -> None:
        """Apply every provided override."""
        result = config.with_overrides(
            host="127.0.0.1",
            port=9000,
            yaml_file=Path("other.yaml"),
        )

        assert result.server == ServerConfig(host="127.0.0.1", port=9000)
        assert result.redirects.yaml_file == Path("other.yaml")

    def test__partial_override__keeps_other_values(self, config: Config) -> None:
        result = config.with_overrides(port=9000)

        assert result.server.host == "0.0.0.0"
        assert result.server.port == 9000

    def test__overrides__do_not_mutate_original(self, config: Config) -> None:
        config.with_overrides(host="127.0.0.1", yaml_file=Path("other.yaml"))

        assert config.server.host == "0.0.0.0"
        assert config.redirects.yaml_file == Path("pathsToUrls.yaml")
