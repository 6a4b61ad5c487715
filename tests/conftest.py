"""Shared test fixtures."""

from pathlib import Path

import pytest
from urlshort.config import Config, RedirectsConfig, ServerConfig

FOO_YAML = """\
- path: /foo
  url: https://foo.com
"""


@pytest.fixture
def yaml_file(tmp_path: Path) -> Path:
    """Write a redirects file with a single /foo entry."""
    path = tmp_path / "pathsToUrls.yaml"
    path.write_text(FOO_YAML)
    return path


@pytest.fixture
def test_config(yaml_file: Path) -> Config:
    """Create a test configuration pointing at the yaml_file fixture."""
    return Config(
        server=ServerConfig(host="127.0.0.1", port=8080),
        redirects=RedirectsConfig(yaml_file=yaml_file),
    )
