"""Shared test fixtures."""

import pytest


@pytest.fixture
def compose_units():
    """Two layered compose files, base first."""
    return ["docker-compose.yml", "docker-compose.override.yml"]


@pytest.fixture
def compose_files(tmp_path):
    """Write compose units to tmp_path; returns a writer taking (name, yaml_text)."""

    def write(name, text):
        path = tmp_path / name
        path.write_text(text)
        return str(path)

    return write
