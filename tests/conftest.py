"""Shared pytest fixtures."""

import tempfile
from pathlib import Path

import pytest

from ulpm.utils.config import Config
from ulpm.utils.debug import Output


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def mock_ulpm_dir(temp_dir, monkeypatch):
    """Set up a mock ~/.config/ulpm directory."""
    ulpm_dir = temp_dir / ".ulpm"
    ulpm_dir.mkdir()
    monkeypatch.setenv("ULPM_DIR", str(ulpm_dir))
    monkeypatch.delenv("ULPM_DEBUG", raising=False)
    monkeypatch.delenv("ULPM_VERBOSE", raising=False)
    return ulpm_dir


@pytest.fixture
def project_dir(temp_dir, monkeypatch):
    """An empty project directory that is also the working directory."""
    project = temp_dir / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def config(mock_ulpm_dir):
    """Config with the built-in catalog only."""
    return Config(mock_ulpm_dir)


@pytest.fixture
def output():
    """Quiet output settings."""
    return Output()
