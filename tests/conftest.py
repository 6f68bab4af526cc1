"""Shared fixtures for the goswagtags test suite."""

from pathlib import Path

import pytest

TESTDATA = Path(__file__).parent / "testdata"


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "cli: tests that drive the command line entry point")


@pytest.fixture
def testdata_dir() -> Path:
    return TESTDATA


@pytest.fixture
def names_source() -> str:
    return (TESTDATA / "names.go").read_text(encoding="utf-8")


@pytest.fixture
def names_golden() -> str:
    return (TESTDATA / "names.golden").read_text(encoding="utf-8")


@pytest.fixture
def write_go(tmp_path):
    """Write a Go file below ``tmp_path`` and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
