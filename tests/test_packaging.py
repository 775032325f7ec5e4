"""
Tests for the distribution metadata.
"""

import os

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = os.path.join(os.path.dirname(__file__), "..", "pyproject.toml")


def _load():
    with open(PYPROJECT, "rb") as f:
        return tomllib.load(f)


def test_only_coursefiles_packages_are_installed():
    setuptools = _load()["tool"]["setuptools"]

    assert "py-modules" not in setuptools
    assert all(name.split(".")[0] == "coursefiles" for name in setuptools["packages"])


def test_design_notes_are_not_the_long_description():
    assert "readme" not in _load()["project"]
