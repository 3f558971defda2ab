"""Tests for the pyproject package list."""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

ROOT = Path(__file__).resolve().parent.parent


def test_every_source_directory_is_packaged():
    with open(ROOT / "pyproject.toml", "rb") as f:
        pyproject = tomllib.load(f)

    packages = set(pyproject["tool"]["setuptools"]["packages"])
    source_dirs = {
        ".".join(path.parent.relative_to(ROOT).parts)
        for path in (ROOT / "wordbatch").rglob("*.py")
    }

    assert source_dirs <= packages


def test_console_script_module_is_packaged():
    with open(ROOT / "pyproject.toml", "rb") as f:
        pyproject = tomllib.load(f)

    target = pyproject["project"]["scripts"]["wordbatch"]
    module = target.split(":")[0].rsplit(".", 1)[0]
    assert module in pyproject["tool"]["setuptools"]["packages"]
