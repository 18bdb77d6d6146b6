from __future__ import annotations

import tomllib
from importlib import metadata
from pathlib import Path

DIST_NAME = "domain-validate"


def get_version() -> str:
    """
    Return the distribution version.

    A source checkout's ``pyproject.toml`` wins so editable installs report the
    version being worked on; otherwise installed metadata is used.
    """
    version = _pyproject_version(Path(__file__).resolve().parents[2] / "pyproject.toml")
    if version:
        return version
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _pyproject_version(pyproject: Path) -> str | None:
    if not pyproject.is_file():
        return None
    with pyproject.open("rb") as fh:
        data = tomllib.load(fh)
    project = data.get("project", {})
    if project.get("name") != DIST_NAME:
        return None
    version = project.get("version")
    return version if isinstance(version, str) else None
