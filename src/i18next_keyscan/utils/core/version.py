"""
Version utilities for i18next-keyscan.

The version comes from the installed distribution metadata, falling back to
the pyproject.toml of a source checkout.
"""

import logging
import tomllib
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "i18next-keyscan"
UNKNOWN_VERSION = "0.0.0+unknown"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """
    Get the project version.

    Returns:
        Version string (e.g., "1.0.0"), or ``UNKNOWN_VERSION`` when neither
        the distribution metadata nor pyproject.toml is available
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        logger.debug("Distribution metadata not found, falling back to pyproject.toml")

    pyproject_path = _find_pyproject()
    if pyproject_path is None:
        return UNKNOWN_VERSION

    try:
        with pyproject_path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug(f"Could not read {pyproject_path}: {e}")
        return UNKNOWN_VERSION

    project = data.get("project", {})
    found = project.get("version") if isinstance(project, dict) else None
    return found if isinstance(found, str) else UNKNOWN_VERSION


def _find_pyproject() -> Path | None:
    """Walk up from this file to the first pyproject.toml."""
    for directory in Path(__file__).resolve().parents:
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None
