"""Version management for vidprobe."""

import tomllib
from importlib import metadata
from pathlib import Path


def get_version() -> str:
    """Get the current version from pyproject.toml, or from the installed
    distribution when running outside a source checkout."""
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"

    if pyproject_path.exists():
        try:
            with open(pyproject_path, "rb") as f:
                return tomllib.load(f)["project"]["version"]
        except (OSError, tomllib.TOMLDecodeError, KeyError):
            pass

    try:
        return metadata.version("vidprobe")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__version__ = get_version()
