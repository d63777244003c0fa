"""Version management for TubeRelay."""

import tomllib
from importlib import metadata
from pathlib import Path


def get_version() -> str:
    """Get the current version from the installed metadata or pyproject.toml."""
    try:
        return metadata.version("tuberelay")
    except metadata.PackageNotFoundError:
        pass

    project_root = Path(__file__).parent.parent.parent
    pyproject_path = project_root / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
            return data["project"]["version"]
    except (OSError, tomllib.TOMLDecodeError, KeyError):
        # Fallback version if we can't read it
        return "0.0.0"


__version__ = get_version()
