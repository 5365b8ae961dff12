"""vlmatch package version.

A ``_version`` file next to this module (written at release time) wins;
otherwise the installed distribution metadata is used, and a plain source
checkout reports the version declared in pyproject.toml.
"""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "vision-language-matching"
FALLBACK_VERSION = "0.1.0"


def get_version() -> str:
    version_file = Path(__file__).parent / "_version"
    if version_file.exists():
        return version_file.read_text().strip()
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return FALLBACK_VERSION


__version__ = get_version()
