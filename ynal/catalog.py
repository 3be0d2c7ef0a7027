"""
Discovery of license sources on disk.

Each ``<Name>.txt`` file becomes one LicenseData, exposed at ``/<name>``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Union

logger = logging.getLogger(__name__)

LICENSE_GLOB = "*.txt"


class LicenseLoadError(RuntimeError):
    """Raised when a license source cannot be read at startup."""


class DuplicateLicenseError(LicenseLoadError):
    """Raised when two license sources map to the same URL."""


@dataclass(frozen=True)
class LicenseData:
    """A license as loaded at startup. Serialized as title/content/url."""

    title: str
    text: str
    url: str

    def as_dict(self) -> Dict[str, str]:
        return {"title": self.title, "content": self.text, "url": self.url}


def title_for(path: Union[str, Path]) -> str:
    """Return the license title: the file name without its extension."""
    return Path(path).stem


def url_for(path: Union[str, Path]) -> str:
    """Return the URL path a license source is served at."""
    return "/" + title_for(path).lower()


def load_license(path: Union[str, Path]) -> LicenseData:
    """
    Read a single license source.

    Args:
        path: Path to the license text file.

    Returns:
        The loaded LicenseData.

    Raises:
        LicenseLoadError: If the file cannot be read or is not valid UTF-8.
    """
    path = Path(path)
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LicenseLoadError(f"could not read license {path}: {exc}") from exc

    return LicenseData(title=title_for(path), text=text, url=url_for(path))


def discover_licenses(directory: Union[str, Path], pattern: str = LICENSE_GLOB) -> List[LicenseData]:
    """
    Load every license source in ``directory`` matching ``pattern``.

    Files are loaded in lexical order of their names. Two files whose slugs
    collide (``MIT.txt`` and ``mit.txt``) abort loading rather than one
    silently shadowing the other.

    Args:
        directory: Directory holding the license sources.
        pattern: Glob pattern selecting license files.

    Returns:
        List of LicenseData, ordered by file name.

    Raises:
        LicenseLoadError: If the directory is missing or a file is unreadable.
        DuplicateLicenseError: If two sources share a URL.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise LicenseLoadError(f"license directory not found: {directory}")

    licenses: List[LicenseData] = []
    seen: Dict[str, Path] = {}
    for path in sorted(directory.glob(pattern), key=lambda p: p.name):
        url = url_for(path)
        if url in seen:
            raise DuplicateLicenseError(f"{path.name} and {seen[url].name} both map to {url}")
        seen[url] = path
        licenses.append(load_license(path))

    logger.info(f"Loaded {len(licenses)} license(s) from {directory}")
    return licenses
