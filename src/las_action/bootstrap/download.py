"""Secure download and extraction of scanner release archives.

Downloads use certifi's CA bundle so verification works the same on
every runner image, including macOS where Python cannot reach the
system certificate store.
"""

from __future__ import annotations

import shutil
import ssl
import tarfile
import tempfile
from pathlib import Path
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

import certifi

from las_action import __version__
from las_action.core.errors import InstallError
from las_action.core.logging import get_logger

LOGGER = get_logger(__name__)

RELEASE_HOST = "https://github.com"


def get_ssl_context() -> ssl.SSLContext:
    """Get an SSL context that uses certifi's CA bundle."""
    return ssl.create_default_context(cafile=certifi.where())


def secure_urlopen(url: str, timeout: Optional[float] = None):
    """Open a URL with proper SSL certificate verification.

    Args:
        url: The URL to open.
        timeout: Connection timeout in seconds; None leaves it to the runner.

    Returns:
        A file-like object for reading the response.

    Raises:
        URLError: If the URL cannot be opened.
        ValueError: If the URL is not HTTPS.
    """
    if not url.startswith("https://"):
        raise ValueError(f"Only HTTPS URLs are supported: {url}")

    request = Request(url, headers={"User-Agent": f"las-action/{__version__}"})
    return urlopen(request, timeout=timeout, context=get_ssl_context())  # nosec B310


def download_tool(url: str) -> Path:
    """Download a release archive to a temporary file.

    Returns:
        Path to the downloaded file. The caller owns and deletes it.

    Raises:
        InstallError: If the download fails.
    """
    fd, name = tempfile.mkstemp(suffix=".tar.gz")
    temp_path = Path(name)
    try:
        with open(fd, "wb") as f, secure_urlopen(url) as response:
            shutil.copyfileobj(response, f)
    except HTTPError as e:
        temp_path.unlink(missing_ok=True)
        raise InstallError(f"Failed to download {url}: HTTP {e.code} - {e.reason}") from e
    except URLError as e:
        temp_path.unlink(missing_ok=True)
        raise InstallError(f"Failed to download {url}: {e.reason}") from e
    except (OSError, ValueError) as e:
        temp_path.unlink(missing_ok=True)
        raise InstallError(f"Failed to download {url}: {e}") from e

    LOGGER.debug(f"Downloaded {url} to {temp_path}")
    return temp_path


def extract_tar(archive_path: Path, dest_dir: Path) -> Path:
    """Extract a .tar.gz archive into dest_dir.

    Members that would land outside dest_dir are rejected before anything
    is written.

    Returns:
        The destination directory.

    Raises:
        InstallError: If the archive is unreadable or unsafe.
    """
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        root = dest_dir.resolve()
        with tarfile.open(archive_path, "r:gz") as tar:
            members = tar.getmembers()
            for member in members:
                member_path = (root / member.name).resolve()
                if not member_path.is_relative_to(root):
                    raise InstallError(f"Path traversal detected: {member.name}")
                if member.issym() or member.islnk():
                    raise InstallError(f"Links are not allowed in archive: {member.name}")
            tar.extractall(path=root, members=members, filter="data")
    except (tarfile.TarError, EOFError, OSError) as e:
        raise InstallError(f"Failed to extract {archive_path} into {dest_dir}: {e}") from e

    LOGGER.debug(f"Extracted {archive_path} into {dest_dir}")
    return dest_dir
