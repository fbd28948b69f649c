"""Installing the scanner binary.

Resolution order, cheapest first:
1. an executable already present in the runner tool cache,
2. an entry in the keyed cache,
3. a fresh download of the release archive (then saved to the keyed cache).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from las_action.bootstrap.cache import DirectoryCache, KeyedCache, cache_key
from las_action.bootstrap.download import RELEASE_HOST, download_tool, extract_tar
from las_action.bootstrap.paths import (
    SCANNER_BINARY,
    SCANNER_OWNER,
    SCANNER_REPO,
    ToolCachePaths,
    version_tag,
)
from las_action.bootstrap.platform import PlatformInfo, get_platform_info
from las_action.config.environment import ActionEnvironment
from las_action.core.errors import InstallError
from las_action.core.logging import get_logger
from las_action.core.workflow import add_path

LOGGER = get_logger(__name__)

SOURCE_LOCAL = "local"
SOURCE_CACHE = "cache"
SOURCE_DOWNLOAD = "download"


def construct_download_url(
    version: str, platform_info: PlatformInfo, host: str = RELEASE_HOST
) -> str:
    """Construct the release asset URL for a version and platform.

    Example:
        https://github.com/eliblock/less-advanced-security/releases/download/
        v0.2.0/less-advanced-security_0.2.0_linux_amd64.tar.gz
    """
    tag = version_tag(version)
    asset = f"{SCANNER_BINARY}_{version}_{platform_info.asset_suffix}.tar.gz"
    return f"{host}/{SCANNER_OWNER}/{SCANNER_REPO}/releases/download/{tag}/{asset}"


@dataclass(frozen=True)
class InstallResult:
    """A resolved scanner executable.

    Attributes:
        executable: Path to the scanner binary.
        version: Scanner version (without the "v" prefix).
        platform_info: Platform the binary was resolved for.
        source: Where it came from (local, cache or download).
    """

    executable: Path
    version: str
    platform_info: PlatformInfo
    source: str


class Installer:
    """Resolves the scanner executable for the current runner."""

    def __init__(
        self,
        env: ActionEnvironment,
        cache: Optional[KeyedCache] = None,
        platform_info: Optional[PlatformInfo] = None,
    ) -> None:
        self._env = env
        self._paths = ToolCachePaths(Path(env.tool_cache))
        self._cache = cache if cache is not None else DirectoryCache(env.cache_dir)
        self._platform_info = platform_info

    def install(self, version: str) -> InstallResult:
        """Return a runnable scanner executable for version.

        Raises:
            UnsupportedPlatformError: If the runner platform has no build.
            InstallError: If the download or extraction fails.
        """
        platform_info = self._platform_info or get_platform_info()
        LOGGER.debug(
            f"Detected platform '{platform_info.os}' and architecture '{platform_info.arch}'."
        )

        tag = version_tag(version)
        LOGGER.debug(f"Using version tag '{tag}'.")

        destination = self._paths.install_dir(tag, platform_info)
        executable = self._paths.executable(tag, platform_info)

        if executable.is_file():
            LOGGER.info(f"{SCANNER_BINARY} already installed at {executable}")
            return self._finish(executable, version, platform_info, SOURCE_LOCAL)

        key = cache_key(tag)
        if self._restore(executable, key):
            LOGGER.info(f"{SCANNER_BINARY} found in cache and restored to {executable}")
            return self._finish(executable, version, platform_info, SOURCE_CACHE)

        LOGGER.debug(f"{SCANNER_BINARY} not found in cache. Downloading instead.")
        self._download_and_unpack(version, platform_info, destination)
        if not executable.is_file():
            raise InstallError(
                f"Archive for {SCANNER_BINARY} {tag} did not contain {SCANNER_BINARY}"
            )
        try:
            executable.chmod(0o755)
        except OSError as e:
            raise InstallError(f"Failed to make {executable} executable: {e}") from e

        LOGGER.debug(f"Attempting to save {executable} to the cache")
        self._save(executable, key)

        LOGGER.info(f"{SCANNER_BINARY} installed at {executable}")
        return self._finish(executable, version, platform_info, SOURCE_DOWNLOAD)

    def _finish(
        self, executable: Path, version: str, platform_info: PlatformInfo, source: str
    ) -> InstallResult:
        add_path(executable.parent, self._env.github_path)
        return InstallResult(
            executable=executable,
            version=version,
            platform_info=platform_info,
            source=source,
        )

    def _restore(self, executable: Path, key: str) -> bool:
        try:
            found = self._cache.restore([executable], key)
        except Exception as e:
            LOGGER.warning(f"failed to restore '{executable}' from cache with key '{key}': {e}")
            return False
        if found:
            LOGGER.info(f"loaded {executable} from cache with key {found}")
            return True
        LOGGER.debug(f"did not find {executable} in cache with key {key}")
        return False

    def _save(self, executable: Path, key: str) -> None:
        try:
            saved = self._cache.save([executable], key)
        except Exception as e:
            LOGGER.warning(f"failed to save '{executable}' to cache with key '{key}': {e}")
            return
        if saved:
            LOGGER.info(f"saved '{executable}' to cache with key '{key}'")
        else:
            LOGGER.warning(f"failed to save '{executable}' to cache with key '{key}'")

    def _download_and_unpack(
        self, version: str, platform_info: PlatformInfo, destination: Path
    ) -> None:
        url = construct_download_url(version, platform_info)
        LOGGER.info(f"Downloading and unpacking {SCANNER_BINARY} from {url}")
        archive = download_tool(url)
        try:
            LOGGER.debug(f"Extracting {archive} into {destination}")
            extract_tar(archive, destination)
        finally:
            archive.unlink(missing_ok=True)
