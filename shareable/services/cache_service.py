"""
On-disk cache of rendered preview images.

One PNG per cache key, stored flat under the cache root as ``<key>.png``.
Entries are never evicted; a rebuild overwrites the existing file.
"""
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..core.config import settings
from ..core.errors import StorageFailure
from ..models import cache_key
from ..utils.debug import print_step

__all__ = ["CacheMiss", "CacheStore", "cache_key", "get_cache_store"]


class CacheMiss(KeyError):
    """No cached image exists for the key."""


class CacheStore:
    """Flat directory of PNG files addressed by cache key."""

    suffix = ".png"
    # Temporary files are created owner-only; published entries are world-readable
    file_mode = 0o644

    def __init__(self, root: Path):
        self.root = Path(root)

    def init(self) -> None:
        """Create the cache root if needed and warn when it is not writable."""
        self.root.mkdir(parents=True, exist_ok=True)
        if not os.access(self.root, os.W_OK):
            print_step("Cache Directory Not Writable", {
                "cache_dir": str(self.root),
                "message": "Cache may not work properly"
            }, "warning")
            return
        print_step("Cache Ready", {"cache_dir": str(self.root)}, "info")

    def path_for(self, key: str) -> Path:
        return self.root / f"{key}{self.suffix}"

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def read(self, key: str) -> bytes:
        """
        Read a cached image.

        Raises:
            CacheMiss: If nothing is stored under the key
        """
        try:
            return self.path_for(key).read_bytes()
        except FileNotFoundError:
            raise CacheMiss(key) from None

    def write(self, key: str, data: bytes) -> Path:
        """
        Store an image under the key, replacing any existing entry.

        The bytes go to a temporary file in the cache root first and are then
        moved into place, so a reader never sees a partially written PNG.

        Raises:
            StorageFailure: If the image could not be written
        """
        target = self.path_for(key)
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=self.root, prefix=f".{key}.", suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
            os.chmod(tmp_name, self.file_mode)
            os.replace(tmp_name, target)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            print_step("Cache Write Error", {"cache_path": str(target), "error": str(e)}, "error")
            raise StorageFailure(f"Failed to write cache entry {target.name}: {e}") from e

        print_step("Cache Write", {"cache_path": str(target), "size_bytes": len(data)}, "output")
        return target


_default_store: Optional[CacheStore] = None


def get_cache_store() -> CacheStore:
    """Process-wide cache store rooted at ``settings.CACHE_DIR``."""
    global _default_store
    if _default_store is None:
        _default_store = CacheStore(settings.CACHE_DIR)
    return _default_store
