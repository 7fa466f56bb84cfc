"""
Local filesystem content storage.

Keys map to paths below a root directory. A folder marker is a directory
holding a FOLDER_MARKER file; other directories exist only while they hold
files and are not reported as keys.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterator, Optional, Union

from ..models.content import StoredObject
from .base import ContentAssetsManager
from .errors import InvalidContentError, StorageBackendError
from .paths import RESERVED_PREFIX

logger = logging.getLogger(__name__)

TEMP_PREFIX = RESERVED_PREFIX + "tmp-"
FOLDER_MARKER = RESERVED_PREFIX + "folder"


class LocalContentAssetsManager(ContentAssetsManager):
    """Stores merchant assets on local disk."""

    backend_name = "local"

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageBackendError(f"Cannot create content root {self.root}: {e}")
        logger.info(f"Local content storage at {self.root}")

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if path != self.root and self.root not in path.parents:
            raise InvalidContentError(f"Key escapes content root: {key!r}")
        return path

    def _key(self, path: Path, is_dir: bool = False) -> str:
        key = path.relative_to(self.root).as_posix()
        return key + "/" if is_dir else key

    def _prune(self, directory: Path) -> None:
        """Remove empty directories from directory up to the root."""
        while directory != self.root and self.root in directory.parents:
            try:
                directory.rmdir()
            except FileNotFoundError:
                pass
            except OSError:
                # Still holds files or a folder marker
                return
            directory = directory.parent

    def put_object(self, key: str, data: bytes, mime_type: Optional[str] = None) -> None:
        path = self._path(key)
        try:
            if key.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                (path / FOLDER_MARKER).touch()
                return

            path.parent.mkdir(parents=True, exist_ok=True)
            # Write then rename so readers never see a partial file
            fd, tmp_name = tempfile.mkstemp(prefix=TEMP_PREFIX, dir=path.parent)
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageBackendError(f"Failed to write {key}: {e}", details={"key": key})

    def get_object(self, key: str) -> Optional[StoredObject]:
        path = self._path(key)
        try:
            if not path.is_file():
                return None
            return StoredObject(data=path.read_bytes())
        except OSError as e:
            raise StorageBackendError(f"Failed to read {key}: {e}", details={"key": key})

    def list_keys(self, prefix: str) -> Iterator[str]:
        head, _, _ = prefix.rpartition("/")
        base = self._path(head) if head else self.root
        if not base.is_dir():
            return

        keys = []
        for dirpath, _, filenames in os.walk(base):
            current = Path(dirpath)
            for name in filenames:
                if name == FOLDER_MARKER:
                    if current != self.root:
                        keys.append(self._key(current, is_dir=True))
                elif not name.startswith(RESERVED_PREFIX):
                    keys.append(self._key(current / name))

        for key in sorted(keys):
            if key.startswith(prefix):
                yield key

    def delete_object(self, key: str) -> bool:
        path = self._path(key)
        try:
            if key.endswith("/"):
                marker = path / FOLDER_MARKER
                if not marker.is_file():
                    return False
                marker.unlink()
                self._prune(path)
                return True
            path.unlink()
            self._prune(path.parent)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageBackendError(f"Failed to delete {key}: {e}", details={"key": key})

    def delete_prefix(self, prefix: str) -> int:
        keys = list(self.list_keys(prefix))
        if not keys:
            return 0

        try:
            if prefix.endswith("/"):
                path = self._path(prefix)
                shutil.rmtree(path)
                self._prune(path.parent)
            else:
                for key in keys:
                    self.delete_object(key)
        except OSError as e:
            raise StorageBackendError(f"Failed to delete {prefix}: {e}", details={"prefix": prefix})
        return len(keys)

    def ping(self) -> bool:
        return self.root.is_dir() and os.access(self.root, os.W_OK)
