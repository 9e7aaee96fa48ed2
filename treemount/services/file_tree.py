from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from ..errors import StorageEvent, already_exists, not_found
from .path_util import TreePath, as_path, path_string
from .resources import BaseResource, ContentMeta, Resource, directory_resource

logger = logging.getLogger(__name__)


def validate_path(requested_path: str, base_dir: Path) -> Path:
    base = base_dir.resolve(strict=False)
    candidate = (base / requested_path.lstrip('/')).resolve(strict=False)
    if base != candidate and base not in candidate.parents:
        raise PermissionError('Path traversal detected')
    return candidate


def _atomic_write_bytes(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=f'.{path.name}.', suffix='.tmp', dir=str(path.parent))
    try:
        with os.fdopen(fd, 'wb') as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
        dir_fd = os.open(str(path.parent), os.O_RDONLY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)
    except Exception:
        Path(tmp_path).unlink(missing_ok=True)
        raise


class FileTree:
    """Tree stored on disk: content under ``<root>/content``, metadata as JSON under ``<root>/meta``."""

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()
        self.content_dir = self.root / 'content'
        self.meta_dir = self.root / 'meta'

    def content_file(self, path: str | TreePath) -> Path:
        return validate_path(path_string(path), self.content_dir)

    def meta_file(self, path: str | TreePath) -> Path:
        return validate_path(path_string(path), self.meta_dir)

    def has_path(self, path: str | TreePath) -> bool:
        return self.has_resource(path) or self.has_directory(path)

    def has_resource(self, path: str | TreePath) -> bool:
        return self.content_file(path).is_file()

    def has_directory(self, path: str | TreePath) -> bool:
        target = as_path(path)
        return not target.components or self.content_file(target).is_dir()

    def _load(self, target: TreePath) -> BaseResource:
        data = self.content_file(target).read_bytes()
        meta_file = self.meta_file(target)
        meta = json.loads(meta_file.read_text(encoding='utf-8')) if meta_file.is_file() else {}
        return BaseResource(target, ContentMeta(data, meta), False)

    def get_resource(self, path: str | TreePath) -> Resource:
        target = as_path(path)
        if not self.has_resource(target):
            raise not_found(StorageEvent.READ, target)
        return self._load(target)

    def get_path(self, path: str | TreePath) -> Resource:
        target = as_path(path)
        if self.has_directory(target):
            return directory_resource(target)
        return self.get_resource(target)

    def list_directory(self, path: str | TreePath) -> set[Resource]:
        target = as_path(path)
        if not self.has_directory(target):
            raise not_found(StorageEvent.LIST, target)

        directory = self.content_file(target)
        if not directory.exists():
            return set()

        out: set[Resource] = set()
        for entry in directory.iterdir():
            if entry.name.startswith('.') and entry.name.endswith('.tmp'):
                continue
            child = TreePath(entry.relative_to(self.content_dir).as_posix())
            out.add(directory_resource(child) if entry.is_dir() else self._load(child))
        return out

    def list_directory_subdirs(self, path: str | TreePath) -> set[Resource]:
        return {r for r in self.list_directory(path) if r.is_directory}

    def list_directory_resources(self, path: str | TreePath) -> set[Resource]:
        return {r for r in self.list_directory(path) if not r.is_directory}

    def _write(self, target: TreePath, data: ContentMeta) -> BaseResource:
        _atomic_write_bytes(self.content_file(target), data.data)
        _atomic_write_bytes(self.meta_file(target), json.dumps(data.meta, sort_keys=True).encode('utf-8'))
        return BaseResource(target, data, False)

    def _blocked_by_file(self, target: TreePath) -> bool:
        parts = target.components[:-1]
        return any(self.content_file('/'.join(parts[: i + 1])).is_file() for i in range(len(parts)))

    def create_resource(self, path: str | TreePath, data: ContentMeta) -> Resource:
        target = as_path(path)
        if self.has_path(target) or not target.components or self._blocked_by_file(target):
            raise already_exists(target)
        resource = self._write(target, data)
        logger.info('Created resource %s (%d bytes)', target, len(data.data))
        return resource

    def update_resource(self, path: str | TreePath, data: ContentMeta) -> Resource:
        target = as_path(path)
        if not self.has_resource(target):
            raise not_found(StorageEvent.UPDATE, target)
        resource = self._write(target, data)
        logger.info('Updated resource %s (%d bytes)', target, len(data.data))
        return resource

    def delete_resource(self, path: str | TreePath) -> bool:
        target = as_path(path)
        if not self.has_resource(target):
            return False

        self.content_file(target).unlink(missing_ok=False)
        self.meta_file(target).unlink(missing_ok=True)
        self._prune(self.content_file(target).parent, self.content_dir)
        self._prune(self.meta_file(target).parent, self.meta_dir)
        logger.info('Deleted resource %s', target)
        return True

    @staticmethod
    def _prune(directory: Path, stop: Path) -> None:
        while directory != stop and stop in directory.parents:
            if any(directory.iterdir()):
                return
            os.rmdir(directory)
            directory = directory.parent
