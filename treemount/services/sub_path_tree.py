from __future__ import annotations

import logging
from typing import Iterable

from .path_util import TreePath, append_path, as_path, has_root, is_root, remove_prefix
from .resources import ContentMeta, Resource, TranslatedResource, directory_resource
from .tree import Tree

logger = logging.getLogger(__name__)


class SubPathTree:
    """Mounts ``delegate`` at ``root_path``.

    With ``full_path`` off, ``<root_path>/a/b`` is stored in the delegate as
    ``a/b``. With it on, paths reach the delegate unchanged and only the
    mount point itself gets special treatment.
    """

    def __init__(self, delegate: Tree, root_path: str | TreePath, full_path: bool = False):
        self._delegate = delegate
        self._root_path = as_path(root_path)
        self._full_path = full_path

    @property
    def delegate(self) -> Tree:
        return self._delegate

    @property
    def root_path(self) -> TreePath:
        return self._root_path

    @property
    def full_path(self) -> bool:
        return self._full_path

    def get_sub_path(self) -> TreePath:
        return self._root_path

    def translate_path_internal(self, extpath: str | TreePath) -> str | TreePath:
        if isinstance(extpath, TreePath):
            return TreePath(self.translate_path_internal(extpath.path))
        if self._full_path:
            return extpath
        return remove_prefix(self._root_path, extpath)

    def translate_path_external(self, intpath: str | TreePath) -> str | TreePath:
        if isinstance(intpath, TreePath):
            return TreePath(self.translate_path_external(intpath.path))
        if self._full_path:
            return intpath
        return append_path(self._root_path, intpath)

    def is_local_root(self, path: str | TreePath) -> bool:
        # remove_prefix returns paths outside the mount unchanged
        return has_root(path, self._root_path) and is_root(remove_prefix(self._root_path, path))

    def _internal(self, path: str | TreePath) -> TreePath:
        internal = self.translate_path_internal(as_path(path))
        logger.debug('Translated %r to internal path %r under mount %r', str(path), internal.path, self._root_path.path)
        return internal

    def _external(self, resource: Resource) -> Resource:
        if self._full_path:
            return resource
        return TranslatedResource(resource, self.translate_path_external(resource.path))

    def _external_all(self, resources: Iterable[Resource]) -> set[Resource]:
        return {self._external(resource) for resource in resources}

    def _is_unmaterialized_root(self, path: str | TreePath) -> bool:
        return self.is_local_root(path) and not self._delegate.has_directory(self._internal(path))

    def has_path(self, path: str | TreePath) -> bool:
        return self.is_local_root(path) or self._delegate.has_path(self._internal(path))

    def has_resource(self, path: str | TreePath) -> bool:
        return not self.is_local_root(path) and self._delegate.has_resource(self._internal(path))

    def has_directory(self, path: str | TreePath) -> bool:
        return self.is_local_root(path) or self._delegate.has_directory(self._internal(path))

    def get_resource(self, path: str | TreePath) -> Resource:
        if self.is_local_root(path):
            # the mount point is only ever a directory
            raise ValueError(f'No resource for path: {as_path(path)}')
        return self._external(self._delegate.get_resource(self._internal(path)))

    def get_path(self, path: str | TreePath) -> Resource:
        if self._is_unmaterialized_root(path):
            return directory_resource(as_path(path))
        return self._external(self._delegate.get_path(self._internal(path)))

    def list_directory(self, path: str | TreePath) -> set[Resource]:
        if self._is_unmaterialized_root(path):
            return set()
        return self._external_all(self._delegate.list_directory(self._internal(path)))

    def list_directory_subdirs(self, path: str | TreePath) -> set[Resource]:
        if self._is_unmaterialized_root(path):
            return set()
        return self._external_all(self._delegate.list_directory_subdirs(self._internal(path)))

    def list_directory_resources(self, path: str | TreePath) -> set[Resource]:
        if self._is_unmaterialized_root(path):
            return set()
        return self._external_all(self._delegate.list_directory_resources(self._internal(path)))

    def create_resource(self, path: str | TreePath, data: ContentMeta) -> Resource:
        return self._external(self._delegate.create_resource(self._internal(path), data))

    def update_resource(self, path: str | TreePath, data: ContentMeta) -> Resource:
        return self._external(self._delegate.update_resource(self._internal(path), data))

    def delete_resource(self, path: str | TreePath) -> bool:
        return self._delegate.delete_resource(self._internal(path))
