from __future__ import annotations

import threading

from ..errors import StorageEvent, already_exists, not_found
from .path_util import TreePath, as_path, child_under, has_root
from .resources import BaseResource, ContentMeta, Resource, directory_resource


class MemoryTree:
    def __init__(self):
        self._resources: dict[TreePath, BaseResource] = {}
        self._lock = threading.Lock()

    def has_path(self, path: str | TreePath) -> bool:
        return self.has_resource(path) or self.has_directory(path)

    def has_resource(self, path: str | TreePath) -> bool:
        with self._lock:
            return as_path(path) in self._resources

    def has_directory(self, path: str | TreePath) -> bool:
        target = as_path(path)
        if not target.components:
            return True
        with self._lock:
            return any(child_under(target, p) is not None for p in self._resources)

    def get_resource(self, path: str | TreePath) -> Resource:
        target = as_path(path)
        with self._lock:
            resource = self._resources.get(target)
        if resource is None:
            raise not_found(StorageEvent.READ, target)
        return resource

    def get_path(self, path: str | TreePath) -> Resource:
        target = as_path(path)
        if self.has_resource(target):
            return self.get_resource(target)
        if self.has_directory(target):
            return directory_resource(target)
        raise not_found(StorageEvent.READ, target)

    def list_directory(self, path: str | TreePath) -> set[Resource]:
        target = as_path(path)
        if not self.has_directory(target):
            raise not_found(StorageEvent.LIST, target)

        out: set[Resource] = set()
        with self._lock:
            for stored, resource in self._resources.items():
                child = child_under(target, stored)
                if child is None:
                    continue
                out.add(resource if child == stored else directory_resource(child))
        return out

    def list_directory_subdirs(self, path: str | TreePath) -> set[Resource]:
        return {r for r in self.list_directory(path) if r.is_directory}

    def list_directory_resources(self, path: str | TreePath) -> set[Resource]:
        return {r for r in self.list_directory(path) if not r.is_directory}

    def create_resource(self, path: str | TreePath, data: ContentMeta) -> Resource:
        target = as_path(path)
        with self._lock:
            taken = any(has_root(stored, target) or has_root(target, stored) for stored in self._resources)
            if taken or not target.components:
                raise already_exists(target)
            resource = BaseResource(target, data, False)
            self._resources[target] = resource
        return resource

    def update_resource(self, path: str | TreePath, data: ContentMeta) -> Resource:
        target = as_path(path)
        with self._lock:
            if target not in self._resources:
                raise not_found(StorageEvent.UPDATE, target)
            resource = BaseResource(target, data, False)
            self._resources[target] = resource
        return resource

    def delete_resource(self, path: str | TreePath) -> bool:
        with self._lock:
            return self._resources.pop(as_path(path), None) is not None
