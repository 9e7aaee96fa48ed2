from __future__ import annotations

from typing import Protocol

from .path_util import TreePath
from .resources import ContentMeta, Resource


class Tree(Protocol):
    def has_path(self, path: TreePath) -> bool:
        ...

    def has_resource(self, path: TreePath) -> bool:
        ...

    def has_directory(self, path: TreePath) -> bool:
        ...

    def get_resource(self, path: TreePath) -> Resource:
        ...

    def get_path(self, path: TreePath) -> Resource:
        ...

    def list_directory(self, path: TreePath) -> set[Resource]:
        ...

    def list_directory_subdirs(self, path: TreePath) -> set[Resource]:
        ...

    def list_directory_resources(self, path: TreePath) -> set[Resource]:
        ...

    def create_resource(self, path: TreePath, data: ContentMeta) -> Resource:
        ...

    def update_resource(self, path: TreePath, data: ContentMeta) -> Resource:
        ...

    def delete_resource(self, path: TreePath) -> bool:
        ...


class SelectiveTree(Tree, Protocol):
    def get_sub_path(self) -> TreePath:
        ...
