from __future__ import annotations

import logging
from typing import Callable, Optional

from ..config import Settings
from .file_tree import FileTree
from .memory_tree import MemoryTree
from .path_util import TreePath, as_path, child_under, has_root
from .resources import ContentMeta, Resource, directory_resource
from .sub_path_tree import SubPathTree
from .tree import SelectiveTree, Tree

logger = logging.getLogger(__name__)


class TreeStack:
    """Routes each path to the mounted tree whose sub path contains it, else to the base tree."""

    def __init__(self, trees: list[SelectiveTree], base: Tree):
        # deepest sub path first
        self._trees = sorted(trees, key=lambda t: len(t.get_sub_path().components), reverse=True)
        self._base = base

    @property
    def trees(self) -> list[SelectiveTree]:
        return list(self._trees)

    @property
    def base(self) -> Tree:
        return self._base

    def select(self, path: str | TreePath) -> Tree:
        for tree in self._trees:
            if has_root(path, tree.get_sub_path()):
                return tree
        return self._base

    def _mount_dirs(self, path: TreePath) -> set[Resource]:
        out: set[Resource] = set()
        for tree in self._trees:
            child = child_under(path, tree.get_sub_path())
            if child is not None:
                out.add(directory_resource(child))
        return out

    def _listing(self, path: str | TreePath, lister: Callable[[Tree], set[Resource]]) -> set[Resource]:
        target = as_path(path)
        mounts = self._mount_dirs(target)
        tree = self.select(target)
        if mounts and not tree.has_directory(target):
            return mounts

        listed = lister(tree)
        # mount directories shadow same-named entries of the selected tree
        shadowed = {r.path for r in mounts}
        return {r for r in listed if r.path not in shadowed} | mounts

    def has_path(self, path: str | TreePath) -> bool:
        return bool(self._mount_dirs(as_path(path))) or self.select(path).has_path(path)

    def has_resource(self, path: str | TreePath) -> bool:
        return self.select(path).has_resource(path)

    def has_directory(self, path: str | TreePath) -> bool:
        return bool(self._mount_dirs(as_path(path))) or self.select(path).has_directory(path)

    def get_resource(self, path: str | TreePath) -> Resource:
        return self.select(path).get_resource(path)

    def get_path(self, path: str | TreePath) -> Resource:
        target = as_path(path)
        tree = self.select(target)
        if self._mount_dirs(target) and not tree.has_directory(target):
            return directory_resource(target)
        return tree.get_path(target)

    def list_directory(self, path: str | TreePath) -> set[Resource]:
        return self._listing(path, lambda tree: tree.list_directory(path))

    def list_directory_subdirs(self, path: str | TreePath) -> set[Resource]:
        return self._listing(path, lambda tree: tree.list_directory_subdirs(path))

    def list_directory_resources(self, path: str | TreePath) -> set[Resource]:
        target = as_path(path)
        tree = self.select(target)
        if self._mount_dirs(target) and not tree.has_directory(target):
            return set()
        return tree.list_directory_resources(target)

    def create_resource(self, path: str | TreePath, data: ContentMeta) -> Resource:
        return self.select(path).create_resource(path, data)

    def update_resource(self, path: str | TreePath, data: ContentMeta) -> Resource:
        return self.select(path).update_resource(path, data)

    def delete_resource(self, path: str | TreePath) -> bool:
        return self.select(path).delete_resource(path)


class TreeBuilder:
    def __init__(self):
        self._base: Optional[Tree] = None
        self._trees: list[SelectiveTree] = []

    @classmethod
    def builder(cls) -> TreeBuilder:
        return cls()

    def base(self, tree: Tree) -> TreeBuilder:
        self._base = tree
        return self

    def sub_tree(self, path: str | TreePath, tree: Tree, full_path: bool = False) -> TreeBuilder:
        self._trees.append(SubPathTree(tree, path, full_path))
        return self

    def build(self) -> TreeStack:
        return TreeStack(self._trees, self._base if self._base is not None else MemoryTree())


def build_tree(settings: Settings) -> TreeStack:
    full_path = not settings.remove_path_prefix
    logger.info(
        'Mounting file storage %s at /%s (full path: %s)',
        settings.storage_root,
        as_path(settings.mount_path),
        full_path,
    )
    return (
        TreeBuilder.builder()
        .base(MemoryTree())
        .sub_tree(settings.mount_path, FileTree(settings.storage_root), full_path=full_path)
        .build()
    )
