from __future__ import annotations

import re
from dataclasses import dataclass, field

SEPARATOR = '/'
_SEPARATOR_RUN = re.compile('/+')


def clean_path(path: str | None) -> str:
    if not path:
        return ''
    return _SEPARATOR_RUN.sub(SEPARATOR, path).strip(SEPARATOR)


@dataclass(frozen=True)
class TreePath:
    """Location in a tree: a cleaned "/"-joined string, root is ''."""

    path: str
    components: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        cleaned = clean_path(self.path)
        object.__setattr__(self, 'path', cleaned)
        object.__setattr__(self, 'components', tuple(cleaned.split(SEPARATOR)) if cleaned else ())

    @property
    def name(self) -> str:
        return self.components[-1] if self.components else ''

    def __str__(self) -> str:
        return self.path


ROOT = TreePath('')


def as_path(path: str | TreePath | None) -> TreePath:
    if isinstance(path, TreePath):
        return path
    return TreePath(path or '')


def path_string(path: str | TreePath | None) -> str:
    if isinstance(path, TreePath):
        return path.path
    return clean_path(path)


def is_root(path: str | TreePath | None) -> bool:
    return path_string(path) == ''


def has_root(path: str | TreePath, root: str | TreePath) -> bool:
    p = path_string(path)
    r = path_string(root)
    return r == '' or p == r or p.startswith(r + SEPARATOR)


def remove_prefix(prefix: str | TreePath, path: str | TreePath) -> str:
    """Strip ``prefix`` from ``path``; a path outside ``prefix`` comes back unchanged."""
    p = path_string(path)
    r = path_string(prefix)
    if not has_root(p, r):
        return p
    return clean_path(p[len(r):])


def append_path(prefix: str | TreePath, path: str | TreePath) -> str:
    p = path_string(path)
    r = path_string(prefix)
    if not r:
        return p
    if not p:
        return r
    return r + SEPARATOR + p


def parent_path(path: str | TreePath) -> TreePath:
    components = as_path(path).components
    return TreePath(SEPARATOR.join(components[:-1]))


def child_under(parent: str | TreePath, path: str | TreePath) -> TreePath | None:
    """Immediate child of ``parent`` on the way to ``path``, or None if ``path`` is not strictly beneath it."""
    p = as_path(path)
    r = as_path(parent)
    if p == r or not has_root(p, r):
        return None
    return TreePath(append_path(r, p.components[len(r.components)]))
