from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .path_util import TreePath


@dataclass(frozen=True, eq=False)
class ContentMeta:
    data: bytes = b''
    meta: dict[str, str] = field(default_factory=dict)

    @property
    def content_type(self) -> str:
        return self.meta.get('Content-Type', 'application/octet-stream')


class Resource(Protocol):
    @property
    def path(self) -> TreePath:
        ...

    @property
    def contents(self) -> Optional[ContentMeta]:
        ...

    @property
    def is_directory(self) -> bool:
        ...


@dataclass(frozen=True)
class BaseResource:
    path: TreePath
    contents: Optional[ContentMeta] = None
    is_directory: bool = False


def directory_resource(path: TreePath) -> BaseResource:
    return BaseResource(path, None, True)


@dataclass(frozen=True)
class TranslatedResource:
    """Resource seen under another path; everything but ``path`` reads through to ``delegate``."""

    delegate: Resource
    path: TreePath

    @property
    def contents(self) -> Optional[ContentMeta]:
        return self.delegate.contents

    @property
    def is_directory(self) -> bool:
        return self.delegate.is_directory
