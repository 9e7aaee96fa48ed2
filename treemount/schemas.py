from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from .services.resources import Resource


class ContentRequest(BaseModel):
    content: str
    content_type: str = Field(default='application/octet-stream', min_length=1, max_length=128)
    meta: dict[str, str] = Field(default_factory=dict)


class ResourceOut(BaseModel):
    path: str
    name: str
    type: str = Field(pattern='^(directory|file)$')
    meta: Optional[dict[str, str]] = None
    content: Optional[str] = None
    resources: Optional[list[ResourceOut]] = None

    @classmethod
    def from_resource(cls, resource: Resource, with_content: bool = False) -> ResourceOut:
        if resource.is_directory:
            return cls(path=resource.path.path, name=resource.path.name, type='directory')

        contents = resource.contents
        out = cls(
            path=resource.path.path,
            name=resource.path.name,
            type='file',
            meta=dict(contents.meta) if contents else {},
        )
        if with_content and contents is not None:
            out.content = contents.data.decode('utf-8', errors='replace')
        return out


class ApiResponse(BaseModel):
    ok: bool
    message: str
    data: Optional[Any] = None
