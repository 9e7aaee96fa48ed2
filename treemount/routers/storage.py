from __future__ import annotations

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_tree
from ..errors import ResourceExistsError, ResourceNotFoundError, StorageError
from ..schemas import ApiResponse, ContentRequest, ResourceOut
from ..services.path_util import as_path
from ..services.resources import ContentMeta
from ..services.tree import Tree

router = APIRouter(prefix='/api/storage', tags=['storage'])


def _content(payload: ContentRequest) -> ContentMeta:
    meta = dict(payload.meta)
    meta['Content-Type'] = payload.content_type
    return ContentMeta(payload.content.encode('utf-8'), meta)


def _raise_http(exc: Exception) -> NoReturn:
    if isinstance(exc, ResourceNotFoundError):
        raise HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ResourceExistsError):
        raise HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, PermissionError):
        raise HTTPException(status_code=403, detail=str(exc))
    if isinstance(exc, ValueError):
        raise HTTPException(status_code=400, detail=str(exc))
    raise exc


@router.get('')
@router.get('/{path:path}')
def read_path(path: str = '', tree: Tree = Depends(get_tree)):
    target = as_path(path)
    try:
        if not tree.has_path(target):
            raise HTTPException(status_code=404, detail=f'Path does not exist: {target}')

        if tree.has_directory(target):
            out = ResourceOut.from_resource(tree.get_path(target))
            children = sorted(tree.list_directory(target), key=lambda r: r.path.path)
            out.resources = [ResourceOut.from_resource(child) for child in children]
        else:
            out = ResourceOut.from_resource(tree.get_resource(target), with_content=True)
    except (StorageError, PermissionError, ValueError) as exc:
        _raise_http(exc)
    return {'ok': True, 'data': out}


@router.post('/{path:path}')
def create_path(path: str, payload: ContentRequest, tree: Tree = Depends(get_tree)):
    target = as_path(path)
    try:
        if tree.has_resource(target):
            raise HTTPException(status_code=409, detail=f'Path already exists: {target}')
        resource = tree.create_resource(target, _content(payload))
    except (StorageError, PermissionError, ValueError) as exc:
        _raise_http(exc)
    return ApiResponse(ok=True, message='Created', data=ResourceOut.from_resource(resource))


@router.put('/{path:path}')
def update_path(path: str, payload: ContentRequest, tree: Tree = Depends(get_tree)):
    target = as_path(path)
    try:
        if not tree.has_resource(target):
            raise HTTPException(status_code=404, detail=f'Path does not exist: {target}')
        resource = tree.update_resource(target, _content(payload))
    except (StorageError, PermissionError, ValueError) as exc:
        _raise_http(exc)
    return ApiResponse(ok=True, message='Updated', data=ResourceOut.from_resource(resource))


@router.delete('/{path:path}')
def delete_path(path: str, tree: Tree = Depends(get_tree)):
    target = as_path(path)
    try:
        if not tree.has_resource(target):
            raise HTTPException(status_code=404, detail=f'Path does not exist: {target}')
        deleted = tree.delete_resource(target)
    except (StorageError, PermissionError, ValueError) as exc:
        _raise_http(exc)
    if not deleted:
        raise HTTPException(status_code=404, detail=f'Resource not deleted: {target}')
    return ApiResponse(ok=True, message='Deleted')
