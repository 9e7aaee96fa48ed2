from __future__ import annotations

from enum import Enum

from .services.path_util import TreePath, as_path


class StorageEvent(str, Enum):
    READ = 'read'
    CREATE = 'create'
    UPDATE = 'update'
    DELETE = 'delete'
    LIST = 'list'


class StorageError(Exception):
    def __init__(self, message: str, event: StorageEvent, path: str | TreePath):
        super().__init__(message)
        self.event = event
        self.path = as_path(path)


class ResourceNotFoundError(StorageError, LookupError):
    pass


class ResourceExistsError(StorageError):
    pass


def not_found(event: StorageEvent, path: str | TreePath) -> ResourceNotFoundError:
    return ResourceNotFoundError(f'Path does not exist: {as_path(path)}', event, path)


def already_exists(path: str | TreePath) -> ResourceExistsError:
    return ResourceExistsError(f'Path already exists: {as_path(path)}', StorageEvent.CREATE, path)
