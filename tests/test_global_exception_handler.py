from __future__ import annotations

import asyncio

from starlette.requests import Request

from treemount import main
from treemount.errors import ResourceNotFoundError, StorageError, StorageEvent


def _request(path: str) -> Request:
    scope = {
        'type': 'http',
        'http_version': '1.1',
        'method': 'GET',
        'scheme': 'http',
        'path': path,
        'raw_path': path.encode(),
        'query_string': b'',
        'headers': [],
        'client': ('127.0.0.1', 12345),
        'server': ('testserver', 80),
    }
    return Request(scope)


def test_unhandled_exception_handler_response_is_safe():
    request = _request('/api/storage/keys/a')
    response = asyncio.run(main.unhandled_exception_handler(request, RuntimeError('boom at /tmp/private/path')))

    assert response.status_code == 500
    assert response.body == b'{"detail":"Internal server error. Please try again."}'
    assert b'/tmp/private/path' not in response.body


def test_storage_not_found_maps_to_404():
    request = _request('/api/storage/keys/a')
    exc = ResourceNotFoundError('Path does not exist: keys/a', StorageEvent.READ, 'keys/a')
    response = asyncio.run(main.storage_exception_handler(request, exc))

    assert response.status_code == 404
    assert b'keys/a' in response.body


def test_storage_failure_hides_details():
    request = _request('/api/storage/keys/a')
    exc = StorageError('cannot write /var/lib/treemount/content/a', StorageEvent.CREATE, 'a')
    response = asyncio.run(main.storage_exception_handler(request, exc))

    assert response.status_code == 500
    assert b'/var/lib/treemount' not in response.body
