from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .deps import get_tree
from .errors import ResourceNotFoundError, StorageError
from .routers import storage
from .services.tree_stack import TreeStack

logger = logging.getLogger(__name__)


def _parse_cors_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.strip().upper(), logging.INFO),
        format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
    )


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging(settings.log_level)
    tree = get_tree()
    if isinstance(tree, TreeStack):
        for mounted in tree.trees:
            logger.info('Mount point /%s ready', mounted.get_sub_path())
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

cors_origins = _parse_cors_origins(settings.cors_origins)
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'],
        allow_headers=['Authorization', 'Content-Type'],
    )


@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    if isinstance(exc, ResourceNotFoundError):
        return JSONResponse({'detail': str(exc)}, status_code=404)
    logger.error('Storage %s failed for %s: %s', exc.event.value, exc.path, exc)
    return JSONResponse({'detail': 'Storage operation failed.'}, status_code=500)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    return JSONResponse({'detail': 'Internal server error. Please try again.'}, status_code=500)


@app.get('/healthz')
def healthz():
    return {'ok': True}


app.include_router(storage.router)
