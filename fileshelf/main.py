from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import settings
from .logging_setup import configure_logging
from .routers import files

logger = logging.getLogger(__name__)

_ERROR_PAGE = (
    '<!doctype html><html><head><title>Error</title></head>'
    '<body><h1>Unexpected error</h1><p>Please try again.</p></body></html>'
)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging(settings.log_level)
    Path(settings.storage_root).mkdir(parents=True, exist_ok=True)
    logger.info('Serving files from %s', files.ops.root)
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)


def _parse_cors_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(',') if origin.strip()]


cors_origins = _parse_cors_origins(settings.cors_origins)
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials='*' not in cors_origins,
        allow_methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'],
        allow_headers=['Content-Type'],
    )


@app.middleware('http')
async def access_log_middleware(request: Request, call_next):
    start = time.monotonic()
    response = await call_next(request)
    logger.info(
        '%s %s -> %d (%.1f ms)',
        request.method,
        request.url.path,
        response.status_code,
        (time.monotonic() - start) * 1000,
    )
    return response


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    if request.url.path.startswith('/api/'):
        return JSONResponse({'detail': 'Internal server error. Please try again.'}, status_code=500)
    return HTMLResponse(_ERROR_PAGE, status_code=500)


app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get('/healthz')
def healthz():
    return {'ok': True}


def mount_static(target: FastAPI, directory: str) -> bool:
    # must run after the routers are included so /api routes match first
    if not Path(directory).is_dir():
        return False
    target.mount('/', StaticFiles(directory=directory, html=True), name='static')
    return True


app.include_router(files.router)
mount_static(app, settings.static_dir)
