from __future__ import annotations

from typing import NoReturn, Optional

from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import FileResponse

from ..config import settings
from ..schemas import ApiResponse, EntryOut, MkdirRequest, RenameRequest
from ..services.errors import StorageError
from ..services.file_ops import FileOps
from ..services.listing import sort_key

router = APIRouter(prefix='/api', tags=['files'])
ops = FileOps(settings.storage_root)


def _raise_http(exc: StorageError) -> NoReturn:
    raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.get('/files', response_model=list[EntryOut])
def list_files(
    folder: str = Query(default=''),
    sort_by: str = Query(default='name', pattern='^(name|size|date)$'),
    order: str = Query(default='asc', pattern='^(asc|desc)$'),
):
    try:
        items = ops.list_dir(folder)
    except StorageError as exc:
        _raise_http(exc)

    reverse = order == 'desc'
    key_map = {'name': lambda i: sort_key(i.name), 'size': lambda i: i.size, 'date': lambda i: i.modified}
    items.sort(key=key_map[sort_by], reverse=reverse)
    return items


@router.get('/search', response_model=list[EntryOut])
def search(q: str = Query(default='')):
    return ops.search(q)


@router.post('/upload')
def upload(file: Optional[UploadFile] = File(default=None), folder: str = Form(default='')):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail='No file uploaded')

    try:
        ops.write_upload(folder, file.filename, file.file, chunk_size=settings.upload_chunk_size)
    except StorageError as exc:
        _raise_http(exc)
    return ApiResponse(ok=True, message='Uploaded')


@router.post('/folder')
def create_folder(payload: MkdirRequest):
    try:
        ops.create_folder(payload.parent, payload.name)
    except StorageError as exc:
        _raise_http(exc)
    return ApiResponse(ok=True, message='Folder created')


@router.get('/download/{path:path}')
def download(path: str):
    try:
        target = ops.read_for_download(path)
    except StorageError as exc:
        _raise_http(exc)
    return FileResponse(target, filename=target.name)


@router.delete('/delete/{path:path}')
def delete(path: str):
    try:
        ops.delete_entry(path)
    except StorageError as exc:
        _raise_http(exc)
    return ApiResponse(ok=True, message='Deleted')


@router.put('/rename')
def rename(payload: RenameRequest):
    try:
        ops.rename(payload.old_path, payload.new_name)
    except StorageError as exc:
        _raise_http(exc)
    return ApiResponse(ok=True, message='Renamed')
