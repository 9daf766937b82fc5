from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import FileResponse
from starlette.concurrency import run_in_threadpool

from filenest.core.exceptions import FileTooLargeError
from filenest.dependencies import get_current_user, get_file_store
from filenest.monitoring.setup import report_upload
from filenest.schemas.file import (
    EditRequest,
    FileContent,
    FileInfo,
    MessageResponse,
    UploadedFile,
    UploadResponse,
)
from filenest.services.file_store import FileStore, guess_type, is_text_type, original_name

router = APIRouter(prefix="/api", tags=["Files"])


@router.get("/files", response_model=list[FileInfo])
async def list_files(
    store: FileStore = Depends(get_file_store),
    current_user: str = Depends(get_current_user),
):
    files = await run_in_threadpool(store.list)
    return [
        FileInfo(name=f.name, originalName=f.original_name, size=f.size, modified=f.modified, type=f.type)
        for f in files
    ]


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    store: FileStore = Depends(get_file_store),
    current_user: str = Depends(get_current_user),
):
    # Reject early when the multipart parser already knows the size.
    if file.size is not None and file.size > store.max_size:
        raise FileTooLargeError(f"File exceeds the maximum size of {store.max_size} bytes")

    try:
        stored = await run_in_threadpool(store.save, file.file, file.filename)
    finally:
        await file.close()

    report_upload(stored.size)
    return UploadResponse(
        message="File uploaded successfully",
        file=UploadedFile(
            name=stored.name,
            originalName=stored.original_name,
            size=stored.size,
            type=stored.type,
        ),
    )


@router.get("/download/{filename}")
async def download_file(
    filename: str,
    store: FileStore = Depends(get_file_store),
    current_user: str = Depends(get_current_user),
):
    path = store.path_for(filename)
    return FileResponse(path, filename=original_name(filename), media_type=guess_type(filename))


@router.get("/view/{filename}")
async def view_file(
    filename: str,
    store: FileStore = Depends(get_file_store),
    current_user: str = Depends(get_current_user),
):
    path = store.path_for(filename)
    mime_type = guess_type(filename)
    if is_text_type(mime_type):
        content = await run_in_threadpool(store.read_text, filename)
        return FileContent(content=content, type=mime_type)
    return FileResponse(path, media_type=mime_type)


@router.put("/edit/{filename}", response_model=MessageResponse)
async def edit_file(
    filename: str,
    body: EditRequest,
    store: FileStore = Depends(get_file_store),
    current_user: str = Depends(get_current_user),
):
    await run_in_threadpool(store.replace_content, filename, body.content)
    return MessageResponse(message="File updated successfully")


@router.delete("/files/{filename}", response_model=MessageResponse)
async def delete_file(
    filename: str,
    store: FileStore = Depends(get_file_store),
    current_user: str = Depends(get_current_user),
):
    await run_in_threadpool(store.remove, filename)
    return MessageResponse(message="File deleted successfully")
