from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from filenest.dependencies import get_current_user, get_file_store, get_share_index
from filenest.monitoring.setup import report_share_created
from filenest.schemas.file import ShareResponse
from filenest.services.file_store import FileStore, original_name
from filenest.services.share_index import ShareIndex
from filenest.utils.urls import share_url

router = APIRouter(prefix="/api", tags=["Share Links"])


@router.post("/share/{filename}", response_model=ShareResponse)
async def create_share_link(
    filename: str,
    request: Request,
    store: FileStore = Depends(get_file_store),
    index: ShareIndex = Depends(get_share_index),
    current_user: str = Depends(get_current_user),
):
    store.path_for(filename)

    share_id, _ = await run_in_threadpool(index.create, filename, original_name(filename))
    report_share_created()

    return ShareResponse(shareUrl=share_url(request, share_id), shareId=share_id)
