from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from filenest.dependencies import get_current_user, get_note_store
from filenest.monitoring.setup import report_note_saved
from filenest.schemas.file import MessageResponse
from filenest.schemas.note import NoteCreate, NoteDetail, NoteSaved, NoteSummary, NoteUpdate
from filenest.services.note_store import NoteStore

router = APIRouter(prefix="/api/notes", tags=["Notes"])


@router.get("", response_model=list[NoteSummary])
async def list_notes(
    store: NoteStore = Depends(get_note_store),
    current_user: str = Depends(get_current_user),
):
    notes = await run_in_threadpool(store.list)
    return [NoteSummary(id=n.id, title=n.title, content=n.content, modified=n.modified) for n in notes]


@router.get("/{note_id}", response_model=NoteDetail)
async def get_note(
    note_id: str,
    store: NoteStore = Depends(get_note_store),
    current_user: str = Depends(get_current_user),
):
    content = await run_in_threadpool(store.get, note_id)
    return NoteDetail(id=note_id, content=content)


@router.post("", response_model=NoteSaved)
async def create_note(
    note: NoteCreate,
    store: NoteStore = Depends(get_note_store),
    current_user: str = Depends(get_current_user),
):
    note_id = await run_in_threadpool(store.create, note.title, note.content)
    report_note_saved()
    return NoteSaved(message="Note saved successfully", id=note_id)


@router.put("/{note_id}", response_model=NoteSaved)
async def update_note(
    note_id: str,
    note: NoteUpdate,
    store: NoteStore = Depends(get_note_store),
    current_user: str = Depends(get_current_user),
):
    await run_in_threadpool(store.update, note_id, note.content)
    report_note_saved()
    return NoteSaved(message="Note updated successfully", id=note_id)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    store: NoteStore = Depends(get_note_store),
    current_user: str = Depends(get_current_user),
):
    await run_in_threadpool(store.delete, note_id)
    return MessageResponse(message="Note deleted successfully")
