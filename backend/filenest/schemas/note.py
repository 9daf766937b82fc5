from datetime import datetime

from pydantic import BaseModel, Field


class NoteSummary(BaseModel):
    id: str
    title: str
    content: str
    modified: datetime


class NoteDetail(BaseModel):
    id: str
    content: str


class NoteCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str


class NoteUpdate(BaseModel):
    content: str


class NoteSaved(BaseModel):
    message: str
    id: str
