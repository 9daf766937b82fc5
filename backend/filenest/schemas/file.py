from datetime import datetime

from pydantic import BaseModel


class FileInfo(BaseModel):
    name: str
    originalName: str
    size: int
    modified: datetime
    type: str


class UploadedFile(BaseModel):
    name: str
    originalName: str
    size: int
    type: str


class UploadResponse(BaseModel):
    message: str
    file: UploadedFile


class FileContent(BaseModel):
    content: str
    type: str


class EditRequest(BaseModel):
    content: str


class MessageResponse(BaseModel):
    message: str


class ShareResponse(BaseModel):
    shareUrl: str
    shareId: str
