import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from filenest.core.config import settings
from filenest.core.security import InvalidTokenError, decode_access_token
from filenest.services.file_store import FileStore
from filenest.services.note_store import NoteStore
from filenest.services.share_index import ShareIndex

logger = logging.getLogger("filenest")

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_access_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Token rejected (%s)", e)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )
    return payload["sub"]


# Stores are built per request from the current settings and hold no state.

def get_file_store() -> FileStore:
    return FileStore(settings.UPLOADS_DIR, settings.MAX_FILE_SIZE)


def get_share_index() -> ShareIndex:
    return ShareIndex(settings.SHARE_LINKS_FILE)


def get_note_store() -> NoteStore:
    return NoteStore(settings.NOTES_DIR, settings.NOTE_PREVIEW_LENGTH)
