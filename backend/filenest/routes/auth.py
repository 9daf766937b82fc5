import logging

from fastapi import APIRouter, HTTPException, status

from filenest.core.security import authenticate, create_access_token
from filenest.schemas.auth import LoginRequest, Token

logger = logging.getLogger("filenest")

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post("/login", response_model=Token)
async def login(credentials: LoginRequest):
    if not authenticate(credentials.username, credentials.password):
        logger.warning("Failed login attempt for user %r", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token(credentials.username)
    logger.info("User %s logged in", credentials.username)
    return Token(token=token, username=credentials.username)
