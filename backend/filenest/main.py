import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from filenest.core.config import settings
from filenest.core.exceptions import FilenestError
from filenest.core.logging_config import setup_logging
from filenest.dependencies import get_file_store, get_note_store, get_share_index
from filenest.monitoring.setup import setup_monitoring
from filenest.routes import auth, download, files, notes, share_links

logger = logging.getLogger("filenest")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)

    try:
        settings.validate()
    except FilenestError as e:
        logger.error(f"Configuration invalid: {e.detail}")
        raise

    try:
        get_file_store().ensure_root()
        get_note_store().ensure_root()
        get_share_index().ensure_exists()
        logger.info(f"Uploads directory: {settings.UPLOADS_DIR}")
        logger.info(f"Notes directory: {settings.NOTES_DIR}")
        logger.info(f"Share index: {settings.SHARE_LINKS_FILE}")
    except OSError as e:
        logger.error(f"Storage initialization failed: {e}")
        raise

    already_mounted = any(getattr(r, "name", None) == "static" for r in app.routes)
    if os.path.isdir(settings.STATIC_DIR) and not already_mounted:
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
        logger.info(f"Serving static client from {settings.STATIC_DIR}")

    yield

    logger.info("Application shutdown complete")


app = FastAPI(
    title="filenest",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "Content-Length"],
)


@app.exception_handler(FilenestError)
async def filenest_error_handler(request: Request, exc: FilenestError):
    if exc.status_code >= 500:
        logger.error("%s %s -> %s", request.method, request.url.path, exc.detail)
    else:
        logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation failed: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


app.include_router(auth)
app.include_router(files)
app.include_router(share_links)
app.include_router(notes)
app.include_router(download)

setup_monitoring(app)


@app.get("/health")
async def health_check():
    return {
        "status": "running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uploads": "ok" if os.path.isdir(settings.UPLOADS_DIR) else "missing",
        "notes": "ok" if os.path.isdir(settings.NOTES_DIR) else "missing",
        "share_index": "ok" if os.path.isfile(settings.SHARE_LINKS_FILE) else "missing",
    }


def run():
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        timeout_keep_alive=60,
    )


if __name__ == "__main__":
    run()
