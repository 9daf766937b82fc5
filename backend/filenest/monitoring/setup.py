import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator

logger = logging.getLogger("filenest")

uploads_total = Counter("filenest_uploads_total", "Files uploaded")
upload_bytes_total = Counter("filenest_upload_bytes_total", "Bytes written by uploads")
share_links_created = Counter("filenest_share_links_created_total", "Share links created")
share_downloads = Counter("filenest_share_downloads_total", "Downloads through share links")
notes_saved = Counter("filenest_notes_saved_total", "Notes created or updated")


def report_upload(size: int) -> None:
    uploads_total.inc()
    if size:
        upload_bytes_total.inc(size)


def report_share_created() -> None:
    share_links_created.inc()


def report_share_download() -> None:
    share_downloads.inc()


def report_note_saved() -> None:
    notes_saved.inc()


def setup_monitoring(app: FastAPI):
    Instrumentator().instrument(app).expose(app, endpoint="/api/metrics", include_in_schema=False)

    @app.middleware("http")
    async def monitor_requests(request: Request, call_next):
        start_time = time.time()
        response = None
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception("Unhandled error: %s %s -> %s", request.method, request.url.path, e)
            response = JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
        finally:
            process_time = time.time() - start_time
            logger.info("method=%s path=%s status=%s duration=%.4fs",
                        request.method, request.url.path,
                        getattr(response, "status_code", "?"), process_time)
        return response
