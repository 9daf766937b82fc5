from __future__ import annotations

import html
import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, HTMLResponse
from starlette.concurrency import run_in_threadpool

from filenest.core.exceptions import ShareLinkNotFoundError, StoredFileNotFoundError
from filenest.dependencies import get_file_store, get_share_index
from filenest.monitoring.setup import report_share_download
from filenest.services.file_store import FileStore, guess_type
from filenest.services.share_index import ShareIndex

logger = logging.getLogger("filenest")

router = APIRouter(tags=["Download"])


# -----------------------------
# Helpers
# -----------------------------

def _size_in_mb(n: int) -> str:
    return f"{n / 1024 / 1024:.2f} MB"


def _shared_on(created: str | None) -> str:
    if not created:
        return "unknown date"
    try:
        return datetime.fromisoformat(created.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        return html.escape(created)


def _not_found_page(message: str) -> HTMLResponse:
    page = f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>File Not Found</title>
  <style>
    body {{ margin:0; min-height:100vh; display:flex; align-items:center; justify-content:center; background:#f3f4f6; font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial; }}
    .card {{ background:#fff; padding:32px; border-radius:12px; box-shadow:0 4px 12px rgba(0,0,0,.08); text-align:center; }}
    h1 {{ color:#dc2626; font-size:22px; margin:0 0 12px; }}
    p {{ color:#4b5563; margin:0; }}
  </style>
</head>
<body>
  <div class="card">
    <h1>File Not Found</h1>
    <p>{html.escape(message)}</p>
  </div>
</body>
</html>"""
    return HTMLResponse(page, status_code=404, headers={"Cache-Control": "no-store"})


# -----------------------------
# Public landing page for a share link
# -----------------------------

@router.get("/share/{share_id}", response_class=HTMLResponse)
async def share_landing(
    share_id: str,
    store: FileStore = Depends(get_file_store),
    index: ShareIndex = Depends(get_share_index),
):
    """Public page describing a shared file with a button that starts the download.

    Viewing the page does not count as a download; only /api/share-download does.
    """
    try:
        link = await run_in_threadpool(index.resolve, share_id)
    except ShareLinkNotFoundError:
        return _not_found_page("The shared file link is invalid or has expired.")

    try:
        stored = await run_in_threadpool(store.describe, link["filename"])
    except StoredFileNotFoundError:
        logger.warning("Share link %s points at missing file %s", share_id, link["filename"])
        return _not_found_page("The file no longer exists on the server.")

    display_name = html.escape(link.get("originalName") or link["filename"])
    size = _size_in_mb(stored.size)
    mime_type = html.escape(stored.type)
    download_url = f"/api/share-download/{html.escape(share_id)}"

    page = f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Download {display_name}</title>
  <style>
    body {{ margin:0; min-height:100vh; display:flex; align-items:center; justify-content:center; padding:16px; box-sizing:border-box; background:linear-gradient(135deg,#eff6ff,#e0e7ff); font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial; }}
    .card {{ background:#fff; border-radius:16px; padding:32px; max-width:420px; width:100%; box-shadow:0 10px 30px rgba(0,0,0,.12); }}
    h1 {{ font-size:22px; margin:0 0 8px; text-align:center; color:#111827; }}
    .lead {{ text-align:center; color:#4b5563; margin:0 0 24px; }}
    .file {{ background:#f9fafb; border-radius:10px; padding:16px; margin-bottom:24px; }}
    .name {{ font-weight:600; color:#111827; overflow:hidden; text-overflow:ellipsis; white-space:nowrap; margin:0; }}
    .meta {{ color:#6b7280; font-size:14px; margin:4px 0 0; }}
    .btn {{ display:block; text-align:center; text-decoration:none; background:#2563eb; color:#fff; font-weight:600; padding:12px 16px; border-radius:10px; }}
    .btn:hover {{ background:#1d4ed8; }}
    .foot {{ text-align:center; color:#6b7280; font-size:12px; margin-top:16px; }}
  </style>
</head>
<body>
  <div class="card">
    <h1>File Download</h1>
    <p class="lead">Click the button below to download your file</p>
    <div class="file">
      <p class="name">{display_name}</p>
      <p class="meta">{size} &middot; {mime_type}</p>
    </div>
    <a class="btn" href="{download_url}">Download File</a>
    <p class="foot">Shared on {_shared_on(link.get("created"))}</p>
  </div>
</body>
</html>"""
    return HTMLResponse(page, headers={"Cache-Control": "no-store"})


# -----------------------------
# Public download by share id (counts the download)
# -----------------------------

@router.get("/api/share-download/{share_id}")
async def share_download(
    share_id: str,
    store: FileStore = Depends(get_file_store),
    index: ShareIndex = Depends(get_share_index),
):
    link = await run_in_threadpool(index.resolve, share_id)
    path = store.path_for(link["filename"])

    await run_in_threadpool(index.record_download, share_id)
    report_share_download()

    return FileResponse(
        path,
        filename=link.get("originalName") or link["filename"],
        media_type=guess_type(link["filename"]),
    )
