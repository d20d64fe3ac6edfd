"""Redirect and homepage routes."""

import os

from fastapi import APIRouter, Request, status
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse

from shortlink.exceptions import DurableStoreError
from ..api.routes import INTERNAL_ERROR_MESSAGE, error_response

router = APIRouter()

static_dir = os.path.join(os.path.dirname(__file__), "..", "static")

NOT_FOUND_MESSAGE = "Error: URL Not Found"


@router.get("/", include_in_schema=False)
async def homepage(request: Request):
    """Serve the link creation form."""
    index_file = os.path.join(static_dir, "index.html")
    if os.path.exists(index_file):
        return FileResponse(index_file)

    return HTMLResponse(
        content="<h1>shortlink</h1><p>POST /api/create to shorten a URL.</p>",
        status_code=200,
    )


@router.get("/{slug}", include_in_schema=False)
async def redirect_to_url(request: Request, slug: str):
    """Redirect to the target URL."""
    service = request.app.state.service
    logger = request.app.state.logger

    try:
        target_url = await service.resolve(slug)
    except DurableStoreError as e:
        logger.error(f"Resolve failed for {slug}: {e}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    if target_url is None:
        return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)

    return RedirectResponse(url=target_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
