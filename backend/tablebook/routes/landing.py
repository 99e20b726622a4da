"""
TableBook Backend — Landing Page Route
========================================

What:  Serves the static landing page at GET /.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

router = APIRouter(tags=["Landing"])

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


@router.get("/", include_in_schema=False)
async def landing_page() -> FileResponse:
    return FileResponse(path=str(STATIC_DIR / "index.html"), media_type="text/html")
