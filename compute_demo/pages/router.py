"""FastAPI router serving the static demo page."""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse


INDEX_PATH = Path(__file__).with_name("index.html")
INDEX_HTML = INDEX_PATH.read_text(encoding="utf-8")

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Return the demo page verbatim."""
    return HTMLResponse(INDEX_HTML)
