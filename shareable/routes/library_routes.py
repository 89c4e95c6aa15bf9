"""
Client library routes.
Serves the page script that swaps in shareable content on ``#render-shareable``.
"""
from functools import lru_cache
from pathlib import Path

import rjsmin
from fastapi import APIRouter
from fastapi.responses import Response

from ..utils.debug import print_step

router = APIRouter(tags=["library"])

LIBRARY_PATH = Path(__file__).parent.parent / "public" / "library.js"
JS_HEADERS = {"Cache-Control": "public, max-age=3600"}
ERROR_BODY = "// Error loading library"


@lru_cache(maxsize=None)
def get_library_content() -> str:
    """Library source, read once per process."""
    return LIBRARY_PATH.read_text(encoding="utf-8")


@lru_cache(maxsize=None)
def get_library_min_content() -> str:
    """Minified library source, computed once per process."""
    content = get_library_content()
    return rjsmin.jsmin(content) or content


def _script_response(loader, name: str) -> Response:
    try:
        content = loader()
    except OSError as e:
        print_step("Library Load Error", {"file": name, "error": str(e)}, "error")
        return Response(content=ERROR_BODY, status_code=500, media_type="application/javascript")
    return Response(content=content, media_type="application/javascript", headers=JS_HEADERS)


@router.get("/library.js")
def serve_library():
    return _script_response(get_library_content, "library.js")


@router.get("/library.min.js")
def serve_library_min():
    return _script_response(get_library_min_content, "library.min.js")
