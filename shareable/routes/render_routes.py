"""
Render route.
Turns a page URL into a cached PNG social preview.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from ..core.errors import ShareableError
from ..models import RenderRequest
from ..services.render_service import RenderService, get_render_service
from ..utils.debug import print_step

router = APIRouter(tags=["render"])


@router.get("/render")
async def render_page(
    url: Optional[str] = Query(None, description="Absolute URL of the page to render"),
    format: Optional[str] = Query(None, description="Image format: og (1200x630) or twitter (1200x628)"),
    rebuild: Optional[str] = Query(None, description="true or 1 to ignore the cached image"),
    skip_template_check: Optional[str] = Query(
        None,
        alias="skipTemplateCheck",
        description="true or 1 to capture even if no shareable content was rendered"
    ),
    render_service: RenderService = Depends(get_render_service)
):
    """
    Render a page as a social preview image.

    The page is loaded with the ``#render-shareable`` fragment so its
    shareable template replaces the body before the screenshot is taken.

    Returns:
        PNG image with an ``X-Cache: HIT|MISS`` header
    """
    try:
        request = RenderRequest.from_query(url, format, rebuild, skip_template_check)
        result = await render_service.render(request)
    except ShareableError as e:
        print_step("Render Failed", {"url": url, "status_code": e.status_code, "error": e.message}, "error")
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception as e:
        print_step("Render Failed", {"url": url, "error": str(e)}, "error")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to render page", "message": str(e)}
        )

    return Response(
        content=result.image,
        media_type="image/png",
        headers={"X-Cache": "HIT" if result.cache_hit else "MISS"}
    )
