"""Diagram rendering endpoints."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from plantuml_core.formats import DiagramFormat

from ..services.rendering import RenderService


router = APIRouter(prefix="/plantuml")


def get_render_service() -> RenderService:
    """Get rendering service instance."""
    return RenderService()


def _to_response(result) -> Response:
    return Response(content=result.content, media_type=result.content_type)


@router.post("/{diagram_format}")
async def generate_diagram(
    diagram_format: DiagramFormat,
    request: Request,
    render_service: RenderService = Depends(get_render_service)
):
    """
    Render PlantUML source sent as the raw request body.

    ``txt`` returns PlantUML's plain-text syntax check instead of an image.
    """
    body = await request.body()
    result = await render_service.render_source(body, diagram_format)
    return _to_response(result)


@router.get("/{diagram_format}/{encoded}")
async def render_encoded(
    diagram_format: DiagramFormat,
    encoded: str,
    render_service: RenderService = Depends(get_render_service)
):
    """Render a diagram from a PlantUML-encoded URL token."""
    result = await render_service.render_encoded(encoded, diagram_format)
    return _to_response(result)
