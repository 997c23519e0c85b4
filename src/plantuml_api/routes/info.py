"""Service information endpoint."""

from fastapi import APIRouter
from ..models.responses import InfoResponse
from .. import __version__

router = APIRouter()


@router.get("/", response_model=InfoResponse)
async def info():
    """Root endpoint with API information."""
    return InfoResponse(
        name="PlantUML Server",
        version=__version__,
        description="HTTP server for PlantUML diagram generation using subprocess execution",
        endpoints={
            "health": "GET /health, GET /plantuml/health",
            "post_svg": "POST /plantuml/svg (body: PlantUML source)",
            "post_png": "POST /plantuml/png (body: PlantUML source)",
            "post_txt": "POST /plantuml/txt (body: PlantUML source)",
            "get_svg": "GET /plantuml/svg/{encoded}",
            "get_png": "GET /plantuml/png/{encoded}",
            "get_txt": "GET /plantuml/txt/{encoded}",
        },
        # Advertised only; not implemented by this service
        integration={
            "queue": "Queue-based processing with a message bus",
            "mcp_protocol": "Model Context Protocol server support",
            "togaf": "TOGAF enterprise architecture workflows",
        },
    )
