"""HTTP endpoint rendering DBML into SVG diagrams."""

from logging import getLogger

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response

from diagram.svg_export import dbml_to_svg

logger = getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml"

app = FastAPI(title="DBML diagram renderer")


@app.post("/api/svg")
async def render_svg(request: Request) -> Response:
    """Render the ``dbml`` field of a JSON body as SVG.

    A missing or empty ``dbml`` is a client error; anything failing after
    that, unreadable bodies included, is reported as a server error.
    """
    try:
        payload = await request.json()
        dbml = payload.get("dbml") if isinstance(payload, dict) else None

        if not dbml:
            return JSONResponse(
                {"error": "DBML source is required."},
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        svg = dbml_to_svg(dbml)
    except Exception:
        logger.exception("Failed to render diagram")
        return JSONResponse(
            {"error": "Failed to generate the diagram."},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response(svg, media_type=SVG_MEDIA_TYPE)
