"""Class diagram API routes.

  POST /diagrams/class          -> diagram for a source file on disk
  POST /diagrams/class/source   -> diagram for posted source text
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_diagram_service
from ..schemas.diagram import ClassDiagramRequest, SourceDiagramRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/diagrams", tags=["diagrams"])


@router.post("/class")
async def generate_class_diagram(
    body: ClassDiagramRequest,
    diagram_service=Depends(get_diagram_service),
):
    """Resolve a Java file's inheritance chain and write its diagram."""
    try:
        return await diagram_service.generate_for_file(
            body.file_path,
            output_dir=body.output_dir,
            render_svg=body.render_svg,
        )
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        logger.error(f"Diagram generation failed for {body.file_path}: {e}")
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/class/source")
async def generate_source_diagram(
    body: SourceDiagramRequest,
    diagram_service=Depends(get_diagram_service),
):
    """Render diagram text for posted source; nothing is written to disk."""
    try:
        return await diagram_service.generate_for_source(body.source)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=502, detail=str(e))
