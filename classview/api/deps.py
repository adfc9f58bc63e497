"""FastAPI dependencies for classview."""

from fastapi import HTTPException, Request


async def get_diagram_service(request: Request):
    """Get ClassDiagramService from app state."""
    svc = getattr(request.app.state, "diagram_service", None)
    if svc is None:
        raise HTTPException(status_code=503, detail="Diagram service not available")
    return svc
