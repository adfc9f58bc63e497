"""Class diagram request schemas."""

from typing import Optional
from pydantic import BaseModel, Field


class ClassDiagramRequest(BaseModel):
    """Generate a diagram for a source file."""
    file_path: str = Field(..., description="Path to a .java file", min_length=1)
    output_dir: Optional[str] = Field(None, description="Output directory override")
    render_svg: Optional[bool] = Field(None, description="Also render SVG (default from settings)")


class SourceDiagramRequest(BaseModel):
    """Generate diagram text for posted source."""
    source: str = Field(..., description="Java source text", min_length=1)
