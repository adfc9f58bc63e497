"""Pydantic schemas for API request models."""

from .diagram import ClassDiagramRequest, SourceDiagramRequest

__all__ = [
    'ClassDiagramRequest',
    'SourceDiagramRequest',
]
