"""Class diagram generation.

  DiagramRenderer      : descriptor chain -> PlantUML text
  PlantUMLRenderer     : PlantUML text -> SVG (local JAR, HTTP fallback)
  ClassDiagramService  : file -> resolved chain -> .puml / .svg
"""

from .class_diagram import DiagramRenderer, visibility_symbol
from .renderer import PlantUMLRenderer, plantuml_encode
from .service import ClassDiagramService

__all__ = [
    "ClassDiagramService",
    "DiagramRenderer",
    "PlantUMLRenderer",
    "plantuml_encode",
    "visibility_symbol",
]
