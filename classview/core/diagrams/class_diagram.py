"""Deterministic PlantUML class diagrams from resolved descriptor chains.

Two passes over the chain:
  definitions:   one block per type name, first occurrence wins
  relationships: one edge per extends / implements relation

The visited-name set lives for a single render() call and is passed
explicitly to every helper; nothing is cached on the renderer.
"""

import logging
from typing import List, Set

from ..constants import APPLET_QUALIFIED_NAME
from ..descriptors import ClassDescriptor, FieldDescriptor, MethodDescriptor
from ..utils.naming import is_library_name, simple_name

logger = logging.getLogger(__name__)

_SYSTEM_MARKER = "..System Class.."
_INDENT = "    "


def visibility_symbol(modifiers: List[str]) -> str:
    if "private" in modifiers:
        return "-"
    if "protected" in modifiers:
        return "#"
    if "public" in modifiers:
        return "+"
    return "~"  # package private


def _is_known_runtime_base(type_name: str) -> bool:
    return APPLET_QUALIFIED_NAME in type_name or type_name.endswith(".Applet")


class DiagramRenderer:
    """Renders a descriptor chain as PlantUML class-diagram text."""

    def render(self, descriptor: ClassDescriptor) -> str:
        """Render the root descriptor, its ancestors and all interfaces."""
        visited: Set[str] = set()
        chain = list(descriptor.iter_chain())

        lines = ["@startuml", ""]
        for block in self._definition_blocks(chain, visited):
            lines.extend(block)
            lines.append("")
        lines.extend(self._relationship_lines(chain))
        lines.append("")
        lines.append("@enduml")

        logger.debug(f"Rendered {len(visited)} type(s) for {descriptor.name}")
        return "\n".join(lines) + "\n"

    # =========================================================================
    # Definitions
    # =========================================================================

    def _definition_blocks(self, chain: List[ClassDescriptor], visited: Set[str]) -> List[List[str]]:
        blocks: List[List[str]] = []

        for node in chain:
            if self._claim(node.name, visited):
                blocks.append(self._class_block(node))

            # Unresolved ancestor still gets an empty placeholder
            if node.parent_class is None and node.extends:
                parent = simple_name(node.extends)
                if self._claim(parent, visited):
                    blocks.append(self._placeholder_block(parent, node.extends))

        for node in chain:
            for interface in node.implements:
                name = simple_name(interface)
                if self._claim(name, visited):
                    blocks.append([f"interface {name} {{", "}"])

        return blocks

    @staticmethod
    def _claim(name: str, visited: Set[str]) -> bool:
        if name in visited:
            return False
        visited.add(name)
        return True

    def _class_block(self, node: ClassDescriptor) -> List[str]:
        lines: List[str] = []
        if not node.is_library:
            lines.extend(node.annotations)

        if node.kind in ("interface", "enum"):
            keyword = node.kind
        elif node.is_abstract:
            keyword = "abstract class"
        else:
            keyword = "class"
        lines.append(f"{keyword} {node.name} {{")

        if node.is_library:
            lines.append(f"{_INDENT}{_SYSTEM_MARKER}")
        else:
            lines.extend(self._field_line(f) for f in node.fields)
            lines.extend(
                self._method_line(m, node.kind) for m in node.methods if m.name
            )

        lines.append("}")
        return lines

    @staticmethod
    def _placeholder_block(name: str, declared: str) -> List[str]:
        stereotype = " <<system>>" if _is_known_runtime_base(declared) else ""
        return [f"class {name}{stereotype} {{", "}"]

    @staticmethod
    def _field_line(field: FieldDescriptor) -> str:
        vis = visibility_symbol(field.modifiers)
        static = "{static} " if "static" in field.modifiers else ""
        return f"{_INDENT}{vis}{static}{field.type} {field.name}"

    @staticmethod
    def _method_line(method: MethodDescriptor, owner_kind: str) -> str:
        vis = visibility_symbol(method.modifiers)
        flags = ""
        if "static" in method.modifiers:
            flags += "{static} "
        if "abstract" in method.modifiers and owner_kind != "interface":
            flags += "{abstract} "

        params = ", ".join(
            f"{p.type} {p.name}".strip() for p in method.parameters if p.type
        )
        signature = f"{method.name}({params})"
        if method.return_type:
            signature = f"{method.return_type} {signature}"
        return f"{_INDENT}{vis}{flags}{signature}"

    # =========================================================================
    # Relationships
    # =========================================================================

    def _relationship_lines(self, chain: List[ClassDescriptor]) -> List[str]:
        lines: List[str] = []
        seen: Set[str] = set()

        def emit(line: str) -> None:
            if line not in seen:
                seen.add(line)
                lines.append(line)

        for node in chain:
            if node.extends:
                parent = simple_name(node.extends)
                arrow = "<|.." if is_library_name(node.extends) else "<|--"
                emit(f"{parent} {arrow} {node.name}")
            for interface in node.implements:
                emit(f"{simple_name(interface)} <|.. {node.name}")

        return lines
