"""Source class resolution: compilation unit text -> ClassDescriptor."""

import asyncio
import logging
from typing import Any, Dict, Optional

from ..ast_parser import JavaDeclarationParser
from ..descriptors import (
    ClassDescriptor,
    FieldDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
)
from .errors import ParseFailure

logger = logging.getLogger(__name__)


def descriptor_from_record(
    record: Dict[str, Any],
    source_path: Optional[str] = None,
) -> ClassDescriptor:
    """Build a ClassDescriptor from a structured declaration record."""
    fields = [
        FieldDescriptor(
            name=f["name"],
            type=f.get("type", ""),
            modifiers=list(f.get("modifiers", [])),
        )
        for f in record.get("fields", [])
    ]
    methods = [
        MethodDescriptor(
            name=m["name"],
            return_type=m.get("returnType", ""),
            modifiers=list(m.get("modifiers", [])),
            parameters=[
                ParameterDescriptor(name=p.get("name", ""), type=p.get("type", ""))
                for p in m.get("parameters", [])
            ],
        )
        for m in record.get("methods", [])
    ]
    return ClassDescriptor(
        name=record["name"],
        package=record.get("package"),
        kind=record.get("kind", "class"),
        modifiers=list(record.get("modifiers", [])),
        annotations=list(record.get("annotations", [])),
        fields=fields,
        methods=methods,
        extends=record.get("extends") or None,
        implements=list(record.get("implements", [])),
        source_path=source_path,
    )


class SourceClassResolver:
    """Converts one compilation unit into a ClassDescriptor.

    No ancestor resolution and no filesystem access happen here.

    Args:
        parser: Structured-parse collaborator exposing
            parse_declaration(source_text) -> DeclarationParseResult
    """

    def __init__(self, parser=None):
        self._parser = parser or JavaDeclarationParser()

    async def resolve(self, source_text: str, source_path: Optional[str] = None) -> ClassDescriptor:
        """Parse source text and return its top-level type.

        Args:
            source_text: Java source of one compilation unit
            source_path: Origin file, recorded on the descriptor

        Raises:
            ParseFailure: No declaration found or the parse reported failure
        """
        result = await asyncio.to_thread(self._parser.parse_declaration, source_text)

        where = source_path or "<source>"
        if result.declaration is None or result.status != 0:
            detail = "; ".join(e.message for e in result.errors) or "unknown parse error"
            raise ParseFailure(f"Failed to parse {where}: {detail}")

        descriptor = descriptor_from_record(result.declaration, source_path)
        logger.debug(f"Parsed {descriptor.qualified_name} from {where}")
        return descriptor
