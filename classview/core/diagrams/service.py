"""ClassDiagramService: orchestrator for single-class diagram generation.

  source file -> SourceClassResolver -> InheritanceChainBuilder
              -> DiagramRenderer -> <Class>.puml (+ <Class>.svg)

Only a failure to parse the requested class is raised to the caller;
ancestor failures end the chain, and SVG failures leave the .puml result.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...setting import ClassViewSettings
from ..bridges import JavapBridge
from ..descriptors import ClassDescriptor
from ..resolver import (
    InheritanceChainBuilder,
    SiblingSourceLookup,
    SourceClassResolver,
    SystemClassResolver,
)
from .class_diagram import DiagramRenderer
from .renderer import PlantUMLRenderer

logger = logging.getLogger(__name__)


class ClassDiagramService:
    """Generates class diagrams for one Java class and its ancestors.

    Args:
        settings: Loaded ClassViewSettings
        parser: Structured-parse collaborator (default: tree-sitter parser)
        disassembler: Disassembly collaborator (default: JavapBridge from settings)
        svg_renderer: Object exposing render_svg(puml) (default: PlantUMLRenderer)
    """

    def __init__(
        self,
        settings: ClassViewSettings,
        parser=None,
        disassembler=None,
        svg_renderer=None,
    ):
        self._settings = settings

        if disassembler is None:
            d = settings.disassembler
            disassembler = JavapBridge(
                command=d.command,
                classpath=d.classpath,
                include_code=d.include_code,
                include_private=d.include_private,
                timeout=d.timeout,
            )
        if svg_renderer is None:
            p = settings.plantuml
            svg_renderer = PlantUMLRenderer(
                jar_path=p.jar_path,
                server_url=p.server_url,
                timeout=p.timeout,
            )

        self._source = SourceClassResolver(parser)
        self._system = SystemClassResolver(disassembler)
        self._lookup = SiblingSourceLookup(extension=settings.source_extension)
        self._svg_renderer = svg_renderer
        self._renderer = DiagramRenderer()

    # =========================================================================
    # Public API
    # =========================================================================

    async def generate_for_file(
        self,
        file_path: str,
        output_dir: Optional[str] = None,
        render_svg: Optional[bool] = None,
        qualified_names: bool = False,
    ) -> Dict[str, Any]:
        """Resolve a source file's class chain and write its diagram.

        Args:
            file_path: Java source file
            output_dir: Target directory (default: settings.output_dir)
            render_svg: Also write SVG (default: settings.plantuml.render_svg)
            qualified_names: Name output files by qualified class name

        Returns:
            {class_name, puml, puml_path, svg_path, svg_error, chain}

        Raises:
            FileNotFoundError: file_path does not exist
            ParseFailure: The requested class could not be parsed
        """
        path = os.path.abspath(file_path)
        if not os.path.isfile(path):
            raise FileNotFoundError(f"No such source file: {file_path}")

        with open(path, "r", encoding="utf-8", errors="replace") as f:
            source_text = f.read()

        descriptor = await self._resolve(source_text, path, use_siblings=True)
        puml = self._renderer.render(descriptor)

        target_dir = output_dir or self._settings.output_dir
        stem = descriptor.qualified_name if qualified_names else descriptor.name
        puml_path = self.save_diagram(puml, target_dir, stem)

        if render_svg is None:
            render_svg = self._settings.plantuml.render_svg

        svg_path: Optional[str] = None
        svg_error: Optional[str] = None
        if render_svg:
            try:
                svg = await asyncio.to_thread(self._svg_renderer.render_svg, puml)
                svg_path = str(Path(target_dir) / f"{stem}.svg")
                Path(svg_path).write_text(svg, encoding="utf-8")
            except RuntimeError as e:
                logger.warning(f"SVG generation failed for {descriptor.name}: {e}")
                svg_error = str(e)
                svg_path = None

        return {
            "class_name": descriptor.name,
            "puml": puml,
            "puml_path": puml_path,
            "svg_path": svg_path,
            "svg_error": svg_error,
            "chain": self.chain_names(descriptor),
        }

    async def generate_for_source(self, source_text: str) -> Dict[str, Any]:
        """Resolve and render source text without touching the filesystem.

        No sibling lookup happens: there is no origin directory.
        """
        descriptor = await self._resolve(source_text, None, use_siblings=False)
        return {
            "class_name": descriptor.name,
            "puml": self._renderer.render(descriptor),
            "chain": self.chain_names(descriptor),
        }

    @staticmethod
    def save_diagram(puml: str, output_dir: str, class_name: str) -> str:
        """Write `<class_name>.puml` into output_dir and return its path."""
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        path = out / f"{class_name}.puml"
        path.write_text(puml, encoding="utf-8")
        return str(path)

    @staticmethod
    def chain_names(descriptor: ClassDescriptor) -> List[str]:
        return [node.qualified_name for node in descriptor.iter_chain()]

    # =========================================================================
    # Internals
    # =========================================================================

    async def _resolve(
        self,
        source_text: str,
        source_path: Optional[str],
        use_siblings: bool,
    ) -> ClassDescriptor:
        descriptor = await self._source.resolve(source_text, source_path=source_path)

        builder = InheritanceChainBuilder(
            self._source,
            self._system,
            lookup=self._lookup if use_siblings else None,
            max_depth=self._settings.max_depth,
        )
        await builder.build(descriptor)
        self._log_class_info(descriptor)
        return descriptor

    @staticmethod
    def _log_class_info(descriptor: ClassDescriptor) -> None:
        logger.info(f"Class Name: {descriptor.qualified_name}")
        logger.info(f"Modifiers: {', '.join(descriptor.modifiers)}")
        if descriptor.extends:
            logger.info(f"Extends: {descriptor.extends}")
        if descriptor.implements:
            logger.info(f"Implements: {', '.join(descriptor.implements)}")
        for field in descriptor.fields:
            logger.info(f"Field: {' '.join(field.modifiers)} {field.type} {field.name}".replace("  ", " "))
        for method in descriptor.methods:
            params = ", ".join(f"{p.type} {p.name}".strip() for p in method.parameters)
            logger.info(
                f"Method: {' '.join(method.modifiers)} {method.return_type} "
                f"{method.name}({params})".replace("  ", " ")
            )
        chain = " -> ".join(node.name for node in descriptor.iter_chain())
        logger.info(f"Inheritance chain: {chain}")
