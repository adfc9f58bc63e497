"""Inheritance chain building.

Walks a descriptor's `extends` links and attaches a resolved ancestor to
each, one link at a time:

  1. No `extends`                         -> chain ends here
  2. Sibling `<Simple>.java` next to file -> parse it, continue (local mode)
  3. Otherwise ordered namespace guesses  -> first javap hit wins
  4. After the first system hit, only the literal `extends` is disassembled
     until the root type or the depth bound is reached

Every external call is awaited before the next candidate is tried; the
candidate order is the resolution policy. A failed link ends the chain
without raising, so a diagram is always produced for the requested class.
"""

import logging
import os
from typing import List, Optional

from ..constants import (
    APPLET_QUALIFIED_NAME,
    APPLET_SIMPLE_NAME,
    FALLBACK_NAMESPACES,
    MAX_CHAIN_DEPTH,
    ROOT_TYPE_NAME,
)
from ..descriptors import ClassDescriptor
from ..utils.naming import simple_name
from .errors import ParseFailure
from .filesystem import SiblingSource, SiblingSourceLookup
from .source_resolver import SourceClassResolver
from .system_resolver import SystemClassResolver

logger = logging.getLogger(__name__)


def candidate_names(extends: str) -> List[str]:
    """Ordered fully-qualified guesses for a declared supertype name.

    Literal name first, then `java.applet.Applet` for a bare `Applet`,
    then the simple name under each fallback namespace. No duplicates.
    """
    simple = simple_name(extends)
    ordered = [extends]
    if simple == APPLET_SIMPLE_NAME:
        ordered.append(APPLET_QUALIFIED_NAME)
    ordered.extend(f"{ns}.{simple}" for ns in FALLBACK_NAMESPACES)

    seen = set()
    unique = []
    for name in ordered:
        if name not in seen:
            seen.add(name)
            unique.append(name)
    return unique


def chain_depth(descriptor: ClassDescriptor) -> int:
    """Number of descriptors in the chain, the root included."""
    return sum(1 for _ in descriptor.iter_chain())


class InheritanceChainBuilder:
    """Resolves the full `parent_class` chain of a descriptor in place.

    Args:
        source_resolver: Parses sibling source files
        system_resolver: Resolves compiled classes by qualified name
        lookup: Sibling file lookup (None disables project-local resolution)
        max_depth: Maximum descriptors in the chain, root included
    """

    def __init__(
        self,
        source_resolver: SourceClassResolver,
        system_resolver: SystemClassResolver,
        lookup: Optional[SiblingSourceLookup] = None,
        max_depth: int = MAX_CHAIN_DEPTH,
    ):
        self._source = source_resolver
        self._system = system_resolver
        self._lookup = lookup
        self._max_depth = max_depth

    async def build(self, descriptor: ClassDescriptor) -> ClassDescriptor:
        """Attach ancestors to `descriptor` and return it.

        Never raises for ancestor failures; an unresolved link keeps its
        `extends` name and has no `parent_class`.
        """
        link = descriptor
        depth = 1
        system_mode = False

        while link.extends:
            if depth >= self._max_depth:
                logger.info(
                    f"Depth bound {self._max_depth} reached at {link.name}; "
                    f"{link.extends} left unresolved"
                )
                break

            if system_mode:
                if link.extends == ROOT_TYPE_NAME:
                    break
                result = await self._system.lookup(link.extends)
            else:
                sibling = self._find_sibling(link)
                if sibling is not None:
                    try:
                        parent = await self._source.resolve(sibling.text, source_path=sibling.path)
                    except ParseFailure as e:
                        logger.warning(f"Ancestor {link.extends} of {link.name} not parsed: {e}")
                        break
                    logger.debug(f"{link.name} extends local {parent.name} ({sibling.path})")
                    link.parent_class = parent
                    link = parent
                    depth += 1
                    continue

                result = await self._system.lookup_first(candidate_names(link.extends))

            if not result.found:
                logger.warning(
                    f"Could not resolve {link.extends} (ancestor of {link.name}): {result.error}"
                )
                break

            logger.debug(f"{link.name} extends {result.matched_name}")
            link.extends = result.matched_name
            link.parent_class = result.descriptor
            link = result.descriptor
            system_mode = True
            depth += 1

        return descriptor

    def _find_sibling(self, link: ClassDescriptor) -> Optional[SiblingSource]:
        if self._lookup is None or not link.source_path:
            return None
        directory = os.path.dirname(os.path.abspath(link.source_path))
        return self._lookup.find_sibling(directory, simple_name(link.extends))
