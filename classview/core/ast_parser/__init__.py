"""classview AST parser: tree-sitter based Java declaration parsing.

Public API:
    parse_declaration(source_text) -> DeclarationParseResult
    scan_java_files(directory) -> list[str]
"""

from .java_parser import JavaDeclarationParser
from .models import DeclarationParseResult, ParseError
from .utils import is_java_file, scan_java_files, should_skip_directory

__all__ = [
    "parse_declaration",
    "scan_java_files",
    "is_java_file",
    "should_skip_directory",
    "JavaDeclarationParser",
    "DeclarationParseResult",
    "ParseError",
]


def parse_declaration(source_text: str) -> DeclarationParseResult:
    """Parse Java source text into a declaration record.

    Args:
        source_text: Source of one compilation unit

    Returns:
        DeclarationParseResult for its first top-level type
    """
    return JavaDeclarationParser().parse_declaration(source_text)
