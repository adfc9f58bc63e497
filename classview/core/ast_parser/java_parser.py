"""Java declaration parser using tree-sitter.

Walks the tree-sitter AST of one compilation unit and extracts the first
top-level class, interface or enum as a plain declaration record:
modifiers, annotations, extends/implements, fields and methods.
Constructors are left out. Type arguments are dropped from supertype
names; member types keep their declared text.
"""

import logging
from typing import Any, Dict, List, Optional

import tree_sitter
import tree_sitter_java

from ..utils.naming import strip_type_arguments
from .models import DeclarationParseResult, ParseError

logger = logging.getLogger(__name__)

_JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())

_TYPE_DECLARATIONS = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
}

_ANNOTATION_TYPES = ("marker_annotation", "annotation")
_COMMENT_TYPES = ("line_comment", "block_comment")


class JavaDeclarationParser:
    """tree-sitter based structured parse of a single Java compilation unit.

    Extracts:
    - The first top-level type declaration -> name, kind, package
    - Class modifiers and annotations
    - `extends` (first supertype, also for interfaces) and `implements` lists
    - Field declarations (one entry per declarator)
    - Method declarations (constructors are skipped)
    """

    def __init__(self) -> None:
        self._parser = tree_sitter.Parser(_JAVA_LANGUAGE)

    def parse_declaration(self, source_text: str) -> DeclarationParseResult:
        """Parse source text into a declaration record.

        Args:
            source_text: Java source of one compilation unit

        Returns:
            DeclarationParseResult; status 1 on syntax errors or when no
            top-level type declaration exists
        """
        source = source_text.encode("utf-8")
        tree = self._parser.parse(source)
        root = tree.root_node

        errors: List[ParseError] = []
        if root.has_error:
            line = self._first_error_line(root)
            errors.append(
                ParseError(line=line, message=f"Syntax error near line {line}")
            )

        decl_node = None
        for child in root.children:
            if child.type in _TYPE_DECLARATIONS:
                decl_node = child
                break

        if decl_node is None:
            errors.append(ParseError(line=0, message="No top-level type declaration found"))
            return DeclarationParseResult(declaration=None, status=1, errors=errors)

        try:
            declaration = self._extract_declaration(decl_node, source)
        except Exception as e:
            logger.error(f"Failed to extract declaration: {e}")
            errors.append(ParseError(line=0, message=f"Declaration extraction failed: {e}"))
            return DeclarationParseResult(declaration=None, status=1, errors=errors)

        declaration["package"] = self._extract_package(root, source)

        return DeclarationParseResult(
            declaration=declaration,
            status=1 if errors else 0,
            errors=errors,
        )

    # =========================================================================
    # Declaration
    # =========================================================================

    def _extract_declaration(self, node: tree_sitter.Node, source: bytes) -> Dict[str, Any]:
        kind = _TYPE_DECLARATIONS[node.type]
        modifiers, annotations = self._extract_modifiers(node, source)

        extends: Optional[str] = None
        implements: List[str] = []

        superclass = self._get_child_by_type(node, "superclass")
        if superclass is not None and superclass.named_children:
            extends = strip_type_arguments(self._text(superclass.named_children[0], source)).strip()

        interfaces = self._get_child_by_type(node, "super_interfaces")
        if interfaces is not None:
            implements.extend(self._type_list(interfaces, source))

        # An interface's first extended type is its parent; the rest are implemented
        extended = self._get_child_by_type(node, "extends_interfaces")
        if extended is not None:
            names = self._type_list(extended, source)
            if names:
                extends = names[0]
                implements.extend(names[1:])

        # Constructors are not part of the record
        fields: List[Dict[str, Any]] = []
        methods: List[Dict[str, Any]] = []
        for member in self._iter_members(node):
            if member.type in ("field_declaration", "constant_declaration"):
                fields.extend(self._extract_fields(member, source))
            elif member.type == "method_declaration":
                method = self._extract_method(member, source)
                if method:
                    methods.append(method)

        return {
            "name": self._get_child_text(node, "name", source) or "",
            "kind": kind,
            "modifiers": modifiers,
            "annotations": annotations,
            "extends": extends,
            "implements": implements,
            "fields": fields,
            "methods": methods,
        }

    def _iter_members(self, node: tree_sitter.Node) -> List[tree_sitter.Node]:
        body = node.child_by_field_name("body")
        if body is None:
            return []
        members = []
        for child in body.children:
            if child.type == "enum_body_declarations":
                members.extend(child.children)
            else:
                members.append(child)
        return members

    # =========================================================================
    # Members
    # =========================================================================

    def _extract_fields(self, node: tree_sitter.Node, source: bytes) -> List[Dict[str, Any]]:
        """One entry per declarator: `int a, b[];` yields a:int and b:int[]."""
        modifiers, _ = self._extract_modifiers(node, source)
        type_node = node.child_by_field_name("type")
        if type_node is None:
            return []
        base_type = self._text(type_node, source)

        fields = []
        for declarator in node.children_by_field_name("declarator"):
            name = self._get_child_text(declarator, "name", source)
            if not name:
                continue
            dims = self._get_child_text(declarator, "dimensions", source) or ""
            fields.append({
                "name": name,
                "type": base_type + dims,
                "modifiers": modifiers,
            })
        return fields

    def _extract_method(self, node: tree_sitter.Node, source: bytes) -> Optional[Dict[str, Any]]:
        name = self._get_child_text(node, "name", source)
        if not name:
            return None
        modifiers, _ = self._extract_modifiers(node, source)
        return_type = self._get_child_text(node, "type", source) or ""
        dims = self._get_child_text(node, "dimensions", source) or ""
        return {
            "name": name,
            "returnType": return_type + dims,
            "parameters": self._extract_parameters(node, source),
            "modifiers": modifiers,
        }

    def _extract_parameters(self, node: tree_sitter.Node, source: bytes) -> List[Dict[str, str]]:
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []

        params = []
        for child in params_node.named_children:
            if child.type == "formal_parameter":
                type_text = self._get_child_text(child, "type", source) or ""
                dims = self._get_child_text(child, "dimensions", source) or ""
                params.append({
                    "name": self._get_child_text(child, "name", source) or "",
                    "type": type_text + dims,
                })
            elif child.type == "spread_parameter":
                # `String... args` has no field names in the grammar
                type_text = ""
                name = ""
                for sub in child.named_children:
                    if sub.type == "variable_declarator":
                        name = self._get_child_text(sub, "name", source) or ""
                    elif sub.type not in ("modifiers",) + _ANNOTATION_TYPES and not type_text:
                        type_text = self._text(sub, source)
                params.append({"name": name, "type": f"{type_text}..."})
        return params

    # =========================================================================
    # Helpers
    # =========================================================================

    def _extract_modifiers(self, node: tree_sitter.Node, source: bytes) -> tuple:
        """Return (keyword modifiers, annotations as `@Name`)."""
        modifiers: List[str] = []
        annotations: List[str] = []
        mods_node = self._get_child_by_type(node, "modifiers")
        if mods_node is None:
            return modifiers, annotations

        for child in mods_node.children:
            if child.type in _ANNOTATION_TYPES:
                name = self._get_child_text(child, "name", source)
                if name:
                    annotations.append(f"@{name}")
            elif child.type not in _COMMENT_TYPES:
                modifiers.append(self._text(child, source))
        return modifiers, annotations

    def _type_list(self, clause: tree_sitter.Node, source: bytes) -> List[str]:
        names = []
        for sub in clause.named_children:
            if sub.type == "type_list":
                for type_node in sub.named_children:
                    names.append(strip_type_arguments(self._text(type_node, source)).strip())
        return names

    @staticmethod
    def _text(node: tree_sitter.Node, source: bytes) -> str:
        return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def _get_child_text(node: tree_sitter.Node, field_name: str, source: bytes) -> Optional[str]:
        child = node.child_by_field_name(field_name)
        if child:
            return source[child.start_byte:child.end_byte].decode("utf-8", errors="replace")
        return None

    @staticmethod
    def _get_child_by_type(node: tree_sitter.Node, type_name: str) -> Optional[tree_sitter.Node]:
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    @staticmethod
    def _extract_package(root: tree_sitter.Node, source: bytes) -> Optional[str]:
        for child in root.children:
            if child.type == "package_declaration":
                text = source[child.start_byte:child.end_byte].decode("utf-8", errors="replace").strip()
                # Remove 'package ' prefix and trailing ';'
                return text.replace("package ", "", 1).rstrip(";").strip() or None
        return None

    @staticmethod
    def _first_error_line(root: tree_sitter.Node) -> int:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node.start_point.row + 1
            stack.extend(reversed(node.children))
        return 0
