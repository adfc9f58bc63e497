"""AST parser data models.

Output of the structured-parse step: a plain declaration record plus
status and errors. These are pure data containers; no parsing logic.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ParseError:
    """An error encountered during parsing."""

    line: int
    message: str
    severity: str = "error"  # "warning" | "error"


@dataclass
class DeclarationParseResult:
    """Structured record for the first top-level type in a compilation unit.

    `declaration` keys: name, kind, package, modifiers, annotations,
    extends, implements, fields [{name, type, modifiers}],
    methods [{name, returnType, parameters: [{name, type}], modifiers}].
    A non-zero status means the parse failed even if a partial record exists.
    """

    declaration: Optional[Dict[str, Any]]
    status: int = 0
    errors: List[ParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == 0 and self.declaration is not None
