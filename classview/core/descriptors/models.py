"""Class descriptor data models.

Unified representation of one type's declared shape, shared by the
source resolver (tree-sitter parse of local files) and the system
resolver (javap disassembly text). These are pure data containers.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from ..constants import LIBRARY_PREFIXES


@dataclass
class ParameterDescriptor:
    """A single method parameter. Name is empty when taken from disassembly."""

    name: str
    type: str


@dataclass
class FieldDescriptor:
    name: str
    type: str
    modifiers: List[str] = field(default_factory=list)


@dataclass
class MethodDescriptor:
    """A method or constructor.

    Constructors carry an empty return_type.
    """

    name: str
    return_type: str
    modifiers: List[str] = field(default_factory=list)
    parameters: List[ParameterDescriptor] = field(default_factory=list)

    @property
    def is_constructor(self) -> bool:
        return self.return_type == ""


@dataclass
class ClassDescriptor:
    """One type and the link to its (possibly unresolved) ancestor.

    `extends` holds the supertype name as declared, and is rewritten to the
    fully-qualified name that actually resolved. `parent_class` is owned
    exclusively by this descriptor; the chain it forms is never shared.
    A descriptor with `extends` set but no `parent_class` has an
    unresolved ancestor.
    """

    name: str
    package: Optional[str] = None
    kind: str = "class"  # "class" | "interface" | "enum"
    modifiers: List[str] = field(default_factory=list)
    annotations: List[str] = field(default_factory=list)
    fields: List[FieldDescriptor] = field(default_factory=list)
    methods: List[MethodDescriptor] = field(default_factory=list)
    extends: Optional[str] = None
    implements: List[str] = field(default_factory=list)
    source_path: Optional[str] = None
    parent_class: Optional["ClassDescriptor"] = None

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name

    @property
    def is_library(self) -> bool:
        """Runtime-library origin, judged purely by package prefix."""
        if not self.package:
            return False
        return f"{self.package}.".startswith(LIBRARY_PREFIXES)

    @property
    def is_abstract(self) -> bool:
        return "abstract" in self.modifiers

    def iter_chain(self) -> Iterator["ClassDescriptor"]:
        """Yield this descriptor followed by each resolved ancestor."""
        node: Optional[ClassDescriptor] = self
        while node is not None:
            yield node
            node = node.parent_class


@dataclass
class LookupResult:
    """Outcome of a single class lookup: explicit found / not-found."""

    found: bool
    descriptor: Optional[ClassDescriptor] = None
    matched_name: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def hit(cls, descriptor: ClassDescriptor, matched_name: str) -> "LookupResult":
        return cls(found=True, descriptor=descriptor, matched_name=matched_name)

    @classmethod
    def miss(cls, error: Optional[str] = None) -> "LookupResult":
        return cls(found=False, error=error)
