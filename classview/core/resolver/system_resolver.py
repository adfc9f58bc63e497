"""System class resolution: fully-qualified name -> ClassDescriptor via javap.

javap output is free-form text. The parser recognises three kinds of line:

  - the class declaration (`public abstract class a.b.C extends a.b.D {`)
  - member lines starting with an access modifier (`public int size();`)
  - bytecode noise (`Code:` sections, `12: aload_0` offsets, blanks)

Runtime-library classes (java.*, javax.*) keep only their class/extends
shape: disassembly cannot recover parameter names, so members from those
classes would be lower fidelity than the rest of the diagram.
"""

import logging
import re
from typing import Iterable, List, Optional, Union

from ..descriptors import (
    ClassDescriptor,
    FieldDescriptor,
    LookupResult,
    MethodDescriptor,
    ParameterDescriptor,
)
from ..utils.naming import (
    is_library_name,
    package_of,
    simple_name,
    split_tokens,
    split_top_level,
    strip_type_arguments,
)
from .errors import DisassemblyNotFound, MalformedMemberLine

logger = logging.getLogger(__name__)

_DECLARATION_RE = re.compile(
    r"^(?P<modifiers>(?:(?:public|protected|private|abstract|final|static|sealed|non-sealed|strictfp)\s+)*)"
    r"(?P<kind>class|interface)\s+(?P<name>[\w.$]+)"
    r"(?:\s+extends\s+(?P<extends>[\w.$]+(?:\s*,\s*[\w.$]+)*))?"
    r"(?:\s+implements\s+(?P<implements>[\w.$]+(?:\s*,\s*[\w.$]+)*))?"
    r"(?:\s+permits\s+[\w.$]+(?:\s*,\s*[\w.$]+)*)?"
    r"\s*\{?\s*$"
)

_OFFSET_RE = re.compile(r"^\d+:")
_IDENTIFIER_RE = re.compile(r"^[\w$]+$")

_ACCESS_MODIFIERS = ("public", "protected", "private")

_MEMBER_MODIFIERS = frozenset({
    "public",
    "protected",
    "private",
    "static",
    "final",
    "abstract",
    "synchronized",
    "native",
    "transient",
    "volatile",
    "strictfp",
    "default",
})


def _split_names(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [n.strip() for n in text.split(",") if n.strip()]


def parse_member_line(line: str, class_simple_name: str) -> Union[FieldDescriptor, MethodDescriptor]:
    """Parse one javap member line.

    Args:
        line: Stripped member line, e.g. `public void add(int, java.lang.String);`
        class_simple_name: Simple name of the enclosing class (constructor detection)

    Raises:
        MalformedMemberLine: The line is neither a field nor a method shape
    """
    text = line.strip().rstrip(";").strip()

    if "(" in text:
        return _parse_method(text, line, class_simple_name)
    return _parse_field(text, line)


def _parse_method(text: str, line: str, class_simple_name: str) -> MethodDescriptor:
    open_idx = text.find("(")
    close_idx = text.rfind(")")
    if close_idx < open_idx:
        raise MalformedMemberLine(line, "Unbalanced parameter list")

    modifiers: List[str] = []
    rest: List[str] = []
    for token in split_tokens(text[:open_idx]):
        if not rest and token in _MEMBER_MODIFIERS:
            modifiers.append(token)
        elif not rest and token.startswith("<"):
            # generic method type parameters: `public <T> T[] toArray(T[])`
            continue
        else:
            rest.append(token)

    if len(rest) == 1:
        return_type, name = None, rest[0]
    elif len(rest) == 2:
        return_type, name = rest
    else:
        raise MalformedMemberLine(line, "Cannot split return type and name")

    method_name = simple_name(name)
    if not _IDENTIFIER_RE.match(method_name):
        raise MalformedMemberLine(line, "Invalid method name")

    # javap prints constructors with their qualified class name
    if method_name == class_simple_name:
        return_type = ""
    elif return_type is None:
        raise MalformedMemberLine(line, "Missing return type")

    parameters = [
        ParameterDescriptor(name="", type=p)
        for p in split_top_level(text[open_idx + 1:close_idx])
    ]
    return MethodDescriptor(
        name=method_name,
        return_type=return_type,
        modifiers=modifiers,
        parameters=parameters,
    )


def _parse_field(text: str, line: str) -> FieldDescriptor:
    # javap -constants appends ` = <value>`
    if " = " in text:
        text = text.split(" = ", 1)[0].strip()

    modifiers: List[str] = []
    rest: List[str] = []
    for token in split_tokens(text):
        if not rest and token in _MEMBER_MODIFIERS:
            modifiers.append(token)
        else:
            rest.append(token)

    if len(rest) != 2 or not modifiers:
        raise MalformedMemberLine(line, "Expected modifiers, type and name")

    field_type, name = rest
    if not _IDENTIFIER_RE.match(name):
        raise MalformedMemberLine(line, "Invalid field name")

    return FieldDescriptor(name=name, type=field_type, modifiers=modifiers)


def _meaningful_lines(text: str) -> Iterable[str]:
    """Yield stripped lines with bytecode noise removed."""
    in_code = False
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            in_code = False
            continue
        if line == "Code:":
            in_code = True
            continue
        if in_code or _OFFSET_RE.match(line):
            continue
        yield line


def parse_disassembly(text: str, class_name: str) -> ClassDescriptor:
    """Parse javap output for `class_name` into a ClassDescriptor.

    Members are populated only for classes outside the runtime-library
    namespaces; malformed member lines are skipped.
    """
    library = is_library_name(class_name)
    descriptor: Optional[ClassDescriptor] = None

    for line in _meaningful_lines(text):
        if descriptor is None:
            if line.startswith("Compiled from"):
                continue
            match = _DECLARATION_RE.match(strip_type_arguments(line))
            if not match:
                continue
            qualified = match.group("name")
            kind = match.group("kind")
            supertypes = _split_names(match.group("extends"))
            interfaces = _split_names(match.group("implements"))
            # an interface's first extended type is its parent; the rest are implemented
            interfaces = supertypes[1:] + interfaces
            descriptor = ClassDescriptor(
                name=simple_name(qualified),
                package=package_of(qualified) or None,
                kind=kind,
                modifiers=match.group("modifiers").split(),
                extends=supertypes[0] if supertypes else None,
                implements=[] if library else interfaces,
            )
            if library:
                break
            continue

        if not line.startswith(_ACCESS_MODIFIERS):
            continue
        try:
            member = parse_member_line(line, descriptor.name)
        except MalformedMemberLine as e:
            logger.debug(f"Skipping member of {class_name}: {e}")
            continue
        if isinstance(member, MethodDescriptor):
            descriptor.methods.append(member)
        else:
            descriptor.fields.append(member)

    if descriptor is None:
        logger.debug(f"No class declaration in disassembly of {class_name}")
        descriptor = ClassDescriptor(
            name=simple_name(class_name),
            package=package_of(class_name) or None,
        )
    return descriptor


class SystemClassResolver:
    """Resolves compiled classes by name through the disassembly collaborator.

    Args:
        disassembler: Object exposing `async disassemble(class_name) -> Optional[str]`
    """

    def __init__(self, disassembler):
        self._disassembler = disassembler

    async def resolve(self, class_name: str) -> ClassDescriptor:
        """Disassemble and parse one class.

        Raises:
            DisassemblyNotFound: The disassembler produced nothing for this name
        """
        result = await self.lookup(class_name)
        if not result.found:
            raise DisassemblyNotFound(class_name, result.error or "")
        return result.descriptor

    async def lookup(self, class_name: str) -> LookupResult:
        """Like resolve(), but reports failure as a miss instead of raising."""
        try:
            text = await self._disassembler.disassemble(class_name)
        except Exception as e:
            logger.debug(f"Disassembler error for {class_name}: {e}")
            return LookupResult.miss(f"{class_name}: {e}")

        if text is None:
            return LookupResult.miss(f"{class_name}: not found")

        return LookupResult.hit(parse_disassembly(text, class_name), class_name)

    async def lookup_first(self, candidates: Iterable[str]) -> LookupResult:
        """Try candidates in order, one at a time; the first hit wins.

        Only the last error is kept, and it is reported only on a miss.
        """
        last_error: Optional[str] = None
        for name in candidates:
            result = await self.lookup(name)
            if result.found:
                return result
            last_error = result.error
        return LookupResult.miss(last_error)
