"""Class resolution: source files and compiled classes -> descriptor chains.

Public API:
    SourceClassResolver: compilation unit text -> ClassDescriptor
    SystemClassResolver: qualified class name -> ClassDescriptor (javap)
    InheritanceChainBuilder: attaches the resolved ancestor chain
"""

from .chain_builder import InheritanceChainBuilder, candidate_names, chain_depth
from .errors import DisassemblyNotFound, MalformedMemberLine, ParseFailure
from .filesystem import SiblingSource, SiblingSourceLookup
from .source_resolver import SourceClassResolver, descriptor_from_record
from .system_resolver import SystemClassResolver, parse_disassembly, parse_member_line

__all__ = [
    "InheritanceChainBuilder",
    "SourceClassResolver",
    "SystemClassResolver",
    "SiblingSource",
    "SiblingSourceLookup",
    "DisassemblyNotFound",
    "MalformedMemberLine",
    "ParseFailure",
    "candidate_names",
    "chain_depth",
    "descriptor_from_record",
    "parse_disassembly",
    "parse_member_line",
]
