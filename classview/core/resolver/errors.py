"""Resolution error kinds.

Subclass the builtins the API layer already maps: ValueError -> 400,
RuntimeError -> 502.
"""


class ParseFailure(ValueError):
    """Source text had no top-level declaration or failed to parse."""


class DisassemblyNotFound(RuntimeError):
    """The disassembler could not produce output for a class name."""

    def __init__(self, class_name: str, detail: str = ""):
        self.class_name = class_name
        message = f"No disassembly for {class_name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MalformedMemberLine(ValueError):
    """A disassembly member line did not match the field or method shape."""

    def __init__(self, line: str, reason: str):
        self.line = line
        super().__init__(f"{reason}: {line!r}")
