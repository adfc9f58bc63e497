"""In-memory collaborator doubles shared by the tests."""

from typing import Dict, List, Optional


class FakeDisassembler:
    """Serves canned javap output by class name and records every request."""

    def __init__(self, outputs: Optional[Dict[str, str]] = None, fail_with: Optional[Exception] = None):
        self.outputs = outputs or {}
        self.fail_with = fail_with
        self.calls: List[str] = []

    async def disassemble(self, class_name: str) -> Optional[str]:
        self.calls.append(class_name)
        if self.fail_with is not None:
            raise self.fail_with
        return self.outputs.get(class_name)


class FakeSvgRenderer:
    def __init__(self, svg: str = "<svg></svg>", error: Optional[str] = None):
        self.svg = svg
        self.error = error
        self.rendered: List[str] = []

    def render_svg(self, puml: str) -> str:
        self.rendered.append(puml)
        if self.error:
            raise RuntimeError(self.error)
        return self.svg


EXCEPTION_JAVAP = '''Compiled from "Exception.java"
public class java.lang.Exception extends java.lang.Throwable {
  static final long serialVersionUID;
  public java.lang.Exception();
  public java.lang.Exception(java.lang.String);
}
'''

THROWABLE_JAVAP = '''Compiled from "Throwable.java"
public class java.lang.Throwable implements java.io.Serializable {
  public java.lang.Throwable();
  public java.lang.String getMessage();
}
'''

LIBRARY_OUTPUTS = {
    "java.lang.Exception": EXCEPTION_JAVAP,
    "java.lang.Throwable": THROWABLE_JAVAP,
}
