"""Tests for source resolution and inheritance chain building."""

import asyncio
from types import SimpleNamespace

import pytest
from classview.core.ast_parser.models import DeclarationParseResult, ParseError
from classview.core.descriptors import ClassDescriptor
from classview.core.diagrams import DiagramRenderer
from classview.core.resolver import (
    InheritanceChainBuilder,
    ParseFailure,
    SiblingSourceLookup,
    SourceClassResolver,
    SystemClassResolver,
    candidate_names,
    chain_depth,
)

from .fakes import LIBRARY_OUTPUTS, FakeDisassembler


def _write(directory, name, text):
    path = directory / f"{name}.java"
    path.write_text(text, encoding="utf-8")
    return str(path)


def _build(source_path, disassembler, max_depth=10, use_siblings=True):
    source = SourceClassResolver()
    with open(source_path, encoding="utf-8") as f:
        text = f.read()

    async def run():
        root = await source.resolve(text, source_path=source_path)
        builder = InheritanceChainBuilder(
            source,
            SystemClassResolver(disassembler),
            lookup=SiblingSourceLookup() if use_siblings else None,
            max_depth=max_depth,
        )
        return await builder.build(root)

    return asyncio.run(run())


# =========================================================================
# Tests: SourceClassResolver
# =========================================================================

class TestSourceClassResolver:
    def test_resolve_records_source_path(self):
        desc = asyncio.run(SourceClassResolver().resolve(
            "package a.b; public class C extends D {}", source_path="/tmp/C.java"
        ))
        assert desc.qualified_name == "a.b.C"
        assert desc.extends == "D"
        assert desc.source_path == "/tmp/C.java"
        assert desc.parent_class is None

    def test_no_declaration_raises(self):
        with pytest.raises(ParseFailure, match="No top-level type declaration"):
            asyncio.run(SourceClassResolver().resolve("package a.b;"))

    def test_collaborator_status_raises(self):
        parser = SimpleNamespace(parse_declaration=lambda text: DeclarationParseResult(
            declaration={"name": "C"},
            status=1,
            errors=[ParseError(line=3, message="Syntax error near line 3")],
        ))
        with pytest.raises(ParseFailure, match="near line 3"):
            asyncio.run(SourceClassResolver(parser).resolve("class C {", source_path="C.java"))


# =========================================================================
# Tests: candidate names
# =========================================================================

class TestCandidateNames:
    def test_literal_first_then_namespaces(self):
        names = candidate_names("Exception")
        assert names[:4] == ["Exception", "java.lang.Exception", "java.util.Exception", "java.io.Exception"]
        assert names[-1] == "java.time.Exception"
        assert len(names) == 14

    def test_applet_special_case(self):
        names = candidate_names("Applet")
        assert names[:3] == ["Applet", "java.applet.Applet", "java.lang.Applet"]
        assert names.count("java.applet.Applet") == 1

    def test_qualified_name_uses_simple_name_for_guesses(self):
        names = candidate_names("com.acme.Base")
        assert names[0] == "com.acme.Base"
        assert names[1] == "java.lang.Base"


# =========================================================================
# Tests: InheritanceChainBuilder
# =========================================================================

class TestInheritanceChain:
    def test_no_extends_is_depth_one(self, tmp_path):
        path = _write(tmp_path, "Solo", "public class Solo {}")
        disassembler = FakeDisassembler()
        root = _build(path, disassembler)
        assert chain_depth(root) == 1
        assert disassembler.calls == []

    def test_local_sibling_preferred(self, tmp_path):
        path = _write(tmp_path, "A", "public class A extends B {}")
        _write(tmp_path, "B", "public class B { protected int x; }")
        disassembler = FakeDisassembler()

        root = _build(path, disassembler)
        assert root.parent_class.name == "B"
        assert root.extends == "B"
        assert root.parent_class.source_path.endswith("B.java")
        assert chain_depth(root) == 2
        assert disassembler.calls == []

    def test_library_fallback_rewrites_extends(self, tmp_path):
        path = _write(tmp_path, "A", "public class A extends Exception {}")
        disassembler = FakeDisassembler(LIBRARY_OUTPUTS)

        root = _build(path, disassembler)
        assert root.extends == "java.lang.Exception"
        assert [n.name for n in root.iter_chain()] == ["A", "Exception", "Throwable"]
        # after the first system hit only literal names are disassembled
        assert disassembler.calls == ["Exception", "java.lang.Exception", "java.lang.Throwable"]

    def test_unresolved_ancestor_does_not_raise(self, tmp_path):
        path = _write(tmp_path, "A", "public class A extends Missing {}")
        disassembler = FakeDisassembler()

        root = _build(path, disassembler)
        assert root.parent_class is None
        assert root.extends == "Missing"
        assert disassembler.calls == candidate_names("Missing")

    def test_collaborator_errors_absorbed(self, tmp_path):
        path = _write(tmp_path, "A", "public class A extends Exception {}")
        root = _build(path, FakeDisassembler(fail_with=OSError("javap crashed")))
        assert root.parent_class is None

    def test_unparseable_sibling_ends_chain(self, tmp_path):
        path = _write(tmp_path, "A", "public class A extends B {}")
        _write(tmp_path, "B", "public class B extends {")
        disassembler = FakeDisassembler(LIBRARY_OUTPUTS)

        root = _build(path, disassembler)
        assert root.parent_class is None
        assert disassembler.calls == []

    def test_sibling_lookup_disabled(self, tmp_path):
        path = _write(tmp_path, "A", "public class A extends B {}")
        _write(tmp_path, "B", "public class B {}")
        disassembler = FakeDisassembler()

        root = _build(path, disassembler, use_siblings=False)
        assert root.parent_class is None
        assert disassembler.calls[0] == "B"

    def test_self_reference_bounded(self, tmp_path):
        path = _write(tmp_path, "Loop", "public class Loop extends Loop {}")
        root = _build(path, FakeDisassembler())
        assert chain_depth(root) == 10

    def test_custom_depth_bound(self, tmp_path):
        path = _write(tmp_path, "A", "public class A extends B {}")
        _write(tmp_path, "B", "public class B extends C {}")
        _write(tmp_path, "C", "public class C {}")

        root = _build(path, FakeDisassembler(), max_depth=2)
        assert [n.name for n in root.iter_chain()] == ["A", "B"]
        assert root.parent_class.extends == "C"

    def test_system_walk_stops_at_root_type(self):
        object_child = '''public class org.lib.Widget extends java.lang.Object {
}
'''
        disassembler = FakeDisassembler({"org.lib.Widget": object_child})
        root = ClassDescriptor(name="A", extends="org.lib.Widget")

        builder = InheritanceChainBuilder(SourceClassResolver(), SystemClassResolver(disassembler))
        asyncio.run(builder.build(root))
        assert root.parent_class.name == "Widget"
        assert root.parent_class.parent_class is None
        assert disassembler.calls == ["org.lib.Widget"]

    def test_local_interface_ancestry(self, tmp_path):
        path = _write(tmp_path, "I", "interface I extends J { void a(); }")
        _write(tmp_path, "J", "interface J extends K { void b(); }")
        disassembler = FakeDisassembler()

        root = _build(path, disassembler)
        assert root.extends == "J"
        assert root.parent_class.name == "J"
        assert root.parent_class.kind == "interface"
        assert [m.name for m in root.parent_class.methods] == ["b"]
        assert root.parent_class.extends == "K"
        assert root.parent_class.parent_class is None
        assert disassembler.calls == candidate_names("K")

        lines = DiagramRenderer().render(root).splitlines()
        assert "interface J {" in lines
        assert "    ~void b()" in lines
        assert lines.count("J <|-- I") == 1
        assert "J <|.. I" not in lines
        assert "K <|-- J" in lines
