"""Tests for ClassDiagramService and the HTTP API."""

import asyncio
import os

import pytest
from fastapi.testclient import TestClient

from classview.__main__ import main
from classview.api.app import create_app
from classview.core.diagrams import ClassDiagramService
from classview.core.resolver import ParseFailure
from classview.setting import ClassViewSettings

from .fakes import LIBRARY_OUTPUTS, FakeDisassembler, FakeSvgRenderer


APP_ERROR = '''
package com.acme;

public class AppError extends Exception implements Runnable {
    private int code;

    public AppError(int code) {
        this.code = code;
    }

    public void run() {}
}
'''


@pytest.fixture
def settings(tmp_path):
    return ClassViewSettings(output_dir=str(tmp_path / "out"))


@pytest.fixture
def service(settings):
    return ClassDiagramService(
        settings,
        disassembler=FakeDisassembler(LIBRARY_OUTPUTS),
        svg_renderer=FakeSvgRenderer(),
    )


@pytest.fixture
def source_file(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    path = src / "AppError.java"
    path.write_text(APP_ERROR, encoding="utf-8")
    return str(path)


# =========================================================================
# Tests: service
# =========================================================================

class TestClassDiagramService:
    def test_generate_for_file_writes_puml_and_svg(self, service, source_file, settings):
        result = asyncio.run(service.generate_for_file(source_file))

        assert result["class_name"] == "AppError"
        assert result["chain"] == ["com.acme.AppError", "java.lang.Exception", "java.lang.Throwable"]
        assert result["puml_path"] == os.path.join(settings.output_dir, "AppError.puml")
        assert result["svg_path"] == os.path.join(settings.output_dir, "AppError.svg")
        assert result["svg_error"] is None

        with open(result["puml_path"], encoding="utf-8") as f:
            assert f.read() == result["puml"]
        assert "Exception <|.. AppError" in result["puml"]
        assert "Runnable <|.. AppError" in result["puml"]
        assert "    -int code" in result["puml"]

    def test_svg_can_be_skipped(self, service, source_file, tmp_path):
        out = tmp_path / "custom"
        result = asyncio.run(service.generate_for_file(source_file, output_dir=str(out), render_svg=False))
        assert result["svg_path"] is None
        assert (out / "AppError.puml").exists()
        assert not (out / "AppError.svg").exists()

    def test_svg_failure_keeps_puml(self, settings, source_file):
        svc = ClassDiagramService(
            settings,
            disassembler=FakeDisassembler(LIBRARY_OUTPUTS),
            svg_renderer=FakeSvgRenderer(error="server down"),
        )
        result = asyncio.run(svc.generate_for_file(source_file))
        assert result["svg_path"] is None
        assert result["svg_error"] == "server down"
        assert os.path.exists(result["puml_path"])

    def test_missing_file(self, service, tmp_path):
        with pytest.raises(FileNotFoundError):
            asyncio.run(service.generate_for_file(str(tmp_path / "Nope.java")))

    def test_root_parse_failure_is_raised(self, service, tmp_path):
        path = tmp_path / "Empty.java"
        path.write_text("package com.acme;\n", encoding="utf-8")
        with pytest.raises(ParseFailure):
            asyncio.run(service.generate_for_file(str(path)))

    def test_generate_for_source(self, service):
        result = asyncio.run(service.generate_for_source(APP_ERROR))
        assert result["class_name"] == "AppError"
        assert result["puml"].startswith("@startuml")
        assert result["chain"][0] == "com.acme.AppError"

    def test_save_diagram_creates_directory(self, tmp_path):
        path = ClassDiagramService.save_diagram("@startuml\n@enduml\n", str(tmp_path / "a" / "b"), "X")
        assert path.endswith("X.puml")
        assert os.path.isfile(path)

    def test_qualified_names_keep_same_named_classes_apart(self, service, tmp_path):
        out = tmp_path / "out"
        paths = []
        for package in ("alpha", "beta"):
            src = tmp_path / package
            src.mkdir()
            path = src / "Item.java"
            path.write_text(f"package {package};\npublic class Item {{}}\n", encoding="utf-8")
            paths.append(str(path))

        results = [
            asyncio.run(service.generate_for_file(p, output_dir=str(out), qualified_names=True))
            for p in paths
        ]
        assert results[0]["puml_path"] == os.path.join(str(out), "alpha.Item.puml")
        assert results[1]["puml_path"] == os.path.join(str(out), "beta.Item.puml")
        assert results[1]["svg_path"] == os.path.join(str(out), "beta.Item.svg")
        assert sorted(os.listdir(out)) == [
            "alpha.Item.puml", "alpha.Item.svg", "beta.Item.puml", "beta.Item.svg",
        ]


# =========================================================================
# Tests: HTTP API
# =========================================================================

class TestDiagramAPI:
    @pytest.fixture
    def client(self, service):
        return TestClient(create_app(service))

    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    def test_generate_for_file(self, client, source_file):
        resp = client.post("/api/diagrams/class", json={"file_path": source_file, "render_svg": False})
        assert resp.status_code == 200
        body = resp.json()
        assert body["class_name"] == "AppError"
        assert body["svg_path"] is None
        assert os.path.isfile(body["puml_path"])

    def test_missing_file_is_404(self, client, tmp_path):
        resp = client.post("/api/diagrams/class", json={"file_path": str(tmp_path / "Nope.java")})
        assert resp.status_code == 404

    def test_parse_failure_is_400(self, client):
        resp = client.post("/api/diagrams/class/source", json={"source": "package only;"})
        assert resp.status_code == 400
        assert "Failed to parse" in resp.json()["detail"]

    def test_source_endpoint(self, client):
        resp = client.post("/api/diagrams/class/source", json={"source": APP_ERROR})
        assert resp.status_code == 200
        assert "class AppError {" in resp.json()["puml"]

    def test_empty_source_rejected(self, client):
        resp = client.post("/api/diagrams/class/source", json={"source": ""})
        assert resp.status_code == 422


# =========================================================================
# Tests: command line
# =========================================================================

class TestScanCommand:
    def test_scan_names_files_by_qualified_name(self, tmp_path):
        for package in ("alpha", "beta"):
            src = tmp_path / "src" / package
            src.mkdir(parents=True)
            (src / "Item.java").write_text(f"package {package};\npublic class Item {{}}\n", encoding="utf-8")
        out = tmp_path / "diagrams"

        code = main([
            "--config", str(tmp_path / "absent.yaml"),
            "scan", str(tmp_path / "src"),
            "--output-dir", str(out),
            "--no-svg",
        ])
        assert code == 0
        assert sorted(os.listdir(out)) == ["alpha.Item.puml", "beta.Item.puml"]

    def test_generate_uses_simple_name(self, tmp_path):
        path = tmp_path / "Item.java"
        path.write_text("package alpha;\npublic class Item {}\n", encoding="utf-8")
        out = tmp_path / "diagrams"

        code = main([
            "--config", str(tmp_path / "absent.yaml"),
            "generate", str(path),
            "--output-dir", str(out),
            "--no-svg",
        ])
        assert code == 0
        assert os.listdir(out) == ["Item.puml"]
