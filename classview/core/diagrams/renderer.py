"""PlantUML text -> SVG rendering.

Primary:  local JAR via `java -jar plantuml.jar -tsvg -pipe` (stdin/stdout).
Fallback: PlantUML HTTP server with deflate + PlantUML base64 URL encoding.

JAR location resolution order:
  1. explicit jar_path (settings / PLANTUML_JAR_PATH)
  2. tools/plantuml/plantuml.jar in the repository
"""

import logging
import shutil
import subprocess
import zlib
from pathlib import Path
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "https://www.plantuml.com/plantuml"

_REPO_JAR_PATH = Path(__file__).parents[3] / "tools" / "plantuml" / "plantuml.jar"

_PLANTUML_ALPHABET = (
    "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"
)


def plantuml_encode(text: str) -> str:
    """Encode diagram text for a PlantUML server URL (raw deflate + custom base64)."""
    data = zlib.compress(text.encode("utf-8"))[2:-4]
    padded = data + b"\x00" * (-len(data) % 3)

    chars = []
    for i in range(0, len(padded), 3):
        b1, b2, b3 = padded[i], padded[i + 1], padded[i + 2]
        for six in (
            b1 >> 2,
            ((b1 & 0x3) << 4) | (b2 >> 4),
            ((b2 & 0xF) << 2) | (b3 >> 6),
            b3 & 0x3F,
        ):
            chars.append(_PLANTUML_ALPHABET[six & 0x3F])
    return "".join(chars)


def _looks_like_svg(text: str) -> bool:
    return text.strip().startswith("<") and "<svg" in text[:500]


class PlantUMLRenderer:
    """Renders diagram text to SVG, preferring a local PlantUML JAR.

    Args:
        jar_path: PlantUML JAR location; falls back to the repository copy
        server_url: PlantUML server base URL for HTTP rendering
        timeout: Seconds allowed for one JAR run or HTTP request
    """

    def __init__(
        self,
        jar_path: Optional[str] = None,
        server_url: Optional[str] = None,
        timeout: float = 60.0,
    ):
        self._jar_path = Path(jar_path) if jar_path else _REPO_JAR_PATH
        self._server_url = (server_url or DEFAULT_SERVER_URL).rstrip("/")
        self._timeout = timeout
        self._jar_checked = False
        self._jar_usable = False

    def jar_available(self) -> bool:
        """Check once whether local JAR rendering is possible."""
        if self._jar_checked:
            return self._jar_usable
        self._jar_checked = True

        if not self._jar_path.is_file():
            logger.info(f"PlantUML JAR not found at {self._jar_path}, using HTTP rendering")
        elif shutil.which("java") is None:
            logger.info("Java not in PATH, PlantUML JAR unusable, using HTTP rendering")
        else:
            logger.info(f"PlantUML local JAR available at {self._jar_path}")
            self._jar_usable = True
        return self._jar_usable

    def render_svg(self, puml: str) -> str:
        """Render diagram text to SVG.

        Raises:
            RuntimeError: Both JAR and HTTP rendering failed
        """
        if self.jar_available():
            svg = self._render_via_jar(puml)
            if svg is not None:
                return svg
        return self._render_via_http(puml)

    def _render_via_jar(self, puml: str) -> Optional[str]:
        cmd = [
            "java",
            "-Djava.awt.headless=true",
            "-jar",
            str(self._jar_path),
            "-tsvg",
            "-pipe",
        ]
        try:
            result = subprocess.run(
                cmd,
                input=puml.encode("utf-8"),
                capture_output=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"PlantUML JAR timed out after {self._timeout}s, falling back to HTTP")
            return None
        except OSError as e:
            logger.warning(f"PlantUML JAR execution failed: {e}, falling back to HTTP")
            return None

        stdout = result.stdout.decode("utf-8", errors="replace")
        # Syntax errors still produce an SVG describing the error
        if _looks_like_svg(stdout):
            return stdout

        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        logger.warning(
            f"PlantUML JAR produced no SVG (exit={result.returncode}, "
            f"stderr={stderr[:300] or '(empty)'}), falling back to HTTP"
        )
        return None

    def _render_via_http(self, puml: str) -> str:
        url = f"{self._server_url}/svg/{plantuml_encode(puml)}"
        logger.debug(f"Rendering PlantUML via HTTP {self._server_url}")

        try:
            response = httpx.get(url, timeout=self._timeout, follow_redirects=True)
        except httpx.RequestError as e:
            raise RuntimeError(f"PlantUML server request failed: {e}") from e

        body = response.text
        if _looks_like_svg(body):
            return body
        if response.status_code != 200:
            raise RuntimeError(f"PlantUML server returned {response.status_code} with non-SVG body")
        raise RuntimeError(f"PlantUML server returned unexpected content: {body[:200]}")
