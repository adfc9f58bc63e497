"""javap subprocess bridge for library class disassembly.

Runs the JDK's `javap` on a fully-qualified class name and returns the
textual disassembly. Requires a JDK on PATH (or a configured command).
"""

import logging
import shutil
from typing import List, Optional

from .base import SubprocessBridge

logger = logging.getLogger(__name__)


class JavapBridge(SubprocessBridge):
    """Bridge to `javap` for resolving compiled classes by name.

    Args:
        command: javap executable name or path
        classpath: Optional classpath searched in addition to the JDK runtime
        include_code: Pass `-c` (bytecode sections are skipped when parsed)
        include_private: Pass `-p` to list private members too
        timeout: Per-invocation timeout in seconds
    """

    _warned: bool = False

    def __init__(
        self,
        command: str = "javap",
        classpath: Optional[str] = None,
        include_code: bool = False,
        include_private: bool = False,
        timeout: Optional[float] = 30,
    ):
        self._command = command
        self._classpath = classpath
        self._include_code = include_code
        self._include_private = include_private
        self._timeout = timeout
        self._is_available_cache: Optional[bool] = None

    def is_available(self) -> bool:
        if self._is_available_cache is not None:
            return self._is_available_cache

        self._is_available_cache = shutil.which(self._command) is not None
        if not self._is_available_cache and not JavapBridge._warned:
            JavapBridge._warned = True
            logger.info(
                "javap not found - library ancestors will render as placeholders "
                "(install a JDK to resolve them)"
            )
        return self._is_available_cache

    def build_command(self, class_name: str) -> List[str]:
        cmd = [self._command]
        if self._include_code:
            cmd.append("-c")
        if self._include_private:
            cmd.append("-p")
        if self._classpath:
            cmd.extend(["-cp", self._classpath])
        cmd.append(class_name)
        return cmd

    async def disassemble(self, class_name: str) -> Optional[str]:
        """Disassemble a class by fully-qualified name.

        Returns:
            javap output text, or None if the class cannot be resolved
        """
        if not self.is_available():
            return None

        text = await self._run_tool(self.build_command(class_name), timeout=self._timeout)
        if text is None:
            return None

        # Some JDKs report a missing class on stdout with exit status 0
        if text.lstrip().startswith("Error:"):
            logger.debug(f"javap could not find {class_name}: {text.strip()[:200]}")
            return None
        return text
