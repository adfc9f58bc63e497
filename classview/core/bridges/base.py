"""Base class for subprocess-based tool bridges.

Each bridge wraps an external CLI tool from the JDK. Bridges fail
gracefully: any tool error, timeout or missing binary is reported as a
None result rather than an exception, and callers decide the fallback.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

logger = logging.getLogger(__name__)


class SubprocessBridge(ABC):
    """Abstract base for asynchronous subprocess tool bridges.

    Subclasses build a command line and interpret the tool's stdout.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the tool can be found on this machine."""
        ...

    async def _run_tool(self, cmd: List[str], timeout: Optional[float] = 30) -> Optional[str]:
        """Run a CLI tool and return its stdout.

        Args:
            cmd: Command and arguments to execute
            timeout: Maximum execution time in seconds (None waits forever)

        Returns:
            Decoded stdout, or None on any failure
        """
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            logger.debug(f"Bridge tool not found: {cmd[0]}")
            return None
        except OSError as e:
            logger.debug(f"Bridge tool could not start: {e}")
            return None

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            logger.debug(f"Bridge tool timed out after {timeout}s: {cmd[0]}")
            return None

        if proc.returncode != 0:
            err = stderr.decode("utf-8", errors="replace").strip() or stdout.decode(
                "utf-8", errors="replace"
            ).strip()
            logger.debug(f"Bridge tool failed (exit {proc.returncode}): {err[:200]}")
            return None

        text = stdout.decode("utf-8", errors="replace")
        if not text.strip():
            return None
        return text
