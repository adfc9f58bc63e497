# Subprocess bridges to JDK tools.
# javap disassembles compiled library classes so ancestors outside the
# project can still be resolved. Optional: without a JDK, unresolved
# ancestors render as placeholders.

from .base import SubprocessBridge
from .javap_bridge import JavapBridge

__all__ = ["SubprocessBridge", "JavapBridge"]
