"""Shared constants for classview.

Name-resolution policy used by the inheritance chain builder and the
diagram renderer. Values here are part of the resolution contract:
changing their order changes which class a bare name resolves to.
"""

# =============================================================================
# Inheritance Walking
# =============================================================================

# Maximum number of descriptors in one ancestor chain (root included)
MAX_CHAIN_DEPTH = 10

# Walking stops once a system ancestor extends this type
ROOT_TYPE_NAME = "java.lang.Object"

# =============================================================================
# Namespace Fallback
# =============================================================================

# Tried in order after the literal name; first successful disassembly wins
FALLBACK_NAMESPACES = (
    "java.lang",
    "java.util",
    "java.io",
    "java.applet",
    "javax.swing",
    "java.awt",
    "java.net",
    "java.sql",
    "javax.servlet",
    "java.math",
    "java.security",
    "java.text",
    "java.time",
)

# Bare `Applet` is tried against this name before the general loop
APPLET_SIMPLE_NAME = "Applet"
APPLET_QUALIFIED_NAME = "java.applet.Applet"

# =============================================================================
# Library Detection
# =============================================================================

# A name carrying one of these prefixes is treated as a runtime-library class
LIBRARY_PREFIXES = ("java.", "javax.")

# =============================================================================
# Source Files
# =============================================================================

JAVA_SOURCE_EXTENSION = ".java"
