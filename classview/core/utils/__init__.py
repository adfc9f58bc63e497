"""Utility modules for the classview core package.

Shared helpers used across the resolvers and the diagram renderer.
"""

from .naming import simple_name, strip_type_arguments

__all__ = ["simple_name", "strip_type_arguments"]
