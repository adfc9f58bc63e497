"""AST parser utilities.

Source file detection and directory walking.
"""

import os
from typing import List

from ..constants import JAVA_SOURCE_EXTENSION

# Directories to skip during file walking
SKIP_DIRECTORIES = frozenset({
    ".git",
    ".svn",
    ".hg",
    ".idea",
    ".vscode",
    "node_modules",
    "__pycache__",
    "venv",
    ".venv",
    # Java build output
    "target",
    "build",
    "out",
    "bin",
    ".gradle",
    "out_classdiagram",
})


def is_java_file(file_path: str) -> bool:
    """Check if a file has the Java source extension (case-insensitive)."""
    _, ext = os.path.splitext(file_path)
    return ext.lower() == JAVA_SOURCE_EXTENSION


def should_skip_directory(dir_name: str) -> bool:
    """Check if a directory should be skipped during file walking.

    Args:
        dir_name: Directory name (not full path)

    Returns:
        True if directory should be skipped
    """
    return dir_name in SKIP_DIRECTORIES or dir_name.startswith(".")


def scan_java_files(directory: str) -> List[str]:
    """Recursively collect Java source files under a directory.

    Args:
        directory: Root directory to walk

    Returns:
        Sorted list of absolute file paths
    """
    results: List[str] = []
    for current, dirs, files in os.walk(os.path.abspath(directory)):
        dirs[:] = [d for d in dirs if not should_skip_directory(d)]
        for name in files:
            if is_java_file(name):
                results.append(os.path.join(current, name))
    return sorted(results)
