"""Project-local sibling source lookup."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from ..constants import JAVA_SOURCE_EXTENSION

logger = logging.getLogger(__name__)


@dataclass
class SiblingSource:
    path: str
    text: str


class SiblingSourceLookup:
    """Finds `<name>.java` next to a file and returns its text."""

    def __init__(self, extension: str = JAVA_SOURCE_EXTENSION, encoding: str = "utf-8"):
        self._extension = extension
        self._encoding = encoding

    def find_sibling(self, directory: str, name: str) -> Optional[SiblingSource]:
        """Return the sibling source for `name` in `directory`, if it exists."""
        if not directory or not name:
            return None

        path = os.path.join(directory, f"{name}{self._extension}")
        if not os.path.isfile(path):
            return None

        try:
            with open(path, "r", encoding=self._encoding, errors="replace") as f:
                text = f.read()
        except OSError as e:
            logger.warning(f"Could not read sibling source {path}: {e}")
            return None

        return SiblingSource(path=path, text=text)
