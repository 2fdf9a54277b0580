"""Saving rendered protocols to disk."""

import logging
import re
from pathlib import Path
from typing import Union

from .constants import OUTPUT_FILENAME_PATTERN
from .models import UserData

logger = logging.getLogger("work-protocol.sink")

UNSAFE_FILENAME_CHARS_RE = re.compile(r'[\\/:*?"<>|\s]+')


def suggested_filename(user_data: UserData) -> str:
    """
    Build ``<name>_<date>_protocol.docx`` for a protocol.

    Path separators and other characters that are not allowed in file names
    (the ``MM/YYYY`` date contains a slash) are replaced with ``-``.
    """
    def clean(value: str) -> str:
        return UNSAFE_FILENAME_CHARS_RE.sub("-", value.strip()).strip("-")

    return OUTPUT_FILENAME_PATTERN.format(name=clean(user_data.name), date=clean(user_data.date))


class FileSink:
    """
    Write artifacts into a directory.

    Args:
        directory: Target directory, created on first save
    """

    def __init__(self, directory: Union[str, Path] = ".") -> None:
        self.directory = Path(directory)

    def save(self, data: bytes, filename: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / Path(filename).name
        path.write_bytes(data)
        logger.info("Wrote %s (%d bytes)", path, len(data))
        return path
