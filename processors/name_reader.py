# =============================================================================
# processors/name_reader.py - Name list reader
# =============================================================================

from pathlib import Path
from typing import List
import logging

from core.exceptions import NotFoundError


class NameSourceReader:
    """Reads the newline-delimited "First Last" name list"""

    def __init__(self, file_path: str, encoding: str = 'utf-8-sig'):
        self.file_path = file_path
        self.encoding = encoding
        self.logger = logging.getLogger(self.__class__.__name__)

    def validate(self) -> None:
        """Fail before any processing if the name list is missing"""
        if not Path(self.file_path).exists():
            raise NotFoundError(self.file_path)

    def read_lines(self) -> List[str]:
        """Return every line of the file, blank and malformed lines included"""
        self.validate()
        with open(self.file_path, 'r', encoding=self.encoding) as file:
            lines = file.read().splitlines()

        self.logger.info(f"Read {len(lines)} lines from {self.file_path}")
        return lines
