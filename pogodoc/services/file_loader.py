"""
File Loader Service

Reads template archives from disk into fully buffered payloads.
"""

import logging
import os
from pathlib import Path
from typing import Union

from ..exceptions import EmptyFileError, FileOpenError, FileReadError, PathResolutionError
from ..models import FilePayload

logger = logging.getLogger(__name__)


class FileLoader:
    """
    Loads a file from the local filesystem into memory.

    No mmap and no chunking: the whole file is read in one go and the
    handle is closed before the payload is returned.
    """

    @staticmethod
    def load(path: Union[str, os.PathLike]) -> FilePayload:
        """
        Resolve path and read its full contents.

        Args:
            path: Relative or absolute path to the file

        Returns:
            FilePayload: The file contents

        Raises:
            PathResolutionError: If the path cannot be made absolute
            FileOpenError: If the file cannot be opened
            FileReadError: If reading the opened file fails
            EmptyFileError: If the file has no content
        """
        try:
            absolute_path = Path(path).expanduser().resolve()
        except (OSError, RuntimeError, TypeError) as e:
            logger.error(f"Error resolving absolute path for {path}: {e}")
            raise PathResolutionError(f"Cannot resolve path '{path}': {e}", str(path)) from e

        try:
            handle = open(absolute_path, "rb")
        except OSError as e:
            logger.error(f"Error opening file {absolute_path}: {e}")
            raise FileOpenError(
                f"Cannot open file '{absolute_path}': {e}", str(absolute_path)
            ) from e

        with handle:
            try:
                data = handle.read()
            except OSError as e:
                logger.error(f"Error reading file {absolute_path}: {e}")
                raise FileReadError(
                    f"Cannot read file '{absolute_path}': {e}", str(absolute_path)
                ) from e

        if not data:
            logger.error(f"File is empty: {absolute_path}")
            raise EmptyFileError(str(absolute_path))

        logger.debug(f"Loaded {len(data)} bytes from {absolute_path}")
        return FilePayload(data)
