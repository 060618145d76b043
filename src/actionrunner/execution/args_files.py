"""
Temporary args files for long command lines.

An ``ArgsFiles`` instance is owned by a single action invocation. It creates
one file per ``@[...]`` construct during the final processing pass and deletes
all of them when the ``with`` block exits, however it exits.
"""

import logging
import os
import tempfile
from pathlib import Path

from actionrunner.exceptions import ArgsFileError
from actionrunner.settings import ExecutionSettings

logger = logging.getLogger(__name__)


class ArgsFiles:
    """Scoped set of temporary args files."""

    def __init__(self, settings: ExecutionSettings | None = None):
        self.settings = settings or ExecutionSettings()
        self.files: list[Path] = []

    def create(self, content: str) -> Path:
        """
        Write content to a new, uniquely named temporary file.

        Params:
            content: Exact text to store in the file

        Returns:
            Absolute path of the new file

        Raises:
            ArgsFileError: If the file cannot be created or written
        """
        directory = self.settings.args_file_dir
        try:
            fd, name = tempfile.mkstemp(
                prefix=self.settings.args_file_prefix,
                suffix=self.settings.args_file_suffix,
                dir=str(directory) if directory is not None else None,
            )
        except OSError as e:
            raise ArgsFileError(str(e)) from e

        path = Path(name).resolve()
        self.files.append(path)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content.encode(self.settings.args_file_encoding))
        except (OSError, UnicodeEncodeError) as e:
            raise ArgsFileError(f"{path}: {e}") from e

        logger.debug("Created args file %s (%d chars)", path, len(content))
        return path

    def close(self) -> None:
        """Delete every file created so far, ignoring failures."""
        for path in self.files:
            try:
                path.unlink(missing_ok=True)
                logger.debug("Deleted args file %s", path)
            except OSError as e:
                logger.warning("Could not delete args file %s: %s", path, e)
        self.files.clear()

    def __enter__(self) -> "ArgsFiles":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
