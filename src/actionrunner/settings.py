"""
Runtime settings for action execution.

Settings are plain pydantic models so they can be built from code, from a
mapping, or from ``ACTIONRUNNER_*`` environment variables.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict

ENV_PREFIX = "ACTIONRUNNER_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ExecutionSettings(BaseModel):
    """
    Knobs for running actions.

    Params:
        verbose: Echo the processed command line before running it
        args_file_prefix: File name prefix for temporary args files
        args_file_suffix: File name suffix for temporary args files
        args_file_dir: Directory for args files (system temp dir if None)
        args_file_encoding: Encoding used to write args-file content
    """

    model_config = ConfigDict(frozen=True)

    verbose: bool = False
    args_file_prefix: str = "actionrunner-args-"
    args_file_suffix: str = ".txt"
    args_file_dir: Path | None = None
    args_file_encoding: str = "utf-8"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExecutionSettings":
        """
        Build settings from ``ACTIONRUNNER_*`` environment variables.

        Params:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            Settings with every variable that is set applied over the defaults
        """
        environ = os.environ if environ is None else environ
        values: dict[str, object] = {}

        verbose = environ.get(f"{ENV_PREFIX}VERBOSE")
        if verbose is not None:
            values["verbose"] = verbose.strip().lower() in _TRUE_VALUES

        args_file_dir = environ.get(f"{ENV_PREFIX}ARGS_FILE_DIR")
        if args_file_dir:
            values["args_file_dir"] = Path(args_file_dir)

        prefix = environ.get(f"{ENV_PREFIX}ARGS_FILE_PREFIX")
        if prefix:
            values["args_file_prefix"] = prefix

        return cls(**values)
