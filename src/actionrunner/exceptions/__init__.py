"""
actionrunner exception classes.

This package provides all exception types used throughout actionrunner
for consistent error handling and reporting.
"""

from actionrunner.exceptions.core import (
    ActionNameRequiredError,
    ActionNotFoundError,
    ActionRunnerError,
    ArgsFileError,
    CommandParseError,
    ShellSpawnError,
)

__all__ = [
    "ActionRunnerError",
    "ActionNameRequiredError",
    "ActionNotFoundError",
    "ArgsFileError",
    "CommandParseError",
    "ShellSpawnError",
]
