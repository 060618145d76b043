"""
Action execution components.

This package provides the args-file scope, the shell executor and the action
runner that chains named actions.
"""

from actionrunner.execution.actions import (
    ActionRunner,
    ProjectActions,
    append_arguments,
)
from actionrunner.execution.args_files import ArgsFiles
from actionrunner.execution.executor import execute_script, prepare_command, run_shell

__all__ = [
    "ActionRunner",
    "ArgsFiles",
    "ProjectActions",
    "append_arguments",
    "execute_script",
    "prepare_command",
    "run_shell",
]
