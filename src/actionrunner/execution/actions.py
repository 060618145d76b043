"""
Named actions and action chains.

An action is a command template stored under a name in the project
configuration. ``ActionRunner`` looks actions up, appends extra command-line
arguments, asks for the classpath only when the template needs it, and runs
several actions in a row, stopping at the first failure.
"""

import logging
from collections.abc import Callable, Sequence
from typing import TextIO

from pydantic import BaseModel, Field

from actionrunner.core.platform import Platform, detect_platform
from actionrunner.core.types import Classpath, ClasspathProvider
from actionrunner.exceptions import ActionNameRequiredError, ActionNotFoundError
from actionrunner.execution.executor import execute_script
from actionrunner.settings import ExecutionSettings
from actionrunner.templates.markers import DEPS_MARKER

logger = logging.getLogger(__name__)

ScriptExecutor = Callable[..., int]


class ProjectActions(BaseModel):
    """Action table of a project: action name -> command template."""

    actions: dict[str, str] = Field(default_factory=dict)

    def get_action(self, name: str) -> str | None:
        return self.actions.get(name)

    def action_names(self) -> list[str]:
        return list(self.actions)


def append_arguments(command: str, args: Sequence[str] | None) -> str:
    """
    Append extra command-line arguments to a template.

    Arguments are joined with single spaces and passed on as written; the
    host shell does any quoting.

    Params:
        command: Action template
        args: Extra arguments, possibly empty

    Returns:
        The template followed by the arguments
    """
    if not args:
        return command
    return command + " " + " ".join(args)


class ActionRunner:
    """
    Runs named actions from a project's action table.

    Params:
        actions: The project's actions
        classpath_provider: Resolves the project dependencies; only called for
            templates that reference ``{{deps}}``
        platform: Target platform (the host platform if None)
        settings: Execution settings
        output: Stream for command output (stdout if None)
        executor: Function executing a single template, ``execute_script``
            by default
    """

    def __init__(
        self,
        actions: ProjectActions,
        classpath_provider: ClasspathProvider | None = None,
        platform: Platform | None = None,
        settings: ExecutionSettings | None = None,
        output: TextIO | None = None,
        executor: ScriptExecutor = execute_script,
    ):
        self.actions = actions
        self.classpath_provider = classpath_provider
        self.platform = platform or detect_platform()
        self.settings = settings or ExecutionSettings()
        self.output = output
        self.executor = executor

    def list_actions(self) -> list[str]:
        """Return the names of all defined actions, in definition order."""
        return self.actions.action_names()

    def execute_action(self, name: str, args: Sequence[str] | None = None) -> int:
        """
        Execute a single action.

        Params:
            name: Action name
            args: Extra arguments appended to the template

        Returns:
            Exit code of the action's command

        Raises:
            ActionNameRequiredError: If no name was given
            ActionNotFoundError: If the action is not defined
        """
        if not name:
            raise ActionNameRequiredError()

        template = self.actions.get_action(name)
        if template is None:
            raise ActionNotFoundError(name)

        command = append_arguments(template, args)
        logger.debug("Running action '%s': %s", name, command)
        return self.executor(
            command,
            self._classpath_for(command),
            self.platform,
            output=self.output,
            settings=self.settings,
        )

    def run_actions(self, names: Sequence[str], args: Sequence[str] | None = None) -> int:
        """
        Execute actions one after another.

        Params:
            names: Action names in execution order
            args: Extra arguments appended to every action

        Returns:
            0 if every action succeeded, otherwise the exit code of the first
            failing action (later actions are not run)
        """
        if not names:
            raise ActionNameRequiredError()

        for name in names:
            exit_code = self.execute_action(name, args)
            if exit_code != 0:
                logger.debug("Action '%s' failed with %d, stopping", name, exit_code)
                return exit_code
        return 0

    def _classpath_for(self, command: str) -> Classpath:
        if DEPS_MARKER not in command or self.classpath_provider is None:
            return []
        return self.classpath_provider()
