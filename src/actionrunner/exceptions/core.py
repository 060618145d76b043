"""
Exception classes for action template processing and execution.

This module defines specific exception types for the error conditions that
can occur while parsing command templates, materializing args files and
running actions through the host shell.
"""


class ActionRunnerError(Exception):
    """Base exception for all actionrunner errors."""

    pass


class CommandParseError(ActionRunnerError):
    """Raised when a command template violates the command grammar."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        command_text: str | None = None,
    ):
        """
        Initialize the exception.

        Params:
            message: Description of the grammar violation
            position: Character offset in the template where parsing stopped
            command_text: The template text being parsed
        """
        self.position = position
        self.command_text = command_text

        full_message = message
        if position is not None:
            full_message = f"{message} (at position {position})"
        if command_text is not None:
            full_message = f"{full_message}\n  command: {command_text}"

        super().__init__(full_message)


class ArgsFileError(ActionRunnerError):
    """Raised when an args file cannot be created or written."""

    def __init__(self, reason: str):
        """
        Initialize the exception.

        Params:
            reason: The underlying reason for the failure
        """
        self.reason = reason
        super().__init__(f"Failed to create args file: {reason}")


class ShellSpawnError(ActionRunnerError):
    """Raised when the host shell cannot be started."""

    def __init__(self, command: list[str], reason: str):
        """
        Initialize the exception.

        Params:
            command: The argv that was passed to the process launcher
            reason: The underlying reason for the failure
        """
        self.command = command
        self.reason = reason
        super().__init__(f"Cannot start shell '{command[0]}': {reason}")


class ActionNameRequiredError(ActionRunnerError):
    """Raised when an action is requested without a name."""

    def __init__(self):
        super().__init__(
            "Action name is required. Use --list to see available actions."
        )


class ActionNotFoundError(ActionRunnerError):
    """Raised when the requested action is not defined."""

    def __init__(self, action_name: str):
        """
        Initialize the exception.

        Params:
            action_name: The name that could not be found
        """
        self.action_name = action_name
        super().__init__(
            f"Action '{action_name}' not found. Use --list to see available actions."
        )
