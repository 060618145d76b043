"""
Shell execution of action templates.

``execute_script`` runs one template through the whole pipeline::

    Measure -> [Plan] -> Substitute(final) -> Spawn -> Stream -> Await -> Cleanup

The child's stderr is merged into stdout and drained line by line while the
child runs, so a chatty build tool can never block on a full pipe.
"""

import logging
import subprocess
import sys
from typing import TextIO

from actionrunner.core.platform import Platform, detect_platform
from actionrunner.core.types import Classpath
from actionrunner.exceptions import ShellSpawnError
from actionrunner.execution.args_files import ArgsFiles
from actionrunner.settings import ExecutionSettings
from actionrunner.templates.planner import suggest_substitutions
from actionrunner.templates.processor import measure_command, render_command

logger = logging.getLogger(__name__)


def prepare_command(
    command: str,
    classpath: Classpath | None,
    platform: Platform,
    args_files: ArgsFiles,
) -> str:
    """
    Turn a template into the command line to execute.

    The template is measured first, before planning. Only if the measured
    length exceeds the platform threshold are ``@[...]`` constructs written to
    args files during the final pass.

    Params:
        command: Raw action template
        classpath: Ordered classpath for ``{{deps}}``
        platform: Target platform
        args_files: Scope that owns any args files created

    Returns:
        The fully processed command line
    """
    measured = measure_command(command, classpath, platform)
    use_args_files = len(measured) > platform.args_threshold
    logger.debug(
        "Measured command length %d (threshold %d), args files %s",
        len(measured),
        platform.args_threshold,
        "enabled" if use_args_files else "disabled",
    )

    planned = suggest_substitutions(command)
    return render_command(
        planned,
        classpath,
        platform,
        args_files.create if use_args_files else None,
    )


def run_shell(command: str, platform: Platform, output: TextIO | None = None) -> int:
    """
    Run a command line through the host shell, streaming its output.

    Params:
        command: Fully processed command line
        platform: Target platform (selects cmd.exe or /bin/sh)
        output: Stream receiving the child's combined output (stdout if None)

    Returns:
        The child's exit code, unmodified

    Raises:
        ShellSpawnError: If the shell cannot be started
    """
    output = output if output is not None else sys.stdout
    argv = platform.shell_command(command)
    logger.debug("Spawning %r", argv)

    try:
        process = subprocess.Popen(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise ShellSpawnError(argv, str(e)) from e

    assert process.stdout is not None

    with process.stdout:
        for line in process.stdout:
            print(line.rstrip("\n"), file=output, flush=True)

    return_code = process.wait()
    logger.debug("Shell exited with %d", return_code)
    return return_code


def execute_script(
    command: str,
    classpath: Classpath | None,
    platform: Platform | None = None,
    *,
    output: TextIO | None = None,
    settings: ExecutionSettings | None = None,
) -> int:
    """
    Execute an action template.

    Params:
        command: Raw action template
        classpath: Ordered classpath for ``{{deps}}``
        platform: Target platform (the host platform if None)
        output: Stream for the echoed command and the child's output
        settings: Execution settings (args-file location; ``verbose`` echoes the
            processed command line before running it)

    Returns:
        The exit code of the executed command

    Raises:
        ArgsFileError: If a required args file cannot be written
        ShellSpawnError: If the shell cannot be started
    """
    platform = platform or detect_platform()
    settings = settings or ExecutionSettings()
    output = output if output is not None else sys.stdout

    with ArgsFiles(settings) as args_files:
        processed = prepare_command(command, classpath, platform, args_files)
        if settings.verbose:
            print(f"> {processed}", file=output, flush=True)
        return run_shell(processed, platform, output)
