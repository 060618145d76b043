"""
Marker substitution for action templates.

Processing is a pure string transformation applied in a fixed order:

1. ``{{deps}}`` becomes the classpath
2. ``{./...}`` and ``{~/...}`` paths are rendered for the target platform
3. ``{/}``, ``{:}`` and ``{~}`` become separators and the home directory
4. ``{;}`` becomes the shell's statement separator
5. ``@[...]`` is either written to an args file or inlined

The same pipeline runs twice per action: ``measure_command`` produces the
inlined text to estimate its length, ``render_command`` produces the command
that is actually executed.
"""

import logging
import re

from actionrunner.core.platform import Platform
from actionrunner.core.types import ArgsFileCreator, Classpath
from actionrunner.templates.markers import (
    BRACKET_PLACEHOLDER,
    DEPS_MARKER,
    ESCAPED_BRACKET,
    PATH_LIST_MARKER,
)

logger = logging.getLogger(__name__)

BRACKETED_PATH_PATTERN = re.compile(r"\{([.~]/[^}]*)\}")
ARGS_FILE_PATTERN = re.compile(r"@\[([^\]]*)\]")


def substitute_deps(command: str, classpath: Classpath | None, platform: Platform) -> str:
    """
    Replace every ``{{deps}}`` with the classpath.

    Params:
        command: Template text
        classpath: Ordered classpath entries, possibly empty or None
        platform: Target platform (provides the path-list separator)

    Returns:
        Text with the classpath joined in its original order
    """
    if DEPS_MARKER not in command:
        return command
    joined = platform.path_separator.join(str(entry) for entry in classpath or ())
    return command.replace(DEPS_MARKER, joined)


def _split_path_list(path: str) -> list[str]:
    """Split a ``:``-joined path list, keeping Windows drive colons (``C:\\``)."""
    parts = []
    start = 0
    index = path.find(":")
    while index != -1:
        # Entries already joined with ';' (from {{deps}}) may each carry a drive
        entry = path[start:index].rsplit(";", 1)[-1]
        is_drive = len(entry) == 1 and entry.isalpha() and path[index + 1 : index + 2] in ("\\", "/")
        if not is_drive:
            parts.append(path[start:index])
            start = index + 1
        index = path.find(":", index + 1)
    parts.append(path[start:])
    return parts


def substitute_paths(command: str, platform: Platform) -> str:
    """
    Render ``{./...}`` and ``{~/...}`` markers, including ``:``-joined lists.

    Params:
        command: Template text
        platform: Target platform

    Returns:
        Text with bracketed paths rendered natively; on POSIX the path inside
        the braces is kept as written
    """

    def render(match: re.Match) -> str:
        path = match.group(1)
        if not platform.is_windows:
            return path
        return platform.path_separator.join(
            platform.native_path(part) for part in _split_path_list(path)
        )

    return BRACKETED_PATH_PATTERN.sub(render, command)


def substitute_markers(command: str, platform: Platform) -> str:
    """Replace the single-character markers ``{/}``, ``{:}``, ``{~}`` and ``{;}``."""
    result = command.replace("{/}", platform.file_separator)
    result = result.replace(PATH_LIST_MARKER, platform.path_separator)
    result = result.replace("{~}", platform.home_marker)
    return result.replace("{;}", platform.command_separator)


def substitute_args_files(
    command: str, args_file_creator: ArgsFileCreator | None
) -> str:
    """
    Resolve every ``@[...]`` construct.

    Params:
        command: Template text
        args_file_creator: Callable writing content to a new file and
            returning its path, or None to inline the content

    Returns:
        Text where each construct is ``@<path>`` or the bare content

    Raises:
        ArgsFileError: If the creator cannot write the file
    """
    protected = command.replace(ESCAPED_BRACKET, BRACKET_PLACEHOLDER)

    def resolve(match: re.Match) -> str:
        content = match.group(1).replace(BRACKET_PLACEHOLDER, "]").strip()
        if args_file_creator is None:
            return content
        path = args_file_creator(content)
        return f"@{path}"

    result = ARGS_FILE_PATTERN.sub(resolve, protected)
    return result.replace(BRACKET_PLACEHOLDER, ESCAPED_BRACKET)


def process_command(
    command: str,
    classpath: Classpath | None,
    platform: Platform,
    args_file_creator: ArgsFileCreator | None = None,
) -> str:
    """
    Run all substitution stages in order.

    Params:
        command: Template text
        classpath: Ordered classpath for ``{{deps}}``
        platform: Target platform
        args_file_creator: Optional args-file writer for ``@[...]``

    Returns:
        The processed command line
    """
    result = substitute_deps(command, classpath, platform)
    result = substitute_paths(result, platform)
    result = substitute_markers(result, platform)
    return substitute_args_files(result, args_file_creator)


def measure_command(
    command: str, classpath: Classpath | None, platform: Platform
) -> str:
    """
    Process a template without creating any files.

    Used to estimate the length of the final command line.
    """
    return process_command(command, classpath, platform)


def render_command(
    command: str,
    classpath: Classpath | None,
    platform: Platform,
    args_file_creator: ArgsFileCreator | None,
) -> str:
    """
    Produce the command line that will be executed.

    Params:
        command: Planned template text
        classpath: Ordered classpath for ``{{deps}}``
        platform: Target platform
        args_file_creator: Args-file writer when the measured command was too
            long, otherwise None

    Returns:
        The final command line
    """
    return process_command(command, classpath, platform, args_file_creator)
