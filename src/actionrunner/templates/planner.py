"""
Substitution planning for action templates.

Templates written without any portable markers are upgraded automatically:
relative paths and classpaths become ``{./...}`` markers, ``;`` becomes
``{;}`` and classpath arguments of JVM tools are wrapped in ``@[...]`` so
they can be moved to an args file when the command line gets too long.
Templates that already use markers are left exactly as written.
"""

import logging
import re
from pathlib import PureWindowsPath

from actionrunner.parsing.parser import (
    Command,
    Commands,
    Group,
    Separator,
    SeparatorType,
    parse_commands,
)
from actionrunner.templates.markers import (
    BRACKET_PLACEHOLDER,
    DEPS_MARKER,
    ESCAPED_BRACKET,
    PATH_LIST_MARKER,
)

logger = logging.getLogger(__name__)

# Any marker except {{deps}}; escaped brackets must be replaced beforehand
MARKER_PATTERN = re.compile(r"\{([/:;~]|\./.*|~/.*)\}|@\[.*\]")

# Tools known to expand @argfiles on their command line
ARGS_FILE_TOOLS = frozenset({"java", "javac", "javadoc", "javap", "jdeps", "jmod"})
EXECUTABLE_SUFFIXES = (".exe", ".bat", ".cmd")

# Bracketed path markers must start with one of these to be rendered
ROOTED_PREFIXES = ("./", "~/")

SEPARATOR_RENDERING = {
    SeparatorType.SEQUENCE: " {;} ",
    SeparatorType.AND: " && ",
    SeparatorType.OR: " || ",
}


def uses_substitutions(template: str) -> bool:
    """
    Check whether a template already uses portable markers.

    ``{{deps}}`` does not count, it is substituted in any case.

    Params:
        template: Raw action template

    Returns:
        True if any path, separator, home or args-file marker is present
    """
    protected = template.replace(ESCAPED_BRACKET, BRACKET_PLACEHOLDER)
    return MARKER_PATTERN.search(protected) is not None


def supports_args_files(program: str) -> bool:
    """
    Check whether a program is a JVM tool that understands ``@file`` arguments.

    Params:
        program: Program name or path, as written in the template

    Returns:
        True for java, javac, javadoc, javap, jdeps and jmod (any case, with
        or without a Windows executable suffix)
    """
    name = PureWindowsPath(program).name.lower()
    for suffix in EXECUTABLE_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    return name in ARGS_FILE_TOOLS


def _path_segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def _is_absolute(path: str) -> bool:
    return path.startswith("/")


def _is_rooted(path: str) -> bool:
    return path.split("/", 1)[0] in (".", "~")


def _split_classpath(word: str) -> list[str]:
    parts = word.split(":")
    while parts and not parts[-1]:
        parts.pop()
    return parts


def suggest_classpath_substitution(word: str) -> str | None:
    """
    Suggest a ``{./a:./b}`` marker for a word that looks like a classpath.

    A word qualifies when it has at least two ``:``-separated parts and either
    mentions ``{{deps}}`` or has no absolute part and at least one part with
    two or more path segments.

    A bracketed list is only rendered when it starts with ``./`` or ``~/``.
    When the first part is ``{{deps}}`` (or ``.``), each relative part gets
    its own marker and the parts are joined with ``{:}`` instead, e.g.
    ``{{deps}}:out/classes`` becomes ``{{deps}}{:}{./out/classes}``.

    Params:
        word: A single command word

    Returns:
        The marker-wrapped classpath, or None if the word does not qualify
    """
    parts = _split_classpath(word)
    if len(parts) <= 1:
        return None

    if DEPS_MARKER not in word:
        if any(_is_absolute(part) for part in parts):
            return None
        if not any(len(_path_segments(part)) >= 2 for part in parts):
            return None

    normalized = []
    for part in parts:
        if (
            part
            and DEPS_MARKER not in part
            and not _is_absolute(part)
            and not _is_rooted(part)
        ):
            part = "./" + part
        normalized.append(part)

    if normalized[0].startswith(ROOTED_PREFIXES):
        return "{" + ":".join(normalized) + "}"
    return PATH_LIST_MARKER.join(_mark_part(part) for part in normalized)


def _mark_part(part: str) -> str:
    if part.startswith(ROOTED_PREFIXES):
        return "{" + part + "}"
    if part == "~":
        return "{~}"
    return part


def suggest_path_substitution(word: str) -> str | None:
    """
    Suggest a ``{./path}`` marker for a word that looks like a relative path.

    Params:
        word: A single command word

    Returns:
        The marker-wrapped path, or None if the word is absolute or has
        fewer than two path segments
    """
    if _is_absolute(word) or len(_path_segments(word)) < 2:
        return None
    if not _is_rooted(word):
        word = "./" + word
    return "{" + word + "}"


def suggest_command_substitutions(command: Command) -> str:
    """
    Rewrite the words of a single command and render it back to text.

    Params:
        command: Parsed command

    Returns:
        The command text with path markers and, for args-file capable
        programs, ``@[...]`` around every argument mentioning ``{{deps}}``
    """
    words = list(command.words)

    for index, word in enumerate(words):
        suggestion = suggest_classpath_substitution(word)
        if suggestion is None:
            suggestion = suggest_path_substitution(word)
        if suggestion is not None:
            words[index] = suggestion

    eligible = supports_args_files(words[0])
    if words[0].startswith("@"):
        # An explicit @ opts the program in; the marker itself is ours to place
        words[0] = words[0][1:]
        eligible = True

    if eligible:
        for index in range(1, len(words)):
            if DEPS_MARKER in words[index]:
                escaped = words[index].replace("]", ESCAPED_BRACKET)
                words[index] = f"@[{escaped}]"

    return " ".join(words)


def _render_commands(commands: Commands) -> str:
    rendered = []
    for element in commands.elements:
        if isinstance(element, Command):
            rendered.append(suggest_command_substitutions(element))
        elif isinstance(element, Group):
            rendered.append(f"({_render_commands(element.commands)})")
        elif isinstance(element, Separator):
            rendered.append(SEPARATOR_RENDERING[element.type])
        else:
            raise TypeError(f"Unexpected command node: {element!r}")
    return "".join(rendered)


def suggest_substitutions(template: str) -> str:
    """
    Upgrade a marker-free template to portable markers.

    Params:
        template: Raw action template

    Returns:
        The rewritten template, or the template unchanged when it already
        uses markers or does not parse as a command list
    """
    if uses_substitutions(template):
        return template

    commands = parse_commands(template)
    if commands is None:
        return template

    planned = _render_commands(commands)
    if planned != template:
        logger.debug("Planned substitutions: %r -> %r", template, planned)
    return planned
