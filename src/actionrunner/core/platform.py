"""
Platform capabilities for template processing and shell execution.

The template processor and the executor never look at the host OS on their
own. They receive a ``Platform`` value describing separators, the user home
directory and the command-line length threshold, so Windows rendering can be
exercised on any host. ``detect_platform`` is the single place that inspects
the running interpreter.
"""

import platform as _host
from enum import Enum
from functools import lru_cache
from pathlib import Path, PureWindowsPath

from attrs import frozen

# Command-line lengths above which long arguments are moved into args files
WINDOWS_ARGS_THRESHOLD = 8000
POSIX_ARGS_THRESHOLD = 32000


class OSFamily(Enum):
    """Kind of host shell an action is rendered for."""

    POSIX = "posix"
    WINDOWS = "windows"


@frozen
class Platform:
    """
    Immutable description of the target operating system.

    Params:
        family: Whether commands run under cmd.exe or a POSIX shell
        file_separator: Separator between path components
        path_separator: Separator between classpath entries
        home: User home directory, used for ``~`` expansion on Windows
        args_threshold: Maximum command length before args files are used
    """

    family: OSFamily
    file_separator: str
    path_separator: str
    home: str
    args_threshold: int

    @classmethod
    def posix(
        cls, home: str | None = None, args_threshold: int = POSIX_ARGS_THRESHOLD
    ) -> "Platform":
        """Build a POSIX platform (``/`` and ``:`` separators, ``/bin/sh``)."""
        return cls(
            family=OSFamily.POSIX,
            file_separator="/",
            path_separator=":",
            home=home if home is not None else str(Path.home()),
            args_threshold=args_threshold,
        )

    @classmethod
    def windows(
        cls, home: str | None = None, args_threshold: int = WINDOWS_ARGS_THRESHOLD
    ) -> "Platform":
        """Build a Windows platform (``\\`` and ``;`` separators, ``cmd.exe``)."""
        return cls(
            family=OSFamily.WINDOWS,
            file_separator="\\",
            path_separator=";",
            home=home if home is not None else str(Path.home()),
            args_threshold=args_threshold,
        )

    @property
    def is_windows(self) -> bool:
        return self.family is OSFamily.WINDOWS

    @property
    def command_separator(self) -> str:
        """Statement separator understood by the target shell."""
        return "&" if self.is_windows else ";"

    @property
    def home_marker(self) -> str:
        """Replacement for ``{~}``; POSIX shells expand ``~`` themselves."""
        return self.home if self.is_windows else "~"

    def shell_command(self, command: str) -> list[str]:
        """
        Build the argv that hands a command line to the host shell.

        Params:
            command: Fully processed command line

        Returns:
            ``["cmd.exe", "/c", command]`` or ``["/bin/sh", "-c", command]``
        """
        if self.is_windows:
            return ["cmd.exe", "/c", command]
        return ["/bin/sh", "-c", command]

    def native_path(self, path: str) -> str:
        """
        Render a ``./`` or ``~/`` rooted POSIX-style path for this platform.

        Params:
            path: A single relative or home-rooted path using ``/``

        Returns:
            The path unchanged on POSIX, otherwise with ``~`` expanded
            against the home directory and native separators
        """
        if not self.is_windows:
            return path
        if path.startswith("~/"):
            return str(PureWindowsPath(self.home, path[2:]))
        return str(PureWindowsPath(path))


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Return the platform of the running interpreter."""
    if _host.system().lower().startswith("win"):
        return Platform.windows()
    return Platform.posix()
