"""
Core type definitions for actionrunner.

This module contains type aliases shared by the template processor, the
executor and the action layer.
"""

import os
from collections.abc import Callable, Sequence
from pathlib import Path

ClasspathEntry = str | os.PathLike

Classpath = Sequence[ClasspathEntry]

# Writes args-file content and returns the path of the new file
ArgsFileCreator = Callable[[str], Path]

# Resolves the project's dependencies into an ordered classpath
ClasspathProvider = Callable[[], Classpath]
