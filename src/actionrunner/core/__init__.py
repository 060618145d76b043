"""
Core components for actionrunner.

This package contains the platform capability value and the shared type
aliases used across the framework.
"""

from actionrunner.core.platform import (
    POSIX_ARGS_THRESHOLD,
    WINDOWS_ARGS_THRESHOLD,
    OSFamily,
    Platform,
    detect_platform,
)
from actionrunner.core.types import (
    ArgsFileCreator,
    Classpath,
    ClasspathEntry,
    ClasspathProvider,
)

__all__ = [
    "ArgsFileCreator",
    "Classpath",
    "ClasspathEntry",
    "ClasspathProvider",
    "OSFamily",
    "Platform",
    "POSIX_ARGS_THRESHOLD",
    "WINDOWS_ARGS_THRESHOLD",
    "detect_platform",
]
