"""
actionrunner - Portable execution of user-defined build actions

actionrunner turns command templates such as ``javac -cp {{deps}} *.java``
into shell invocations that work on POSIX and Windows, moving long classpaths
into args files when the command line would get too long.
"""

from importlib.metadata import version

from actionrunner.core.platform import Platform, detect_platform
from actionrunner.execution.actions import ActionRunner, ProjectActions
from actionrunner.execution.executor import execute_script
from actionrunner.settings import ExecutionSettings

__version__ = version("actionrunner")

__all__ = [
    "__version__",
    "ActionRunner",
    "ExecutionSettings",
    "Platform",
    "ProjectActions",
    "detect_platform",
    "execute_script",
]
