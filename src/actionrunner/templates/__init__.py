"""
Template planning and processing components.

This package provides the substitution planner that upgrades plain templates
to portable markers, and the processor that renders markers for a platform.
"""

from actionrunner.templates.markers import DEPS_MARKER
from actionrunner.templates.planner import (
    suggest_classpath_substitution,
    suggest_command_substitutions,
    suggest_path_substitution,
    suggest_substitutions,
    supports_args_files,
    uses_substitutions,
)
from actionrunner.templates.processor import (
    measure_command,
    process_command,
    render_command,
    substitute_args_files,
    substitute_deps,
    substitute_markers,
    substitute_paths,
)

__all__ = [
    "DEPS_MARKER",
    "measure_command",
    "process_command",
    "render_command",
    "substitute_args_files",
    "substitute_deps",
    "substitute_markers",
    "substitute_paths",
    "suggest_classpath_substitution",
    "suggest_command_substitutions",
    "suggest_path_substitution",
    "suggest_substitutions",
    "supports_args_files",
    "uses_substitutions",
]
