"""
Marker text shared by the planner and the processor.
"""

DEPS_MARKER = "{{deps}}"

# Escaped form of ']' inside an @[...] construct
ESCAPED_BRACKET = "{]}"

# Stands in for ESCAPED_BRACKET while @[...] constructs are matched
BRACKET_PLACEHOLDER = "\u0007"

PATH_LIST_MARKER = "{:}"
