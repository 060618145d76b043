"""
Command template parsing components.

This package provides the tokenizer and the recursive-descent parser that
turn an action template into an AST of commands, groups and separators.
"""

from actionrunner.parsing.parser import (
    Command,
    Commands,
    CommandsParser,
    Group,
    Node,
    Separator,
    SeparatorType,
    parse_commands,
    tokenize,
)

__all__ = [
    "Command",
    "Commands",
    "CommandsParser",
    "Group",
    "Node",
    "Separator",
    "SeparatorType",
    "parse_commands",
    "tokenize",
]
