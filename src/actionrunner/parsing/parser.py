"""
Parser for action command templates.

This module tokenizes a command template and parses it into a small AST of
commands, parenthesized groups and control separators. Only ``;``, ``&&``,
``||`` and ``( ... )`` are recognized; everything else is left to the host
shell. Quotes suspend word boundaries but are kept in the token text.

Grammar:
    commands  ::= elem+
    elem      ::= group | separator | command
    group     ::= '(' commands ')'
    separator ::= ';' | '&&' | '||'
    command   ::= word+
"""

import logging
from dataclasses import dataclass
from enum import Enum

from actionrunner.exceptions import CommandParseError

logger = logging.getLogger(__name__)


class SeparatorType(Enum):
    """Control relationship between two adjacent commands."""

    SEQUENCE = ";"
    AND = "&&"
    OR = "||"


@dataclass(frozen=True)
class Command:
    """A simple command: program name followed by its arguments."""

    words: tuple[str, ...]

    def __str__(self) -> str:
        return " ".join(self.words)


@dataclass(frozen=True)
class Separator:
    """A control operator between commands."""

    type: SeparatorType

    def __str__(self) -> str:
        return self.type.value


@dataclass(frozen=True)
class Group:
    """A parenthesized sub-sequence of commands."""

    commands: "Commands"

    def __str__(self) -> str:
        return f"({self.commands})"


# Closed union of AST elements
Node = Command | Group | Separator


@dataclass(frozen=True)
class Commands:
    """Ordered, non-empty sequence of AST elements; the parse root."""

    elements: tuple[Node, ...]

    def __str__(self) -> str:
        return " ".join(str(element) for element in self.elements)


SEPARATOR_TOKENS = frozenset(separator.value for separator in SeparatorType)
OPERATOR_TOKENS = SEPARATOR_TOKENS | {"(", ")"}
QUOTE_CHARACTERS = ("'", '"')


def _is_word_boundary(text: str, index: int) -> bool:
    char = text[index]
    if char.isspace() or char in "();":
        return True
    # A lone & or | belongs to the word, only doubled ones are operators
    return char in "&|" and text[index + 1 : index + 2] == char


def _scan_token(text: str, position: int) -> tuple[str | None, int, int]:
    """
    Scan the next token starting at ``position``.

    Params:
        text: Full template text
        position: Offset to start scanning from

    Returns:
        Tuple of (token or None at end of input, token start, offset after token)
    """
    length = len(text)
    while position < length and text[position].isspace():
        position += 1

    if position >= length:
        return None, position, position

    start = position
    char = text[position]
    if char in "();":
        return char, start, position + 1
    if char in "&|" and text[position + 1 : position + 2] == char:
        return char * 2, start, position + 2

    quote: str | None = None
    while position < length:
        char = text[position]
        if quote is None:
            if _is_word_boundary(text, position):
                break
            if char in QUOTE_CHARACTERS:
                quote = char
        elif char == quote:
            quote = None
        position += 1

    return text[start:position], start, position


def tokenize(text: str) -> list[str]:
    """
    Split a command template into words and operator tokens.

    Params:
        text: The command template

    Returns:
        Tokens in source order, quote characters preserved
    """
    tokens = []
    position = 0
    while True:
        token, _, position = _scan_token(text, position)
        if token is None:
            return tokens
        tokens.append(token)


class CommandsParser:
    """Recursive-descent parser for command templates."""

    def __init__(self, text: str):
        self.text = text
        self._position = 0
        self._token_start = 0
        self._token: str | None = None

    def parse(self) -> Commands | None:
        """
        Parse the template, signaling failure with ``None``.

        Returns:
            The root Commands, or None if the template violates the grammar
        """
        try:
            return self.parse_or_raise()
        except CommandParseError as e:
            logger.debug("Template does not parse as a command list: %s", e)
            return None

    def parse_or_raise(self) -> Commands:
        """
        Parse the template.

        Returns:
            The root Commands

        Raises:
            CommandParseError: On unbalanced groups, a stray ')' or an empty command
        """
        self._position = 0
        self._advance()
        commands = self._parse_commands()
        if self._token is not None:
            raise self._error(f"Unexpected '{self._token}'")
        return commands

    def _advance(self) -> None:
        self._token, self._token_start, self._position = _scan_token(
            self.text, self._position
        )

    def _error(self, message: str) -> CommandParseError:
        return CommandParseError(message, self._token_start, self.text)

    # commands ::= elem+
    def _parse_commands(self) -> Commands:
        elements: list[Node] = []
        while self._token is not None and self._token != ")":
            elements.append(self._parse_elem())
        if not elements:
            raise self._error("Empty command")
        return Commands(tuple(elements))

    # elem ::= group | separator | command
    def _parse_elem(self) -> Node:
        if self._token == "(":
            return self._parse_group()
        if self._token in SEPARATOR_TOKENS:
            return self._parse_separator()
        return self._parse_command()

    # group ::= '(' commands ')'
    def _parse_group(self) -> Group:
        self._consume("(")
        commands = self._parse_commands()
        if self._token is None:
            raise self._error("Unexpected end of input, missing ')'")
        self._consume(")")
        return Group(commands)

    # separator ::= ';' | '&&' | '||'
    def _parse_separator(self) -> Separator:
        separator = Separator(SeparatorType(self._token))
        self._advance()
        return separator

    # command ::= word+
    def _parse_command(self) -> Command:
        words = []
        while self._token is not None and self._token not in OPERATOR_TOKENS:
            words.append(self._token)
            self._advance()
        if not words:
            raise self._error("Empty command")
        return Command(tuple(words))

    def _consume(self, expected: str) -> None:
        if self._token != expected:
            raise self._error(f"Expected '{expected}' but found '{self._token}'")
        self._advance()


def parse_commands(text: str) -> Commands | None:
    """
    Convenience function to parse a command template.

    Params:
        text: The command template

    Returns:
        The root Commands, or None if the template violates the grammar
    """
    return CommandsParser(text).parse()
