#!/usr/bin/env python3
"""
Command parser for the vshell terminal emulator.

This module turns raw command lines into tokens, splits pipelines and
extracts output redirections. It never executes anything.

Design Principles:
- One quote-tracking state machine drives every scanner in this module
- Detection helpers answer "is there an unquoted | or >" without tokenizing
- Pure functions with predictable outputs
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

PIPE = '|'
REDIRECT = '>'
APPEND = '>>'


class CharKind(Enum):
    """How the scanner classifies a single input character."""
    LITERAL = 'literal'      # part of the current word
    ESCAPE = 'escape'        # backslash, consumed
    QUOTE = 'quote'          # opening/closing quote, stripped
    SPACE = 'space'          # unquoted whitespace
    PIPE = 'pipe'            # unquoted |
    REDIRECT = 'redirect'    # unquoted >


class QuoteState:
    """
    Incremental quote tracker.

    Feed characters one at a time; each call reports how the character
    should be treated given everything fed before it. A backslash escapes
    the next character everywhere, inside single or double quotes too.
    """

    def __init__(self):
        self.in_single = False
        self.in_double = False
        self.escaped = False

    @property
    def quoted(self) -> bool:
        return self.in_single or self.in_double

    def feed(self, char: str) -> CharKind:
        if self.escaped:
            self.escaped = False
            return CharKind.LITERAL

        if char == '\\':
            self.escaped = True
            return CharKind.ESCAPE

        if self.in_single:
            if char == "'":
                self.in_single = False
                return CharKind.QUOTE
            return CharKind.LITERAL

        if self.in_double:
            if char == '"':
                self.in_double = False
                return CharKind.QUOTE
            return CharKind.LITERAL

        if char == "'":
            self.in_single = True
            return CharKind.QUOTE
        if char == '"':
            self.in_double = True
            return CharKind.QUOTE
        if char.isspace():
            return CharKind.SPACE
        if char == PIPE:
            return CharKind.PIPE
        if char == REDIRECT:
            return CharKind.REDIRECT
        return CharKind.LITERAL


def _classify(line: str) -> Iterator[Tuple[int, str, CharKind]]:
    state = QuoteState()
    for index, char in enumerate(line):
        yield index, char, state.feed(char)


@dataclass(frozen=True)
class Token:
    """A word or a control operator (|, > or >>)."""
    text: str
    operator: bool = False


def scan(line: str) -> List[Token]:
    """Tokenize a line, keeping track of which tokens are operators."""
    tokens: List[Token] = []
    current: List[str] = []
    pending = False  # a quoted empty string still yields a token
    skip_next = False

    def flush():
        nonlocal current, pending
        if current or pending:
            tokens.append(Token(''.join(current)))
        current = []
        pending = False

    chars = list(_classify(line))
    for position, (_, char, kind) in enumerate(chars):
        if skip_next:
            skip_next = False
            continue

        if kind is CharKind.LITERAL:
            current.append(char)
        elif kind is CharKind.QUOTE:
            pending = True
        elif kind is CharKind.SPACE:
            flush()
        elif kind is CharKind.PIPE:
            flush()
            tokens.append(Token(PIPE, operator=True))
        elif kind is CharKind.REDIRECT:
            flush()
            following = chars[position + 1] if position + 1 < len(chars) else None
            if following is not None and following[2] is CharKind.REDIRECT:
                tokens.append(Token(APPEND, operator=True))
                skip_next = True
            else:
                tokens.append(Token(REDIRECT, operator=True))
        # ESCAPE: the backslash itself is dropped

    flush()
    return tokens


def tokenize(line: str) -> List[str]:
    """
    Split a command line into tokens.

    Examples:
        tokenize('echo "a b" c')   # ['echo', 'a b', 'c']
        tokenize('a|b')            # ['a', '|', 'b']
        tokenize('a >> b')         # ['a', '>>', 'b']
    """
    return [token.text for token in scan(line)]


def contains_unquoted_pipe(line: str) -> bool:
    """Check for a | outside quotes."""
    return any(kind is CharKind.PIPE for _, _, kind in _classify(line))


def contains_unquoted_redirect(line: str) -> bool:
    """Check for a > (or >>) outside quotes."""
    return any(kind is CharKind.REDIRECT for _, _, kind in _classify(line))


def split_by_pipe(line: str) -> List[str]:
    """
    Split a line at every unquoted pipe.

    Segments keep their quotes and escapes (they are tokenized again
    later) and are stripped of surrounding whitespace.
    """
    parts = []
    current = []

    for _, char, kind in _classify(line):
        if kind is CharKind.PIPE:
            parts.append(''.join(current).strip())
            current = []
        else:
            current.append(char)

    parts.append(''.join(current).strip())
    return parts


@dataclass
class Redirect:
    """An output redirection: the command tokens and where its output goes."""
    command: List[str]
    target: str
    append: bool = False


def parse_redirect(line: str) -> Optional[Redirect]:
    """
    Split a line at its first unquoted > or >>.

    Returns None when the command or the destination is missing.
    """
    tokens = scan(line)

    for index, token in enumerate(tokens):
        if token.operator and token.text in (REDIRECT, APPEND):
            command = [t.text for t in tokens[:index]]
            rest = tokens[index + 1:]
            if not command or not rest or any(t.operator for t in rest):
                return None
            return Redirect(
                command=command,
                target=' '.join(t.text for t in rest),
                append=token.text == APPEND,
            )

    return None
