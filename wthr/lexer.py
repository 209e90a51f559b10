"""Tokenizer for the wthr scripting language.

`Lexer.next_token` hands out one token at a time, which is all the
single-lookahead parser needs. `tokenize` drains a lexer into a list and
is mostly useful for tests and debugging.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from .constants import BUILTINS, CONSTANTS
from .errors import LexError
from .types import parse_decimal


@dataclass(frozen=True)
class Token:
    type: str
    value: Any
    line: int
    column: int

    def describe(self) -> str:
        if self.type == 'EOF':
            return 'end of input'
        if self.type == 'STRING':
            return f'string "{self.value}"'
        if self.type in ('NUMBER', 'IDENT', 'BUILTIN', 'CONSTANT'):
            return f"{self.type} {self.value}"
        return repr(self.type)


SINGLE_CHAR_TOKENS = set('+-*/><={}(),')

KEYWORDS: Dict[str, str] = {
    'print': 'print',
    'if': 'if',
    'else': 'else',
    'function': 'function',
    'import': 'import',
    'call': 'call',
}
KEYWORDS.update({name: 'BUILTIN' for name in BUILTINS})
KEYWORDS.update({name: 'CONSTANT' for name in CONSTANTS})

DIGITS = '0123456789'


def is_ident_start(c: str) -> bool:
    return c == '_' or ('a' <= c <= 'z') or ('A' <= c <= 'Z')


def is_ident_char(c: str) -> bool:
    # any Unicode letter or digit may follow the first character
    return c == '_' or c.isalnum()


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def peek_char(self) -> str:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ''

    def advance(self) -> str:
        c = self.source[self.pos]
        self.pos += 1
        if c == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return c

    def skip_whitespace_and_comments(self):
        while self.pos < len(self.source):
            c = self.source[self.pos]
            if c.isspace():
                self.advance()
            elif c == '#':
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self.advance()
            else:
                break

    def next_token(self) -> Token:
        self.skip_whitespace_and_comments()
        line, column = self.line, self.column
        if self.pos >= len(self.source):
            return Token('EOF', None, line, column)
        c = self.peek_char()
        if c in SINGLE_CHAR_TOKENS:
            self.advance()
            return Token(c, c, line, column)
        if c == '"':
            return self.read_string(line, column)
        if c in DIGITS or c == '.':
            return self.read_number(line, column)
        if is_ident_start(c):
            return self.read_identifier(line, column)
        raise LexError(f"unexpected character {c!r} at column {column}", line)

    def read_number(self, line: int, column: int) -> Token:
        start = self.pos
        seen_dot = False
        while self.pos < len(self.source):
            c = self.source[self.pos]
            if c == '.':
                if seen_dot:
                    raise LexError(f"unexpected second '.' in number at column {self.column}", self.line)
                seen_dot = True
            elif c not in DIGITS:
                break
            self.advance()
        lexeme = self.source[start:self.pos]
        try:
            value = parse_decimal(lexeme)
        except ValueError:
            raise LexError(f"malformed number {lexeme!r} at column {column}", line)
        return Token('NUMBER', value, line, column)

    def read_string(self, line: int, column: int) -> Token:
        self.advance()  # opening quote
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] != '"':
            self.advance()
        if self.pos >= len(self.source):
            raise LexError(f"unterminated string literal starting at column {column}", line)
        text = self.source[start:self.pos]
        self.advance()  # closing quote
        return Token('STRING', text, line, column)

    def read_identifier(self, line: int, column: int) -> Token:
        start = self.pos
        while self.pos < len(self.source) and is_ident_char(self.source[self.pos]):
            self.advance()
        name = self.source[start:self.pos]
        kind = KEYWORDS.get(name, 'IDENT')
        return Token(kind, name, line, column)


def tokenize(source: str) -> List[Token]:
    """Return every token of `source`, ending with the EOF token."""
    lexer = Lexer(source)
    tokens: List[Token] = []
    while True:
        token = lexer.next_token()
        tokens.append(token)
        if token.type == 'EOF':
            return tokens
