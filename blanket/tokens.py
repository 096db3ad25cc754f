"""Token and source position definitions for the Blanket language.

A `Position` is the lexer's cursor over the source text. Tokens carry
copies of the cursor taken at their first and one-past-last character, so
later advancement of the cursor never changes a span that has already
been handed out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


DIGITS = '0123456789'
LETTERS = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ'
WHITESPACE = ' \t\r\n'

# Token kinds
INT = 'INT'
FLOAT = 'FLOAT'
IDENT = 'IDENT'
KEYWORD = 'KEYWORD'
PLUS = 'PLUS'
MINUS = 'MINUS'
MUL = 'MUL'
DIV = 'DIV'
POW = 'POW'
EQ = 'EQ'
EE = 'EE'
NE = 'NE'
LT = 'LT'
GT = 'GT'
LTE = 'LTE'
GTE = 'GTE'
LPAREN = 'LPAREN'
RPAREN = 'RPAREN'
EOF = 'EOF'

KEYWORDS = ('sclr', 'and', 'or', 'not', 'if', 'then', 'elif', 'else')

OPERATORS = {
    '+': PLUS,
    '-': MINUS,
    '*': MUL,
    '/': DIV,
    '^': POW,
}

PARENS = {
    '(': LPAREN,
    ')': RPAREN,
}

COMPARATOR_CHARS = '><=!'

COMPARATORS = {
    '=': EQ,
    '==': EE,
    '>=': GTE,
    '<=': LTE,
    '<': LT,
    '>': GT,
    '!=': NE,
}


@dataclass
class Position:
    """Cursor over one source text.

    `idx` is the zero-based character offset, `ln` and `col` are one-based.
    `fn` names the source (a file name or `<stdin>`) and `ftxt` holds the
    full text so that diagnostics can quote it.
    """
    idx: int
    ln: int
    col: int
    fn: str
    ftxt: str

    def advance(self, current_char: Optional[str] = None) -> 'Position':
        self.idx += 1
        self.col += 1
        if current_char == '\n':
            self.ln += 1
            self.col = 1
        return self

    def copy(self) -> 'Position':
        return Position(self.idx, self.ln, self.col, self.fn, self.ftxt)


@dataclass(frozen=True)
class Token:
    type: str
    value: Any = None
    pos_start: Optional[Position] = None
    pos_end: Optional[Position] = None

    def matches(self, type_: str, value: Any) -> bool:
        return self.type == type_ and self.value == value

    def __repr__(self) -> str:
        if self.value is not None:
            return f'{self.type}:{self.value}'
        return self.type
