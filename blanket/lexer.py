"""Tokenizer for the Blanket language.

The lexer walks the source one character at a time. At each step it
skips whitespace and then classifies the current character: a digit
starts a number, a letter starts an identifier or keyword, `+-*/^` are
arithmetic operators, `()` are parentheses and `><=!` start a comparator.
Anything else is an invalid token. Lexing stops at the first invalid
token; no partial token stream is ever returned.
"""

from __future__ import annotations

from typing import List, Optional

from .errors import InvalidTokenError
from .results import Result
from .tokens import (
    COMPARATOR_CHARS, COMPARATORS, DIGITS, EOF, FLOAT, IDENT, INT, KEYWORD,
    KEYWORDS, LETTERS, OPERATORS, PARENS, WHITESPACE, Position, Token,
)


class _LexError(Exception):
    def __init__(self, error: InvalidTokenError):
        super().__init__(error.message)
        self.error = error


class Lexer:
    def __init__(self, fn: str, text: str, ln: int = 1):
        self.fn = fn
        self.text = text
        self.pos = Position(0, ln, 1, fn, text)

    @property
    def current_char(self) -> Optional[str]:
        if self.pos.idx < len(self.text):
            return self.text[self.pos.idx]
        return None

    def advance(self) -> Optional[str]:
        char = self.current_char
        self.pos.advance(char)
        return char

    def make_tokens(self) -> Result:
        """Tokenize the whole text.

        Returns a Result holding the token list (always ending with one EOF
        token) or the first InvalidTokenError met.
        """
        tokens: List[Token] = []
        try:
            while True:
                self.skip_whitespace()
                if self.current_char is None:
                    break
                tokens.append(self.make_token())
        except _LexError as e:
            return Result(error=e.error)
        tokens.append(Token(EOF, pos_start=self.pos.copy(), pos_end=self.pos.copy()))
        return Result(tokens)

    def skip_whitespace(self):
        while self.current_char is not None and self.current_char in WHITESPACE:
            self.advance()

    def make_token(self) -> Token:
        char = self.current_char
        if char in DIGITS:
            return self.make_number()
        if char in LETTERS:
            return self.make_identifier()
        if char in OPERATORS:
            return self.make_single(OPERATORS[char])
        if char in PARENS:
            return self.make_single(PARENS[char])
        if char in COMPARATOR_CHARS:
            return self.make_comparator()
        pos_start = self.pos.copy()
        self.advance()
        raise _LexError(InvalidTokenError(f"Unrecognized Character '{char}'", pos_start, self.pos.copy()))

    def make_single(self, type_: str) -> Token:
        pos_start = self.pos.copy()
        char = self.advance()
        return Token(type_, char, pos_start, self.pos.copy())

    def make_number(self) -> Token:
        num_str = ''
        dot_count = 0
        pos_start = self.pos.copy()
        while self.current_char is not None and self.current_char in DIGITS + '.':
            if self.current_char == '.':
                dot_count += 1
                if dot_count == 2:
                    bad = self.pos.copy()
                    raise _LexError(InvalidTokenError('Bad Float', bad, bad.copy().advance()))
            num_str += self.advance()

        if dot_count == 0:
            try:
                value = int(num_str)
            except ValueError:
                # past the interpreter's integer string conversion limit
                raise _LexError(InvalidTokenError('Number too large', pos_start, self.pos.copy()))
            return Token(INT, value, pos_start, self.pos.copy())
        return Token(FLOAT, float(num_str), pos_start, self.pos.copy())

    def make_identifier(self) -> Token:
        id_str = ''
        pos_start = self.pos.copy()
        while self.current_char is not None and self.current_char in LETTERS:
            id_str += self.advance()
        type_ = KEYWORD if id_str in KEYWORDS else IDENT
        return Token(type_, id_str, pos_start, self.pos.copy())

    def make_comparator(self) -> Token:
        pos_start = self.pos.copy()
        lexeme = self.advance()
        if self.current_char is not None and self.current_char in COMPARATOR_CHARS:
            lexeme += self.advance()
        if lexeme not in COMPARATORS:
            raise _LexError(InvalidTokenError('Bad Comparator', pos_start, self.pos.copy()))
        return Token(COMPARATORS[lexeme], lexeme, pos_start, self.pos.copy())


def tokenize(text: str, fn: str = '<stdin>') -> Result:
    """Convenience wrapper: tokenize `text` and return the lexer Result."""
    return Lexer(fn, text).make_tokens()
