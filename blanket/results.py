"""Result objects shared by the lexer, the parser and the interpreter.

Each stage returns either a value or exactly one error. The parser's
result additionally counts the tokens consumed so that, among several
failed alternatives, the failure that got furthest is the one reported.
"""

from __future__ import annotations

from typing import Any, Optional

from .errors import BlanketError, RTError


class Result:
    """A value or an error, produced by the lexer and by `Session.run`."""
    def __init__(self, value: Any = None, error: Optional[BlanketError] = None):
        self.value = value
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        if self.error is not None:
            return f'Result(error={self.error.as_string()!r})'
        return f'Result(value={self.value!r})'


class ParseResult:
    def __init__(self):
        self.error: Optional[BlanketError] = None
        self.node = None
        self.advance_count = 0
        self.error_progress = 0

    @staticmethod
    def prefers(new_progress: int, old_progress: int) -> bool:
        """Return True if a failure after `new_progress` consumed tokens
        should replace one recorded after `old_progress`.

        A failure that consumed nothing can always be overridden.
        """
        return old_progress == 0 or new_progress > old_progress

    def register_advancement(self):
        self.advance_count += 1

    def register(self, res: 'ParseResult'):
        self.advance_count += res.advance_count
        if res.error is not None:
            self.error = res.error
            self.error_progress = self.advance_count
        return res.node

    def success(self, node) -> 'ParseResult':
        self.node = node
        return self

    def failure(self, error: BlanketError) -> 'ParseResult':
        if self.error is None or self.prefers(self.advance_count, self.error_progress):
            self.error = error
            self.error_progress = self.advance_count
        return self


class RuntimeResult:
    def __init__(self):
        self.value = None
        self.error: Optional[RTError] = None

    def register(self, res: 'RuntimeResult'):
        if res.error is not None:
            self.error = res.error
        return res.value

    def success(self, value) -> 'RuntimeResult':
        self.value = value
        return self

    def failure(self, error: RTError) -> 'RuntimeResult':
        self.error = error
        return self
