"""Session state and the lex -> parse -> evaluate pipeline.

A `Session` owns the root symbol table and root context. Bindings made
with `sclr` are written into that table, so they survive from one `run`
call to the next for as long as the session lives. A session is meant to
be driven from one thread at a time.
"""

from __future__ import annotations

from typing import Optional

from .ast import describe_node
from .environment import Context, SymbolTable
from .errors import BlanketException
from .interpreter import MAX_EVAL_DEPTH, Interpreter
from .lexer import Lexer
from .parser import MAX_NESTING_DEPTH, Parser
from .results import Result
from .values import Number

ROOT_CONTEXT_NAME = '<program>'
DEFAULT_SOURCE_NAME = '<stdin>'


def make_global_symbol_table() -> SymbolTable:
    symbol_table = SymbolTable()
    symbol_table.set('null', Number(0))
    symbol_table.set('true', Number(1))
    symbol_table.set('false', Number(0))
    return symbol_table


class Session:
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
                 max_nesting_depth: int = MAX_NESTING_DEPTH,
                 max_eval_depth: int = MAX_EVAL_DEPTH):
        self.global_symbol_table = make_global_symbol_table()
        self.context = Context(ROOT_CONTEXT_NAME, symbol_table=self.global_symbol_table)
        self.max_nesting_depth = max_nesting_depth
        self.interpreter = Interpreter(debug_level=debug_level, debug_file=debug_file,
                                       max_depth=max_eval_depth)

    @property
    def debug_level(self) -> int:
        return self.interpreter.debug_level

    def debug(self, msg: str):
        self.interpreter.debug(msg)

    def run(self, text: str, fn: str = DEFAULT_SOURCE_NAME, ln: int = 1) -> Result:
        """Lex, parse and evaluate one input.

        Returns a Result whose `value` is the resulting Number, or None when
        a conditional matched no branch, or whose `error` is the first error
        met by any stage.
        """
        if self.debug_level >= 1:
            self.debug(f'run {fn}: {text!r}')

        lexed = Lexer(fn, text, ln).make_tokens()
        if lexed.error:
            return self._finish(Result(error=lexed.error))
        if self.debug_level >= 3:
            self.debug(f'tokens: {lexed.value}')

        parsed = Parser(lexed.value, self.max_nesting_depth).parse()
        if parsed.error:
            return self._finish(Result(error=parsed.error))
        if self.debug_level >= 3:
            self.debug(f'ast: {describe_node(parsed.node)}')

        evaluated = self.interpreter.visit(parsed.node, self.context)
        if evaluated.error:
            return self._finish(Result(error=evaluated.error))
        return self._finish(Result(evaluated.value))

    def execute(self, text: str, fn: str = DEFAULT_SOURCE_NAME) -> Optional[Number]:
        """Like `run`, but raise BlanketException instead of returning an error."""
        result = self.run(text, fn)
        if result.error:
            raise BlanketException(result.error)
        return result.value

    def _finish(self, result: Result) -> Result:
        if self.debug_level >= 1:
            if result.error:
                self.debug(f'-> {result.error.as_string()}')
            else:
                self.debug(f'-> {result.value!r}')
        return result

    def close(self):
        self.interpreter.close()

    def __enter__(self) -> 'Session':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def run(text: str, session: Session, fn: str = DEFAULT_SOURCE_NAME) -> Result:
    """Run one input through the full pipeline in `session`."""
    return session.run(text, fn)
