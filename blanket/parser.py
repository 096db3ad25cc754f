"""Recursive-descent parser for the Blanket language.

Grammar, lowest precedence first:

    expression : KEYWORD:sclr IDENT EQ expression
               | comparison ((KEYWORD:and | KEYWORD:or) comparison)*
    comparison : KEYWORD:not comparison
               | arith_expr ((EE | NE | LT | GT | LTE | GTE) arith_expr)*
    arith_expr : term ((PLUS | MINUS) term)*
    term       : factor ((MUL | DIV) factor)*
    factor     : (PLUS | MINUS) factor | power
    power      : atom (POW signed_atom)*
    signed_atom: (PLUS | MINUS) signed_atom | atom
    atom       : INT | FLOAT | IDENT | LPAREN expression RPAREN | if_expr
    if_expr    : KEYWORD:if expression KEYWORD:then expression
                 ((KEYWORD:elif | KEYWORD:then) expression KEYWORD:then expression)*
                 (KEYWORD:else expression)?

All binary levels are built by `bin_op`, which folds to the left. Because
the right operand of `^` is only a signed atom, `2^3^2` is `(2^3)^2`.

Failures are returned inside a ParseResult. When an outer rule replaces
an inner failure with a more general message it only does so if the
inner rule consumed no tokens; otherwise the failure that got furthest
stands.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple, Union

from .ast import BinOpNode, IfNode, Node, NumberNode, UnaryOpNode, VarAccessNode, VarAssignNode
from .errors import InvalidSyntaxError, InvalidTokenError
from .results import ParseResult
from .tokens import (
    EE, EOF, EQ, FLOAT, GT, GTE, IDENT, INT, KEYWORD, LPAREN, LT, LTE, MINUS,
    MUL, DIV, NE, PLUS, POW, RPAREN, Token,
)

MAX_NESTING_DEPTH = 40

# An accepted operator is either a token kind or a (kind, value) pair.
OpSpec = Union[str, Tuple[str, str]]


class Parser:
    def __init__(self, tokens: List[Token], max_depth: int = MAX_NESTING_DEPTH):
        self.tokens = tokens
        self.tok_idx = -1
        self.current_tok: Optional[Token] = None
        self.depth = 0
        self.max_depth = max_depth
        self.advance()

    def advance(self) -> Token:
        self.tok_idx += 1
        if self.tok_idx < len(self.tokens):
            self.current_tok = self.tokens[self.tok_idx]
        return self.current_tok

    def parse(self) -> ParseResult:
        res = self.expression()
        if res.error is None and self.current_tok.type != EOF:
            return res.failure(InvalidSyntaxError(
                'Bad Expression',
                self.current_tok.pos_start, self.current_tok.pos_end,
            ))
        return res

    ###################################

    def descend(self, func: Callable[[], ParseResult]) -> ParseResult:
        """Call `func` one nesting level deeper, refusing past `max_depth`."""
        if self.depth >= self.max_depth:
            return ParseResult().failure(InvalidSyntaxError(
                'Maximum nesting depth exceeded',
                self.current_tok.pos_start, self.current_tok.pos_end,
            ))
        self.depth += 1
        try:
            return func()
        finally:
            self.depth -= 1

    def expression(self) -> ParseResult:
        res = ParseResult()

        if self.current_tok.matches(KEYWORD, 'sclr'):
            res.register_advancement()
            self.advance()

            if self.current_tok.type != IDENT:
                return res.failure(InvalidSyntaxError(
                    'Expected Identifier',
                    self.current_tok.pos_start, self.current_tok.pos_end,
                ))

            var_name = self.current_tok
            res.register_advancement()
            self.advance()

            if self.current_tok.type != EQ:
                return res.failure(InvalidSyntaxError(
                    "Expected '='",
                    self.current_tok.pos_start, self.current_tok.pos_end,
                ))

            res.register_advancement()
            self.advance()
            expr = res.register(self.descend(self.expression))
            if res.error:
                return res
            return res.success(VarAssignNode(var_name, expr))

        node = res.register(self.bin_op(self.comparison, ((KEYWORD, 'and'), (KEYWORD, 'or'))))
        if res.error:
            return res.failure(InvalidTokenError(
                "Expected an Integer/Float/Identifier/Operator/'sclr'",
                self.current_tok.pos_start, self.current_tok.pos_end,
            ))
        return res.success(node)

    def comparison(self) -> ParseResult:
        res = ParseResult()

        if self.current_tok.matches(KEYWORD, 'not'):
            op_tok = self.current_tok
            res.register_advancement()
            self.advance()

            node = res.register(self.descend(self.comparison))
            if res.error:
                return res
            return res.success(UnaryOpNode(op_tok, node))

        node = res.register(self.bin_op(self.arith_expr, (EE, NE, LT, GT, LTE, GTE)))
        if res.error:
            return res.failure(InvalidTokenError(
                'Expected an Integer/Float/Identifier/Operator/Comparator',
                self.current_tok.pos_start, self.current_tok.pos_end,
            ))
        return res.success(node)

    def arith_expr(self) -> ParseResult:
        return self.bin_op(self.term, (PLUS, MINUS))

    def term(self) -> ParseResult:
        return self.bin_op(self.factor, (MUL, DIV))

    def factor(self) -> ParseResult:
        return self.signed(self.factor, self.power)

    def power(self) -> ParseResult:
        return self.bin_op(self.atom, (POW,), self.signed_atom)

    def signed_atom(self) -> ParseResult:
        return self.signed(self.signed_atom, self.atom)

    def signed(self, again: Callable[[], ParseResult], otherwise: Callable[[], ParseResult]) -> ParseResult:
        res = ParseResult()
        tok = self.current_tok

        if tok.type in (PLUS, MINUS):
            res.register_advancement()
            self.advance()
            operand = res.register(self.descend(again))
            if res.error:
                return res
            return res.success(UnaryOpNode(tok, operand))

        return otherwise()

    def atom(self) -> ParseResult:
        res = ParseResult()
        tok = self.current_tok

        if tok.type in (INT, FLOAT):
            res.register_advancement()
            self.advance()
            return res.success(NumberNode(tok))

        if tok.type == IDENT:
            res.register_advancement()
            self.advance()
            return res.success(VarAccessNode(tok))

        if tok.type == LPAREN:
            res.register_advancement()
            self.advance()
            expr = res.register(self.descend(self.expression))
            if res.error:
                return res
            if self.current_tok.type != RPAREN:
                return res.failure(InvalidSyntaxError(
                    "Expected ')'",
                    self.current_tok.pos_start, self.current_tok.pos_end,
                ))
            res.register_advancement()
            self.advance()
            return res.success(expr)

        if tok.matches(KEYWORD, 'if'):
            if_expr = res.register(self.if_expr())
            if res.error:
                return res
            return res.success(if_expr)

        return res.failure(InvalidTokenError(
            'Expected an Integer/Float/Identifier/Operator',
            tok.pos_start, tok.pos_end,
        ))

    def if_expr(self) -> ParseResult:
        res = ParseResult()
        cases: List[Tuple[Node, Node]] = []
        else_case = None

        if_tok = self.current_tok
        if not if_tok.matches(KEYWORD, 'if'):
            return res.failure(InvalidSyntaxError(
                "Expected 'if'",
                if_tok.pos_start, if_tok.pos_end,
            ))

        res.register_advancement()
        self.advance()

        while True:
            condition = res.register(self.descend(self.expression))
            if res.error:
                return res

            if not self.current_tok.matches(KEYWORD, 'then'):
                return res.failure(InvalidSyntaxError(
                    "Expected 'then'",
                    self.current_tok.pos_start, self.current_tok.pos_end,
                ))

            res.register_advancement()
            self.advance()

            expr = res.register(self.descend(self.expression))
            if res.error:
                return res
            cases.append((condition, expr))

            if not (self.current_tok.matches(KEYWORD, 'elif') or self.current_tok.matches(KEYWORD, 'then')):
                break
            res.register_advancement()
            self.advance()

        if self.current_tok.matches(KEYWORD, 'else'):
            res.register_advancement()
            self.advance()

            else_case = res.register(self.descend(self.expression))
            if res.error:
                return res

        return res.success(IfNode(cases, else_case, if_tok))

    ###################################

    def accepts(self, ops: Sequence[OpSpec]) -> bool:
        tok = self.current_tok
        for op in ops:
            if isinstance(op, tuple):
                if tok.matches(*op):
                    return True
            elif tok.type == op:
                return True
        return False

    def bin_op(self, func_a: Callable[[], ParseResult], ops: Sequence[OpSpec],
               func_b: Optional[Callable[[], ParseResult]] = None) -> ParseResult:
        if func_b is None:
            func_b = func_a

        res = ParseResult()
        left = res.register(func_a())
        if res.error:
            return res

        while self.accepts(ops):
            op_tok = self.current_tok
            res.register_advancement()
            self.advance()
            right = res.register(func_b())
            if res.error:
                return res
            left = BinOpNode(left, op_tok, right)

        return res.success(left)


def parse(tokens: List[Token], max_depth: int = MAX_NESTING_DEPTH) -> ParseResult:
    """Parse a complete token stream into a ParseResult."""
    return Parser(tokens, max_depth).parse()
