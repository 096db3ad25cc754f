"""Abstract Syntax Tree (AST) definitions for the Blanket language.

The parser produces a tree of the node classes below and the interpreter
walks it. Every node knows the source span it covers; spans are used for
diagnostics only and never influence evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import List, Optional, Tuple

from .tokens import Position, Token


@dataclass
class Node:
    """Base class for all AST nodes."""
    pos_start: Position = field(init=False, repr=False)
    pos_end: Position = field(init=False, repr=False)


@dataclass
class NumberNode(Node):
    tok: Token

    def __post_init__(self):
        self.pos_start = self.tok.pos_start
        self.pos_end = self.tok.pos_end


@dataclass
class VarAccessNode(Node):
    var_name_tok: Token

    def __post_init__(self):
        self.pos_start = self.var_name_tok.pos_start
        self.pos_end = self.var_name_tok.pos_end


@dataclass
class VarAssignNode(Node):
    var_name_tok: Token
    value_node: Node

    def __post_init__(self):
        self.pos_start = self.var_name_tok.pos_start
        self.pos_end = self.value_node.pos_end


@dataclass
class UnaryOpNode(Node):
    op_tok: Token
    node: Node

    def __post_init__(self):
        self.pos_start = self.op_tok.pos_start
        self.pos_end = self.node.pos_end


@dataclass
class BinOpNode(Node):
    left_node: Node
    op_tok: Token
    right_node: Node

    def __post_init__(self):
        self.pos_start = self.left_node.pos_start
        self.pos_end = self.right_node.pos_end


@dataclass
class IfNode(Node):
    # (condition, expression) pairs in source order
    cases: List[Tuple[Node, Node]]
    else_case: Optional[Node] = None
    if_tok: Optional[Token] = None

    def __post_init__(self):
        if self.if_tok is not None:
            self.pos_start = self.if_tok.pos_start
        else:
            self.pos_start = self.cases[0][0].pos_start
        self.pos_end = (self.else_case or self.cases[-1][1]).pos_end


def describe_node(node: Node, max_depth: int = 6) -> str:
    """Render `node` like its repr, eliding subtrees below `max_depth`.

    Left-folded operator chains can nest deeper than `repr` can recurse.
    """
    if max_depth <= 0:
        return f'{type(node).__name__}(...)'
    parts = [
        f'{f.name}={_describe(getattr(node, f.name), max_depth - 1)}'
        for f in fields(node) if f.repr
    ]
    return f'{type(node).__name__}({", ".join(parts)})'


def _describe(value, max_depth: int) -> str:
    if isinstance(value, Node):
        return describe_node(value, max_depth)
    if isinstance(value, list):
        return '[' + ', '.join(_describe(item, max_depth) for item in value) + ']'
    if isinstance(value, tuple):
        return '(' + ', '.join(_describe(item, max_depth) for item in value) + ')'
    return repr(value)
