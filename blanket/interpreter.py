"""Tree-walking interpreter for the Blanket language.

`Interpreter.visit` evaluates one AST node in a Context and returns a
RuntimeResult holding either a `Number` (or None for a conditional with
no matching branch) or an `RTError`. Evaluation stops at the first error.
"""

from __future__ import annotations

from typing import Optional, TextIO

from .ast import BinOpNode, IfNode, Node, NumberNode, UnaryOpNode, VarAccessNode, VarAssignNode
from .environment import Context
from .errors import RTError
from .results import RuntimeResult
from .tokens import DIV, EE, GT, GTE, KEYWORD, LT, LTE, MINUS, MUL, NE, PLUS, POW
from .values import MAX_INT_BITS, Number

MAX_EVAL_DEPTH = 200

BINARY_OPERATIONS = {
    PLUS: Number.added_to,
    MINUS: Number.subbed_by,
    MUL: Number.multed_by,
    DIV: Number.dived_by,
    POW: Number.powed_by,
    EE: Number.get_comparison_eq,
    NE: Number.get_comparison_ne,
    LT: Number.get_comparison_lt,
    GT: Number.get_comparison_gt,
    LTE: Number.get_comparison_lte,
    GTE: Number.get_comparison_gte,
    (KEYWORD, 'and'): Number.anded_by,
    (KEYWORD, 'or'): Number.ored_by,
}


class Interpreter:
    """Core interpreter that evaluates Blanket ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
                 max_depth: int = MAX_EVAL_DEPTH):
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = open(debug_file, 'w') if debug_level > 0 and debug_file else None
        self.max_depth = max_depth
        self.depth = 0

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def visit(self, node: Node, context: Context) -> RuntimeResult:
        if self.depth >= self.max_depth:
            return RuntimeResult().failure(RTError(
                'Maximum evaluation depth exceeded',
                node.pos_start, node.pos_end, context,
            ))
        self.depth += 1
        try:
            if isinstance(node, NumberNode):
                return self.visit_number(node, context)
            if isinstance(node, BinOpNode):
                return self.visit_bin_op(node, context)
            if isinstance(node, UnaryOpNode):
                return self.visit_unary_op(node, context)
            if isinstance(node, VarAccessNode):
                return self.visit_var_access(node, context)
            if isinstance(node, VarAssignNode):
                return self.visit_var_assign(node, context)
            if isinstance(node, IfNode):
                return self.visit_if(node, context)
            # catch any other nodes
            raise NotImplementedError(f'visit: unexpected node type {type(node).__name__}')
        finally:
            self.depth -= 1

    def visit_value(self, node: Node, context: Context, res: RuntimeResult) -> Optional[Number]:
        """Evaluate `node` into `res`, treating an absent value as an error."""
        value = res.register(self.visit(node, context))
        if res.error is None and value is None:
            res.failure(RTError('Expression produced no value', node.pos_start, node.pos_end, context))
        return value

    ###################################

    def visit_number(self, node: NumberNode, context: Context) -> RuntimeResult:
        value = node.tok.value
        if isinstance(value, int) and value.bit_length() > MAX_INT_BITS:
            return RuntimeResult().failure(RTError('Numeric overflow', node.pos_start, node.pos_end, context))
        return RuntimeResult().success(
            Number(value).set_context(context).set_pos(node.pos_start, node.pos_end)
        )

    def visit_bin_op(self, node: BinOpNode, context: Context) -> RuntimeResult:
        res = RuntimeResult()
        left = self.visit_value(node.left_node, context, res)
        if res.error:
            return res
        right = self.visit_value(node.right_node, context, res)
        if res.error:
            return res

        op_tok = node.op_tok
        operation = BINARY_OPERATIONS.get(op_tok.type) or BINARY_OPERATIONS.get((op_tok.type, op_tok.value))
        if operation is None:
            raise NotImplementedError(f'visit_bin_op: unexpected operator {op_tok!r}')

        result, error = operation(left, right)
        if error:
            return res.failure(error)
        return res.success(result.set_pos(node.pos_start, node.pos_end))

    def visit_unary_op(self, node: UnaryOpNode, context: Context) -> RuntimeResult:
        res = RuntimeResult()
        number = self.visit_value(node.node, context, res)
        if res.error:
            return res

        op_tok = node.op_tok
        error = None
        if op_tok.type == MINUS:
            number, error = number.negated()
        elif op_tok.type == PLUS:
            number = number.copy()
        elif op_tok.matches(KEYWORD, 'not'):
            number, error = number.notted()
        else:
            raise NotImplementedError(f'visit_unary_op: unexpected operator {op_tok!r}')

        if error:
            return res.failure(error)
        return res.success(number.set_pos(node.pos_start, node.pos_end))

    def visit_var_access(self, node: VarAccessNode, context: Context) -> RuntimeResult:
        res = RuntimeResult()
        var_name = node.var_name_tok.value
        value = context.symbol_table.get(var_name)

        if value is None:
            return res.failure(RTError(
                f'{var_name} is not defined',
                node.pos_start, node.pos_end, context,
            ))

        value = value.copy().set_pos(node.pos_start, node.pos_end).set_context(context)
        return res.success(value)

    def visit_var_assign(self, node: VarAssignNode, context: Context) -> RuntimeResult:
        res = RuntimeResult()
        var_name = node.var_name_tok.value
        value = self.visit_value(node.value_node, context, res)
        if res.error:
            return res

        context.symbol_table.set(var_name, value)
        if self.debug_level >= 2:
            self.debug(f'assign {var_name} = {value!r} in {context.display_name}')
        return res.success(value.copy().set_pos(node.pos_start, node.pos_end))

    def visit_if(self, node: IfNode, context: Context) -> RuntimeResult:
        res = RuntimeResult()

        for index, (condition, expr) in enumerate(node.cases):
            condition_value = self.visit_value(condition, context, res)
            if res.error:
                return res

            truthy = condition_value.is_true()
            if self.debug_level >= 3:
                self.debug(f'if case {index}: condition {condition_value!r} -> {truthy}')
            if truthy:
                expr_value = res.register(self.visit(expr, context))
                if res.error:
                    return res
                return res.success(expr_value)

        if node.else_case is not None:
            if self.debug_level >= 3:
                self.debug('if: taking else branch')
            else_value = res.register(self.visit(node.else_case, context))
            if res.error:
                return res
            return res.success(else_value)

        return res.success(None)
