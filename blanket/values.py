"""Runtime values for Blanket.

Blanket has a single value type, `Number`, holding a Python int or float.
Booleans are the numbers 1 and 0. A Number remembers the span of the node
that produced it and the context it was produced in, so that an error in
a later operation can be attributed to it.

Every operation returns a `(result, error)` pair where exactly one side
is None.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

from .errors import RTError
from .tokens import Position

Numeric = Union[int, float]
OpResult = Tuple[Optional['Number'], Optional[RTError]]

# integer results wider than this are reported as a numeric overflow
MAX_INT_BITS = 10000


def format_number(value: Numeric) -> str:
    """Render a number the way the command line prints it.

    Integral floats print without a fractional part (`6/3` prints `2`),
    as long as they are small enough to be exact.
    """
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


class Number:
    def __init__(self, value: Numeric):
        self.value = value
        self.pos_start: Optional[Position] = None
        self.pos_end: Optional[Position] = None
        self.context = None

    def set_pos(self, pos_start: Optional[Position] = None, pos_end: Optional[Position] = None) -> 'Number':
        self.pos_start = pos_start
        self.pos_end = pos_end
        return self

    def set_context(self, context=None) -> 'Number':
        self.context = context
        return self

    def _new(self, value: Numeric) -> 'Number':
        return Number(value).set_context(self.context)

    def _error(self, message: str, other: 'Number') -> RTError:
        return RTError(message, other.pos_start, other.pos_end, self.context)

    def _result(self, value: Numeric, other: 'Number') -> OpResult:
        if isinstance(value, int) and value.bit_length() > MAX_INT_BITS:
            return None, self._error('Numeric overflow', other)
        return self._new(value), None

    def added_to(self, other: 'Number') -> OpResult:
        try:
            return self._result(self.value + other.value, other)
        except OverflowError:
            return None, self._error('Numeric overflow', other)

    def subbed_by(self, other: 'Number') -> OpResult:
        try:
            return self._result(self.value - other.value, other)
        except OverflowError:
            return None, self._error('Numeric overflow', other)

    def multed_by(self, other: 'Number') -> OpResult:
        try:
            return self._result(self.value * other.value, other)
        except OverflowError:
            return None, self._error('Numeric overflow', other)

    def dived_by(self, other: 'Number') -> OpResult:
        if other.value == 0:
            return None, self._error('Division by zero', other)
        try:
            return self._new(self.value / other.value), None
        except OverflowError:
            return None, self._error('Numeric overflow', other)

    def powed_by(self, other: 'Number') -> OpResult:
        base, exponent = self.value, other.value
        # lower bound on the result size, checked before computing it
        if (isinstance(base, int) and isinstance(exponent, int) and exponent > 0
                and (abs(base).bit_length() - 1) * exponent > MAX_INT_BITS):
            return None, self._error('Numeric overflow', other)
        try:
            result = base ** exponent
        except ZeroDivisionError:
            return None, self._error('Division by zero', other)
        except OverflowError:
            return None, self._error('Numeric overflow', other)
        if isinstance(result, complex):
            return None, self._error('Invalid exponentiation', other)
        return self._result(result, other)

    def get_comparison_eq(self, other: 'Number') -> OpResult:
        return self._new(int(self.value == other.value)), None

    def get_comparison_ne(self, other: 'Number') -> OpResult:
        return self._new(int(self.value != other.value)), None

    def get_comparison_lt(self, other: 'Number') -> OpResult:
        return self._new(int(self.value < other.value)), None

    def get_comparison_gt(self, other: 'Number') -> OpResult:
        return self._new(int(self.value > other.value)), None

    def get_comparison_lte(self, other: 'Number') -> OpResult:
        return self._new(int(self.value <= other.value)), None

    def get_comparison_gte(self, other: 'Number') -> OpResult:
        return self._new(int(self.value >= other.value)), None

    def anded_by(self, other: 'Number') -> OpResult:
        return self._new(int(self.is_true() and other.is_true())), None

    def ored_by(self, other: 'Number') -> OpResult:
        # yields an operand's value, not a normalised 0/1
        return self._new(self.value if self.is_true() else other.value), None

    def notted(self) -> OpResult:
        return self._new(0 if self.is_true() else 1), None

    def negated(self) -> OpResult:
        return self.multed_by(Number(-1))

    def is_true(self) -> bool:
        return self.value != 0

    def copy(self) -> 'Number':
        copy = Number(self.value)
        copy.set_pos(self.pos_start, self.pos_end)
        copy.set_context(self.context)
        return copy

    def __eq__(self, other) -> bool:
        if isinstance(other, Number):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return format_number(self.value)
