"""Error values reported by the Blanket pipeline.

Every stage reports failures as one of the error values below, carried in
a result object rather than raised. `BlanketException` exists for callers
that would rather catch an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, List, Optional

from .tokens import Position

if TYPE_CHECKING:
    from .environment import Context


@dataclass(frozen=True)
class BlanketError:
    message: str
    pos_start: Position
    pos_end: Position

    kind: ClassVar[str] = 'Error'

    def as_string(self) -> str:
        return f'{self.kind}: {self.message} ({self.pos_start.ln}:{self.pos_start.col})'

    def __str__(self) -> str:
        return self.as_string()


class InvalidTokenError(BlanketError):
    """Unrecognised character, malformed numeral or unknown comparator."""
    kind = 'Invalid Token'


class InvalidSyntaxError(BlanketError):
    kind = 'Syntax Error'


@dataclass(frozen=True)
class RTError(BlanketError):
    """Error raised while evaluating a tree.

    Carries the context the failing operation ran in so that the rendered
    message can list every enclosing context, outermost first.
    """
    context: Optional['Context'] = None

    kind = 'Runtime Error'

    def as_string(self) -> str:
        return self.generate_traceback() + super().as_string()

    def generate_traceback(self) -> str:
        lines: List[str] = []
        pos = self.pos_start
        ctx = self.context
        while ctx is not None:
            if pos is not None:
                lines.insert(0, f'  File {pos.fn}, line {pos.ln}, in {ctx.display_name}\n')
            else:
                lines.insert(0, f'  in {ctx.display_name}\n')
            pos = ctx.parent_entry_pos
            ctx = ctx.parent
        return 'Traceback\n' + ''.join(lines)


def format_error(error: BlanketError) -> str:
    """Render an error the way the command line prints it."""
    return error.as_string()


class BlanketException(Exception):
    """Exception type used to surface a Blanket error to Python callers."""
    def __init__(self, error: BlanketError):
        super().__init__(error.as_string())
        self.error = error
