# Blanket language package
# This package provides a lexer, parser and interpreter for the Blanket expression language.
from .session import Session, run
from .errors import BlanketError, BlanketException, format_error
from .results import Result

__all__ = [
    'Session',
    'run',
    'BlanketError',
    'BlanketException',
    'format_error',
    'Result',
]
