from __future__ import annotations

from typing import Any, Dict, Optional

from .tokens import Position


class SymbolTable:
    """Maps names to runtime values, falling back to a parent table on a miss."""
    def __init__(self, parent: Optional['SymbolTable'] = None):
        self.symbols: Dict[str, Any] = {}
        self.parent = parent

    def get(self, name: str) -> Any:
        if name in self.symbols:
            return self.symbols[name]
        if self.parent is not None:
            return self.parent.get(name)
        return None

    def set(self, name: str, value: Any):
        self.symbols[name] = value

    def remove(self, name: str):
        del self.symbols[name]

    def __contains__(self, name: str) -> bool:
        return name in self.symbols or (self.parent is not None and name in self.parent)


class Context:
    """A logical frame: names a scope for tracebacks and owns its symbol table.

    `parent_entry_pos` is where this context was entered from inside the
    parent, so a traceback can point at the call site at every level.
    """
    def __init__(self, display_name: str, parent: Optional['Context'] = None,
                 parent_entry_pos: Optional[Position] = None,
                 symbol_table: Optional[SymbolTable] = None):
        self.display_name = display_name
        self.parent = parent
        self.parent_entry_pos = parent_entry_pos
        self.symbol_table = symbol_table

    def child(self, display_name: str, entry_pos: Optional[Position] = None) -> 'Context':
        parent_table = self.symbol_table
        return Context(display_name, self, entry_pos, SymbolTable(parent_table))

    def __repr__(self) -> str:
        return f'<context {self.display_name}>'
