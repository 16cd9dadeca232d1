from __future__ import annotations
from typing import Sequence

from .statement import Statement, Row


class LiveFetchStrategy(object):
    """Reads every row straight from a statement that can seek natively."""

    materialized:bool = False

    def __init__(self, statement:Statement):
        self.statement = statement

    def fetch_next(self, index:int) -> Row | None:
        return self.statement.fetch()

    def fetch_at(self, index:int) -> Row | None:
        if index < 0: return None
        return self.statement.fetch(index)

    def known_row_count(self, fallback:int) -> int:
        return fallback


class BufferedFetchStrategy(object):
    """Forward-only statements: rows are read live until random access is first needed,
    then the whole result is pulled with a single fetch_all() and served from memory."""

    def __init__(self, statement:Statement):
        self.statement = statement
        self.rows:Sequence[Row]|None = None

    @property
    def materialized(self) -> bool:
        return self.rows is not None

    def materialize(self) -> Sequence[Row]:
        """Loads every row (once); all-or-nothing."""
        if self.rows is None:
            self.rows = list(self.statement.fetch_all())
        return self.rows

    def fetch_next(self, index:int) -> Row | None:
        if self.rows is None:
            return self.statement.fetch()
        return self._row_at(index)

    def fetch_at(self, index:int) -> Row | None:
        self.materialize()
        return self._row_at(index)

    def known_row_count(self, fallback:int) -> int:
        """Once materialized the buffer length is authoritative."""
        if self.rows is None: return fallback
        return len(self.rows)

    def _row_at(self, index:int) -> Row | None:
        # Negative indexes are absent rows, not python's "from the end"
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None


def strategy_for(statement:Statement, can_seek:bool) -> LiveFetchStrategy|BufferedFetchStrategy:
    """Picks the fetch strategy for a statement based on its seek capability."""
    if can_seek:
        return LiveFetchStrategy(statement)
    return BufferedFetchStrategy(statement)
