from __future__ import annotations
from typing import TYPE_CHECKING

from .statement import Row

if TYPE_CHECKING:
    from .cursor import Cursor


class SequentialView(object):
    """Iterates the rows of a Cursor from its current position to end-of-data.

    Each row is yielded as a copy, so advancing the cursor never changes rows already handed out.
    The view is single-use: once exhausted, call cursor.seek_first() and iterate the cursor again.
    """

    def __init__(self, cursor:Cursor):
        self.cursor = cursor
        self._done = False

    def __iter__(self) -> "SequentialView":
        return self

    def __next__(self) -> Row:

        # Non-restartable, even if the cursor was re-seeked behind our back
        if self._done or self.cursor.eof:
            self._done = True
            raise StopIteration

        row:Row = self.cursor.copy_row(self.cursor.fields)
        self.cursor.advance()
        return row
