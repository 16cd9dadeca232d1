from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, TYPE_CHECKING

from ..exceptions import ColumnMetadataNotSupported
from ..utils.general import LoggingMixin
from .database_type import RowMode
from .fetch_strategy import strategy_for
from .sequential_view import SequentialView
from .statement import Statement, Row, FieldInfo
from . import projection

if TYPE_CHECKING:
    import pandas as pd


# Cursor class definition
class Cursor(LoggingMixin):
    """Navigable view over the rows of an executed Statement.

    Forward movement reads rows from the statement as it goes. Backward or random movement uses the
    statement's native seek when it has one; otherwise every row is pulled into memory on the first
    such move and all later navigation is served from that buffer.

    NOTE: a Cursor keeps its position as plain instance state and is not thread-safe. One owner
    drives it at a time.
    """

    statement:Statement|None            # The executed statement (closed by this cursor, but not created by it)
    time_created:datetime               # Creation time reported by the statement
    can_seek:bool                       # Whether the statement can seek natively
    fields:Row|None                     # The current row, None at end-of-data
    eof:bool                            # True once no current row exists


    def __init__(self, statement:Statement, *, logger:logging.Logger|None=None):

        # Set the base attributes
        self.statement = statement
        self.logger = logger
        self.enable_logging = logger is not None
        self._closed = False

        # Capture the statement's metadata (errors propagate)
        self.time_created = statement.time_created()
        self.can_seek = statement.can_seek()
        self._row_count:int = statement.row_count()
        self._field_count:int = statement.column_count()

        # Choose how rows are retrieved, once
        self._strategy = strategy_for(statement, self.can_seek)
        self._row_mode:RowMode|None = None
        self._column_names:list[str]|None = None

        # Position before the first row, then prime row 0
        self._current_row_index:int = -1
        self.fields = None
        self.eof = False
        self.advance()


    def __del__(self):
        if not getattr(self, "_closed", True):
            self.close()


    # ---- Accessors ---- #
    @property
    def row_count(self) -> int:
        """Total number of rows, or -1 if the driver cannot tell yet."""
        return self._row_count

    @property
    def field_count(self) -> int:
        return self._field_count

    @property
    def current_row_index(self) -> int:
        return self._current_row_index

    @property
    def row_mode(self) -> RowMode|None:
        """NAMED or POSITIONAL; None until a row has been seen."""
        return self._row_mode

    @property
    def materialized(self) -> bool:
        """True once the rows have been buffered in memory."""
        return self._strategy.materialized


    # ---- Navigation ---- #
    def advance(self) -> bool:
        """Move to the next row. Returns True if there is one, False at end-of-data (and forever after, until a seek)."""

        # No-op once at the end
        if self.eof: return False

        next_index:int = self._current_row_index + 1
        row:Row|None = None

        # Only ask for a row if the count allows one (or the count is unknown)
        if self._row_count < 0 or next_index < self._row_count:
            try:
                row = self._strategy.fetch_next(next_index)
            except Exception as e:
                self.log_error('advance()', e)
                raise

        # Past the last row
        if row is None:
            self._set_eof()
            return False

        self._set_row(next_index, row)
        return True


    def seek(self, row_number:int) -> bool:
        """Random access to the given (0-based) row.

        NOTE: a row_number at or beyond row_count lands on row_count - 2 (the second-to-last row), not the last.
        Callers rely on this overflow behaviour so it is kept as-is.

        Returns True if positioned on a row, False (end-of-data) if the row does not exist.
        """

        # A seek always clears end-of-data
        self.eof = False

        # Overflow to the second-to-last row
        row_count:int = self._known_row_count('seek()')
        if row_count > 0 and row_number >= row_count:
            row_number = row_count - 2

        # Already there
        if row_number == self._current_row_index and self.fields is not None:
            return True

        # Fetch the row (buffering first if the statement cannot seek)
        was_materialized:bool = self._strategy.materialized
        try:
            row:Row|None = self._strategy.fetch_at(row_number)
        except Exception as e:
            self.log_error('seek()', e)
            raise

        # Row count becomes exact once buffered
        if not was_materialized and self._strategy.materialized:
            self._on_materialized('seek()')

        if row is None:
            self._set_eof()
            return False

        self._set_row(row_number, row)
        return True


    def seek_first(self) -> bool:
        """Move back to row 0."""
        if self._current_row_index == 0 and self.fields is not None:
            return True
        return self.seek(0)


    def seek_last(self) -> bool:
        """Move to the end of the result (see seek() for the overflow row)."""
        row_count:int = self._known_row_count('seek_last()')
        if row_count > 0:
            return self.seek(row_count - 2)
        return False


    # Record-set style aliases
    move = seek
    move_next = advance
    move_first = seek_first
    move_last = seek_last


    # ---- Reading the current row ---- #
    def current_field_value(self, key:str|int) -> Any:
        """Returns the value of the given column (name or position) in the current row.
        Returns None at end-of-data or for an unknown column - check [eof] first."""

        # Nothing to read
        if self.fields is None: return None

        # Named rows
        if self._row_mode is RowMode.NAMED:
            if isinstance(key, int):
                values:list = [self.fields[k] for k in self.fields.keys()]
                return values[key] if 0 <= key < len(values) else None
            return self.fields[key] if key in self.fields.keys() else None

        # Positional rows
        if isinstance(key, str):
            names:list[str] = self.column_names
            if key not in names: return None
            key = names.index(key)
        return self.fields[key] if 0 <= key < len(self.fields) else None


    def fetch_row(self) -> Row|None:
        """Returns (a copy of) the current row and advances, or None at end-of-data."""
        if self.eof: return None
        row:Row = self.copy_row(self.fields)
        self.advance()
        return row


    @property
    def column_names(self) -> list[str]:
        """Column names, from the rows themselves when they are named, otherwise from column metadata.
        Empty if neither is available."""
        if self._column_names is None:
            if self.statement is None:
                return []
            if self._row_mode is RowMode.NAMED and self.fields is not None:
                self._column_names = [str(k) for k in self.fields.keys()]
            else:
                names:list[str] = []
                for i in range(self._field_count):
                    info:FieldInfo|None = self.statement.column_metadata(i)
                    if info is None:
                        return []
                    names.append(info.name)
                self._column_names = names
        return self._column_names


    # ---- Metadata ---- #
    def column_metadata(self, index:int=0) -> FieldInfo:
        """Returns the FieldInfo for the given column. Raises ColumnMetadataNotSupported if the driver has none."""
        info:FieldInfo|None = self.statement.column_metadata(index)
        if info is None:
            raise ColumnMetadataNotSupported(index)
        return info


    def field_types(self) -> list[FieldInfo]:
        """Returns the FieldInfo of every column."""
        return [self.column_metadata(i) for i in range(self._field_count)]


    def next_result_set(self) -> bool:
        """Some drivers return several result sets per execution. Returns True if there is another one."""
        try:
            return bool(self.statement.next_rowset())
        except Exception as e:
            self.log_error('next_result_set()', e)
            raise


    # ---- Bulk consumption ---- #
    def to_mapping(self, force_array:bool=False, first2cols:bool=False) -> dict|None:
        """See projection.to_mapping(). Consumes the cursor."""
        return projection.to_mapping(self, force_array=force_array, first2cols=first2cols)


    def to_frame(self) -> "pd.DataFrame":
        """See projection.to_frame(). Consumes the cursor."""
        return projection.to_frame(self)


    # ---- Lifecycle ---- #
    def close(self) -> None:
        """Closes the statement (once). Safe to call repeatedly or on a cursor without a statement."""

        # Base case: already closed or nothing to close
        if self._closed or self.statement is None:
            self._closed = True
            return

        self._closed = True
        self._set_eof()
        try:
            self.statement.close()
        except Exception as e:
            self.log_error('close()', e)
            raise
        self.log_debug('close()', 'Statement closed.')


    def __iter__(self) -> SequentialView:
        return SequentialView(self)

    def __len__(self) -> int:
        return max(self._row_count, 0)

    def __bool__(self) -> bool:
        return not self.eof

    def __enter__(self) -> "Cursor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


    # ---- Helpers ---- #
    def _set_row(self, index:int, row:Row) -> None:
        """Stores the row as current; the row mode is fixed by the first row seen."""
        if self._row_mode is None:
            self._row_mode = RowMode.of(row)
        self.fields = row
        self._current_row_index = index
        self.eof = False


    def _known_row_count(self, calling_func:str) -> int:
        """The row count used for clamping. A forward-only statement that cannot report its count is
        buffered here, so the clamp is the same on the first seek as on every later one."""
        if self._row_count < 0 and not self.can_seek and not self._strategy.materialized:
            try:
                self._strategy.materialize()
            except Exception as e:
                self.log_error(calling_func, e)
                raise
            self._on_materialized(calling_func)
        return self._row_count


    def _on_materialized(self, calling_func:str) -> None:
        """Row count becomes exact once the rows are buffered."""
        self._row_count = self._strategy.known_row_count(self._row_count)
        self.log_debug(calling_func, f'Statement cannot seek - buffered {self._row_count} rows in memory.')


    def _set_eof(self) -> None:
        self.fields = None
        self.eof = True


    def copy_row(self, row:Row) -> Row:
        """Returns a detached copy so later moves cannot alter it."""
        if self._row_mode is RowMode.NAMED:
            return {k: row[k] for k in row.keys()}
        return tuple(row)
