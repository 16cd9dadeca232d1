from __future__ import annotations
import logging
from datetime import datetime
from typing import Any

from psycopg2 import ProgrammingError as PSQLProgrammingError

from ..exceptions import RowsNotRetained
from ..utils.general import LoggingMixin
from .database_type import DatabaseType
from .statement import DBCursor, FieldInfo, Row


# DBAPIStatement class definition
class DBAPIStatement(LoggingMixin):
    """Statement over an already-executed PEP 249 cursor (sqlite3, psycopg2, mysql-connector).

    NOTE:
        - Seeking is only offered when the driver cursor has scroll() (psycopg2); pass [can_seek] to override
        - Forward-only cursors cannot rewind, so rows handed out by fetch() are kept and fetch_all() returns
          them together with the rest of the result; with [retain_rows] False nothing is kept, and fetch_all()
          raises RowsNotRetained once rows have been read
        - With [named_rows] the driver's tuples are turned into dicts keyed by column name
    """

    database_type:DatabaseType|None     # Driver family, when known
    cursor:DBCursor                     # The executed driver cursor
    named_rows:bool                     # Return dict rows instead of tuples


    def __init__(
            self,
            cursor:DBCursor,
            database_type:DatabaseType|None=None,
            *,
            can_seek:bool|None=None,
            named_rows:bool=False,
            retain_rows:bool=True,
            logger:logging.Logger|None=None,
        ):

        # Set the base attributes
        self.cursor = cursor
        self.database_type = database_type
        self.named_rows = named_rows
        self.retain_rows = retain_rows
        self.logger = logger
        self.enable_logging = logger is not None
        self._time_created:datetime = datetime.now()

        # Default seek capability from the driver cursor
        if can_seek is None:
            can_seek = callable(getattr(cursor, "scroll", None))
        self._can_seek:bool = can_seek

        # Rows already read sequentially (forward-only cursors only)
        self._consumed:list[Row] = []
        self._rows_read:int = 0
        self._exhausted:bool = False
        self._closed:bool = False


    # ---- Metadata ---- #
    def time_created(self) -> datetime:
        return self._time_created

    def can_seek(self) -> bool:
        return self._can_seek

    def row_count(self) -> int:
        """The driver's rowcount, -1 if it cannot tell (e.g. sqlite3 SELECTs), 0 if there is no result set."""
        if not self.has_result_set(): return 0
        count = getattr(self.cursor, "rowcount", -1)
        return count if isinstance(count, int) and count >= 0 else -1

    def has_result_set(self) -> bool:
        """False for statements that return no rows (DDL, INSERT, ...)."""
        return getattr(self.cursor, "description", None) is not None

    def column_count(self) -> int:
        description = getattr(self.cursor, "description", None)
        return len(description) if description else 0

    def column_names(self) -> list[str]:
        description = getattr(self.cursor, "description", None) or []
        return [d[0] for d in description]

    def column_metadata(self, index:int) -> FieldInfo|None:
        """FieldInfo built from cursor.description, None if the driver has no description for the column."""
        description = getattr(self.cursor, "description", None)
        if not description or not 0 <= index < len(description):
            return None
        return FieldInfo.from_description(description[index])


    # ---- Fetching ---- #
    def fetch(self, row_number:int|None=None) -> Row|None:
        """Fetches the next row, or the given row (absolute position) when [row_number] is given."""

        # Nothing to fetch (some drivers raise instead of returning None)
        if not self.has_result_set():
            return None

        # Sequential fetch
        if row_number is None:
            row = self.cursor.fetchone()
            if row is None:
                self._exhausted = True
                return None
            row = self._shape(row)
            self._rows_read += 1
            if not self._can_seek and self.retain_rows:
                self._consumed.append(row)
            return row

        # Seek fetch
        if not self._can_seek:
            raise NotImplementedError("This statement cannot seek; use fetch_all() instead.")
        count:int = self.row_count()
        if row_number < 0 or 0 <= count <= row_number:
            return None
        try:
            self.cursor.scroll(row_number, mode="absolute")
        except (IndexError, PSQLProgrammingError) as e:
            # NOTE: PEP 249 says IndexError; psycopg2 client cursors raise ProgrammingError("scroll destination out of bounds")
            if isinstance(e, PSQLProgrammingError) and "out of bounds" not in str(e):
                self.log_error('fetch()', e)
                raise
            self.log_debug('fetch()', f'Row {row_number} is out of range.')
            return None
        row = self.cursor.fetchone()
        return None if row is None else self._shape(row)


    def fetch_all(self) -> list[Row]:
        """Returns every row of the result, including rows already read by fetch().
        Raises RowsNotRetained if rows were read from a forward-only statement with [retain_rows] False."""
        if not self._can_seek and not self.retain_rows and self._rows_read:
            e = RowsNotRetained(self._rows_read)
            self.log_error('fetch_all()', e)
            raise e
        remaining:list = [] if self._exhausted or not self.has_result_set() else self.cursor.fetchall()
        self._exhausted = True
        self._consumed.extend(self._shape(r) for r in remaining)
        self.log_debug('fetch_all()', f'Fetched {len(remaining)} remaining rows ({len(self._consumed)} total).')
        return list(self._consumed)


    def next_rowset(self) -> bool:
        """Advances to the driver's next result set, False if the driver has no such concept."""
        nextset = getattr(self.cursor, "nextset", None)
        if not callable(nextset):
            return False

        has_next:bool = bool(nextset())
        if has_next:
            self._consumed = []
            self._rows_read = 0
            self._exhausted = False
        return has_next


    # ---- Lifecycle ---- #
    def close(self) -> None:
        """Closes the driver cursor (once)."""
        if self._closed: return
        self._closed = True
        if self.cursor is not None:
            self.cursor.close()
        self.log_debug('close()', 'Driver cursor closed.')


    # ---- Helpers ---- #
    def _shape(self, row:Any) -> Row:
        """Applies [named_rows] to a raw driver row."""
        if not self.named_rows or hasattr(row, "keys"):
            return row
        return dict(zip(self.column_names(), row))
