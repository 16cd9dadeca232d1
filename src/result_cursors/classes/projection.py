from __future__ import annotations
from typing import Any, TYPE_CHECKING
import pandas as pd

from .database_type import RowMode
from .sequential_view import SequentialView
from .statement import Row

if TYPE_CHECKING:
    from .cursor import Cursor


def _split_row(row:Row, mode:RowMode|None) -> tuple[Any, Any, Row]:
    """Returns (first value, second value, everything after the first column) for a named or positional row."""
    if mode is RowMode.NAMED:
        keys:list = list(row.keys())
        return row[keys[0]], row[keys[1]], {k: row[k] for k in keys[1:]}
    return row[0], row[1], tuple(row[1:])


def to_mapping(cursor:Cursor, force_array:bool=False, first2cols:bool=False) -> dict|None:
    """Returns the remaining rows as a dict keyed by the (stringified, stripped) first column.

        - 2 columns: {key: second column}, unless [force_array] is True
        - more than 2 columns (or [force_array]): {key: rest of the row} - a tuple for positional rows, a dict for named rows
        - [first2cols]: always {key: second column}, ignoring any further columns
        - fewer than 2 columns: None (not applicable)

    NOTE:
        - Consumes the cursor; calling again without seek_first() returns {}
        - Duplicate keys: the later row wins
    """

    # Not applicable
    if cursor.field_count < 2: return None

    row_valued:bool = not first2cols and (cursor.field_count > 2 or force_array)

    # Row mode is fixed by the first row the cursor loaded
    mode:RowMode|None = cursor.row_mode
    results:dict = {}
    for row in SequentialView(cursor):
        first, second, rest = _split_row(row, mode)
        results[str(first).strip()] = rest if row_valued else second

    return results


def to_frame(cursor:Cursor) -> pd.DataFrame:
    """Returns the remaining rows as a DataFrame. Column names come from the rows (named) or from
    the column metadata (positional); without either, pandas' default integer labels are used."""

    # Resolve the names before consuming (metadata may not survive the statement)
    columns:list[str] = cursor.column_names if cursor.field_count else []
    rows:list[Row] = list(SequentialView(cursor))

    if not rows:
        return pd.DataFrame(columns=columns or None)

    # Named rows carry their own labels
    if cursor.row_mode is RowMode.NAMED:
        return pd.DataFrame.from_records(rows, columns=columns or None)

    # Only apply names that line up with the row width
    if columns and len(columns) == len(rows[0]):
        return pd.DataFrame.from_records(rows, columns=columns)
    return pd.DataFrame.from_records(rows)
