from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Any, Mapping, Sequence, runtime_checkable

# NOTE: rows are tuples (positional) or dict-like (named), never both for one statement
Row = Mapping[str, Any] | Sequence[Any]


@dataclass(frozen=True)
class FieldInfo:
    """Column metadata, mirroring the PEP 249 cursor.description 7-tuple."""
    name: str
    type_code: Any = None
    display_size: int | None = None
    internal_size: int | None = None
    precision: int | None = None
    scale: int | None = None
    null_ok: bool | None = None

    @classmethod
    def from_description(cls, desc:Sequence[Any]) -> "FieldInfo":
        """Build from one entry of cursor.description (pads short entries with None)."""
        padded = list(desc) + [None] * (7 - len(desc))
        return cls(*padded[:7])


@runtime_checkable
class DBCursor(Protocol):
    """The read side of a PEP 249 cursor that DBAPIStatement drives."""

    description: Any | None
    rowcount: int

    def fetchone(self) -> Row | None: ...
    def fetchall(self) -> list[Row]: ...
    def close(self) -> None: ...


@runtime_checkable
class Statement(Protocol):
    """An executed statement: owns the live driver cursor and performs the physical fetches."""

    def time_created(self) -> datetime: ...
    def can_seek(self) -> bool: ...

    # May be -1 when the driver cannot report it before all rows are read
    def row_count(self) -> int: ...
    def column_count(self) -> int: ...

    # Sequential fetch when row_number is None, seek-fetch otherwise (only when can_seek())
    def fetch(self, row_number:int|None=None) -> Row | None: ...

    # Every row of the result, in order; called at most once
    def fetch_all(self) -> Sequence[Row]: ...

    def column_metadata(self, index:int) -> FieldInfo | None: ...
    def next_rowset(self) -> bool: ...

    # Lifecycle (idempotent)
    def close(self) -> None: ...
