from datetime import datetime

import pytest

from result_cursors.classes.statement import FieldInfo


class FakeStatement:
    """In-memory Statement that records how the cursor drives it."""

    def __init__(self, rows, *, can_seek=False, row_count=None, columns=None, metadata=True, rowsets=(), fail_on_fetch=None):
        self.rows = list(rows)
        self._can_seek = can_seek
        self._row_count = len(self.rows) if row_count is None else row_count
        if columns is None:
            first = self.rows[0] if self.rows else ()
            columns = list(first.keys()) if hasattr(first, "keys") else [f"c{i}" for i in range(len(first))]
        self.columns = columns
        self.metadata = metadata
        self.rowsets = list(rowsets)
        self.fail_on_fetch = fail_on_fetch
        self.created = datetime(2024, 1, 1, 12, 0, 0)

        # Call counters
        self.pos = 0
        self.fetch_calls = 0
        self.seek_calls = 0
        self.fetch_all_calls = 0
        self.close_calls = 0

    def time_created(self): return self.created
    def can_seek(self): return self._can_seek
    def row_count(self): return self._row_count
    def column_count(self): return len(self.columns)

    def fetch(self, row_number=None):
        if self.fail_on_fetch is not None:
            raise self.fail_on_fetch
        if row_number is None:
            self.fetch_calls += 1
            row_number = self.pos
        else:
            assert self._can_seek, "seek-fetch on a forward-only statement"
            self.seek_calls += 1
        if not 0 <= row_number < len(self.rows):
            return None
        self.pos = row_number + 1
        return self.rows[row_number]

    def fetch_all(self):
        assert not self._can_seek, "fetch_all on a seekable statement"
        self.fetch_all_calls += 1
        self.pos = len(self.rows)
        return list(self.rows)

    def column_metadata(self, index):
        if not self.metadata or not 0 <= index < len(self.columns):
            return None
        return FieldInfo(self.columns[index])

    def next_rowset(self):
        return self.rowsets.pop(0) if self.rowsets else False

    def close(self):
        self.close_calls += 1


@pytest.fixture
def make_statement():
    """Factory fixture for FakeStatement."""
    return FakeStatement


@pytest.fixture
def five_rows():
    """Five positional rows: (0, "name0") .. (4, "name4")."""
    return [(i, f"name{i}") for i in range(5)]


@pytest.fixture(params=[True, False], ids=["seekable", "forward-only"])
def can_seek(request):
    """Runs a test against both a seekable and a forward-only statement."""
    return request.param
