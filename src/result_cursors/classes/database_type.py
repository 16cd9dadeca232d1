from enum import Enum


class DatabaseType(Enum): 
    """Enum of Database types for standardization and type checking."""
    MYSQL = 1
    POSTGRESQL = 2
    SQLITE = 3


class RowMode(Enum): 
    """How a statement hands back rows; fixed for the lifetime of a statement."""
    NAMED = 1           # mapping of column name -> value
    POSITIONAL = 2      # tuple indexed by column position

    @classmethod
    def of(cls, row) -> "RowMode": 
        """Resolve the mode from a fetched row."""
        if hasattr(row, "keys"): return cls.NAMED
        return cls.POSITIONAL
