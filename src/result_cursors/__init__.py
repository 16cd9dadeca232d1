from .classes import Cursor, SequentialView, DatabaseConnector, DBAPIStatement, Statement, FieldInfo, DatabaseType, RowMode, create_statement, to_mapping
from .exceptions import ColumnMetadataNotSupported, DatabaseNotConnected, DatabaseTypeNotSupported, RowsNotRetained
from .utils import *

__all__ = [
    "Cursor",
    "SequentialView",
    "DatabaseConnector",
    "DBAPIStatement",
    "Statement",
    "FieldInfo",
    "DatabaseType",
    "RowMode",
    "create_statement",
    "to_mapping",
    "ColumnMetadataNotSupported",
    "DatabaseNotConnected",
    "DatabaseTypeNotSupported",
    "RowsNotRetained",
]
