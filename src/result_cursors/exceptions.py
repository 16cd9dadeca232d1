class DatabaseNotConnected(ConnectionError): 
    """Raised when the DatabaseConnector attempts a transaction but does not have an active [cxn] attribute."""
    
    def __init__(self): 
        super().__init__('The database is not connected or the connection is not healthy.')


class DatabaseTypeNotSupported(ValueError): 
    """Raised when a statement or connection is requested for a database_type that is not one of the Enum values in the DatabaseType class."""

    def __init__(self, db_type:str|int): 
        self.db_type = db_type
        super().__init__(f'The current database_type "{db_type}" is not supported. See the DatabaseType enum class for supported types.')


class ColumnMetadataNotSupported(NotImplementedError): 
    """Raised when Cursor.column_metadata() is called but the driver exposes no metadata for the column."""

    def __init__(self, column_index:int): 
        self.column_index = column_index
        super().__init__(f"The driver does not support column metadata (requested column {column_index}).")


class RowsNotRetained(RuntimeError): 
    """Raised when fetch_all() is called on a forward-only statement created with retain_rows=False after rows were already read."""

    def __init__(self, rows_read:int): 
        self.rows_read = rows_read
        super().__init__(f"{rows_read} rows were already read and not kept (retain_rows=False); the complete result cannot be returned.")
