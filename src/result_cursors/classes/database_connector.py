# Standard imports
import logging
import pandas as pd

# Imports for DB drivers
import mysql.connector as mysql
import psycopg2 as psql
import sqlite3 as sqlite

from mysql.connector import MySQLConnection
from psycopg2.extensions import connection as PSQLConnection
from sqlite3 import Connection as SQLiteConnection

# Custom utils and objs
from ..utils.general import setup_logger, LoggingMixin
from ..exceptions import DatabaseNotConnected, DatabaseTypeNotSupported
from .cursor import Cursor
from .database_type import DatabaseType
from .driver_manager import create_statement
from .statement import DBCursor


# DatabaseConnector class definition
class DatabaseConnector(LoggingMixin):
    """Connects to a database and hands back query results as navigable Cursors."""

    database_type:DatabaseType                              # The DatabaseType for this instance
    cxn:MySQLConnection|PSQLConnection|SQLiteConnection     # The database connection object
    enable_logging:bool                                     # Optional - specify whether to enable logging for this instance; defaults to True
    logger:logging.Logger                                   # Logger for debug/info/etc (shared with the cursors it creates)
    P:str                                                   # The placeholder for this DB type (%s or ?)


    def __init__(
            self,
            database_type:DatabaseType,
            host:str,
            username:str,
            password:str,
            *,
            port:int|None=None,
            database:str|None=None,
            enable_logging:bool=True,
            log_file_path:str='./database_connection.log',
            logger_name:str='database_connection_logger',
            logger_min_level:int=logging.DEBUG,
            logger_format:str="%(asctime)s - %(levelname)s: %(message)s"
        ):

        # Set the base attributes
        self.database_type = database_type
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.database = database
        self.enable_logging = enable_logging
        self.logger = None

        # Setup logging if configured
        if enable_logging:

            # Init a logger
            self.logger = setup_logger(
                log_file_path=log_file_path,
                logger_name=logger_name,
                min_level=logger_min_level,
                log_format=logger_format,
            )

        # Set connection based on type
        try:
            match database_type:

                # MYSQL DATABASE
                case DatabaseType.MYSQL:

                    # Set port if None is given
                    if port is None: port = 3306

                    # Set P
                    self.P = '%s'

                    # Connect
                    self.cxn = mysql.connect(
                        database=database,
                        host=host,
                        port=port,
                        user=username,
                        password=password
                    )

                # POSTGRESQL DATABASE
                case DatabaseType.POSTGRESQL:

                    # Set port if None is given
                    if port is None: port = 5432

                    # Set P
                    self.P = '%s'

                    # Connect
                    self.cxn = psql.connect(
                        dbname=database,
                        host=host,
                        port=port,
                        user=username,
                        password=password
                    )

                # SQLITE DATABASE
                case DatabaseType.SQLITE:

                    # Set P
                    self.P = '?'

                    if database is None or not database:
                        raise ValueError("For SQLite, 'database' must be a file path or ':memory:'.")

                    # Use the given filepath to connect
                    self.cxn = sqlite.connect(database)

                # UNSUPPORTED
                case _:
                    raise DatabaseTypeNotSupported(database_type)

        # Handle exceptions
        except Exception as e:
            self.log_error('__init__()', e)
            self.cxn = None


    # ---- Functions for checking if the database connection is running and healthy ---- #
    def _ensure_cxn(self) -> None:
        """Raises a DatabaseNotConnected exception if the DB is not connected."""
        if not self._check_connection():
            self.log_error('_ensure_cxn()', DatabaseNotConnected())
            raise DatabaseNotConnected()


    def _check_connection(self) -> bool:
        """Returns True if the connection is running and is healthy, False otherwise."""

        # Base case: self.cxn is None
        if self.cxn is None: return False

        # Check based on db type
        match self.database_type:
            case DatabaseType.MYSQL:
                try:
                    self.cxn.ping(reconnect=False, attempts=1, delay=0)
                    return True
                except Exception:
                    pass
            case DatabaseType.POSTGRESQL:
                # NOTE: psycopg2 sets [closed] to a non-zero value once the connection is closed or broken
                if getattr(self.cxn, "closed", 1) == 0:
                    return True
            case DatabaseType.SQLITE:
                try:
                    self.cxn.execute('SELECT 1;')
                    return True
                except sqlite.ProgrammingError:
                    pass

        # Not connected if we make it here
        return False


    def is_connected(self) -> bool:
        """Public method for checking if the DB is connected and the connection is healthy (does not raise Exceptions)."""
        return self._check_connection()


    def _new_cursor(self) -> DBCursor:
        """Creates a driver cursor. MySQL cursors are buffered so the row count is known up front."""
        if self.database_type is DatabaseType.MYSQL:
            return self.cxn.cursor(buffered=True)
        return self.cxn.cursor()


    def commit(self, rollback_on_error:bool=True) -> None:
        """Commits changes to self.cxn and logs any errors if they occur."""
        try: self.cxn.commit()
        except Exception as e:
            self.log_warning('commit()', f'Error when committing changes: {e.__class__.__name__} - {e}')
            if rollback_on_error:
                self.cxn.rollback()
                self.log_warning('commit()', 'Rolled back changes.')


    # ---- Standard functions ---- #
    def execute(
        self,
        statement:str,
        params=None,
        *,
        named_rows:bool=False,
        retain_rows:bool=True,
        can_seek:bool|None=None,
        rollback_on_error:bool=True,
        raise_on_error:bool=True,
    ) -> Cursor|None:
        """Executes the given statement and returns a Cursor over its results.

            NOTE:
                - The returned Cursor owns the driver cursor; close it (or use it as a context manager) when done
                - If [named_rows] is True, rows are dicts keyed by column name; otherwise tuples
                - If [retain_rows] is False, a forward-only result keeps no copy of the rows it has handed out,
                  so it can be read once front to back but not seeked back
                - If [raise_on_error] is False, errors are only logged and None is returned
        """

        # Check if the cxn is active
        self._ensure_cxn()
        cursor:DBCursor = self._new_cursor()

        # Execute statement
        try:

            # Execute with parameters
            if params is not None and params:
                cursor.execute(statement, params)

            # Execute without parameters
            else:
                cursor.execute(statement)

            # Wrap the executed cursor
            return Cursor(
                create_statement(
                    cursor,
                    self.database_type,
                    named_rows=named_rows,
                    retain_rows=retain_rows,
                    can_seek=can_seek,
                    logger=self.logger,
                ),
                logger=self.logger,
            )

        # Handle and log errors
        except Exception as e:
            if rollback_on_error:
                try:
                    self.cxn.rollback()
                except Exception as e2:
                    # NOTE: don't mask the original exception
                    self.log_warning('execute()', f'Rollback failed: {e2}')

            # Log with traceback and release the driver cursor
            self.log_error('execute()', e)
            cursor.close()

            # Re-raise if configured
            if raise_on_error: raise
            return None


    def get_assoc(self, statement:str, params=None, *, force_array:bool=False, first2cols:bool=False) -> dict|None:
        """Runs the query and returns its rows keyed by the first column (see Cursor.to_mapping())."""
        # Single forward pass, no need to keep rows
        with self.execute(statement, params, retain_rows=False) as cursor:
            return cursor.to_mapping(force_array=force_array, first2cols=first2cols)


    def query_as_df(self, statement:str, params=None) -> pd.DataFrame:
        """Runs the query and returns its rows as a DataFrame."""
        with self.execute(statement, params, retain_rows=False) as cursor:
            return cursor.to_frame()


    def close(self) -> None:
        """Closes the connection (safe to call more than once)."""
        if self.cxn is None: return
        try:
            self.cxn.close()
        finally:
            self.cxn = None
