import logging
import os
from sqlite3 import Cursor as SQLiteCursor

from psycopg2.extensions import cursor as PSQLCursor
from mysql.connector.cursor import MySQLCursor

from ..classes.database_type import DatabaseType


def setup_logger(log_file_path:str, logger_name:str, min_level:int=logging.DEBUG, log_format:str='%(asctime)s - %(levelname)s: %(message)s') -> logging.Logger:
    """Sets up a logger to save logs to the given filepath."""

    # Init a logger and set the lowest level (DEBUG by default, so all logs are captured)
    logger:logging.Logger = logging.getLogger(logger_name)
    logger.setLevel(min_level)

    # Prevent double logging if root logger is used
    logger.propagate = False

    # Avoid duplicate handlers if setup is called multiple times
    if not logger.handlers:

        # NOTE: default path if log file path is None or empty string
        if not log_file_path:
            log_file_path = './result_cursors.log'

        # Create the output dir if it doesn't exist
        log_dir:str = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        # Create a file handler and set the format for logs
        file_handler:logging.FileHandler = logging.FileHandler(log_file_path, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(file_handler)

    # Return the logger
    return logger


def infer_database_type(cursor:SQLiteCursor|MySQLCursor|PSQLCursor) -> DatabaseType|None:
    """Returns the DatabaseType of the given driver cursor, or None if the cursor class is not supported."""
    if isinstance(cursor, SQLiteCursor): return DatabaseType.SQLITE
    if isinstance(cursor, PSQLCursor): return DatabaseType.POSTGRESQL
    if isinstance(cursor, MySQLCursor): return DatabaseType.MYSQL
    return None


class LoggingMixin(object):
    """Standardized logging helpers. Log format is: "[calling_function]: [message|Exception]".
    Does nothing unless [enable_logging] is True and a [logger] is set."""

    enable_logging:bool = False
    logger:logging.Logger|None = None

    def _log(
        self,
        level:int,
        fmt:str,
        *args,
        exc:BaseException|None=None,
        stacklevel:int=2,
    ) -> None:
        """Helper func to standardize logging format (or do nothing if not [self.enable_logging] or not [self.logger])."""

        # Check if enable logging is True
        if not getattr(self, "enable_logging", False): return

        # Make sure self.logger is not None
        logger:logging.Logger = getattr(self, "logger", None)
        if logger is None: return

        # Write to the log
        logger.log(level, fmt, *args, exc_info=exc, stacklevel=stacklevel)


    def log_debug(self, calling_func:str, message:str, stacklevel:int=3) -> None:
        """Logs a DEBUG message."""
        self._log(logging.DEBUG, "%s: %s", calling_func, message, stacklevel=stacklevel)


    def log_warning(self, calling_func:str, message:str, stacklevel:int=3) -> None:
        """Logs a WARNING message."""
        self._log(logging.WARNING, "%s error (non-critical): %s", calling_func, message, stacklevel=stacklevel)


    def log_error(self, calling_func:str, exception:Exception, stacklevel:int=3) -> None:
        """Logs an ERROR message."""
        self._log(logging.ERROR, "%s failed: %s - %s", calling_func, type(exception).__name__, exception, exc=exception, stacklevel=stacklevel)
