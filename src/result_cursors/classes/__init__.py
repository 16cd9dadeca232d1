from .database_type import DatabaseType, RowMode
from .statement import Statement, FieldInfo, Row
from .cursor import Cursor
from .sequential_view import SequentialView
from .projection import to_mapping, to_frame
from .dbapi_statement import DBAPIStatement
from .driver_manager import create_statement
from .database_connector import DatabaseConnector
