import logging

from ..exceptions import DatabaseTypeNotSupported
from ..utils.general import infer_database_type
from .database_type import DatabaseType
from .dbapi_statement import DBAPIStatement
from .statement import DBCursor


def create_statement(
        cursor:DBCursor,
        database_type:DatabaseType|None=None,
        *,
        named_rows:bool=False,
        retain_rows:bool=True,
        can_seek:bool|None=None,
        logger:logging.Logger|None=None,
    ) -> DBAPIStatement:
    """Wraps an executed driver cursor in the Statement for its database type.
    If [database_type] is not given it is inferred from the cursor's class. [retain_rows] False stops forward-only
    statements from keeping the rows they hand out (see DBAPIStatement)."""

    # Infer the type if not given
    if database_type is None:
        database_type = infer_database_type(cursor)
        if database_type is None:
            raise DatabaseTypeNotSupported(type(cursor).__name__)

    match database_type:

        # POSTGRESQL: client-side cursors can scroll
        case DatabaseType.POSTGRESQL:
            return DBAPIStatement(cursor, database_type, can_seek=can_seek, named_rows=named_rows, retain_rows=retain_rows, logger=logger)

        # MYSQL OR SQLITE: forward-only
        case DatabaseType.MYSQL | DatabaseType.SQLITE:
            return DBAPIStatement(
                cursor,
                database_type,
                can_seek=False if can_seek is None else can_seek,
                named_rows=named_rows,
                retain_rows=retain_rows,
                logger=logger,
            )

        # UNSUPPORTED
        case _:
            raise DatabaseTypeNotSupported(database_type)
