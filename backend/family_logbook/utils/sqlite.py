# family_logbook/utils/sqlite.py
from sqlalchemy import event

BUSY_TIMEOUT_MS = 5000


def serialize_sqlite_transactions(engine):
    """
    SQLite ignores SELECT ... FOR UPDATE. Opening every transaction with
    BEGIN IMMEDIATE takes the write lock up front, so a locked read in the
    override store is not followed by a lost update from another writer.
    """

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        # pysqlite must not emit its own BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS};")
        cursor.close()

    @event.listens_for(engine, "begin")
    def on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")
