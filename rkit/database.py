"""SQL database access with a built-in key/value settings table."""

from __future__ import annotations

import enum
import sqlite3
from typing import Any, Callable, Mapping, Optional

SETTINGS_TABLE = "Settings"

_NO_PASSWORD = ""


class DbType(enum.Enum):
    """Supported database drivers."""

    SQLITE = "QSQLITE"
    MYSQL = "QMYSQL"


class DatabaseError(Exception):
    """Raised when opening the database or running a statement fails."""


class Database:
    """A single database connection with helpers for a settings table."""

    def __init__(self, on_log: Optional[Callable[[str], None]] = None) -> None:
        self._on_log = on_log or (lambda message: None)
        self._conn: Any = None
        self._type = DbType.SQLITE
        self._errors: tuple[type[BaseException], ...] = (sqlite3.Error,)

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def db_type(self) -> DbType:
        return self._type

    def open(
        self,
        name: str,
        user: str = "",
        password: str = _NO_PASSWORD,
        host: str = "",
        port: str = "3306",
        db_type: DbType = DbType.SQLITE,
    ) -> None:
        """Open the database and make sure the settings table exists."""
        self.close()
        self._type = db_type
        self._on_log(f"db name: {name}")
        self._on_log(f"db host name: {host}")
        self._on_log(f"db port: {port}")
        self._on_log(f"db User name: {user}")
        try:
            self._conn = self._connect(name, user, password, host, port)
        except self._errors as exc:
            self._on_log(f"ERROR: {exc}")
            raise DatabaseError(str(exc)) from exc
        self._on_log("sql open Ok")
        try:
            self._run(
                f"CREATE TABLE `{SETTINGS_TABLE}` (`key` TEXT NOT NULL,"
                "`value` TEXT, PRIMARY KEY(`key`));"
            ).close()
        except DatabaseError:
            pass  # the table already exists

    def _connect(self, name: str, user: str, password: str, host: str, port: str) -> Any:
        if self._type is DbType.MYSQL:
            import pymysql

            self._errors = (pymysql.MySQLError,)
            return pymysql.connect(
                host=host or None,
                port=int(port) if port else 3306,
                user=user or None,
                password=password,
                database=name,
                autocommit=True,
            )
        self._errors = (sqlite3.Error,)
        return sqlite3.connect(name, isolation_level=None)

    @property
    def _placeholder(self) -> str:
        return "%s" if self._type is DbType.MYSQL else "?"

    def close(self) -> None:
        """Close the connection if it is open."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _run(self, statement: str, params: tuple = ()) -> Any:
        if self._conn is None:
            raise DatabaseError("database is not open")
        cursor = self._conn.cursor()
        try:
            if params:
                cursor.execute(statement, params)
            else:
                cursor.execute(statement)
        except self._errors as exc:
            cursor.close()
            raise DatabaseError(str(exc)) from exc
        return cursor

    def execute(self, statement: str) -> None:
        """Run a single SQL statement."""
        self._run(statement).close()

    def get_table(self, table: str) -> list[list[Any]]:
        """Return every row of a table as a list of column values."""
        cursor = self._run(f"SELECT * FROM {table}")
        try:
            return [list(row) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def insert(self, table: str, values: Mapping[str, Any]) -> None:
        """Insert one row; columns are written in sorted key order."""
        columns = sorted(values)
        marks = ",".join(self._placeholder for _ in columns)
        statement = f"INSERT INTO {table}({','.join(columns)}) VALUES ({marks})"
        self._run(statement, tuple(str(values[column]) for column in columns)).close()

    def insert_key_pair(self, key: str, value: str, update_existing: bool = True) -> None:
        """Store a setting; an existing key is replaced only if update_existing."""
        mark = self._placeholder
        if self._type is DbType.SQLITE:
            verb = "INSERT OR REPLACE" if update_existing else "INSERT"
            statement = (
                f"{verb} INTO `{SETTINGS_TABLE}` (`key`,`value`) VALUES ({mark},{mark})"
            )
        else:
            statement = (
                f"INSERT INTO `{SETTINGS_TABLE}` (`key`,`value`) VALUES ({mark},{mark})"
            )
            if update_existing:
                statement += " ON DUPLICATE KEY UPDATE `value` = VALUES(`value`)"
        self._run(statement, (key, value)).close()

    def update_key_pair(self, key: str, value: str) -> None:
        """Change the value of an existing setting."""
        mark = self._placeholder
        self._run(
            f"UPDATE `{SETTINGS_TABLE}` SET `value` = {mark} WHERE `key` = {mark}",
            (value, key),
        ).close()

    def get_key_pair(self, key: str) -> str:
        """Return the value stored for key, or an empty string."""
        mark = self._placeholder
        cursor = self._run(
            f"SELECT `value` FROM `{SETTINGS_TABLE}` WHERE `key` = {mark}", (key,)
        )
        try:
            rows = cursor.fetchall()
        finally:
            cursor.close()
        if not rows or rows[-1][0] is None:
            return ""
        return str(rows[-1][0])

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()