# =============================================================================
# Database Connection and Schema Management
# =============================================================================
# Manages the SQLite connection and schema.
#
# Schema overview:
#   - accounts: Imported mail accounts (unique by address)
#   - mail_records: Messages cached by the sync backend, per account
#   - attachments: Files attached to cached messages (content as BLOB)
#
# Uses aiosqlite for async operations, with WAL mode for better
# concurrent performance.
# =============================================================================

import logging
from pathlib import Path

import aiosqlite

from flaremail.config import Config


logger = logging.getLogger(__name__)

# Current schema version - increment when making schema changes
SCHEMA_VERSION = 2


class Database:
    """
    Manages the SQLite database connection and schema.

    Usage:
        >>> db = Database()
        >>> await db.connect()
        >>> async with db.conn.execute("SELECT ...") as cursor:
        ...     rows = await cursor.fetchall()
        >>> await db.close()

    Also usable as an async context manager:
        >>> async with Database(path) as db:
        ...     ...

    Attributes:
        db_path: Path to the SQLite database file.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        """
        Initialize the database manager.

        Args:
            db_path: Path to database file. Defaults to XDG data location.
        """
        self.db_path = db_path or Config.database_path()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """
        Open the database connection and ensure the schema is up to date.

        Creates the database file if it doesn't exist.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._connection = await aiosqlite.connect(self.db_path)

        # Enable foreign keys (off by default in SQLite) so deleting an
        # account cascades to its cached mail
        await self._connection.execute("PRAGMA foreign_keys = ON")
        await self._connection.execute("PRAGMA journal_mode = WAL")

        await self._init_schema()
        logger.debug(f"Database ready at {self.db_path}")

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def conn(self) -> aiosqlite.Connection:
        """
        Get the active database connection.

        Raises:
            RuntimeError: If not connected.
        """
        if self._connection is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    async def _init_schema(self) -> None:
        """Create tables if they don't exist, run migrations if needed."""
        try:
            async with self.conn.execute(
                "SELECT version FROM schema_version"
            ) as cursor:
                row = await cursor.fetchone()
                current_version = row[0] if row else 0
        except aiosqlite.OperationalError:
            # Table doesn't exist, this is a fresh database
            current_version = 0

        if current_version < SCHEMA_VERSION:
            await self._create_schema()

    async def _create_schema(self) -> None:
        """
        Create the database schema.

        Every statement is IF NOT EXISTS, so this also upgrades an older
        database by adding the tables it lacks.
        """
        schema = """
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY
        );

        CREATE TABLE IF NOT EXISTS accounts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            address TEXT NOT NULL UNIQUE,
            secret TEXT NOT NULL,
            client_id TEXT NOT NULL,
            refresh_token TEXT NOT NULL,
            mail_type TEXT NOT NULL DEFAULT 'outlook',
            last_check_time TEXT,
            created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS mail_records (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            account_id INTEGER NOT NULL REFERENCES accounts(id) ON DELETE CASCADE,
            subject TEXT,
            sender TEXT,
            received_time TEXT,
            content TEXT,
            folder TEXT,
            has_attachments INTEGER NOT NULL DEFAULT 0
        );

        CREATE TABLE IF NOT EXISTS attachments (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            mail_id INTEGER NOT NULL REFERENCES mail_records(id) ON DELETE CASCADE,
            filename TEXT,
            content_type TEXT,
            size INTEGER,
            content BLOB NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_mail_records_account ON mail_records(account_id);
        CREATE INDEX IF NOT EXISTS idx_mail_records_received ON mail_records(received_time DESC);
        CREATE INDEX IF NOT EXISTS idx_attachments_mail ON attachments(mail_id);
        """

        await self.conn.executescript(schema)
        await self.conn.execute("DELETE FROM schema_version")
        await self.conn.execute(
            "INSERT INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,)
        )
        await self.conn.commit()
