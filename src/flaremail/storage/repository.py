# =============================================================================
# Repository - Data Access Layer
# =============================================================================
# High-level operations over the accounts, mail_records and attachments tables.
#
# This is the "external store" the orchestration layer talks to:
#   - list/get/add/upsert/delete accounts
#   - list cached mail records for an account (newest first)
#   - save mail records (used by sync backends and tests)
#   - record when an account was last checked
#   - list and load attachments of cached messages
#
# All methods are async for non-blocking database access.
# =============================================================================

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from flaremail.core import (
    AccountRecord,
    AttachmentContent,
    AttachmentInfo,
    MailRecord,
    NotFoundError,
)

if TYPE_CHECKING:
    from flaremail.storage.database import Database


ACCOUNT_COLUMNS = (
    "id, address, secret, client_id, refresh_token, mail_type, last_check_time"
)
MAIL_COLUMNS = (
    "id, account_id, subject, sender, received_time, content, folder, has_attachments"
)


class Repository:
    """
    Data access layer for FlareMail.

    Usage:
        >>> repo = Repository(database)
        >>> accounts = await repo.list_accounts()
        >>> records = await repo.list_mail_records(account_id=1)

    Attributes:
        db: Database instance for executing queries.
    """

    def __init__(self, db: "Database") -> None:
        """
        Initialize the repository.

        Args:
            db: Connected Database instance.
        """
        self.db = db

    # =========================================================================
    # Account Operations
    # =========================================================================

    async def list_accounts(self) -> list[AccountRecord]:
        """
        Get all accounts, most recently created first.

        Returns:
            List of AccountRecord objects.
        """
        async with self.db.conn.execute(
            f"SELECT {ACCOUNT_COLUMNS} FROM accounts ORDER BY created_at DESC, id DESC"
        ) as cursor:
            rows = await cursor.fetchall()
            return [self._row_to_account(row) for row in rows]

    async def get_account(self, account_id: int) -> AccountRecord | None:
        """
        Get an account by ID.

        Returns:
            AccountRecord if found, None otherwise.
        """
        async with self.db.conn.execute(
            f"SELECT {ACCOUNT_COLUMNS} FROM accounts WHERE id = ?", (account_id,)
        ) as cursor:
            row = await cursor.fetchone()
            return self._row_to_account(row) if row else None

    async def add_account(self, account: AccountRecord) -> AccountRecord:
        """
        Insert a new account.

        Raises:
            aiosqlite.IntegrityError: If the address already exists.

        Returns:
            The account with its ID populated.
        """
        cursor = await self.db.conn.execute(
            """INSERT INTO accounts
               (address, secret, client_id, refresh_token, mail_type)
               VALUES (?, ?, ?, ?, ?)""",
            (account.address, account.secret, account.client_id,
             account.refresh_token, account.mail_type)
        )
        account.id = cursor.lastrowid
        await self.db.conn.commit()
        return account

    async def add_or_update_account(self, account: AccountRecord) -> AccountRecord:
        """
        Insert an account, or overwrite the credentials of an existing one
        with the same address.

        Bulk import uses this so re-importing a refreshed token list updates
        accounts in place instead of failing on duplicates.

        Returns:
            The account with its ID populated.
        """
        async with self.db.conn.execute(
            """INSERT INTO accounts
               (address, secret, client_id, refresh_token, mail_type)
               VALUES (?, ?, ?, ?, ?)
               ON CONFLICT(address) DO UPDATE SET
                   secret = excluded.secret,
                   client_id = excluded.client_id,
                   refresh_token = excluded.refresh_token,
                   mail_type = excluded.mail_type,
                   updated_at = CURRENT_TIMESTAMP
               RETURNING id""",
            (account.address, account.secret, account.client_id,
             account.refresh_token, account.mail_type)
        ) as cursor:
            row = await cursor.fetchone()
        await self.db.conn.commit()
        account.id = row[0]
        return account

    async def delete_account(self, account_id: int) -> None:
        """
        Delete an account and its cached mail.

        Raises:
            NotFoundError: If no account has this ID.
        """
        # CASCADE handles mail_records
        cursor = await self.db.conn.execute(
            "DELETE FROM accounts WHERE id = ?", (account_id,)
        )
        await self.db.conn.commit()
        if cursor.rowcount == 0:
            raise NotFoundError(account_id)

    async def touch_last_check(self, account_id: int, checked_at: str | None = None) -> str:
        """
        Record that an account's mailbox was just checked.

        Args:
            account_id: The account that was checked.
            checked_at: ISO-8601 timestamp. Defaults to now (UTC).

        Returns:
            The stored timestamp.

        Raises:
            NotFoundError: If no account has this ID.
        """
        checked_at = checked_at or datetime.now(timezone.utc).isoformat()
        cursor = await self.db.conn.execute(
            """UPDATE accounts
               SET last_check_time = ?, updated_at = CURRENT_TIMESTAMP
               WHERE id = ?""",
            (checked_at, account_id)
        )
        await self.db.conn.commit()
        if cursor.rowcount == 0:
            raise NotFoundError(account_id)
        return checked_at

    def _row_to_account(self, row) -> AccountRecord:
        """Convert a database row to an AccountRecord."""
        return AccountRecord(
            id=row[0],
            address=row[1],
            secret=row[2],
            client_id=row[3],
            refresh_token=row[4],
            mail_type=row[5] or "outlook",
            last_check_time=row[6],
        )

    # =========================================================================
    # Mail Record Operations
    # =========================================================================

    async def list_mail_records(self, account_id: int) -> list[MailRecord]:
        """
        Get every cached record for an account, newest first.

        Records without a received time sort last.
        """
        async with self.db.conn.execute(
            f"""SELECT {MAIL_COLUMNS} FROM mail_records
                WHERE account_id = ?
                ORDER BY received_time IS NULL, received_time DESC, id DESC""",
            (account_id,)
        ) as cursor:
            rows = await cursor.fetchall()
            return [self._row_to_mail(row) for row in rows]

    async def save_mail_record(self, record: MailRecord) -> MailRecord:
        """
        Insert a mail record.

        Returns:
            The record with its ID populated.
        """
        cursor = await self.db.conn.execute(
            """INSERT INTO mail_records
               (account_id, subject, sender, received_time, content, folder,
                has_attachments)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (record.account_id, record.subject, record.sender,
             record.received_time, record.content, record.folder,
             1 if record.has_attachments else 0)
        )
        record.id = cursor.lastrowid
        await self.db.conn.commit()
        return record

    def _row_to_mail(self, row) -> MailRecord:
        """Convert a database row to a MailRecord."""
        return MailRecord(
            id=row[0],
            account_id=row[1],
            subject=row[2],
            sender=row[3],
            received_time=row[4],
            content=row[5],
            folder=row[6],
            has_attachments=row[7] or 0,
        )

    # =========================================================================
    # Attachment Operations
    # =========================================================================

    async def list_attachments(self, mail_id: int) -> list[AttachmentInfo]:
        """
        Get the attachment metadata of a message, newest first.

        Content is not loaded; use get_attachment_content() for that.
        """
        async with self.db.conn.execute(
            """SELECT id, mail_id, filename, content_type, size FROM attachments
               WHERE mail_id = ? ORDER BY id DESC""",
            (mail_id,)
        ) as cursor:
            rows = await cursor.fetchall()
            return [
                AttachmentInfo(
                    id=row[0], mail_id=row[1], filename=row[2],
                    content_type=row[3], size=row[4],
                )
                for row in rows
            ]

    async def get_attachment_content(self, attachment_id: int) -> AttachmentContent | None:
        """
        Get one attachment including its bytes.

        Returns:
            AttachmentContent if found, None otherwise.
        """
        async with self.db.conn.execute(
            "SELECT id, filename, content_type, content FROM attachments WHERE id = ?",
            (attachment_id,)
        ) as cursor:
            row = await cursor.fetchone()
        if row is None:
            return None
        return AttachmentContent(
            id=row[0], filename=row[1], content_type=row[2], content=bytes(row[3]),
        )

    async def save_attachment(
        self,
        mail_id: int,
        content: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> AttachmentInfo:
        """
        Store an attachment of a cached message and flag the message as
        having attachments.

        Returns:
            The stored attachment's metadata.
        """
        cursor = await self.db.conn.execute(
            """INSERT INTO attachments (mail_id, filename, content_type, size, content)
               VALUES (?, ?, ?, ?, ?)""",
            (mail_id, filename, content_type, len(content), content)
        )
        await self.db.conn.execute(
            "UPDATE mail_records SET has_attachments = 1 WHERE id = ?", (mail_id,)
        )
        await self.db.conn.commit()
        return AttachmentInfo(
            id=cursor.lastrowid,
            mail_id=mail_id,
            filename=filename,
            content_type=content_type,
            size=len(content),
        )
