# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the FlareMail test suite.
#
# Async tests run under pytest-asyncio (asyncio_mode = "auto" in
# pyproject.toml), so coroutine tests and fixtures need no decorator.
# =============================================================================

import pytest

from flaremail.core import (
    AccountRecord,
    AttachmentInfo,
    FolderTag,
    MailRecord,
    TransientSyncError,
)
from flaremail.mailbox import CheckResult, MailSyncBackend
from flaremail.storage import Database, Repository


@pytest.fixture
def sample_account():
    """A saved AccountRecord."""
    return AccountRecord(
        id=1,
        address="alice@outlook.com",
        secret="pw-alice",
        client_id="9e5f94bc-e8a4-4e73-b8be-63364c29d753",
        refresh_token="M.C5_BAY.0.U.-CmAliceRefreshTokenValue",
    )


@pytest.fixture
def make_accounts():
    """Factory for n saved accounts: user1@example.com ... userN@example.com."""
    def factory(n: int, start: int = 1) -> list[AccountRecord]:
        return [
            AccountRecord(
                id=i,
                address=f"user{i}@example.com",
                secret=f"pw{i}",
                client_id=f"cid{i}",
                refresh_token=f"rt{i}",
            )
            for i in range(start, start + n)
        ]
    return factory


@pytest.fixture
def sample_records():
    """Cached records for accounts 1 and 2 across inbox and junk labels."""
    return [
        MailRecord(id=1, account_id=1, subject="Welcome", folder="INBOX",
                   sender="Outlook Team <no-reply@microsoft.com>",
                   received_time="2024-01-15T10:30:00+00:00"),
        MailRecord(id=2, account_id=1, subject="You won!", folder="Junk Email",
                   sender="prize@spam.example",
                   received_time="2024-01-14T09:00:00+00:00"),
        MailRecord(id=3, account_id=1, subject="Invoice", folder=None,
                   received_time="2024-01-13T08:00:00+00:00"),
        MailRecord(id=4, account_id=2, subject="Hello Bob", folder="Inbox"),
        MailRecord(id=5, account_id=2, subject="Cheap pills", folder="垃圾邮件"),
    ]


class FakeBackend(MailSyncBackend):
    """Records every check; optionally fails with TransientSyncError."""

    def __init__(self, fail: bool = False, events: list | None = None) -> None:
        self.fail = fail
        self.calls: list[tuple[int, FolderTag]] = []
        self.events = events if events is not None else []

    async def check_mailbox(self, account_id: int, folder: FolderTag) -> CheckResult:
        self.calls.append((account_id, folder))
        self.events.append(("sync", account_id, folder))
        if self.fail:
            raise TransientSyncError("token refresh failed")
        return CheckResult(account_id=account_id, fetched=2, saved=1)


class FakeStore:
    """In-memory list_mail_records, with optional per-account gates and failures."""

    def __init__(self, records: list[MailRecord], events: list | None = None) -> None:
        self.records = records
        self.events = events if events is not None else []
        self.gates: dict = {}
        self.fail = False
        self.fail_touch = False
        self.attachments: list[AttachmentInfo] = []

    async def touch_last_check(self, account_id: int) -> str:
        self.events.append(("touch", account_id))
        if self.fail_touch:
            raise RuntimeError("database is locked")
        return "2024-02-01T12:00:00+00:00"

    async def list_attachments(self, mail_id: int) -> list[AttachmentInfo]:
        return [a for a in reversed(self.attachments) if a.mail_id == mail_id]

    async def list_mail_records(self, account_id: int) -> list[MailRecord]:
        self.events.append(("load", account_id))
        gate = self.gates.get(account_id)
        if gate is not None:
            await gate.wait()
        if self.fail:
            raise RuntimeError("database is locked")
        return [r for r in self.records if r.account_id == account_id]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def store(sample_records):
    return FakeStore(sample_records)


@pytest.fixture
async def database(tmp_path):
    """A connected Database in a temporary directory."""
    db = Database(tmp_path / "flaremail.db")
    await db.connect()
    yield db
    await db.close()


@pytest.fixture
async def repo(database):
    return Repository(database)


@pytest.fixture
def xdg_dirs(tmp_path, monkeypatch):
    """Point every XDG directory at a temporary location."""
    dirs = {
        "XDG_CONFIG_HOME": tmp_path / "config",
        "XDG_DATA_HOME": tmp_path / "data",
        "XDG_STATE_HOME": tmp_path / "state",
    }
    for name, path in dirs.items():
        monkeypatch.setenv(name, str(path))
    return dirs
