"""Tests for the sync backend seam and batch checks."""

from flaremail.core import FolderTag, TransientSyncError
from flaremail.mailbox import (
    CheckResult,
    MailSyncBackend,
    OfflineSyncBackend,
    batch_check,
    check_failure,
)

from conftest import FakeStore


class FlakyBackend(MailSyncBackend):
    def __init__(self, failing: set[int]) -> None:
        self.failing = failing
        self.checked: list[int] = []

    async def check_mailbox(self, account_id, folder):
        self.checked.append(account_id)
        if account_id in self.failing:
            raise TransientSyncError(f"refresh token expired for {account_id}")
        return CheckResult(account_id=account_id, fetched=3, saved=2)


class TestOfflineBackend:
    async def test_check_succeeds_without_fetching(self):
        result = await OfflineSyncBackend().check_mailbox(1, FolderTag.INBOX)

        assert result.success
        assert result.fetched == 0
        assert result.account_id == 1


class TestBatchCheck:
    async def test_failures_do_not_stop_the_batch(self):
        backend = FlakyBackend(failing={2})

        batch = await batch_check(backend, [1, 2, 3], FolderTag.JUNK)

        assert backend.checked == [1, 2, 3]
        assert batch.success_count == 2
        assert batch.failed_count == 1
        failed = batch.results[1]
        assert failed.account_id == 2
        assert not failed.success
        assert "refresh token expired" in failed.message

    async def test_empty_batch(self):
        batch = await batch_check(OfflineSyncBackend(), [], FolderTag.INBOX)

        assert batch.results == []
        assert batch.success_count == batch.failed_count == 0

    async def test_unsuccessful_results_count_as_failed(self):
        class RefusingBackend(MailSyncBackend):
            async def check_mailbox(self, account_id, folder):
                if account_id == 2:
                    return CheckResult(account_id=account_id, success=False, message="login refused")
                return None

        batch = await batch_check(RefusingBackend(), [1, 2], FolderTag.INBOX)

        assert batch.success_count == 1
        assert batch.failed_count == 1
        assert batch.results[0] == CheckResult(account_id=1)
        assert batch.results[1].message == "Check failed: login refused"

    async def test_store_stamps_successful_accounts(self, sample_records):
        store = FakeStore(sample_records)

        await batch_check(FlakyBackend(failing={2}), [1, 2, 3], FolderTag.INBOX, store=store)

        assert store.events == [("touch", 1), ("touch", 3)]


class TestCheckFailure:
    def test_only_unsuccessful_results_fail(self):
        assert check_failure(None) is None
        assert check_failure(CheckResult(account_id=1)) is None

        failure = check_failure(CheckResult(account_id=1, success=False))

        assert isinstance(failure, TransientSyncError)
        assert str(failure) == "Mailbox check failed"
