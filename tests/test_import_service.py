"""Tests for ImportService and import file handling."""

import pytest

from flaremail.accounts import AccountDirectory, AccountManager
from flaremail.core import FileAccessError
from flaremail.importer import ImportService, pick_text_file, read_import_file
from flaremail.notify import NotificationScheduler


GOOD_A = "alice@outlook.com----pw1----cid-1----rt-1"
GOOD_B = "bob@outlook.com----pw2----cid-2----rt-2"


@pytest.fixture
def notifier():
    scheduler = NotificationScheduler(default_duration_ms=0)
    yield scheduler
    scheduler.close()


@pytest.fixture
def service(repo, notifier):
    manager = AccountManager(repo, AccountDirectory())
    return ImportService(manager, notifier)


class TestImportText:
    async def test_imports_and_refreshes_directory(self, service, notifier):
        outcome = await service.import_text(f"{GOOD_A}\n{GOOD_B}\n")

        assert outcome.ok
        assert outcome.success_count == 2
        assert len(service.manager.directory) == 2
        assert notifier.current.message == "Imported 2 accounts"

    async def test_partial_failure(self, service, notifier):
        outcome = await service.import_text(f"{GOOD_A}\na@b.com----x")

        assert outcome.success_count == 1
        assert outcome.failures == ["2: a@b.com----x"]
        assert notifier.current.message == (
            "Succeeded: 1, failed: 1\nFailed lines:\n2: a@b.com----x"
        )

    async def test_reimport_updates_in_place(self, service, repo):
        await service.import_text(GOOD_A)
        await service.import_text("alice@outlook.com----pw1----cid-1----rt-NEW")

        accounts = await repo.list_accounts()

        assert len(accounts) == 1
        assert accounts[0].refresh_token == "rt-NEW"

    async def test_store_failure_is_a_line_failure(self, service):
        real_upsert = service.manager.repo.add_or_update_account

        async def failing_upsert(account):
            if account.address.startswith("bob"):
                raise RuntimeError("disk full")
            return await real_upsert(account)

        service.manager.repo.add_or_update_account = failing_upsert

        outcome = await service.import_text(f"{GOOD_B}\nbad\n{GOOD_A}")

        assert outcome.success_count == 1
        assert outcome.failures == ["1: disk full", "2: bad"]

    async def test_separator_override(self, service):
        outcome = await service.import_text("carol@x.com;pw;cid;rt", separator=";")

        assert outcome.success_count == 1

    async def test_without_notifier(self, repo):
        service = ImportService(AccountManager(repo, AccountDirectory()))

        outcome = await service.import_text(GOOD_A)

        assert outcome.ok


class TestImportFiles:
    async def test_import_file(self, service, tmp_path):
        path = tmp_path / "accounts.txt"
        path.write_text(f"{GOOD_A}\n{GOOD_B}\n", encoding="utf-8")

        outcome = await service.import_file(path)

        assert outcome.success_count == 2

    async def test_import_dropped_uses_first_txt(self, service, tmp_path):
        first = tmp_path / "a.txt"
        first.write_text(GOOD_A, encoding="utf-8")
        second = tmp_path / "b.txt"
        second.write_text(GOOD_B, encoding="utf-8")

        await service.import_dropped([tmp_path / "photo.png", first, second])

        addresses = [a.address for a in service.manager.directory.accounts]
        assert addresses == ["alice@outlook.com"]

    async def test_import_dropped_without_txt(self, service, notifier):
        with pytest.raises(FileAccessError):
            await service.import_dropped(["photo.png"])

        assert notifier.current is None


class TestFiles:
    def test_pick_text_file(self):
        assert pick_text_file(["a.csv", "B.TXT", "c.txt"]).name == "B.TXT"

    def test_pick_nothing_dropped(self):
        with pytest.raises(FileAccessError):
            pick_text_file([])

    def test_read_strips_bom(self, tmp_path):
        path = tmp_path / "accounts.txt"
        path.write_bytes(b"\xef\xbb\xbf" + GOOD_A.encode("utf-8"))

        assert read_import_file(path) == GOOD_A

    def test_read_rejects_other_suffix(self, tmp_path):
        path = tmp_path / "accounts.csv"
        path.write_text(GOOD_A, encoding="utf-8")

        with pytest.raises(FileAccessError):
            read_import_file(path)

    def test_read_missing(self, tmp_path):
        with pytest.raises(FileAccessError):
            read_import_file(tmp_path / "missing.txt")

    def test_read_undecodable(self, tmp_path):
        path = tmp_path / "accounts.txt"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(FileAccessError):
            read_import_file(path)
