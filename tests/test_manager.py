"""Tests for AccountManager and bulk deletion."""

from unittest.mock import AsyncMock

import pytest

from flaremail.accounts import AccountDirectory, AccountManager
from flaremail.core import AccountRecord, NotFoundError


@pytest.fixture
async def manager(repo):
    manager = AccountManager(repo, AccountDirectory(page_size=10))
    for i in range(1, 6):
        await repo.add_account(AccountRecord(f"user{i}@x.com", "pw", "cid", "rt"))
    await manager.refresh()
    return manager


class TestAccountManager:
    async def test_refresh_loads_directory(self, manager):
        assert len(manager.directory) == 5

    async def test_add(self, manager):
        saved = await manager.add(AccountRecord("new@x.com", "pw", "cid", "rt"))

        assert manager.directory.get(saved.id).address == "new@x.com"

    async def test_add_invalid(self, manager):
        with pytest.raises(ValueError):
            await manager.add(AccountRecord("no-at-sign", "pw", "cid", "rt"))

    async def test_delete_updates_directory_and_selection(self, manager):
        target = manager.directory.accounts[0].id
        manager.directory.toggle(target)

        await manager.delete(target)

        assert manager.directory.get(target) is None
        assert target not in manager.directory.selection
        assert len(manager.directory) == 4

    async def test_delete_missing(self, manager):
        with pytest.raises(NotFoundError):
            await manager.delete(404)

        assert len(manager.directory) == 5

    async def test_delete_selected(self, manager):
        ids = [a.id for a in manager.directory.accounts[:3]]
        manager.directory.selection.select_all(ids)

        result = await manager.delete_selected()

        assert sorted(result.deleted) == sorted(ids)
        assert result.failed_count == 0
        assert len(manager.directory) == 2
        assert len(manager.directory.selection) == 0

    async def test_delete_selected_tolerates_failures(self, manager):
        ids = [a.id for a in manager.directory.accounts[:3]]
        manager.directory.selection.select_all(ids)
        real_delete = manager.repo.delete_account

        async def flaky_delete(account_id):
            if account_id == ids[1]:
                raise RuntimeError("database is locked")
            await real_delete(account_id)

        manager.repo.delete_account = flaky_delete

        result = await manager.delete_selected()

        assert result.success_count == 2
        assert result.failed == {ids[1]: "database is locked"}
        assert manager.directory.get(ids[1]) is not None
        assert len(manager.directory.selection) == 0

    async def test_delete_selected_unknown_id(self, manager):
        manager.directory.selection.select_all([404])
        result = await manager.delete_selected()

        assert result.failed_count == 1
        assert 404 in result.failed

    async def test_refresh_uses_store(self):
        repo = AsyncMock()
        repo.list_accounts.return_value = [
            AccountRecord("a@x.com", "pw", "cid", "rt", id=1),
        ]
        manager = AccountManager(repo, AccountDirectory())

        accounts = await manager.refresh()

        assert [a.id for a in accounts] == [1]
        assert manager.directory.get(1) is not None
        repo.list_accounts.assert_awaited_once()
