"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest
import pytest_asyncio

import medremind.storage.db_config as db_config
from medremind.notifiers.base import Notifier


class FakeNotifier(Notifier):
    """Records every alert instead of delivering it."""

    def __init__(self, permission="granted", fail=False):
        self._permission = permission
        self.fail = fail
        self.emitted = []

    @property
    def permission(self):
        return self._permission

    async def emit(self, title, body):
        if self.fail:
            raise ConnectionError("notification backend unreachable")
        self.emitted.append((title, body))


@pytest_asyncio.fixture
async def db(tmp_path):
    """Fresh SQLite database for each test."""
    await db_config.init_db(str(tmp_path / "medremind_test.db"))
    yield db_config
    await db_config.close_db()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2024-01-02 09:00:30."""
    return lambda: datetime(2024, 1, 2, 9, 0, 30)
