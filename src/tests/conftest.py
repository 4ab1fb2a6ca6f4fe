from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from news_admin.board import NewsBoard
from news_admin.datamodels import NewsItem
from news_admin.gateway import NewsGateway


def news(title: str, day: int = 1) -> NewsItem:
    return NewsItem(
        id=f"id-{title.lower()}",
        title=title,
        content=f"{title} body",
        created_at=datetime(2024, 5, day, tzinfo=timezone.utc),
    )


class FakeScheduler:
    """Records scheduled callbacks instead of running a real timer."""

    def __init__(self):
        self.calls = []

    def __call__(self, delay, callback):
        handle = MagicMock()
        self.calls.append((delay, callback, handle))
        return handle

    def fire(self, index):
        self.calls[index][1]()


@pytest.fixture
def gateway():
    return MagicMock(spec=NewsGateway)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def board(gateway, scheduler, notifications):
    b = NewsBoard(
        gateway,
        notify=lambda message, severity: notifications.append((message, severity)),
        schedule=scheduler,
        reversal_delay=2.0,
    )
    b.loading = False
    return b
